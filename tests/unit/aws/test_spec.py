import pytest
from botocore.model import ServiceModel

from kinesis_client.aws.api.kinesis import OPERATIONS
from kinesis_client.aws.spec import get_json_content_type, get_target_prefix, load_service


def test_load_service():
    service = load_service("kinesis")

    assert service.service_name == "kinesis"
    assert service.protocol == "json"
    assert service.api_version == "2013-12-02"
    assert load_service("kinesis") is service


def test_target_prefix_matches_model():
    service = load_service("kinesis")

    assert get_target_prefix(service) == "Kinesis_20131202"
    assert get_target_prefix(service) == service.metadata["targetPrefix"]


def test_target_prefix_mismatch_raises():
    service = ServiceModel(
        {
            "metadata": {
                "serviceId": "Kinesis",
                "apiVersion": "2013-12-02",
                "targetPrefix": "Kinesis_20200101",
            },
            "operations": {},
            "shapes": {},
        },
        "kinesis",
    )

    with pytest.raises(ValueError):
        get_target_prefix(service)


def test_json_content_type():
    assert get_json_content_type(load_service("kinesis")) == "application/x-amz-json-1.1"


@pytest.mark.parametrize("operation", sorted(OPERATIONS))
def test_operation_table_matches_model(operation):
    descriptor = OPERATIONS[operation]
    operation_model = load_service("kinesis").operation_model(operation)

    assert descriptor.name == operation
    assert descriptor.method == operation_model.http["method"] == "POST"
    assert descriptor.path == operation_model.http["requestUri"] == "/"
    assert descriptor.input_type.__name__ == operation_model.input_shape.name
    if descriptor.has_output:
        assert descriptor.output_type.__name__ == operation_model.output_shape.name
    else:
        assert operation_model.output_shape is None


@pytest.mark.parametrize("operation", sorted(OPERATIONS))
def test_request_types_only_declare_modeled_members(operation):
    descriptor = OPERATIONS[operation]
    input_shape = load_service("kinesis").operation_model(operation).input_shape

    assert set(descriptor.input_type.__annotations__) <= set(input_shape.members)
