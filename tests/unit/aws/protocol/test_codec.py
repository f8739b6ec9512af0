import base64
import json
import os
from datetime import datetime, timezone

import pytest
from botocore.model import Shape

from kinesis_client.aws.api.kinesis import OPERATIONS
from kinesis_client.aws.protocol.parser import JSONResponseParser
from kinesis_client.aws.protocol.serializer import JSONRequestSerializer
from kinesis_client.aws.spec import load_service
from tests.conftest import json_response

# maximum size of the data blob of a single record
MAX_RECORD_SIZE = 1024 * 1024

OUTPUT_OPERATIONS = sorted(name for name, operation in OPERATIONS.items() if operation.has_output)


def _operation(name: str):
    return load_service("kinesis").operation_model(name)


def _sample_value(shape: Shape):
    """Creates a value for the given shape in which every member is populated."""
    type_name = shape.type_name
    if type_name == "structure":
        return {name: _sample_value(member) for name, member in shape.members.items()}
    if type_name == "list":
        return [_sample_value(shape.member), _sample_value(shape.member)]
    if type_name == "map":
        return {"key-1": _sample_value(shape.value)}
    if type_name == "blob":
        return bytes(range(256))
    if type_name == "timestamp":
        return datetime(2020, 1, 1, 12, 30, 15, 500000, tzinfo=timezone.utc)
    if type_name == "boolean":
        return True
    if type_name in ("integer", "long"):
        return 42
    if type_name in ("float", "double"):
        return 1.5
    return "%s-value" % shape.name


@pytest.mark.parametrize(
    "data",
    [b"", bytes(range(256)), os.urandom(MAX_RECORD_SIZE)],
    ids=["empty", "all-byte-values", "max-record-size"],
)
def test_record_data_round_trip(data):
    request = JSONRequestSerializer().serialize_to_request(
        {"StreamName": "s1", "Data": data, "PartitionKey": "k"}, _operation("PutRecord")
    )
    encoded = json.loads(request.body)["Data"]
    assert base64.b64decode(encoded) == data

    response = json_response(
        {"Records": [{"SequenceNumber": "1", "Data": encoded, "PartitionKey": "k"}]}
    )
    result = JSONResponseParser().parse(response, _operation("GetRecords"))

    assert result["Records"][0]["Data"] == data


def test_batch_data_round_trip():
    records = [{"Data": os.urandom(size), "PartitionKey": str(size)} for size in (0, 1, 3, 1000)]

    request = JSONRequestSerializer().serialize_to_request(
        {"StreamName": "s1", "Records": records}, _operation("PutRecords")
    )
    response = json_response(
        {
            "Records": [
                {"SequenceNumber": str(i), "Data": entry["Data"], "PartitionKey": entry["PartitionKey"]}
                for i, entry in enumerate(json.loads(request.body)["Records"])
            ]
        }
    )
    result = JSONResponseParser().parse(response, _operation("GetRecords"))

    assert [record["Data"] for record in result["Records"]] == [entry["Data"] for entry in records]
    assert [record["PartitionKey"] for record in result["Records"]] == ["0", "1", "3", "1000"]


@pytest.mark.parametrize("operation", OUTPUT_OPERATIONS)
def test_output_round_trip(operation):
    shape = _operation(operation).output_shape
    output = _sample_value(shape)

    body = JSONRequestSerializer().serialize_shape(output, shape)
    result = JSONResponseParser().parse(json_response(body), _operation(operation))

    assert result == output


@pytest.mark.parametrize("operation", OUTPUT_OPERATIONS)
def test_empty_output_decodes_to_zero_values(operation):
    shape = _operation(operation).output_shape

    result = JSONResponseParser().parse(json_response({}), _operation(operation))

    for name, member in shape.members.items():
        if member.type_name in ("structure", "map", "timestamp"):
            assert name not in result
        else:
            assert name in result
            assert not result[name]
