import logging
from functools import lru_cache
from typing import Optional

from botocore.loaders import Loader
from botocore.model import ServiceModel

from kinesis_client.constants import SERVICE_NAME

LOG = logging.getLogger(__name__)

ServiceName = str

loader = Loader()


@lru_cache()
def load_service(service: ServiceName = SERVICE_NAME, version: Optional[str] = None) -> ServiceModel:
    """
    Loads a service model from the data bundled with botocore.

    :param service: to load, f.e. "kinesis"
    :param version: of the service to load, f.e. "2013-12-02", by default the latest version will be used
    :return: Loaded service model of the service
    :raises: UnknownServiceError if the service cannot be found
    """
    service_description = loader.load_service_model(service, "service-2", version)
    return ServiceModel(service_description, service)


@lru_cache()
def load_endpoints() -> dict:
    """Loads botocore's bundled endpoint data (partitions, regions and per-service endpoints)."""
    return loader.load_data("endpoints")


def get_target_prefix(service_model: ServiceModel) -> str:
    """
    Returns the target prefix of a JSON-RPC service, which is built from the service id and the API version without
    dashes (f.e. "Kinesis_20131202"). The result is checked against the ``targetPrefix`` declared by the model.

    :raises ValueError: if the model declares a different target prefix
    """
    expected = "%s_%s" % (
        service_model.service_id.replace(" ", ""),
        service_model.api_version.replace("-", ""),
    )
    declared = service_model.metadata.get("targetPrefix")
    if declared is not None and declared != expected:
        raise ValueError(
            "target prefix %s of service %s does not match %s"
            % (declared, service_model.service_name, expected)
        )
    return expected


def get_json_content_type(service_model: ServiceModel) -> str:
    json_version = service_model.metadata.get("jsonVersion", "1.0")
    return "application/x-amz-json-%s" % json_version
