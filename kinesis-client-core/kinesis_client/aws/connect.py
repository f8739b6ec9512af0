"""
Construction of Kinesis clients: endpoint resolution, credentials, request signing and the transport.

``create_kinesis_client`` takes all its dependencies explicitly. ``connect_to_kinesis`` is the default way to create
a client, it fills in the region, the endpoint and the transport settings from ``kinesis_client.config`` and the
credentials from botocore's default credential chain (environment, shared credentials file, instance metadata, ...).
"""
import logging
from typing import NamedTuple

import requests
from botocore.auth import SigV4Auth
from botocore.credentials import Credentials
from botocore.exceptions import NoCredentialsError, NoRegionError, UnknownEndpointError
from botocore.regions import EndpointResolver
from botocore.session import get_session

from kinesis_client import config
from kinesis_client.aws.api.kinesis import EXCEPTIONS
from kinesis_client.aws.client import ServiceClient
from kinesis_client.aws.spec import load_endpoints, load_service
from kinesis_client.constants import API_VERSION, SERVICE_NAME
from kinesis_client.http.client import (
    HttpClient,
    SigningHttpClient,
    SimpleRequestsClient,
    Timeout,
)
from kinesis_client.services.kinesis.client import KinesisClient

LOG = logging.getLogger(__name__)


class ResolvedEndpoint(NamedTuple):
    endpoint_url: str
    signing_name: str
    signing_region: str


def resolve_endpoint(
    region_name: str, service: str = SERVICE_NAME, use_ssl: bool = True
) -> ResolvedEndpoint:
    """
    Resolves the endpoint of a service in the given region using botocore's bundled endpoint data.

    :param region_name: the region, f.e. "eu-west-1"
    :param service: the endpoint prefix of the service
    :param use_ssl: whether to use https (default) or http
    :return: the endpoint URL as well as the service name and region to use for signing requests
    :raises NoRegionError: if no region is given
    :raises UnknownEndpointError: if the service is not available in the given region
    """
    if not region_name:
        raise NoRegionError()

    resolver = EndpointResolver(load_endpoints())
    endpoint = resolver.construct_endpoint(service, region_name)
    if not endpoint:
        raise UnknownEndpointError(service_name=service, region_name=region_name)

    scheme = "https" if use_ssl else "http"
    credential_scope = endpoint.get("credentialScope", {})
    return ResolvedEndpoint(
        endpoint_url="%s://%s" % (scheme, endpoint["hostname"]),
        signing_name=credential_scope.get("service", service),
        signing_region=credential_scope.get("region", region_name),
    )


def create_kinesis_client(
    credentials: Credentials,
    region_name: str = None,
    endpoint_url: str = None,
    http_client: HttpClient = None,
    session: requests.Session = None,
    timeout: Timeout = None,
    verify: bool = None,
    include_response_metadata: bool = False,
) -> KinesisClient:
    """
    Creates a Kinesis client with explicitly given dependencies.

    :param credentials: the credentials to sign the requests with
    :param region_name: the region of the stream(s), also used to sign the requests
    :param endpoint_url: overrides the endpoint resolved for the region (f.e. for a local emulator)
    :param http_client: the transport to use, by default a ``SimpleRequestsClient`` is created
    :param session: the session of the default transport (ignored if ``http_client`` is given)
    :param timeout: the timeout of the default transport (ignored if ``http_client`` is given)
    :param verify: whether the default transport verifies TLS certificates (ignored if ``http_client`` is given)
    :param include_response_metadata: whether outputs contain the ``ResponseMetadata``
    :return: the client
    """
    if credentials is None:
        raise NoCredentialsError()
    if not region_name:
        raise NoRegionError()

    if endpoint_url:
        signing_name, signing_region = SERVICE_NAME, region_name
    else:
        endpoint_url, signing_name, signing_region = resolve_endpoint(region_name)

    if http_client is None:
        http_client = SimpleRequestsClient(session=session, timeout=timeout, verify=verify)
    signer = SigV4Auth(credentials, signing_name, signing_region)

    LOG.debug("Creating Kinesis client for %s (region %s)", endpoint_url, signing_region)
    service_client = ServiceClient(
        load_service(SERVICE_NAME, API_VERSION),
        endpoint_url,
        SigningHttpClient(signer, http_client),
        exceptions=EXCEPTIONS,
        include_response_metadata=include_response_metadata,
    )
    return KinesisClient(service_client)


def connect_to_kinesis(
    region_name: str = None,
    endpoint_url: str = None,
    aws_access_key_id: str = None,
    aws_secret_access_key: str = None,
    aws_session_token: str = None,
    session: requests.Session = None,
) -> KinesisClient:
    """
    Creates a Kinesis client with the default configuration.

    :param region_name: the region, defaults to ``config.DEFAULT_REGION``
    :param endpoint_url: the endpoint, defaults to ``config.KINESIS_ENDPOINT_URL`` or the regional endpoint
    :param aws_access_key_id: the access key id, by default botocore's credential chain is used
    :param aws_secret_access_key: the secret access key
    :param aws_session_token: the optional session token
    :param session: the requests session of the transport
    :return: the client
    :raises NoCredentialsError: if no credentials are given and none could be found
    """
    credentials = get_credentials(aws_access_key_id, aws_secret_access_key, aws_session_token)
    return create_kinesis_client(
        credentials,
        region_name=region_name or config.DEFAULT_REGION,
        endpoint_url=endpoint_url or config.KINESIS_ENDPOINT_URL,
        session=session,
        timeout=config.get_http_timeout(),
        verify=config.HTTP_VERIFY_SSL,
        include_response_metadata=config.INCLUDE_RESPONSE_METADATA,
    )


def get_credentials(
    aws_access_key_id: str = None, aws_secret_access_key: str = None, aws_session_token: str = None
) -> Credentials:
    """Returns the given credentials, or the ones found by botocore's default credential chain."""
    if aws_access_key_id and aws_secret_access_key:
        return Credentials(aws_access_key_id, aws_secret_access_key, aws_session_token)
    credentials = get_session().get_credentials()
    if credentials is None:
        raise NoCredentialsError()
    return credentials
