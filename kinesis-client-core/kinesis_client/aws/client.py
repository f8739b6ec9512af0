"""Invocation of AWS JSON-RPC operations as a client: serialize the request, send it, parse the response."""
import logging
from typing import Any, Dict, Mapping, Optional, Type

from botocore.model import ServiceModel
from werkzeug import Response

from kinesis_client.aws.api import (
    OperationDescriptor,
    ResponseMetadata,
    ServiceException,
    ServiceRequest,
    ServiceResponse,
)
from kinesis_client.aws.protocol.parser import JSONResponseParser
from kinesis_client.aws.protocol.serializer import JSONRequestSerializer
from kinesis_client.constants import (
    HEADER_AMZ_ID_2,
    HEADER_AMZN_REQUEST_ID,
    REQUEST_TRACE_LOGGER,
    USER_AGENT,
)
from kinesis_client.http.client import HttpClient

LOG = logging.getLogger(__name__)
REQUEST_LOG = logging.getLogger(REQUEST_TRACE_LOGGER)


def create_response_metadata(response: Response) -> ResponseMetadata:
    """
    Creates the ``ResponseMetadata`` (as botocore would return it) of an HTTP response.
    """
    metadata = ResponseMetadata(
        HTTPStatusCode=response.status_code,
        HTTPHeaders={key.lower(): value for key, value in response.headers.items()},
    )
    request_id = response.headers.get(HEADER_AMZN_REQUEST_ID) or response.headers.get(
        HEADER_AMZ_ID_2
    )
    if request_id:
        metadata["RequestId"] = request_id
    return metadata


class ServiceClient:
    """
    Binds the operations of a JSON-RPC service to a transport. ``invoke`` performs exactly one HTTP exchange per call,
    it does not retry, wait or paginate. The client only holds immutable configuration and the transport, so it can be
    shared between threads as long as the transport can.
    """

    service_model: ServiceModel
    endpoint_url: str
    http_client: HttpClient
    include_response_metadata: bool

    def __init__(
        self,
        service_model: ServiceModel,
        endpoint_url: str,
        http_client: HttpClient,
        exceptions: Mapping[str, Type[ServiceException]] = None,
        include_response_metadata: bool = False,
    ):
        self.service_model = service_model
        self.endpoint_url = endpoint_url.rstrip("/")
        self.http_client = http_client
        self.include_response_metadata = include_response_metadata
        self.serializer = JSONRequestSerializer()
        self.parser = JSONResponseParser(exceptions)

    def invoke(
        self, operation: OperationDescriptor, request: ServiceRequest = None
    ) -> Optional[ServiceResponse]:
        """
        Invokes the given operation with the given request.

        :param operation: the descriptor of the operation to invoke
        :param request: the request parameters, keyed by the member names of the operation's input
        :return: the parsed output, or None if the operation does not return a payload
        :raises OperationNotFoundError: if the service model does not define the operation
        :raises ProtocolSerializerError: if the request does not match the operation's input
        :raises TransportError: if the HTTP exchange failed
        :raises ServiceException: if the service responded with an error
        """
        operation_model = self.service_model.operation_model(operation.name)
        serialized = self.serializer.serialize_to_request(request, operation_model)

        headers = dict(serialized.headers)
        headers["User-Agent"] = USER_AGENT
        url = self.endpoint_url + operation.path

        LOG.debug("Sending %s request to %s", operation.name, url)
        response = self.http_client.request(operation.method, url, headers, serialized.body)
        LOG.debug(
            "Received %s response for %s (request id: %s)",
            response.status_code,
            operation.name,
            response.headers.get(HEADER_AMZN_REQUEST_ID),
        )

        if response.status_code >= 300:
            exception = self.parser.parse_error(response, self.service_model)
            self._trace(operation, request, headers, response, str(exception))
            raise exception

        if not operation.has_output:
            self._trace(operation, request, headers, response, None)
            if self.include_response_metadata:
                return {"ResponseMetadata": create_response_metadata(response)}
            return None

        parsed = self.parser.parse(response, operation_model)
        self._trace(operation, request, headers, response, parsed)
        if self.include_response_metadata:
            parsed["ResponseMetadata"] = create_response_metadata(response)
        return parsed

    def _trace(
        self,
        operation: OperationDescriptor,
        request: Optional[ServiceRequest],
        headers: Dict[str, str],
        response: Response,
        output: Any,
    ):
        REQUEST_LOG.debug(
            "AWS %s.%s => %d",
            self.service_model.service_name,
            operation.name,
            response.status_code,
            extra={
                "input": request,
                "request_headers": headers,
                "output": output,
                "response_headers": dict(response.headers),
            },
        )

    def close(self):
        self.http_client.close()
