from typing import Any, Dict, NamedTuple, Optional, Type, TypedDict

from kinesis_client.constants import DEFAULT_HTTP_METHOD, DEFAULT_REQUEST_URI


class ServiceRequest(TypedDict):
    pass


ServiceResponse = Any


class ResponseMetadata(TypedDict, total=False):
    RequestId: str
    HTTPStatusCode: int
    HTTPHeaders: Dict[str, str]


class ServiceException(Exception):
    """
    An exception that indicates that the service returned an error response.
    Do not use this exception directly (use the generated subclasses or CommonServiceException instead).
    """

    code: str = "ServiceException"
    sender_fault: bool = False
    status_code: int = 400
    message: str = ""
    request_id: Optional[str] = None
    details: Optional[Dict[str, Any]] = None

    def __init__(self, message: str = None, request_id: str = None):
        if message is not None:
            self.message = message
        self.request_id = request_id
        super().__init__(self.message)

    def __str__(self):
        return f"{self.code}: {self.message}" if self.message else self.code


class CommonServiceException(ServiceException):
    """
    An exception for service errors which are not modeled in the service specification, f.e. the "Common Errors"
    every AWS service can return:
    https://docs.aws.amazon.com/kinesis/latest/APIReference/CommonErrors.html
    The error code is carried verbatim.
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 400,
        sender_fault: bool = False,
        request_id: str = None,
    ):
        self.code = code
        self.status_code = status_code
        self.sender_fault = sender_fault
        super().__init__(message, request_id=request_id)


class TransportError(Exception):
    """
    Raised if the HTTP exchange itself failed (connection errors, TLS errors, timeouts), i.e., there is no response
    of the service. The original exception is available as ``__cause__``.
    """

    endpoint_url: Optional[str]

    def __init__(self, message: str, endpoint_url: str = None):
        self.endpoint_url = endpoint_url
        super().__init__(message)


class OperationDescriptor(NamedTuple):
    """
    Describes one remote operation of a service: its name (used in the target header), the HTTP method and path of
    the request, and the types of the request and response payloads. ``output_type`` is None for operations which do
    not return a payload.
    """

    name: str
    input_type: Type[ServiceRequest]
    output_type: Optional[type] = None
    method: str = DEFAULT_HTTP_METHOD
    path: str = DEFAULT_REQUEST_URI

    @property
    def has_output(self) -> bool:
        return self.output_type is not None


OperationTable = Dict[str, OperationDescriptor]


def create_operation_table(*operations: OperationDescriptor) -> OperationTable:
    """
    Creates a lookup table (operation name -> descriptor) for the given operation descriptors.

    :raises ValueError: if an operation is defined twice
    """
    table: OperationTable = {}
    for operation in operations:
        if operation.name in table:
            raise ValueError("operation %s defined more than once" % operation.name)
        table[operation.name] = operation
    return table
