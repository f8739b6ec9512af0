from .core import (
    CommonServiceException,
    OperationDescriptor,
    OperationTable,
    ResponseMetadata,
    ServiceException,
    ServiceRequest,
    ServiceResponse,
    TransportError,
    create_operation_table,
)

__all__ = [
    "CommonServiceException",
    "OperationDescriptor",
    "OperationTable",
    "ResponseMetadata",
    "ServiceException",
    "ServiceRequest",
    "ServiceResponse",
    "TransportError",
    "create_operation_table",
]
