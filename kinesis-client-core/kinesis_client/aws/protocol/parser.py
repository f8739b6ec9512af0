"""
Response parser for the ``json`` protocol of AWS services (f.e. Kinesis).

Successful responses carry a JSON object which is decoded along the output shape of the operation. Scalar and list
members which are missing in the body (or ``null``) take the zero value of their type (``""``, ``0``, ``False``,
``b""``, ``[]``), structure, map and timestamp members stay missing. Members unknown to the model are dropped. Blobs are
base64-decoded to bytes, timestamps (epoch seconds) become timezone-aware datetimes.

Error responses carry a JSON object with the error code in ``__type`` (optionally prefixed with a namespace, f.e.
``com.amazonaws.kinesis.v20131202#ResourceNotFoundException``) and the error message in ``message`` (or ``Message``).
If the body does not contain a type, the ``X-Amzn-ErrorType`` header is used (which may contain a ``:``-suffix with
additional information). The code is mapped to one of the given exception classes, unknown codes are turned into a
``CommonServiceException``.
"""
import binascii
import json
import logging
from typing import Any, Dict, Mapping, Optional, Type

from botocore.model import ListShape, MapShape, OperationModel, ServiceModel, Shape, StructureShape
from botocore.utils import parse_timestamp
from dateutil.tz import tzutc
from werkzeug import Response

from kinesis_client.aws.api import CommonServiceException, ServiceException
from kinesis_client.constants import HEADER_AMZN_ERROR_TYPE, HEADER_AMZN_REQUEST_ID
from kinesis_client.utils.strings import base64_decode, truncate

LOG = logging.getLogger(__name__)

# keys of an error body which are not passed on as additional error details
_ERROR_BODY_KEYS = ("__type", "code", "message", "Message")

# values of scalar members which are missing in a response body, by shape type
_ZERO_VALUES = {
    "string": "",
    "integer": 0,
    "long": 0,
    "float": 0.0,
    "double": 0.0,
    "boolean": False,
    "blob": b"",
}


class ResponseParserError(Exception):
    """
    Error which is thrown if the response parsing fails.
    Super class of all exceptions raised by the parser.
    """

    pass


class ProtocolParserError(ResponseParserError):
    """
    Error which indicates that the response body is not compliant with the protocol or the service's specification
    (f.e. it is not valid JSON, or a blob is not valid base64).
    """

    pass


class JSONResponseParser:
    """
    The ``JSONResponseParser`` is responsible for the parsing of responses of services with the ``json`` protocol.

    :param exceptions: the modeled exceptions of the service, by error code
    """

    exceptions: Mapping[str, Type[ServiceException]]

    def __init__(self, exceptions: Mapping[str, Type[ServiceException]] = None):
        self.exceptions = exceptions or {}

    def parse(self, response: Response, operation_model: OperationModel) -> Dict[str, Any]:
        """
        Parses the body of a successful response along the output shape of the given operation.

        :param response: the HTTP response of the service
        :param operation_model: the operation the response belongs to
        :return: the decoded output, keyed by the member names of the output shape
        :raises ProtocolParserError: if the body cannot be decoded
        """
        body = self._parse_body_as_json(response)
        if body is None:
            raise ProtocolParserError(
                "Unable to parse response of %s as JSON: %s"
                % (operation_model.name, truncate(response.get_data(as_text=True)))
            )
        shape = operation_model.output_shape
        if shape is None:
            return {}
        return self._parse_shape(body, shape)

    def parse_error(
        self, response: Response, service_model: Optional[ServiceModel] = None
    ) -> ServiceException:
        """
        Creates the exception for an error response of the service. The exception is returned, not raised.

        :param response: the HTTP error response of the service
        :param service_model: if given, modeled members of the error shape are decoded into the exception's details
        :return: an instance of the modeled exception class or a CommonServiceException
        """
        body = self._parse_body_as_json(response)
        if body is None:
            LOG.debug(
                "Error response body is not valid JSON, using headers only: %s",
                truncate(response.get_data(as_text=True)),
            )
            body = {}

        code = self._get_error_code(response, body)
        message = body.get("message") or body.get("Message") or ""
        request_id = response.headers.get(HEADER_AMZN_REQUEST_ID)

        exception_type = self.exceptions.get(code)
        if exception_type is not None:
            exception = exception_type(message, request_id=request_id)
            exception.status_code = response.status_code
        else:
            exception = CommonServiceException(
                code=code,
                message=message,
                status_code=response.status_code,
                sender_fault=400 <= response.status_code < 500,
                request_id=request_id,
            )

        details = {key: value for key, value in body.items() if key not in _ERROR_BODY_KEYS}
        if service_model is not None and details:
            error_shape = service_model.shape_for_error_code(code)
            if error_shape is not None:
                parsed = self._parse_shape(details, error_shape)
                details.update((key, value) for key, value in parsed.items() if key in details)
        exception.details = details

        return exception

    @staticmethod
    def _get_error_code(response: Response, body: dict) -> str:
        code = body.get("__type") or body.get("code") or response.headers.get(HEADER_AMZN_ERROR_TYPE)
        if not code:
            return str(response.status_code)
        # f.e. "ResourceNotFoundException:http://internal.amazon.com/coral/com.amazon.coral.validate/"
        code = code.split(":")[0]
        # f.e. "com.amazonaws.kinesis.v20131202#ResourceNotFoundException"
        return code.rsplit("#", 1)[-1]

    @staticmethod
    def _parse_body_as_json(response: Response) -> Optional[dict]:
        """Returns the decoded body, an empty dict for an empty body, or None if the body is not a JSON object."""
        data = response.get_data()
        if not data.strip():
            return {}
        try:
            body = json.loads(data)
        except ValueError:
            return None
        return body if isinstance(body, dict) else None

    def _parse_shape(self, value: Any, shape: Shape) -> Any:
        """This method dynamically invokes the correct `_parse_type_*` method for each shape type."""
        method = getattr(self, "_parse_type_%s" % shape.type_name, self._default_parse)
        return method(value, shape)

    def _parse_type_structure(self, value: dict, shape: StructureShape) -> dict:
        if not isinstance(value, dict):
            raise ProtocolParserError("Expected an object for %s, got: %r" % (shape.name, value))
        if shape.is_document_type:
            return value
        result = {}
        for member_name, member_shape in shape.members.items():
            wire_name = member_shape.serialization.get("name", member_name)
            member_value = value.get(wire_name)
            if member_value is not None:
                result[member_name] = self._parse_shape(member_value, member_shape)
                continue
            zero_value = self._zero_value(member_shape)
            if zero_value is not None:
                result[member_name] = zero_value
        return result

    @staticmethod
    def _zero_value(shape: Shape) -> Any:
        if shape.type_name == "list":
            return []
        return _ZERO_VALUES.get(shape.type_name)

    def _parse_type_list(self, value: list, shape: ListShape) -> list:
        if not isinstance(value, list):
            raise ProtocolParserError("Expected a list for %s, got: %r" % (shape.name, value))
        return [self._parse_shape(item, shape.member) for item in value]

    def _parse_type_map(self, value: dict, shape: MapShape) -> dict:
        if not isinstance(value, dict):
            raise ProtocolParserError("Expected an object for %s, got: %r" % (shape.name, value))
        return {key: self._parse_shape(item, shape.value) for key, item in value.items()}

    def _parse_type_blob(self, value: str, shape: Shape) -> bytes:
        try:
            return base64_decode(value)
        except (binascii.Error, TypeError) as e:
            raise ProtocolParserError(
                "Invalid base64 value for %s: %s" % (shape.name, truncate(value))
            ) from e

    def _parse_type_timestamp(self, value: Any, shape: Shape):
        try:
            return parse_timestamp(value).astimezone(tzutc())
        except (ValueError, TypeError) as e:
            raise ProtocolParserError("Invalid timestamp for %s: %r" % (shape.name, value)) from e

    def _default_parse(self, value: Any, shape: Shape) -> Any:
        return value
