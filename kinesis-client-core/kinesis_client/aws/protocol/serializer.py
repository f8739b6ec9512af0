"""
Request serializer for the ``json`` protocol of AWS services (f.e. Kinesis).

The serializer takes the request parameters (a dict keyed by the member names of the operation's input shape) and
turns them into the parts of an HTTP request the service understands. It is driven by the botocore service model:

- every request is a ``POST`` to the operation's request URI with a JSON body
- the operation is selected by the ``X-Amz-Target`` header (``<targetPrefix>.<OperationName>``)
- the protocol version is selected by the ``Content-Type`` header (``application/x-amz-json-<jsonVersion>``)
- members are written with their wire name (``serialization["name"]``), blobs as base64 text and timestamps as epoch
  seconds
- ``None`` values are never written, empty values of optional members are omitted (except for the members in
  ``KEEP_EMPTY_MEMBERS``, which identify the target of the call and are written whenever they are given)

The serializer only checks the structure and the types of the given values against the model. Any constraint beyond
that (lengths, ranges, patterns, required members) is left to the service.
"""
import json
import logging
from datetime import datetime
from typing import Any, Dict, Iterable, NamedTuple, Optional

from botocore.model import ListShape, MapShape, OperationModel, Shape, StructureShape
from botocore.utils import datetime2timestamp, parse_timestamp
from dateutil.tz import tzutc

from kinesis_client.aws.spec import get_json_content_type, get_target_prefix
from kinesis_client.constants import HEADER_AMZ_TARGET, HEADER_CONTENT_TYPE
from kinesis_client.utils.strings import base64_encode, to_bytes

LOG = logging.getLogger(__name__)

# optional members which are written even when empty, as long as they are given
KEEP_EMPTY_MEMBERS = ("StreamName",)


class RequestSerializerError(Exception):
    """
    Error which is thrown if the request serialization fails.
    Super class of all exceptions raised by the serializer.
    """

    pass


class ProtocolSerializerError(RequestSerializerError):
    """
    Error which indicates that the given parameters are not compliant with the service's specification (unknown
    members, values of the wrong type) and cannot be serialized. No request is sent in this case.
    """

    pass


class SerializedRequest(NamedTuple):
    method: str
    url_path: str
    headers: Dict[str, str]
    body: bytes


class JSONRequestSerializer:
    """
    The ``JSONRequestSerializer`` is responsible for the serialization of requests for services with the ``json``
    protocol. It mirrors the response serialization of the JSON protocol, but from the client's point of view.

    :param keep_empty_members: names of optional members which are written even if their value is empty
    """

    def __init__(self, keep_empty_members: Iterable[str] = KEEP_EMPTY_MEMBERS):
        self.keep_empty_members = frozenset(keep_empty_members)

    def serialize_to_request(
        self, parameters: Optional[dict], operation_model: OperationModel
    ) -> SerializedRequest:
        """
        Serializes the given parameters to the parts of the HTTP request for the given operation.

        :param parameters: the request parameters, keyed by the member names of the input shape
        :param operation_model: the operation to serialize the request for
        :return: the method, path, protocol headers and body of the request
        :raises ProtocolSerializerError: if the parameters do not match the input shape of the operation
        """
        service_model = operation_model.service_model
        headers = {
            HEADER_AMZ_TARGET: "%s.%s" % (get_target_prefix(service_model), operation_model.name),
            HEADER_CONTENT_TYPE: get_json_content_type(service_model),
        }

        body = {}
        shape = operation_model.input_shape
        if shape is not None:
            body = self.serialize_shape(parameters or {}, shape)
        elif parameters:
            raise ProtocolSerializerError(
                "Operation %s does not take any parameters, got: %s"
                % (operation_model.name, ", ".join(parameters))
            )

        http = operation_model.http
        return SerializedRequest(
            method=http.get("method", "POST"),
            url_path=http.get("requestUri", "/"),
            headers=headers,
            body=to_bytes(json.dumps(body)),
        )

    def serialize_shape(self, value: Any, shape: Shape) -> Any:
        """
        Serializes a single value along the given shape to its JSON wire form (without encoding it to text).

        :param value: the value to serialize
        :param shape: the shape of the value
        :return: the JSON-compatible wire value
        :raises ProtocolSerializerError: if the value does not match the shape
        """
        return self._serialize(value, shape, shape.name)

    def _serialize(self, value: Any, shape: Shape, path: str) -> Any:
        """This method dynamically invokes the correct `_serialize_type_*` method for each shape type."""
        method = getattr(self, "_serialize_type_%s" % shape.type_name, self._default_serialize)
        return method(value, shape, path)

    def _serialize_type_structure(self, value: dict, shape: StructureShape, path: str) -> dict:
        if not isinstance(value, dict):
            raise self._type_error(value, shape, path)
        if shape.is_document_type:
            return value

        serialized = {}
        members = shape.members
        required = set(shape.required_members)
        for member_key, member_value in value.items():
            try:
                member_shape = members[member_key]
            except KeyError:
                raise ProtocolSerializerError(
                    "Unknown parameter %s in %s, must be one of: %s"
                    % (member_key, path, ", ".join(members))
                ) from None
            if member_value is None:
                continue
            if (
                member_key not in required
                and member_key not in self.keep_empty_members
                and self._is_empty(member_value)
            ):
                continue
            wire_name = member_shape.serialization.get("name", member_key)
            serialized[wire_name] = self._serialize(
                member_value, member_shape, "%s.%s" % (path, member_key)
            )
        return serialized

    def _serialize_type_list(self, value: list, shape: ListShape, path: str) -> list:
        if not isinstance(value, (list, tuple)):
            raise self._type_error(value, shape, path)
        return [
            self._serialize(item, shape.member, "%s[%s]" % (path, index))
            for index, item in enumerate(value)
            if item is not None
        ]

    def _serialize_type_map(self, value: dict, shape: MapShape, path: str) -> dict:
        if not isinstance(value, dict):
            raise self._type_error(value, shape, path)
        serialized = {}
        for key, item in value.items():
            if item is None:
                continue
            self._serialize(key, shape.key, "%s.<key>" % path)
            serialized[key] = self._serialize(item, shape.value, "%s.%s" % (path, key))
        return serialized

    def _serialize_type_string(self, value: str, shape: Shape, path: str) -> str:
        if not isinstance(value, str):
            raise self._type_error(value, shape, path)
        return value

    def _serialize_type_boolean(self, value: bool, shape: Shape, path: str) -> bool:
        if not isinstance(value, bool):
            raise self._type_error(value, shape, path)
        return value

    def _serialize_type_integer(self, value: int, shape: Shape, path: str) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise self._type_error(value, shape, path)
        return value

    _serialize_type_long = _serialize_type_integer

    def _serialize_type_double(self, value: float, shape: Shape, path: str) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise self._type_error(value, shape, path)
        return value

    _serialize_type_float = _serialize_type_double

    def _serialize_type_blob(self, value: bytes, shape: Shape, path: str) -> str:
        if not isinstance(value, (bytes, bytearray, str)):
            raise self._type_error(value, shape, path)
        return base64_encode(bytes(value) if isinstance(value, bytearray) else value)

    def _serialize_type_timestamp(self, value: Any, shape: Shape, path: str) -> float:
        if isinstance(value, datetime):
            return datetime2timestamp(value, default_timezone=tzutc())
        if isinstance(value, str):
            try:
                return datetime2timestamp(parse_timestamp(value), default_timezone=tzutc())
            except ValueError as e:
                raise self._type_error(value, shape, path) from e
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
        raise self._type_error(value, shape, path)

    def _default_serialize(self, value: Any, shape: Shape, path: str) -> Any:
        return value

    @staticmethod
    def _is_empty(value: Any) -> bool:
        if isinstance(value, (str, bytes, bytearray, list, tuple, dict)):
            return len(value) == 0
        if isinstance(value, (bool, int, float)):
            return not value
        return False

    @staticmethod
    def _type_error(value: Any, shape: Shape, path: str) -> ProtocolSerializerError:
        return ProtocolSerializerError(
            "Invalid type for parameter %s, value: %r, type: %s, expected %s"
            % (path, value, type(value).__name__, shape.type_name)
        )
