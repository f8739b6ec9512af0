"""
Formatting of kinesis-client logs.

``DefaultFormatter`` is used for all log output of the client. ``RequestTraceFormatter`` is attached to the request
trace logger (``kinesis_client.request``, enabled with ``KC_LOG=trace``), which receives one record per exchange with the
service. It appends the operation (taken from the ``X-Amz-Target`` header), the decoded input and output, and the
request id assigned by the service to the message. Large blobs (f.e. record data) are replaced by their size.
"""
import logging
from typing import Any, Mapping, Optional

from kinesis_client.constants import HEADER_AMZ_ID_2, HEADER_AMZ_TARGET, HEADER_AMZN_REQUEST_ID

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(kc_level)5s --- %(name)s : %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

# level names which are longer than five characters
SHORT_LEVEL_NAMES = {
    logging.CRITICAL: "FATAL",
    logging.WARNING: "WARN",
}


class DefaultFormatter(logging.Formatter):
    """
    A formatter that uses ``LOG_FORMAT`` and ``LOG_DATE_FORMAT``.
    """

    def __init__(self, fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT):
        super().__init__(fmt=fmt, datefmt=datefmt)

    def formatMessage(self, record: logging.LogRecord) -> str:
        record.kc_level = SHORT_LEVEL_NAMES.get(record.levelno, record.levelname)
        return super().formatMessage(record)


class RequestTraceFormatter(DefaultFormatter):
    """
    Formatter for the records of the request trace logger. The records carry the extra attributes ``input``,
    ``output``, ``request_headers`` and ``response_headers``.
    """

    trace_log_format = (
        LOG_FORMAT + "; %(kc_operation)s(%(kc_input)s) => %(kc_output)s; request id: %(kc_request_id)s"
    )
    bytes_length_display_threshold = 512

    def __init__(self):
        super().__init__(fmt=self.trace_log_format)

    def formatMessage(self, record: logging.LogRecord) -> str:
        request_headers = getattr(record, "request_headers", None) or {}
        response_headers = getattr(record, "response_headers", None) or {}

        record.kc_operation = (
            operation_from_target(get_header(request_headers, HEADER_AMZ_TARGET)) or "Request"
        )
        record.kc_input = shorten_blobs(
            getattr(record, "input", None), self.bytes_length_display_threshold
        )
        record.kc_output = shorten_blobs(
            getattr(record, "output", None), self.bytes_length_display_threshold
        )
        record.kc_request_id = (
            get_header(response_headers, HEADER_AMZN_REQUEST_ID)
            or get_header(response_headers, HEADER_AMZ_ID_2)
            or "-"
        )
        return super().formatMessage(record)


def operation_from_target(target: Optional[str]) -> Optional[str]:
    """
    Returns the operation name of an ``X-Amz-Target`` header value, f.e. ``PutRecord`` for
    ``Kinesis_20131202.PutRecord``.
    """
    if not target:
        return None
    return target.rpartition(".")[2]


def get_header(headers: Mapping[str, str], name: str) -> Optional[str]:
    """Case-insensitive lookup in a plain dict of headers."""
    name = name.lower()
    for key, value in headers.items():
        if key.lower() == name:
            return value
    return None


def shorten_blobs(value: Any, threshold: int) -> Any:
    """
    Creates a copy of the given value (f.e. a decoded request or response) in which all bytes longer than the
    threshold are replaced by ``Bytes(<length>)``.
    """
    if isinstance(value, dict):
        return {key: shorten_blobs(item, threshold) for key, item in value.items()}
    if isinstance(value, list):
        return [shorten_blobs(item, threshold) for item in value]
    if isinstance(value, (bytes, bytearray)) and len(value) > threshold:
        return "Bytes(%d)" % len(value)
    return value
