"""
Environment-driven defaults. Only the construction helpers (``kinesis_client.aws.connect``), the CLI, and
the logging setup read these values; the codec, the dispatcher and the facade receive everything as
parameters.
"""
import logging
import os
from typing import List, Optional, Tuple, Union

from kinesis_client.constants import (
    AWS_REGION_US_EAST_1,
    FALSE_STRINGS,
    LOG_LEVELS,
    TRACE_LOG_LEVELS,
    TRUE_STRINGS,
)

LOG = logging.getLogger(__name__)


def eval_log_type(env_var_name: str) -> Union[str, bool]:
    """Get the log type from environment variable"""
    kc_log = os.environ.get(env_var_name, "").lower().strip()
    return kc_log if kc_log in LOG_LEVELS else False


def parse_boolean_env(env_var_name: str) -> Optional[bool]:
    """Parse the value of the given env variable and return True/False, or None if it is not a boolean value."""
    value = os.environ.get(env_var_name, "").lower().strip()
    if value in TRUE_STRINGS:
        return True
    if value in FALSE_STRINGS:
        return False
    return None


def is_env_true(env_var_name: str) -> bool:
    """Whether the given environment variable has a truthy value."""
    return os.environ.get(env_var_name, "").lower().strip() in TRUE_STRINGS


def is_env_not_false(env_var_name: str) -> bool:
    """Whether the given environment variable is empty or has a truthy value."""
    return os.environ.get(env_var_name, "").lower().strip() not in FALSE_STRINGS


def parse_int_env(env_var_name: str, default: int) -> int:
    """
    Parse the value of the given env variable as integer.

    :param env_var_name: the environment variable to read
    :param default: the value to use if the variable is not set or not a valid integer
    :return: the parsed integer
    """
    value = os.environ.get(env_var_name, "").strip()
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        LOG.warning("Ignoring invalid integer value %r for %s", value, env_var_name)
        return default


# whether to enable debug logging
DEBUG = is_env_true("DEBUG")

# log level of the client ("trace", "debug", "info", ...), overrides DEBUG
KC_LOG = eval_log_type("KC_LOG")

# region used if the caller does not pass one explicitly
DEFAULT_REGION = (
    os.environ.get("AWS_DEFAULT_REGION") or os.environ.get("AWS_REGION") or AWS_REGION_US_EAST_1
).strip()

# endpoint override, e.g. for a local Kinesis emulator (like "http://localhost:4566")
KINESIS_ENDPOINT_URL = os.environ.get("KINESIS_ENDPOINT_URL", "").strip() or None

# timeouts (in seconds) of the underlying HTTP transport
HTTP_CONNECT_TIMEOUT = parse_int_env("HTTP_CONNECT_TIMEOUT", 10)
HTTP_READ_TIMEOUT = parse_int_env("HTTP_READ_TIMEOUT", 60)

# whether the HTTP transport verifies TLS certificates
HTTP_VERIFY_SSL = is_env_not_false("HTTP_VERIFY_SSL")

# whether parsed responses contain a "ResponseMetadata" entry (request id, status code, headers)
INCLUDE_RESPONSE_METADATA = is_env_true("INCLUDE_RESPONSE_METADATA")


def is_trace_logging_enabled() -> bool:
    if KC_LOG:
        return KC_LOG.lower() in TRACE_LOG_LEVELS
    return False


def get_http_timeout() -> Tuple[int, int]:
    """Returns the (connect, read) timeout tuple as it is expected by ``requests``."""
    return HTTP_CONNECT_TIMEOUT, HTTP_READ_TIMEOUT


def collect_config_items() -> List[Tuple[str, object]]:
    """Returns a list of key-value tuples of the effective configuration values."""
    return [
        ("DEBUG", DEBUG),
        ("KC_LOG", KC_LOG),
        ("DEFAULT_REGION", DEFAULT_REGION),
        ("KINESIS_ENDPOINT_URL", KINESIS_ENDPOINT_URL),
        ("HTTP_CONNECT_TIMEOUT", HTTP_CONNECT_TIMEOUT),
        ("HTTP_READ_TIMEOUT", HTTP_READ_TIMEOUT),
        ("HTTP_VERIFY_SSL", HTTP_VERIFY_SSL),
        ("INCLUDE_RESPONSE_METADATA", INCLUDE_RESPONSE_METADATA),
    ]
