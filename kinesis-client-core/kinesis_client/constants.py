import kinesis_client

# kinesis-client version
VERSION = kinesis_client.__version__

# service the client binds to
SERVICE_NAME = "kinesis"
API_VERSION = "2013-12-02"

# all operations of a JSON-RPC service are sent to the same method/path
DEFAULT_HTTP_METHOD = "POST"
DEFAULT_REQUEST_URI = "/"

# HTTP headers of the JSON protocol
HEADER_AMZ_TARGET = "X-Amz-Target"
HEADER_AMZN_ERROR_TYPE = "X-Amzn-Errortype"
HEADER_AMZN_REQUEST_ID = "X-Amzn-Requestid"
HEADER_AMZ_ID_2 = "X-Amz-Id-2"
HEADER_CONTENT_TYPE = "Content-Type"

# default region used if neither the caller nor the environment specifies one
AWS_REGION_US_EAST_1 = "us-east-1"

# default encoding used for str <-> bytes conversions
DEFAULT_ENCODING = "utf-8"

# environment value parsing
TRUE_STRINGS = ("1", "true", "True")
FALSE_STRINGS = ("0", "false", "False")

# strings with valid log levels for KC_LOG
LOG_LEVELS = ("trace", "debug", "info", "warn", "error", "warning")

# trace log level, configurable via $KC_LOG
KC_LOG_TRACE = "trace"
TRACE_LOG_LEVELS = [KC_LOG_TRACE]

# user agent sent with every request
USER_AGENT = f"kinesis-client/{VERSION}"

# logger which receives one record per exchange with the service (enabled with KC_LOG=trace)
REQUEST_TRACE_LOGGER = "kinesis_client.request"
