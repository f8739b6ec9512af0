import logging
import sys

from kinesis_client import config, constants

from .format import DefaultFormatter, RequestTraceFormatter

# log levels of third-party and client modules, applied on top of the configured root level

default_log_levels = {
    "botocore": logging.ERROR,
    "requests": logging.WARNING,
    "urllib3": logging.WARNING,
    "werkzeug": logging.WARNING,
    "kinesis_client.aws.protocol.serializer": logging.INFO,
    "kinesis_client.aws.protocol.parser": logging.INFO,
    constants.REQUEST_TRACE_LOGGER: logging.INFO,
}

trace_log_levels = {
    "urllib3": logging.DEBUG,
    "kinesis_client.aws.protocol.serializer": logging.DEBUG,
    "kinesis_client.aws.protocol.parser": logging.DEBUG,
    "kinesis_client.aws.client": logging.DEBUG,
    "kinesis_client.http.client": logging.DEBUG,
    constants.REQUEST_TRACE_LOGGER: logging.DEBUG,
}


def setup_logging_for_cli(log_level=logging.INFO):
    logging.basicConfig(level=log_level)

    # set log levels of loggers
    logging.root.setLevel(log_level)
    logging.getLogger("kinesis_client").setLevel(log_level)
    for logger, level in default_log_levels.items():
        logging.getLogger(logger).setLevel(level)


def get_log_level_from_config():
    # overriding the log level if KC_LOG has been set
    if config.KC_LOG:
        log_level = str(config.KC_LOG).upper()
        if log_level.lower() in constants.TRACE_LOG_LEVELS:
            log_level = "DEBUG"
        return logging.getLevelName(log_level)

    return logging.DEBUG if config.DEBUG else logging.INFO


def setup_logging_from_config():
    log_level = get_log_level_from_config()
    setup_logging(log_level)

    if config.is_trace_logging_enabled():
        for name, level in trace_log_levels.items():
            logging.getLogger(name).setLevel(level)
        setup_request_trace_logging()


def create_default_handler(log_level: int):
    log_handler = logging.StreamHandler(stream=sys.stderr)
    log_handler.setLevel(log_level)
    log_handler.setFormatter(DefaultFormatter())
    return log_handler


def setup_logging(log_level=logging.INFO) -> None:
    """
    Configures the python logging environment for kinesis-client.

    :param log_level: the optional log level.
    """
    # set create a default handler for the root logger (basically logging.basicConfig but explicit)
    log_handler = create_default_handler(log_level)

    # replace any existing handlers
    logging.basicConfig(level=log_level, handlers=[log_handler], force=True)

    logging.captureWarnings(True)

    # set log levels of loggers
    logging.root.setLevel(log_level)
    logging.getLogger("kinesis_client").setLevel(log_level)
    for logger, level in default_log_levels.items():
        logging.getLogger(logger).setLevel(level)


def setup_request_trace_logging(log_level=logging.DEBUG) -> logging.Logger:
    """
    Attaches a handler with the ``RequestTraceFormatter`` to the request trace logger. The trace records are not
    propagated to the root logger, since its formatter does not print the request and response attributes.

    :param log_level: the level of the request trace logger
    :return: the request trace logger
    """
    logger = logging.getLogger(constants.REQUEST_TRACE_LOGGER)
    logger.setLevel(log_level)
    logger.propagate = False

    if not any(isinstance(handler.formatter, RequestTraceFormatter) for handler in logger.handlers):
        handler = create_default_handler(log_level)
        handler.setFormatter(RequestTraceFormatter())
        logger.addHandler(handler)

    return logger
