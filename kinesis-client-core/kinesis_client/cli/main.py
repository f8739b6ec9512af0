import logging
import os
from contextlib import contextmanager
from typing import Optional

import click
from botocore.exceptions import BotoCoreError

from kinesis_client import __version__, config
from kinesis_client.aws.api import ServiceException, TransportError
from kinesis_client.aws.api.kinesis import ShardIteratorType
from kinesis_client.aws.connect import connect_to_kinesis
from kinesis_client.aws.protocol.parser import ResponseParserError
from kinesis_client.aws.protocol.serializer import RequestSerializerError
from kinesis_client.services.kinesis.client import KinesisClient
from kinesis_client.utils.json import json_safe_dumps
from kinesis_client.utils.strings import to_bytes

from .exceptions import CLIError

LOG = logging.getLogger(__name__)


class CliContext:
    """Holds the global options of the CLI and creates the client once a command needs it."""

    region: Optional[str]
    endpoint_url: Optional[str]

    def __init__(self, region: str = None, endpoint_url: str = None):
        self.region = region
        self.endpoint_url = endpoint_url
        self._client = None

    @property
    def client(self) -> KinesisClient:
        if self._client is None:
            with handle_errors():
                self._client = connect_to_kinesis(
                    region_name=self.region, endpoint_url=self.endpoint_url
                )
        return self._client

    def close(self):
        if self._client is not None:
            self._client.close()


pass_cli_context = click.make_pass_decorator(CliContext)


@contextmanager
def handle_errors():
    """Turns the errors of a client call into a ``CLIError``."""
    try:
        yield
    except (
        ServiceException,
        TransportError,
        RequestSerializerError,
        ResponseParserError,
        BotoCoreError,
    ) as e:
        raise CLIError(str(e)) from e


def print_result(result):
    if result is not None:
        click.echo(json_safe_dumps(result, indent=2))


def _setup_cli_debug():
    from kinesis_client.logging.setup import setup_logging_for_cli

    config.DEBUG = True
    os.environ["DEBUG"] = "1"

    setup_logging_for_cli(logging.DEBUG)
    LOG.debug("Configuration: %s", dict(config.collect_config_items()))


@click.group(
    name="kinesis-client",
    help="Command line interface for Amazon Kinesis Data Streams",
)
@click.version_option(version=__version__, message="%(version)s")
@click.option("--region", type=str, help="The region of the streams (default: $AWS_DEFAULT_REGION)")
@click.option("--endpoint-url", type=str, help="Override the endpoint (f.e. of a local emulator)")
@click.option("--debug", is_flag=True, help="Enable CLI debugging mode")
@click.pass_context
def kinesis_client(ctx, region, endpoint_url, debug):
    if debug:
        _setup_cli_debug()
    elif config.DEBUG or config.KC_LOG:
        from kinesis_client.logging.setup import setup_logging_from_config

        setup_logging_from_config()

    ctx.obj = CliContext(region=region, endpoint_url=endpoint_url)
    ctx.call_on_close(ctx.obj.close)


@kinesis_client.command(name="list-streams", help="List the streams of the account")
@click.option("--limit", type=int, help="Maximum number of streams to list")
@click.option("--exclusive-start-stream-name", type=str, help="Start listing after this stream")
@pass_cli_context
def cmd_list_streams(ctx: CliContext, limit, exclusive_start_stream_name):
    with handle_errors():
        result = ctx.client.list_streams(
            Limit=limit, ExclusiveStartStreamName=exclusive_start_stream_name
        )
    print_result(result)


@kinesis_client.command(name="describe-stream", help="Describe a stream and its shards")
@click.argument("stream_name")
@click.option("--limit", type=int, help="Maximum number of shards to describe")
@pass_cli_context
def cmd_describe_stream(ctx: CliContext, stream_name, limit):
    with handle_errors():
        result = ctx.client.describe_stream(StreamName=stream_name, Limit=limit)
    print_result(result)


@kinesis_client.command(name="create-stream", help="Create a stream")
@click.argument("stream_name")
@click.option("--shard-count", type=int, required=True, help="Number of shards of the stream")
@pass_cli_context
def cmd_create_stream(ctx: CliContext, stream_name, shard_count):
    with handle_errors():
        result = ctx.client.create_stream(StreamName=stream_name, ShardCount=shard_count)
    print_result(result)


@kinesis_client.command(name="delete-stream", help="Delete a stream")
@click.argument("stream_name")
@pass_cli_context
def cmd_delete_stream(ctx: CliContext, stream_name):
    with handle_errors():
        result = ctx.client.delete_stream(StreamName=stream_name)
    print_result(result)


@kinesis_client.command(name="put-record", help="Write a single record to a stream")
@click.argument("stream_name")
@click.option("--partition-key", type=str, required=True, help="Partition key of the record")
@click.option("--data", type=str, required=True, help="Data of the record (text)")
@pass_cli_context
def cmd_put_record(ctx: CliContext, stream_name, partition_key, data):
    with handle_errors():
        result = ctx.client.put_record(
            StreamName=stream_name, PartitionKey=partition_key, Data=to_bytes(data)
        )
    print_result(result)


@kinesis_client.command(name="get-shard-iterator", help="Get an iterator to read a shard")
@click.argument("stream_name")
@click.argument("shard_id")
@click.option(
    "--type",
    "iterator_type",
    type=click.Choice(
        [
            ShardIteratorType.TRIM_HORIZON,
            ShardIteratorType.LATEST,
            ShardIteratorType.AT_SEQUENCE_NUMBER,
            ShardIteratorType.AFTER_SEQUENCE_NUMBER,
        ]
    ),
    default=ShardIteratorType.TRIM_HORIZON,
    show_default=True,
    help="Where to start reading",
)
@click.option("--sequence-number", type=str, help="Sequence number for the AT/AFTER types")
@pass_cli_context
def cmd_get_shard_iterator(ctx: CliContext, stream_name, shard_id, iterator_type, sequence_number):
    with handle_errors():
        result = ctx.client.get_shard_iterator(
            StreamName=stream_name,
            ShardId=shard_id,
            ShardIteratorType=iterator_type,
            StartingSequenceNumber=sequence_number,
        )
    print_result(result)


@kinesis_client.command(name="get-records", help="Read records with a shard iterator")
@click.argument("shard_iterator")
@click.option("--limit", type=int, help="Maximum number of records to return")
@pass_cli_context
def cmd_get_records(ctx: CliContext, shard_iterator, limit):
    with handle_errors():
        result = ctx.client.get_records(ShardIterator=shard_iterator, Limit=limit)
    print_result(result)


def main():
    kinesis_client()


if __name__ == "__main__":
    main()
