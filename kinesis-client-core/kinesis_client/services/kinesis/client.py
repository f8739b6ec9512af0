import logging
from typing import List, Optional, Sequence, Tuple

from kinesis_client.aws.api import ResponseMetadata, ServiceRequest
from kinesis_client.aws.api.kinesis import (
    OPERATIONS,
    AddTagsToStreamInput,
    CreateStreamInput,
    DecreaseStreamRetentionPeriodInput,
    DeleteStreamInput,
    DeregisterStreamConsumerInput,
    DescribeLimitsInput,
    DescribeLimitsOutput,
    DescribeStreamConsumerInput,
    DescribeStreamConsumerOutput,
    DescribeStreamInput,
    DescribeStreamOutput,
    DescribeStreamSummaryInput,
    DescribeStreamSummaryOutput,
    DisableEnhancedMonitoringInput,
    EnableEnhancedMonitoringInput,
    EnhancedMonitoringOutput,
    GetRecordsInput,
    GetRecordsOutput,
    GetShardIteratorInput,
    GetShardIteratorOutput,
    IncreaseStreamRetentionPeriodInput,
    ListShardsInput,
    ListShardsOutput,
    ListStreamConsumersInput,
    ListStreamConsumersOutput,
    ListStreamsInput,
    ListStreamsOutput,
    ListTagsForStreamInput,
    ListTagsForStreamOutput,
    MergeShardsInput,
    PutRecordInput,
    PutRecordOutput,
    PutRecordsInput,
    PutRecordsOutput,
    PutRecordsRequestEntry,
    PutRecordsResultEntry,
    RegisterStreamConsumerInput,
    RegisterStreamConsumerOutput,
    RemoveTagsFromStreamInput,
    SplitShardInput,
    StartStreamEncryptionInput,
    StopStreamEncryptionInput,
    UpdateShardCountInput,
    UpdateShardCountOutput,
    UpdateStreamModeInput,
)
from kinesis_client.aws.client import ServiceClient

LOG = logging.getLogger(__name__)

# returned by operations without payload if the response metadata is requested
NoPayload = Optional[ResponseMetadata]


class KinesisClient:
    """
    Client for the Amazon Kinesis Data Streams API. Every method performs exactly one call of the remote operation with
    the same name. Requests are passed as dicts (keyword arguments are merged into them), outputs are returned as
    dicts, operations without payload return None. Errors of the service are raised as the ``ServiceException``
    subclasses of ``kinesis_client.aws.api.kinesis``.

    Use ``kinesis_client.aws.connect.connect_to_kinesis`` to create a client with the default configuration.
    """

    service_client: ServiceClient

    def __init__(self, service_client: ServiceClient):
        self.service_client = service_client

    def _invoke(self, operation_name: str, request: Optional[ServiceRequest], parameters: dict):
        if parameters:
            request = {**(request or {}), **parameters}
        return self.service_client.invoke(OPERATIONS[operation_name], request)

    def add_tags_to_stream(self, request: AddTagsToStreamInput = None, **kwargs) -> NoPayload:
        return self._invoke("AddTagsToStream", request, kwargs)

    def create_stream(self, request: CreateStreamInput = None, **kwargs) -> NoPayload:
        return self._invoke("CreateStream", request, kwargs)

    def decrease_stream_retention_period(
        self, request: DecreaseStreamRetentionPeriodInput = None, **kwargs
    ) -> NoPayload:
        return self._invoke("DecreaseStreamRetentionPeriod", request, kwargs)

    def delete_stream(self, request: DeleteStreamInput = None, **kwargs) -> NoPayload:
        return self._invoke("DeleteStream", request, kwargs)

    def deregister_stream_consumer(
        self, request: DeregisterStreamConsumerInput = None, **kwargs
    ) -> NoPayload:
        return self._invoke("DeregisterStreamConsumer", request, kwargs)

    def describe_limits(self, request: DescribeLimitsInput = None, **kwargs) -> DescribeLimitsOutput:
        return self._invoke("DescribeLimits", request, kwargs)

    def describe_stream(self, request: DescribeStreamInput = None, **kwargs) -> DescribeStreamOutput:
        return self._invoke("DescribeStream", request, kwargs)

    def describe_stream_consumer(
        self, request: DescribeStreamConsumerInput = None, **kwargs
    ) -> DescribeStreamConsumerOutput:
        return self._invoke("DescribeStreamConsumer", request, kwargs)

    def describe_stream_summary(
        self, request: DescribeStreamSummaryInput = None, **kwargs
    ) -> DescribeStreamSummaryOutput:
        return self._invoke("DescribeStreamSummary", request, kwargs)

    def disable_enhanced_monitoring(
        self, request: DisableEnhancedMonitoringInput = None, **kwargs
    ) -> EnhancedMonitoringOutput:
        return self._invoke("DisableEnhancedMonitoring", request, kwargs)

    def enable_enhanced_monitoring(
        self, request: EnableEnhancedMonitoringInput = None, **kwargs
    ) -> EnhancedMonitoringOutput:
        return self._invoke("EnableEnhancedMonitoring", request, kwargs)

    def get_records(self, request: GetRecordsInput = None, **kwargs) -> GetRecordsOutput:
        return self._invoke("GetRecords", request, kwargs)

    def get_shard_iterator(
        self, request: GetShardIteratorInput = None, **kwargs
    ) -> GetShardIteratorOutput:
        return self._invoke("GetShardIterator", request, kwargs)

    def increase_stream_retention_period(
        self, request: IncreaseStreamRetentionPeriodInput = None, **kwargs
    ) -> NoPayload:
        return self._invoke("IncreaseStreamRetentionPeriod", request, kwargs)

    def list_shards(self, request: ListShardsInput = None, **kwargs) -> ListShardsOutput:
        return self._invoke("ListShards", request, kwargs)

    def list_stream_consumers(
        self, request: ListStreamConsumersInput = None, **kwargs
    ) -> ListStreamConsumersOutput:
        return self._invoke("ListStreamConsumers", request, kwargs)

    def list_streams(self, request: ListStreamsInput = None, **kwargs) -> ListStreamsOutput:
        return self._invoke("ListStreams", request, kwargs)

    def list_tags_for_stream(
        self, request: ListTagsForStreamInput = None, **kwargs
    ) -> ListTagsForStreamOutput:
        return self._invoke("ListTagsForStream", request, kwargs)

    def merge_shards(self, request: MergeShardsInput = None, **kwargs) -> NoPayload:
        return self._invoke("MergeShards", request, kwargs)

    def put_record(self, request: PutRecordInput = None, **kwargs) -> PutRecordOutput:
        return self._invoke("PutRecord", request, kwargs)

    def put_records(self, request: PutRecordsInput = None, **kwargs) -> PutRecordsOutput:
        return self._invoke("PutRecords", request, kwargs)

    def register_stream_consumer(
        self, request: RegisterStreamConsumerInput = None, **kwargs
    ) -> RegisterStreamConsumerOutput:
        return self._invoke("RegisterStreamConsumer", request, kwargs)

    def remove_tags_from_stream(
        self, request: RemoveTagsFromStreamInput = None, **kwargs
    ) -> NoPayload:
        return self._invoke("RemoveTagsFromStream", request, kwargs)

    def split_shard(self, request: SplitShardInput = None, **kwargs) -> NoPayload:
        return self._invoke("SplitShard", request, kwargs)

    def start_stream_encryption(
        self, request: StartStreamEncryptionInput = None, **kwargs
    ) -> NoPayload:
        return self._invoke("StartStreamEncryption", request, kwargs)

    def stop_stream_encryption(
        self, request: StopStreamEncryptionInput = None, **kwargs
    ) -> NoPayload:
        return self._invoke("StopStreamEncryption", request, kwargs)

    def update_shard_count(
        self, request: UpdateShardCountInput = None, **kwargs
    ) -> UpdateShardCountOutput:
        return self._invoke("UpdateShardCount", request, kwargs)

    def update_stream_mode(self, request: UpdateStreamModeInput = None, **kwargs) -> NoPayload:
        return self._invoke("UpdateStreamMode", request, kwargs)

    def close(self):
        self.service_client.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


def get_failed_records(
    request_records: Sequence[PutRecordsRequestEntry], output: PutRecordsOutput
) -> List[Tuple[PutRecordsRequestEntry, PutRecordsResultEntry]]:
    """
    Returns the records of a ``PutRecords`` call which were rejected by the service, each paired with the
    entry of the result at the same position, f.e. to put them again.

    :param request_records: the ``Records`` of the request
    :param output: the output of the call
    :return: list of (request entry, result entry) tuples for all result entries carrying an ``ErrorCode``
    :raises ValueError: if the number of result entries does not match the number of request entries
    """
    results = output.get("Records") or []
    if len(results) != len(request_records):
        raise ValueError(
            "PutRecords returned %s result entries for %s records"
            % (len(results), len(request_records))
        )
    return [
        (entry, result)
        for entry, result in zip(request_records, results)
        if result.get("ErrorCode")
    ]
