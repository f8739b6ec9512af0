from datetime import datetime
from typing import Dict, List, Optional, Type, TypedDict

from kinesis_client.aws.api import (
    OperationDescriptor,
    ServiceException,
    ServiceRequest,
    create_operation_table,
)

BooleanObject = bool
ConsumerARN = str
ConsumerCountObject = int
ConsumerName = str
DescribeStreamInputLimit = int
ErrorCode = str
ErrorMessage = str
GetRecordsInputLimit = int
HashKey = str
KeyId = str
ListShardsInputLimit = int
ListStreamConsumersInputLimit = int
ListStreamsInputLimit = int
ListTagsForStreamInputLimit = int
NextToken = str
OnDemandStreamCountLimitObject = int
OnDemandStreamCountObject = int
PartitionKey = str
PositiveIntegerObject = int
RetentionPeriodHours = int
SequenceNumber = str
ShardCountObject = int
ShardId = str
ShardIterator = str
StreamARN = str
StreamName = str
TagKey = str
TagValue = str


class ConsumerStatus(str):
    CREATING = "CREATING"
    DELETING = "DELETING"
    ACTIVE = "ACTIVE"


class EncryptionType(str):
    NONE = "NONE"
    KMS = "KMS"


class MetricsName(str):
    IncomingBytes = "IncomingBytes"
    IncomingRecords = "IncomingRecords"
    OutgoingBytes = "OutgoingBytes"
    OutgoingRecords = "OutgoingRecords"
    WriteProvisionedThroughputExceeded = "WriteProvisionedThroughputExceeded"
    ReadProvisionedThroughputExceeded = "ReadProvisionedThroughputExceeded"
    IteratorAgeMilliseconds = "IteratorAgeMilliseconds"
    ALL = "ALL"


class ScalingType(str):
    UNIFORM_SCALING = "UNIFORM_SCALING"


class ShardFilterType(str):
    AFTER_SHARD_ID = "AFTER_SHARD_ID"
    AT_TRIM_HORIZON = "AT_TRIM_HORIZON"
    FROM_TRIM_HORIZON = "FROM_TRIM_HORIZON"
    AT_LATEST = "AT_LATEST"
    AT_TIMESTAMP = "AT_TIMESTAMP"
    FROM_TIMESTAMP = "FROM_TIMESTAMP"


class ShardIteratorType(str):
    AT_SEQUENCE_NUMBER = "AT_SEQUENCE_NUMBER"
    AFTER_SEQUENCE_NUMBER = "AFTER_SEQUENCE_NUMBER"
    TRIM_HORIZON = "TRIM_HORIZON"
    LATEST = "LATEST"
    AT_TIMESTAMP = "AT_TIMESTAMP"


class StreamMode(str):
    PROVISIONED = "PROVISIONED"
    ON_DEMAND = "ON_DEMAND"


class StreamStatus(str):
    CREATING = "CREATING"
    DELETING = "DELETING"
    ACTIVE = "ACTIVE"
    UPDATING = "UPDATING"


class AccessDeniedException(ServiceException):
    code: str = "AccessDeniedException"
    sender_fault: bool = False
    status_code: int = 400


class ExpiredIteratorException(ServiceException):
    code: str = "ExpiredIteratorException"
    sender_fault: bool = False
    status_code: int = 400


class ExpiredNextTokenException(ServiceException):
    code: str = "ExpiredNextTokenException"
    sender_fault: bool = False
    status_code: int = 400


class InternalFailureException(ServiceException):
    code: str = "InternalFailureException"
    sender_fault: bool = False
    status_code: int = 500


class InvalidArgumentException(ServiceException):
    code: str = "InvalidArgumentException"
    sender_fault: bool = False
    status_code: int = 400


class KMSAccessDeniedException(ServiceException):
    code: str = "KMSAccessDeniedException"
    sender_fault: bool = False
    status_code: int = 400


class KMSDisabledException(ServiceException):
    code: str = "KMSDisabledException"
    sender_fault: bool = False
    status_code: int = 400


class KMSInvalidStateException(ServiceException):
    code: str = "KMSInvalidStateException"
    sender_fault: bool = False
    status_code: int = 400


class KMSNotFoundException(ServiceException):
    code: str = "KMSNotFoundException"
    sender_fault: bool = False
    status_code: int = 400


class KMSOptInRequired(ServiceException):
    code: str = "KMSOptInRequired"
    sender_fault: bool = False
    status_code: int = 400


class KMSThrottlingException(ServiceException):
    code: str = "KMSThrottlingException"
    sender_fault: bool = False
    status_code: int = 400


class LimitExceededException(ServiceException):
    code: str = "LimitExceededException"
    sender_fault: bool = False
    status_code: int = 400


class ProvisionedThroughputExceededException(ServiceException):
    code: str = "ProvisionedThroughputExceededException"
    sender_fault: bool = False
    status_code: int = 400


class ResourceInUseException(ServiceException):
    code: str = "ResourceInUseException"
    sender_fault: bool = False
    status_code: int = 400


class ResourceNotFoundException(ServiceException):
    code: str = "ResourceNotFoundException"
    sender_fault: bool = False
    status_code: int = 400


class ValidationException(ServiceException):
    code: str = "ValidationException"
    sender_fault: bool = False
    status_code: int = 400


EXCEPTIONS: Dict[str, Type[ServiceException]] = {
    exception.code: exception
    for exception in [
        AccessDeniedException,
        ExpiredIteratorException,
        ExpiredNextTokenException,
        InternalFailureException,
        InvalidArgumentException,
        KMSAccessDeniedException,
        KMSDisabledException,
        KMSInvalidStateException,
        KMSNotFoundException,
        KMSOptInRequired,
        KMSThrottlingException,
        LimitExceededException,
        ProvisionedThroughputExceededException,
        ResourceInUseException,
        ResourceNotFoundException,
        ValidationException,
    ]
}

TagMap = Dict[TagKey, TagValue]


class AddTagsToStreamInput(ServiceRequest, total=False):
    StreamName: Optional[StreamName]
    Tags: TagMap
    StreamARN: Optional[StreamARN]


class HashKeyRange(TypedDict, total=False):
    StartingHashKey: HashKey
    EndingHashKey: HashKey


ShardIdList = List[ShardId]


class ChildShard(TypedDict, total=False):
    ShardId: ShardId
    ParentShards: ShardIdList
    HashKeyRange: HashKeyRange


ChildShardList = List[ChildShard]
Timestamp = datetime


class Consumer(TypedDict, total=False):
    ConsumerName: ConsumerName
    ConsumerARN: ConsumerARN
    ConsumerStatus: ConsumerStatus
    ConsumerCreationTimestamp: Timestamp


class ConsumerDescription(TypedDict, total=False):
    ConsumerName: ConsumerName
    ConsumerARN: ConsumerARN
    ConsumerStatus: ConsumerStatus
    ConsumerCreationTimestamp: Timestamp
    StreamARN: StreamARN


ConsumerList = List[Consumer]


class StreamModeDetails(TypedDict, total=False):
    StreamMode: StreamMode


class CreateStreamInput(ServiceRequest, total=False):
    StreamName: StreamName
    ShardCount: Optional[PositiveIntegerObject]
    StreamModeDetails: Optional[StreamModeDetails]


Data = bytes


class DecreaseStreamRetentionPeriodInput(ServiceRequest, total=False):
    StreamName: Optional[StreamName]
    RetentionPeriodHours: RetentionPeriodHours
    StreamARN: Optional[StreamARN]


class DeleteStreamInput(ServiceRequest, total=False):
    StreamName: Optional[StreamName]
    EnforceConsumerDeletion: Optional[BooleanObject]
    StreamARN: Optional[StreamARN]


class DeregisterStreamConsumerInput(ServiceRequest, total=False):
    StreamARN: Optional[StreamARN]
    ConsumerName: Optional[ConsumerName]
    ConsumerARN: Optional[ConsumerARN]


class DescribeLimitsInput(ServiceRequest, total=False):
    pass


class DescribeLimitsOutput(TypedDict, total=False):
    ShardLimit: ShardCountObject
    OpenShardCount: ShardCountObject
    OnDemandStreamCount: OnDemandStreamCountObject
    OnDemandStreamCountLimit: OnDemandStreamCountLimitObject


class DescribeStreamConsumerInput(ServiceRequest, total=False):
    StreamARN: Optional[StreamARN]
    ConsumerName: Optional[ConsumerName]
    ConsumerARN: Optional[ConsumerARN]


class DescribeStreamConsumerOutput(TypedDict, total=False):
    ConsumerDescription: ConsumerDescription


class DescribeStreamInput(ServiceRequest, total=False):
    StreamName: Optional[StreamName]
    Limit: Optional[DescribeStreamInputLimit]
    ExclusiveStartShardId: Optional[ShardId]
    StreamARN: Optional[StreamARN]


MetricsNameList = List[MetricsName]


class EnhancedMetrics(TypedDict, total=False):
    ShardLevelMetrics: Optional[MetricsNameList]


EnhancedMonitoringList = List[EnhancedMetrics]


class SequenceNumberRange(TypedDict, total=False):
    StartingSequenceNumber: SequenceNumber
    EndingSequenceNumber: Optional[SequenceNumber]


class Shard(TypedDict, total=False):
    ShardId: ShardId
    ParentShardId: Optional[ShardId]
    AdjacentParentShardId: Optional[ShardId]
    HashKeyRange: HashKeyRange
    SequenceNumberRange: SequenceNumberRange


ShardList = List[Shard]


class StreamDescription(TypedDict, total=False):
    StreamName: StreamName
    StreamARN: StreamARN
    StreamStatus: StreamStatus
    StreamModeDetails: Optional[StreamModeDetails]
    Shards: ShardList
    HasMoreShards: BooleanObject
    RetentionPeriodHours: RetentionPeriodHours
    StreamCreationTimestamp: Timestamp
    EnhancedMonitoring: EnhancedMonitoringList
    EncryptionType: Optional[EncryptionType]
    KeyId: Optional[KeyId]


class DescribeStreamOutput(TypedDict, total=False):
    StreamDescription: StreamDescription


class DescribeStreamSummaryInput(ServiceRequest, total=False):
    StreamName: Optional[StreamName]
    StreamARN: Optional[StreamARN]


class StreamDescriptionSummary(TypedDict, total=False):
    StreamName: StreamName
    StreamARN: StreamARN
    StreamStatus: StreamStatus
    StreamModeDetails: Optional[StreamModeDetails]
    RetentionPeriodHours: RetentionPeriodHours
    StreamCreationTimestamp: Timestamp
    EnhancedMonitoring: EnhancedMonitoringList
    EncryptionType: Optional[EncryptionType]
    KeyId: Optional[KeyId]
    OpenShardCount: ShardCountObject
    ConsumerCount: Optional[ConsumerCountObject]


class DescribeStreamSummaryOutput(TypedDict, total=False):
    StreamDescriptionSummary: StreamDescriptionSummary


class DisableEnhancedMonitoringInput(ServiceRequest, total=False):
    StreamName: Optional[StreamName]
    ShardLevelMetrics: MetricsNameList
    StreamARN: Optional[StreamARN]


class EnableEnhancedMonitoringInput(ServiceRequest, total=False):
    StreamName: Optional[StreamName]
    ShardLevelMetrics: MetricsNameList
    StreamARN: Optional[StreamARN]


class EnhancedMonitoringOutput(TypedDict, total=False):
    StreamName: Optional[StreamName]
    CurrentShardLevelMetrics: Optional[MetricsNameList]
    DesiredShardLevelMetrics: Optional[MetricsNameList]
    StreamARN: Optional[StreamARN]


class GetRecordsInput(ServiceRequest, total=False):
    ShardIterator: ShardIterator
    Limit: Optional[GetRecordsInputLimit]
    StreamARN: Optional[StreamARN]


MillisBehindLatest = int


class Record(TypedDict, total=False):
    SequenceNumber: SequenceNumber
    ApproximateArrivalTimestamp: Optional[Timestamp]
    Data: Data
    PartitionKey: PartitionKey
    EncryptionType: Optional[EncryptionType]


RecordList = List[Record]


class GetRecordsOutput(TypedDict, total=False):
    Records: RecordList
    NextShardIterator: Optional[ShardIterator]
    MillisBehindLatest: Optional[MillisBehindLatest]
    ChildShards: Optional[ChildShardList]


class GetShardIteratorInput(ServiceRequest, total=False):
    StreamName: Optional[StreamName]
    ShardId: ShardId
    ShardIteratorType: ShardIteratorType
    StartingSequenceNumber: Optional[SequenceNumber]
    Timestamp: Optional[Timestamp]
    StreamARN: Optional[StreamARN]


class GetShardIteratorOutput(TypedDict, total=False):
    ShardIterator: Optional[ShardIterator]


class IncreaseStreamRetentionPeriodInput(ServiceRequest, total=False):
    StreamName: Optional[StreamName]
    RetentionPeriodHours: RetentionPeriodHours
    StreamARN: Optional[StreamARN]


class ShardFilter(TypedDict, total=False):
    Type: ShardFilterType
    ShardId: Optional[ShardId]
    Timestamp: Optional[Timestamp]


class ListShardsInput(ServiceRequest, total=False):
    StreamName: Optional[StreamName]
    NextToken: Optional[NextToken]
    ExclusiveStartShardId: Optional[ShardId]
    MaxResults: Optional[ListShardsInputLimit]
    StreamCreationTimestamp: Optional[Timestamp]
    ShardFilter: Optional[ShardFilter]
    StreamARN: Optional[StreamARN]


class ListShardsOutput(TypedDict, total=False):
    Shards: Optional[ShardList]
    NextToken: Optional[NextToken]


class ListStreamConsumersInput(ServiceRequest, total=False):
    StreamARN: StreamARN
    NextToken: Optional[NextToken]
    MaxResults: Optional[ListStreamConsumersInputLimit]
    StreamCreationTimestamp: Optional[Timestamp]


class ListStreamConsumersOutput(TypedDict, total=False):
    Consumers: Optional[ConsumerList]
    NextToken: Optional[NextToken]


class ListStreamsInput(ServiceRequest, total=False):
    Limit: Optional[ListStreamsInputLimit]
    ExclusiveStartStreamName: Optional[StreamName]
    NextToken: Optional[NextToken]


class StreamSummary(TypedDict, total=False):
    StreamName: StreamName
    StreamARN: StreamARN
    StreamStatus: StreamStatus
    StreamModeDetails: Optional[StreamModeDetails]
    StreamCreationTimestamp: Optional[Timestamp]


StreamSummaryList = List[StreamSummary]
StreamNameList = List[StreamName]


class ListStreamsOutput(TypedDict, total=False):
    StreamNames: StreamNameList
    HasMoreStreams: BooleanObject
    NextToken: Optional[NextToken]
    StreamSummaries: Optional[StreamSummaryList]


class ListTagsForStreamInput(ServiceRequest, total=False):
    StreamName: Optional[StreamName]
    ExclusiveStartTagKey: Optional[TagKey]
    Limit: Optional[ListTagsForStreamInputLimit]
    StreamARN: Optional[StreamARN]


class Tag(TypedDict, total=False):
    Key: TagKey
    Value: Optional[TagValue]


TagList = List[Tag]


class ListTagsForStreamOutput(TypedDict, total=False):
    Tags: TagList
    HasMoreTags: BooleanObject


class MergeShardsInput(ServiceRequest, total=False):
    StreamName: Optional[StreamName]
    ShardToMerge: ShardId
    AdjacentShardToMerge: ShardId
    StreamARN: Optional[StreamARN]


class PutRecordInput(ServiceRequest, total=False):
    StreamName: Optional[StreamName]
    Data: Data
    PartitionKey: PartitionKey
    ExplicitHashKey: Optional[HashKey]
    SequenceNumberForOrdering: Optional[SequenceNumber]
    StreamARN: Optional[StreamARN]


class PutRecordOutput(TypedDict, total=False):
    ShardId: ShardId
    SequenceNumber: SequenceNumber
    EncryptionType: Optional[EncryptionType]


class PutRecordsRequestEntry(TypedDict, total=False):
    Data: Data
    ExplicitHashKey: Optional[HashKey]
    PartitionKey: PartitionKey


PutRecordsRequestEntryList = List[PutRecordsRequestEntry]


class PutRecordsInput(ServiceRequest, total=False):
    Records: PutRecordsRequestEntryList
    StreamName: Optional[StreamName]
    StreamARN: Optional[StreamARN]


class PutRecordsResultEntry(TypedDict, total=False):
    SequenceNumber: Optional[SequenceNumber]
    ShardId: Optional[ShardId]
    ErrorCode: Optional[ErrorCode]
    ErrorMessage: Optional[ErrorMessage]


PutRecordsResultEntryList = List[PutRecordsResultEntry]


class PutRecordsOutput(TypedDict, total=False):
    FailedRecordCount: Optional[PositiveIntegerObject]
    Records: PutRecordsResultEntryList
    EncryptionType: Optional[EncryptionType]


class RegisterStreamConsumerInput(ServiceRequest, total=False):
    StreamARN: StreamARN
    ConsumerName: ConsumerName


class RegisterStreamConsumerOutput(TypedDict, total=False):
    Consumer: Consumer


TagKeyList = List[TagKey]


class RemoveTagsFromStreamInput(ServiceRequest, total=False):
    StreamName: Optional[StreamName]
    TagKeys: TagKeyList
    StreamARN: Optional[StreamARN]


class SplitShardInput(ServiceRequest, total=False):
    StreamName: Optional[StreamName]
    ShardToSplit: ShardId
    NewStartingHashKey: HashKey
    StreamARN: Optional[StreamARN]


class StartStreamEncryptionInput(ServiceRequest, total=False):
    StreamName: Optional[StreamName]
    EncryptionType: EncryptionType
    KeyId: KeyId
    StreamARN: Optional[StreamARN]


class StopStreamEncryptionInput(ServiceRequest, total=False):
    StreamName: Optional[StreamName]
    EncryptionType: EncryptionType
    KeyId: KeyId
    StreamARN: Optional[StreamARN]


class UpdateShardCountInput(ServiceRequest, total=False):
    StreamName: Optional[StreamName]
    TargetShardCount: PositiveIntegerObject
    ScalingType: ScalingType
    StreamARN: Optional[StreamARN]


class UpdateShardCountOutput(TypedDict, total=False):
    StreamName: Optional[StreamName]
    CurrentShardCount: Optional[PositiveIntegerObject]
    TargetShardCount: Optional[PositiveIntegerObject]
    StreamARN: Optional[StreamARN]


class UpdateStreamModeInput(ServiceRequest, total=False):
    StreamARN: StreamARN
    StreamModeDetails: StreamModeDetails


OPERATIONS = create_operation_table(
    OperationDescriptor("AddTagsToStream", AddTagsToStreamInput),
    OperationDescriptor("CreateStream", CreateStreamInput),
    OperationDescriptor("DecreaseStreamRetentionPeriod", DecreaseStreamRetentionPeriodInput),
    OperationDescriptor("DeleteStream", DeleteStreamInput),
    OperationDescriptor("DeregisterStreamConsumer", DeregisterStreamConsumerInput),
    OperationDescriptor("DescribeLimits", DescribeLimitsInput, DescribeLimitsOutput),
    OperationDescriptor("DescribeStream", DescribeStreamInput, DescribeStreamOutput),
    OperationDescriptor(
        "DescribeStreamConsumer", DescribeStreamConsumerInput, DescribeStreamConsumerOutput
    ),
    OperationDescriptor(
        "DescribeStreamSummary", DescribeStreamSummaryInput, DescribeStreamSummaryOutput
    ),
    OperationDescriptor(
        "DisableEnhancedMonitoring", DisableEnhancedMonitoringInput, EnhancedMonitoringOutput
    ),
    OperationDescriptor(
        "EnableEnhancedMonitoring", EnableEnhancedMonitoringInput, EnhancedMonitoringOutput
    ),
    OperationDescriptor("GetRecords", GetRecordsInput, GetRecordsOutput),
    OperationDescriptor("GetShardIterator", GetShardIteratorInput, GetShardIteratorOutput),
    OperationDescriptor("IncreaseStreamRetentionPeriod", IncreaseStreamRetentionPeriodInput),
    OperationDescriptor("ListShards", ListShardsInput, ListShardsOutput),
    OperationDescriptor(
        "ListStreamConsumers", ListStreamConsumersInput, ListStreamConsumersOutput
    ),
    OperationDescriptor("ListStreams", ListStreamsInput, ListStreamsOutput),
    OperationDescriptor("ListTagsForStream", ListTagsForStreamInput, ListTagsForStreamOutput),
    OperationDescriptor("MergeShards", MergeShardsInput),
    OperationDescriptor("PutRecord", PutRecordInput, PutRecordOutput),
    OperationDescriptor("PutRecords", PutRecordsInput, PutRecordsOutput),
    OperationDescriptor(
        "RegisterStreamConsumer", RegisterStreamConsumerInput, RegisterStreamConsumerOutput
    ),
    OperationDescriptor("RemoveTagsFromStream", RemoveTagsFromStreamInput),
    OperationDescriptor("SplitShard", SplitShardInput),
    OperationDescriptor("StartStreamEncryption", StartStreamEncryptionInput),
    OperationDescriptor("StopStreamEncryption", StopStreamEncryptionInput),
    OperationDescriptor("UpdateShardCount", UpdateShardCountInput, UpdateShardCountOutput),
    OperationDescriptor("UpdateStreamMode", UpdateStreamModeInput),
)
