from datetime import datetime, timezone

import pytest
from werkzeug import Response

from kinesis_client.aws.api import CommonServiceException
from kinesis_client.aws.api.kinesis import (
    EXCEPTIONS,
    ExpiredIteratorException,
    ProvisionedThroughputExceededException,
    ResourceNotFoundException,
)
from kinesis_client.aws.protocol.parser import JSONResponseParser, ProtocolParserError
from kinesis_client.aws.spec import load_service
from tests.conftest import json_response


@pytest.fixture
def parser():
    return JSONResponseParser(EXCEPTIONS)


def _operation(name: str):
    return load_service("kinesis").operation_model(name)


class TestParseSuccess:
    def test_put_record(self, parser):
        response = json_response({"SequenceNumber": "100", "ShardId": "shardId-0"})

        result = parser.parse(response, _operation("PutRecord"))

        assert result["SequenceNumber"] == "100"
        assert result["ShardId"] == "shardId-0"
        assert result["EncryptionType"] == ""

    def test_absent_members_take_zero_values(self, parser):
        result = parser.parse(json_response({"Records": []}), _operation("PutRecords"))
        assert result["FailedRecordCount"] == 0
        assert result["Records"] == []

        result = parser.parse(json_response({}), _operation("PutRecord"))
        assert result["SequenceNumber"] == ""
        assert result["ShardId"] == ""

        result = parser.parse(json_response({}), _operation("ListStreams"))
        assert result["StreamNames"] == []
        assert result["HasMoreStreams"] is False

    def test_absent_nested_members_take_zero_values(self, parser):
        response = json_response(
            {
                "Records": [
                    {"SequenceNumber": "1", "ShardId": "shardId-0"},
                    {"ErrorCode": "InternalFailure", "ErrorMessage": "Internal service failure."},
                ]
            }
        )

        first, second = parser.parse(response, _operation("PutRecords"))["Records"]

        assert first["ErrorCode"] == ""
        assert first["ErrorMessage"] == ""
        assert second["SequenceNumber"] == ""
        assert second["ShardId"] == ""

    def test_absent_structures_and_timestamps_stay_absent(self, parser):
        result = parser.parse(json_response({}), _operation("DescribeStream"))
        assert "StreamDescription" not in result

        response = json_response({"Records": [{"SequenceNumber": "1", "PartitionKey": "k"}]})
        (record,) = parser.parse(response, _operation("GetRecords"))["Records"]
        assert record["Data"] == b""
        assert "ApproximateArrivalTimestamp" not in record

    def test_unknown_members_are_ignored(self, parser):
        response = json_response({"ShardIterator": "AAA", "SomethingNew": {"a": 1}})
        assert parser.parse(response, _operation("GetShardIterator")) == {"ShardIterator": "AAA"}

    def test_null_members_take_zero_values(self, parser):
        response = json_response({"Records": [], "NextShardIterator": None})

        result = parser.parse(response, _operation("GetRecords"))

        assert result["Records"] == []
        assert result["NextShardIterator"] == ""
        assert result["MillisBehindLatest"] == 0

    def test_empty_body(self, parser):
        result = parser.parse(Response(b"", status=200), _operation("ListStreams"))
        assert result["StreamNames"] == []
        assert result["HasMoreStreams"] is False

        assert parser.parse(Response(b"", status=200), _operation("GetShardIterator")) == {
            "ShardIterator": ""
        }

    def test_blobs_and_timestamps(self, parser):
        response = json_response(
            {
                "Records": [
                    {
                        "SequenceNumber": "1",
                        "Data": "AP8Q",
                        "PartitionKey": "k",
                        "ApproximateArrivalTimestamp": 1577836800.5,
                    },
                    {"SequenceNumber": "2", "Data": "", "PartitionKey": "k"},
                ],
                "NextShardIterator": "next",
                "MillisBehindLatest": 0,
            }
        )

        result = parser.parse(response, _operation("GetRecords"))

        first, second = result["Records"]
        assert first["Data"] == b"\x00\xff\x10"
        assert first["ApproximateArrivalTimestamp"] == datetime(
            2020, 1, 1, 0, 0, 0, 500000, tzinfo=timezone.utc
        )
        assert first["ApproximateArrivalTimestamp"].tzinfo is not None
        assert second["Data"] == b""
        assert "ApproximateArrivalTimestamp" not in second
        assert result["NextShardIterator"] == "next"
        assert result["MillisBehindLatest"] == 0

    def test_nested_structures(self, parser):
        response = json_response(
            {
                "StreamDescription": {
                    "StreamName": "s1",
                    "StreamARN": "arn:aws:kinesis:us-east-1:000000000000:stream/s1",
                    "StreamStatus": "ACTIVE",
                    "Shards": [
                        {
                            "ShardId": "shardId-000000000000",
                            "HashKeyRange": {"StartingHashKey": "0", "EndingHashKey": "1"},
                            "SequenceNumberRange": {"StartingSequenceNumber": "1"},
                        }
                    ],
                    "HasMoreShards": False,
                    "RetentionPeriodHours": 24,
                    "StreamCreationTimestamp": 1577836800,
                    "EnhancedMonitoring": [{"ShardLevelMetrics": []}],
                }
            }
        )

        result = parser.parse(response, _operation("DescribeStream"))

        description = result["StreamDescription"]
        assert description["StreamStatus"] == "ACTIVE"
        assert description["HasMoreShards"] is False
        shard = description["Shards"][0]
        assert shard["HashKeyRange"] == {"StartingHashKey": "0", "EndingHashKey": "1"}
        assert shard["ParentShardId"] == ""
        assert shard["SequenceNumberRange"] == {
            "StartingSequenceNumber": "1",
            "EndingSequenceNumber": "",
        }
        assert description["StreamCreationTimestamp"] == datetime(2020, 1, 1, tzinfo=timezone.utc)

    def test_list_tags(self, parser):
        response = json_response(
            {"Tags": [{"Key": "a", "Value": "1"}, {"Key": "b"}], "HasMoreTags": False}
        )
        result = parser.parse(response, _operation("ListTagsForStream"))
        assert result == {
            "Tags": [{"Key": "a", "Value": "1"}, {"Key": "b", "Value": ""}],
            "HasMoreTags": False,
        }

    def test_malformed_json_raises(self, parser):
        with pytest.raises(ProtocolParserError):
            parser.parse(Response(b"{not json", status=200), _operation("ListStreams"))

    def test_non_object_json_raises(self, parser):
        with pytest.raises(ProtocolParserError):
            parser.parse(Response(b"[1, 2]", status=200), _operation("ListStreams"))

    def test_invalid_base64_raises(self, parser):
        response = json_response(
            {"Records": [{"SequenceNumber": "1", "Data": "!!!", "PartitionKey": "k"}]}
        )
        with pytest.raises(ProtocolParserError):
            parser.parse(response, _operation("GetRecords"))

    def test_wrong_container_type_raises(self, parser):
        with pytest.raises(ProtocolParserError):
            parser.parse(json_response({"StreamNames": "s1"}), _operation("ListStreams"))


class TestParseError:
    def test_modeled_error(self, parser):
        response = json_response(
            {"__type": "ResourceNotFoundException", "message": "Stream missing not found"},
            status=400,
            headers={"x-amzn-RequestId": "req-1"},
        )

        exception = parser.parse_error(response)

        assert isinstance(exception, ResourceNotFoundException)
        assert exception.code == "ResourceNotFoundException"
        assert exception.message == "Stream missing not found"
        assert exception.status_code == 400
        assert exception.request_id == "req-1"
        assert str(exception) == "ResourceNotFoundException: Stream missing not found"

    def test_namespaced_type(self, parser):
        response = json_response(
            {
                "__type": "com.amazonaws.kinesis.v20131202#ExpiredIteratorException",
                "message": "Iterator expired",
            },
            status=400,
        )

        exception = parser.parse_error(response)

        assert isinstance(exception, ExpiredIteratorException)
        assert exception.message == "Iterator expired"

    def test_capitalized_message(self, parser):
        response = json_response(
            {"__type": "ProvisionedThroughputExceededException", "Message": "Slow down"},
            status=400,
        )

        exception = parser.parse_error(response)

        assert isinstance(exception, ProvisionedThroughputExceededException)
        assert exception.message == "Slow down"

    def test_type_from_header(self, parser):
        response = Response(
            b"",
            status=400,
            headers={
                "X-Amzn-ErrorType": "ResourceNotFoundException:http://internal.amazon.com/coral/"
            },
        )

        exception = parser.parse_error(response)

        assert isinstance(exception, ResourceNotFoundException)
        assert exception.message == ""

    def test_unknown_code(self, parser):
        response = json_response(
            {"__type": "UnrecognizedClientException", "message": "The security token is invalid"},
            status=403,
        )

        exception = parser.parse_error(response)

        assert type(exception) is CommonServiceException
        assert exception.code == "UnrecognizedClientException"
        assert exception.message == "The security token is invalid"
        assert exception.status_code == 403
        assert exception.sender_fault

    def test_server_error_without_body(self, parser):
        exception = parser.parse_error(Response(b"<html>Bad Gateway</html>", status=502))

        assert isinstance(exception, CommonServiceException)
        assert exception.code == "502"
        assert exception.status_code == 502
        assert not exception.sender_fault

    def test_additional_members_are_attached(self, parser):
        response = json_response(
            {"__type": "LimitExceededException", "message": "too many", "retryAfter": 3},
            status=400,
        )

        exception = parser.parse_error(response, load_service("kinesis"))

        assert exception.code == "LimitExceededException"
        assert exception.details == {"retryAfter": 3}

    def test_without_exception_registry(self):
        response = json_response({"__type": "ResourceNotFoundException", "message": "x"}, status=400)

        exception = JSONResponseParser().parse_error(response)

        assert isinstance(exception, CommonServiceException)
        assert exception.code == "ResourceNotFoundException"
