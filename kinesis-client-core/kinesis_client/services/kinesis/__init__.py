from kinesis_client.services.kinesis.client import KinesisClient, get_failed_records

__all__ = ["KinesisClient", "get_failed_records"]
