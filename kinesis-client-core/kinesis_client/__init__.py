from kinesis_client.version import __version__

__all__ = ["__version__"]
