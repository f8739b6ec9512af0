import base64
from typing import Union

from kinesis_client.constants import DEFAULT_ENCODING


def to_str(obj: Union[str, bytes], encoding: str = DEFAULT_ENCODING, errors="strict") -> str:
    """If ``obj`` is an instance of ``binary_type``, return
    ``obj.decode(encoding, errors)``, otherwise return ``obj``"""
    return obj.decode(encoding, errors) if isinstance(obj, bytes) else obj


def to_bytes(obj: Union[str, bytes], encoding: str = DEFAULT_ENCODING, errors="strict") -> bytes:
    """If ``obj`` is an instance of ``text_type``, return
    ``obj.encode(encoding, errors)``, otherwise return ``obj``"""
    return obj.encode(encoding, errors) if isinstance(obj, str) else obj


def truncate(data: str, max_length: int = 100) -> str:
    data = str(data or "")
    return ("%s..." % data[:max_length]) if len(data) > max_length else data


def base64_encode(data: Union[str, bytes]) -> str:
    """Base64-encodes the given str (encoded with the default encoding first) or bytes into a str."""
    return to_str(base64.b64encode(to_bytes(data)))


def base64_decode(data: Union[str, bytes]) -> bytes:
    """Decodes the given base64 str or bytes. Raises ``binascii.Error`` on invalid input."""
    return base64.b64decode(to_bytes(data), validate=True)
