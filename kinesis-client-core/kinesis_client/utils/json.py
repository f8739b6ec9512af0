import json
from datetime import date, datetime

from kinesis_client.utils.strings import base64_encode


class CustomEncoder(json.JSONEncoder):
    """Helper class to convert JSON documents with datetime or bytes (as they are contained in parsed
    service responses)."""

    def default(self, o):
        if isinstance(o, (datetime, date)):
            return o.isoformat()
        if isinstance(o, (bytes, bytearray)):
            try:
                return bytes(o).decode("utf-8")
            except UnicodeDecodeError:
                return base64_encode(bytes(o))
        return super(CustomEncoder, self).default(o)


def json_safe_dumps(doc, indent: int = None) -> str:
    """Serializes the given document using the ``CustomEncoder``."""
    return json.dumps(doc, cls=CustomEncoder, indent=indent)
