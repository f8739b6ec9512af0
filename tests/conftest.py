import json
import threading
from typing import Callable, Dict, List, NamedTuple, Optional

import pytest
from werkzeug import Request, Response
from werkzeug.serving import make_server

from kinesis_client.aws.api.kinesis import EXCEPTIONS
from kinesis_client.aws.client import ServiceClient
from kinesis_client.aws.spec import load_service
from kinesis_client.http.client import HttpClient
from kinesis_client.services.kinesis.client import KinesisClient

TEST_ENDPOINT_URL = "https://kinesis.us-east-1.amazonaws.com"


class RecordedRequest(NamedTuple):
    method: str
    url: str
    headers: Dict[str, str]
    data: bytes

    @property
    def json(self) -> dict:
        return json.loads(self.data)


def json_response(
    body: Optional[dict] = None, status: int = 200, headers: Dict[str, str] = None
) -> Response:
    return Response(
        json.dumps(body) if body is not None else "",
        status=status,
        headers=headers,
        content_type="application/x-amz-json-1.1",
    )


class InMemoryHttpClient(HttpClient):
    """HttpClient which records the requests and returns queued responses (an empty JSON object by default)."""

    def __init__(self):
        self.requests: List[RecordedRequest] = []
        self.responses: List[Response] = []
        self.closed = False

    def respond(self, body: Optional[dict] = None, status: int = 200, headers=None):
        self.responses.append(json_response(body, status, headers))

    def request(self, method, url, headers=None, data=None) -> Response:
        self.requests.append(RecordedRequest(method, url, dict(headers or {}), data))
        if self.responses:
            return self.responses.pop(0)
        return json_response({})

    def close(self):
        self.closed = True

    @property
    def last_request(self) -> RecordedRequest:
        return self.requests[-1]


@pytest.fixture
def http_client() -> InMemoryHttpClient:
    return InMemoryHttpClient()


@pytest.fixture
def service_client(http_client) -> ServiceClient:
    return ServiceClient(load_service("kinesis"), TEST_ENDPOINT_URL, http_client, exceptions=EXCEPTIONS)


@pytest.fixture
def kinesis(service_client) -> KinesisClient:
    return KinesisClient(service_client)


@pytest.fixture
def serve_wsgi():
    """Factory fixture which serves a WSGI app on a random local port and returns its URL."""
    servers = []

    def _serve(app: Callable) -> str:
        server = make_server("127.0.0.1", 0, app, threaded=True)
        thread = threading.Thread(target=server.serve_forever, daemon=True)
        thread.start()
        servers.append(server)
        return "http://127.0.0.1:%s" % server.server_port

    yield _serve

    for server in servers:
        server.shutdown()


@pytest.fixture
def recording_server(serve_wsgi):
    """Serves an app which records every request and answers with the configured response."""

    class _RecordingApp:
        def __init__(self):
            self.requests: List[RecordedRequest] = []
            self.response = json_response({})

        def __call__(self, environ, start_response):
            request = Request(environ)
            self.requests.append(
                RecordedRequest(
                    request.method, request.url, dict(request.headers), request.get_data()
                )
            )
            return self.response(environ, start_response)

    app = _RecordingApp()
    app.url = serve_wsgi(app)
    return app
