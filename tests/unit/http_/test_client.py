import socket
import time

import pytest
import requests
from botocore.auth import SigV4Auth
from botocore.credentials import Credentials, ReadOnlyCredentials
from werkzeug import Response

from kinesis_client.aws.api import TransportError
from kinesis_client.http.client import SigningHttpClient, SimpleRequestsClient
from tests.conftest import InMemoryHttpClient, json_response


def _unused_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


class TestSimpleRequestsClient:
    def test_post_request(self, recording_server):
        recording_server.response = json_response(
            {"StreamNames": ["s1"]}, headers={"x-amzn-RequestId": "req-1"}
        )

        with SimpleRequestsClient() as client:
            response = client.request(
                "POST",
                recording_server.url + "/",
                {"X-Amz-Target": "Kinesis_20131202.ListStreams"},
                b"{}",
            )

        assert response.status_code == 200
        assert response.get_json(force=True) == {"StreamNames": ["s1"]}
        assert response.headers["x-amzn-RequestId"] == "req-1"
        assert response.content_type == "application/x-amz-json-1.1"

        request = recording_server.requests[0]
        assert request.method == "POST"
        assert request.headers["X-Amz-Target"] == "Kinesis_20131202.ListStreams"
        assert request.headers["Accept-Encoding"] == "identity"
        assert request.data == b"{}"

    def test_error_status_is_returned(self, recording_server):
        recording_server.response = json_response(
            {"__type": "ResourceNotFoundException"}, status=400
        )

        response = SimpleRequestsClient().request("POST", recording_server.url + "/", {}, b"{}")

        assert response.status_code == 400
        assert response.get_json(force=True) == {"__type": "ResourceNotFoundException"}

    def test_one_request_per_call(self, recording_server):
        client = SimpleRequestsClient()

        client.request("POST", recording_server.url + "/", {}, b"{}")
        client.request("POST", recording_server.url + "/", {}, b"{}")

        assert len(recording_server.requests) == 2

    def test_connection_error_raises_transport_error(self):
        url = "http://127.0.0.1:%s/" % _unused_port()

        with pytest.raises(TransportError) as e:
            SimpleRequestsClient(timeout=2).request("POST", url, {}, b"{}")

        assert e.value.endpoint_url == url
        assert isinstance(e.value.__cause__, requests.exceptions.ConnectionError)

    def test_timeout_raises_transport_error(self, serve_wsgi):
        def _slow_app(environ, start_response):
            time.sleep(1)
            return Response(b"{}")(environ, start_response)

        url = serve_wsgi(_slow_app)

        with pytest.raises(TransportError) as e:
            SimpleRequestsClient(timeout=(1, 0.1)).request("POST", url + "/", {}, b"{}")

        assert isinstance(e.value.__cause__, requests.exceptions.Timeout)

    def test_verify_flag_is_set_on_session(self):
        client = SimpleRequestsClient(verify=False)
        assert client.session.verify is False

    def test_uses_given_session(self):
        session = requests.Session()
        assert SimpleRequestsClient(session=session).session is session

    def test_close_closes_session(self):
        class _Session(requests.Session):
            closed = False

            def close(self):
                self.closed = True
                super().close()

        session = _Session()
        SimpleRequestsClient(session=session).close()
        assert session.closed


class TestSigningHttpClient:
    def test_signs_request(self):
        delegate = InMemoryHttpClient()
        signer = SigV4Auth(Credentials("AKID", "SECRET"), "kinesis", "eu-west-1")
        client = SigningHttpClient(signer, delegate)

        client.request(
            "POST",
            "https://kinesis.eu-west-1.amazonaws.com/",
            {"X-Amz-Target": "Kinesis_20131202.ListStreams"},
            b"{}",
        )

        request = delegate.last_request
        assert request.method == "POST"
        assert request.url == "https://kinesis.eu-west-1.amazonaws.com/"
        assert request.data == b"{}"
        assert request.headers["X-Amz-Target"] == "Kinesis_20131202.ListStreams"
        authorization = request.headers["Authorization"]
        assert authorization.startswith("AWS4-HMAC-SHA256 Credential=AKID/")
        assert "/eu-west-1/kinesis/aws4_request" in authorization
        assert "x-amz-target" in authorization
        assert "X-Amz-Date" in request.headers
        assert "X-Amz-Security-Token" not in request.headers

    def test_session_token_is_sent(self):
        delegate = InMemoryHttpClient()
        signer = SigV4Auth(Credentials("AKID", "SECRET", "TOKEN"), "kinesis", "us-east-1")

        SigningHttpClient(signer, delegate).request(
            "POST", "https://kinesis.us-east-1.amazonaws.com/", {}, b"{}"
        )

        assert delegate.last_request.headers["X-Amz-Security-Token"] == "TOKEN"

    def test_signed_request_reaches_server(self, recording_server):
        signer = SigV4Auth(Credentials("AKID", "SECRET"), "kinesis", "us-east-1")

        with SigningHttpClient(signer, SimpleRequestsClient()) as client:
            client.request("POST", recording_server.url + "/", {}, b'{"Limit": 1}')

        request = recording_server.requests[0]
        assert request.headers["Authorization"].startswith("AWS4-HMAC-SHA256")
        assert request.data == b'{"Limit": 1}'

    def test_close_closes_delegate(self):
        delegate = InMemoryHttpClient()
        signer = SigV4Auth(Credentials("AKID", "SECRET"), "kinesis", "us-east-1")

        SigningHttpClient(signer, delegate).close()

        assert delegate.closed

    def test_each_request_is_signed_with_frozen_credentials(self):
        class _RotatingCredentials(Credentials):
            def __init__(self):
                super().__init__("AKID0", "SECRET")
                self.generation = 0

            def get_frozen_credentials(self):
                self.generation += 1
                return ReadOnlyCredentials("AKID%d" % self.generation, "SECRET", None)

        delegate = InMemoryHttpClient()
        credentials = _RotatingCredentials()
        signer = SigV4Auth(credentials, "kinesis", "us-east-1")
        client = SigningHttpClient(signer, delegate)

        client.request("POST", "https://kinesis.us-east-1.amazonaws.com/", {}, b"{}")
        client.request("POST", "https://kinesis.us-east-1.amazonaws.com/", {}, b"{}")

        first, second = delegate.requests
        assert first.headers["Authorization"].startswith("AWS4-HMAC-SHA256 Credential=AKID1/")
        assert second.headers["Authorization"].startswith("AWS4-HMAC-SHA256 Credential=AKID2/")
        assert signer.credentials is credentials
