import abc
import copy
import logging
from typing import Dict, Optional, Tuple, Union

import requests
from botocore.auth import BaseSigner
from botocore.awsrequest import AWSRequest
from werkzeug import Response
from werkzeug.datastructures import Headers

from kinesis_client.aws.api import TransportError

LOG = logging.getLogger(__name__)

Timeout = Union[float, Tuple[float, float]]


class HttpClient(abc.ABC):
    """
    An HTTP client that performs exactly one HTTP exchange per call and returns werkzeug's response object.
    """

    @abc.abstractmethod
    def request(
        self, method: str, url: str, headers: Dict[str, str] = None, data: bytes = None
    ) -> Response:
        """
        Make the given HTTP request as a client.

        :param method: the HTTP method, f.e. "POST"
        :param url: the absolute URL to send the request to
        :param headers: the request headers
        :param data: the request body
        :return: the response.
        :raises TransportError: if the exchange itself failed (connection, TLS or timeout errors)
        """
        raise NotImplementedError

    def close(self):
        """
        Close any underlying resources the client may need.
        """
        pass

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


class _VerifyRespectingSession(requests.Session):
    """
    A class which wraps requests.Session to circumvent https://github.com/psf/requests/issues/3829.
    This ensures that if `REQUESTS_CA_BUNDLE` or `CURL_CA_BUNDLE` are set, the request does not perform the TLS
    verification if `session.verify` is set to `False.
    """

    def merge_environment_settings(self, url, proxies, stream, verify, *args, **kwargs):
        if self.verify is False:
            verify = False

        return super(_VerifyRespectingSession, self).merge_environment_settings(
            url, proxies, stream, verify, *args, **kwargs
        )


class SimpleRequestsClient(HttpClient):
    """
    Sends requests through a (pooled) ``requests.Session``. The session is shared by all calls, which makes the client
    safe to use from multiple threads.
    """

    session: requests.Session
    timeout: Optional[Timeout]

    def __init__(
        self, session: requests.Session = None, timeout: Timeout = None, verify: bool = None
    ):
        self.session = session or _VerifyRespectingSession()
        self.timeout = timeout
        if verify is not None:
            self.session.verify = verify

    def request(
        self, method: str, url: str, headers: Dict[str, str] = None, data: bytes = None
    ) -> Response:
        headers = dict(headers or {})

        # urllib3 (used by requests) will set an Accept-Encoding header ("gzip,deflate") if none is given.
        # Explicitly set `Accept-Encoding: identity` to avoid any unused manipulations by underlying libraries.
        if not any(key.lower() == "accept-encoding" for key in headers):
            headers["Accept-Encoding"] = "identity"

        try:
            response = self.session.request(
                method=method,
                url=url,
                headers=headers,
                data=data,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise TransportError(
                "%s request to %s failed: %s" % (method, url, e), endpoint_url=url
            ) from e

        response_headers = Headers(dict(response.headers))
        # the body is already de-chunked and decoded by requests
        response_headers.pop("Transfer-Encoding", None)
        response_headers.pop("Content-Encoding", None)

        return Response(
            response=response.content,
            status=response.status_code,
            headers=response_headers,
        )

    def close(self):
        self.session.close()


class SigningHttpClient(HttpClient):
    """
    A wrapper around another ``HttpClient`` that uses botocore to sign HTTP requests using a
    ``botocore.auth.BaseSigner`` (f.e. ``SigV4Auth``) before they are sent.

    For example, to create a client which signs requests for Kinesis in us-east-1, run:

       signer = SigV4Auth(Credentials("AKIA...", "..."), "kinesis", "us-east-1")
       client = SigningHttpClient(signer, SimpleRequestsClient())
       client.request("POST", "https://kinesis.us-east-1.amazonaws.com/", headers, body)
    """

    def __init__(self, signer: BaseSigner, client: HttpClient = None):
        self.signer = signer
        self.client = client or SimpleRequestsClient()

    def request(
        self, method: str, url: str, headers: Dict[str, str] = None, data: bytes = None
    ) -> Response:
        request = self.sign(AWSRequest(method=method, url=url, data=data, headers=headers))
        return self.client.request(
            request.method, request.url, dict(request.headers.items()), request.data
        )

    def sign(self, request: AWSRequest) -> AWSRequest:
        signer = self.signer
        credentials = getattr(signer, "credentials", None)
        if credentials is not None:
            # refreshable credentials must not change while a single request is signed
            signer = copy.copy(signer)
            signer.credentials = credentials.get_frozen_credentials()
        signer.add_auth(request)
        return request

    def close(self):
        self.client.close()
