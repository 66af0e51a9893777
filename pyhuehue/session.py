"""HTTPS session with a Hue bridge."""
from __future__ import annotations

import json
import logging
from typing import Any

import urllib3

from .exceptions import (
    HTTPException,
    HTTPNotOkException,
    InvalidResponseError,
    UnauthorizedException,
)
from .util import get_ca_certs

LOG = logging.getLogger(__name__)

APPLICATION_KEY_HEADER = "hue-application-key"


class Session:
    """HTTPS session with a bridge.

    The Session provides timeouts and retries by default. Requests that are
    refused with 429 or 503 (the bridge throttles clients that send more
    than about ten light commands per second) are retried with backoff.

    The bridge serves a certificate signed by the Hue root CA whose common
    name is the bridge id rather than its address. The certificate is
    verified against the bundled Hue root CA without checking the hostname.
    Another bundle can be given with the `ca_certs` argument or the
    `PYHUEHUE_CA_CERTS` environment variable. Passing `ca_certs=""`
    disables verification.
    """

    # Retry strategy for requests that fail. POST is not retried since it
    # is used to create application keys.
    retries = urllib3.Retry(
        total=3,
        backoff_factor=0.5,
        status_forcelist=(429, 503),
        raise_on_status=False,
    )

    # Seconds that a request can be idle before retrying.
    timeout = 3.0

    def __init__(
        self,
        host: str,
        application_key: str | None = None,
        retries: int | urllib3.Retry | None = None,
        timeout: float | None = None,
        ca_certs: str | None = None,
    ) -> None:
        """Create a session with the specified default parameters."""
        self.host = host
        self.application_key = application_key
        if retries is not None:
            self.retries = retries
        if timeout is not None:
            self.timeout = timeout
        self.ca_certs = ca_certs if ca_certs is not None else get_ca_certs()

    def url(self, path: str) -> str:
        """Build an absolute URL from a path."""
        return f"https://{self.host}/{path.lstrip('/')}"

    def _tls_options(self) -> dict[str, Any]:
        if self.ca_certs:
            return {
                "cert_reqs": "CERT_REQUIRED",
                "ca_certs": self.ca_certs,
                "assert_hostname": False,
            }
        urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)
        return {"cert_reqs": "CERT_NONE"}

    def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        retries: int | urllib3.Retry | None = None,
        timeout: float | None = None,
    ) -> Any:
        """Send a request and return the decoded JSON response.

        Args:
            method: HTTP method/verb to use for request (ex: 'GET' or 'PUT').
            path: Path on the bridge, e.g. 'clip/v2/resource/light'.
            body: Object sent as the JSON request body.
            retries: Number of retries, or urllib3.Retry instance.
            timeout: Timeout in seconds for each request attempt.

        Raises:
            UnauthorizedException: when the status is 401 or 403.
            HTTPNotOkException: for any other status outside of 2xx.
            HTTPException: for any urllib3 exception.
            InvalidResponseError: when the body is not JSON.
        """
        if retries is None:
            retries = self.retries
        if timeout is None:
            timeout = self.timeout

        url = self.url(path)
        headers = {}
        if self.application_key:
            headers[APPLICATION_KEY_HEADER] = self.application_key
        kwargs: dict[str, Any] = {"headers": headers}
        if body is not None:
            kwargs["json"] = body

        LOG.debug("%s %s %s", method, url, body)
        with urllib3.PoolManager(
            retries=retries, timeout=timeout, **self._tls_options()
        ) as pool:
            try:
                response = pool.request(method, url, **kwargs)
            except urllib3.exceptions.HTTPError as err:
                raise HTTPException(err) from err

        if response.status in (401, 403):
            raise UnauthorizedException(
                f"Received status {response.status} for {url}",
                response.status,
            )
        if not 200 <= response.status < 300:
            raise HTTPNotOkException(
                f"Received status {response.status} for {url}: "
                f"{response.data[:200]!r}",
                response.status,
            )
        if not response.data:
            return {}
        try:
            return json.loads(response.data)
        except ValueError as err:
            raise InvalidResponseError(
                f"Invalid JSON from {url}: {response.data[:200]!r}"
            ) from err

    def get_json(self, path: str, **kwargs: Any) -> Any:
        """HTTP GET request."""
        return self.request('GET', path, **kwargs)

    def put_json(self, path: str, body: Any, **kwargs: Any) -> Any:
        """HTTP PUT request."""
        return self.request('PUT', path, body=body, **kwargs)

    def post_json(self, path: str, body: Any, **kwargs: Any) -> Any:
        """HTTP POST request."""
        return self.request('POST', path, body=body, **kwargs)
