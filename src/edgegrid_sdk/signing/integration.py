"""
HTTP client integration for request signing

This module connects the EG1 signer to the ``requests`` library, so that
outbound requests carry an ``Authorization`` header computed from the
configured credentials.
"""

import logging
from pathlib import Path
from typing import Any, List, Optional, Union
from urllib.parse import urljoin, urlsplit

import requests
from requests.auth import AuthBase
from requests.models import PreparedRequest

from .types import Credentials, RequestDescriptor, SigningConfig
from .eg1_signer import EG1Signer
from ..exceptions import InvalidRequestError
from ..config.edgerc import CredentialStore, DEFAULT_SECTION, resolve_edgerc_path

logger = logging.getLogger(__name__)


class EdgeGridAuth(AuthBase):
    """
    ``requests`` authentication hook that signs each prepared request.

    Only requests addressed to ``credentials.host`` are signed. Signing errors
    propagate to the caller; an unsigned request is never sent.
    """

    def __init__(
        self,
        credentials: Credentials,
        headers_to_sign: Optional[List[str]] = None,
        config: Optional[SigningConfig] = None
    ):
        """
        Initialize the authentication hook.

        Args:
            credentials: Credentials to sign with
            headers_to_sign: Header names to include in every signature
            config: Optional signing configuration
        """
        self.credentials = credentials
        self.headers_to_sign = list(headers_to_sign or [])
        self.signer = EG1Signer(config)

    def __call__(self, request: PreparedRequest) -> PreparedRequest:
        descriptor = self.describe(request)
        request.headers['Authorization'] = self.signer.sign(descriptor, self.credentials)
        logger.debug(f"Signed {descriptor.method} request to {descriptor.path}")
        return request

    def signs_for(self, url: str) -> bool:
        """Return True if the URL is addressed to the signing host."""
        return urlsplit(url).netloc == self.credentials.host

    def describe(self, request: PreparedRequest) -> RequestDescriptor:
        """
        Build a request descriptor from a prepared request.

        Args:
            request: Prepared request about to be sent

        Returns:
            RequestDescriptor: Descriptor for the signer

        Raises:
            InvalidRequestError: If the request is addressed to another host,
                or a POST body is a stream that cannot be hashed
        """
        host = urlsplit(request.url).netloc

        if not self.signs_for(request.url):
            raise InvalidRequestError(
                f"Request host {host} does not match signing host {self.credentials.host}",
                {"request_host": host, "signing_host": self.credentials.host}
            )

        # Only POST bodies are hashed
        method = (request.method or '').upper()
        body = request.body if method == 'POST' else None

        if body is not None and not isinstance(body, (str, bytes)):
            raise InvalidRequestError(
                f"Cannot sign a streamed POST body ({type(body).__name__}); "
                f"pass the body as str or bytes",
                {"body_type": type(body).__name__}
            )

        return RequestDescriptor(
            method=request.method,
            path=request.path_url,
            host=host,
            headers_to_sign=self.headers_to_sign,
            headers=dict(request.headers),
            body=body
        )


class EdgeGridSession(requests.Session):
    """
    ``requests.Session`` that re-signs requests when following redirects.

    ``requests`` does not run ``session.auth`` again for a redirect, so the
    redirected request would carry a signature for the original path. A
    redirect to another host is sent without an Authorization header.
    """

    def rebuild_auth(self, prepared_request, response):
        super().rebuild_auth(prepared_request, response)

        auth = self.auth
        if isinstance(auth, EdgeGridAuth):
            prepared_request.headers.pop('Authorization', None)
            if auth.signs_for(prepared_request.url):
                prepared_request.prepare_auth(auth)


class SigningSession:
    """
    HTTP session wrapper that signs every request.

    Relative paths are resolved against ``https://<credentials.host>`` so
    that the connection host and the signing host are the same. URLs that
    point at any other host are rejected.

    Redirects are re-signed only when the wrapped session is an
    ``EdgeGridSession``; with a plain ``requests.Session`` pass
    ``allow_redirects=False``.
    """

    def __init__(
        self,
        credentials: Credentials,
        session: Optional[requests.Session] = None,
        headers_to_sign: Optional[List[str]] = None,
        config: Optional[SigningConfig] = None
    ):
        """
        Initialize signing session.

        Args:
            credentials: Credentials to sign with
            session: Optional existing requests session to wrap
                (an ``EdgeGridSession`` is created if None)
            headers_to_sign: Header names to include in every signature
            config: Optional signing configuration
        """
        self.credentials = credentials
        self.session = session or EdgeGridSession()
        self.auth = EdgeGridAuth(credentials, headers_to_sign, config)
        self.session.auth = self.auth
        self.base_url = f"https://{credentials.host}/"

    def build_url(self, path: str) -> str:
        """
        Resolve a path against the credentials' host.

        Raises:
            InvalidRequestError: If the resolved URL is on another host
        """
        url = urljoin(self.base_url, path)
        if self.auth.signs_for(url):
            return url

        raise InvalidRequestError(
            f"URL {url} is not on signing host {self.credentials.host}",
            {"url": url, "signing_host": self.credentials.host}
        )

    def request(self, method: str, path: str, **kwargs) -> requests.Response:
        """
        Make a signed HTTP request.

        Args:
            method: HTTP method
            path: Path (with optional query) or absolute URL
            **kwargs: Additional arguments for requests

        Returns:
            requests.Response: HTTP response
        """
        return self.session.request(method, self.build_url(path), **kwargs)

    def get(self, path: str, **kwargs) -> requests.Response:
        """Make GET request."""
        return self.request('GET', path, **kwargs)

    def post(self, path: str, **kwargs) -> requests.Response:
        """Make POST request."""
        return self.request('POST', path, **kwargs)

    def put(self, path: str, **kwargs) -> requests.Response:
        """Make PUT request."""
        return self.request('PUT', path, **kwargs)

    def delete(self, path: str, **kwargs) -> requests.Response:
        """Make DELETE request."""
        return self.request('DELETE', path, **kwargs)

    def patch(self, path: str, **kwargs) -> requests.Response:
        """Make PATCH request."""
        return self.request('PATCH', path, **kwargs)

    def head(self, path: str, **kwargs) -> requests.Response:
        """Make HEAD request."""
        return self.request('HEAD', path, **kwargs)

    def options(self, path: str, **kwargs) -> requests.Response:
        """Make OPTIONS request."""
        return self.request('OPTIONS', path, **kwargs)

    def close(self) -> None:
        """Close the underlying session."""
        self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, *args):
        """Context manager exit."""
        self.close()


def create_signing_session(
    section: str = DEFAULT_SECTION,
    edgerc_path: Optional[Union[str, Path]] = None,
    headers_to_sign: Optional[List[str]] = None,
    config: Optional[SigningConfig] = None,
    **session_kwargs: Any
) -> SigningSession:
    """
    Create a signing session from an .edgerc section.

    Args:
        section: Section holding the credentials
        edgerc_path: .edgerc location (``$EDGERC`` or ``~/.edgerc`` if None)
        headers_to_sign: Header names to include in every signature
        config: Optional signing configuration
        **session_kwargs: Attributes to set on the requests.Session

    Returns:
        SigningSession: Configured signing session
    """
    path = resolve_edgerc_path(edgerc_path)
    credentials = CredentialStore.from_file(path).get(section)
    logger.info(f"Loaded credentials for section '{section}' from {path}")

    session = EdgeGridSession()

    # Apply session configuration
    for key, value in session_kwargs.items():
        if hasattr(session, key):
            setattr(session, key, value)

    return SigningSession(
        credentials,
        session=session,
        headers_to_sign=headers_to_sign,
        config=config
    )


def sign_prepared_request(
    request: PreparedRequest,
    credentials: Credentials,
    headers_to_sign: Optional[List[str]] = None,
    config: Optional[SigningConfig] = None
) -> PreparedRequest:
    """
    Sign a prepared request in place.

    Returns:
        PreparedRequest: The same request with an Authorization header
    """
    return EdgeGridAuth(credentials, headers_to_sign, config)(request)
