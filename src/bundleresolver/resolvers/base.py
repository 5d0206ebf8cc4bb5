"""Abstract base class for store resolvers.

All store resolvers share one HTTP client and translate transport and
status failures into ResolutionError subclasses the same way.
"""

from abc import ABC, abstractmethod
from typing import Any

import httpx

from ..config import Settings, get_settings
from ..errors import HTTPFailureError, NotFoundError, ResolutionError
from ..logging import get_context_logger, log_resolution_attempt
from ..models import Platform, ResolutionOutcome


def create_http_client(settings: Settings | None = None, **kwargs: Any) -> httpx.Client:
    """Create the HTTP client shared by all resolvers for a run.

    Args:
        settings: Settings providing timeout and headers
        **kwargs: Extra httpx.Client arguments (e.g. a test transport)

    Returns:
        Configured httpx.Client; the caller is responsible for closing it
    """
    settings = settings or get_settings()
    return httpx.Client(
        timeout=httpx.Timeout(settings.http_timeout),
        follow_redirects=True,
        headers={
            "User-Agent": settings.user_agent,
            "Accept-Language": settings.accept_language,
        },
        **kwargs,
    )


class BaseStoreResolver(ABC):
    """Abstract base class for a single app store.

    Subclasses must implement:
    - platform: Which store this resolver handles
    - canonical_url(): The stable store URL for an identifier
    - fetch(): The lookup itself, raising ResolutionError on failure
    """

    def __init__(self, client: httpx.Client, settings: Settings | None = None):
        """Initialize the resolver.

        Args:
            client: HTTP client used for every request
            settings: Optional settings (defaults to environment settings)
        """
        self.client = client
        self.settings = settings or get_settings()
        self.logger = get_context_logger(
            f"bundleresolver.resolvers.{self.platform.value}",
            platform=self.platform.value,
        )

    @property
    @abstractmethod
    def platform(self) -> Platform:
        """Store handled by this resolver."""
        ...

    @abstractmethod
    def canonical_url(self, bundle: str) -> str:
        """Build the canonical store URL for an identifier."""
        ...

    @abstractmethod
    def fetch(self, bundle: str) -> ResolutionOutcome:
        """Look up an identifier.

        Raises:
            ResolutionError: If the listing cannot be resolved
        """
        ...

    def resolve(self, bundle: str) -> ResolutionOutcome:
        """Resolve an identifier, converting failures into an outcome.

        A failed outcome still carries the canonical URL.
        """
        try:
            return self.fetch(bundle)
        except ResolutionError as e:
            self.logger.debug(
                f"Resolution failed for {bundle}: {e.message}",
                extra={"bundle": bundle, "error_code": e.error_code},
            )
            return ResolutionOutcome.failed(e, url=self.canonical_url(bundle))

    def _get(
        self,
        bundle: str,
        url: str,
        params: dict[str, str] | None = None,
    ) -> httpx.Response:
        """GET a URL, raising on transport errors and non-200 responses.

        A 404 is reported as NotFoundError, any other non-200 status as
        HTTPFailureError.
        """
        request_url = httpx.URL(url, params=params)
        log_resolution_attempt(self.platform.value, bundle, str(request_url))
        try:
            response = self.client.get(request_url)
        except httpx.HTTPError as e:
            raise HTTPFailureError(bundle, _describe_transport_error(e)) from e

        if response.status_code == 404:
            raise NotFoundError(bundle, f"status {_status_text(response)}")
        if response.status_code != 200:
            raise HTTPFailureError(
                bundle,
                f"status {_status_text(response)}",
                status_code=response.status_code,
            )
        return response


def _status_text(response: httpx.Response) -> str:
    phrase = response.reason_phrase
    return f"{response.status_code} {phrase}" if phrase else str(response.status_code)


def _describe_transport_error(error: httpx.HTTPError) -> str:
    detail = str(error)
    if isinstance(error, httpx.TimeoutException):
        return f"request timed out: {detail}" if detail else "request timed out"
    return f"request failed: {detail}" if detail else f"request failed: {type(error).__name__}"
