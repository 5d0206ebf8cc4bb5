"""Google Play resolver.

Scrapes the Play Store details page for a package. When the listing is
not found, the Play search page is used to recover the package's real
capitalisation and the lookup is retried once under that name.
"""

from urllib.parse import parse_qs, urljoin, urlparse

import httpx
from bs4 import BeautifulSoup

from ..config import Settings
from ..errors import NotFoundError, ResolutionError
from ..logging import log_resolution_fallback
from ..models import Platform, Record, ResolutionOutcome
from .base import BaseStoreResolver
from .extractors import (
    NAME_EXTRACTORS,
    PUBLISHER_EXTRACTORS,
    BaseFieldExtractor,
    extract_first,
)

DETAILS_PATH = "/store/apps/details"
SEARCH_PATH = "/store/search"


class AndroidResolver(BaseStoreResolver):
    """Resolver for Android package names."""

    def __init__(
        self,
        client: httpx.Client,
        settings: Settings | None = None,
        name_extractors: tuple[BaseFieldExtractor, ...] = NAME_EXTRACTORS,
        publisher_extractors: tuple[BaseFieldExtractor, ...] = PUBLISHER_EXTRACTORS,
    ):
        super().__init__(client, settings)
        self.name_extractors = name_extractors
        self.publisher_extractors = publisher_extractors

    @property
    def platform(self) -> Platform:
        return Platform.ANDROID

    def canonical_url(self, bundle: str) -> str:
        return f"{self.settings.play_base_url}{DETAILS_PATH}?id={bundle}"

    def fetch(self, bundle: str) -> ResolutionOutcome:
        """Fetch a listing, falling back to search on not-found.

        Raises:
            ResolutionError: The original not-found error when search
                recovery finds nothing, or the error from the retry
        """
        try:
            return self._fetch_direct(bundle)
        except NotFoundError as e:
            log_resolution_fallback(self.platform.value, bundle, "search", e.message)
            try:
                corrected = self.search_package(bundle)
            except ResolutionError as search_error:
                self.logger.debug(
                    f"Search recovery failed for {bundle}: {search_error.message}",
                    extra={"bundle": bundle},
                )
                raise e from search_error
            if corrected is None or corrected == bundle:
                raise
            return self._fetch_direct(corrected)

    def search_package(self, bundle: str) -> str | None:
        """Find a package in Play search results, ignoring case.

        Returns:
            The package name as listed, or None when no result matches

        Raises:
            ResolutionError: If the search request fails
        """
        response = self._get(
            bundle,
            f"{self.settings.play_base_url}{SEARCH_PATH}",
            params={"c": "apps", "q": bundle},
        )
        soup = BeautifulSoup(response.text, "html.parser")

        for link in soup.select(f"a[href*='{DETAILS_PATH}?id=']"):
            package = self._package_from_href(link.get("href", ""))
            if package and package.lower() == bundle.lower():
                return package
        return None

    def _fetch_direct(self, bundle: str) -> ResolutionOutcome:
        response = self._get(
            bundle,
            f"{self.settings.play_base_url}{DETAILS_PATH}",
            params={"id": bundle},
        )
        soup = BeautifulSoup(response.text, "html.parser")

        name = extract_first(soup, self.name_extractors)
        if not name:
            # Play serves an HTML error page for unknown packages
            raise NotFoundError(bundle, "app not found or unable to parse")
        publisher = extract_first(soup, self.publisher_extractors)

        return ResolutionOutcome(
            record=Record(
                bundle=bundle,
                name=name,
                publisher=publisher,
                url=self.canonical_url(bundle),
            )
        )

    def _package_from_href(self, href: str) -> str:
        url = urljoin(self.settings.play_base_url, href)
        values = parse_qs(urlparse(url).query).get("id")
        return values[0] if values else ""
