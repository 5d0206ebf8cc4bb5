"""iOS App Store resolver.

Looks up numeric App IDs through the public iTunes lookup endpoint.
When the default storefront returns no results, the lookup is retried
against each configured fallback country in order.
"""

from typing import Any

from ..errors import NotFoundError, ParseFailureError, ResolutionError
from ..logging import log_resolution_fallback
from ..models import Platform, Record, ResolutionOutcome
from .base import BaseStoreResolver


class IOSResolver(BaseStoreResolver):
    """Resolver for iOS App IDs."""

    @property
    def platform(self) -> Platform:
        return Platform.IOS

    @property
    def fallback_countries(self) -> list[str]:
        return self.settings.ios_fallback_countries

    def canonical_url(self, bundle: str) -> str:
        # trackViewUrl from the lookup response is never used
        return self.settings.ios_app_url.format(app_id=bundle)

    def fetch(self, bundle: str) -> ResolutionOutcome:
        """Look up an App ID, retrying fallback countries on an empty result.

        Raises:
            ResolutionError: The error from the default lookup when every
                attempt fails
        """
        try:
            return self._lookup(bundle)
        except NotFoundError as first_error:
            for country in self.fallback_countries:
                log_resolution_fallback(
                    self.platform.value, bundle, f"country={country}", first_error.message
                )
                try:
                    return self._lookup(bundle, country=country)
                except ResolutionError as e:
                    self.logger.debug(
                        f"Lookup in {country} failed for {bundle}: {e.message}",
                        extra={"bundle": bundle, "country": country, "error_code": e.error_code},
                    )
                    continue
            raise first_error

    def _lookup(self, bundle: str, country: str | None = None) -> ResolutionOutcome:
        params = {"id": bundle}
        if country:
            params["country"] = country

        response = self._get(bundle, self.settings.itunes_lookup_url, params=params)
        try:
            payload = response.json()
        except ValueError as e:
            raise ParseFailureError(bundle, f"invalid lookup response: {e}") from e

        result = self._first_result(bundle, payload)
        return ResolutionOutcome(
            record=Record(
                bundle=bundle,
                name=_as_text(result.get("trackName")),
                publisher=_as_text(result.get("sellerName")),
                url=self.canonical_url(bundle),
            )
        )

    def _first_result(self, bundle: str, payload: Any) -> dict[str, Any]:
        if not isinstance(payload, dict):
            raise ParseFailureError(bundle, "invalid lookup response: expected an object")

        results = payload.get("results") or []
        if not isinstance(results, list):
            raise ParseFailureError(bundle, "invalid lookup response: results is not a list")
        if not payload.get("resultCount") or not results:
            raise NotFoundError(bundle)

        first = results[0]
        if not isinstance(first, dict):
            raise ParseFailureError(bundle, "invalid lookup response: malformed result")
        return first


def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else ""
