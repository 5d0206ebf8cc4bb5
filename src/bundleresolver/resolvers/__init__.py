"""Store resolvers.

A resolver is any callable taking a trimmed identifier and returning a
ResolutionOutcome. StoreResolver detects the platform and dispatches to
the iOS or Android resolver; tests substitute plain functions.
"""

from typing import Callable

import httpx

from ..config import Settings, get_settings
from ..detection import detect_platform
from ..errors import ResolutionError
from ..models import Platform, ResolutionOutcome
from .android import AndroidResolver
from .base import BaseStoreResolver, create_http_client
from .ios import IOSResolver

Resolver = Callable[[str], ResolutionOutcome]


class StoreResolver:
    """Resolve identifiers for any supported store.

    Unrecognized identifiers fail immediately without a network call.
    """

    def __init__(self, client: httpx.Client, settings: Settings | None = None):
        settings = settings or get_settings()
        self._resolvers: dict[Platform, BaseStoreResolver] = {
            Platform.IOS: IOSResolver(client, settings),
            Platform.ANDROID: AndroidResolver(client, settings),
        }

    def resolver_for(self, platform: Platform) -> BaseStoreResolver:
        """Return the resolver handling a platform."""
        return self._resolvers[platform]

    def __call__(self, token: str) -> ResolutionOutcome:
        try:
            platform = detect_platform(token)
        except ResolutionError as e:
            return ResolutionOutcome.failed(e)
        return self.resolver_for(platform).resolve(token)


__all__ = [
    "AndroidResolver",
    "BaseStoreResolver",
    "IOSResolver",
    "Resolver",
    "StoreResolver",
    "create_http_client",
]
