"""Platform detection for input identifiers."""

import re

from .errors import UnrecognizedPlatformError
from .models import Platform

IOS_ID_RE = re.compile(r"^[0-9]+$")
ANDROID_PACKAGE_RE = re.compile(r"^[A-Za-z0-9_]+(\.[A-Za-z0-9_]+)+$")


def detect_platform(token: str) -> Platform:
    """Classify a trimmed identifier.

    All-digit tokens are iOS App IDs; dotted identifiers with at least
    two segments are Android package names.

    Raises:
        UnrecognizedPlatformError: If the token matches neither form
    """
    if IOS_ID_RE.match(token):
        return Platform.IOS
    if ANDROID_PACKAGE_RE.match(token):
        return Platform.ANDROID
    raise UnrecognizedPlatformError(token)
