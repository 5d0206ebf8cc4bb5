"""Exception classes for bundleresolver.

ConfigurationError is fatal for a run. ResolutionError and its
subclasses describe a single failed lookup and are reported per line.
"""


class BundleResolverError(Exception):
    """Base error for bundleresolver."""


class ConfigurationError(BundleResolverError):
    """Invalid run configuration (e.g. an unknown output field)."""


class ResolutionError(BundleResolverError):
    """Base error for a failed identifier lookup."""

    error_code = "RESOLUTION_FAILED"

    def __init__(self, bundle: str, message: str):
        self.bundle = bundle
        self.message = message
        super().__init__(message)


class UnrecognizedPlatformError(ResolutionError):
    """Identifier is neither an iOS App ID nor an Android package."""

    error_code = "UNRECOGNIZED_PLATFORM"

    def __init__(self, bundle: str):
        super().__init__(bundle, f"cannot detect platform for {bundle!r}")


class HTTPFailureError(ResolutionError):
    """Non-2xx response or transport failure."""

    error_code = "HTTP_FAILURE"

    def __init__(self, bundle: str, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(bundle, message)


class NotFoundError(ResolutionError):
    """The store has no listing for the identifier."""

    error_code = "NOT_FOUND"

    def __init__(self, bundle: str, message: str = "not found"):
        super().__init__(bundle, message)


class ParseFailureError(ResolutionError):
    """The response body could not be decoded."""

    error_code = "PARSE_FAILURE"
