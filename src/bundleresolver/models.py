"""Data models for resolved app records."""

from enum import Enum

from pydantic import BaseModel, ConfigDict

from .errors import ResolutionError


class Field(str, Enum):
    """Output columns that can be selected."""

    BUNDLE = "bundle"
    NAME = "name"
    PUBLISHER = "publisher"
    URL = "url"


class Platform(str, Enum):
    """Supported app stores."""

    IOS = "ios"
    ANDROID = "android"


class Record(BaseModel):
    """Best-effort metadata for one identifier.

    Any attribute may be empty; a failed lookup still carries the
    constructed store URL when one could be built.
    """

    bundle: str = ""
    name: str = ""
    publisher: str = ""
    url: str = ""

    model_config = ConfigDict(frozen=True)

    def get(self, field: Field) -> str:
        """Return the value for an output field."""
        return getattr(self, field.value) or ""


class ResolutionOutcome(BaseModel):
    """A record plus the error that stopped resolution, if any."""

    record: Record = Record()
    error: ResolutionError | None = None

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @property
    def ok(self) -> bool:
        """Whether resolution succeeded."""
        return self.error is None

    @classmethod
    def failed(cls, error: ResolutionError, url: str = "") -> "ResolutionOutcome":
        """Build a failed outcome; only the constructed URL (if any) is kept."""
        return cls(record=Record(url=url), error=error)
