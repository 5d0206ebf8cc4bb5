"""Field extractors for Google Play listing pages.

Play Store markup changes over time, so each field has an ordered list
of extractors. The first one that yields a non-empty value wins. New
layouts are supported by adding an extractor to the list.
"""

import json
from abc import ABC, abstractmethod
from typing import Any, Iterable

from bs4 import BeautifulSoup

PLAY_TITLE_SUFFIX = " - Apps on Google Play"


class BaseFieldExtractor(ABC):
    """Abstract base class for extracting one value from a parsed page."""

    @property
    def name(self) -> str:
        """Extractor name for logging."""
        return self.__class__.__name__

    @abstractmethod
    def extract(self, soup: BeautifulSoup) -> str | None:
        """Extract the value, or None when this layout does not match."""
        ...


class SelectorExtractor(BaseFieldExtractor):
    """Text of the first element matching a CSS selector."""

    def __init__(self, selector: str):
        self.selector = selector

    @property
    def name(self) -> str:
        return f"selector:{self.selector}"

    def extract(self, soup: BeautifulSoup) -> str | None:
        element = soup.select_one(self.selector)
        if element is None:
            return None
        return element.get_text(strip=True) or None


class TitleSuffixExtractor(BaseFieldExtractor):
    """Page <title> with a known store suffix removed.

    Titles without the suffix are ignored since they belong to error or
    interstitial pages.
    """

    def __init__(self, suffix: str = PLAY_TITLE_SUFFIX):
        self.suffix = suffix

    def extract(self, soup: BeautifulSoup) -> str | None:
        if soup.title is None:
            return None
        title = soup.title.get_text(strip=True)
        if self.suffix not in title:
            return None
        return title.replace(self.suffix, "", 1).strip() or None


class JsonLdExtractor(BaseFieldExtractor):
    """Value from the page's schema.org JSON-LD block."""

    def __init__(self, *path: str):
        self.path = path

    @property
    def name(self) -> str:
        return f"json-ld:{'.'.join(self.path)}"

    def extract(self, soup: BeautifulSoup) -> str | None:
        for script in soup.find_all("script", attrs={"type": "application/ld+json"}):
            try:
                data = json.loads(script.string or "")
            except ValueError:
                continue
            value = _dig(data, self.path)
            if isinstance(value, str) and value.strip():
                return value.strip()
        return None


def _dig(data: Any, path: Iterable[str]) -> Any:
    for key in path:
        if not isinstance(data, dict):
            return None
        data = data.get(key)
    return data


NAME_EXTRACTORS: tuple[BaseFieldExtractor, ...] = (
    SelectorExtractor("h1 span"),
    SelectorExtractor("h1[itemprop='name']"),
    TitleSuffixExtractor(),
    JsonLdExtractor("name"),
)

PUBLISHER_EXTRACTORS: tuple[BaseFieldExtractor, ...] = (
    SelectorExtractor("div[itemprop='author'] a span"),
    SelectorExtractor("a[href^='/store/apps/dev'] span"),
    JsonLdExtractor("author", "name"),
)


def extract_first(soup: BeautifulSoup, extractors: Iterable[BaseFieldExtractor]) -> str:
    """Run extractors in order and return the first non-empty value."""
    for extractor in extractors:
        value = extractor.extract(soup)
        if value:
            return value
    return ""
