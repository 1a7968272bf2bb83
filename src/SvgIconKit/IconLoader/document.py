"""
HTML document access for the icon loader.

Wraps a BeautifulSoup tree and exposes only the operations the loader needs:
querying marker elements, reading and writing class lists, replacing inner
markup and text content, and serialising the document back to HTML.
Elements are plain ``bs4.Tag`` objects owned by the caller's document.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Union

from bs4 import BeautifulSoup, Tag

LOGGER = logging.getLogger(__name__)

DEFAULT_PARSER = "html.parser"


def class_list(element: Tag) -> List[str]:
    """Return the element's class tokens in document order."""
    classes = element.get("class")
    if classes is None:
        return []
    if isinstance(classes, str):
        return classes.split()
    return list(classes)


def add_class(element: Tag, class_name: str) -> None:
    """Append ``class_name`` to the element's class list unless already present."""
    classes = class_list(element)
    if class_name not in classes:
        classes.append(class_name)
    element["class"] = classes


def tag_name(element: Tag) -> str:
    return (element.name or "").lower()


def inner_html(element: Tag) -> str:
    return element.decode_contents()


def set_text(element: Tag, text: str) -> None:
    """Replace all children of ``element`` with a single text node."""
    element.string = text


def set_inner_markup(element: Tag, markup: str) -> None:
    """Replace all children of ``element`` with the parsed ``markup`` fragment."""
    fragment = BeautifulSoup(markup, DEFAULT_PARSER)
    element.clear()
    for child in list(fragment.contents):
        element.append(child.extract())


class HtmlDocument:
    """Queryable, mutable HTML document backed by BeautifulSoup."""

    def __init__(
        self, markup: Union[str, bytes, BeautifulSoup], parser: str = DEFAULT_PARSER
    ) -> None:
        if isinstance(markup, BeautifulSoup):
            self._soup = markup
        else:
            self._soup = BeautifulSoup(markup, parser)

    @classmethod
    def from_file(cls, path: Union[str, Path], parser: str = DEFAULT_PARSER) -> "HtmlDocument":
        """Parse the HTML file at ``path``."""
        text = Path(path).read_text(encoding="utf-8")
        return cls(text, parser=parser)

    @property
    def soup(self) -> BeautifulSoup:
        return self._soup

    def find_markers(self, tag: str, prefix: str) -> List[Tag]:
        """
        Return all ``tag`` elements whose class attribute contains ``prefix``.

        This is a coarse substring filter over the whole class attribute, the
        same test as the CSS selector ``tag[class*="prefix"]``; callers still
        have to locate the token that actually starts with the prefix.
        """

        def _matches(element: Tag) -> bool:
            return tag_name(element) == tag and prefix in " ".join(class_list(element))

        return self._soup.find_all(_matches)

    def find_by_class(self, tag: str, class_name: str) -> List[Tag]:
        """Return all ``tag`` elements with a class token exactly equal to ``class_name``."""

        def _matches(element: Tag) -> bool:
            return tag_name(element) == tag and class_name in class_list(element)

        return self._soup.find_all(_matches)

    def select_one(self, selector: str) -> Optional[Tag]:
        """Return the first element matching the CSS ``selector``, or None."""
        return self._soup.select_one(selector)

    def serialize(self) -> str:
        return str(self._soup)

    def write(self, path: Union[str, Path]) -> Path:
        """Serialise the document to ``path`` and return the resolved path."""
        out = Path(path)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(self.serialize(), encoding="utf-8")
        LOGGER.debug("Wrote document to %s", out)
        return out

    def __str__(self) -> str:
        return self.serialize()
