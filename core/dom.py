"""Document abstraction used by the DOM binder.

Updates:
  v0.1.1 - 2026-10-07 - Add closest() lookup for delegated click handling.
  v0.1.0 - 2026-09-27 - Introduce DocumentPort protocol and BeautifulSoup adapter.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from bs4 import BeautifulSoup, Tag

from .rendering import render_page


@runtime_checkable
class DocumentPort(Protocol):
    """Operations the binder needs from an HTML document."""

    def get_element_by_id(self, element_id: str) -> Tag | None: ...

    def select(self, selector: str, root: Tag | None = None) -> list[Tag]: ...

    def select_one(self, selector: str, root: Tag | None = None) -> Tag | None: ...

    def get_attribute(self, element: Tag, name: str) -> str | None: ...

    def set_attribute(self, element: Tag, name: str, value: str) -> None: ...

    def get_text(self, element: Tag) -> str: ...

    def set_text(self, element: Tag, text: str) -> None: ...

    def has_class(self, element: Tag, class_name: str) -> bool: ...

    def toggle_class(self, element: Tag, class_name: str, force: bool | None = None) -> bool: ...

    def clear(self, element: Tag) -> None: ...

    def append(self, parent: Tag, child: Tag) -> None: ...

    def replace_content(self, element: Tag, markup: str) -> None: ...

    def closest(self, element: Tag, selector: str) -> Tag | None: ...


class SoupDocument:
    """DocumentPort implementation backed by BeautifulSoup's ``html.parser``."""

    def __init__(self, markup: str = "") -> None:
        self._soup = BeautifulSoup(markup, "html.parser")

    @classmethod
    def blank_page(
        cls,
        *,
        container_id: str,
        favorites_count_id: str,
        title: str = "PromptHero",
    ) -> SoupDocument:
        """Return a document holding the empty page skeleton."""
        return cls(
            render_page(
                title=title,
                container_id=container_id,
                favorites_count_id=favorites_count_id,
            )
        )

    @property
    def soup(self) -> BeautifulSoup:
        return self._soup

    def get_element_by_id(self, element_id: str) -> Tag | None:
        element = self._soup.find(id=element_id)
        return element if isinstance(element, Tag) else None

    def select(self, selector: str, root: Tag | None = None) -> list[Tag]:
        scope = root if root is not None else self._soup
        return list(scope.select(selector))

    def select_one(self, selector: str, root: Tag | None = None) -> Tag | None:
        scope = root if root is not None else self._soup
        return scope.select_one(selector)

    def get_attribute(self, element: Tag, name: str) -> str | None:
        value = element.get(name)
        if value is None:
            return None
        if isinstance(value, list):
            return " ".join(value)
        return str(value)

    def set_attribute(self, element: Tag, name: str, value: str) -> None:
        element[name] = value

    def get_text(self, element: Tag) -> str:
        return element.get_text()

    def set_text(self, element: Tag, text: str) -> None:
        element.string = text

    def has_class(self, element: Tag, class_name: str) -> bool:
        return class_name in (element.get("class") or [])

    def toggle_class(self, element: Tag, class_name: str, force: bool | None = None) -> bool:
        """Add or remove *class_name*; *force* pins the result. Returns presence."""
        classes = list(element.get("class") or [])
        present = class_name in classes
        wanted = not present if force is None else force
        if wanted and not present:
            classes.append(class_name)
        elif not wanted and present:
            classes = [item for item in classes if item != class_name]
        element["class"] = classes
        return wanted

    def clear(self, element: Tag) -> None:
        element.clear()

    def append(self, parent: Tag, child: Tag) -> None:
        parent.append(child)

    def replace_content(self, element: Tag, markup: str) -> None:
        """Replace the children of *element* with the parsed *markup*."""
        element.clear()
        fragment = BeautifulSoup(markup, "html.parser")
        for child in list(fragment.contents):
            element.append(child.extract())

    def closest(self, element: Tag, selector: str) -> Tag | None:
        """Return *element* or its nearest ancestor matching *selector*."""
        node: Tag | None = element
        while node is not None and not isinstance(node, BeautifulSoup):
            if node.css.match(selector):
                return node
            node = node.parent
        return None

    def to_html(self) -> str:
        return str(self._soup)

    def write(self, path: Path | str) -> Path:
        """Write the document to *path* and return the resolved location."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.to_html(), encoding="utf-8")
        return target


__all__ = ["DocumentPort", "SoupDocument"]
