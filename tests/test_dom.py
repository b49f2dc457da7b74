"""Tests for the BeautifulSoup document adapter."""

from __future__ import annotations

from pathlib import Path

from core import DocumentPort, SoupDocument

MARKUP = """
<section id="root" class="panel">
  <div class="card" data-id="a"><button class="btn primary"><span>Go</span></button></div>
</section>
"""


def test_soup_document_satisfies_port() -> None:
    assert isinstance(SoupDocument(), DocumentPort)


def test_class_helpers() -> None:
    document = SoupDocument(MARKUP)
    button = document.select_one(".btn")

    assert document.has_class(button, "primary") is True
    assert document.toggle_class(button, "primary") is False
    assert document.get_attribute(button, "class") == "btn"
    assert document.toggle_class(button, "active", True) is True
    assert document.toggle_class(button, "active", True) is True
    assert document.get_attribute(button, "class") == "btn active"


def test_closest_walks_up_to_matching_ancestor() -> None:
    document = SoupDocument(MARKUP)
    span = document.select_one("span")

    assert document.closest(span, ".btn").name == "button"
    assert document.get_attribute(document.closest(span, ".card"), "data-id") == "a"
    assert document.closest(span, ".missing") is None


def test_replace_content_and_text() -> None:
    document = SoupDocument(MARKUP)
    root = document.get_element_by_id("root")

    document.replace_content(root, "<p>one</p><p>two</p>")
    assert [document.get_text(item) for item in document.select("p", root)] == ["one", "two"]

    document.set_text(root, "<b>plain</b>")
    assert document.select("b") == []
    assert document.get_text(root) == "<b>plain</b>"


def test_write_creates_parent_directories(tmp_path: Path) -> None:
    document = SoupDocument.blank_page(container_id="grid", favorites_count_id="count")
    target = document.write(tmp_path / "out" / "index.html")

    assert target.exists()
    assert 'id="grid"' in target.read_text(encoding="utf-8")
