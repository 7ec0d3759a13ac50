"""Anchor-walking parse for listings served by the authenticated proxy."""

from urllib.parse import unquote

from bs4 import BeautifulSoup

from ..models import DirectoryEntry


def parse_anchor_listing(html: str) -> DirectoryEntry:
    """Classify every anchor of an HTML page as a file or directory.

    An anchor is a directory when both its href and its visible text end in
    ``/``, a file when neither does; mixed anchors are navigation and are
    ignored, as is the ``../`` parent link.
    """
    dirs: list[str] = []
    files: list[str] = []

    for link in BeautifulSoup(html, "html.parser").find_all("a"):
        href = link.get("href")
        text = link.get_text(strip=True)

        if href == "../" or text == "..":
            continue
        if not href or not text:
            continue

        name = unquote(href).rstrip("/").rsplit("/", 1)[-1]
        if not name:
            continue

        if href.endswith("/") and text.endswith("/"):
            dirs.append(name)
        elif not href.endswith("/") and not text.endswith("/"):
            files.append(name)

    return DirectoryEntry(dirs=dirs, files=files)
