"""Server-generated HTML directory listing dialects.

No server tags its listing with a format, so the body is sniffed for a
signature and handed to the matching parser. Signatures are checked in a fixed
order and the first match wins; the order matters for bodies that would match
more than one.
"""

import logging
import re
from enum import Enum
from typing import Callable, Iterable, Optional
from urllib.parse import unquote

from bs4 import BeautifulSoup

from ..models import DirectoryEntry

logger = logging.getLogger(__name__)

PARENT_LINK = "../"

# nginx autoindex puts one anchor at the start of each line
_NGINX_SIGNATURE = re.compile(r"^<a ", re.MULTILINE)


class Dialect(str, Enum):
    """Known directory listing formats, in sniffing order."""

    SIMPLE_WEB_SERVER = "simple-web-server"
    SUBVERSION = "subversion"
    NODE_SERVE = "node-serve"
    APACHE = "apache-2.4"
    NGINX = "nginx"


def sniff_dialect(html: str) -> Optional[Dialect]:
    """Identify the listing dialect of an HTML body, or None if unknown."""
    if "SimpleWebServer" in html:
        return Dialect.SIMPLE_WEB_SERVER
    if "<ul>" in html:
        return Dialect.SUBVERSION
    if '<ul id="files">' in html:
        return Dialect.NODE_SERVE
    if "<table>" in html:
        return Dialect.APACHE
    if _NGINX_SIGNATURE.search(html):
        return Dialect.NGINX
    return None


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def _clean_href(href: str) -> Optional[str]:
    """Decode an href; None for sort/anchor links that name no entry."""
    if not href or href.startswith(("?", "#")):
        return None
    return unquote(href)


def _basename(name: str) -> str:
    return name.rsplit("/", 1)[-1]


def build_entry(names: Iterable[str]) -> DirectoryEntry:
    """Classify raw link names: a trailing ``/`` marks a directory.

    Every name is reduced to its final path segment.
    """
    dirs: list[str] = []
    files: list[str] = []
    for name in names:
        if name.endswith("/"):
            dirname = _basename(name.rstrip("/"))
            if dirname:
                dirs.append(dirname)
        elif _basename(name):
            files.append(_basename(name))
    return DirectoryEntry(dirs=dirs, files=files)


def parse_simple_web_server(html: str) -> DirectoryEntry:
    """``<li><a href="...">NAME</a>`` rows; the link text is the name."""
    names = [a.get_text().strip() for a in _soup(html).select("li > a[href]")]
    return build_entry(name for name in names if name)


def parse_subversion(html: str) -> DirectoryEntry:
    """Subversion ``<ul>`` listing; hrefs may carry a ``./`` prefix."""
    names = []
    for a in _soup(html).select("li > a[href]"):
        name = _clean_href(a["href"])
        if not name or name == PARENT_LINK:
            continue
        if name.startswith("./"):
            name = name[2:]
        names.append(name)
    return build_entry(names)


def parse_node_serve(html: str) -> DirectoryEntry:
    """``serve``/``http-server`` style ``<ul id="files">`` with absolute hrefs."""
    names = []
    for a in _soup(html).select("ul#files li a[href]"):
        # html.parser already decoded entities such as &#47;
        name = _clean_href(a["href"])
        if not name or name in ("/", PARENT_LINK):
            continue
        names.append(name)
    return build_entry(names)


def parse_apache(html: str) -> DirectoryEntry:
    """Apache 2.4 fancy index table; header and parent rows are skipped."""
    names = []
    for a in _soup(html).select("td > a[href]"):
        row = a.find_parent("tr")
        if row is not None and (row.find("th") or row.find("img", alt="[PARENTDIR]")):
            continue
        name = _clean_href(a["href"])
        if not name or name == PARENT_LINK:
            continue
        names.append(name)
    return build_entry(names)


def parse_nginx(html: str) -> DirectoryEntry:
    """nginx autoindex: one ``<a href>`` per line."""
    names = []
    for a in _soup(html).find_all("a", href=True):
        name = _clean_href(a["href"])
        if not name or name == PARENT_LINK:
            continue
        names.append(name)
    return build_entry(names)


PARSERS: dict[Dialect, Callable[[str], DirectoryEntry]] = {
    Dialect.SIMPLE_WEB_SERVER: parse_simple_web_server,
    Dialect.SUBVERSION: parse_subversion,
    Dialect.NODE_SERVE: parse_node_serve,
    Dialect.APACHE: parse_apache,
    Dialect.NGINX: parse_nginx,
}


def parse_listing(html: str) -> DirectoryEntry:
    """Parse an HTML directory listing of any known dialect.

    Returns an empty entry when no dialect matches. Callers must treat an
    empty result as possibly "unparseable" rather than "truly empty".
    """
    dialect = sniff_dialect(html)
    if dialect is None:
        logger.warning("Unrecognized directory listing format (%d bytes)", len(html))
        return DirectoryEntry()

    logger.debug("Parsing directory listing as %s", dialect.value)
    return PARSERS[dialect](html)
