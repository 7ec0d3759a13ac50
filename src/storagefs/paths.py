"""Path helpers shared by the front door and the backends.

``sanitize_url`` and ``strip_unsafe_prefix`` are best-effort hardening against
header and query injection through user-supplied paths. They are NOT a security
boundary: callers handling untrusted input must still authorize what they fetch.
"""

import re
from urllib.parse import urljoin, urlsplit, urlunsplit

# Anything outside this set is stripped from the start of a raw path
UNSAFE_PREFIX = re.compile(r"^[^0-9a-zA-Z_\-/:+]+")

_DIGITS = re.compile(r"([0-9]+)")


def strip_unsafe_prefix(raw_path: str) -> str:
    """Remove leading characters outside ``[0-9a-zA-Z_\\-/:+]``."""
    return UNSAFE_PREFIX.sub("", raw_path)


def collapse_separators(path: str) -> str:
    """Collapse every run of ``/`` into a single separator."""
    while "//" in path:
        path = path.replace("//", "/")
    return path


def remove_dot_segments(path: str) -> str:
    """Resolve ``.`` and ``..`` the way a browser resolves a URL path.

    The result always starts with ``/``; ``..`` above the root is dropped.
    """
    return urljoin("/", "/" + path.lstrip("/"))


def normalize_directory_path(path: str) -> str:
    """Cache key form of a directory path.

    Duplicate separators are collapsed, exactly one trailing separator is
    forced, and ``/./`` segments are removed.
    """
    path = collapse_separators(path)
    if not path.endswith("/"):
        path += "/"
    while "/./" in path:
        path = path.replace("/./", "/")
    return path


def join_path(folder: str, name: str) -> str:
    """Join a folder and a child name with a single separator."""
    return collapse_separators(f"{folder}/{name}")


def sanitize_url(base_url: str, raw_path: str) -> str:
    """Build an absolute URL for ``raw_path`` below ``base_url``.

    Strips unsafe leading characters, collapses duplicate separators (repairing
    the scheme afterwards) and canonicalizes dot segments.
    """
    url = collapse_separators(base_url + strip_unsafe_prefix(raw_path))
    url = url.replace("https:/", "https://", 1).replace("http:/", "http://", 1)

    parts = urlsplit(url)
    return urlunsplit(parts._replace(path=urljoin("/", parts.path or "/")))


def eat_dots(parts: list[str]) -> list[str]:
    """Remove each ``..`` together with the segment before it until none is left.

    Stops as soon as the first ``..`` sits at index 0, so a leading ``..``
    survives (and shields any later ones):

        >>> eat_dots(["a", "b", "..", "c"])
        ['a', 'c']
        >>> eat_dots(["..", "a"])
        ['..', 'a']
    """
    while ".." in parts:
        dotdot = parts.index("..")
        if dotdot == 0:
            break
        parts = parts[: dotdot - 1] + parts[dotdot + 1 :]
    return parts


def split_segments(path: str) -> list[str]:
    """Split a path into its non-empty segments."""
    return [part for part in path.split("/") if part]


def natural_key(name: str) -> tuple:
    """Sort key comparing embedded numbers numerically, ignoring case.

    ``["img2", "img10", "img1"]`` sorts as ``["img1", "img2", "img10"]``.
    """
    chunks = _DIGITS.split(name.casefold())
    # re.split with a capture group alternates text/number, so odd slots are digits
    key = tuple(int(chunk) if i % 2 else chunk for i, chunk in enumerate(chunks))
    return (key, name)


def natural_sorted(names: list[str]) -> list[str]:
    return sorted(names, key=natural_key)
