"""Discovery of project YAML configs and wildcard file names."""

from __future__ import annotations

import fnmatch
import logging
import re
from typing import TYPE_CHECKING, Dict, Pattern

from .errors import AmbiguousMatchError, NoMatchError
from .models import YamlConfigSet
from .paths import collapse_separators, join_path

if TYPE_CHECKING:
    from .filesystem import StorageFileSystem

logger = logging.getLogger(__name__)

PROJECT_CONFIG_NAME = "simwrapper-config"

# YamlConfigSet field -> filename pattern; both .yml and .yaml are accepted
YAML_PATTERNS: Dict[str, Pattern[str]] = {
    "dashboards": re.compile(r"^dashboard.*\.ya?ml$"),
    "topsheets": re.compile(r"^(topsheet|table).*\.ya?ml$"),
    "vizes": re.compile(r"^viz.*\.ya?ml$"),
    "configs": re.compile(rf"^{re.escape(PROJECT_CONFIG_NAME)}\.ya?ml$"),
}


def ancestor_paths(folder: str) -> list[str]:
    """Every ancestor of ``folder`` from the root down, excluding the folder.

    ``/root/project`` yields ``["/", "/root/"]``.
    """
    full = folder if folder.startswith("/") else "/" + folder
    chunks = full.rstrip("/").split("/")

    paths = []
    current = "/"
    for chunk in chunks[:-1]:
        current = collapse_separators(f"{current}{chunk}/")
        paths.append(current)
    return paths


async def find_config_folders(fs: StorageFileSystem, folder: str) -> list[str]:
    """Config folders in the ancestors of ``folder``, root first, then ``folder``.

    An ancestor that cannot be listed is treated as having no config folder.
    """
    recognized = {name.lower() for name in fs.config.config_folders}
    candidates = []

    for ancestor in ancestor_paths(folder):
        try:
            listing = await fs.list_directory(ancestor)
        except Exception as e:
            logger.debug("No config folders in %s: %s", ancestor, e)
            continue
        for dirname in listing.dirs:
            if dirname.lower() in recognized:
                candidates.append(join_path(ancestor, dirname))

    # the folder itself comes last and supersedes everything above it
    candidates.append(folder)
    return candidates


async def find_yaml_configs(fs: StorageFileSystem, folder: str) -> YamlConfigSet:
    """Collect dashboard, topsheet, viz and project config YAMLs for ``folder``.

    Config folders are visited from the root down, so a file in a folder closer
    to ``folder`` overwrites a same-named file found higher up.

    Args:
        fs: Front door of the storage root
        folder: Target folder

    Returns:
        YamlConfigSet mapping filenames to full paths

    Raises:
        DirectoryListingError: If a discovered config folder (or ``folder``
            itself) cannot be listed
    """
    yamls = YamlConfigSet()

    for config_folder in await find_config_folders(fs, folder):
        listing = await fs.list_directory(config_folder)
        for field, pattern in YAML_PATTERNS.items():
            found = getattr(yamls, field)
            for filename in listing.files:
                if pattern.match(filename):
                    found[filename] = join_path(config_folder, filename)

    return yamls


def has_wildcard(path: str) -> bool:
    return "*" in path or "?" in path


def match_files(files: list[str], pattern: str) -> list[str]:
    """Filenames matching a shell-style pattern, case-sensitively."""
    return [name for name in files if fnmatch.fnmatchcase(name, pattern)]


async def expand_wildcard(fs: StorageFileSystem, filepath: str) -> str:
    """Resolve ``*``/``?`` in the final segment of ``filepath`` to one real file.

    Raises:
        NoMatchError: If nothing matches
        AmbiguousMatchError: If more than one file matches
    """
    if not has_wildcard(filepath):
        return filepath

    folder, _, pattern = filepath.rpartition("/")
    listing = await fs.list_directory(folder or "/")
    matches = match_files(listing.files, pattern)

    if not matches:
        raise NoMatchError(pattern)
    if len(matches) > 1:
        raise AmbiguousMatchError(pattern, matches)

    return join_path(folder, matches[0]) if folder else matches[0]
