"""Find Chrome's bookmark file and pull the bookmarked URLs out of it."""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

BOOKMARK_FILE = "Bookmarks"
CHECKSUM_FILE = "checksum"
DATA_FOLDER_ENV = "CHROME_DATA_FOLDER"
HOST_OS_ENV = "HOST_OS"
BASE_DATA_DIR_ENV = "BASE_DATA_DIR"
BASE_CONFIG_DIR_ENV = "BASE_CONFIG_DIR"

_ROOTS = ("bookmark_bar", "other", "synced")


def find_bookmark_file(env: Mapping[str, str] | None = None) -> Path | None:
    """Where the bookmark file is: the configured folder, else the host OS default."""
    env = os.environ if env is None else env
    folder = env.get(DATA_FOLDER_ENV, "")
    if folder:
        return Path(folder) / BOOKMARK_FILE
    try:
        host_os = env[HOST_OS_ENV]
        config_dir = env[BASE_CONFIG_DIR_ENV]
        data_dir = env[BASE_DATA_DIR_ENV]
    except KeyError:
        return None
    if host_os == "linux":
        return Path(config_dir) / "google-chrome/Default" / BOOKMARK_FILE
    if host_os == "macos":
        return Path(data_dir) / "Google/Chrome/Default" / BOOKMARK_FILE
    if host_os == "windows":
        return Path(data_dir) / "Google/Chrome/User Data/Default" / BOOKMARK_FILE
    return None


def _get(value: Any, key: str) -> Any:
    return value.get(key) if isinstance(value, dict) else None


def parse_children(children: Any) -> list[str]:
    """The bookmark URLs in a list of bookmark nodes, descending into folders."""
    if not isinstance(children, list):
        return []
    urls: list[str] = []
    for child in children:
        kind = _get(child, "type")
        if kind == "url":
            url = _get(child, "url")
            if isinstance(url, str):
                urls.append(url)
        elif kind == "folder":
            urls.extend(parse_children(_get(child, "children")))
    return urls


def parse_and_queue_bookmarks(blob: str, data_dir: str | os.PathLike[str]) -> list[str]:
    """The URLs in a bookmark file, or none if its checksum is unchanged.

    The checksum is remembered in `data_dir`. Raises ValueError on invalid JSON.
    """
    data = json.loads(blob)
    checksum_path = Path(data_dir) / CHECKSUM_FILE

    try:
        previous = checksum_path.read_text(encoding="utf-8")
    except OSError:
        previous = None

    checksum = _get(data, "checksum")
    if isinstance(checksum, str):
        try:
            checksum_path.write_text(checksum, encoding="utf-8")
        except OSError:
            pass
        if previous is not None and previous == checksum:
            return []

    roots = _get(data, "roots")
    if not isinstance(roots, dict):
        return []

    urls: list[str] = []
    for name in _ROOTS:
        urls.extend(parse_children(_get(_get(roots, name), "children")))
    return urls