"""Find a Firefox profile and read the bookmarked URLs from it."""

from __future__ import annotations

import os
import sqlite3
from collections.abc import Mapping
from contextlib import closing
from pathlib import Path

DB_FILE = "places.sqlite"
DATA_FOLDER_ENV = "FIREFOX_DATA_FOLDER"
HOST_OS_ENV = "HOST_OS"
HOST_HOME_DIR_ENV = "HOST_HOME_DIR"
BASE_DATA_DIR_ENV = "BASE_DATA_DIR"

BOOKMARK_QUERY = """
    SELECT
        DISTINCT url
    FROM moz_bookmarks
    JOIN moz_places on moz_places.id = moz_bookmarks.fk
    WHERE
        moz_places.hidden = 0
        AND url like 'http%'
"""

_PROFILE_SUFFIXES = (".default", ".default-release")


def find_places_db(env: Mapping[str, str] | None = None) -> Path | None:
    """Where the bookmark database is: the configured folder, else the default profile."""
    env = os.environ if env is None else env
    folder = env.get(DATA_FOLDER_ENV, "")
    if folder:
        return Path(folder) / DB_FILE
    return default_profile_path(env)


def _profiles_dir(env: Mapping[str, str]) -> Path | None:
    try:
        host_os = env[HOST_OS_ENV]
        home_dir = env[HOST_HOME_DIR_ENV]
        data_dir = env[BASE_DATA_DIR_ENV]
    except KeyError:
        return None
    if host_os == "linux":
        return Path(home_dir) / ".mozilla/firefox"
    if host_os == "macos":
        return Path(home_dir) / "Library/Application Support/Firefox/Profiles"
    if host_os == "windows":
        return Path(data_dir) / "Mozilla/Firefox/Profile"
    return None


def default_profile_path(env: Mapping[str, str] | None = None) -> Path | None:
    """The database of the default profile for the host OS, if one can be found."""
    env = os.environ if env is None else env
    profiles_dir = _profiles_dir(env)
    if profiles_dir is None:
        return None
    try:
        entries = sorted(profiles_dir.iterdir())
    except OSError:
        return None
    for entry in entries:
        if entry.is_dir() and str(entry).endswith(_PROFILE_SUFFIXES):
            return entry / DB_FILE
    return None


def read_bookmarks(db_path: str | os.PathLike[str]) -> list[str]:
    """The distinct visible http(s) bookmark URLs; empty if the database can't be read."""
    uri = Path(db_path).resolve().as_uri() + "?mode=ro"
    try:
        with closing(sqlite3.connect(uri, uri=True)) as conn:
            return [row[0] for row in conn.execute(BOOKMARK_QUERY)]
    except sqlite3.Error:
        return []