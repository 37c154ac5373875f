"""Turn local folders of notes into file URIs ready for crawling."""

from __future__ import annotations

import json
import os
from collections.abc import Iterable
from pathlib import Path
from urllib.parse import quote

DEFAULT_HOST = "home.local"
HOST_NAME_ENV = "HOST_NAME"
DEFAULT_EXTENSIONS = frozenset({"md", "txt"})

# Characters left as they are in a URL path; the rest are percent-encoded.
_PATH_SAFE = "!$&'()*+,;=:@/%[]\\^|"


def to_uri(path: str, host: str | None = None) -> str:
    """A file URI for `path` on `host` (the HOST_NAME variable, else home.local)."""
    if host is None:
        host = os.environ.get(HOST_NAME_ENV, DEFAULT_HOST)
    host = host.lower()
    if host == "localhost":
        host = ""
    # Encoding the colon keeps Windows drive letters out of the authority.
    url_path = path.replace(":", "%3A").replace("\\", "/")
    if not url_path.startswith("/"):
        url_path = "/" + url_path
    return f"file://{host}{quote(url_path, safe=_PATH_SAFE)}"


def walk_and_collect(
    path: str | os.PathLike[str],
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    host: str | None = None,
) -> list[str]:
    """URIs of every file below `path` whose extension is in `extensions`.

    Files from a sub-folder come before the files of the folder holding it.
    A folder that cannot be read contributes nothing.
    """
    wanted = frozenset(extensions)
    try:
        entries = sorted(Path(path).iterdir())
    except OSError:
        return []

    found: list[str] = []
    files: list[str] = []
    for entry in entries:
        if entry.is_dir():
            found.extend(walk_and_collect(entry, wanted, host))
        elif entry.suffix[1:] in wanted and entry.suffix:
            files.append(to_uri(str(entry), host))
    found.extend(files)
    return found


def load_processed_paths(data_file: str | os.PathLike[str]) -> set[str]:
    """The folders already walked, or an empty set if the file is missing or bad."""
    try:
        data = json.loads(Path(data_file).read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return set()
    if not isinstance(data, list) or not all(isinstance(item, str) for item in data):
        return set()
    return set(data)


def save_processed_paths(data_file: str | os.PathLike[str], paths: Iterable[str]) -> None:
    """Write the folders already walked as a JSON list."""
    Path(data_file).write_text(json.dumps(sorted(paths), indent=2), encoding="utf-8")