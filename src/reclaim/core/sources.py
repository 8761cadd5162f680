"""File sources: the filesystem capability the engine walks and cleans.

The engine never touches the filesystem directly. Everything above this
module works on opaque string handles, so the path-based and the
handle-based (URI) adapters share one categorize/dedup/clean code path.
"""

from __future__ import annotations

import logging
import os
import posixpath
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import quote, unquote_to_bytes, urlsplit, urlunsplit

log = logging.getLogger(__name__)

# Hard cap on files visited by the handle-based source.
URI_MAX_FILES = 1500


class ReclaimError(Exception):
    """Base class for errors surfaced to callers."""


class RootUnavailableError(ReclaimError):
    """Raised when the configured root cannot be walked at all."""


@dataclass(frozen=True, slots=True)
class SourceEntry:
    """One child listed by a file source."""

    handle: str
    name: str
    is_dir: bool = False
    is_file: bool = False


class FileSource(ABC):
    """Walkable, deletable tree rooted at a single handle."""

    max_files: int | None = None
    """Stop walking after this many files. None means no cap."""

    @property
    @abstractmethod
    def root(self) -> str:
        """Handle of the root directory."""

    @abstractmethod
    def list_children(self, handle: str) -> list[SourceEntry]:
        """List a directory in a stable order. Raises OSError on failure."""

    @abstractmethod
    def size(self, handle: str) -> int:
        """Size in bytes of a file. Raises OSError on failure."""

    @abstractmethod
    def delete(self, handle: str) -> None:
        """Delete a single file. Raises OSError on failure."""

    @abstractmethod
    def contains(self, handle: str) -> bool:
        """Whether *handle* resolves to a location strictly inside the root."""

    @abstractmethod
    def relative(self, handle: str) -> str:
        """Path of *handle* relative to the root, '/' or os.sep separated."""

    def display_root(self) -> str:
        """Human-readable root for reports."""
        return self.root

    def check_root(self) -> None:
        """Raise RootUnavailableError if the root cannot be listed."""
        try:
            self.list_children(self.root)
        except OSError as exc:
            raise RootUnavailableError(f"Cannot read {self.display_root()}: {exc}") from exc


def _scandir_sorted(path: str) -> list[os.DirEntry]:
    with os.scandir(path) as it:
        return sorted(it, key=lambda e: e.name)


def _is_inside(path: str, root: str, sep: str = os.sep) -> bool:
    """Whether *path* is strictly below *root*; the root itself is not inside."""
    if not root.endswith(sep):
        root += sep
    return path != root and path.startswith(root)


def _unquote_fs(text: str) -> str:
    """Percent-decode into a filesystem name; undecodable bytes become surrogates."""
    return os.fsdecode(unquote_to_bytes(text))


def _entry_kind(entry: os.DirEntry) -> tuple[bool, bool]:
    """(is_dir, is_file) without following symlinks; unreadable entries are neither."""
    try:
        return entry.is_dir(follow_symlinks=False), entry.is_file(follow_symlinks=False)
    except OSError:
        log.debug("Cannot access: %s", entry.path)
        return False, False


class LocalFileSource(FileSource):
    """Plain filesystem paths under a root directory."""

    def __init__(self, root: Path | str) -> None:
        self._root = os.path.abspath(os.fspath(root))

    @property
    def root(self) -> str:
        return self._root

    def list_children(self, handle: str) -> list[SourceEntry]:
        children = []
        for entry in _scandir_sorted(handle):
            is_dir, is_file = _entry_kind(entry)
            children.append(SourceEntry(handle=entry.path, name=entry.name, is_dir=is_dir, is_file=is_file))
        return children

    def size(self, handle: str) -> int:
        return os.stat(handle, follow_symlinks=False).st_size

    def delete(self, handle: str) -> None:
        os.unlink(handle)

    def contains(self, handle: str) -> bool:
        return _is_inside(os.path.realpath(handle), os.path.realpath(self._root))

    def relative(self, handle: str) -> str:
        return os.path.relpath(handle, self._root)


class UriFileSource(FileSource):
    """Folder handle addressed by ``file://`` URIs.

    Every child handle is the parent URI plus one percent-encoded segment,
    and names are decoded back from the last segment. Segments encode the
    raw filesystem bytes, so names that are not valid UTF-8 survive the
    round trip. Walks are capped at ``max_files`` files.
    """

    def __init__(self, root: Path | str, max_files: int | None = URI_MAX_FILES) -> None:
        root = os.fspath(root)
        if not root.startswith("file:"):
            root = Path(root).absolute().as_uri()
        parts = urlsplit(root)
        # The filesystem root keeps its slash: file:/// rather than file:
        self._root = urlunsplit(parts._replace(path=parts.path.rstrip("/") or "/"))
        self.max_files = max_files

    @property
    def root(self) -> str:
        return self._root

    def display_root(self) -> str:
        return self._to_path(self._root)

    @staticmethod
    def _to_path(uri: str) -> str:
        return _unquote_fs(urlsplit(uri).path)

    @staticmethod
    def name_of(uri: str) -> str:
        """Decode the display name from the last URI segment."""
        last = uri.rstrip("/").rsplit("/", 1)[-1] or uri
        return _unquote_fs(last)

    def list_children(self, handle: str) -> list[SourceEntry]:
        children = []
        prefix = handle if handle.endswith("/") else handle + "/"
        for entry in _scandir_sorted(self._to_path(handle)):
            is_dir, is_file = _entry_kind(entry)
            child = prefix + quote(os.fsencode(entry.name), safe="")
            children.append(SourceEntry(handle=child, name=self.name_of(child), is_dir=is_dir, is_file=is_file))
        return children

    def size(self, handle: str) -> int:
        return os.stat(self._to_path(handle), follow_symlinks=False).st_size

    def delete(self, handle: str) -> None:
        os.unlink(self._to_path(handle))

    def contains(self, handle: str) -> bool:
        parts = urlsplit(handle)
        root_parts = urlsplit(self._root)
        if (parts.scheme, parts.netloc) != (root_parts.scheme, root_parts.netloc):
            return False
        path = posixpath.normpath(_unquote_fs(parts.path))
        root = posixpath.normpath(_unquote_fs(root_parts.path))
        if not _is_inside(path, root, "/"):
            return False
        # The decoded path must also resolve inside the real root directory.
        return _is_inside(os.path.realpath(self._to_path(handle)), os.path.realpath(self._to_path(self._root)))

    def relative(self, handle: str) -> str:
        rest = handle[len(self._root):].lstrip("/")
        return "/".join(_unquote_fs(seg) for seg in rest.split("/"))
