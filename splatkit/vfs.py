"""A read-only virtual file system over a directory, a zip archive or a single ply stream."""

from __future__ import annotations

import io
import os
import posixpath
import threading
import zipfile
from collections.abc import Iterable, Iterator
from pathlib import Path, PurePosixPath
from typing import BinaryIO, Union

PathLike = Union[str, "os.PathLike[str]"]

_PEEK_SIZE = 64
_PLY_NAME = PurePosixPath("input.ply")


class VfsConstructError(Exception):
    """Raised when a virtual file system cannot be built from its input."""


class InvalidHtmlError(VfsConstructError):
    """The input was an HTML status page instead of content."""

    def __init__(self, html: str) -> None:
        super().__init__(f"Got a status page instead of content: \n\n {html}")
        self.html = html


class UnknownDataTypeError(VfsConstructError):
    """The input is neither a zip archive nor a ply file."""

    def __init__(self) -> None:
        super().__init__("Unknown data type. Only zip and ply files are supported")


def _clean(path: PathLike) -> str:
    text = os.fspath(path).replace("\\", "/")
    return posixpath.normpath(text)


def path_key(path: PathLike) -> str:
    """Case-insensitive lookup key of a path: cleaned, lower case, '/'-separated, rooted."""
    key = _clean(path).lower()
    return key if key.startswith("/") else "/" + key


def _file_name(path: PurePosixPath) -> str | None:
    name = path.name
    return None if name in ("", ".", "..") else name


def _split_file_at_dot(name: str) -> tuple[str, str | None]:
    if name == "..":
        return name, None
    before, dot, after = name.rpartition(".")
    if not dot or not before:
        return name, None
    return before, after


def _extension(path: PurePosixPath) -> str | None:
    name = _file_name(path)
    return None if name is None else _split_file_at_dot(name)[1]


def _stem(path: PurePosixPath) -> str | None:
    name = _file_name(path)
    return None if name is None else _split_file_at_dot(name)[0]


def _lookup_from_paths(paths: Iterable[PathLike]) -> dict[str, PurePosixPath]:
    result: dict[str, PurePosixPath] = {}
    for raw in paths:
        path = PurePosixPath(_clean(raw))
        # Directories in zip files look like extensionless files; no needed file lacks an
        # extension, so those are skipped along with macOS resource forks.
        if _extension(path) is None or "__MACOSX" in path.parts:
            continue
        key = path_key(path)
        if key in result:
            raise ValueError(
                f"Duplicate path found: {path}. Paths must be unique (case non-sensitive)"
            )
        result[key] = path
    return result


class _PrefixedReader(io.RawIOBase):
    """Replays already consumed bytes before continuing with the rest of a stream."""

    def __init__(self, prefix: bytes, rest: BinaryIO) -> None:
        self._prefix = prefix
        self._rest = rest

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        if self._prefix:
            count = min(len(buffer), len(self._prefix))
            buffer[:count] = self._prefix[:count]
            self._prefix = self._prefix[count:]
            return count
        data = self._rest.read(len(buffer)) or b""
        buffer[: len(data)] = data
        return len(data)

    def close(self) -> None:
        try:
            self._rest.close()
        finally:
            super().close()


class _ZipContainer:
    def __init__(self, archive: zipfile.ZipFile) -> None:
        self._archive = archive
        self._names = {_clean(name): name for name in archive.namelist()}

    def open(self, path: PurePosixPath) -> BinaryIO:
        name = self._names.get(str(path), str(path))
        try:
            return io.BytesIO(self._archive.read(name))
        except KeyError as exc:
            raise FileNotFoundError(f"File not found: {path}") from exc


class _ManualContainer:
    """Holds streams that can each be handed out only once."""

    def __init__(self, readers: dict[PurePosixPath, BinaryIO]) -> None:
        self._readers: dict[PurePosixPath, BinaryIO | None] = dict(readers)
        self._lock = threading.Lock()

    def open(self, path: PurePosixPath) -> BinaryIO:
        with self._lock:
            reader = self._readers.get(path)
            self._readers[path] = None
        if reader is None:
            raise FileNotFoundError(f"File not found: {path}")
        return reader


class _DirectoryContainer:
    def __init__(self, base: Path) -> None:
        self._base = base

    def open(self, path: PurePosixPath) -> BinaryIO:
        return open(self._base.joinpath(*path.parts), "rb")


def _walk_dir(base: Path) -> list[PurePosixPath]:
    paths: list[PurePosixPath] = []
    stack = [base]
    while stack:
        current = stack.pop()
        with os.scandir(current) as entries:
            for entry in entries:
                entry_path = Path(entry.path)
                if entry_path.is_dir():
                    stack.append(entry_path)
                else:
                    paths.append(PurePosixPath(entry_path.relative_to(base).as_posix()))
    return paths


class BrushVfs:
    """Files addressed by case-insensitive paths, whatever holds them."""

    def __init__(
        self,
        lookup: dict[str, PurePosixPath],
        container: _ZipContainer | _ManualContainer | _DirectoryContainer,
    ) -> None:
        self._lookup = lookup
        self._container = container

    def file_count(self) -> int:
        """Number of files known to the file system."""
        return len(self._lookup)

    def file_paths(self) -> Iterator[PurePosixPath]:
        """All file paths."""
        return iter(list(self._lookup.values()))

    @classmethod
    def from_reader(cls, reader: BinaryIO) -> "BrushVfs":
        """Build from a binary stream holding a ply file or a zip archive."""
        try:
            peek = reader.read(_PEEK_SIZE) or b""
        except OSError as exc:
            raise VfsConstructError("I/O error while constructing BrushVfs.") from exc
        stream = io.BufferedReader(_PrefixedReader(peek, reader))

        if peek.startswith(b"ply"):
            return cls(
                _lookup_from_paths([_PLY_NAME]),
                _ManualContainer({_PLY_NAME: stream}),
            )
        try:
            if peek.startswith(b"PK"):
                data = stream.read()
                try:
                    archive = zipfile.ZipFile(io.BytesIO(data))
                except (zipfile.BadZipFile, zipfile.LargeZipFile) as exc:
                    raise VfsConstructError(
                        "Zip creation failed while constructing BrushVfs."
                    ) from exc
                return cls(_lookup_from_paths(archive.namelist()), _ZipContainer(archive))
            if peek.startswith(b"<!DOCTYPE html>"):
                try:
                    html = stream.read().decode("utf-8")
                except UnicodeDecodeError as exc:
                    raise VfsConstructError("I/O error while constructing BrushVfs.") from exc
                raise InvalidHtmlError(html)
            raise UnknownDataTypeError()
        except OSError as exc:
            raise VfsConstructError("I/O error while constructing BrushVfs.") from exc

    @classmethod
    def from_path(cls, path: PathLike) -> "BrushVfs":
        """Build from a file (ply or zip) or from every file below a directory."""
        base = Path(path)
        if base.is_file():
            try:
                handle = open(base, "rb")
            except OSError as exc:
                raise VfsConstructError("I/O error while constructing BrushVfs.") from exc
            try:
                vfs = cls.from_reader(handle)
            except BaseException:
                handle.close()
                raise
            if not isinstance(vfs._container, _ManualContainer):
                handle.close()
            return vfs
        try:
            files = _walk_dir(base)
        except OSError as exc:
            raise VfsConstructError("I/O error while constructing BrushVfs.") from exc
        return cls(_lookup_from_paths(files), _DirectoryContainer(base))

    def files_with_extension(self, extension: str) -> Iterator[PurePosixPath]:
        """Paths whose extension matches, ignoring case."""
        wanted = extension.lower()
        for path in list(self._lookup.values()):
            ext = _extension(path)
            if ext is not None and ext.lower() == wanted:
                yield path

    def files_ending_in(self, end_path: PathLike) -> Iterator[PurePosixPath]:
        """Paths whose lookup key ends with the key of ``end_path``."""
        end_key = path_key(end_path)
        for key, path in list(self._lookup.items()):
            if key.endswith(end_key):
                yield path

    def files_with_stem(self, filestem: str) -> Iterator[PurePosixPath]:
        """Paths whose file stem matches, ignoring case."""
        wanted = filestem.lower()
        for path in list(self._lookup.values()):
            stem = _stem(path)
            if stem is not None and stem.lower() == wanted:
                yield path

    def reader_at_path(self, path: PathLike) -> BinaryIO:
        """Open the file at ``path`` for reading.

        Raises FileNotFoundError when it is unknown; a single streamed ply can be
        opened only once.
        """
        stored = self._lookup.get(path_key(path))
        if stored is None:
            raise FileNotFoundError(f"File not found: {os.fspath(path)}")
        return self._container.open(stored)