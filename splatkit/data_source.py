"""Where a scene comes from: a picked file or directory, a URL or a local path."""

from __future__ import annotations

import enum
import urllib.error
import urllib.request
from dataclasses import dataclass

from splatkit.vfs import BrushVfs, VfsConstructError


class SourceKind(enum.Enum):
    """The kinds of places a scene can be loaded from."""

    PICK_FILE = "pick_file"
    PICK_DIRECTORY = "pick_directory"
    URL = "url"
    PATH = "path"


class DataSourceError(Exception):
    """Raised when a data source cannot be opened."""


def normalize_url(url: str) -> str:
    """Complete a URL given without a scheme by assuming https."""
    if url.startswith(("https://", "http://")) or url.startswith("/"):
        return url
    return f"https://{url}"


def _pick(directory: bool) -> str:
    try:
        import tkinter
        from tkinter import filedialog
    except ImportError as exc:
        raise DataSourceError("File picking is not available on this system") from exc
    try:
        root = tkinter.Tk()
    except tkinter.TclError as exc:
        raise DataSourceError("File picking is not available on this system") from exc
    try:
        root.withdraw()
        chosen = filedialog.askdirectory() if directory else filedialog.askopenfilename()
    finally:
        root.destroy()
    if not chosen:
        raise DataSourceError("No file was selected")
    return chosen


@dataclass(frozen=True)
class DataSource:
    """A place to load a scene from; ``value`` holds the URL or path where needed."""

    kind: SourceKind
    value: str | None = None

    def __post_init__(self) -> None:
        needs_value = self.kind in (SourceKind.URL, SourceKind.PATH)
        if needs_value and self.value is None:
            raise ValueError(f"{self.kind.value} source needs a value")
        if not needs_value and self.value is not None:
            raise ValueError(f"{self.kind.value} source takes no value")

    @classmethod
    def parse(cls, text: str) -> "DataSource":
        """Read a command-line argument: http(s) addresses are URLs, anything else a path."""
        if text.startswith(("http://", "https://")):
            return cls(SourceKind.URL, text)
        # The path may not exist; that is found out when loading.
        return cls(SourceKind.PATH, text)

    def into_vfs(self) -> BrushVfs:
        """Open the source as a virtual file system."""
        try:
            if self.kind is SourceKind.PICK_FILE:
                path = _pick(directory=False)
                return BrushVfs.from_path(path)
            if self.kind is SourceKind.PICK_DIRECTORY:
                return BrushVfs.from_path(_pick(directory=True))
            if self.kind is SourceKind.URL:
                return self._fetch_url(self.value or "")
            return BrushVfs.from_path(self.value or "")
        except VfsConstructError as exc:
            raise DataSourceError(str(exc)) from exc

    @staticmethod
    def _fetch_url(url: str) -> BrushVfs:
        url = normalize_url(url)
        try:
            response = urllib.request.urlopen(url)
        except urllib.error.HTTPError as status:
            # Like a plain GET, an error status still delivers its body.
            response = status
        except (urllib.error.URLError, ValueError, OSError) as exc:
            raise DataSourceError(f"Failed to fetch {url}: {exc}") from exc
        try:
            return BrushVfs.from_reader(response)
        except BaseException:
            response.close()
            raise