"""Reading and writing asset files in a local directory."""

import logging
from pathlib import Path

from .asset import File, WritableAsset

__all__ = [
    "DirectoryFileFetcher",
    "InMemoryFileFetcher",
    "write_files",
]

_LOGGER = logging.getLogger(__name__)


class DirectoryFileFetcher:
    """Fetches asset files relative to a directory."""

    def __init__(self, directory: Path) -> None:
        """Initialize DirectoryFileFetcher."""
        self._directory = Path(directory)

    @property
    def directory(self) -> Path:
        return self._directory

    def fetch_by_name(self, filename: str) -> File:
        """Return the named file, raising FileNotFoundError if absent."""
        path = self._directory / filename
        _LOGGER.debug("Reading %s", path)
        return File(filename=filename, data=path.read_bytes())


class InMemoryFileFetcher:
    """Fetches asset files held in memory, e.g. the output of other assets."""

    def __init__(self, files: list[File] | None = None) -> None:
        """Initialize InMemoryFileFetcher."""
        self._files: dict[str, File] = {}
        for file in files or ():
            self.add(file)

    def add(self, file: File) -> None:
        """Add or replace a file."""
        self._files[file.filename] = file

    def fetch_by_name(self, filename: str) -> File:
        """Return the named file, raising FileNotFoundError if absent."""
        if (file := self._files.get(filename)) is None:
            raise FileNotFoundError(f"No such file: {filename}")
        return file


def write_files(directory: Path, asset: WritableAsset) -> list[Path]:
    """Write the files of an asset below the directory.

    Returns the paths that were written.
    """
    written: list[Path] = []
    for file in asset.files():
        path = Path(directory) / file.filename
        path.parent.mkdir(parents=True, exist_ok=True)
        _LOGGER.info("Writing %s for %s", path, asset.name)
        path.write_bytes(file.data)
        written.append(path)
    return written
