"""Output formatters for the agent-manifests command line tool."""

from abc import ABC, abstractmethod
import sys
from typing import Any, Generator, TextIO

import yaml

__all__ = [
    "format_columns",
    "PrintFormatter",
    "StructFormatter",
    "YamlFormatter",
]

PADDING = 4


def column_format_string(rows: list[list[str]]) -> str:
    """Return a format string wide enough for the longest value of each column."""
    widths = [max(len(row[col]) for row in rows) for col in range(len(rows[0]))]
    return "".join(f"{{:{width + PADDING}}}" for width in widths)


def format_columns(
    headers: list[str], rows: list[list[str]]
) -> Generator[str, None, None]:
    """Yield the header and rows aligned in columns."""
    data = [headers] + rows
    if not (format_string := column_format_string(data)):
        return
    for row in data:
        yield format_string.format(*row).rstrip()


class PrintFormatter:
    """Prints summary rows as a human readable table."""

    def __init__(self, keys: list[str] | None = None):
        """Initialize PrintFormatter with the columns to print."""
        self._keys = keys

    def format(self, data: list[dict[str, Any]]) -> Generator[str, None, None]:
        """Yield the table lines, one header and one line per row."""
        if not data:
            return
        keys = self._keys if self._keys is not None else list(data[0])
        rows = [[str(row.get(key, "")) for key in keys] for row in data]
        yield from format_columns([key.upper() for key in keys], rows)

    def print(self, data: list[dict[str, Any]], file: TextIO = sys.stdout) -> None:
        """Print the table."""
        for line in self.format(data):
            print(line, file=file)


class StructFormatter(ABC):
    """Prints manifests as structured documents."""

    @abstractmethod
    def format(self, data: list[dict[str, Any]]) -> Generator[str, None, None]:
        """Yield the output lines."""

    @abstractmethod
    def print(self, data: list[dict[str, Any]], file: TextIO = sys.stdout) -> None:
        """Print the documents."""


class YamlFormatter(StructFormatter):
    """Prints each manifest as a separate YAML document."""

    def format(self, data: list[dict[str, Any]]) -> Generator[str, None, None]:
        yield from yaml.dump_all(data, sort_keys=False, explicit_start=True).split(
            "\n"
        )

    def print(self, data: list[dict[str, Any]], file: TextIO = sys.stdout) -> None:
        print(
            yaml.dump_all(data, sort_keys=False, explicit_start=True), end="", file=file
        )
