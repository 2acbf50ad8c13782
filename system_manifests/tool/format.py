"""Library for formatting command output."""

from abc import ABC, abstractmethod
from collections.abc import Generator
import json
import sys
from typing import Any, TextIO

import yaml

PADDING = 4

TABLE = "table"
JSON = "json"
YAML = "yaml"


def column_format_string(rows: list[list[str]]) -> str:
    """Produce a format string based on max width of columns."""
    widths = [0] * len(rows[0])
    for row in rows:
        for i, value in enumerate(row):
            widths[i] = max(widths[i], len(value))
    return "".join(f"{{:{w + PADDING}}}" for w in widths)


def format_columns(
    headers: list[str], rows: list[list[str]]
) -> Generator[str, None, None]:
    """Produce the specified rows aligned in columns under the headers."""
    if not headers:
        return
    data = [headers] + rows
    format_string = column_format_string(data)
    for row in data:
        yield format_string.format(*row)


class Formatter(ABC):
    """A formatter for a list of records."""

    @abstractmethod
    def format(self, data: list[dict[str, Any]]) -> Generator[str, None, None]:
        """Format the records as lines of output."""

    def print(self, data: list[dict[str, Any]], file: TextIO | None = None) -> None:
        """Output the records, to stdout unless a file is given."""
        for line in self.format(data):
            print(line, file=file or sys.stdout)


class TableFormatter(Formatter):
    """A formatter that prints human readable columns."""

    def __init__(self, keys: list[str] | None = None) -> None:
        """Initialize TableFormatter with the keys to print, default all keys."""
        self._keys = keys

    def format(self, data: list[dict[str, Any]]) -> Generator[str, None, None]:
        """Format the records as columns."""
        if not data:
            return
        keys = self._keys if self._keys is not None else list(data[0])
        rows = [[str(record.get(key, "")) for key in keys] for record in data]
        yield from format_columns([key.upper() for key in keys], rows)


class YamlFormatter(Formatter):
    """A formatter that prints the records as a yaml list."""

    def format(self, data: list[dict[str, Any]]) -> Generator[str, None, None]:
        """Format the records as yaml."""
        yield from yaml.dump(data, sort_keys=False, explicit_start=True).splitlines()


class JsonFormatter(Formatter):
    """A formatter that prints the records as a json array."""

    def format(self, data: list[dict[str, Any]]) -> Generator[str, None, None]:
        """Format the records as json."""
        yield from json.dumps(data, indent=4, sort_keys=False).splitlines()


def formatter(output: str, keys: list[str] | None = None) -> Formatter:
    """Return the formatter for the output format name."""
    if output == JSON:
        return JsonFormatter()
    if output == YAML:
        return YamlFormatter()
    if output == TABLE:
        return TableFormatter(keys)
    raise ValueError(f"Unsupported output format: {output}")
