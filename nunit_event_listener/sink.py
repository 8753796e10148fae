"""Append-only sinks receiving one line per processed test case."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path


class LogSink(ABC):
    """Abstract append-only text sink."""

    @abstractmethod
    def write(self, line: str) -> None:
        """Append a line to the sink.

        Raises:
            OSError: If the underlying medium cannot be written

        """


@dataclass(frozen=True, kw_only=True)
class FileLogSink(LogSink):
    """Appends lines to a text file, creating it on first write."""

    path: Path

    def write(self, line: str) -> None:
        """Append the line followed by a newline."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(f"{line}\n")
