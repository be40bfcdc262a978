"""Writer ports: where reporter output goes."""

from typing import Protocol


class LineWriter(Protocol):
    """Output sink capability.

    Buffers are written as-is, newlines included. The writer decides
    escaping and flushing policy.
    """

    def write(self, buffer: str) -> None:
        """Write buffer to the sink."""
        ...

    def flush(self) -> None:
        """Flush pending output."""
        ...


class EchoCollector(Protocol):
    """Receives a copy of every written buffer (CI echo)."""

    def append(self, buffer: str) -> None: ...


class TextStream(Protocol):
    """Minimal text stream: sys.stdout, open files, pytest terminal."""

    def write(self, text: str, /) -> int: ...

    def flush(self) -> None: ...
