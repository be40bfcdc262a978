"""LineWriter implementations.

StreamWriter writes to any text stream, TeeWriter mirrors writes into an
EchoCollector (the CI echo buffer), HtmlEscapeWriter escapes buffers before
passing them on.
"""

from __future__ import annotations

import html
from io import StringIO
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from progressprinter.domain.ports.writer import EchoCollector, LineWriter, TextStream


class StreamWriter:
    """Writes buffers to a text stream.

    Does not own the stream: closing is the caller's job.
    """

    def __init__(self, stream: TextStream, *, auto_flush: bool = False) -> None:
        """Initialize writer.

        Args:
            stream: Destination stream.
            auto_flush: Flush after every write.
        """
        self._stream = stream
        self._auto_flush = auto_flush

    def write(self, buffer: str) -> None:
        self._stream.write(buffer)

        if self._auto_flush:
            self.flush()

    def flush(self) -> None:
        self._stream.flush()


class HtmlEscapeWriter:
    """HTML-escapes buffers (output for a non-terminal consumer)."""

    def __init__(self, inner: LineWriter) -> None:
        self._inner = inner

    def write(self, buffer: str) -> None:
        self._inner.write(html.escape(buffer))

    def flush(self) -> None:
        self._inner.flush()


class TeeWriter:
    """Writes through to inner writer, then copies the buffer to a collector."""

    def __init__(self, inner: LineWriter, collector: EchoCollector) -> None:
        self._inner = inner
        self._collector = collector

    def write(self, buffer: str) -> None:
        self._inner.write(buffer)
        self._collector.append(buffer)

    def flush(self) -> None:
        self._inner.flush()


class EchoBuffer:
    """In-memory echo collector.

    Holds everything the reporter wrote while CI echo is enabled, for the
    CI integration to collect after the run.
    """

    def __init__(self) -> None:
        self._buffer = StringIO()

    def append(self, buffer: str) -> None:
        self._buffer.write(buffer)

    def getvalue(self) -> str:
        return self._buffer.getvalue()

    def clear(self) -> None:
        self._buffer = StringIO()

    def dump(self, path: Path) -> None:
        """Write collected output to path (UTF-8), creating parent dirs."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.getvalue(), encoding="utf-8")


def build_writer(
    stream: TextStream,
    *,
    html_escape: bool = False,
    auto_flush: bool = False,
    collector: EchoCollector | None = None,
) -> LineWriter:
    """Compose the writer chain for a sink.

    Escaping is outermost, so the collector receives the same escaped text
    as the stream.

    Args:
        stream: Sink stream.
        html_escape: HTML-escape every buffer.
        auto_flush: See StreamWriter.
        collector: If given, every write is mirrored into it.

    Returns:
        StreamWriter, wrapped in a TeeWriter when collector is given and in
        an HtmlEscapeWriter when html_escape is set.
    """
    writer: LineWriter = StreamWriter(stream, auto_flush=auto_flush)
    if collector is not None:
        writer = TeeWriter(writer, collector)
    if html_escape:
        writer = HtmlEscapeWriter(writer)
    return writer
