"""Terminal capabilities: color detection and pytest TerminalWriter bridge."""

from __future__ import annotations

from typing import TYPE_CHECKING, TextIO

from rich.console import Console

from progressprinter.domain.model.configuration import ColorMode

if TYPE_CHECKING:
    from _pytest._io import TerminalWriter


def detect_color(stream: TextIO) -> bool:
    """Check whether stream supports ANSI colors.

    Delegates to rich: honours NO_COLOR, FORCE_COLOR, TERM=dumb and
    isatty() of the stream.
    """
    console = Console(file=stream)
    return console.color_system is not None


def resolve_colors(mode: ColorMode, stream: TextIO, default: bool | None = None) -> bool:
    """Resolve color mode to on/off for a stream.

    Args:
        mode: Configured color mode.
        stream: Sink stream, probed in AUTO mode.
        default: Decision already made by the host for this stream
            (pytest --color). Used in AUTO mode instead of probing.
    """
    match mode:
        case ColorMode.ALWAYS:
            return True
        case ColorMode.NEVER:
            return False
        case ColorMode.AUTO:
            return default if default is not None else detect_color(stream)


class TerminalWriterStream:
    """Text stream facade over pytest's TerminalWriter.

    pytest captures sys.stdout during the session; the terminal writer
    holds the real terminal.
    """

    def __init__(self, tw: TerminalWriter) -> None:
        self._tw = tw

    @property
    def hasmarkup(self) -> bool:
        """pytest's own color decision for the terminal."""
        return bool(self._tw.hasmarkup)

    def write(self, text: str) -> int:
        self._tw.write(text)
        return len(text)

    def flush(self) -> None:
        self._tw.flush()
