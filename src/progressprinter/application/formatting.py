"""ANSI SGR formatting of outcome tokens."""

from __future__ import annotations

from types import MappingProxyType

from progressprinter.domain.exceptions import UnknownStyleError

ESC = "\x1b"
RESET = f"{ESC}[0m"

# Closed table: any other name is a programming error
ANSI_CODES = MappingProxyType(
    {
        "bold": 1,
        "fg-black": 30,
        "fg-red": 31,
        "fg-green": 32,
        "fg-yellow": 33,
        "fg-cyan": 36,
        "fg-white": 37,
        "bg-red": 41,
        "bg-green": 42,
        "bg-yellow": 43,
    }
)


def style_codes(styles: str) -> tuple[int, ...]:
    """Resolve comma-separated style names to SGR codes.

    Args:
        styles: e.g. "fg-red, bold"

    Returns:
        Codes in the order given.

    Raises:
        UnknownStyleError: a name is not in ANSI_CODES
    """
    codes: list[int] = []
    for name in (part.strip() for part in styles.split(",")):
        if name not in ANSI_CODES:
            raise UnknownStyleError(name or repr(styles))
        codes.append(ANSI_CODES[name])
    return tuple(codes)


def format_with_color(styles: str, buffer: str, *, enabled: bool = True) -> str:
    """Wrap every line of buffer in the given SGR style.

    Lines are right-padded to the longest line first, so a multi-line
    block renders as a rectangle.

    Args:
        styles: Comma-separated style names.
        buffer: Text, may span lines.
        enabled: False returns buffer unchanged.

    Returns:
        Styled text.
    """
    if not enabled:
        return buffer

    style = f"{ESC}[{';'.join(str(code) for code in style_codes(styles))}m"
    lines = buffer.split("\n")
    padding = max(len(line) for line in lines)

    return "\n".join(f"{style}{line.ljust(padding)}{RESET}" for line in lines)
