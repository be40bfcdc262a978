"""Reporter configuration.

Resolved once at startup (infrastructure.environment), immutable after.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from progressprinter.domain.exceptions import ConfigurationError


class ColorMode(Enum):
    """When to colorize outcome tokens."""

    ALWAYS = "always"
    NEVER = "never"
    AUTO = "auto"

    @classmethod
    def parse(cls, value: str) -> ColorMode:
        """Parse option value (case-insensitive).

        Raises:
            ConfigurationError: value is not always, never or auto
        """
        try:
            return cls(value.strip().lower())
        except ValueError:
            choices = ", ".join(m.value for m in cls)
            raise ConfigurationError("color", f"expected one of {choices}, got '{value}'") from None


@dataclass(frozen=True, slots=True)
class PrinterConfig:
    """Reporter configuration DTO.

    Attributes:
        color_mode: Token colorization mode.
        verbose: Passed through from the host, no local effect.
        debug: Enables debug logging.
        terminal_width: Terminal columns (must be > 0).
        auto_flush: Flush the sink after every write.
        ci_echo_enabled: Echo full error descriptions and mirror every
            write into the echo collector.
        html_escape_output: HTML-escape writes to the primary output.
            Never applied to an explicit output_path.
        output_path: Sink file. None = primary output.
        echo_path: File receiving the echo buffer at run end.
            None = in memory only.
    """

    color_mode: ColorMode = ColorMode.AUTO
    verbose: bool = False
    debug: bool = False
    terminal_width: int = 80
    auto_flush: bool = False
    ci_echo_enabled: bool = False
    html_escape_output: bool = False
    output_path: Path | None = None
    echo_path: Path | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.terminal_width <= 0:
            raise ValueError(f"terminal_width must be > 0, got {self.terminal_width}")

    @property
    def escapes_html(self) -> bool:
        """True if writes to the resolved sink are HTML-escaped."""
        return self.html_escape_output and self.output_path is None
