"""Configuration resolution.

The environment is read once here; the reporter only sees PrinterConfig.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING

from progressprinter.domain.model.configuration import ColorMode, PrinterConfig

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)

# Set by the Solano CI (tddium) workers
CI_ECHO_ENV_VAR = "TDDIUM"


def is_truthy(value: str | None) -> bool:
    """Environment flag truthiness: set, non-empty and not "0"."""
    return value is not None and value not in ("", "0")


def ci_echo_from_env(environ: Mapping[str, str] | None = None) -> bool:
    """True if the CI echo environment flag is set."""
    env = os.environ if environ is None else environ
    return is_truthy(env.get(CI_ECHO_ENV_VAR))


def resolve_config(
    *,
    color: str | ColorMode = ColorMode.AUTO,
    verbose: bool = False,
    debug: bool = False,
    terminal_width: int = 80,
    auto_flush: bool = False,
    ci_echo: bool = False,
    html_escape: bool = False,
    output_path: str | Path | None = None,
    echo_path: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> PrinterConfig:
    """Build PrinterConfig from option values and the environment.

    Args:
        color: ColorMode or its option string.
        ci_echo: Force CI echo on. Otherwise taken from the environment.
        output_path: Sink file. Empty string = primary output.
        echo_path: Echo buffer dump file. Empty string = none.
        environ: Environment mapping (default: os.environ).

    Returns:
        Immutable configuration.

    Raises:
        ConfigurationError: invalid color value
    """
    config = PrinterConfig(
        color_mode=color if isinstance(color, ColorMode) else ColorMode.parse(color),
        verbose=verbose,
        debug=debug,
        terminal_width=terminal_width,
        auto_flush=auto_flush,
        ci_echo_enabled=ci_echo or ci_echo_from_env(environ),
        html_escape_output=html_escape,
        output_path=Path(output_path) if output_path else None,
        echo_path=Path(echo_path) if echo_path else None,
    )
    logger.debug("Resolved printer config: %s", config)
    return config
