"""pytest plugin for progressprinter.

Replaces pytest's progress letters with one header line and one colored
outcome token per test.

Options (command line, or the same name as ini option):
    --progress-printer: Enable the printer (ini: progress_printer)
    --progress-output: Write to file instead of the terminal
    --progress-color: always, never or auto (default)
    --progress-autoflush: Flush after every write
    --progress-html-escape: HTML-escape terminal output
    --progress-ci-echo: Echo error descriptions and collect all output
        (also enabled by the TDDIUM environment variable)
    --progress-echo-file: Write collected output to file at session end
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from functools import partial
from typing import TYPE_CHECKING, TextIO

import pytest

from progressprinter.application.printer import ProgressPrinter
from progressprinter.domain.exceptions import ConfigurationError
from progressprinter.domain.model.configuration import ColorMode, PrinterConfig
from progressprinter.infrastructure.environment import resolve_config
from progressprinter.infrastructure.logging import setup_logging, teardown_logging
from progressprinter.infrastructure.terminal import TerminalWriterStream, resolve_colors
from progressprinter.infrastructure.writers import EchoBuffer, build_writer
from progressprinter.presentation.pytest_plugin.adapter import PytestProgressAdapter

if TYPE_CHECKING:
    from pathlib import Path

    from progressprinter.domain.ports.writer import TextStream

__all__ = [
    "PytestProgressAdapter",
    "echo_buffer_key",
]

ADAPTER_NAME = "progressprinter-adapter"

# CI echo buffer, present only while CI echo is enabled
echo_buffer_key = pytest.StashKey[EchoBuffer]()


@dataclass(slots=True)
class _PluginState:
    """Resources owned by the plugin between configure and unconfigure."""

    settings: PrinterConfig
    adapter: PytestProgressAdapter
    sink_file: TextIO | None


_state_key = pytest.StashKey[_PluginState]()


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("progressprinter", "line-oriented progress printer")
    group.addoption(
        "--progress-printer",
        action="store_true",
        default=False,
        help="Print a header and a colored outcome token per test.",
    )
    group.addoption(
        "--progress-output",
        metavar="PATH",
        default=None,
        help="Write progress output to PATH instead of the terminal.",
    )
    group.addoption(
        "--progress-color",
        choices=[mode.value for mode in ColorMode],
        default=None,
        help="Colorize outcome tokens: always, never or auto (default).",
    )
    group.addoption(
        "--progress-autoflush",
        action="store_true",
        default=False,
        help="Flush progress output after every write.",
    )
    group.addoption(
        "--progress-html-escape",
        action="store_true",
        default=False,
        help="HTML-escape progress output written to the terminal.",
    )
    group.addoption(
        "--progress-ci-echo",
        action="store_true",
        default=False,
        help="Echo full error descriptions and collect all progress output "
        "(also enabled by the TDDIUM environment variable).",
    )
    group.addoption(
        "--progress-echo-file",
        metavar="PATH",
        default=None,
        help="Write collected progress output to PATH at session end.",
    )

    parser.addini("progress_printer", "Enable the progress printer.", type="bool", default=False)
    parser.addini("progress_output", "Progress output file.", default="")
    parser.addini("progress_color", "Color mode: always, never or auto.", default="auto")
    parser.addini("progress_autoflush", "Flush after every write.", type="bool", default=False)
    parser.addini("progress_html_escape", "HTML-escape terminal output.", type="bool", default=False)
    parser.addini("progress_ci_echo", "Enable CI echo.", type="bool", default=False)
    parser.addini("progress_echo_file", "CI echo dump file.", default="")


def _get_flag(config: pytest.Config, name: str) -> bool:
    """Command line flag, falling back to the ini option."""
    return bool(config.getoption(name) or config.getini(name))


def _get_value(config: pytest.Config, name: str, default: str) -> str:
    """Command line value, falling back to the ini option, then default."""
    value = config.getoption(name) or config.getini(name)
    if value:
        return str(value)
    return default


def _build_settings(config: pytest.Config, terminal_width: int) -> PrinterConfig:
    try:
        return resolve_config(
            color=_get_value(config, "progress_color", ColorMode.AUTO.value),
            verbose=config.get_verbosity() > 0,
            debug=bool(config.getoption("debug", None)),
            terminal_width=terminal_width,
            auto_flush=_get_flag(config, "progress_autoflush"),
            ci_echo=_get_flag(config, "progress_ci_echo"),
            html_escape=_get_flag(config, "progress_html_escape"),
            output_path=_get_value(config, "progress_output", ""),
            echo_path=_get_value(config, "progress_echo_file", ""),
        )
    except ConfigurationError as exc:
        raise pytest.UsageError(str(exc)) from exc


@pytest.hookimpl(trylast=True)
def pytest_configure(config: pytest.Config) -> None:
    """Build the printer and register the adapter.

    Runs last so the terminal reporter is already registered.
    """
    if not _get_flag(config, "progress_printer"):
        return

    primary: TextStream = sys.stdout
    host_colors: bool | None = None
    width = 80
    reporter = config.pluginmanager.get_plugin("terminalreporter")
    if reporter is not None:
        tw = config.get_terminal_writer()
        terminal = TerminalWriterStream(tw)
        primary, host_colors, width = terminal, terminal.hasmarkup, tw.fullwidth

    settings = _build_settings(config, width)
    setup_logging(settings.debug)

    sink_file: TextIO | None = None
    on_terminal = settings.output_path is None and reporter is not None
    if settings.output_path is not None:
        settings.output_path.parent.mkdir(parents=True, exist_ok=True)
        sink_file = settings.output_path.open("w", encoding="utf-8")
        colors = resolve_colors(settings.color_mode, sink_file)
    else:
        colors = resolve_colors(settings.color_mode, sys.stdout, default=host_colors)
        if reporter is not None:
            # Header lines replace the per-file progress line
            reporter.showfspath = False

    echo_buffer = EchoBuffer() if settings.ci_echo_enabled else None
    writer = build_writer(
        sink_file if sink_file is not None else primary,
        html_escape=settings.escapes_html,
        auto_flush=settings.auto_flush,
        collector=echo_buffer,
    )
    printer = ProgressPrinter(writer, settings, colors=colors, echo_stream=primary)
    adapter = PytestProgressAdapter(
        printer,
        count_assertions=bool(config.getini("enable_assertion_pass_hook")),
        blank_letters=on_terminal,
        on_session_finish=partial(_finish_run, printer, echo_buffer, settings.echo_path),
    )

    config.stash[_state_key] = _PluginState(settings=settings, adapter=adapter, sink_file=sink_file)
    if echo_buffer is not None:
        config.stash[echo_buffer_key] = echo_buffer
    config.pluginmanager.register(adapter, ADAPTER_NAME)


def _finish_run(printer: ProgressPrinter, echo_buffer: EchoBuffer | None, echo_path: Path | None) -> None:
    """Footer, flush, and echo dump at session end."""
    printer.print_footer()
    printer.close()

    if echo_buffer is not None and echo_path is not None:
        echo_buffer.dump(echo_path)


def pytest_unconfigure(config: pytest.Config) -> None:
    state = config.stash.get(_state_key, None)
    if state is None:
        return

    config.pluginmanager.unregister(state.adapter, ADAPTER_NAME)
    if state.sink_file is not None:
        state.sink_file.close()
    if state.settings.debug:
        teardown_logging()
    del config.stash[_state_key]
