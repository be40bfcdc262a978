"""Progress printer: one header line and one outcome token per test.

Implements TestOutcomeListener on top of a LineWriter. Knows nothing
about the host runner; an adapter translates host events into calls.

Output for a passing test:

    (blank line)
    Starting test 'tests/test_a.py::test_ok'.
    PASS
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

from progressprinter.application.formatting import format_with_color
from progressprinter.domain.model.configuration import PrinterConfig
from progressprinter.domain.model.outcome import Outcome
from progressprinter.domain.model.run_stats import RunStats

if TYPE_CHECKING:
    from progressprinter.domain.model.test_info import OutcomeDetail, TestInfo
    from progressprinter.domain.ports.writer import LineWriter, TextStream

logger = logging.getLogger(__name__)

_FOOTER_FAILURE_STYLE = "fg-white, bg-red"
_FOOTER_NOTICE_STYLE = "fg-black, bg-yellow"
_FOOTER_OK_STYLE = "fg-black, bg-green"


class ProgressPrinter:
    """Line-oriented progress reporter.

    State is per test: last_test_failed suppresses the PASS token once any
    failure-class outcome was reported, last_test_name pairs a skip with
    the started test. num_assertions accumulates over the whole run.

    Single-threaded: the host calls one callback at a time.
    """

    def __init__(
        self,
        writer: LineWriter,
        config: PrinterConfig | None = None,
        *,
        colors: bool = False,
        echo_stream: TextStream | None = None,
    ) -> None:
        """Initialize printer.

        Args:
            writer: Output sink.
            config: Reporter configuration. Uses defaults if None.
            colors: Resolved colorization (see infrastructure.terminal).
            echo_stream: Primary output for CI echo of error descriptions.
                Default: sys.stdout at echo time.
        """
        self._writer = writer
        self._config = config or PrinterConfig()
        self._colors = colors
        self._echo_stream = echo_stream
        self._stats = RunStats()
        self._tokens_on_line = 0

        self.last_test_failed = False
        self.last_test_name = ""

    @property
    def num_assertions(self) -> int:
        """Assertions over all ended tests."""
        return self._stats.num_assertions

    # Writing

    def write(self, buffer: str) -> None:
        self._writer.write(buffer)

    def write_new_line(self) -> None:
        self._writer.write("\n")

    def format_with_color(self, styles: str, buffer: str) -> str:
        """Style buffer if colors are enabled, identity otherwise."""
        return format_with_color(styles, buffer, enabled=self._colors)

    def write_progress_with_color(self, outcome: Outcome) -> None:
        """Write the outcome token of the current test."""
        if self._tokens_on_line:
            self.write(" ")
        self.write(self.format_with_color(outcome.style, outcome.label))
        self._tokens_on_line += 1
        self._stats.record(outcome)
        if outcome.is_failure_class:
            self.last_test_failed = True

    def flush(self) -> None:
        self._writer.flush()

    def close(self) -> None:
        """Flush pending output. The sink itself is owned by the caller."""
        self.flush()

    # Lifecycle

    def on_test_start(self, test: TestInfo) -> None:
        self.write(f"\nStarting test '{test.description}'.\n")
        self.last_test_name = test.name
        self._tokens_on_line = 0

    def on_test_end(self, test: TestInfo, elapsed: float) -> None:
        if not self.last_test_failed:
            self.write_progress_with_color(Outcome.PASS)

        self._stats.add_assertions(test.assertion_count)
        self._stats.tests_run += 1

        self.last_test_failed = False
        self.last_test_name = ""
        self._tokens_on_line = 0

        if test.output and not test.expects_output:
            self.write_new_line()
            self.write(test.output)

        self.write_new_line()

    def on_error(self, test: TestInfo, detail: OutcomeDetail, elapsed: float) -> None:
        self._report_failure_class(Outcome.ERROR, detail)

    def on_failure(self, test: TestInfo, detail: OutcomeDetail, elapsed: float) -> None:
        self._report_failure_class(Outcome.FAIL, detail)

    def on_warning(self, test: TestInfo, detail: OutcomeDetail, elapsed: float) -> None:
        self._report_failure_class(Outcome.WARNING, detail)

    def on_incomplete(self, test: TestInfo, detail: OutcomeDetail, elapsed: float) -> None:
        self._report_failure_class(Outcome.INCOMPLETE, detail)

    def on_risky(self, test: TestInfo, detail: OutcomeDetail, elapsed: float) -> None:
        self._report_failure_class(Outcome.RISKY, detail)

    def on_skipped(self, test: TestInfo, detail: OutcomeDetail, elapsed: float) -> None:
        """Report a skip.

        A test skipped before it was started (unmet dependency, skip at
        collection) gets a standalone SKIPPING block and no on_test_end.
        Tests are matched by name only.
        """
        if test.name != self.last_test_name:
            logger.debug("Skip of non-started test %s", test.description)
            self.write_new_line()
            self.write(
                self.format_with_color(Outcome.SKIPPING.style, f"SKIPPING: {test.description}")
            )
            self.write_new_line()
            self.write(detail.message)
            self.write_new_line()
            self._stats.record(Outcome.SKIPPED)
        else:
            self.write_progress_with_color(Outcome.SKIPPED)

    def _report_failure_class(self, outcome: Outcome, detail: OutcomeDetail) -> None:
        self.write_progress_with_color(outcome)

        if self._config.ci_echo_enabled:
            stream = self._echo_stream if self._echo_stream is not None else sys.stdout
            print("\n" + detail.description, end="", file=stream)

    # Run end

    def print_footer(self) -> None:
        """Write run totals as a colored block."""
        stats = self._stats
        summary = stats.summary_line()

        if not stats.is_successful:
            style, block = _FOOTER_FAILURE_STYLE, f"FAILURES!\n{summary}"
        elif stats.has_notices:
            style, block = _FOOTER_NOTICE_STYLE, f"OK, but incomplete, skipped, or risky tests!\n{summary}"
        else:
            style, block = _FOOTER_OK_STYLE, summary

        self.write_new_line()
        self.write(self.format_with_color(style, block))
        self.write_new_line()
