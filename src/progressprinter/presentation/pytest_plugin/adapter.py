"""Bridge from pytest reporting hooks to TestOutcomeListener.

pytest delivers the warnings of a test after pytest_runtest_logfinish, so
the end of a test is held back until the next test starts or the session
finishes. Warnings then still suppress the PASS token.
"""

from __future__ import annotations

import dataclasses
import logging
import warnings
from typing import TYPE_CHECKING

import pytest

from progressprinter.domain.model.test_info import OutcomeDetail, TestInfo

if TYPE_CHECKING:
    from collections.abc import Callable

    from progressprinter.domain.ports.listener import TestOutcomeListener

logger = logging.getLogger(__name__)

# Requesting one of these means the test asserts on its own output
OUTPUT_FIXTURES = frozenset({"capsys", "capsysbinary", "capfd", "capfdbinary"})

_SKIP_PREFIX = "Skipped: "


def expects_output(item: pytest.Item | None) -> bool:
    """True if the test requests an output capturing fixture."""
    fixturenames = getattr(item, "fixturenames", ())
    return not OUTPUT_FIXTURES.isdisjoint(fixturenames)


def detail_from_report(report: pytest.TestReport | pytest.CollectReport) -> OutcomeDetail:
    """Extract message and full description from a report."""
    wasxfail = getattr(report, "wasxfail", None)
    if wasxfail is not None:
        prefix = "XPASS" if report.passed else "XFAIL"
        message = f"{prefix} {wasxfail}".rstrip()
        return OutcomeDetail(message=message, description=report.longreprtext or message)

    longrepr = report.longrepr
    if isinstance(longrepr, tuple):
        _, _, reason = longrepr
        return OutcomeDetail(message=reason.removeprefix(_SKIP_PREFIX))

    text = report.longreprtext
    crash = getattr(longrepr, "reprcrash", None)
    if crash is not None:
        message = crash.message
    elif text:
        message = text.strip().splitlines()[-1]
    else:
        message = report.outcome
    return OutcomeDetail(message=message, description=text or message)


def detail_from_warning(warning_message: warnings.WarningMessage) -> OutcomeDetail:
    message = f"{warning_message.category.__name__}: {warning_message.message}"
    description = warnings.formatwarning(
        str(warning_message.message),
        warning_message.category,
        warning_message.filename,
        warning_message.lineno,
    ).rstrip()
    return OutcomeDetail(message=message, description=description)


class PytestProgressAdapter:
    """pytest plugin object driving a TestOutcomeListener.

    Registered by pytest_configure when the printer is enabled.

    Mapping:
        logstart             -> on_test_start
        failed (call, assert/pytest.fail/strict XPASS) -> on_failure
        failed (other)       -> on_error
        xfailed              -> on_incomplete
        xpassed (non-strict) -> on_risky
        skipped              -> on_skipped
        warning recorded     -> on_warning
        logfinish            -> on_test_end (deferred)
        skipped collector    -> on_skipped for a never-started test
    """

    def __init__(
        self,
        listener: TestOutcomeListener,
        *,
        count_assertions: bool = False,
        blank_letters: bool = False,
        on_session_finish: Callable[[], None] | None = None,
    ) -> None:
        """Initialize adapter.

        Args:
            listener: Receives the lifecycle callbacks.
            count_assertions: pytest_assertion_pass is enabled
                (enable_assertion_pass_hook ini). Otherwise tests report
                no assertion count.
            blank_letters: Hide the terminal reporter's progress letters
                (the printer writes to the terminal). Status words stay.
            on_session_finish: Called at session end, after the last
                test has ended.
        """
        self._listener = listener
        self._count_assertions = count_assertions
        self._blank_letters = blank_letters
        self._on_session_finish = on_session_finish

        self._items: dict[str, pytest.Item] = {}
        self._assertions: dict[str, int] = {}
        self._failed_calls: set[str] = set()

        self._current: TestInfo | None = None
        self._elapsed = 0.0
        self._output = ""
        self._pending: tuple[str, TestInfo, float] | None = None

    @property
    def current(self) -> TestInfo | None:
        """Started, not yet finished test."""
        return self._current

    # Collection

    def pytest_collection_finish(self, session: pytest.Session) -> None:
        self._items = {item.nodeid: item for item in session.items}

    def pytest_collectreport(self, report: pytest.CollectReport) -> None:
        if not report.skipped:
            return
        name = report.nodeid or "<session>"
        logger.debug("Collector skipped: %s", name)
        self._listener.on_skipped(TestInfo(name=name), detail_from_report(report), 0.0)

    # Run

    def pytest_runtest_logstart(self, nodeid: str, location: tuple[str, int | None, str]) -> None:
        self._finish_pending()

        item = self._items.get(nodeid)
        name = item.name if item is not None else nodeid.rpartition("::")[2]
        self._current = TestInfo(name=name or nodeid, description=nodeid)
        self._elapsed = 0.0
        self._output = ""
        self._listener.on_test_start(self._current)

    @pytest.hookimpl(wrapper=True)
    def pytest_runtest_makereport(
        self, item: pytest.Item, call: pytest.CallInfo[None]
    ) -> pytest.TestReport:
        report: pytest.TestReport = yield
        if report.failed and call.when == "call":
            excinfo = call.excinfo
            if excinfo is None or excinfo.errisinstance((AssertionError, pytest.fail.Exception)):
                self._failed_calls.add(item.nodeid)
        return report

    def pytest_assertion_pass(self, item: pytest.Item, lineno: int, orig: str, expl: str) -> None:
        self._assertions[item.nodeid] = self._assertions.get(item.nodeid, 0) + 1

    def pytest_runtest_logreport(self, report: pytest.TestReport) -> None:
        test = self._current
        if test is None or report.nodeid != test.description:
            return

        self._elapsed += report.duration
        if report.when == "call" or (report.when == "setup" and not report.passed):
            self._output = report.capstdout

        if hasattr(report, "wasxfail"):
            if report.skipped:
                self._listener.on_incomplete(test, detail_from_report(report), report.duration)
            elif report.passed:
                self._listener.on_risky(test, detail_from_report(report), report.duration)
            return

        if report.skipped:
            self._listener.on_skipped(test, detail_from_report(report), report.duration)
        elif report.failed:
            if report.when == "call" and report.nodeid in self._failed_calls:
                self._listener.on_failure(test, detail_from_report(report), report.duration)
            else:
                self._listener.on_error(test, detail_from_report(report), report.duration)

    def pytest_runtest_logfinish(self, nodeid: str, location: tuple[str, int | None, str]) -> None:
        assertions = self._assertions.pop(nodeid, 0)
        self._failed_calls.discard(nodeid)

        test = self._current
        if test is None or nodeid != test.description:
            return

        finished = dataclasses.replace(
            test,
            num_assertions=assertions if self._count_assertions else None,
            output=self._output,
            expects_output=expects_output(self._items.get(nodeid)),
        )
        self._pending = (nodeid, finished, self._elapsed)
        self._current = None

    def pytest_warning_recorded(
        self,
        warning_message: warnings.WarningMessage,
        when: str,
        nodeid: str,
        location: tuple[str, int, str] | None,
    ) -> None:
        if when != "runtest":
            return

        if self._pending is not None and self._pending[0] == nodeid:
            test = self._pending[1]
        elif self._current is not None and self._current.description == nodeid:
            test = self._current
        else:
            return
        self._listener.on_warning(test, detail_from_warning(warning_message), 0.0)

    @pytest.hookimpl(wrapper=True)
    def pytest_report_teststatus(
        self, report: pytest.TestReport | pytest.CollectReport, config: pytest.Config
    ) -> tuple[str, str, str]:
        result = yield
        if not self._blank_letters or result is None:
            return result
        category, _, word = result
        return category, "", word

    def pytest_sessionfinish(self, session: pytest.Session, exitstatus: int) -> None:
        self._finish_pending()
        if self._on_session_finish is not None:
            self._on_session_finish()

    def _finish_pending(self) -> None:
        if self._pending is None:
            return
        nodeid, test, elapsed = self._pending
        self._pending = None
        logger.debug("Ending %s after %.3fs", nodeid, elapsed)
        self._listener.on_test_end(test, elapsed)
