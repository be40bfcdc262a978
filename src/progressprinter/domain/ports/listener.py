"""Listener port: the lifecycle callbacks a host runner drives."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from progressprinter.domain.model.test_info import OutcomeDetail, TestInfo


class TestOutcomeListener(Protocol):
    """Contract between a host test runner and a reporter.

    The host calls exactly one callback at a time, tests run sequentially.
    A test is bracketed by on_test_start/on_test_end; outcome callbacks
    fire in between. on_skipped may also fire for a test that was never
    started (e.g. skipped at collection), without a matching on_test_end.

    Elapsed times are in seconds.
    """

    def on_test_start(self, test: TestInfo) -> None: ...

    def on_test_end(self, test: TestInfo, elapsed: float) -> None: ...

    def on_error(self, test: TestInfo, detail: OutcomeDetail, elapsed: float) -> None: ...

    def on_failure(self, test: TestInfo, detail: OutcomeDetail, elapsed: float) -> None: ...

    def on_warning(self, test: TestInfo, detail: OutcomeDetail, elapsed: float) -> None: ...

    def on_incomplete(self, test: TestInfo, detail: OutcomeDetail, elapsed: float) -> None: ...

    def on_risky(self, test: TestInfo, detail: OutcomeDetail, elapsed: float) -> None: ...

    def on_skipped(self, test: TestInfo, detail: OutcomeDetail, elapsed: float) -> None: ...
