"""Run statistics accumulated by the printer."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field

from progressprinter.domain.model.outcome import Outcome

# Footer order, label
_FOOTER_COUNTS: tuple[tuple[Outcome, str], ...] = (
    (Outcome.ERROR, "Errors"),
    (Outcome.FAIL, "Failures"),
    (Outcome.WARNING, "Warnings"),
    (Outcome.SKIPPED, "Skipped"),
    (Outcome.INCOMPLETE, "Incomplete"),
    (Outcome.RISKY, "Risky"),
)


@dataclass(slots=True)
class RunStats:
    """Mutable run totals.

    Attributes:
        tests_run: Tests ended (on_test_end calls).
        num_assertions: Running assertion total, never reset.
        counts: Outcomes recorded (standalone skips count as SKIPPED).
    """

    tests_run: int = 0
    num_assertions: int = 0
    counts: Counter[Outcome] = field(default_factory=Counter)

    def record(self, outcome: Outcome) -> None:
        self.counts[outcome] += 1

    def add_assertions(self, count: int) -> None:
        if count < 0:
            raise ValueError(f"count must be >= 0, got {count}")
        self.num_assertions += count

    @property
    def has_notices(self) -> bool:
        """Any warning, skip, incomplete or risky token was written."""
        return any(self.counts[o] for o, _ in _FOOTER_COUNTS[2:])

    @property
    def is_successful(self) -> bool:
        """No test failed or errored."""
        return not self.counts[Outcome.FAIL] and not self.counts[Outcome.ERROR]

    def summary_line(self) -> str:
        """One-line totals.

        "OK (3 tests, 5 assertions)" on success, otherwise
        "Tests: 3, Assertions: 5, Failures: 1." with non-zero counters only.
        """
        if self.is_successful and not self.has_notices:
            tests = "test" if self.tests_run == 1 else "tests"
            assertions = "assertion" if self.num_assertions == 1 else "assertions"
            return f"OK ({self.tests_run} {tests}, {self.num_assertions} {assertions})"

        parts = [f"Tests: {self.tests_run}", f"Assertions: {self.num_assertions}"]
        parts.extend(f"{label}: {self.counts[o]}" for o, label in _FOOTER_COUNTS if self.counts[o])
        return ", ".join(parts) + "."
