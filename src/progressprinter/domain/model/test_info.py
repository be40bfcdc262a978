"""Test identity and outcome detail value objects."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class TestInfo:
    """Reported test.

    Immutable value object built by the host adapter.

    Attributes:
        name: Short test name (e.g. function name). Used to pair a skip
            with the test that was started.
        description: Human readable identifier printed in headers.
            Defaults to name.
        num_assertions: Assertions made by the test. None = the test does
            not expose a count (counted as 1).
        output: Captured output of the test.
        expects_output: Test declares its own expectation on output,
            captured output is then not echoed.
    """

    __test__ = False

    name: str
    description: str = ""
    num_assertions: int | None = None
    output: str = ""
    expects_output: bool = False

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("name must not be empty")
        if self.num_assertions is not None and self.num_assertions < 0:
            raise ValueError(f"num_assertions must be >= 0, got {self.num_assertions}")
        if not self.description:
            object.__setattr__(self, "description", self.name)

    @property
    def assertion_count(self) -> int:
        """Assertion count with the default of 1 for tests without one."""
        return 1 if self.num_assertions is None else self.num_assertions


@dataclass(frozen=True, slots=True)
class OutcomeDetail:
    """Error, warning or skip reason attached to an outcome.

    Attributes:
        message: Short one-line message.
        description: Full text (traceback, diff). Defaults to message.
    """

    message: str
    description: str = field(default="")

    def __post_init__(self) -> None:
        if not self.description:
            object.__setattr__(self, "description", self.message)

    @classmethod
    def from_exception(cls, exc: BaseException) -> OutcomeDetail:
        """Build detail from an exception instance."""
        message = str(exc)
        return cls(message=message, description=f"{type(exc).__name__}: {message}")
