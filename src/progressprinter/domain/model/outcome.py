"""Outcome tokens printed for each test."""

from enum import Enum


class Outcome(Enum):
    """Per-test outcome token.

    Value is (label, style). Style is a comma-separated list of
    attribute names from the SGR table in application.formatting.
    """

    PASS = ("PASS", "fg-green, bold")
    FAIL = ("FAIL", "bg-red, fg-white")
    ERROR = ("ERROR", "fg-red, bold")
    WARNING = ("WARNING", "fg-red, bold")
    INCOMPLETE = ("INCOMPLETE", "fg-yellow, bold")
    RISKY = ("RISKY", "fg-yellow, bold")
    SKIPPED = ("SKIPPED", "fg-cyan, bold")
    SKIPPING = ("SKIPPING", "fg-cyan, bold")

    @property
    def label(self) -> str:
        """Text of the token."""
        return self.value[0]

    @property
    def style(self) -> str:
        """Style attributes of the token."""
        return self.value[1]

    @property
    def is_failure_class(self) -> bool:
        """True if the outcome suppresses the PASS token of its test."""
        return self not in (Outcome.PASS, Outcome.SKIPPING)
