"""Domain model: immutable value objects and enums."""

from progressprinter.domain.model.configuration import ColorMode, PrinterConfig
from progressprinter.domain.model.outcome import Outcome
from progressprinter.domain.model.run_stats import RunStats
from progressprinter.domain.model.test_info import OutcomeDetail, TestInfo

__all__ = [
    "ColorMode",
    "Outcome",
    "OutcomeDetail",
    "PrinterConfig",
    "RunStats",
    "TestInfo",
]
