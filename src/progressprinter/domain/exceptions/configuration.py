"""Configuration exceptions."""

from progressprinter.domain.exceptions.base import ProgressPrinterError


class ConfigurationError(ProgressPrinterError):
    """Invalid reporter option value.

    Attributes:
        option: Option name (must not be empty)
        reason: Why the value is invalid (must not be empty)
    """

    def __init__(self, option: str, reason: str) -> None:
        if not option:
            raise ValueError("option must not be empty")
        if not reason:
            raise ValueError("reason must not be empty")

        self.option = option
        self.reason = reason
        super().__init__(f"Invalid value for '{option}': {reason}")
