"""Style lookup exceptions."""

from progressprinter.domain.exceptions.base import ProgressPrinterError


class UnknownStyleError(ProgressPrinterError):
    """Style attribute is not in the SGR code table.

    The table is fixed and closed, so an unknown name is a programming
    error, never a user input to recover from.

    Attributes:
        style: Offending style name (must not be empty)
    """

    def __init__(self, style: str) -> None:
        if not style:
            raise ValueError("style must not be empty")

        self.style = style
        super().__init__(f"Unknown style attribute '{style}'")
