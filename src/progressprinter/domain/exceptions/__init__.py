"""Domain exceptions."""

from progressprinter.domain.exceptions.base import ProgressPrinterError
from progressprinter.domain.exceptions.configuration import ConfigurationError
from progressprinter.domain.exceptions.style import UnknownStyleError

__all__ = [
    "ProgressPrinterError",
    "ConfigurationError",
    "UnknownStyleError",
]
