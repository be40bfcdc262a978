"""progressprinter - colorized line-oriented progress reporter for pytest."""

__version__ = "0.1.0"

from progressprinter.application.printer import ProgressPrinter

__all__ = ["ProgressPrinter", "__version__"]
