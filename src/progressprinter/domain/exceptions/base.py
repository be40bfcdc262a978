"""Exception hierarchy root."""


class ProgressPrinterError(Exception):
    """Invalid printer input: unknown style names, bad option values."""
