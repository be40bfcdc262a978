"""Ports: contracts between the reporter and its host."""

from progressprinter.domain.ports.listener import TestOutcomeListener
from progressprinter.domain.ports.writer import EchoCollector, LineWriter, TextStream

__all__ = [
    "EchoCollector",
    "LineWriter",
    "TextStream",
    "TestOutcomeListener",
]
