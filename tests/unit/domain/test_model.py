"""Tests for domain model value objects."""

from pathlib import Path

import pytest

from progressprinter.application.formatting import style_codes
from progressprinter.domain.exceptions import ConfigurationError
from progressprinter.domain.model import (
    ColorMode,
    Outcome,
    OutcomeDetail,
    PrinterConfig,
    TestInfo,
)


class TestOutcome:
    """Tests for Outcome."""

    def test_labels(self) -> None:
        assert [o.label for o in Outcome] == [
            "PASS",
            "FAIL",
            "ERROR",
            "WARNING",
            "INCOMPLETE",
            "RISKY",
            "SKIPPED",
            "SKIPPING",
        ]

    def test_fail_is_white_on_red(self) -> None:
        assert Outcome.FAIL.style == "bg-red, fg-white"

    @pytest.mark.parametrize("outcome", list(Outcome))
    def test_every_style_resolves(self, outcome: Outcome) -> None:
        """All token styles are in the SGR table."""
        assert style_codes(outcome.style)

    def test_failure_class(self) -> None:
        assert not Outcome.PASS.is_failure_class
        assert not Outcome.SKIPPING.is_failure_class
        assert Outcome.SKIPPED.is_failure_class
        assert Outcome.WARNING.is_failure_class


class TestTestInfo:
    """Tests for TestInfo."""

    def test_description_defaults_to_name(self) -> None:
        assert TestInfo(name="test_a").description == "test_a"

    def test_assertion_count_defaults_to_one(self) -> None:
        assert TestInfo(name="test_a").assertion_count == 1

    def test_assertion_count_zero_is_kept(self) -> None:
        assert TestInfo(name="test_a", num_assertions=0).assertion_count == 0

    def test_empty_name_raises(self) -> None:
        with pytest.raises(ValueError, match="name must not be empty"):
            TestInfo(name="")

    def test_negative_assertions_raise(self) -> None:
        with pytest.raises(ValueError, match="num_assertions must be >= 0"):
            TestInfo(name="test_a", num_assertions=-1)

    def test_is_immutable(self) -> None:
        info = TestInfo(name="test_a")
        with pytest.raises(AttributeError):
            info.name = "test_b"  # type: ignore[misc]


class TestOutcomeDetail:
    """Tests for OutcomeDetail."""

    def test_description_defaults_to_message(self) -> None:
        assert OutcomeDetail(message="boom").description == "boom"

    def test_from_exception(self) -> None:
        detail = OutcomeDetail.from_exception(ValueError("bad value"))
        assert detail.message == "bad value"
        assert detail.description == "ValueError: bad value"


class TestColorMode:
    """Tests for ColorMode."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("always", ColorMode.ALWAYS), ("NEVER", ColorMode.NEVER), (" auto ", ColorMode.AUTO)],
    )
    def test_parse(self, value: str, expected: ColorMode) -> None:
        assert ColorMode.parse(value) is expected

    def test_parse_invalid_raises(self) -> None:
        with pytest.raises(ConfigurationError, match="rainbow") as excinfo:
            ColorMode.parse("rainbow")
        assert excinfo.value.option == "color"


class TestPrinterConfig:
    """Tests for PrinterConfig."""

    def test_default_values(self) -> None:
        config = PrinterConfig()
        assert config.color_mode is ColorMode.AUTO
        assert config.terminal_width == 80
        assert config.auto_flush is False
        assert config.ci_echo_enabled is False
        assert config.output_path is None
        assert config.echo_path is None

    def test_invalid_width_raises(self) -> None:
        with pytest.raises(ValueError, match="terminal_width must be > 0"):
            PrinterConfig(terminal_width=0)

    def test_html_escape_applies_to_primary_output(self) -> None:
        assert PrinterConfig(html_escape_output=True).escapes_html is True

    def test_html_escape_never_applies_to_output_file(self) -> None:
        config = PrinterConfig(html_escape_output=True, output_path=Path("out.txt"))
        assert config.escapes_html is False
