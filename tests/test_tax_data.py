"""Tests for tax year loading, lookup and input coercion."""

import math
from pathlib import Path

import pytest
import yaml

import config
from ukcalc.calculators.numbers import coerce_amount
from ukcalc.calculators.tax_data import (
    DEFAULT_TAX_YEAR,
    TAX_YEARS,
    UnknownTaxYearError,
    _parse_brackets,
    describe_tax_year,
    get_tax_year,
    load_tax_years,
)

# --- Tax year table tests ---


class TestTaxYears:
    def test_years_loaded(self) -> None:
        assert {"2024-25", "2025-26"} <= set(TAX_YEARS)
        assert DEFAULT_TAX_YEAR in TAX_YEARS

    @pytest.mark.parametrize("tax_year", sorted(TAX_YEARS))
    def test_every_table_contiguous_from_zero(self, tax_year: str) -> None:
        data = TAX_YEARS[tax_year]
        tables = [
            *data.income_tax.values(),
            data.national_insurance,
            data.dividend.brackets,
            data.stamp_duty.standard,
            data.stamp_duty.first_time_buyer,
        ]
        for brackets in tables:
            assert brackets[0].lower == 0
            for previous, current in zip(brackets, brackets[1:]):
                assert current.lower == previous.upper

    @pytest.mark.parametrize("tax_year", sorted(TAX_YEARS))
    def test_open_top_bands(self, tax_year: str) -> None:
        data = TAX_YEARS[tax_year]
        for brackets in (*data.income_tax.values(), data.national_insurance, data.stamp_duty.standard):
            assert math.isinf(brackets[-1].upper)

    def test_tables_are_read_only(self) -> None:
        data = get_tax_year("2025-26")
        with pytest.raises(TypeError):
            data.income_tax["wales"] = ()  # type: ignore[index]
        with pytest.raises(AttributeError):
            data.personal_allowance = 0  # type: ignore[misc]

    def test_get_unknown_year(self) -> None:
        with pytest.raises(UnknownTaxYearError) as excinfo:
            get_tax_year("2010-11")
        assert "2010-11" in str(excinfo.value)
        assert "2025-26" in str(excinfo.value)

    def test_unknown_year_is_key_error(self) -> None:
        with pytest.raises(KeyError):
            get_tax_year("nope")

    def test_describe_is_json_safe(self) -> None:
        described = describe_tax_year("2025-26")
        assert described["name"] == "2025/26"
        assert described["income_tax"]["england"][-1]["upper"] is None
        assert described["employer_ni"] == {"rate": 0.15, "threshold": 5000}
        assert described["student_loans"]["plan2"]["threshold"] == 28_470


class TestParseBrackets:
    def test_gap_rejected(self) -> None:
        rows = [
            {"lower": 0, "upper": 100, "rate": 0, "name": "A"},
            {"lower": 150, "upper": float("inf"), "rate": 0.1, "name": "B"},
        ]
        with pytest.raises(ValueError, match="'B' starts at 150"):
            _parse_brackets(rows, "test")

    def test_must_start_at_zero(self) -> None:
        rows = [{"lower": 10, "upper": float("inf"), "rate": 0.1, "name": "A"}]
        with pytest.raises(ValueError, match="start at 0"):
            _parse_brackets(rows, "test")

    def test_closed_top_rejected_by_default(self) -> None:
        rows = [{"lower": 0, "upper": 100, "rate": 0.1, "name": "A"}]
        with pytest.raises(ValueError, match="unbounded"):
            _parse_brackets(rows, "test")
        assert _parse_brackets(rows, "test", open_top=False)[0].upper == 100

    def test_empty_rejected(self) -> None:
        with pytest.raises(ValueError, match="empty"):
            _parse_brackets([], "test")


class TestLoadTaxYears:
    def test_loads_from_config_dir(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """A single-year file copied from the shipped one loads on its own."""
        shipped = yaml.safe_load((config.CONFIG_DIR / "tax_years.yaml").read_text(encoding="utf-8"))
        one_year = {"tax_years": {"2025-26": shipped["tax_years"]["2025-26"]}}
        (tmp_path / "one_year.yaml").write_text(yaml.safe_dump(one_year), encoding="utf-8")
        monkeypatch.setattr(config, "CONFIG_DIR", tmp_path)

        years = load_tax_years("one_year.yaml")
        assert list(years) == ["2025-26"]
        assert math.isinf(years["2025-26"].income_tax["england"][-1].upper)

    def test_non_mapping_rejected(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "bad.yaml").write_text("- just\n- a list\n", encoding="utf-8")
        monkeypatch.setattr(config, "CONFIG_DIR", tmp_path)
        with pytest.raises(ValueError, match="mapping"):
            load_tax_years("bad.yaml")


# --- Input coercion tests ---


class TestCoerceAmount:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            (1250, 1250.0),
            (12.5, 12.5),
            ("60000", 60_000.0),
            ("£1,250.50", 1_250.50),
            (" 3 000 ", 3_000.0),
            ("-200", -200.0),
            (-5, -5.0),
        ],
    )
    def test_numbers(self, raw: object, expected: float) -> None:
        assert coerce_amount(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "abc", "£", float("nan"), float("inf"), "inf", True])
    def test_junk_becomes_zero(self, raw: object) -> None:
        assert coerce_amount(raw) == 0.0
