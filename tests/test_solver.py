"""Tests for the net-to-gross bisection solver."""

import logging

import pytest

from ukcalc.calculators.deductions import calculate_deductions
from ukcalc.calculators.models import DeductionOptions, InvalidInputError
from ukcalc.calculators.solver import calculate_gross_from_net
from ukcalc.calculators.tax_data import TaxYearData


class TestRoundTrip:
    @pytest.mark.parametrize("target", [20_000, 45_000, 90_000, 150_000])
    def test_basic(
        self, tax_2025: TaxYearData, default_options: DeductionOptions, target: float
    ) -> None:
        result = calculate_gross_from_net(target, default_options, tax_2025)
        assert result.converged
        assert abs(result.net_achieved - target) < 0.01
        net = calculate_deductions(result.gross, default_options, tax_2025).net_annual
        assert net == pytest.approx(target, abs=0.01)

    @pytest.mark.parametrize("target", [20_000, 45_000, 90_000, 150_000])
    def test_advanced(
        self, tax_2025: TaxYearData, advanced_options: DeductionOptions, target: float
    ) -> None:
        result = calculate_gross_from_net(target, advanced_options, tax_2025, use_advanced=True)
        assert result.converged
        net = calculate_deductions(
            result.gross, advanced_options, tax_2025, use_advanced=True
        ).net_annual
        assert net == pytest.approx(target, abs=0.01)

    def test_known_salary(self, tax_2025: TaxYearData, default_options: DeductionOptions) -> None:
        """£60,000 takes home £45,357.40."""
        result = calculate_gross_from_net(45_357.40, default_options, tax_2025)
        assert result.converged
        assert result.gross == pytest.approx(60_000, abs=0.05)

    def test_zero_target(self, tax_2025: TaxYearData, default_options: DeductionOptions) -> None:
        result = calculate_gross_from_net(0, default_options, tax_2025)
        assert result.converged
        assert result.gross == 0.0
        assert result.iterations == 1

    def test_below_allowance_is_identity(
        self, tax_2025: TaxYearData, default_options: DeductionOptions
    ) -> None:
        result = calculate_gross_from_net(10_000, default_options, tax_2025)
        assert result.converged
        assert result.gross == pytest.approx(10_000, abs=0.01)


class TestBudget:
    def test_reports_non_convergence(
        self,
        tax_2025: TaxYearData,
        default_options: DeductionOptions,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="ukcalc.calculators.solver"):
            result = calculate_gross_from_net(30_000, default_options, tax_2025, max_iterations=1)
        assert not result.converged
        assert result.iterations == 1
        assert result.gross > 0
        assert "No convergence" in caplog.text

    def test_iterations_within_budget(
        self, tax_2025: TaxYearData, default_options: DeductionOptions
    ) -> None:
        result = calculate_gross_from_net(37_123.45, default_options, tax_2025)
        assert result.converged
        assert 1 <= result.iterations <= 50

    def test_negative_target_rejected(
        self, tax_2025: TaxYearData, default_options: DeductionOptions
    ) -> None:
        with pytest.raises(InvalidInputError):
            calculate_gross_from_net(-100, default_options, tax_2025)


class TestBoundExpansion:
    def test_expands_when_pension_eats_the_salary(
        self, tax_2025: TaxYearData, caplog: pytest.LogCaptureFixture
    ) -> None:
        """A £60,000 a year fixed pension puts the answer far above 2.5 x target."""
        options = DeductionOptions(pension_type="fixed", pension_value=5_000)
        with caplog.at_level(logging.WARNING, logger="ukcalc.calculators.solver"):
            result = calculate_gross_from_net(10_000, options, tax_2025, use_advanced=True)
        assert result.converged
        assert result.gross > 25_000
        net = calculate_deductions(result.gross, options, tax_2025, use_advanced=True).net_annual
        assert net == pytest.approx(10_000, abs=0.01)
        assert "Expanded high bound" in caplog.text

    def test_unreachable_target(self, tax_2025: TaxYearData) -> None:
        """With everything paid into a pension, take-home never reaches the target."""
        options = DeductionOptions(pension_type="percent", pension_value=100)
        result = calculate_gross_from_net(1_000, options, tax_2025, use_advanced=True)
        assert not result.converged
        assert result.iterations == 0
        assert result.net_achieved < 1_000

    def test_zero_target_still_expands(
        self, tax_2025: TaxYearData, caplog: pytest.LogCaptureFixture
    ) -> None:
        """A £60,000 a year fixed pension: the gross that just covers it takes home nothing."""
        options = DeductionOptions(pension_type="fixed", pension_value=5_000)
        with caplog.at_level(logging.WARNING, logger="ukcalc.calculators.solver"):
            result = calculate_gross_from_net(0, options, tax_2025, use_advanced=True)
        assert result.converged
        assert result.gross > 60_000
        assert result.net_achieved == pytest.approx(0, abs=0.01)
        assert "Expanded high bound" in caplog.text
