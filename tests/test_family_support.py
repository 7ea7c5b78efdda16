"""
Tests for family law support calculations.

Tests verify:
1. CSSA basic obligation on combined income up to the cap
2. Pro-rata split of the obligation and add-ons
3. The income cap defaults to the configured parameter year
4. Maintenance duration bands are inclusive at their upper edge
"""

import os
import sys
from decimal import Decimal

import pytest

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))


class TestChildSupport:
    """Tests for calculate_child_support."""

    def test_two_children_pro_rata(self):
        from calculator.family_support import calculate_child_support

        support = calculate_child_support(60_000, 90_000, 2, income_cap=183_000)
        assert support.combined_income == Decimal("150000.00")
        assert support.capped_income == Decimal("150000.00")
        assert support.percentage == Decimal("0.25")
        assert support.basic_obligation == Decimal("37500.00")
        assert support.ncp_share == Decimal("0.60000")
        assert support.ncp_basic_obligation == Decimal("22500.00")
        assert support.ncp_annual_obligation == Decimal("22500.00")
        assert support.ncp_monthly_obligation == Decimal("1875.00")

    def test_add_ons_split_pro_rata(self):
        from calculator.family_support import calculate_child_support

        support = calculate_child_support(
            60_000, 90_000, 2,
            childcare_costs=6_000,
            health_insurance=3_000,
            educational_expenses=1_000,
            income_cap=183_000,
        )
        assert support.add_ons == Decimal("10000.00")
        assert support.ncp_add_ons == Decimal("6000.00")
        assert support.ncp_annual_obligation == Decimal("28500.00")

    def test_income_above_cap(self):
        from calculator.family_support import calculate_child_support

        support = calculate_child_support(100_000, 150_000, 1, income_cap=183_000)
        assert support.combined_income == Decimal("250000.00")
        assert support.capped_income == Decimal("183000.00")
        assert support.basic_obligation == Decimal("31110.00")
        assert support.ncp_basic_obligation == Decimal("18666.00")

    def test_fica_deducted(self):
        from calculator.family_support import calculate_child_support

        support = calculate_child_support(
            60_000, 90_000, 1, fica_cp=4_590, fica_ncp=6_885, income_cap=183_000,
        )
        assert support.combined_income == Decimal("138525.00")
        assert support.basic_obligation == Decimal("23549.25")
        assert support.ncp_basic_obligation == Decimal("14129.55")

    def test_five_or_more_children(self):
        from calculator.family_support import calculate_child_support

        five = calculate_child_support(60_000, 90_000, 5, income_cap=183_000)
        seven = calculate_child_support(60_000, 90_000, 7, income_cap=183_000)
        assert five.percentage == seven.percentage == Decimal("0.35")

    def test_default_cap_from_parameters(self):
        from calculator.family_support import calculate_child_support

        support = calculate_child_support(100_000, 150_000, 1)
        assert support.income_cap == Decimal("183000.00")

    def test_cap_from_environment_override(self, monkeypatch):
        from calculator.family_support import calculate_child_support

        monkeypatch.setenv("LEGAL_2024_CSSA_INCOME_CAP", "200000")
        support = calculate_child_support(100_000, 150_000, 1)
        assert support.income_cap == Decimal("200000.00")

    def test_no_income(self):
        from calculator.family_support import calculate_child_support

        support = calculate_child_support(0, 0, 2, income_cap=183_000)
        assert support.ncp_share == Decimal("0.00000")
        assert support.ncp_annual_obligation == Decimal("0.00")

    def test_zero_children_rejected(self):
        from calculator.family_support import calculate_child_support
        from rules.exceptions import InvalidInputError

        with pytest.raises(InvalidInputError):
            calculate_child_support(60_000, 90_000, 0, income_cap=183_000)

    def test_negative_income_rejected(self):
        from calculator.family_support import calculate_child_support
        from rules.exceptions import OutOfRangeError

        with pytest.raises(OutOfRangeError):
            calculate_child_support(-1, 90_000, 1, income_cap=183_000)


class TestMaintenanceDuration:
    """Tests for maintenance_duration_range."""

    def test_short_marriage(self):
        from calculator.family_support import maintenance_duration_range

        duration = maintenance_duration_range(10)
        assert duration.low_pct == Decimal("0.15")
        assert duration.high_pct == Decimal("0.30")
        assert duration.low_years == Decimal("1.5")
        assert duration.high_years == Decimal("3.0")

    def test_fifteen_years_in_first_band(self):
        from calculator.family_support import maintenance_duration_range

        duration = maintenance_duration_range(15)
        assert duration.high_pct == Decimal("0.30")
        assert duration.low_years == Decimal("2.3")
        assert duration.high_years == Decimal("4.5")

    def test_just_over_fifteen_years(self):
        from calculator.family_support import maintenance_duration_range

        duration = maintenance_duration_range("15.5")
        assert duration.low_pct == Decimal("0.30")
        assert duration.high_pct == Decimal("0.40")

    def test_long_marriage(self):
        from calculator.family_support import maintenance_duration_range

        duration = maintenance_duration_range(25)
        assert duration.low_years == Decimal("8.8")
        assert duration.high_years == Decimal("12.5")

    def test_describe(self):
        from calculator.family_support import maintenance_duration_range

        assert maintenance_duration_range(10).describe() == (
            "1.5 to 3.0 years (15%-30% of 10 year marriage)"
        )

    def test_negative_length_rejected(self):
        from calculator.family_support import maintenance_duration_range
        from rules.exceptions import InvalidInputError

        with pytest.raises(InvalidInputError):
            maintenance_duration_range(-1)


class TestMaintenanceGuideline:
    """Tests for calculate_maintenance_guideline (DRL §236(B)(6)(c))."""

    def test_without_child_support_ceiling_applies(self):
        from calculator.family_support import calculate_maintenance_guideline

        # 30% x 150,000 - 20% x 50,000 = 35,000; 40% x 200,000 - 50,000 = 30,000
        guideline = calculate_maintenance_guideline(150_000, 50_000, income_cap=228_000)
        assert guideline.formula_amount == Decimal("35000.00")
        assert guideline.ceiling_amount == Decimal("30000.00")
        assert guideline.annual_amount == Decimal("30000.00")
        assert guideline.monthly_amount == Decimal("2500.00")

    def test_with_child_support_formula_applies(self):
        from calculator.family_support import calculate_maintenance_guideline

        # 20% x 150,000 - 25% x 50,000 = 17,500
        guideline = calculate_maintenance_guideline(150_000, 50_000, child_support_paid=True, income_cap=228_000)
        assert guideline.annual_amount == Decimal("17500.00")
        assert guideline.child_support_paid

    def test_payor_income_capped_from_parameters(self):
        from calculator.family_support import calculate_maintenance_guideline

        guideline = calculate_maintenance_guideline(300_000, 0)
        assert guideline.income_cap == Decimal("228000.00")
        assert guideline.capped_payor_income == Decimal("228000.00")
        assert guideline.annual_amount == Decimal("68400.00")

    def test_cap_from_other_parameter_year(self, parameters_dir, monkeypatch):
        from calculator.family_support import calculate_maintenance_guideline
        from config.legal_parameters_loader import clear_parameter_cache
        from config.settings import get_settings

        monkeypatch.setenv("LEGAL_ENGINE_PARAMETERS_DIR", str(parameters_dir))
        get_settings.cache_clear()
        clear_parameter_cache()
        monkeypatch.setenv("LEGAL_2025_MAINTENANCE_INCOME_CAP", "200000")

        guideline = calculate_maintenance_guideline(300_000, 0, parameter_year=2025)
        assert guideline.annual_amount == Decimal("60000.00")

    def test_higher_earning_payee_gets_nothing(self):
        from calculator.family_support import calculate_maintenance_guideline

        guideline = calculate_maintenance_guideline(50_000, 60_000, income_cap=228_000)
        assert guideline.annual_amount == Decimal("0.00")

    def test_negative_income_rejected(self):
        from calculator.family_support import calculate_maintenance_guideline
        from rules.exceptions import OutOfRangeError

        with pytest.raises(OutOfRangeError):
            calculate_maintenance_guideline(100_000, -1, income_cap=228_000)
