"""Unit tests for the custom-resource and SWAT-team calculators.

Pure functions over the seeded catalog; no database involved.
"""

import pytest

from ratecard.services.calculator import (
    CustomRateBreakdown,
    SwatRateBreakdown,
    calculate_custom_rate,
    calculate_swat_rate,
    duration_discount_percent,
)
from ratecard.services.money import round_half_up


class TestCustomRate:
    def test_frontend_middle_east_senior(self, catalog):
        result = calculate_custom_rate(catalog, "middle-east", "frontend-developer", "senior")
        assert result == CustomRateBreakdown(
            base_rate=120,
            regional_multiplier=1.15,
            seniority_multiplier=1.40,
            final_rate=193,
        )

    @pytest.mark.parametrize(
        "region, role, seniority, expected",
        [
            ("europe", "backend-developer", "lead", 304),  # 130 * 1.30 * 1.80 = 304.2
            ("euro-asia", "qa-engineer", "junior", 70),
            ("north-america", "product-manager", "principal", 554),  # 554.4
        ],
    )
    def test_formula(self, catalog, region, role, seniority, expected):
        result = calculate_custom_rate(catalog, region, role, seniority)
        assert result.final_rate == expected
        assert result.final_rate == round_half_up(
            result.base_rate * result.regional_multiplier * result.seniority_multiplier
        )

    @pytest.mark.parametrize(
        "region, role, seniority",
        [
            (None, "frontend-developer", "senior"),
            ("middle-east", "", "senior"),
            ("middle-east", "frontend-developer", None),
            ("atlantis", "frontend-developer", "senior"),
            ("middle-east", "swat-frontend", "senior"),  # SWAT role not offered here
        ],
    )
    def test_unresolved_selection_is_all_zero(self, catalog, region, role, seniority):
        result = calculate_custom_rate(catalog, region, role, seniority)
        assert (result.base_rate, result.regional_multiplier, result.seniority_multiplier, result.final_rate) == (0, 0, 0, 0)
        assert result.kind == "custom"


class TestSwatRate:
    def test_frontend_mid_half_time_three_months(self, catalog):
        result = calculate_swat_rate(catalog, "swat-frontend", "50", "3", "mid")
        assert result.base_rate == 200
        assert result.base_with_seniority == 200
        assert result.after_workload == 100
        assert result.duration_discount == 10
        assert result.after_duration_discount == 90
        assert result.final_rate == 72

    def test_integer_inputs(self, catalog):
        # 220 * 1.4 = 308; 100% -> 308; 2 months -> 292.6 -> 293; * 0.8 -> 234.4 -> 234
        result = calculate_swat_rate(catalog, "swat-backend", 100, 2, "senior")
        assert (result.base_with_seniority, result.after_workload, result.final_rate) == (308, 308, 234)

    def test_stage_rounding_is_reproduced(self, catalog):
        # 200 * 0.7 = 140; 25% -> 35; 5% -> 33.25 -> 33; * 0.8 -> 26.4 -> 26
        result = calculate_swat_rate(catalog, "swat-frontend", "25", "2", "junior")
        assert result.final_rate == 26
        # one rounding at the end would give 27
        assert round_half_up(200 * 0.7 * 0.25 * 0.95 * 0.8) == 27
        # applying the structural discount before the workload would also give 27
        reordered = round_half_up(round_half_up(round_half_up(140 * 0.8) * 0.25) * 0.95)
        assert reordered != result.final_rate

    def test_structural_discount_always_applies(self, catalog):
        result = calculate_swat_rate(catalog, "swat-architecture", "100", "1", "mid")
        assert result.duration_discount == 0
        assert result.after_duration_discount == 300
        assert result.final_rate == 240

    def test_zero_duration_gets_no_discount(self, catalog):
        result = calculate_swat_rate(catalog, "swat-frontend", "100", "0", "mid")
        assert result.duration_discount == 0
        assert result.final_rate == 160

    @pytest.mark.parametrize(
        "role, workload, duration, seniority",
        [
            (None, "50", "3", "mid"),
            ("swat-frontend", "", "3", "mid"),
            ("swat-frontend", "50", None, "mid"),
            ("swat-frontend", "50", "3", ""),
            ("swat-frontend", "half", "3", "mid"),
            ("frontend-developer", "50", "3", "mid"),  # custom role not offered here
        ],
    )
    def test_unresolved_selection_is_all_zero(self, catalog, role, workload, duration, seniority):
        assert calculate_swat_rate(catalog, role, workload, duration, seniority) == SwatRateBreakdown()


@pytest.mark.parametrize(
    "months, discount",
    [(1, 0), (2, 5), (3, 10), (4, 15), (10, 15), (0, 0), (-2, 0)],
)
def test_duration_discount_table(months, discount):
    assert duration_discount_percent(months) == discount


@pytest.mark.parametrize(
    "value, expected",
    [(193.2, 193), (2.5, 3), (33.25, 33), (4342.5, 4343), (0, 0)],
)
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected
