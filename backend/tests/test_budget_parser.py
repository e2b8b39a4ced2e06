import pytest

from wanderplan.services.planner.budget_parser import BudgetRange, parse_budget_range


@pytest.mark.parametrize(
    "label, expected",
    [
        ("budget", (25_000, 75_000)),
        ("mid-range", (75_000, 200_000)),
        ("luxury", (200_000, 500_000)),
        ("LUXURY", (200_000, 500_000)),
        ("  Mid-Range ", (75_000, 200_000)),
    ],
)
def test_presets_map_to_fixed_windows(label, expected):
    result = parse_budget_range(label)
    assert (result.min, result.max) == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("₹10,000-₹50,000", (10_000, 50_000)),
        ("₹1,00,000-₹2,50,000", (100_000, 250_000)),
        ("₹5000-₹9000", (5_000, 9_000)),
        ("$500 - $2,000", (500, 2_000)),
        ("INR 10000-INR 40000", (10_000, 40_000)),
    ],
)
def test_custom_ranges_strip_grouping(text, expected):
    result = parse_budget_range(text)
    assert (result.min, result.max) == expected
    assert result.min < result.max


@pytest.mark.parametrize("text", ["cheap-ish", "", None, "10000-50000", "₹50,000-₹10,000", "₹10,000-₹10,000"])
def test_unrecognised_input_falls_back_to_budget_tier(text):
    assert parse_budget_range(text) == BudgetRange(25_000, 75_000)


def test_budget_range_helpers():
    window = BudgetRange(200_000, 500_000)
    assert window.midpoint == 350_000
    assert window.contains(200_000)
    assert window.contains(500_000)
    assert not window.contains(500_001)
