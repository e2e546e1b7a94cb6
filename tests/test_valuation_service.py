import pytest

from foreclosure_hub.services import valuation_service


def test_baseline_home_in_known_zip():
    result = valuation_service.estimate_value("75201", "single_family", 2000, 3, 2, "good")
    assert result["estimated_value"] == 700000
    assert result["valuation_range"] == {"low": 560000, "mid": 700000, "high": 840000}
    assert result["price_per_sqft"] == 350
    assert result["confidence"] == "high"
    assert result["zip_code_found"] is True
    assert result["breakdown"] == {
        "base_value": 700000,
        "type_adjustment": 0,
        "condition_adjustment": 0,
        "bedroom_adjustment": 0,
        "bathroom_adjustment": 0,
    }


def test_adjustments_add_up():
    result = valuation_service.estimate_value("75205", "condo", 1500, 4, 3, "excellent")
    breakdown = result["breakdown"]
    assert breakdown["base_value"] == 600000
    assert breakdown["type_adjustment"] == -90000
    assert breakdown["condition_adjustment"] == 90000
    assert breakdown["bedroom_adjustment"] == 15000
    assert breakdown["bathroom_adjustment"] == 8000
    assert result["estimated_value"] == 623000


def test_unknown_zip_uses_default_rate():
    result = valuation_service.estimate_value("99999", "single_family", 1000, 3, 2, "good")
    assert result["price_per_sqft"] == valuation_service.DEFAULT_PRICE_PER_SQFT
    assert result["estimated_value"] == 185000
    assert result["zip_code_found"] is False
    assert result["confidence"] == "low"


@pytest.mark.parametrize("zip_found, condition, square_feet, expected", [
    (True, "good", 2000, "high"),
    (True, "excellent", 1000, "high"),
    (True, "good", 900, "medium"),
    (True, "fair", 5500, "medium"),
    (True, "poor", 2000, "low"),
    (False, "good", 2000, "low"),
    (True, "good", 700, "low"),
    (True, "good", 6500, "low"),
])
def test_confidence_bands(zip_found, condition, square_feet, expected):
    assert valuation_service.confidence_level(zip_found, condition, square_feet) == expected


def test_estimate_never_goes_negative():
    result = valuation_service.estimate_value("75237", "single_family", 100, 0, 0, "poor")
    assert result["estimated_value"] == 0
    assert result["valuation_range"] == {"low": 0, "mid": 0, "high": 0}
