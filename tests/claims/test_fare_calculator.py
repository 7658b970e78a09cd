from decimal import Decimal

import pytest

from fieldforce.claims.fare.distance_fare import DistanceFareCalculator, calculate_fare
from fieldforce.core.exceptions import ValidationError
from fieldforce.settings.model import ConfigSnapshot, LocationDistance


def test_fare_is_distance_times_rate_with_two_decimals():
    fare = calculate_fare(45, 8)
    assert fare == Decimal("360.00")
    assert str(fare) == "360.00"


def test_fare_rounds_half_up():
    assert calculate_fare("12.345", 1) == Decimal("12.35")
    assert calculate_fare("0.125", "1") == Decimal("0.13")


def test_fare_rejects_negative_and_non_numeric_inputs():
    with pytest.raises(ValidationError):
        calculate_fare(-1, 8)
    with pytest.raises(ValidationError):
        calculate_fare(10, "abc")


def test_fare_for_location_prefers_employee_override():
    snapshot = ConfigSnapshot(
        fare_per_distance=Decimal("10"),
        locations={"VIDISHA": LocationDistance("VIDISHA", Decimal("40"))},
        overrides={"VIDISHA": LocationDistance("VIDISHA", Decimal("42.5"))},
    )
    calc = DistanceFareCalculator()

    assert calc.fare_for_location("vidisha", snapshot) == (Decimal("42.5"), Decimal("425.00"))
    assert calc.fare_for_location("UNKNOWN", snapshot) == (Decimal("0"), Decimal("0.00"))
