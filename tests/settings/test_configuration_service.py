from decimal import Decimal

import pytest

from fieldforce.core.enums import Role
from fieldforce.core.exceptions import AuthorizationError, NotFoundError, ValidationError


@pytest.fixture
def config(container, store):
    store.put("users", {"name": "Worker"}, doc_id="u1")
    return container.config_service


def test_admin_only(config):
    with pytest.raises(AuthorizationError):
        config.set_fare_rate(current_role=Role.USER, rate=10)
    with pytest.raises(AuthorizationError):
        config.upsert_location(current_role=Role.USER, name="VIDISHA", distance_km=40)


def test_fare_rate_must_be_a_non_negative_number(config):
    with pytest.raises(ValidationError):
        config.set_fare_rate(current_role=Role.ADMIN, rate="ten")
    with pytest.raises(ValidationError):
        config.set_fare_rate(current_role=Role.ADMIN, rate=-1)

    assert config.set_fare_rate(current_role=Role.ADMIN, rate="8") == Decimal("8.00")
    assert config.snapshot("u1").fare_per_distance == Decimal("8")


def test_locations_are_keyed_case_insensitively(config, store):
    config.upsert_location(current_role=Role.ADMIN, name="Vidisha", distance_km=40)
    config.upsert_location(current_role=Role.ADMIN, name="VIDISHA", distance_km=41)

    assert len(store.query("locations")) == 1
    assert config.snapshot("u1").distance_for("vidisha") == Decimal("41")

    config.remove_location(current_role=Role.ADMIN, name="vidisha")
    assert config.snapshot("u1").distance_for("VIDISHA") == Decimal("0")
    with pytest.raises(NotFoundError):
        config.remove_location(current_role=Role.ADMIN, name="vidisha")


def test_profile_values(config, container):
    config.set_daily_salary(current_role=Role.ADMIN, user_id="u1", amount=500)
    config.set_allowance(current_role=Role.ADMIN, user_id="u1", amount="150.5")
    config.set_headquarters(current_role=Role.ADMIN, user_id="u1", headquarters="bhopal")

    profile = container.settings_repo.get_profile("u1")
    assert profile.daily_salary == Decimal("500")
    assert profile.allowance_amount == Decimal("150.50")
    assert profile.headquarters == "BHOPAL"

    with pytest.raises(ValidationError):
        config.set_headquarters(current_role=Role.ADMIN, user_id="u1", headquarters="MUMBAI")
    with pytest.raises(NotFoundError):
        config.set_daily_salary(current_role=Role.ADMIN, user_id="ghost", amount=500)


def test_location_overrides_are_limited_to_headquarters_destinations(config):
    config.upsert_location(current_role=Role.ADMIN, name="VIDISHA", distance_km=40)
    config.set_headquarters(current_role=Role.ADMIN, user_id="u1", headquarters="BHOPAL")

    config.add_location_override(current_role=Role.ADMIN, user_id="u1", name="vidisha", distance_km=55)
    with pytest.raises(ValidationError):
        config.add_location_override(current_role=Role.ADMIN, user_id="u1", name="DEWAS", distance_km=30)

    assert config.snapshot("u1").distance_for("VIDISHA") == Decimal("55")

    config.remove_location_override(current_role=Role.ADMIN, user_id="u1", name="Vidisha")
    assert config.snapshot("u1").distance_for("VIDISHA") == Decimal("40")
    with pytest.raises(NotFoundError):
        config.remove_location_override(current_role=Role.ADMIN, user_id="u1", name="VIDISHA")


def test_legacy_override_entries_can_be_removed(config, store):
    store.update("users", "u1", {"locations": {"abc123": {"name": "Sehore", "distance": 38}}})

    assert config.snapshot("u1").distance_for("SEHORE") == Decimal("38")
    config.remove_location_override(current_role=Role.ADMIN, user_id="u1", name="SEHORE")
    assert store.get("users", "u1")["locations"] == {}


def test_monthly_target_validation(config):
    with pytest.raises(ValidationError):
        config.set_monthly_target(current_role=Role.ADMIN, user_id="u1", year=2024, month=13, amount=100)
    with pytest.raises(ValidationError):
        config.set_monthly_target(current_role=Role.ADMIN, user_id="u1", year=2024, month=3, amount="abc")
    with pytest.raises(ValidationError):
        config.set_monthly_target(current_role=Role.ADMIN, user_id="u1", year=2024, month=3, amount=0)

    target = config.set_monthly_target(current_role=Role.ADMIN, user_id="u1", year=2024, month=3, amount="5000")
    assert target.targets == {"2024_3": Decimal("5000")}
    assert target.default_target == Decimal("5000")
