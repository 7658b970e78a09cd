from decimal import Decimal

import pytest

from fieldforce.core.enums import RecordStatus, Role
from fieldforce.records.model import SalesOrder
from fieldforce.sales.service import achievement, order_amount


def _order(store, created, status="approved", user="u1", **amounts):
    store.put("orders", {"userId": user, "productId": "p1", "status": status, "createdAt": created, **amounts})


def test_achievement_against_explicit_month_target(container, store):
    container.config_service.set_monthly_target(current_role=Role.ADMIN, user_id="u1", year=2024, month=3, amount=50000)
    _order(store, "2024-03-05T10:00:00", totalAmount="40000")
    _order(store, "2024-03-20T10:00:00", unitPrice="2500", quantity=9)

    summary = container.sales_service.month_summary(user_id="u1", year=2024, month=3)

    assert summary.target == Decimal("50000")
    assert summary.achieved == Decimal("62500")
    assert summary.achievement == Decimal("125.0")
    assert summary.achievement_label == "125.0%"


def test_target_falls_back_to_default_then_constant(container, store):
    assert container.sales_service.resolve_target(user_id="u1", year=2024, month=3) == Decimal("1000")

    container.config_service.set_monthly_target(current_role=Role.ADMIN, user_id="u1", year=2024, month=3, amount=700)
    container.config_service.set_monthly_target(current_role=Role.ADMIN, user_id="u1", year=2024, month=4, amount=900)

    assert container.sales_service.resolve_target(user_id="u1", year=2024, month=4) == Decimal("900")
    # The first target written also became the default.
    assert container.sales_service.resolve_target(user_id="u1", year=2024, month=5) == Decimal("700")

    store.put("monthlyTargets", {"userId": "u2", "targets": {"2024_3": "300"}}, doc_id="u2")
    assert container.sales_service.resolve_target(user_id="u2", year=2024, month=3) == Decimal("300")
    assert container.sales_service.resolve_target(user_id="u2", year=2024, month=4) == Decimal("1000")


def test_legacy_top_level_month_keys_are_read(container, store):
    store.put("monthlyTargets", {"2024_3": 4200, "target": 1500}, doc_id="u1")

    assert container.sales_service.resolve_target(user_id="u1", year=2024, month=3) == Decimal("4200")
    assert container.sales_service.resolve_target(user_id="u1", year=2024, month=6) == Decimal("1500")


def test_only_approved_orders_inside_the_half_open_month_count(container, store):
    _order(store, "2024-03-01T00:00:00", totalAmount="100")
    _order(store, "2024-03-31T23:59:59", totalAmount="10")
    _order(store, "2024-04-01T00:00:00", totalAmount="1000")
    _order(store, "2024-03-10T10:00:00", status="pending", totalAmount="5000")
    _order(store, "2024-03-10T10:00:00", user="u2", totalAmount="5000")

    assert container.sales_service.achieved_sales(user_id="u1", year=2024, month=3) == Decimal("110")
    assert container.sales_service.achieved_sales(user_id="u1", year=2024, month=4) == Decimal("1000")


def test_order_amount_resolution_order():
    def order(**kw):
        return SalesOrder(id="o", user_id="u1", product_id="p", status=RecordStatus.APPROVED, created_at=None, **kw)

    assert order_amount(order(quantity=3, unit_price=Decimal("10"), total_amount=Decimal("25"))) == Decimal("25")
    assert order_amount(order(quantity=3, unit_price=Decimal("10"))) == Decimal("30")
    assert order_amount(order(quantity=None, unit_price=Decimal("10"), amount=Decimal("7.5"))) == Decimal("7.5")
    assert order_amount(order(quantity=None)) == Decimal("0")


@pytest.mark.parametrize("target", [Decimal("0"), Decimal("-5")])
def test_achievement_is_undefined_without_positive_target(target):
    assert achievement(Decimal("100"), target) is None


def test_history_resolves_each_month_target(container, store):
    store.put("monthlyTargets", {"userId": "u1", "targets": {"2024_3": "2000"}, "defaultTarget": "0"}, doc_id="u1")
    _order(store, "2024-03-02T10:00:00", totalAmount="500")

    history = container.sales_service.history(user_id="u1", year=2024, month=3)

    assert len(history) == 6
    assert history[-1].achievement == Decimal("25.0")
    assert history[0].target == Decimal("0")
    assert history[0].achievement_label == "N/A"
