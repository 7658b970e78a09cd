from datetime import date
from decimal import Decimal

import pytest

from fieldforce.core.enums import RecordKind, RecordStatus, Role, TravelType
from fieldforce.core.exceptions import ValidationError

DAY = date(2024, 3, 11)


def _report(store, *, hospital, location, travel="INT", created="2024-03-11T10:00:00", user="u1", day="2024-03-11"):
    return store.put(
        "reports",
        {
            "userId": user,
            "date": day,
            "travelType": travel,
            "hospitalType": hospital,
            "location": location,
            "status": "pending",
            "createdAt": created,
        },
    )


def _drafts(store, user="u1", key="2024-03-11"):
    return store.query(
        "expenses",
        [("userId", "==", user), ("reportDateKey", "==", key), ("status", "==", "draft")],
    )


@pytest.fixture
def configured(container, store):
    store.put("users", {"name": "Worker", "allowanceAmount": "150"}, doc_id="u1")
    container.config_service.set_fare_rate(current_role=Role.ADMIN, rate=10)
    container.config_service.upsert_location(current_role=Role.ADMIN, name="VIDISHA", distance_km=40)
    return container


def test_doctor_and_chemist_visit_in_vidisha(configured, store):
    configured.submission_service.submit_visit_report(
        user_id="u1", visit_date=DAY, travel_type="INT", hospital_type="Doctor", location="VIDISHA"
    )
    configured.submission_service.submit_visit_report(
        user_id="u1", visit_date=DAY, travel_type="INT", hospital_type="Chemist", location="VIDISHA"
    )

    claim = configured.claim_service.derive_daily_claim(user_id="u1", day=DAY)

    assert claim.doctor_visits == 1
    assert claim.chemist_visits == 1
    assert claim.distance_km == Decimal("40")
    assert claim.fare_amount == Decimal("400.00")
    assert claim.allowance_amount == Decimal("150.00")
    assert claim.status == RecordStatus.DRAFT
    assert claim.report_date_key == "2024-03-11"

    doc = store.get("expenses", claim.id)
    assert doc["fareAmount"] == "400.00"
    assert doc["requiresApproval"] is False


def test_deriving_twice_keeps_a_single_draft(configured, store):
    _report(store, hospital="Doctor", location="VIDISHA")

    first = configured.claim_service.derive_daily_claim(user_id="u1", day=DAY)
    _report(store, hospital="Chemist", location="VIDISHA", created="2024-03-11T12:00:00")
    second = configured.claim_service.derive_daily_claim(user_id="u1", day=DAY)

    drafts = _drafts(store)
    assert len(drafts) == 1
    assert second.id == first.id
    assert drafts[0]["chemistVisits"] == 1


def test_duplicate_drafts_from_racing_writers_are_collapsed(configured, store):
    for created in ("2024-03-11T08:00:00", "2024-03-11T08:00:01"):
        store.put(
            "expenses",
            {"userId": "u1", "reportDateKey": "2024-03-11", "status": "draft", "createdAt": created},
        )

    configured.claim_service.derive_daily_claim(user_id="u1", day=DAY)

    drafts = _drafts(store)
    assert len(drafts) == 1
    assert drafts[0]["createdAt"] == "2024-03-11T08:00:00"


def test_earliest_report_decides_travel_type_and_location(configured, store):
    configured.config_service.upsert_location(current_role=Role.ADMIN, name="SEHORE", distance_km=38)
    _report(store, hospital="Doctor", location="SEHORE", travel="HQ", created="2024-03-11T15:00:00")
    _report(store, hospital="Doctor", location="VIDISHA", travel="INT", created="2024-03-11T09:00:00")

    claim = configured.claim_service.derive_daily_claim(user_id="u1", day=DAY)

    assert claim.location == "VIDISHA"
    assert claim.travel_type == TravelType.INT
    assert claim.doctor_visits == 2


def test_day_without_reports_resets_derived_fields(configured, store):
    _report(store, hospital="Doctor", location="VIDISHA")
    claim = configured.claim_service.derive_daily_claim(user_id="u1", day=DAY)
    store.delete("reports", store.query("reports")[0]["id"])

    claim = configured.claim_service.derive_daily_claim(user_id="u1", day=DAY)

    assert claim.doctor_visits == 0
    assert claim.chemist_visits == 0
    assert claim.location == ""
    assert claim.travel_type is None
    assert claim.distance_km == Decimal("0")
    assert claim.fare_amount == Decimal("0.00")
    assert claim.status == RecordStatus.DRAFT
    # Allowance comes from the profile, not from the reports.
    assert claim.allowance_amount == Decimal("150.00")


def test_rate_change_needs_a_new_derivation(configured, store):
    _report(store, hospital="Doctor", location="VIDISHA")
    claim = configured.claim_service.derive_daily_claim(user_id="u1", day=DAY)
    configured.config_service.set_fare_rate(current_role=Role.ADMIN, rate=12)

    assert store.get("expenses", claim.id)["fareAmount"] == "400.00"
    claim = configured.claim_service.derive_daily_claim(user_id="u1", day=DAY)
    assert claim.fare_amount == Decimal("480.00")


def test_add_other_expense_appends_to_the_draft(configured, store):
    _report(store, hospital="Doctor", location="VIDISHA")

    configured.claim_service.add_other_expense(user_id="u1", day=DAY, expense_type="Food", remark="lunch", amount="120.5")
    claim = configured.claim_service.add_other_expense(user_id="u1", day=DAY, expense_type="Courier", amount=30)

    assert [e.type for e in claim.other_expenses] == ["Food", "Courier"]
    assert claim.other_expense_total == Decimal("150.50")
    doc = _drafts(store)[0]
    assert doc["otherExpenses"][0] == {"type": "Food", "date": "2024-03-11", "remark": "lunch", "amount": "120.50"}

    # Re-deriving keeps the entries.
    claim = configured.claim_service.derive_daily_claim(user_id="u1", day=DAY)
    assert len(claim.other_expenses) == 2


def test_add_other_expense_rejects_bad_amount_without_writing(configured, store):
    with pytest.raises(ValidationError):
        configured.claim_service.add_other_expense(user_id="u1", day=DAY, expense_type="Food", amount="ten")
    with pytest.raises(ValidationError):
        configured.claim_service.add_other_expense(user_id="u1", day=DAY, expense_type="Food", amount=-5)
    assert store.query("expenses") == []


def test_clear_draft(configured, store):
    configured.claim_service.derive_daily_claim(user_id="u1", day=DAY)

    assert configured.claim_service.clear_draft(user_id="u1", day=DAY) is True
    assert configured.claim_service.clear_draft(user_id="u1", day=DAY) is False
    assert _drafts(store) == []


def test_submit_claim_moves_draft_to_pending(configured, store):
    _report(store, hospital="Doctor", location="VIDISHA")

    claim_id = configured.claim_service.submit_claim(user_id="u1", day=DAY)

    doc = store.get("expenses", claim_id)
    assert doc["status"] == "pending"
    assert doc["requiresApproval"] is True
    assert doc["fareAmount"] == "400.00"
    assert _drafts(store) == []


def test_mark_leave_day_creates_leave_and_zero_amount_claim(configured, store):
    _report(store, hospital="Doctor", location="VIDISHA")
    draft = configured.claim_service.derive_daily_claim(user_id="u1", day=DAY)

    leave_id, claim_id = configured.claim_service.mark_leave_day(user_id="u1", day=DAY)

    leave = store.get(RecordKind.LEAVE_REQUEST.value, leave_id)
    assert leave["type"] == "Personal Leave"
    assert leave["startDate"] == leave["endDate"] == "2024-03-11"
    assert leave["status"] == "pending"

    claim = store.get("expenses", claim_id)
    assert claim_id == draft.id
    assert claim["expenseType"] == "Leave"
    assert claim["status"] == "pending"
    assert claim["requiresApproval"] is False
    assert claim["fareAmount"] == "0.00"
    assert claim["doctorVisits"] == 0

    with pytest.raises(ValidationError):
        configured.claim_service.mark_leave_day(user_id="u1", day=DAY)


def test_reports_with_mixed_timezone_stamps_still_order_by_time(configured, store):
    configured.config_service.upsert_location(current_role=Role.ADMIN, name="SEHORE", distance_km=38)
    _report(store, hospital="Doctor", location="SEHORE", travel="HQ", created="2024-03-11T10:00:00+05:30")
    _report(store, hospital="Chemist", location="VIDISHA", travel="INT", created="2024-03-11T09:00:00")

    claim = configured.claim_service.derive_daily_claim(user_id="u1", day=DAY)

    assert claim.location == "VIDISHA"
    assert claim.doctor_visits == 1
    assert claim.chemist_visits == 1
