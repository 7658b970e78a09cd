"""Example: the service layer without Flask, over the in-memory store.

One worker visits a doctor and a chemist in VIDISHA, derives and submits the
day's claim, an admin approves it, and the month's totals are printed.
"""

from datetime import date

from fieldforce.container import build_container
from fieldforce.core.enums import Role
from fieldforce.store.memory_store import InMemoryDocumentStore


def main():
    store = InMemoryDocumentStore()
    store.put("users", {"name": "Demo Worker", "dailySalary": "500", "allowanceAmount": "150"}, doc_id="u1")
    container = build_container(store=store)

    container.config_service.set_fare_rate(current_role=Role.ADMIN, rate=10)
    container.config_service.upsert_location(current_role=Role.ADMIN, name="VIDISHA", distance_km=40)

    day = date(2024, 3, 11)
    for hospital in ("Doctor", "Chemist"):
        container.submission_service.submit_visit_report(
            user_id="u1", visit_date=day, travel_type="INT", hospital_type=hospital, location="VIDISHA"
        )

    claim = container.claim_service.derive_daily_claim(user_id="u1", day=day)
    print("draft:", claim.doctor_visits, claim.chemist_visits, claim.distance_km, claim.fare_amount)

    claim_id = container.claim_service.submit_claim(user_id="u1", day=day)
    container.approval_service.approve(current_role=Role.ADMIN, record_id=claim_id, type_label="Travel")

    totals = container.compensation_service.monthly_totals(user_id="u1", year=2024, month=3)
    print(totals.to_dict())


if __name__ == "__main__":
    main()
