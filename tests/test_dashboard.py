from datetime import date

import pytest

from services.dashboard_service import DashboardService, build_stats, occupancy_rate
from services.exceptions import DataAccessError

TODAY = date(2026, 10, 18)


def test_occupancy_rate():
    assert occupancy_rate(0, 3) == 0
    assert occupancy_rate(10, 5) == 50
    assert occupancy_rate(4, 4) == 100


def test_build_stats_allows_negative_vacancy():
    stats = build_stats(1, 3, [{"capacity": 2}], 0, 0, [], [])
    assert stats.total_capacity == 2
    assert stats.vacant_beds == -1
    assert stats.occupancy_rate == 150


@pytest.fixture
def dashboard_db(db):
    building = db.seed("buildings", name="Sunrise PG")
    room_a = db.seed("rooms", building_id=building["id"], room_number="101", capacity=2, rent_amount=6000)
    db.seed("rooms", building_id=building["id"], room_number="102", capacity=3, rent_amount=5000)
    for name in ("Asha", "Ravi"):
        db.seed("tenants", name=name, phone="9876543210", room_id=room_a["id"],
                monthly_rent=6000, joining_date="2026-01-01")
    db.seed("tenants", name="Gone", phone="9000000000", room_id=None, monthly_rent=5000,
            joining_date="2025-01-01", is_active=False, leaving_date="2026-02-01")

    common = dict(tenant_id="t", month=10, year=2026)
    db.seed("payments", amount=6000, due_date="2026-10-18", **common)
    db.seed("payments", amount=6000, due_date="2026-10-01", **common)
    db.seed("payments", amount=6000, amount_paid=6000, status="paid", due_date="2026-10-05", **common)
    db.seed("payments", amount=5000, amount_paid=2000, status="partial", due_date="2026-10-25", **common)
    # last month, settled
    db.seed("payments", amount=6000, amount_paid=6000, status="paid", due_date="2026-09-05",
            tenant_id="t", month=9, year=2026)
    return db


def test_get_stats(dashboard_db, cache):
    stats = DashboardService(dashboard_db, cache).get_stats(TODAY)

    assert stats.total_buildings == 1
    assert stats.total_tenants == 2
    assert stats.total_rooms == 2
    assert stats.total_capacity == 5
    assert stats.occupied_beds == 2
    assert stats.vacant_beds == 3
    assert stats.occupancy_rate == 40
    assert stats.todays_due == 1
    assert stats.overdue_count == 1
    assert stats.monthly_revenue == 6000
    assert stats.monthly_collected == 8000


def test_empty_store_gives_zeroes(db, cache):
    stats = DashboardService(db, cache).get_stats(TODAY)

    assert stats.total_capacity == 0
    assert stats.occupancy_rate == 0
    assert stats.monthly_revenue == 0


def test_stats_are_cached_until_payments_change(dashboard_db, cache):
    service = DashboardService(dashboard_db, cache)
    service.get_stats(TODAY)
    reads = len(dashboard_db.executed)

    service.get_stats(TODAY)
    assert len(dashboard_db.executed) == reads

    cache.invalidate("dashboard")
    service.get_stats(TODAY)
    assert len(dashboard_db.executed) > reads


def test_store_failure_surfaces(db, cache):
    db.fail("payments")
    with pytest.raises(DataAccessError):
        DashboardService(db, cache).get_stats(TODAY)
    assert len(cache) == 0
