"""
Dashboard statistics
Counts come from exact-count head requests; sums pull only the columns they need.
"""
from datetime import date
from typing import Dict, Iterable, List, Optional

from schemas.dashboard import DashboardStats
from services.base_db import BaseDBService
from services.payment_status import PAID, PENDING, UNSETTLED_STATUSES


# ==================== Reducers ====================

def occupancy_rate(capacity: int, occupied: int) -> float:
    """occupied / capacity x 100; 0 when there are no beds"""
    if capacity <= 0:
        return 0
    return occupied / capacity * 100


def total_capacity(rooms: Iterable[Dict]) -> int:
    return sum(int(room.get("capacity") or 0) for room in rooms)


def sum_field(rows: Iterable[Dict], field: str) -> float:
    return sum(float(row.get(field) or 0) for row in rows)


def build_stats(total_buildings: int, active_tenants: int, rooms: List[Dict],
                todays_due: int, overdue_count: int,
                paid_this_month: List[Dict], month_payments: List[Dict]) -> DashboardStats:
    """
    Assemble the dashboard figures.

    Occupied beds are approximated by the number of active tenants; a tenant
    without a room still counts, and over-assigned rooms push vacancy negative.
    """
    capacity = total_capacity(rooms)
    occupied = active_tenants

    return DashboardStats(
        total_buildings=total_buildings,
        total_tenants=active_tenants,
        total_rooms=len(rooms),
        total_capacity=capacity,
        occupied_beds=occupied,
        vacant_beds=capacity - occupied,
        occupancy_rate=occupancy_rate(capacity, occupied),
        todays_due=todays_due,
        overdue_count=overdue_count,
        monthly_revenue=sum_field(paid_this_month, "amount"),
        monthly_collected=sum_field(month_payments, "amount_paid"),
    )


# ==================== Service ====================

class DashboardService(BaseDBService):
    """Dashboard figures"""

    def get_stats(self, today: Optional[date] = None) -> DashboardStats:
        today = today or self._today()
        return self._cached(("dashboard", "stats", today), lambda: self._load_stats(today))

    def _load_stats(self, today: date) -> DashboardStats:
        table = self.supabase.table
        today_iso = today.isoformat()

        total_buildings = self._count(table("buildings").select("*", count="exact", head=True), "buildings")

        active_tenants = self._count(
            table("tenants").select("*", count="exact", head=True).eq("is_active", True),
            "tenants",
        )

        rooms = self._select(table("rooms").select("id, capacity"), "rooms")

        todays_due = self._count(
            table("payments").select("*", count="exact", head=True)
                .eq("due_date", today_iso)
                .eq("status", PENDING),
            "payments",
        )

        overdue_count = self._count(
            table("payments").select("*", count="exact", head=True)
                .lt("due_date", today_iso)
                .in_("status", list(UNSETTLED_STATUSES)),
            "payments",
        )

        month_payments = self._select(
            table("payments").select("amount, amount_paid, status")
                .eq("month", today.month)
                .eq("year", today.year),
            "payments",
        )
        paid_this_month = [p for p in month_payments if p.get("status") == PAID]

        stats = build_stats(
            total_buildings, active_tenants, rooms,
            todays_due, overdue_count, paid_this_month, month_payments,
        )
        self.logger.info(
            f"📊 Dashboard: {stats.occupied_beds}/{stats.total_capacity} beds, "
            f"{stats.overdue_count} overdue, revenue {stats.monthly_revenue:.0f}"
        )
        return stats
