"""
Dashboard statistics
"""
from pydantic import BaseModel, Field


class DashboardStats(BaseModel):
    total_buildings: int = 0
    total_tenants: int = Field(0, description="Active tenants")
    total_rooms: int = 0
    total_capacity: int = Field(0, description="Sum of room capacities (beds)")
    occupied_beds: int = Field(0, description="Approximated by the active tenant count")
    vacant_beds: int = 0
    occupancy_rate: float = Field(0, description="occupied / capacity x 100")
    todays_due: int = 0
    overdue_count: int = 0
    monthly_revenue: float = Field(0, description="Sum of amount for paid payments this month")
    monthly_collected: float = Field(0, description="Sum of amount_paid across this month's payments")
