"""
Pydantic schemas
"""

from .auth import (
    CurrentUser,
    LoginRequest,
    LoginResponse,
    MeResponse,
    Profile,
    UserRole,
)

from .building import (
    Building,
    BuildingCreate,
    BuildingUpdate,
)

from .room import (
    Room,
    RoomCreate,
    RoomUpdate,
    RoomWithBuilding,
    RoomOccupancy,
)

from .tenant import (
    Tenant,
    TenantCreate,
    TenantUpdate,
    TenantWithRoom,
)

from .payment import (
    MonthlyRevenue,
    Payment,
    PaymentCreate,
    PaymentTransaction,
    PaymentTransactionCreate,
    PaymentWithTenant,
    ReminderLink,
)

from .dashboard import DashboardStats

__all__ = [
    # Auth
    "CurrentUser",
    "LoginRequest",
    "LoginResponse",
    "MeResponse",
    "Profile",
    "UserRole",

    # Buildings / rooms
    "Building",
    "BuildingCreate",
    "BuildingUpdate",
    "Room",
    "RoomCreate",
    "RoomUpdate",
    "RoomWithBuilding",
    "RoomOccupancy",

    # Tenants
    "Tenant",
    "TenantCreate",
    "TenantUpdate",
    "TenantWithRoom",

    # Payments
    "MonthlyRevenue",
    "Payment",
    "PaymentCreate",
    "PaymentTransaction",
    "PaymentTransactionCreate",
    "PaymentWithTenant",
    "ReminderLink",

    # Dashboard
    "DashboardStats",
]
