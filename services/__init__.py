"""
Services package
Data access, payment rules, dashboard figures and reminder links
"""

from services.base_db import BaseDBService
from services.auth_service import AuthService
from services.building_service import BuildingService
from services.room_service import RoomService
from services.tenant_service import TenantService
from services.payment_service import PaymentService
from services.dashboard_service import DashboardService
from services.query_cache import QueryCache, query_cache
from services.logger import logger

__all__ = [
    'BaseDBService',
    'AuthService',
    'BuildingService',
    'RoomService',
    'TenantService',
    'PaymentService',
    'DashboardService',
    'QueryCache',
    'query_cache',
    'logger'
]
