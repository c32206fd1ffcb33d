"""
Shared FastAPI dependencies: Supabase client, services, signed-in user
"""
from typing import Optional

from fastapi import Depends, Header, HTTPException
from supabase import Client

from config.supabase import get_supabase
from schemas.auth import CurrentUser
from services.auth_service import AuthService
from services.building_service import BuildingService
from services.dashboard_service import DashboardService
from services.payment_service import PaymentService
from services.room_service import RoomService
from services.tenant_service import TenantService


def get_supabase_client() -> Client:
    return get_supabase()


def get_auth_service(client: Client = Depends(get_supabase_client)) -> AuthService:
    return AuthService(client)


def get_building_service(client: Client = Depends(get_supabase_client)) -> BuildingService:
    return BuildingService(client)


def get_room_service(client: Client = Depends(get_supabase_client)) -> RoomService:
    return RoomService(client)


def get_tenant_service(client: Client = Depends(get_supabase_client)) -> TenantService:
    return TenantService(client)


def get_payment_service(client: Client = Depends(get_supabase_client)) -> PaymentService:
    return PaymentService(client)


def get_dashboard_service(client: Client = Depends(get_supabase_client)) -> DashboardService:
    return DashboardService(client)


def get_current_user(
    authorization: Optional[str] = Header(None),
    auth: AuthService = Depends(get_auth_service),
) -> CurrentUser:
    """
    Resolve the Bearer token in the Authorization header to a user and role.
    """
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Missing bearer token")

    token = authorization[len("Bearer "):]
    user = auth.verify_token(token)
    if user is None:
        raise HTTPException(status_code=401, detail="Invalid or expired token")
    return user
