"""
Tenant API router
"""
from typing import List, Optional

from fastapi import APIRouter, Depends

from routers.deps import get_current_user, get_payment_service, get_tenant_service
from schemas.auth import CurrentUser
from schemas.payment import Payment
from schemas.tenant import Tenant, TenantCreate, TenantUpdate, TenantWithRoom
from services.payment_service import PaymentService
from services.tenant_service import TenantService

router = APIRouter(prefix="/api/tenants", tags=["tenant"])


@router.get("", response_model=List[TenantWithRoom])
def list_tenants(active_only: bool = True,
                 _: CurrentUser = Depends(get_current_user),
                 service: TenantService = Depends(get_tenant_service)):
    return service.list_tenants(active_only)


@router.get("/search", response_model=List[TenantWithRoom])
def search_tenants(q: str = "", building_id: Optional[str] = None, active_only: bool = True,
                   _: CurrentUser = Depends(get_current_user),
                   service: TenantService = Depends(get_tenant_service)):
    """Match name (case-insensitive) or phone, optionally within one building"""
    return service.search_tenants(q, building_id, active_only)


@router.get("/room/{room_id}", response_model=List[Tenant])
def get_tenants_in_room(room_id: str,
                        _: CurrentUser = Depends(get_current_user),
                        service: TenantService = Depends(get_tenant_service)):
    return service.get_tenants_in_room(room_id)


@router.get("/{tenant_id}", response_model=TenantWithRoom)
def get_tenant(tenant_id: str,
               _: CurrentUser = Depends(get_current_user),
               service: TenantService = Depends(get_tenant_service)):
    return service.get_tenant(tenant_id)


@router.get("/{tenant_id}/payments", response_model=List[Payment])
def get_tenant_payments(tenant_id: str,
                        _: CurrentUser = Depends(get_current_user),
                        service: PaymentService = Depends(get_payment_service)):
    """Payment history, newest period first"""
    return service.get_tenant_payments(tenant_id)


@router.post("", response_model=Tenant, status_code=201)
def create_tenant(data: TenantCreate,
                  user: CurrentUser = Depends(get_current_user),
                  service: TenantService = Depends(get_tenant_service)):
    return service.create_tenant(data, user)


@router.patch("/{tenant_id}", response_model=Tenant)
def update_tenant(tenant_id: str, data: TenantUpdate,
                  user: CurrentUser = Depends(get_current_user),
                  service: TenantService = Depends(get_tenant_service)):
    return service.update_tenant(tenant_id, data, user)


@router.post("/{tenant_id}/deactivate", response_model=Tenant)
def deactivate_tenant(tenant_id: str,
                      user: CurrentUser = Depends(get_current_user),
                      service: TenantService = Depends(get_tenant_service)):
    """Mark the tenant as left: frees the room, keeps payment history"""
    return service.deactivate_tenant(tenant_id, user)
