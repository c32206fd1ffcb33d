"""
Payment router
Payment records, installments, mark-paid and reminder links
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from routers.deps import get_current_user, get_payment_service
from schemas.auth import CurrentUser
from schemas.payment import (
    MonthlyRevenue,
    Payment,
    PaymentCreate,
    PaymentTransaction,
    PaymentTransactionCreate,
    PaymentWithTenant,
    ReminderLink,
)
from services.payment_service import PaymentService

router = APIRouter(prefix="/api/payments", tags=["payment"])

STATUS_QUERY = Query(None, pattern="^(pending|paid|overdue|partial|partial_overdue)$")


@router.get("", response_model=List[PaymentWithTenant])
def list_payments(status: Optional[str] = STATUS_QUERY,
                  _: CurrentUser = Depends(get_current_user),
                  service: PaymentService = Depends(get_payment_service)):
    return service.list_payments(status)


@router.get("/today", response_model=List[PaymentWithTenant])
def todays_due(_: CurrentUser = Depends(get_current_user),
               service: PaymentService = Depends(get_payment_service)):
    """Pending payments due today"""
    return service.get_todays_due_payments()


@router.get("/overdue", response_model=List[PaymentWithTenant])
def overdue(_: CurrentUser = Depends(get_current_user),
            service: PaymentService = Depends(get_payment_service)):
    return service.get_overdue_payments()


@router.get("/revenue", response_model=List[MonthlyRevenue])
def monthly_revenue(year: Optional[int] = None,
                    _: CurrentUser = Depends(get_current_user),
                    service: PaymentService = Depends(get_payment_service)):
    return service.get_monthly_revenue(year)


@router.get("/{payment_id}", response_model=PaymentWithTenant)
def get_payment(payment_id: str,
                _: CurrentUser = Depends(get_current_user),
                service: PaymentService = Depends(get_payment_service)):
    """Payment with tenant and its transaction history"""
    return service.get_payment_history(payment_id)


@router.get("/{payment_id}/transactions", response_model=List[PaymentTransaction])
def list_transactions(payment_id: str,
                      _: CurrentUser = Depends(get_current_user),
                      service: PaymentService = Depends(get_payment_service)):
    return service.list_transactions(payment_id)


@router.get("/{payment_id}/reminder", response_model=ReminderLink)
def reminder(payment_id: str,
             _: CurrentUser = Depends(get_current_user),
             service: PaymentService = Depends(get_payment_service)):
    """WhatsApp link reminding the tenant of the outstanding balance"""
    return service.build_reminder(payment_id)


@router.post("", response_model=Payment, status_code=201)
def create_payment(data: PaymentCreate,
                   user: CurrentUser = Depends(get_current_user),
                   service: PaymentService = Depends(get_payment_service)):
    return service.create_payment(data, user)


@router.post("/{payment_id}/transactions", response_model=Payment, status_code=201)
def record_transaction(payment_id: str, data: PaymentTransactionCreate,
                       user: CurrentUser = Depends(get_current_user),
                       service: PaymentService = Depends(get_payment_service)):
    """Record a partial (or final) installment"""
    return service.record_transaction(payment_id, data, user)


@router.post("/{payment_id}/mark-paid", response_model=Payment)
def mark_paid(payment_id: str,
              user: CurrentUser = Depends(get_current_user),
              service: PaymentService = Depends(get_payment_service)):
    """Settle the remaining balance in one transaction"""
    return service.mark_payment_paid(payment_id, user)
