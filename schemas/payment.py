"""
Rent payment Pydantic schema
✅ One payment row per tenant per billing month
✅ amount_paid mirrors the sum of payment_transactions
✅ status: pending / paid / overdue / partial / partial_overdue
"""
from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from schemas.tenant import TenantWithRoom

PAYMENT_STATUS_PATTERN = "^(pending|paid|overdue|partial|partial_overdue)$"


class PaymentBase(BaseModel):
    """Rent due for one tenant and period"""
    tenant_id: str = Field(..., description="Tenant the rent is billed to")
    amount: float = Field(
        ...,
        ge=0,
        description="Rent due for the period",
        examples=[6000.0]
    )
    month: int = Field(
        ...,
        ge=1,
        le=12,
        description="Billing month",
        examples=[3]
    )
    year: int = Field(
        ...,
        ge=2000,
        le=2100,
        description="Billing year",
        examples=[2026]
    )
    due_date: date = Field(..., description="Due date", examples=["2026-03-05"])


class PaymentCreate(BaseModel):
    """New payment record; amount defaults to the tenant's monthly rent"""
    tenant_id: str
    amount: Optional[float] = Field(None, gt=0)
    month: int = Field(..., ge=1, le=12)
    year: int = Field(..., ge=2000, le=2100)
    due_date: date


class Payment(PaymentBase):
    model_config = ConfigDict(from_attributes=True)

    id: str
    amount_paid: float = Field(default=0, description="Sum of recorded transactions")
    paid_date: Optional[date] = None
    status: str = Field(default="pending", pattern=PAYMENT_STATUS_PATTERN)
    marked_by: Optional[str] = Field(None, description="User who settled the payment")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PaymentTransactionCreate(BaseModel):
    """One installment against a payment"""
    amount: float = Field(..., gt=0, description="Installment amount")
    payment_date: date = Field(default_factory=date.today)
    note: Optional[str] = Field(None, max_length=500)

    @field_validator('note')
    @classmethod
    def blank_note_to_none(cls, v):
        if v is None:
            return None
        v = v.strip()
        return v or None


class PaymentTransaction(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    payment_id: str
    amount: float
    payment_date: date
    note: Optional[str] = None
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None


class PaymentWithTenant(Payment):
    tenant: Optional[TenantWithRoom] = None
    transactions: List[PaymentTransaction] = Field(default_factory=list)


class ReminderLink(BaseModel):
    payment_id: str
    tenant_name: str
    phone: str
    amount: float
    month: str
    url: str


class MonthlyRevenue(BaseModel):
    month: int = Field(..., ge=1, le=12)
    revenue: float = 0
