"""
Rent payment service - v3.0
✅ Payment listings with tenant → room → building in one request
✅ Installments recorded in payment_transactions (append-only)
✅ amount_paid / status reconciled from the transaction log on every write
✅ Status re-derived on read from amount, amount_paid and due_date
✅ Monthly revenue series
"""

from datetime import date
from typing import List, Optional

import pandas as pd

from config.settings import MARK_PAID_NOTE
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
from services.base_db import BaseDBService
from services.exceptions import NotFoundError, ValidationError
from services.logger import log_user_action
from services.payment_status import (
    EPSILON,
    PAID,
    PENDING,
    UNSETTLED_STATUSES,
    derive_payment_status,
    reconcile_payment,
    refresh_status,
)
from services.reminder_service import build_payment_reminder
from utils.formatters import format_currency


class PaymentService(BaseDBService):
    """Rent payments and their installments"""

    TABLE_NAME = "payments"
    TRANSACTIONS_TABLE = "payment_transactions"
    INVALIDATES = ("payments", "dashboard")

    SELECT_WITH_TENANT = "*, tenant:tenants(*, room:rooms(*, building:buildings(*)))"

    # ==================== Queries ====================

    def list_payments(self, status: Optional[str] = None,
                      today: Optional[date] = None) -> List[PaymentWithTenant]:
        """
        All payments by due date, oldest first.

        Args:
            status: keep only payments whose derived status matches
            today: reference date for overdue derivation
        """
        today = today or self._today()

        def load():
            rows = self._select(
                self.supabase.table(self.TABLE_NAME)
                    .select(self.SELECT_WITH_TENANT)
                    .order("due_date")
            )
            payments = [refresh_status(PaymentWithTenant(**row), today) for row in rows]
            if status:
                payments = [p for p in payments if p.status == status]
            return payments

        return self._cached(("payments", "list", status, today), load)

    def get_payment(self, payment_id: str) -> PaymentWithTenant:
        """One payment with its tenant, room and building"""
        def load():
            row = self._select_first(
                self.supabase.table(self.TABLE_NAME).select(self.SELECT_WITH_TENANT).eq("id", payment_id)
            )
            if not row:
                raise NotFoundError(f"Payment {payment_id} not found")
            return PaymentWithTenant(**row)

        return self._cached(("payments", payment_id), load)

    def get_payment_history(self, payment_id: str) -> PaymentWithTenant:
        """Payment plus its transaction log, for the history view"""
        payment = self.get_payment(payment_id)
        return payment.model_copy(update={"transactions": self.list_transactions(payment_id)})

    def get_todays_due_payments(self, today: Optional[date] = None) -> List[PaymentWithTenant]:
        """Pending payments due today"""
        today = today or self._today()

        def load():
            rows = self._select(
                self.supabase.table(self.TABLE_NAME)
                    .select(self.SELECT_WITH_TENANT)
                    .eq("due_date", today.isoformat())
                    .eq("status", PENDING)
                    .order("created_at")
            )
            return [PaymentWithTenant(**row) for row in rows]

        return self._cached(("payments", "today", today), load)

    def get_overdue_payments(self, today: Optional[date] = None) -> List[PaymentWithTenant]:
        """Unsettled payments whose due date has passed"""
        today = today or self._today()

        def load():
            rows = self._select(
                self.supabase.table(self.TABLE_NAME)
                    .select(self.SELECT_WITH_TENANT)
                    .lt("due_date", today.isoformat())
                    .in_("status", list(UNSETTLED_STATUSES))
                    .order("due_date")
            )
            return [refresh_status(PaymentWithTenant(**row), today) for row in rows]

        return self._cached(("payments", "overdue", today), load)

    def get_tenant_payments(self, tenant_id: str) -> List[Payment]:
        """A tenant's payments, newest period first"""
        def load():
            rows = self._select(
                self.supabase.table(self.TABLE_NAME)
                    .select("*")
                    .eq("tenant_id", tenant_id)
                    .order("year", desc=True)
                    .order("month", desc=True)
            )
            return [Payment(**row) for row in rows]

        return self._cached(("payments", "tenant", tenant_id), load)

    def list_transactions(self, payment_id: str) -> List[PaymentTransaction]:
        """Installments recorded against a payment, newest first"""
        return self._cached(
            ("payments", "transactions", payment_id),
            lambda: self._fetch_transactions(payment_id),
        )

    def get_monthly_revenue(self, year: Optional[int] = None) -> List[MonthlyRevenue]:
        """
        Revenue per month of a year: summed amount of paid payments.

        Returns:
            12 entries, months 1-12, zero where nothing was paid
        """
        year = year or self._today().year

        def load():
            rows = self._select(
                self.supabase.table(self.TABLE_NAME)
                    .select("month, year, amount, status")
                    .eq("year", year)
                    .eq("status", PAID)
            )
            df = pd.DataFrame(rows, columns=["month", "year", "amount", "status"])
            df["amount"] = pd.to_numeric(df["amount"], errors="coerce").fillna(0)
            by_month = df.groupby("month")["amount"].sum().reindex(range(1, 13), fill_value=0)
            return [MonthlyRevenue(month=int(m), revenue=float(v)) for m, v in by_month.items()]

        return self._cached(("payments", "revenue", year), load)

    def build_reminder(self, payment_id: str) -> ReminderLink:
        """WhatsApp reminder for a payment's outstanding balance"""
        return build_payment_reminder(self.get_payment(payment_id))

    # ==================== Mutations ====================

    def create_payment(self, data: PaymentCreate, user: CurrentUser,
                       today: Optional[date] = None) -> Payment:
        """
        Create the payment record for one tenant and month.

        The amount defaults to the tenant's monthly rent.
        """
        self._require_owner(user, "create payment records")
        today = today or self._today()

        amount = data.amount
        if amount is None:
            tenant = self._select_first(
                self.supabase.table("tenants").select("id, monthly_rent").eq("id", data.tenant_id),
                "tenants",
            )
            if not tenant:
                raise NotFoundError(f"Tenant {data.tenant_id} not found")
            amount = float(tenant["monthly_rent"])

        payload = {
            "tenant_id": data.tenant_id,
            "amount": amount,
            "amount_paid": 0,
            "month": data.month,
            "year": data.year,
            "due_date": data.due_date.isoformat(),
            "status": derive_payment_status(amount, 0, data.due_date, today),
        }
        rows = self._execute("INSERT", self.supabase.table(self.TABLE_NAME).insert(payload)).data
        payment = Payment(**rows[0])

        self._invalidate()
        log_user_action(
            "create payment", user.id,
            payment_id=payment.id, tenant_id=payment.tenant_id,
            period=f"{payment.year}/{payment.month:02d}", amount=payment.amount,
        )
        return payment

    def record_transaction(self, payment_id: str, data: PaymentTransactionCreate,
                           user: CurrentUser, today: Optional[date] = None) -> Payment:
        """
        Record one installment and reconcile the payment.

        Raises:
            NotFoundError: unknown payment
            ValidationError: payment already settled, or amount above the balance
        """
        today = today or self._today()
        payment = self._fetch_payment(payment_id)
        paid = sum(t.amount for t in self._fetch_transactions(payment_id))
        balance = round(float(payment.amount) - paid, 2)

        if balance <= EPSILON:
            raise ValidationError("This payment is already fully paid")
        if data.amount > balance + EPSILON:
            raise ValidationError(
                f"Amount exceeds the outstanding balance of {format_currency(balance)}"
            )

        self._insert_transaction(payment_id, data.amount, data.payment_date, data.note, user)
        updated = self._reconcile(payment, user, today)

        self._invalidate()
        log_user_action(
            "record payment", user.id,
            payment_id=payment_id, amount=data.amount, status=updated.status,
        )
        return updated

    def mark_payment_paid(self, payment_id: str, user: CurrentUser,
                          today: Optional[date] = None) -> Payment:
        """
        Settle a payment in full.

        Appends one transaction for the balance left by the transaction log,
        dated today, then reconciles amount_paid, status, paid_date and
        marked_by. The stored amount_paid is ignored.

        Raises:
            NotFoundError: unknown payment; nothing is written
        """
        today = today or self._today()
        payment = self._fetch_payment(payment_id)
        paid = sum(t.amount for t in self._fetch_transactions(payment_id))
        remaining = round(float(payment.amount) - paid, 2)

        if remaining > EPSILON:
            self._insert_transaction(payment_id, remaining, today, MARK_PAID_NOTE, user)
        else:
            self.logger.info(f"Payment {payment_id} has no balance left; reconciling only")

        updated = self._reconcile(payment, user, today)

        self._invalidate()
        log_user_action("mark payment paid", user.id, payment_id=payment_id, amount=remaining)
        return updated

    # ==================== Internals ====================

    def _fetch_payment(self, payment_id: str) -> Payment:
        """Uncached read used before writes"""
        row = self._select_first(
            self.supabase.table(self.TABLE_NAME).select("*").eq("id", payment_id)
        )
        if not row:
            self.logger.error(f"Payment not found: {payment_id}")
            raise NotFoundError(f"Payment {payment_id} not found")
        return Payment(**row)

    def _fetch_transactions(self, payment_id: str) -> List[PaymentTransaction]:
        rows = self._select(
            self.supabase.table(self.TRANSACTIONS_TABLE)
                .select("*")
                .eq("payment_id", payment_id)
                .order("payment_date", desc=True),
            self.TRANSACTIONS_TABLE,
        )
        return [PaymentTransaction(**row) for row in rows]

    def _insert_transaction(self, payment_id: str, amount: float, payment_date: date,
                            note: Optional[str], user: CurrentUser) -> PaymentTransaction:
        payload = {
            "payment_id": payment_id,
            "amount": amount,
            "payment_date": payment_date.isoformat(),
            "note": note,
            "created_by": user.id,
        }
        rows = self._execute(
            "INSERT",
            self.supabase.table(self.TRANSACTIONS_TABLE).insert(payload),
            self.TRANSACTIONS_TABLE,
        ).data
        return PaymentTransaction(**rows[0])

    def _reconcile(self, payment: Payment, user: CurrentUser, today: date) -> Payment:
        """Write amount_paid and status back from the transaction log"""
        updates = reconcile_payment(payment, self._fetch_transactions(payment.id), today, user.id)
        rows = self._execute(
            "UPDATE",
            self.supabase.table(self.TABLE_NAME).update(self._serialize(updates)).eq("id", payment.id),
        ).data
        if not rows:
            raise NotFoundError(f"Payment {payment.id} not found")
        return Payment(**rows[0])
