"""
Payment balance and status rules

Pure functions over a payment's amount, amount_paid, due_date and status.
The stored status is only a cached view: derive_payment_status() recomputes
it from the numbers and the date, and reconcile_payment() rebuilds
amount_paid from the transaction log.
"""
from datetime import date
from typing import Dict, Iterable, Optional, Tuple

PENDING = "pending"
PAID = "paid"
OVERDUE = "overdue"
PARTIAL = "partial"
PARTIAL_OVERDUE = "partial_overdue"

PAYMENT_STATUSES = (PENDING, PAID, OVERDUE, PARTIAL, PARTIAL_OVERDUE)
PARTIAL_STATUSES = (PARTIAL, PARTIAL_OVERDUE)
OVERDUE_STATUSES = (OVERDUE, PARTIAL_OVERDUE)
# anything not yet settled; past due_date these are all overdue
UNSETTLED_STATUSES = (PENDING, OVERDUE, PARTIAL, PARTIAL_OVERDUE)

_DISPLAY_STATUS = {
    PAID: PAID,
    PARTIAL: PARTIAL,
    PARTIAL_OVERDUE: OVERDUE,
    OVERDUE: OVERDUE,
    PENDING: PENDING,
}

# amounts are rupees; anything below a paisa is rounding noise
EPSILON = 0.005


def get_payment_balance(payment) -> float:
    """amount - amount_paid. Not clamped: overpayment gives a negative balance."""
    return float(payment.amount) - float(payment.amount_paid or 0)


def display_balance(payment) -> float:
    """Balance as shown to users, never below zero"""
    return max(get_payment_balance(payment), 0.0)


def is_payment_partial(payment) -> bool:
    return payment.status in PARTIAL_STATUSES


def is_payment_overdue(payment) -> bool:
    return payment.status in OVERDUE_STATUSES


def get_payment_display_status(payment) -> str:
    """Collapse the five stored statuses into paid / partial / overdue / pending"""
    return _DISPLAY_STATUS.get(payment.status, PENDING)


def status_badge(payment) -> Tuple[str, str]:
    """
    Badge for payment lists.

    Returns:
        (label, tone) where tone is success / warning / danger
    """
    status = payment.status

    if status == PAID or get_payment_balance(payment) <= 0:
        return "Paid", "success"
    if status in PARTIAL_STATUSES:
        return "Partial", "danger" if status == PARTIAL_OVERDUE else "warning"
    if status == OVERDUE:
        return "Overdue", "danger"
    return "Pending", "warning"


def derive_payment_status(amount: float, amount_paid: float, due_date: date,
                          today: Optional[date] = None) -> str:
    """
    Status as a function of the numbers and the calendar.

    - amount_paid >= amount          -> paid
    - 0 < amount_paid < amount       -> partial, or partial_overdue once past due
    - amount_paid == 0               -> pending, or overdue once past due
    """
    today = today or date.today()
    amount = float(amount)
    amount_paid = float(amount_paid or 0)
    past_due = due_date < today

    if amount_paid >= amount - EPSILON:
        return PAID
    if amount_paid > EPSILON:
        return PARTIAL_OVERDUE if past_due else PARTIAL
    return OVERDUE if past_due else PENDING


def refresh_status(payment, today: Optional[date] = None):
    """Copy of a payment model with its status re-derived"""
    status = derive_payment_status(payment.amount, payment.amount_paid, payment.due_date, today)
    if status == payment.status:
        return payment
    return payment.model_copy(update={"status": status})


def reconcile_payment(payment, transactions: Iterable, today: Optional[date] = None,
                      user_id: Optional[str] = None) -> Dict:
    """
    Field updates that bring a payment row in line with its transaction log.

    Args:
        payment: stored payment
        transactions: every transaction recorded against it
        today: settlement date used for paid_date
        user_id: user credited with settling it

    Returns:
        dict of columns to write back (amount_paid, status, paid_date, marked_by)
    """
    today = today or date.today()
    amount_paid = round(sum(float(t.amount) for t in transactions), 2)
    status = derive_payment_status(payment.amount, amount_paid, payment.due_date, today)

    updates = {"amount_paid": amount_paid, "status": status}
    if status == PAID:
        updates["paid_date"] = payment.paid_date or today
        updates["marked_by"] = user_id or payment.marked_by
    else:
        updates["paid_date"] = None
    return updates
