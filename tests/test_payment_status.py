from datetime import date
from types import SimpleNamespace

import pytest

from services.payment_status import (
    derive_payment_status,
    display_balance,
    get_payment_balance,
    get_payment_display_status,
    is_payment_overdue,
    is_payment_partial,
    reconcile_payment,
    refresh_status,
    status_badge,
)
from schemas.payment import Payment

TODAY = date(2026, 10, 18)


def make_payment(**overrides):
    fields = dict(id="p1", tenant_id="t1", amount=6000, amount_paid=0, month=10, year=2026,
                  due_date=date(2026, 10, 25), status="pending")
    fields.update(overrides)
    return Payment(**fields)


class TestBalance:
    def test_balance_is_amount_minus_paid(self):
        assert get_payment_balance(make_payment(amount_paid=2500)) == 3500

    def test_overpayment_gives_negative_balance(self):
        payment = make_payment(amount_paid=6500)
        assert get_payment_balance(payment) == -500
        assert display_balance(payment) == 0

    def test_missing_amount_paid_counts_as_zero(self):
        payment = SimpleNamespace(amount=1200, amount_paid=None)
        assert get_payment_balance(payment) == 1200


class TestStatusPredicates:
    @pytest.mark.parametrize("status,partial,overdue", [
        ("pending", False, False),
        ("paid", False, False),
        ("partial", True, False),
        ("overdue", False, True),
        ("partial_overdue", True, True),
    ])
    def test_predicates(self, status, partial, overdue):
        payment = make_payment(status=status)
        assert is_payment_partial(payment) is partial
        assert is_payment_overdue(payment) is overdue

    def test_partial_overdue_displays_as_overdue(self):
        assert get_payment_display_status(make_payment(status="partial_overdue")) == "overdue"

    def test_unknown_status_displays_as_pending(self):
        assert get_payment_display_status(SimpleNamespace(status="weird")) == "pending"

    def test_badge_prefers_paid_when_balance_is_cleared(self):
        assert status_badge(make_payment(status="partial", amount_paid=6000)) == ("Paid", "success")
        assert status_badge(make_payment(status="partial_overdue", amount_paid=100)) == ("Partial", "danger")
        assert status_badge(make_payment(status="overdue")) == ("Overdue", "danger")


class TestDerivation:
    def test_nothing_paid_before_due_date(self):
        assert derive_payment_status(6000, 0, date(2026, 10, 25), TODAY) == "pending"

    def test_nothing_paid_after_due_date(self):
        assert derive_payment_status(6000, 0, date(2026, 10, 5), TODAY) == "overdue"

    def test_due_today_is_not_overdue(self):
        assert derive_payment_status(6000, 0, TODAY, TODAY) == "pending"

    def test_partial_before_and_after_due_date(self):
        assert derive_payment_status(6000, 2500, date(2026, 10, 25), TODAY) == "partial"
        assert derive_payment_status(6000, 2500, date(2026, 10, 5), TODAY) == "partial_overdue"

    def test_fully_paid_is_paid_regardless_of_date(self):
        assert derive_payment_status(6000, 6000, date(2026, 1, 5), TODAY) == "paid"
        assert derive_payment_status(6000, 7000, date(2026, 1, 5), TODAY) == "paid"

    def test_refresh_status_returns_updated_copy(self):
        stale = make_payment(due_date=date(2026, 10, 5), status="pending")
        fresh = refresh_status(stale, TODAY)
        assert fresh.status == "overdue"
        assert stale.status == "pending"


class TestReconcile:
    def test_sums_transactions_into_amount_paid(self):
        txns = [SimpleNamespace(amount=1000), SimpleNamespace(amount=1500)]
        updates = reconcile_payment(make_payment(), txns, TODAY, "staff-1")
        assert updates == {"amount_paid": 2500, "status": "partial", "paid_date": None}

    def test_settled_payment_gets_paid_date_and_marker(self):
        txns = [SimpleNamespace(amount=2500), SimpleNamespace(amount=3500)]
        updates = reconcile_payment(make_payment(), txns, TODAY, "staff-1")
        assert updates["status"] == "paid"
        assert updates["amount_paid"] == 6000
        assert updates["paid_date"] == TODAY
        assert updates["marked_by"] == "staff-1"

    def test_keeps_existing_paid_date(self):
        payment = make_payment(paid_date=date(2026, 10, 2), marked_by="owner-1")
        updates = reconcile_payment(payment, [SimpleNamespace(amount=6000)], TODAY, None)
        assert updates["paid_date"] == date(2026, 10, 2)
        assert updates["marked_by"] == "owner-1"
