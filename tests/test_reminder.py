from datetime import date
from urllib.parse import parse_qs, unquote, urlparse

import pytest

from schemas.payment import PaymentWithTenant
from services.exceptions import ValidationError
from services.reminder_service import build_payment_reminder, generate_whatsapp_link, normalize_phone


class TestNormalizePhone:
    @pytest.mark.parametrize("raw,expected", [
        ("9876543210", "919876543210"),
        ("98765 43210", "919876543210"),
        ("(987) 654-3210", "919876543210"),
        ("919876543210", "919876543210"),
        ("+919876543210", "919876543210"),
        ("+44 20 7946 0958", "442079460958"),
    ])
    def test_normalize(self, raw, expected):
        assert normalize_phone(raw) == expected

    def test_malformed_input_is_not_rejected(self):
        assert normalize_phone("") == "91"


def test_link_carries_exact_message():
    url = generate_whatsapp_link("9876543210", "Asha", 5000, "March")

    assert url.startswith("https://wa.me/919876543210?text=")
    text = unquote(url.split("?text=", 1)[1])
    assert text == (
        "Hi Asha, this is a reminder that your rent of ₹5,000 for March is due. "
        "Please pay at your earliest convenience. Thank you!"
    )


def test_message_is_percent_encoded():
    url = generate_whatsapp_link("9876543210", "Asha", 5000, "March")
    query = urlparse(url).query

    assert " " not in query
    assert "%E2%82%B9" in query  # ₹
    assert parse_qs(query)["text"][0].startswith("Hi Asha,")


def _payment(**overrides):
    fields = dict(
        id="p1", tenant_id="t1", amount=6000, amount_paid=2500, month=3, year=2026,
        due_date=date(2026, 3, 5), status="partial_overdue",
        tenant=dict(id="t1", name="Ravi", phone="98765 43210", monthly_rent=6000,
                    joining_date="2025-06-01"),
    )
    fields.update(overrides)
    return PaymentWithTenant(**fields)


def test_payment_reminder_quotes_outstanding_balance():
    reminder = build_payment_reminder(_payment())

    assert reminder.payment_id == "p1"
    assert reminder.amount == 3500
    assert reminder.month == "March"
    assert reminder.phone == "919876543210"
    assert "rent of ₹3,500 for March" in unquote(reminder.url)


def test_payment_reminder_without_tenant():
    with pytest.raises(ValidationError):
        build_payment_reminder(_payment(tenant=None))
