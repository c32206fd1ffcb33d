"""
Rent reminder links
Builds a WhatsApp click-to-chat link with a pre-filled reminder. Nothing is
sent from here; opening the link is up to the caller.
"""
import re
from urllib.parse import quote

from config.settings import DEFAULT_COUNTRY_CODE, WHATSAPP_HOST
from schemas.payment import PaymentWithTenant, ReminderLink
from services.exceptions import ValidationError
from services.logger import logger
from services.payment_status import display_balance
from utils.formatters import format_currency, get_month_name

REMINDER_TEMPLATE = (
    "Hi {tenant}, this is a reminder that your rent of {amount} for {month} is due. "
    "Please pay at your earliest convenience. Thank you!"
)

# characters encodeURIComponent leaves alone
_URI_SAFE = "-_.!~*'()"


def normalize_phone(phone: str, country_code: str = DEFAULT_COUNTRY_CODE) -> str:
    """
    Digits-only international number.

    Keeps digits and '+'; numbers without a leading '+' get the default
    country code unless they already start with it. Malformed input is not
    rejected.
    """
    clean = re.sub(r"[^\d+]", "", phone or "")

    if not clean.startswith("+"):
        if not clean.startswith(country_code):
            clean = country_code + clean
        clean = "+" + clean

    return clean.replace("+", "", 1)


def build_reminder_message(tenant_name: str, amount: float, month: str) -> str:
    return REMINDER_TEMPLATE.format(tenant=tenant_name, amount=format_currency(amount), month=month)


def generate_whatsapp_link(phone: str, tenant_name: str, amount: float, month: str) -> str:
    """
    Click-to-chat link with the reminder text.

    Args:
        phone: tenant phone as entered
        tenant_name: greeting name
        amount: rent amount to quote
        month: month label, e.g. "March"

    Returns:
        https://wa.me/<phone>?text=<encoded message>
    """
    message = quote(build_reminder_message(tenant_name, amount, month), safe=_URI_SAFE)
    return f"https://{WHATSAPP_HOST}/{normalize_phone(phone)}?text={message}"


def build_payment_reminder(payment: PaymentWithTenant) -> ReminderLink:
    """Reminder for the outstanding balance of a payment"""
    if payment.tenant is None:
        raise ValidationError("Payment has no tenant to remind")

    amount = display_balance(payment)
    month = get_month_name(payment.month)
    url = generate_whatsapp_link(payment.tenant.phone, payment.tenant.name, amount, month)

    logger.info(f"📱 Reminder link built for {payment.tenant.name} ({month} {payment.year})")

    return ReminderLink(
        payment_id=payment.id,
        tenant_name=payment.tenant.name,
        phone=normalize_phone(payment.tenant.phone),
        amount=amount,
        month=month,
        url=url,
    )
