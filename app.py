"""
PG Manager dashboard (Streamlit) - v1.0
✅ Occupancy / dues / revenue KPIs
✅ Due-today and overdue lists with WhatsApp reminder links
✅ Monthly revenue chart
"""

from typing import Dict, List

import pandas as pd
import streamlit as st

from config.settings import APP_CONFIG
from services.dashboard_service import DashboardService
from services.exceptions import AppError
from services.payment_service import PaymentService
from services.payment_status import display_balance, status_badge
from services.query_cache import QueryCache
from services.reminder_service import build_payment_reminder
from utils.formatters import format_currency, format_date, get_days_overdue, get_month_name

st.set_page_config(
    page_title=APP_CONFIG["title"],
    page_icon="🏠",
    layout="wide",
    initial_sidebar_state="expanded"
)

CACHE_TTL = APP_CONFIG["dashboard_cache_ttl"]

TONE_ICONS = {"success": "🟢", "warning": "🟡", "danger": "🔴"}


# ==================== Cached loaders ====================
# st.cache_data owns expiry here; each load gets its own QueryCache

@st.cache_data(ttl=CACHE_TTL)
def load_stats() -> Dict:
    return DashboardService(cache=QueryCache()).get_stats().model_dump()


@st.cache_data(ttl=CACHE_TTL)
def load_due_lists() -> Dict[str, List[Dict]]:
    """Rows ready for display, reminder links included"""
    service = PaymentService(cache=QueryCache())
    lists = {}
    for name, payments in (("today", service.get_todays_due_payments()),
                           ("overdue", service.get_overdue_payments())):
        rows = []
        for payment in payments:
            label, tone = status_badge(payment)
            row = {
                "tenant": payment.tenant.name if payment.tenant else "Unknown",
                "room": payment.tenant.room.room_number if payment.tenant and payment.tenant.room else "-",
                "period": f"{get_month_name(payment.month)} {payment.year}",
                "due_date": format_date(payment.due_date),
                "days_overdue": get_days_overdue(payment.due_date),
                "balance": format_currency(display_balance(payment)),
                "status": f"{TONE_ICONS[tone]} {label}",
                "reminder_url": None,
            }
            if payment.tenant and payment.tenant.phone:
                row["reminder_url"] = build_payment_reminder(payment).url
            rows.append(row)
        lists[name] = rows
    return lists


@st.cache_data(ttl=CACHE_TTL)
def load_revenue() -> pd.DataFrame:
    revenue = PaymentService(cache=QueryCache()).get_monthly_revenue()
    df = pd.DataFrame([r.model_dump() for r in revenue])
    df["month"] = df["month"].map(lambda m: get_month_name(m)[:3])
    return df.set_index("month")


# ==================== Sections ====================

def show_metrics(stats: Dict):
    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("Buildings", stats["total_buildings"])
        st.metric("Active tenants", stats["total_tenants"])
    with col2:
        st.metric("Occupancy", f"{stats['occupancy_rate']:.1f}%")
        st.metric("Vacant beds", stats["vacant_beds"])
    with col3:
        st.metric("Due today", stats["todays_due"])
        st.metric("Overdue", stats["overdue_count"])
    with col4:
        st.metric("Revenue this month", format_currency(stats["monthly_revenue"]))
        st.metric("Collected this month", format_currency(stats["monthly_collected"]))


def show_due_list(title: str, rows: List[Dict], empty_message: str):
    st.subheader(title)
    if not rows:
        st.success(empty_message)
        return

    for row in rows:
        col1, col2, col3 = st.columns([4, 2, 1])
        with col1:
            st.markdown(f"**{row['tenant']}** · Room {row['room']} · {row['period']}")
            detail = f"Due {row['due_date']}"
            if row["days_overdue"] > 0:
                detail += f" · {row['days_overdue']} days overdue"
            st.caption(detail)
        with col2:
            st.markdown(f"{row['balance']}  \n{row['status']}")
        with col3:
            if row["reminder_url"]:
                st.link_button("💬 Remind", row["reminder_url"])
            else:
                st.caption("No phone")


def main():
    st.sidebar.title(f"🏠 {APP_CONFIG['title']}")
    st.sidebar.caption(f"{APP_CONFIG['version']} · {APP_CONFIG['environment']}")
    if st.sidebar.button("🔄 Refresh"):
        st.cache_data.clear()

    st.markdown("# Dashboard")

    try:
        stats = load_stats()
        due = load_due_lists()
        revenue = load_revenue()
    except AppError as e:
        st.error(f"❌ Could not load dashboard: {e.message}")
        return

    show_metrics(stats)
    st.divider()

    col1, col2 = st.columns(2)
    with col1:
        show_due_list("📅 Due today", due["today"], "Nothing due today")
    with col2:
        show_due_list("⏰ Overdue", due["overdue"], "No overdue payments 🎉")

    st.divider()
    st.subheader("📈 Monthly revenue")
    st.bar_chart(revenue["revenue"])


if __name__ == "__main__":
    main()
