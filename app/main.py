"""
Streamlit Frontend for Personal Expenses

A single page: pick a month, see what it cost, add or delete entries.

DESIGN PRINCIPLES:
1. Everything on one screen
2. Adding an expense takes one click
3. Bad input simply does nothing (there is no error area)
4. Data never leaves the user's machine

Run with:  streamlit run app/main.py
"""


import streamlit as st

from pydantic import ValidationError

from expense_tracker.config import AppSettings, get_settings, validate_all_settings
from expense_tracker.formatting import format_currency, format_entry_date
from expense_tracker.models.expense import Category
from expense_tracker.orchestrator import (
    DashboardFlow,
    EntryForm,
    ExpenseEntryFlow,
    create_app_components,
)


def load_app_settings() -> AppSettings:
    """App settings, or the defaults if the environment holds bad values."""
    try:
        return get_settings().app
    except ValidationError:
        return AppSettings.model_construct()


app_settings = load_app_settings()

# Page configuration
st.set_page_config(
    page_title=app_settings.page_title,
    page_icon="💸",
    layout="wide",
    initial_sidebar_state="collapsed",
)

# Custom CSS for better UX
st.markdown("""
<style>
    .stButton>button {
        width: 100%;
    }
    .muted {
        color: #8a8f98;
    }
    .footer {
        margin-top: 24px;
        font-size: 0.85em;
        color: #8a8f98;
        text-align: center;
    }
</style>
""", unsafe_allow_html=True)


def get_components() -> tuple[ExpenseEntryFlow, DashboardFlow]:
    """One store per browser session, loaded from storage on first use."""
    if "components" not in st.session_state:
        try:
            entry_flow, dashboard_flow, _ = create_app_components(use_storage=True)
        except ValidationError as e:
            st.error(f"Configuration problem, check your .env file: {e}")
            st.stop()
        st.session_state.components = (entry_flow, dashboard_flow)
    return st.session_state.components


def init_session_state(entry_flow: ExpenseEntryFlow, dashboard_flow: DashboardFlow) -> None:
    """Default widget values. Only set once per session."""
    defaults = entry_flow.blank_form()
    if "filter_month" not in st.session_state:
        st.session_state.filter_month = dashboard_flow.default_month()
    if "entry_date" not in st.session_state:
        st.session_state.entry_date = dashboard_flow.today()
    if "entry_amount" not in st.session_state:
        st.session_state.entry_amount = None
    if "entry_category" not in st.session_state:
        st.session_state.entry_category = defaults.category
    if "entry_note" not in st.session_state:
        st.session_state.entry_note = defaults.note


def on_add(entry_flow: ExpenseEntryFlow) -> None:
    """
    Add button callback.
    
    Runs before the rerun, which is the only point where Streamlit lets
    us reset widget values.
    """
    entry_date = st.session_state.entry_date
    amount = st.session_state.entry_amount
    form = EntryForm(
        date=entry_date.isoformat() if entry_date else "",
        amount="" if amount is None else str(amount),
        category=st.session_state.entry_category,
        note=st.session_state.entry_note or "",
    )
    expense, next_form = entry_flow.submit(form)
    if expense is not None:
        st.session_state.entry_amount = None
        st.session_state.entry_note = next_form.note


def render_header(dashboard_flow: DashboardFlow) -> None:
    col1, col2 = st.columns([3, 1])
    
    with col1:
        st.title(app_settings.page_title)
        st.markdown(
            '<span class="muted">Minimal, private, stored on your machine</span>',
            unsafe_allow_html=True,
        )
    
    with col2:
        options = dashboard_flow.month_options(st.session_state.filter_month)
        st.selectbox("Month", options=options, key="filter_month")


def render_summary(dashboard_flow: DashboardFlow, summary) -> None:
    symbol = dashboard_flow.currency_symbol
    col1, col2, col3 = st.columns(3)
    
    with col1:
        st.metric("Total this month", format_currency(summary.total, symbol))
    with col2:
        st.metric("Transactions", summary.transaction_count)
    with col3:
        st.metric("Top category", dashboard_flow.top_category_label(summary))


def render_entry_form(entry_flow: ExpenseEntryFlow, dashboard_flow: DashboardFlow) -> None:
    col1, col2, col3, col4, col5 = st.columns([2, 2, 2, 3, 1])
    
    with col1:
        st.date_input(
            "Date",
            key="entry_date",
            max_value=dashboard_flow.today(),
        )
    with col2:
        st.number_input(
            "Amount",
            key="entry_amount",
            min_value=0.0,
            step=0.01,
            format="%.2f",
            placeholder="Amount",
        )
    with col3:
        st.selectbox(
            "Category",
            options=list(Category),
            key="entry_category",
            format_func=lambda c: c.value,
        )
    with col4:
        st.text_input(
            "Note",
            key="entry_note",
            placeholder="Note (optional)",
        )
    with col5:
        st.markdown("&nbsp;", unsafe_allow_html=True)
        st.button("Add", type="primary", on_click=on_add, args=(entry_flow,))


def render_table(entry_flow: ExpenseEntryFlow, dashboard_flow: DashboardFlow, summary) -> None:
    symbol = dashboard_flow.currency_symbol
    
    header = st.columns([2, 2, 4, 2, 1])
    for col, title in zip(header, ["Date", "Category", "Note", "Amount", ""]):
        col.markdown(f"**{title}**")
    
    if summary.is_empty:
        st.markdown(
            f'<span class="muted">No expenses for {summary.month_label} yet.</span>',
            unsafe_allow_html=True,
        )
        return
    
    for expense in summary.expenses:
        col1, col2, col3, col4, col5 = st.columns([2, 2, 4, 2, 1])
        col1.write(format_entry_date(expense.date))
        col2.write(expense.category.value)
        if expense.note:
            col3.write(expense.note)
        else:
            col3.markdown('<span class="muted">-</span>', unsafe_allow_html=True)
        col4.write(format_currency(expense.amount, symbol))
        col5.button(
            "Delete",
            key=f"delete_{expense.id}",
            on_click=entry_flow.delete,
            args=(expense.id,),
        )


def render_breakdown(dashboard_flow: DashboardFlow, summary) -> None:
    symbol = dashboard_flow.currency_symbol
    st.subheader("Breakdown by category")
    
    for share in summary.breakdown:
        st.progress(
            share.percent,
            text=f"{share.category.value} · {format_currency(share.amount, symbol)} · {share.percent}%",
        )


def render_sidebar() -> None:
    st.sidebar.title("Storage")
    status = validate_all_settings()
    
    if status.get("storage", False):
        storage_settings = get_settings().storage
        if storage_settings.backend == "file":
            slot_path = storage_settings.data_dir / f"{storage_settings.slot_key}.json"
            st.sidebar.markdown(f"Saved to `{slot_path}`")
        else:
            st.sidebar.markdown("Kept in memory for this session only")
    
    st.sidebar.markdown("---")
    for name in ("storage", "app"):
        if status.get(name, False):
            st.sidebar.success(f"✅ {name} settings OK")
        else:
            st.sidebar.error(f"❌ {name}: {status.get(f'{name}_error', 'Not configured')}")


def main():
    """Main application entry point."""
    entry_flow, dashboard_flow = get_components()
    init_session_state(entry_flow, dashboard_flow)
    
    render_sidebar()
    render_header(dashboard_flow)
    
    summary = dashboard_flow.summarize(st.session_state.filter_month)
    
    render_summary(dashboard_flow, summary)
    st.markdown("---")
    render_entry_form(entry_flow, dashboard_flow)
    st.markdown("---")
    render_table(entry_flow, dashboard_flow, summary)
    st.markdown("---")
    render_breakdown(dashboard_flow, summary)
    
    st.markdown(
        '<div class="footer">Data never leaves your machine · Change month to review history</div>',
        unsafe_allow_html=True,
    )


if __name__ == "__main__":
    main()
