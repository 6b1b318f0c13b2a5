"""
Streamlit Frontend for the Expense Tracker

One page:
1. Add form (description, amount, date)
2. Search box that filters the list by description
3. Expense list with a delete button per row
4. Summary panel, refreshed after every add and delete

All state lives in an ExpenseTrackerFlow kept in st.session_state,
so every browser session has its own list and nothing is persisted.
"""

import asyncio
import html
from datetime import date

import streamlit as st

from src.audit import configure_logging, create_correlation_id
from src.config import get_settings, validate_all_settings
from src.orchestrator import ExpenseTrackerFlow, create_app_components


# Page configuration
st.set_page_config(
    page_title="Expense Tracker",
    page_icon="💰",
    layout="centered",
    initial_sidebar_state="collapsed",
)

st.markdown("""
<style>
    .stButton>button {
        width: 100%;
    }
    .summary-box {
        padding: 20px;
        background-color: #eff6ff;
        border-radius: 10px;
        border-left: 5px solid #1d4ed8;
        margin: 20px 0;
    }
    .loading-box {
        padding: 16px;
        background-color: #f9fafb;
        border-radius: 10px;
        text-align: center;
        color: #4b5563;
        margin: 20px 0;
    }
    .amount {
        font-weight: bold;
        font-size: 1.1em;
        text-align: right;
    }
</style>
""", unsafe_allow_html=True)


def run_async(coro):
    """Helper to run async functions in Streamlit."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


def get_flow() -> ExpenseTrackerFlow:
    """Get this session's flow, creating it on first use."""
    if "tracker" not in st.session_state:
        st.session_state.tracker = create_app_components(use_summarizer=True)
    return st.session_state.tracker


def main():
    """Main application entry point."""
    settings = get_settings().app
    configure_logging(settings.log_level)

    flow = get_flow()
    symbol = settings.currency_symbol

    st.title("Expense Tracker")

    if "flash" not in st.session_state:
        st.session_state.flash = None

    render_add_form(flow)

    if st.session_state.flash:
        kind, message = st.session_state.flash
        if kind == "error":
            st.error(message)
        else:
            st.warning(message)
        st.session_state.flash = None

    query = st.text_input(
        "Search",
        value=flow.state.filter_query,
        placeholder="Search expenses by description",
        label_visibility="collapsed",
    )
    if query != flow.state.filter_query:
        run_async(flow.set_filter(query))

    render_expense_list(flow, symbol)
    render_summary(flow)
    render_sidebar(flow)


FORM_DEFAULTS = {
    "expense_description": "",
    "expense_amount": "",
    "expense_date": None,
}


def submit_expense(flow: ExpenseTrackerFlow):
    """Form callback: add the expense and clear the fields only if it was added."""
    with st.spinner("Summarizing expenses..."):
        expense, result = run_async(
            flow.add_expense(
                description=st.session_state.expense_description,
                amount=st.session_state.expense_amount,
                expense_date=st.session_state.expense_date,
                correlation_id=create_correlation_id(),
            )
        )

    if expense is None:
        # Keep what the user typed so they can correct it
        st.session_state.flash = ("error", flow.describe_validation(result))
        return

    if result.warnings:
        st.session_state.flash = ("warning", flow.describe_validation(result))
    for key, value in FORM_DEFAULTS.items():
        st.session_state[key] = value


def render_add_form(flow: ExpenseTrackerFlow):
    """Render the add-expense form."""
    for key, value in FORM_DEFAULTS.items():
        if key not in st.session_state:
            st.session_state[key] = value

    with st.form("add_expense", clear_on_submit=False):
        col1, col2, col3 = st.columns(3)

        with col1:
            st.text_input(
                "Description",
                key="expense_description",
                placeholder="Expense description",
            )
        with col2:
            st.text_input(
                "Amount",
                key="expense_amount",
                placeholder="Amount",
            )
        with col3:
            st.date_input(
                "Date",
                key="expense_date",
                value=None,
                max_value=date(2100, 12, 31),
            )

        st.form_submit_button(
            "➕ Add Expense",
            type="primary",
            on_click=submit_expense,
            args=(flow,),
        )


def render_expense_list(flow: ExpenseTrackerFlow, symbol: str):
    """Render the filtered expense list with delete buttons."""
    expenses = flow.visible_expenses

    if not flow.state.expenses:
        st.info("No expenses yet. Add your first one above.")
        return
    if not expenses:
        st.info("No expenses match your search.")
        return

    for expense in expenses:
        with st.container(border=True):
            col1, col2, col3 = st.columns([6, 3, 1])
            with col1:
                st.markdown(f"**{expense.description}**")
                st.caption(expense.date.isoformat())
            with col2:
                st.markdown(
                    f'<p class="amount">{symbol}{expense.amount:.2f}</p>',
                    unsafe_allow_html=True,
                )
            with col3:
                if st.button("🗑️", key=f"delete-{expense.id}", help="Delete"):
                    with st.spinner("Summarizing expenses..."):
                        run_async(
                            flow.delete_expense(
                                expense.id,
                                correlation_id=create_correlation_id(),
                            )
                        )
                    st.rerun()

    st.markdown(f"**Total:** {symbol}{flow.state.total_amount:,.2f}")


def render_summary(flow: ExpenseTrackerFlow):
    """Render the summary panel."""
    state = flow.state

    if state.is_loading:
        st.markdown(
            '<div class="loading-box">Summarizing expenses...</div>',
            unsafe_allow_html=True,
        )
    elif state.summary:
        st.markdown("## Expense Summary")
        st.markdown(
            f'<div class="summary-box">{html.escape(state.summary)}</div>',
            unsafe_allow_html=True,
        )


def render_sidebar(flow: ExpenseTrackerFlow):
    """Render connection status and the activity trail."""
    st.sidebar.title("⚙️ Status")

    status = validate_all_settings()
    if status.get("summarizer", False) and flow.summarizer_configured:
        st.sidebar.success("✅ Summarizer - Configured")
    else:
        error = status.get("summarizer_error", "Not configured")
        st.sidebar.error(f"❌ Summarizer - {error}")
        st.sidebar.markdown(
            "Set `SUMMARIZER_API_URL` and `SUMMARIZER_API_KEY` in your `.env` file."
        )

    if flow.state.last_error:
        st.sidebar.caption(f"Last summary error: {flow.state.last_error}")

    with st.sidebar.expander("📜 Recent activity"):
        events = flow.audit_logger.recent_events[:20]
        if not events:
            st.write("Nothing yet.")
        for event in events:
            st.write(f"{event.timestamp:%H:%M:%S} - {event.description}")


if __name__ == "__main__":
    main()
