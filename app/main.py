"""
Streamlit Frontend for Safe Cash Tracker

The page every store shares:
1. Anyone can pick a store and see the cash in its safe
2. Staff sign in to add or withdraw cash for their own store
3. Admins additionally see the full ledger, for any store

The UI holds no rules of its own. Every action goes through
SafeCashService, which enforces store locking and role gating.
"""

from typing import Callable

import streamlit as st

from safe_cash.errors import SafeCashError
from safe_cash.identity import InvalidCredentialsError
from safe_cash.models.ledger import TransactionType, format_money
from safe_cash.orchestrator import SafeCashService, create_app_components
from safe_cash.validation import IntakeValidationError


st.set_page_config(
    page_title="Safe Cash Tracker",
    page_icon="💵",
    layout="wide",
)


def get_service() -> SafeCashService:
    """One service per browser session; all of them share the state file."""
    if "service" not in st.session_state:
        st.session_state.service = create_app_components()
    return st.session_state.service


def store_selector(
    service: SafeCashService,
    label: str,
    current: str,
    key: str,
    on_select: Callable[[str], None],
    disabled: bool = False,
) -> None:
    """
    Store picker whose widget state always mirrors the service.

    The widget value is reset from `current` on every run, so a value left
    over from before a login or logout can never be replayed.
    """
    ids = [s.id for s in service.registry.stores]
    st.session_state[key] = current
    st.selectbox(
        label,
        ids,
        format_func=service.registry.store_name,
        key=key,
        disabled=disabled,
        on_change=lambda: on_select(st.session_state[key]),
    )


def render_header(service: SafeCashService):
    balance = service.public_balance()
    user = service.current_user

    left, middle, right = st.columns([3, 2, 2])
    with left:
        st.title("💵 Safe Cash Tracker")
        st.caption("Multi-store transparency & control")
    with middle:
        st.metric("Cash in Safe", balance.formatted(service.currency_symbol))
    with right:
        if user:
            st.write(
                f"**{user.name}** · {user.role.value} · "
                f"{service.registry.store_name(user.store_id)}"
            )
            if st.button("Logout"):
                service.logout()
                st.rerun()
        else:
            st.write("Not signed in")


def render_public_balance(service: SafeCashService):
    balance = service.public_balance()
    st.subheader(f"Public Balance – {balance.store_name}")

    store_selector(
        service,
        "Store",
        service.session.selected_store_id,
        key="public_store",
        on_select=service.select_store,
        disabled=service.session.is_authenticated,
    )

    st.caption(
        "Anyone can view the current cash in the selected store's safe. "
        "Transactions remain private to admins of each store."
    )
    st.metric("Current Balance", balance.formatted(service.currency_symbol))


def render_login(service: SafeCashService):
    st.subheader("Employee Login")
    st.caption("Sign in to add or withdraw cash for your store.")

    with st.form("login"):
        email = st.text_input("Email", placeholder="you@store.com")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Sign In")

    if submitted:
        try:
            service.login(email, password)
        except InvalidCredentialsError:
            st.error(
                "Invalid credentials. Try admin-a@store.com / admin123, "
                "staff-a1@store.com / staff123 (or store B variants)"
            )
            return
        st.rerun()


def render_transaction_form(service: SafeCashService):
    user = service.current_user
    store_name = service.registry.store_name(user.store_id)
    employees = [e.name for e in service.intake_employees()]

    st.subheader(f"Record a Transaction – {store_name}")
    st.caption("Every entry requires an employee name and a comment.")

    with st.form("intake", clear_on_submit=True):
        tx_type = st.radio(
            "Type",
            [TransactionType.ADD, TransactionType.WITHDRAW],
            format_func=lambda t: "Add to Safe" if t == TransactionType.ADD else "Withdraw from Safe",
            horizontal=True,
        )
        amount = st.text_input("Amount", placeholder="0.00")
        comment = st.text_input(
            "Comment (required)",
            placeholder="e.g., Paid plumber, customer payout, added cash from register",
        )
        employee = st.selectbox("Employee responsible", employees)
        submitted = st.form_submit_button("Save Transaction")

    if submitted:
        try:
            tx = service.submit_transaction(tx_type, amount, comment, employee or "")
        except IntakeValidationError as e:
            st.error(str(e))
            return
        verb = "Added" if tx.type == TransactionType.ADD else "Withdrew"
        st.success(
            f"{verb} {format_money(tx.amount, service.currency_symbol)} for {tx.employee_name}."
        )


def render_admin_ledger(service: SafeCashService):
    st.subheader("Admin – Transactions Ledger")

    store_selector(
        service,
        "Ledger store",
        service.audit_store_id,
        key="audit_store",
        on_select=service.select_audit_store,
    )

    view = service.admin_ledger()
    st.write(f"Balance: **{format_money(view.balance, service.currency_symbol)}**")

    if view.is_empty:
        st.info("No transactions yet for this store.")
        return

    st.dataframe(
        [
            {
                "When": t.created_at.strftime("%Y-%m-%d %H:%M"),
                "Store": service.registry.store_name(t.store_id),
                "Type": t.type.value,
                "Amount": format_money(t.amount, service.currency_symbol),
                "Employee": t.employee_name,
                "Comment": t.comment,
                "Submitted By": t.created_by,
            }
            for t in view.transactions
        ],
        use_container_width=True,
        hide_index=True,
    )


def main():
    """Main application entry point."""
    try:
        service = get_service()
    except SafeCashError as e:
        st.error(f"Failed to initialize: {e}")
        st.stop()

    render_header(service)
    st.markdown("---")
    render_public_balance(service)

    user = service.current_user
    if user is None:
        render_login(service)
    else:
        render_transaction_form(service)
        if user.is_admin:
            render_admin_ledger(service)
        else:
            st.info(
                "Thanks! Your entries update the balance for your store. "
                "Only admins can see the detailed ledger."
            )

    st.caption(
        "Prototype: multi-store, employee attribution. "
        "State is kept in a local JSON file."
    )


if __name__ == "__main__":
    main()
