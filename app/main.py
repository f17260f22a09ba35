import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from datetime import date

import streamlit as st

from treasury.aggregator import (
    ASCENDING,
    DESCENDING,
    distinct_categories,
    filter_transactions,
    monthly_summary,
    sort_category_summary,
    sort_transactions,
    totals,
)
from treasury.charts import category_pies, monthly_bar, running_balance_line
from treasury.config import CURRENT_YEAR, load_settings, year_choices
from treasury.domain import CLEARED, INFLOW, MONTH_NAMES, OUTFLOW, PENDING, FilterSpec
from treasury.export import (
    category_frame,
    cheques_frame,
    general_report_csv,
    monthly_frame,
    movements_frame,
    to_csv_bytes,
    totals_frame,
    transactions_frame,
)
from treasury.functional import find_by_id, validate_cheque, validate_movement, validate_transaction
from treasury.logging_setup import configure_logging, get_logger
from treasury.services import ReportService, default_aggregators
from treasury.transforms import (
    add_cheque,
    add_movement,
    add_transaction,
    clear_cheque,
    fund_balance,
    load_seed,
    pending_cheques_total,
    remove_cheque,
    remove_movement,
    remove_transaction,
)

settings = load_settings()
configure_logging(settings.log_level)
logger = get_logger("treasury.app")

st.set_page_config(page_title="Church Treasury", layout="wide")

if "transactions" not in st.session_state:
    try:
        seed_trans, seed_cheques, seed_movs = load_seed(settings.seed_path)
    except FileNotFoundError:
        logger.warning("Seed file %s not found, starting empty", settings.seed_path)
        seed_trans, seed_cheques, seed_movs = (), (), ()
    st.session_state.transactions = seed_trans
    st.session_state.cheques = seed_cheques
    st.session_state.movements = seed_movs

CUR = settings.currency
KIND_LABELS = {INFLOW: "Inflow", OUTFLOW: "Outflow"}
ALL_YEARS_LABEL = "All years"
ALL_MONTHS_LABEL = "All months"
ALL_CATEGORIES_LABEL = "All categories"


def money(value) -> str:
    return f"{value:,.2f} {CUR}"


def year_selector(key: str):
    today = date.today()
    options = [ALL_YEARS_LABEL] + year_choices(today.year, settings.years_back)
    index = 1 if settings.default_year == CURRENT_YEAR else 0
    choice = st.selectbox("Year", options, index=index, key=key)
    return None if choice == ALL_YEARS_LABEL else int(choice)


def month_selector(key: str):
    choice = st.selectbox("Month", [ALL_MONTHS_LABEL] + list(MONTH_NAMES), key=key)
    return None if choice == ALL_MONTHS_LABEL else MONTH_NAMES.index(choice) + 1


def show_validation_error(result) -> None:
    error = result.get_error()
    logger.info("Rejected form input: %s", error["error"])
    st.error(f"❌ {error['message']}")


st.sidebar.markdown("### ⛪ Treasury")
admin_mode = st.sidebar.checkbox("Admin mode", value=False, help="Show delete controls")

menu = st.sidebar.radio(
    "Menu",
    ["🏠 Overview", "💸 Cash Transactions", "🧾 Cheques", "💼 Fund Advance", "📑 General Report"]
)

if menu == "🏠 Overview":
    st.title("🏠 Overview")
    trans = st.session_state.transactions
    year = date.today().year
    year_trans = filter_transactions(trans, FilterSpec(year=year))
    year_totals = totals(year_trans)

    k1, k2, k3, k4 = st.columns(4)
    with k1:
        st.metric(f"Inflow {year}", money(year_totals.inflow))
    with k2:
        st.metric(f"Outflow {year}", money(year_totals.outflow))
    with k3:
        st.metric("Fund advance balance", money(fund_balance(st.session_state.movements)))
    with k4:
        st.metric("Pending cheques", money(pending_cheques_total(st.session_state.cheques)))

    if year_trans:
        st.plotly_chart(monthly_bar(monthly_summary(year_trans), CUR), use_container_width=True)
    else:
        st.info(f"No transactions recorded in {year}.")

elif menu == "💸 Cash Transactions":
    st.title("💸 Cash Transactions")

    col1, col2, col3 = st.columns([2, 1, 1])
    with col1:
        search = st.text_input("Search description, category or responsible", key="tx_search")
    with col2:
        month = month_selector("tx_month")
    with col3:
        year = year_selector("tx_year")

    spec = FilterSpec(year=year, month=month, text_query=search or None)
    filtered = filter_transactions(st.session_state.transactions, spec)
    period = totals(filtered)

    m1, m2, m3 = st.columns(3)
    m1.metric("Total inflow", money(period.inflow))
    m2.metric("Total outflow", money(period.outflow))
    m3.metric("Balance", money(period.balance))

    with st.expander("➕ New transaction"):
        with st.form("tx_form", clear_on_submit=True):
            c1, c2 = st.columns(2)
            with c1:
                tx_date = st.date_input("Date", value=date.today())
                kind = st.selectbox("Kind", [INFLOW, OUTFLOW], format_func=KIND_LABELS.get)
                amount = st.number_input("Amount", min_value=0.0, step=10.0, format="%.2f")
            with c2:
                description = st.text_input("Description")
                category = st.text_input("Category")
                responsible = st.text_input("Responsible")
            notes = st.text_area("Notes (optional)")
            submitted = st.form_submit_button("Add transaction")

        if submitted:
            result = validate_transaction({
                "date": tx_date,
                "kind": kind,
                "amount": amount,
                "description": description,
                "category": category,
                "responsible": responsible,
                "notes": notes,
            })
            if result.is_right():
                st.session_state.transactions = add_transaction(
                    st.session_state.transactions, result.get_or_else(None)
                )
                st.success("✅ Transaction added!")
                st.rerun()
            else:
                show_validation_error(result)

    if filtered:
        ordered = sort_transactions(filtered, "date", DESCENDING)
        st.dataframe(transactions_frame(ordered), use_container_width=True, hide_index=True)
        st.download_button(
            "⬇ Download CSV",
            to_csv_bytes(transactions_frame(ordered)),
            file_name="transactions.csv",
            mime="text/csv",
        )
    else:
        st.info("No transactions found.")

    if admin_mode and filtered:
        st.subheader("🗑 Delete transaction")
        labels = {t.id: f"{t.date:%d/%m/%Y} · {t.description} · {money(t.amount)}" for t in filtered}
        to_delete = st.selectbox("Transaction", list(labels), format_func=labels.get, key="tx_delete")
        confirm = st.checkbox("I understand this cannot be undone", key="tx_delete_confirm")
        if st.button("Delete permanently", key="btn_tx_delete", disabled=not confirm):
            st.session_state.transactions = remove_transaction(st.session_state.transactions, to_delete)
            st.success("Transaction removed.")
            st.rerun()

elif menu == "🧾 Cheques":
    st.title("🧾 Cheques")
    cheques = st.session_state.cheques

    c1, c2 = st.columns(2)
    c1.metric("Pending cheques", money(pending_cheques_total(cheques)))
    c2.metric("Cheques issued", len(cheques))

    with st.expander("➕ New cheque"):
        with st.form("cheque_form", clear_on_submit=True):
            number = st.text_input("Number")
            amount = st.number_input("Amount", min_value=0.0, step=10.0, format="%.2f")
            payee = st.text_input("Payee")
            issue_date = st.date_input("Issue date", value=date.today())
            submitted = st.form_submit_button("Add cheque")

        if submitted:
            result = validate_cheque({
                "number": number,
                "amount": amount,
                "payee": payee,
                "issue_date": issue_date,
            })
            if result.is_right():
                st.session_state.cheques = add_cheque(cheques, result.get_or_else(None))
                st.success("✅ Cheque added!")
                st.rerun()
            else:
                show_validation_error(result)

    if cheques:
        st.dataframe(cheques_frame(cheques), use_container_width=True, hide_index=True)
        st.download_button(
            "⬇ Download CSV", to_csv_bytes(cheques_frame(cheques)), file_name="cheques.csv", mime="text/csv"
        )
    else:
        st.info("No cheques found.")

    pending = [c for c in cheques if c.status == PENDING]
    if pending:
        st.subheader("✔ Clear cheque")
        labels = {c.id: f"No. {c.number} · {c.payee} · {money(c.amount)}" for c in pending}
        to_clear = st.selectbox("Pending cheque", list(labels), format_func=labels.get, key="cheque_clear")
        if st.button("Mark as cleared", key="btn_cheque_clear"):
            st.session_state.cheques = clear_cheque(cheques, to_clear, date.today())
            cleared = find_by_id(st.session_state.cheques, to_clear)
            if cleared.map(lambda c: c.status == CLEARED).get_or_else(False):
                logger.info("Cheque %s cleared", to_clear)
                st.success("Cheque marked as cleared.")
            st.rerun()

    if admin_mode and cheques:
        st.subheader("🗑 Delete cheque")
        labels = {c.id: f"No. {c.number} · {c.payee}" for c in cheques}
        to_delete = st.selectbox("Cheque", list(labels), format_func=labels.get, key="cheque_delete")
        confirm = st.checkbox("I understand this cannot be undone", key="cheque_delete_confirm")
        if st.button("Delete permanently", key="btn_cheque_delete", disabled=not confirm):
            st.session_state.cheques = remove_cheque(cheques, to_delete)
            st.rerun()

elif menu == "💼 Fund Advance":
    st.title("💼 Fund Advance")
    movements = st.session_state.movements
    st.metric("Current balance", money(fund_balance(movements)))

    with st.expander("➕ New movement"):
        with st.form("movement_form", clear_on_submit=True):
            mov_date = st.date_input("Date", value=date.today())
            kind = st.selectbox("Kind", [INFLOW, OUTFLOW], format_func=KIND_LABELS.get)
            amount = st.number_input("Amount", min_value=0.0, step=10.0, format="%.2f")
            description = st.text_input("Description")
            submitted = st.form_submit_button("Add movement")

        if submitted:
            result = validate_movement({
                "date": mov_date,
                "kind": kind,
                "amount": amount,
                "description": description,
            })
            if result.is_right():
                st.session_state.movements = add_movement(movements, result.get_or_else(None))
                st.success("✅ Movement added!")
                st.rerun()
            else:
                show_validation_error(result)

    if movements:
        st.dataframe(movements_frame(movements), use_container_width=True, hide_index=True)
        st.download_button(
            "⬇ Download CSV",
            to_csv_bytes(movements_frame(movements)),
            file_name="fund_advance.csv",
            mime="text/csv",
        )
    else:
        st.info("No movements found.")

    if admin_mode and movements:
        st.subheader("🗑 Delete movement")
        labels = {m.id: f"{m.date:%d/%m/%Y} · {m.description} · {money(m.amount)}" for m in movements}
        to_delete = st.selectbox("Movement", list(labels), format_func=labels.get, key="mov_delete")
        confirm = st.checkbox("I understand this cannot be undone", key="mov_delete_confirm")
        if st.button("Delete permanently", key="btn_mov_delete", disabled=not confirm):
            st.session_state.movements = remove_movement(movements, to_delete)
            st.rerun()

elif menu == "📑 General Report":
    st.title("📑 General Report")
    trans = st.session_state.transactions

    f1, f2, f3, f4 = st.columns(4)
    with f1:
        year = year_selector("rep_year")
    with f2:
        month = month_selector("rep_month")
    with f3:
        cat_choice = st.selectbox("Category", [ALL_CATEGORIES_LABEL] + list(distinct_categories(trans)))
    with f4:
        date_range = st.date_input("Date range", value=(), key="rep_range")

    s1, s2, s3 = st.columns(3)
    with s1:
        sort_key = st.selectbox("Sort by", ["date", "amount", "category"])
    with s2:
        direction = st.radio("Direction", [DESCENDING, ASCENDING], horizontal=True)
    with s3:
        only_inflow = st.checkbox("Inflows only", value=False)

    date_from, date_to = (date_range[0], date_range[1]) if len(date_range) == 2 else (None, None)
    spec = FilterSpec(
        year=year,
        month=month,
        category=None if cat_choice == ALL_CATEGORIES_LABEL else cat_choice,
        date_from=date_from,
        date_to=date_to,
        inflow_only=only_inflow,
    )

    report = ReportService(default_aggregators()).general_report(trans, spec)
    result = report["result"]
    st.caption(f"Period: {report['period']}")

    if not report["transactions"]:
        st.info("No records found for the selected filters.")

    tab_summary, tab_monthly, tab_categories, tab_list = st.tabs(
        ["Summary", "Monthly", "Categories", "Transactions"]
    )

    with tab_summary:
        t = result["totals"]
        m1, m2, m3 = st.columns(3)
        m1.metric("Total inflow", money(t.inflow))
        m2.metric("Total outflow", money(t.outflow))
        m3.metric("Balance", money(t.balance))
        st.table(totals_frame(t))
        st.plotly_chart(running_balance_line(result["running_balance"], CUR), use_container_width=True)

    with tab_monthly:
        st.plotly_chart(monthly_bar(result["monthly"], CUR), use_container_width=True)
        st.dataframe(monthly_frame(result["monthly"]), use_container_width=True, hide_index=True)

    with tab_categories:
        cat_sort = st.radio("Order categories by", ["category", "net"], horizontal=True)
        cats = sort_category_summary(
            result["categories"], cat_sort, ASCENDING if cat_sort == "category" else DESCENDING
        )
        st.dataframe(category_frame(cats), use_container_width=True, hide_index=True)
        pie_in, pie_out = category_pies(result["inflow_pie"], result["outflow_pie"])
        p1, p2 = st.columns(2)
        p1.plotly_chart(pie_in, use_container_width=True)
        p2.plotly_chart(pie_out, use_container_width=True)

    with tab_list:
        ordered = sort_transactions(report["transactions"], sort_key, direction)
        if ordered:
            st.dataframe(transactions_frame(ordered), use_container_width=True, hide_index=True)
        else:
            st.info("No records found.")

    d1, d2 = st.columns(2)
    with d1:
        st.download_button(
            "⬇ Download report (CSV)",
            general_report_csv(report),
            file_name=f"general_report_{report['period']}.csv".replace("/", "-").replace(" ", "_").replace(":", ""),
            mime="text/csv",
        )
    with d2:
        st.download_button(
            "⬇ Download transactions (CSV)",
            to_csv_bytes(transactions_frame(sort_transactions(report["transactions"], sort_key, direction))),
            file_name="report_transactions.csv",
            mime="text/csv",
        )
