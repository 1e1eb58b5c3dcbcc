"""
Streamlit front-end for membership dues.
Run: streamlit run main.py
"""

import tempfile
import os
from datetime import date

import pandas as pd
import streamlit as st

from dpcdues.pricing.billing import (
    billing_frame, financial_summary, household_billing, individual_billing,
    member_frame, mrr_trend,
)
from dpcdues.pricing.calculator import DuesCalculator
from dpcdues.pricing.exceptions import ValidationError
from dpcdues.pricing.savings import compare_savings
from dpcdues.utils.currency import dollars_to_cents, format_cents
from dpcdues.utils.file_handler import FileHandler
from dpcdues.utils.logger import configure_library_loggers, setup_logger

# -----------------------------
# Setup
# -----------------------------
st.set_page_config(page_title="Membership Dues", layout="wide")

if "_logger_ready" not in st.session_state:
    setup_logger(level="INFO")
    configure_library_loggers()
    st.session_state["_logger_ready"] = True

calculator = DuesCalculator()


def money_columns(df: pd.DataFrame) -> pd.DataFrame:
    df = df.copy()
    for col in [c for c in df.columns if c.endswith("_cents")]:
        df[col.replace("_cents", "")] = df[col].map(format_cents)
        df = df.drop(columns=[col])
    return df


# -----------------------------
# Pages
# -----------------------------
def pricing_page():
    st.title("Membership Pricing")
    summary = calculator.get_pricing_summary()
    rows = []
    for tier in summary["tiers"]:
        ages = f"{tier['min_age']}+" if tier["max_age"] is None else f"{tier['min_age']}-{tier['max_age']}"
        rows.append({"Tier": tier["name"], "Ages": ages, "Monthly": format_cents(tier["rate_cents"])})
    st.table(pd.DataFrame(rows))
    st.info(f"Households never pay more than {format_cents(summary['household_cap_cents'])} per month.")


def enrollment_preview_page():
    st.title("Enrollment Rate Preview")

    primary_dob = st.date_input("Your date of birth", value=date(1990, 1, 1),
                                min_value=date(1900, 1, 1), max_value=date.today())
    count = st.number_input("Family members", min_value=0, max_value=10, value=0, step=1)
    family = []
    for i in range(int(count)):
        family.append(st.date_input(f"Family member {i + 1} date of birth", value=date(2015, 1, 1),
                                    min_value=date(1900, 1, 1), max_value=date.today(),
                                    key=f"family_{i}"))

    try:
        result = calculator.monthly_dues([primary_dob] + family)
    except ValidationError as e:
        st.error(str(e))
        return

    breakdown = pd.DataFrame([
        {"Age": m.age, "Tier": m.tier.display_name, "Rate": format_cents(m.rate_cents)}
        for m in result.per_member
    ])
    st.dataframe(breakdown)

    c1, c2 = st.columns(2)
    c1.metric("Monthly dues", format_cents(result.total_cents))
    if result.cap_applied:
        c2.metric("Household cap savings", format_cents(result.savings_cents))


def savings_page():
    st.title("DPC Stack Savings Calculator")

    c1, c2 = st.columns(2)
    premium = c1.number_input("Current monthly premium ($)", min_value=0.0, value=500.0, step=10.0)
    deductible = c2.number_input("Annual deductible ($)", min_value=0.0, value=5000.0, step=100.0)
    ages_text = st.text_input("Household ages (comma separated)", value="40, 38, 10")

    if not st.button("Calculate Savings", type="primary"):
        return

    try:
        ages = [int(a) for a in ages_text.replace(" ", "").split(",") if a]
        comparison = compare_savings(dollars_to_cents(premium), dollars_to_cents(deductible), ages)
    except (ValueError, ValidationError) as e:
        st.error(f"Could not calculate savings: {e}")
        return

    left, right = st.columns(2)
    with left:
        st.subheader("Current Insurance")
        st.write(f"Annual premium: {format_cents(comparison.annual_premium_cents)}")
        st.write(f"Deductible: {format_cents(comparison.annual_deductible_cents)}")
        st.write(f"**Total annual cost: {format_cents(comparison.current_annual_cost_cents)}**")
    with right:
        st.subheader("DPC Stack")
        st.write(f"Membership: {format_cents(comparison.monthly_dpc_cents)}/mo")
        st.write(f"Catastrophic plan: {format_cents(comparison.monthly_catastrophic_cents)}/mo")
        st.write(f"**Total annual cost: {format_cents(comparison.stack_annual_cost_cents)}**")

    savings = max(0, comparison.annual_savings_cents)
    st.success(f"Estimated annual savings: {format_cents(savings)} "
               f"({format_cents(comparison.monthly_savings_cents)} per month)")


def billing_page():
    st.title("Household Billing")

    handler = FileHandler({"output_dir": tempfile.gettempdir()})
    uploaded_file = st.file_uploader("Upload member roster CSV", type=["csv"])
    if not uploaded_file:
        st.info("Please upload a roster CSV to begin.")
        return

    with tempfile.NamedTemporaryFile(delete=False, suffix=".csv") as tmp_file:
        tmp_file.write(uploaded_file.read())
        roster_path = tmp_file.name

    try:
        members, households = handler.load_roster(roster_path)
        reference_date = calculator.evaluation_date()
        rows = household_billing(members, households, reference_date, active_only=True)
        rows.extend(individual_billing(members, reference_date, active_only=True))
        trend = mrr_trend(members, households, reference_date=reference_date)
        directory = member_frame(members, reference_date)
    except (ValueError, ValidationError) as e:
        st.error(f"Could not bill roster: {e}")
        return
    finally:
        os.unlink(roster_path)

    summary = financial_summary(trend)
    c1, c2, c3 = st.columns(3)
    c1.metric("Current MRR", format_cents(summary["current_mrr_cents"]),
              f"{summary['growth_percent']}%")
    c2.metric("Peak MRR", format_cents(summary["peak_mrr_cents"]))
    c3.metric("Annual run rate", format_cents(summary["annual_run_rate_cents"]))

    st.subheader("Households")
    report = billing_frame(rows)
    st.dataframe(money_columns(report))
    st.download_button("Download billing CSV", report.to_csv(index=False).encode("utf-8"),
                       "billing_report.csv", "text/csv")

    st.subheader("Monthly recurring revenue")
    chart = trend.assign(mrr=trend["mrr_cents"] / 100).set_index("month")[["mrr"]]
    st.line_chart(chart)

    st.subheader("Patient directory")
    st.dataframe(money_columns(directory))


PAGES = {
    "Pricing": pricing_page,
    "Enrollment preview": enrollment_preview_page,
    "Savings calculator": savings_page,
    "Household billing": billing_page,
}

st.sidebar.header("Options")
page = st.sidebar.radio("Page", list(PAGES.keys()))
PAGES[page]()
