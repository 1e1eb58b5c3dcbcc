"""Tests for household billing and MRR."""
from datetime import date

import pandas as pd

from dpcdues.pricing.billing import (
    billing_frame,
    financial_summary,
    household_billing,
    individual_billing,
    member_frame,
    monthly_recurring_revenue,
    mrr_trend,
)
from dpcdues.pricing.models import Member

from conftest import REFERENCE_DATE, dob_for_age


class TestHouseholdBilling:
    """Test suite for per-household billing rows."""

    def test_one_row_per_household(self, directory):
        members, households = directory
        rows = household_billing(members, households, REFERENCE_DATE)
        assert [row.name for row in rows] == ["The Johnson Family", "The Chen Household"]
        assert [len(row.members) for row in rows] == [4, 2]

    def test_cap_applied_per_household(self, directory):
        members, households = directory
        johnson, chen = household_billing(members, households, REFERENCE_DATE)
        assert johnson.dues.total_cents == 25000
        assert johnson.dues.savings_cents == 4700
        assert chen.dues.total_cents == 13800
        assert chen.dues.savings_cents == 0

    def test_household_without_members(self, directory):
        members, households = directory
        rows = household_billing([], households, REFERENCE_DATE)
        assert all(row.dues.total_cents == 0 for row in rows)

    def test_active_only_drops_inactive_members(self, directory):
        members, households = directory
        # Without the senior the household falls under the cap
        members[3].status = "inactive"
        johnson = household_billing(members, households, REFERENCE_DATE, active_only=True)[0]
        assert len(johnson.members) == 3
        assert johnson.dues.total_cents == 3000 + 6900 + 8900
        assert johnson.dues.savings_cents == 0

    def test_inactive_members_billed_by_default(self, directory):
        members, households = directory
        members[3].status = "inactive"
        johnson = household_billing(members, households, REFERENCE_DATE)[0]
        assert len(johnson.members) == 4
        assert johnson.dues.total_cents == 25000


class TestIndividualBilling:
    """Test suite for members billed on their own."""

    def test_only_members_without_household(self, directory):
        members, _ = directory
        rows = individual_billing(members, REFERENCE_DATE)
        assert [row.members[0].member_id for row in rows] == [7, 8]
        assert rows[0].dues.total_cents == 10900
        assert rows[0].household is None

    def test_active_only(self, directory):
        members, _ = directory
        rows = individual_billing(members, REFERENCE_DATE, active_only=True)
        assert [row.members[0].member_id for row in rows] == [7]


class TestMonthlyRecurringRevenue:
    """Test suite for MRR."""

    def test_sums_capped_households_and_individuals(self, directory):
        members, households = directory
        # 250 + 138 + 109; inactive member 8 excluded
        assert monthly_recurring_revenue(members, households, REFERENCE_DATE) == 49700

    def test_empty_directory(self):
        assert monthly_recurring_revenue([], [], REFERENCE_DATE) == 0


class TestMrrTrend:
    """Test suite for the MRR trend series."""

    def test_twelve_months_oldest_first(self, directory):
        members, households = directory
        trend = mrr_trend(members, households, reference_date=REFERENCE_DATE)
        assert isinstance(trend, pd.DataFrame)
        assert list(trend.columns) == ["month", "mrr_cents"]
        assert len(trend) == 12
        assert trend["month"].iloc[0] == "Jul 2024"
        assert trend["month"].iloc[-1] == "Jun 2025"

    def test_rebuilt_from_current_membership(self, directory):
        members, households = directory
        trend = mrr_trend(members, households, reference_date=REFERENCE_DATE)
        assert set(trend["mrr_cents"]) == {49700}

    def test_crosses_year_boundary(self):
        trend = mrr_trend([], [], months=3, reference_date=date(2025, 1, 31))
        assert list(trend["month"]) == ["Nov 2024", "Dec 2024", "Jan 2025"]


class TestFinancialSummary:
    """Test suite for the financial health figures."""

    def test_summary_figures(self):
        trend = pd.DataFrame({"month": ["Apr 2025", "May 2025", "Jun 2025"],
                              "mrr_cents": [40000, 50000, 55000]})
        summary = financial_summary(trend)
        assert summary["current_mrr_cents"] == 55000
        assert summary["growth_cents"] == 5000
        assert summary["growth_percent"] == 10.0
        assert summary["average_mrr_cents"] == 48333
        assert summary["peak_mrr_cents"] == 55000
        assert summary["annual_run_rate_cents"] == 660000

    def test_single_month_has_no_growth(self):
        summary = financial_summary(pd.DataFrame({"month": ["Jun 2025"], "mrr_cents": [1000]}))
        assert summary["growth_cents"] == 0
        assert summary["growth_percent"] == 0.0

    def test_zero_previous_month(self):
        trend = pd.DataFrame({"month": ["May 2025", "Jun 2025"], "mrr_cents": [0, 1000]})
        assert financial_summary(trend)["growth_percent"] == 0.0

    def test_empty_trend(self):
        summary = financial_summary(pd.DataFrame(columns=["month", "mrr_cents"]))
        assert summary["current_mrr_cents"] == 0
        assert summary["annual_run_rate_cents"] == 0


class TestFrames:
    """Test suite for tabular output."""

    def test_billing_frame(self, directory):
        members, households = directory
        df = billing_frame(household_billing(members, households, REFERENCE_DATE))
        assert list(df["total_cents"]) == [25000, 13800]
        assert list(df["raw_total_cents"]) == [29700, 13800]
        assert list(df["savings_cents"]) == [4700, 0]

    def test_empty_billing_frame_has_columns(self):
        df = billing_frame([])
        assert "total_cents" in df.columns
        assert df.empty

    def test_member_frame(self):
        df = member_frame([Member(date_of_birth=dob_for_age(50), first_name="Ann")], REFERENCE_DATE)
        row = df.iloc[0]
        assert row["first_name"] == "Ann"
        assert row["age"] == 50
        assert row["tier"] == "Adult"
        assert row["rate_cents"] == 8900
