"""
Household billing and monthly recurring revenue for the admin dashboard.
"""

from typing import Dict, Any, Iterable, List, Optional
import logging
from datetime import date

import pandas as pd

from .calculator import member_dues, monthly_dues
from .models import Household, HouseholdBilling, Member


logger = logging.getLogger(__name__)


def _select(members: Iterable[Member], active_only: bool) -> List[Member]:
    return [m for m in members if m.is_active or not active_only]


def household_billing(
    members: Iterable[Member],
    households: Iterable[Household],
    reference_date: Optional[date] = None,
    active_only: bool = False,
) -> List[HouseholdBilling]:
    """
    Bill every household as a group.

    Args:
        members: All members in the directory
        households: All households in the directory
        reference_date: Evaluation date, today if omitted
        active_only: Skip members whose status is not ``active``

    Returns:
        One HouseholdBilling per household, in household order
    """
    selected = _select(members, active_only)
    rows = []
    for household in households:
        household_members = [m for m in selected if m.household_id == household.household_id]
        dues = monthly_dues(household_members, reference_date)
        rows.append(HouseholdBilling(household=household, members=household_members, dues=dues))
    return rows


def individual_billing(
    members: Iterable[Member],
    reference_date: Optional[date] = None,
    active_only: bool = False,
) -> List[HouseholdBilling]:
    """Bill members without a household, one row each."""
    rows = []
    for member in _select(members, active_only):
        if member.household_id is None:
            dues = monthly_dues([member], reference_date)
            rows.append(HouseholdBilling(household=None, members=[member], dues=dues))
    return rows


def monthly_recurring_revenue(
    members: Iterable[Member],
    households: Iterable[Household],
    reference_date: Optional[date] = None,
) -> int:
    """
    Current MRR in cents: capped household totals plus individual rates.

    Only active members are billed.
    """
    members = list(members)
    rows = household_billing(members, households, reference_date, active_only=True)
    rows.extend(individual_billing(members, reference_date, active_only=True))
    return sum(row.dues.total_cents for row in rows)


def _month_start(reference_date: date, months_back: int) -> date:
    index = reference_date.year * 12 + (reference_date.month - 1) - months_back
    return date(index // 12, index % 12 + 1, 1)


def mrr_trend(
    members: Iterable[Member],
    households: Iterable[Household],
    months: int = 12,
    reference_date: Optional[date] = None,
) -> pd.DataFrame:
    """
    MRR for each of the last ``months`` months, oldest first.

    History is rebuilt from the current membership: every month is priced
    from today's member list as of ``reference_date``, so the series shows
    what the present roster would have billed, not what was billed.

    Returns:
        DataFrame with ``month`` (e.g. "Nov 2025") and ``mrr_cents`` columns
    """
    if reference_date is None:
        reference_date = date.today()
    members = list(members)
    households = list(households)

    current = monthly_recurring_revenue(members, households, reference_date)
    rows = []
    for months_back in range(months - 1, -1, -1):
        month = _month_start(reference_date, months_back)
        rows.append({'month': month.strftime('%b %Y'), 'mrr_cents': current})

    logger.debug(f"Built {len(rows)}-month MRR trend at {current} cents")
    return pd.DataFrame(rows, columns=['month', 'mrr_cents'])


def financial_summary(trend: pd.DataFrame) -> Dict[str, Any]:
    """
    Headline figures for the financial health panel.

    Args:
        trend: Output of ``mrr_trend``

    Returns:
        Dictionary with current MRR, month-over-month growth, average,
        peak and annual run rate (all cents; growth percent as float)
    """
    if trend.empty:
        return {
            'current_mrr_cents': 0,
            'growth_cents': 0,
            'growth_percent': 0.0,
            'average_mrr_cents': 0,
            'peak_mrr_cents': 0,
            'annual_run_rate_cents': 0,
        }

    values = [int(v) for v in trend['mrr_cents']]
    current = values[-1]
    previous = values[-2] if len(values) > 1 else current
    growth = current - previous
    growth_percent = round(growth / previous * 100, 1) if previous > 0 else 0.0

    return {
        'current_mrr_cents': current,
        'growth_cents': growth,
        'growth_percent': growth_percent,
        'average_mrr_cents': round(sum(values) / len(values)),
        'peak_mrr_cents': max(values),
        'annual_run_rate_cents': current * 12,
    }


def billing_frame(rows: Iterable[HouseholdBilling]) -> pd.DataFrame:
    """Tabulate billing rows for display or export."""
    columns = ['household_id', 'name', 'member_count', 'raw_total_cents',
               'total_cents', 'savings_cents']
    return pd.DataFrame([row.to_dict() for row in rows], columns=columns)


def member_frame(members: Iterable[Member], reference_date: Optional[date] = None) -> pd.DataFrame:
    """Patient directory table with each member's age, tier and rate."""
    records = []
    for member in members:
        dues = member_dues(member.date_of_birth, reference_date)
        record = member.to_dict()
        record.update({
            'age': dues.age,
            'tier': dues.tier.display_name,
            'rate_cents': dues.rate_cents,
        })
        records.append(record)
    return pd.DataFrame(records)
