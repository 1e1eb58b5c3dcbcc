"""
Dues engine: age tiers, household cap, and the consumers built on it.
"""

from .calculator import (
    DuesCalculator,
    HOUSEHOLD_CAP_CENTS,
    TIER_RATES_CENTS,
    age_in_years,
    member_dues,
    monthly_dues,
    parse_date_of_birth,
    preview_monthly_rate,
    rate_for_tier,
    tier_for_age,
)
from .exceptions import DuesError, ValidationError
from .models import AgeTier, DuesResult, Household, Member, MemberDues

__all__ = [
    'DuesCalculator', 'HOUSEHOLD_CAP_CENTS', 'TIER_RATES_CENTS',
    'age_in_years', 'member_dues', 'monthly_dues', 'parse_date_of_birth',
    'preview_monthly_rate', 'rate_for_tier', 'tier_for_age',
    'DuesError', 'ValidationError',
    'AgeTier', 'DuesResult', 'Household', 'Member', 'MemberDues',
]
