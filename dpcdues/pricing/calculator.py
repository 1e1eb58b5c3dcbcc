"""
Dues calculator for age-tiered membership pricing with a household cap.

This module is the single source of the pricing policy. Enrollment
previews, the admin dashboard, the member portal and the savings
calculator all price members through the functions below.
"""

from typing import Dict, Any, Iterable, List, Optional
import logging
import re
from datetime import date, datetime

from .models import AgeTier, MemberDues, DuesResult
from .exceptions import ValidationError


logger = logging.getLogger(__name__)

# Monthly rate per tier, in cents
TIER_RATES_CENTS = {
    AgeTier.CHILD: 3000,        # 0-18
    AgeTier.YOUNG_ADULT: 6900,  # 19-44
    AgeTier.ADULT: 8900,        # 45-64
    AgeTier.SENIOR: 10900,      # 65+
}

# Inclusive lower age bound of each tier, ascending
TIER_AGE_BOUNDS = (
    (0, AgeTier.CHILD),
    (19, AgeTier.YOUNG_ADULT),
    (45, AgeTier.ADULT),
    (65, AgeTier.SENIOR),
)

# A household never pays more than this per month
HOUSEHOLD_CAP_CENTS = 25000

# Calendar dates are accepted in extended YYYY-MM-DD form only
ISO_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def parse_date_of_birth(value: Any, member_index: Optional[int] = None,
                        field: str = 'date_of_birth') -> date:
    """
    Parse a birth date given as a date or an ISO-8601 calendar date string.

    Args:
        value: ``date``/``datetime`` or ``YYYY-MM-DD`` string
        member_index: Position of the member, used in error messages
        field: Field name, used in error messages

    Returns:
        Calendar date

    Raises:
        ValidationError: If the value is missing or not a valid date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"{field} is required", member_index, field, value)
    if not isinstance(value, str):
        raise ValidationError(
            f"{field} must be an ISO date string, got {type(value).__name__}",
            member_index, field, value,
        )
    text = value.strip()
    if not ISO_DATE_PATTERN.fullmatch(text):
        raise ValidationError(
            f"Invalid {field}: {value!r} (expected YYYY-MM-DD)",
            member_index, field, value,
        )
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise ValidationError(
            f"Invalid {field}: {value!r} (expected YYYY-MM-DD)",
            member_index, field, value,
        ) from None


def age_in_years(date_of_birth: date, reference_date: Optional[date] = None) -> int:
    """
    Whole years elapsed between ``date_of_birth`` and ``reference_date``.

    One year is subtracted when the birthday has not come round yet in the
    reference year. A Feb 29 birthday is reached on Mar 1 in common years.
    A birth date after the reference date gives a negative result.
    """
    if reference_date is None:
        reference_date = date.today()
    age = reference_date.year - date_of_birth.year
    if (reference_date.month, reference_date.day) < (date_of_birth.month, date_of_birth.day):
        age -= 1
    return age


def tier_for_age(age: int) -> AgeTier:
    """
    Classify an age into its pricing tier.

    Raises:
        ValidationError: If ``age`` is negative
    """
    if age < 0:
        raise ValidationError(f"Age cannot be negative: {age}", field='age', value=age)
    tier = AgeTier.CHILD
    for lower_bound, candidate in TIER_AGE_BOUNDS:
        if age >= lower_bound:
            tier = candidate
    return tier


def rate_for_tier(tier: AgeTier) -> int:
    """Monthly rate for a tier, in cents."""
    return TIER_RATES_CENTS[tier]


def member_dues(date_of_birth: Any, reference_date: Optional[date] = None,
                member_index: Optional[int] = None) -> MemberDues:
    """
    Price a single member.

    Raises:
        ValidationError: If the birth date is malformed or in the future
    """
    dob = parse_date_of_birth(date_of_birth, member_index)
    age = age_in_years(dob, reference_date)
    if age < 0:
        raise ValidationError(
            f"date_of_birth {dob.isoformat()} is in the future",
            member_index, 'date_of_birth', date_of_birth,
        )
    tier = tier_for_age(age)
    return MemberDues(age=age, tier=tier, rate_cents=rate_for_tier(tier))


def _birth_date_of(record: Any, index: int) -> Any:
    """Pull the birth date out of a member record of any supported shape."""
    if isinstance(record, (str, date)):
        return record
    if isinstance(record, dict):
        if 'date_of_birth' in record:
            return record['date_of_birth']
        if 'dateOfBirth' in record:
            return record['dateOfBirth']
        raise ValidationError("date_of_birth is required", index, 'date_of_birth')
    if hasattr(record, 'date_of_birth'):
        return record.date_of_birth
    raise ValidationError(
        f"Unsupported member record: {type(record).__name__}", index, 'date_of_birth'
    )


def monthly_dues(members: Iterable[Any], reference_date: Optional[date] = None) -> DuesResult:
    """
    Calculate the capped monthly dues for a set of members.

    Each member is priced by age tier, the rates are summed, and the sum is
    capped at ``HOUSEHOLD_CAP_CENTS``. The amount removed by the cap is
    reported as savings.

    Args:
        members: Member records (``Member``, dicts with ``date_of_birth``,
            or objects with a ``date_of_birth`` attribute)
        reference_date: Evaluation date, today if omitted

    Returns:
        DuesResult with the capped total, per-member breakdown and savings

    Raises:
        ValidationError: If any member has a malformed or future birth date
    """
    if reference_date is None:
        reference_date = date.today()

    breakdown: List[MemberDues] = []
    for index, record in enumerate(members):
        dues = member_dues(_birth_date_of(record, index), reference_date, index)
        logger.debug(f"Member {index}: age {dues.age}, tier {dues.tier.value}, "
                     f"rate {dues.rate_cents} cents")
        breakdown.append(dues)

    raw_total = sum(d.rate_cents for d in breakdown)
    capped_total = min(raw_total, HOUSEHOLD_CAP_CENTS)
    savings = max(0, raw_total - capped_total)

    if savings:
        logger.debug(f"Household cap applied: {raw_total} -> {capped_total} cents")

    return DuesResult(
        total_cents=capped_total,
        per_member=tuple(breakdown),
        savings_cents=savings,
    )


def preview_monthly_rate(primary_date_of_birth: Any, family_members: Iterable[Any] = (),
                         reference_date: Optional[date] = None) -> int:
    """
    Monthly rate for a prospective enrollment, in cents.

    This is ``monthly_dues`` over the primary member plus family, so the
    preview always matches what the household is billed once enrolled.
    """
    provisional = [primary_date_of_birth]
    provisional.extend(family_members)
    return monthly_dues(provisional, reference_date).total_cents


class DuesCalculator:
    """Calculate membership dues with an optional pinned evaluation date."""

    def __init__(self, config: Dict[str, Any] = None):
        """
        Initialize dues calculator.

        Args:
            config: Configuration dictionary. ``reference_date`` pins the
                evaluation date (date or ISO string); today otherwise.
        """
        self.config = config or {}
        self.logger = logging.getLogger(self.__class__.__name__)

        reference_date = self.config.get('reference_date')
        if reference_date is not None:
            reference_date = parse_date_of_birth(reference_date, field='reference_date')
        self.reference_date: Optional[date] = reference_date

    def evaluation_date(self) -> date:
        """
        Get the date ages are evaluated on.

        Returns:
            The pinned reference date, or today when none is configured
        """
        return self.reference_date or date.today()

    def member_dues(self, date_of_birth: Any) -> MemberDues:
        """
        Price a single member.

        Args:
            date_of_birth: Birth date as a date or ISO string

        Returns:
            MemberDues with age, tier and rate
        """
        return member_dues(date_of_birth, self.evaluation_date())

    def monthly_dues(self, members: Iterable[Any]) -> DuesResult:
        """
        Calculate capped household dues.

        Args:
            members: Member records

        Returns:
            DuesResult for the household
        """
        result = monthly_dues(members, self.evaluation_date())
        self.logger.info(f"Calculated dues for {result.member_count} member(s): "
                         f"raw {result.raw_total_cents} cents, "
                         f"total {result.total_cents} cents, "
                         f"savings {result.savings_cents} cents")
        return result

    def preview_monthly_rate(self, primary_date_of_birth: Any,
                             family_members: Iterable[Any] = ()) -> int:
        """
        Quote the monthly rate for a prospective enrollment.

        Args:
            primary_date_of_birth: Birth date of the primary member
            family_members: Birth dates or records of additional members

        Returns:
            Capped monthly rate in cents
        """
        rate = preview_monthly_rate(primary_date_of_birth, family_members, self.evaluation_date())
        self.logger.info(f"Enrollment preview rate: {rate} cents")
        return rate

    def get_pricing_summary(self) -> Dict[str, Any]:
        """
        Get summary of the tier table and household cap.

        Returns:
            Dictionary with one entry per tier plus the cap
        """
        tiers = []
        bounds = list(TIER_AGE_BOUNDS)
        for position, (lower_bound, tier) in enumerate(bounds):
            upper_bound = bounds[position + 1][0] - 1 if position + 1 < len(bounds) else None
            tiers.append({
                'tier': tier.value,
                'name': tier.display_name,
                'min_age': lower_bound,
                'max_age': upper_bound,
                'rate_cents': TIER_RATES_CENTS[tier],
            })
        return {
            'tiers': tiers,
            'household_cap_cents': HOUSEHOLD_CAP_CENTS,
        }
