"""
Savings comparison: current insurance versus DPC membership plus a
catastrophic plan.
"""

from typing import Dict, Any, Iterable, List, Optional
import logging
from datetime import date
from decimal import Decimal, ROUND_HALF_UP

from .calculator import preview_monthly_rate
from .exceptions import ValidationError
from .models import SavingsComparison


logger = logging.getLogger(__name__)

# Assumed flat catastrophic plan premium for a household
DEFAULT_CATASTROPHIC_PREMIUM_CENTS = 30000

# Share of the annual deductible a household is assumed to spend
DEFAULT_DEDUCTIBLE_USAGE = Decimal("0.30")

# Oldest age the calculator accepts
MAX_AGE = 120


def household_dates_from_ages(ages: Iterable[int], reference_date: Optional[date] = None) -> List[date]:
    """
    Provisional birth dates that give exactly ``ages`` on ``reference_date``.

    A Feb 29 reference date falls back to Feb 28 in common birth years.
    """
    if reference_date is None:
        reference_date = date.today()

    dates = []
    for index, age in enumerate(ages):
        if isinstance(age, bool) or not isinstance(age, int):
            raise ValidationError(f"Age must be a whole number, got {age!r}", index, 'age', age)
        if age < 0:
            raise ValidationError(f"Age cannot be negative: {age}", index, 'age', age)
        if age > MAX_AGE:
            raise ValidationError(f"Age cannot exceed {MAX_AGE}: {age}", index, 'age', age)
        year = reference_date.year - age
        try:
            dates.append(reference_date.replace(year=year))
        except ValueError:
            dates.append(date(year, 2, 28))
    return dates


def compare_savings(
    current_monthly_premium_cents: int,
    annual_deductible_cents: int,
    ages: Iterable[int],
    config: Optional[Dict[str, Any]] = None,
    reference_date: Optional[date] = None,
) -> SavingsComparison:
    """
    Compare annual costs for a household.

    Args:
        current_monthly_premium_cents: Current insurance premium per month
        annual_deductible_cents: Current annual deductible
        ages: Ages of everyone in the household; the first is the primary
        config: Optional overrides for ``catastrophic_premium_cents`` and
            ``deductible_usage``
        reference_date: Evaluation date, today if omitted

    Returns:
        SavingsComparison with both annual costs and the difference
    """
    config = config or {}
    catastrophic = int(config.get('catastrophic_premium_cents', DEFAULT_CATASTROPHIC_PREMIUM_CENTS))
    usage = Decimal(str(config.get('deductible_usage', DEFAULT_DEDUCTIBLE_USAGE)))

    if current_monthly_premium_cents < 0:
        raise ValidationError("Monthly premium cannot be negative",
                              field='current_monthly_premium_cents',
                              value=current_monthly_premium_cents)
    if annual_deductible_cents < 0:
        raise ValidationError("Annual deductible cannot be negative",
                              field='annual_deductible_cents',
                              value=annual_deductible_cents)

    birth_dates = household_dates_from_ages(list(ages), reference_date)
    if not birth_dates:
        raise ValidationError("At least one household age is required", field='ages')

    monthly_dpc = preview_monthly_rate(birth_dates[0], birth_dates[1:], reference_date)

    deductible_spend = (Decimal(annual_deductible_cents) * usage).quantize(
        Decimal(1), rounding=ROUND_HALF_UP
    )
    current_annual = current_monthly_premium_cents * 12 + int(deductible_spend)

    comparison = SavingsComparison(
        monthly_dpc_cents=monthly_dpc,
        monthly_catastrophic_cents=catastrophic,
        monthly_premium_cents=current_monthly_premium_cents,
        annual_deductible_cents=annual_deductible_cents,
        current_annual_cost_cents=current_annual,
    )
    logger.info(f"Savings comparison for {len(birth_dates)} member(s): "
                f"{comparison.annual_savings_cents} cents per year")
    return comparison
