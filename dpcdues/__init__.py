"""
Membership dues for a direct primary care practice.
"""

__version__ = "1.0.0"

from .pricing import (
    AgeTier,
    DuesCalculator,
    DuesResult,
    Member,
    Household,
    ValidationError,
    monthly_dues,
    preview_monthly_rate,
)
from .enrollment import EnrollmentService, MemberDirectory, enroll

__all__ = [
    'AgeTier',
    'DuesCalculator',
    'DuesResult',
    'Member',
    'Household',
    'ValidationError',
    'monthly_dues',
    'preview_monthly_rate',
    'EnrollmentService',
    'MemberDirectory',
    'enroll',
]
