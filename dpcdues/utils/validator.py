"""
Data validation utilities for enrollment forms, member records and dues.
"""

import re
from typing import List, Dict, Any, Optional, Tuple
from datetime import date
import logging

from ..pricing.calculator import HOUSEHOLD_CAP_CENTS, age_in_years, parse_date_of_birth
from ..pricing.exceptions import ValidationError
from ..pricing.models import DuesResult, EnrollmentForm, Member


class DataValidator:
    """Validate enrollment input, directory records and dues results."""

    def __init__(self, config: Dict[str, Any] = None):
        """
        Initialize validator.

        Args:
            config: Configuration dictionary
        """
        self.config = config or {}
        self.logger = logging.getLogger(self.__class__.__name__)

        # Validation rules
        self.min_primary_age = self.config.get('min_primary_age', 13)
        self.min_dependent_age = self.config.get('min_dependent_age', 0)
        self.max_age = self.config.get('max_age', 120)
        self.max_name_length = self.config.get('max_name_length', 50)
        self.max_household_name_length = self.config.get('max_household_name_length', 100)

    def validate_enrollment(self, form: EnrollmentForm,
                            reference_date: Optional[date] = None) -> Tuple[bool, List[str]]:
        """
        Validate a submitted enrollment form.

        Args:
            form: Enrollment form to validate
            reference_date: Date ages are evaluated at, today if omitted

        Returns:
            Tuple of (is_valid, list_of_errors)
        """
        errors = []

        errors.extend(self._check_name(form.first_name, "First name"))
        errors.extend(self._check_name(form.last_name, "Last name"))

        if not form.email or not self._is_valid_email(form.email):
            errors.append(f"Invalid email address: {form.email!r}")

        errors.extend(self._check_birth_date(
            form.date_of_birth, self.min_primary_age, "Primary member", reference_date
        ))

        if form.household_name and len(form.household_name) > self.max_household_name_length:
            errors.append(f"Household name must be at most "
                          f"{self.max_household_name_length} characters")

        for i, family_member in enumerate(form.family_members, start=1):
            label = f"Family member {i}"
            errors.extend(f"{label}: {e}" for e in self._check_name(family_member.first_name, "First name"))
            errors.extend(f"{label}: {e}" for e in self._check_name(family_member.last_name, "Last name"))
            errors.extend(self._check_birth_date(
                family_member.date_of_birth, self.min_dependent_age, label, reference_date
            ))

        if errors:
            self.logger.warning(f"Enrollment for {form.email!r} failed validation "
                                f"with {len(errors)} error(s)")
        return len(errors) == 0, errors

    def validate_member(self, member: Member,
                        reference_date: Optional[date] = None) -> Tuple[bool, List[str]]:
        """
        Validate a directory record before it is priced.

        Returns:
            Tuple of (is_valid, list_of_errors)
        """
        errors = []
        label = f"Member {member.member_id}" if member.member_id is not None else "Member"

        errors.extend(self._check_birth_date(member.date_of_birth, 0, label, reference_date))

        if member.email and not self._is_valid_email(member.email):
            errors.append(f"{label}: invalid email address {member.email!r}")

        if member.status not in ('active', 'inactive', 'pending', 'pending_payment'):
            errors.append(f"{label}: unknown status {member.status!r}")

        return len(errors) == 0, errors

    def validate_dues_result(self, result: DuesResult) -> Tuple[bool, List[str]]:
        """
        Check a dues result against the household cap and savings rules.

        Returns:
            Tuple of (is_valid, list_of_errors)
        """
        errors = []

        if result.total_cents > HOUSEHOLD_CAP_CENTS:
            errors.append(f"Total {result.total_cents} exceeds household cap {HOUSEHOLD_CAP_CENTS}")

        if result.total_cents < 0:
            errors.append(f"Total cannot be negative: {result.total_cents}")

        if result.savings_cents < 0:
            errors.append(f"Savings cannot be negative: {result.savings_cents}")

        if result.total_cents + result.savings_cents != result.raw_total_cents:
            errors.append("Total plus savings does not match the sum of member rates")

        if result.raw_total_cents <= HOUSEHOLD_CAP_CENTS and result.savings_cents != 0:
            errors.append("Savings reported although the cap was not reached")

        return len(errors) == 0, errors

    def generate_validation_report(self, members: List[Member],
                                   reference_date: Optional[date] = None) -> Dict[str, Any]:
        """
        Generate a validation report for a member roster.

        Args:
            members: Roster to check
            reference_date: Date ages are evaluated at

        Returns:
            Validation report dictionary
        """
        report = {
            'total_members': len(members),
            'valid_members': 0,
            'invalid_members': 0,
            'errors': [],
            'details': []
        }

        for member in members:
            is_valid, errors = self.validate_member(member, reference_date)
            report['details'].append({
                'member_id': member.member_id,
                'valid': is_valid,
                'errors': errors
            })
            if is_valid:
                report['valid_members'] += 1
            else:
                report['invalid_members'] += 1
                report['errors'].extend(errors)

        total = report['total_members']
        report['success_rate'] = (report['valid_members'] / total) * 100 if total > 0 else 0
        return report

    def _check_name(self, name: str, label: str) -> List[str]:
        if not name or not name.strip():
            return [f"{label} is required"]
        if len(name) > self.max_name_length:
            return [f"{label} must be at most {self.max_name_length} characters"]
        if not self._is_valid_name(name):
            return [f"{label} contains invalid characters: {name!r}"]
        return []

    def _check_birth_date(self, value: Any, min_age: int, label: str,
                          reference_date: Optional[date]) -> List[str]:
        try:
            dob = parse_date_of_birth(value)
        except ValidationError as e:
            return [f"{label}: {e}"]

        age = age_in_years(dob, reference_date)
        if age < 0:
            return [f"{label}: date of birth cannot be in the future"]
        if age < min_age:
            return [f"{label}: must be at least {min_age} years old to enroll"]
        if age > self.max_age:
            return [f"{label}: age {age} exceeds maximum of {self.max_age}"]
        return []

    def _is_valid_name(self, name: str) -> bool:
        """
        Validate name format.

        Args:
            name: Name to validate

        Returns:
            True if valid format
        """
        # Letters, spaces, hyphens, apostrophes, periods
        pattern = r"^[^\W\d_]+(?:[\s\-'\.][^\W\d_]*)*$"
        return bool(re.match(pattern, name.strip()))

    def _is_valid_email(self, email: str) -> bool:
        pattern = r'^[^@\s]+@[^@\s]+\.[^@\s]+$'
        return bool(re.match(pattern, email.strip()))
