"""
Enrollment workflow: quote the household rate, then create the household
and its members in the membership directory.
"""

from typing import Dict, List, Optional
from datetime import date
import logging

from .pricing.calculator import monthly_dues, preview_monthly_rate
from .pricing.exceptions import ValidationError
from .pricing.models import (
    EnrollmentForm, EnrollmentResult, Household, Member,
)
from .utils.validator import DataValidator


class MemberDirectory:
    """
    In-memory membership directory.

    Stands in for the database: it hands out ids and answers the two
    lookups billing needs.
    """

    def __init__(self):
        self.members: Dict[int, Member] = {}
        self.households: Dict[int, Household] = {}
        self._next_member_id = 1
        self._next_household_id = 1

    def add_household(self, name: str) -> Household:
        household = Household(household_id=self._next_household_id, name=name)
        self.households[household.household_id] = household
        self._next_household_id += 1
        return household

    def add_member(self, member: Member) -> Member:
        member.member_id = self._next_member_id
        self.members[member.member_id] = member
        self._next_member_id += 1
        return member

    def household_members(self, household_id: int) -> List[Member]:
        return [m for m in self.members.values() if m.household_id == household_id]

    def all_members(self) -> List[Member]:
        return list(self.members.values())

    def all_households(self) -> List[Household]:
        return list(self.households.values())

    def dues_for(self, household_id: int, reference_date: Optional[date] = None) -> int:
        """Billed monthly total for a persisted household, in cents."""
        return monthly_dues(self.household_members(household_id), reference_date).total_cents


class EnrollmentService:
    """Validate and record enrollments."""

    def __init__(self, directory: MemberDirectory, config: Dict = None):
        self.directory = directory
        self.config = config or {}
        self.logger = logging.getLogger(self.__class__.__name__)
        self.validator = DataValidator(self.config.get('validator', {}))

    def enroll(self, form: EnrollmentForm,
               reference_date: Optional[date] = None) -> EnrollmentResult:
        """
        Enroll a primary member and any family members.

        A household is created when a household name is given or family
        members are present. New members start as ``pending_payment``.

        Args:
            form: Submitted enrollment
            reference_date: Evaluation date, today if omitted

        Returns:
            EnrollmentResult with the created ids and the quoted rate

        Raises:
            ValidationError: If the form does not validate
        """
        is_valid, errors = self.validator.validate_enrollment(form, reference_date)
        if not is_valid:
            raise ValidationError("; ".join(errors), field='enrollment')

        monthly_rate = preview_monthly_rate(
            form.date_of_birth,
            [fm.date_of_birth for fm in form.family_members],
            reference_date,
        )

        household_id = None
        if form.household_name or form.family_members:
            name = form.household_name or f"{form.first_name} {form.last_name} Family"
            household_id = self.directory.add_household(name).household_id

        primary = self.directory.add_member(Member(
            date_of_birth=form.date_of_birth,
            household_id=household_id,
            first_name=form.first_name,
            last_name=form.last_name,
            email=form.email,
            status='pending_payment',
        ))
        member_ids = [primary.member_id]

        for family_member in form.family_members:
            created = self.directory.add_member(Member(
                date_of_birth=family_member.date_of_birth,
                household_id=household_id,
                first_name=family_member.first_name,
                last_name=family_member.last_name,
                status='pending_payment',
            ))
            member_ids.append(created.member_id)

        self.logger.info(f"Enrolled {len(member_ids)} member(s) for {form.email!r} "
                         f"at {monthly_rate} cents per month")

        return EnrollmentResult(
            household_id=household_id,
            member_ids=member_ids,
            monthly_rate_cents=monthly_rate,
        )


def enroll(form: EnrollmentForm, directory: MemberDirectory,
           reference_date: Optional[date] = None) -> EnrollmentResult:
    """Enroll with default validation rules."""
    return EnrollmentService(directory).enroll(form, reference_date)
