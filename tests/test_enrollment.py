"""Tests for the enrollment workflow."""
import pytest

from dpcdues.enrollment import EnrollmentService, MemberDirectory, enroll
from dpcdues.pricing.calculator import monthly_dues, preview_monthly_rate
from dpcdues.pricing.exceptions import ValidationError
from dpcdues.pricing.models import EnrollmentForm, FamilyMemberForm

from conftest import REFERENCE_DATE, dob_for_age


def make_form(**overrides):
    data = {
        "first_name": "Sarah",
        "last_name": "Johnson",
        "email": "sarah@example.com",
        "date_of_birth": dob_for_age(39),
        "household_name": None,
        "family_members": [],
    }
    data.update(overrides)
    return EnrollmentForm(**data)


class TestEnroll:
    """Test suite for creating enrollments."""

    def test_individual_enrollment_has_no_household(self):
        directory = MemberDirectory()
        result = enroll(make_form(), directory, REFERENCE_DATE)
        assert result.household_id is None
        assert result.member_ids == [1]
        assert result.monthly_rate_cents == 6900
        assert directory.members[1].status == "pending_payment"

    def test_family_creates_default_household(self):
        directory = MemberDirectory()
        form = make_form(family_members=[FamilyMemberForm("Emma", "Johnson", dob_for_age(9))])
        result = enroll(form, directory, REFERENCE_DATE)
        assert result.household_id == 1
        assert directory.households[1].name == "Sarah Johnson Family"
        assert result.member_ids == [1, 2]
        assert all(m.household_id == 1 for m in directory.all_members())

    def test_household_name_without_family(self):
        directory = MemberDirectory()
        result = enroll(make_form(household_name="The Johnsons"), directory, REFERENCE_DATE)
        assert directory.households[result.household_id].name == "The Johnsons"

    def test_quoted_rate_matches_billed_rate(self):
        """The enrollment quote equals what the persisted household is billed."""
        directory = MemberDirectory()
        form = make_form(family_members=[
            FamilyMemberForm("Emma", "Johnson", dob_for_age(9)),
            FamilyMemberForm("Michael", "Johnson", dob_for_age(49)),
            FamilyMemberForm("Robert", "Johnson", dob_for_age(70)),
        ])
        result = enroll(form, directory, REFERENCE_DATE)
        billed = monthly_dues(directory.household_members(result.household_id), REFERENCE_DATE)
        assert result.monthly_rate_cents == billed.total_cents == 25000
        assert directory.dues_for(result.household_id, REFERENCE_DATE) == 25000

    def test_quote_matches_preview(self):
        form = make_form(family_members=[FamilyMemberForm("Emma", "Johnson", dob_for_age(9))])
        result = enroll(form, MemberDirectory(), REFERENCE_DATE)
        expected = preview_monthly_rate(form.date_of_birth, [dob_for_age(9)], REFERENCE_DATE)
        assert result.monthly_rate_cents == expected == 9900

    def test_invalid_form_creates_nothing(self):
        directory = MemberDirectory()
        with pytest.raises(ValidationError) as exc_info:
            enroll(make_form(email="not-an-email", date_of_birth="bad"), directory, REFERENCE_DATE)
        assert "email" in str(exc_info.value)
        assert directory.all_members() == []
        assert directory.all_households() == []

    def test_primary_under_minimum_age_rejected(self):
        with pytest.raises(ValidationError):
            enroll(make_form(date_of_birth=dob_for_age(12)), MemberDirectory(), REFERENCE_DATE)

    def test_service_uses_validator_config(self):
        service = EnrollmentService(MemberDirectory(), {"validator": {"min_primary_age": 18}})
        with pytest.raises(ValidationError):
            service.enroll(make_form(date_of_birth=dob_for_age(16)), REFERENCE_DATE)

    def test_ids_continue_across_enrollments(self):
        directory = MemberDirectory()
        service = EnrollmentService(directory)
        first = service.enroll(make_form(household_name="A"), REFERENCE_DATE)
        second = service.enroll(make_form(email="b@example.com", household_name="B"), REFERENCE_DATE)
        assert (first.household_id, second.household_id) == (1, 2)
        assert second.member_ids == [2]


class TestEnrollmentForm:
    """Test suite for building forms from submitted data."""

    def test_from_dict(self):
        form = EnrollmentForm.from_dict({
            "first_name": "Sarah",
            "last_name": "Johnson",
            "email": "sarah@example.com",
            "date_of_birth": "1986-01-01",
            "household_name": "",
            "family_members": [{"first_name": "Emma", "last_name": "Johnson",
                                "date_of_birth": "2016-01-01"}],
        })
        assert form.household_name is None
        assert form.family_members == [FamilyMemberForm("Emma", "Johnson", "2016-01-01")]
