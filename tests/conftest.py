"""Shared fixtures for dues tests."""
from datetime import date

import pytest

from dpcdues.pricing.models import Household, Member


REFERENCE_DATE = date(2025, 6, 15)


def dob_for_age(age, reference_date=REFERENCE_DATE):
    """Birth date that is exactly ``age`` years before the reference date."""
    return date(reference_date.year - age, 1, 1).isoformat()


@pytest.fixture
def reference_date():
    return REFERENCE_DATE


@pytest.fixture
def family_of_four():
    """Ages 9, 39, 49 and 70 as of the reference date."""
    return [
        Member(date_of_birth=dob_for_age(9), household_id=1, member_id=1),
        Member(date_of_birth=dob_for_age(39), household_id=1, member_id=2),
        Member(date_of_birth=dob_for_age(49), household_id=1, member_id=3),
        Member(date_of_birth=dob_for_age(70), household_id=1, member_id=4),
    ]


@pytest.fixture
def directory(family_of_four):
    """Two households plus two individuals, one of them inactive."""
    members = list(family_of_four) + [
        Member(date_of_birth=dob_for_age(25), household_id=2, member_id=5),
        Member(date_of_birth=dob_for_age(30), household_id=2, member_id=6),
        Member(date_of_birth=dob_for_age(70), member_id=7),
        Member(date_of_birth=dob_for_age(30), member_id=8, status="inactive"),
    ]
    households = [
        Household(household_id=1, name="The Johnson Family"),
        Household(household_id=2, name="The Chen Household"),
    ]
    return members, households
