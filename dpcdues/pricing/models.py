"""
Data models for membership dues calculation.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional, Any, Tuple, Union
from enum import Enum


class AgeTier(Enum):
    """Age brackets that determine a member's base monthly rate."""
    CHILD = "child"
    YOUNG_ADULT = "young_adult"
    ADULT = "adult"
    SENIOR = "senior"

    @property
    def display_name(self) -> str:
        return self.value.replace('_', ' ').title()


@dataclass
class Household:
    """A named billing group of members."""
    household_id: int
    name: str

    def to_dict(self) -> Dict[str, Any]:
        return {'household_id': self.household_id, 'name': self.name}


@dataclass
class Member:
    """
    Membership directory record.

    Only ``date_of_birth`` and ``household_id`` matter for pricing; the
    remaining fields are carried through untouched.
    """

    date_of_birth: Union[str, date]
    household_id: Optional[int] = None

    member_id: Optional[int] = None
    first_name: str = ""
    last_name: str = ""
    email: Optional[str] = None
    status: str = "active"

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_active(self) -> bool:
        return self.status == "active"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        dob = self.date_of_birth
        return {
            'member_id': self.member_id,
            'first_name': self.first_name,
            'last_name': self.last_name,
            'email': self.email,
            'date_of_birth': dob.isoformat() if isinstance(dob, date) else dob,
            'household_id': self.household_id,
            'status': self.status,
        }


@dataclass(frozen=True)
class MemberDues:
    """Tier and rate for a single member at one evaluation date."""
    age: int
    tier: AgeTier
    rate_cents: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'age': self.age,
            'tier': self.tier.value,
            'rate_cents': self.rate_cents,
        }


@dataclass(frozen=True)
class DuesResult:
    """
    Outcome of a household dues calculation.

    All amounts are integer cents. ``total_cents`` is the capped monthly
    charge; ``savings_cents`` is what the household cap removed.
    """

    total_cents: int
    per_member: Tuple[MemberDues, ...] = field(default_factory=tuple)
    savings_cents: int = 0

    @property
    def raw_total_cents(self) -> int:
        return sum(m.rate_cents for m in self.per_member)

    @property
    def cap_applied(self) -> bool:
        return self.savings_cents > 0

    @property
    def member_count(self) -> int:
        return len(self.per_member)

    def tier_counts(self) -> Dict[AgeTier, int]:
        counts: Dict[AgeTier, int] = {}
        for m in self.per_member:
            counts[m.tier] = counts.get(m.tier, 0) + 1
        return counts

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            'total_cents': self.total_cents,
            'per_member': [m.to_dict() for m in self.per_member],
            'savings_cents': self.savings_cents,
        }


@dataclass
class HouseholdBilling:
    """One row of the admin household directory."""
    household: Optional[Household]
    members: List[Member]
    dues: DuesResult

    @property
    def name(self) -> str:
        if self.household is not None:
            return self.household.name
        if self.members:
            return self.members[0].full_name or "Individual"
        return "Individual"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'household_id': self.household.household_id if self.household else None,
            'name': self.name,
            'member_count': len(self.members),
            'raw_total_cents': self.dues.raw_total_cents,
            'total_cents': self.dues.total_cents,
            'savings_cents': self.dues.savings_cents,
        }


@dataclass(frozen=True)
class SavingsComparison:
    """Annual cost comparison between current insurance and DPC + catastrophic."""

    monthly_dpc_cents: int
    monthly_catastrophic_cents: int
    monthly_premium_cents: int
    annual_deductible_cents: int
    current_annual_cost_cents: int

    @property
    def annual_dpc_cents(self) -> int:
        return self.monthly_dpc_cents * 12

    @property
    def annual_catastrophic_cents(self) -> int:
        return self.monthly_catastrophic_cents * 12

    @property
    def annual_premium_cents(self) -> int:
        return self.monthly_premium_cents * 12

    @property
    def stack_annual_cost_cents(self) -> int:
        return self.annual_dpc_cents + self.annual_catastrophic_cents

    @property
    def annual_savings_cents(self) -> int:
        return self.current_annual_cost_cents - self.stack_annual_cost_cents

    @property
    def monthly_savings_cents(self) -> int:
        return max(0, self.annual_savings_cents) // 12

    def to_dict(self) -> Dict[str, Any]:
        return {
            'monthly_dpc_cents': self.monthly_dpc_cents,
            'annual_dpc_cents': self.annual_dpc_cents,
            'monthly_catastrophic_cents': self.monthly_catastrophic_cents,
            'annual_catastrophic_cents': self.annual_catastrophic_cents,
            'monthly_premium_cents': self.monthly_premium_cents,
            'annual_premium_cents': self.annual_premium_cents,
            'annual_deductible_cents': self.annual_deductible_cents,
            'current_annual_cost_cents': self.current_annual_cost_cents,
            'stack_annual_cost_cents': self.stack_annual_cost_cents,
            'annual_savings_cents': self.annual_savings_cents,
        }


@dataclass
class FamilyMemberForm:
    """Family member entered during enrollment."""
    first_name: str
    last_name: str
    date_of_birth: str


@dataclass
class EnrollmentForm:
    """Submitted enrollment: primary member, optional household, family."""

    first_name: str
    last_name: str
    email: str
    date_of_birth: str
    household_name: Optional[str] = None
    family_members: List[FamilyMemberForm] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'EnrollmentForm':
        family = [
            fm if isinstance(fm, FamilyMemberForm) else FamilyMemberForm(
                first_name=fm.get('first_name', ''),
                last_name=fm.get('last_name', ''),
                date_of_birth=fm.get('date_of_birth', ''),
            )
            for fm in data.get('family_members', [])
        ]
        return cls(
            first_name=data.get('first_name', ''),
            last_name=data.get('last_name', ''),
            email=data.get('email', ''),
            date_of_birth=data.get('date_of_birth', ''),
            household_name=data.get('household_name') or None,
            family_members=family,
        )


@dataclass
class EnrollmentResult:
    """Ids created by an enrollment and the rate it was quoted."""
    household_id: Optional[int]
    member_ids: List[int]
    monthly_rate_cents: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'household_id': self.household_id,
            'member_ids': self.member_ids,
            'monthly_rate_cents': self.monthly_rate_cents,
        }
