#!/usr/bin/env python3
"""
Membership Dues Demo

This script walks through the dues engine: individual tiers, the household
cap, an enrollment, and a billing report for a sample roster.
"""

from datetime import date

from dpcdues.enrollment import EnrollmentService, MemberDirectory
from dpcdues.pricing.billing import financial_summary, household_billing, individual_billing, mrr_trend
from dpcdues.pricing.calculator import DuesCalculator
from dpcdues.pricing.models import EnrollmentForm, FamilyMemberForm
from dpcdues.pricing.savings import compare_savings
from dpcdues.utils.currency import format_cents
from dpcdues.utils.file_handler import FileHandler
from dpcdues.utils.logger import setup_logger

REFERENCE_DATE = date(2025, 6, 15)


def section(title):
    print(f"\n{'='*60}")
    print(title)
    print('='*60)


def show_household(calculator, label, birth_dates):
    result = calculator.monthly_dues(birth_dates)
    print(f"\n{label}:")
    for dues in result.per_member:
        print(f"  age {dues.age:>3}  {dues.tier.display_name:<12} {format_cents(dues.rate_cents)}")
    print(f"  raw total:  {format_cents(result.raw_total_cents)}")
    print(f"  dues:       {format_cents(result.total_cents)}")
    print(f"  cap saving: {format_cents(result.savings_cents)}")


def main():
    """Run the demo."""
    setup_logger(level="WARNING")
    calculator = DuesCalculator({'reference_date': REFERENCE_DATE})

    section(f"1. Household scenarios (as of {REFERENCE_DATE.isoformat()})")
    show_household(calculator, "Single member, age 30", ["1995-01-01"])
    show_household(calculator, "Household of four", ["2016-01-01", "1986-01-01", "1976-01-01", "1955-01-01"])
    show_household(calculator, "Two young adults", ["2000-01-01", "1995-01-01"])
    show_household(calculator, "Single senior", ["1955-01-01"])
    show_household(calculator, "Empty household", [])

    section("2. Enrollment")
    directory = MemberDirectory()
    service = EnrollmentService(directory)
    form = EnrollmentForm(
        first_name="Sarah", last_name="Johnson", email="sarah@example.com",
        date_of_birth="1985-03-15",
        family_members=[
            FamilyMemberForm("Michael", "Johnson", "1976-07-22"),
            FamilyMemberForm("Emma", "Johnson", "2016-01-10"),
            FamilyMemberForm("Robert", "Johnson", "1955-11-02"),
        ],
    )
    result = service.enroll(form, REFERENCE_DATE)
    print(f"  Quoted rate:  {format_cents(result.monthly_rate_cents)}")
    print(f"  Billed rate:  {format_cents(directory.dues_for(result.household_id, REFERENCE_DATE))}")

    section("3. Savings comparison")
    comparison = compare_savings(50000, 500000, [40, 38, 10], reference_date=REFERENCE_DATE)
    print(f"  Current annual cost:   {format_cents(comparison.current_annual_cost_cents)}")
    print(f"  DPC stack annual cost: {format_cents(comparison.stack_annual_cost_cents)}")
    print(f"  Annual savings:        {format_cents(comparison.annual_savings_cents)}")

    section("4. Sample roster billing")
    handler = FileHandler()
    members, households = handler.load_roster(handler.create_sample_roster())
    rows = household_billing(members, households, REFERENCE_DATE, active_only=True)
    rows.extend(individual_billing(members, REFERENCE_DATE, active_only=True))
    for row in rows:
        print(f"  {row.name:<22} {len(row.members)} member(s)  {format_cents(row.dues.total_cents)}")
    summary = financial_summary(mrr_trend(members, households, reference_date=REFERENCE_DATE))
    print(f"  Current MRR: {format_cents(summary['current_mrr_cents'])}")
    print(f"  Report saved to: {handler.save_billing_report(rows)}")


if __name__ == "__main__":
    main()
