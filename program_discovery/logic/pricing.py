"""
Pricing Resolver

Computes the cost of attendance for a program over a number of years,
including the merit scholarship for an applicant's country and GPA.

All amounts are whole currency units. The scholarship is a percentage of
tuition only; hostel, mess and other charges scale with years, registration
is charged once.
"""

import logging
import math
from decimal import ROUND_HALF_UP, Decimal
from numbers import Real
from typing import List, Optional, Sequence

from .contracts import AdditionalCosts, CostBreakdown, Program, ScholarshipRule
from .catalog import find_program
from .exceptions import InvalidPricingInput

logger = logging.getLogger(__name__)


# =============================================================================
# SCHOLARSHIP TABLE
# =============================================================================

def _percent_of(amount: int, percentage: float) -> int:
    """Round-half-up share of an amount."""
    share = Decimal(amount) * Decimal(str(percentage)) / Decimal(100)
    return int(share.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def available_countries(rules: Sequence[ScholarshipRule]) -> List[str]:
    """Countries with at least one rule, sorted."""
    return sorted({rule.country for rule in rules})


def tiers_for_country(rules: Sequence[ScholarshipRule], country: str) -> List[ScholarshipRule]:
    """Rules for one country, highest percentage first."""
    return sorted(
        (rule for rule in rules if rule.country == country),
        key=lambda rule: rule.percentage,
        reverse=True
    )


def max_scholarship_percentage(rules: Sequence[ScholarshipRule], country: str) -> float:
    """Best discount any GPA can reach for a country (0 if none)."""
    tiers = tiers_for_country(rules, country)
    return tiers[0].percentage if tiers else 0


def resolve_scholarship_percentage(
    rules: Sequence[ScholarshipRule],
    country: str,
    gpa: float,
    fallback_country: Optional[str] = None
) -> float:
    """
    Find the discount for an applicant.

    Args:
        rules: Scholarship table
        country: Applicant's country, matched exactly
        gpa: Applicant's score, matched against inclusive bands
        fallback_country: Country whose rules apply when `country` has none

    Returns:
        Highest percentage among matching bands, or 0 when none match
    """
    candidates = [rule for rule in rules if rule.country == country]
    if not candidates:
        if fallback_country and fallback_country != country:
            logger.warning(f"No scholarship rules for {country!r}, using {fallback_country!r}")
            candidates = [rule for rule in rules if rule.country == fallback_country]
        else:
            logger.warning(f"No scholarship rules for {country!r}, no scholarship applied")

    matching = [rule for rule in candidates if rule.gpa_min <= gpa <= rule.gpa_max]
    if not matching:
        return 0
    if len(matching) > 1:
        logger.warning(
            f"Overlapping scholarship bands for {country!r} at GPA {gpa}: "
            f"{[rule.percentage for rule in matching]} - applying the highest"
        )
    return max(rule.percentage for rule in matching)


# =============================================================================
# RESOLVER
# =============================================================================

def _check_inputs(years, gpa) -> None:
    if isinstance(years, bool) or not isinstance(years, int) or years <= 0:
        raise InvalidPricingInput(f"years must be a positive integer, got {years!r}")
    if isinstance(gpa, bool) or not isinstance(gpa, Real) or not math.isfinite(gpa):
        raise InvalidPricingInput(f"gpa must be a finite number, got {gpa!r}")


def price(
    program: Program,
    years: Optional[int],
    country: str,
    gpa: float,
    rules: Sequence[ScholarshipRule],
    fallback_country: Optional[str] = None
) -> CostBreakdown:
    """
    Itemize the cost of a program for an applicant.

    Args:
        program: Program to price
        years: Years of study; None uses the program's own duration
        country: Applicant's country
        gpa: Applicant's academic score
        rules: Scholarship table
        fallback_country: Country whose rules apply when `country` has none

    Returns:
        CostBreakdown with scholarship, additional costs and totals

    Raises:
        InvalidPricingInput: years is not a positive integer, or gpa is not finite
    """
    if years is None:
        years = program.duration_years()
    _check_inputs(years, gpa)

    fees = program.fees
    percentage = resolve_scholarship_percentage(rules, country, gpa, fallback_country)

    total_tuition = fees.tuition_per_year * years
    scholarship_amount = _percent_of(total_tuition, percentage)
    base_fee = total_tuition - scholarship_amount

    additional_costs = AdditionalCosts(
        hostel=fees.hostel * years,
        mess=fees.mess * years,
        registration=fees.registration,
        other=fees.other * years,
    )

    first_year_tuition = fees.tuition_per_year - _percent_of(fees.tuition_per_year, percentage)
    first_year_payable = (
        first_year_tuition + fees.hostel + fees.mess + fees.registration + fees.other
    )

    logger.debug(
        f"Priced {program.id} for {years}y ({country}, GPA {gpa}): "
        f"{percentage}% scholarship, {scholarship_amount} off {total_tuition}"
    )

    return CostBreakdown(
        program_id=program.id,
        years=years,
        country=country,
        gpa=gpa,
        tuition_per_year=fees.tuition_per_year,
        total_tuition=total_tuition,
        scholarship_percentage=percentage,
        scholarship_amount=scholarship_amount,
        base_fee=base_fee,
        additional_costs=additional_costs,
        gross_total=total_tuition + additional_costs.total,
        total_payable=base_fee + additional_costs.total,
        first_year_payable=first_year_payable,
    )


def price_by_id(
    catalog: Sequence[Program],
    program_id: str,
    years: Optional[int],
    country: str,
    gpa: float,
    rules: Sequence[ScholarshipRule],
    fallback_country: Optional[str] = None
) -> CostBreakdown:
    """
    Look up a program and price it.

    Raises:
        ProgramNotFound: program_id is not in the catalog
        InvalidPricingInput: see `price`
    """
    program = find_program(catalog, program_id)
    return price(program, years, country, gpa, rules, fallback_country)
