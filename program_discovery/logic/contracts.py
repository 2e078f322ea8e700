"""
Data Contracts for the Discovery Engine

Defines Pydantic models for the catalog (Program, FeeStructure), the
scholarship table (ScholarshipRule), the filter inputs (FilterState,
FilterConfig), and the pricing output (CostBreakdown).

Catalog records may be supplied with camelCase keys (tuitionPerYear, gpaMin);
attributes are always snake_case.
"""

import re
from typing import List, Optional, Set

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from .constants import (
    DEFAULT_DISCIPLINES,
    DEFAULT_DURATION_YEARS,
    DEFAULT_FEE_RANGES,
    DEFAULT_LEVELS,
    Discipline,
    ProgramLevel,
)


_LEADING_YEARS = re.compile(r"^\s*(\d+)")


class _CatalogModel(BaseModel):
    """Immutable record accepting camelCase or snake_case keys."""
    model_config = ConfigDict(
        frozen=True,
        use_enum_values=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


# =============================================================================
# CATALOG CONTRACTS
# =============================================================================

class EligibilityRequirement(_CatalogModel):
    """Single admission requirement shown on a program page."""
    type: str
    description: str
    minimum_score: Optional[str] = None


class FeeStructure(_CatalogModel):
    """
    Per-program cost components. All amounts are whole currency units.

    hostel, mess and other are yearly charges; registration is one-time.
    """
    tuition_per_year: int = Field(ge=0)
    total_tuition: int = Field(default=0, ge=0)
    hostel: int = Field(default=0, ge=0)
    mess: int = Field(default=0, ge=0)
    registration: int = Field(default=0, ge=0)
    other: int = Field(default=0, ge=0)
    total: int = Field(ge=0)

    def computed_total(self) -> int:
        """Sum of the declared components, independent of the stored total."""
        return self.total_tuition + self.hostel + self.mess + self.registration + self.other


class Program(_CatalogModel):
    """One offered course of study."""
    id: str
    name: str
    code: str
    discipline: Discipline
    level: ProgramLevel
    duration: str = ""  # free text, e.g. "4 years"
    fees: FeeStructure
    eligibility: List[EligibilityRequirement] = Field(default_factory=list)
    curriculum: List[str] = Field(default_factory=list)  # display order
    specializations: Optional[List[str]] = None
    accreditation: Optional[str] = None

    def duration_years(self) -> int:
        """Leading whole number of years in `duration`, or the default."""
        match = _LEADING_YEARS.match(self.duration or "")
        if match and int(match.group(1)) > 0:
            return int(match.group(1))
        return DEFAULT_DURATION_YEARS


class ScholarshipRule(_CatalogModel):
    """A GPA band for one country mapped to a tuition discount."""
    country: str
    gpa_min: float
    gpa_max: float  # inclusive
    percentage: float = Field(gt=0, le=100)

    @model_validator(mode="after")
    def _check_band(self) -> "ScholarshipRule":
        if self.gpa_min > self.gpa_max:
            raise ValueError(f"gpa_min ({self.gpa_min}) exceeds gpa_max ({self.gpa_max})")
        return self

    def covers(self, country: str, gpa: float) -> bool:
        return self.country == country and self.gpa_min <= gpa <= self.gpa_max


# =============================================================================
# FILTER CONTRACTS
# =============================================================================

class FeeRange(BaseModel):
    """Labelled total-fee band. `max_fee` is exclusive; None is unbounded."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    label: str
    min_fee: int = Field(alias="min", ge=0)
    max_fee: Optional[int] = Field(default=None, alias="max")

    def contains(self, amount: int) -> bool:
        if amount < self.min_fee:
            return False
        return self.max_fee is None or amount < self.max_fee


def _default_fee_ranges() -> List[FeeRange]:
    return [FeeRange(label=label, min=low, max=high) for label, low, high in DEFAULT_FEE_RANGES]


class FilterConfig(BaseModel):
    """Facet values offered to the user."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    disciplines: List[str] = Field(default_factory=lambda: list(DEFAULT_DISCIPLINES))
    levels: List[str] = Field(default_factory=lambda: list(DEFAULT_LEVELS))
    fee_ranges: List[FeeRange] = Field(default_factory=_default_fee_ranges)

    def fee_range(self, label: Optional[str]) -> Optional[FeeRange]:
        """Resolve a fee-range label; unknown or empty labels resolve to None."""
        if not label:
            return None
        for fee_range in self.fee_ranges:
            if fee_range.label == label:
                return fee_range
        return None


class FilterState(BaseModel):
    """
    Current selections of a discovery session.

    Disciplines and levels are OR-combined within the facet; all facets are
    AND-combined. Only `debounced_keyword` takes part in filtering.
    """
    selected_disciplines: Set[str] = Field(default_factory=set)
    selected_levels: Set[str] = Field(default_factory=set)
    selected_fee_range_label: Optional[str] = None
    raw_keyword: str = ""
    debounced_keyword: str = ""

    def has_active_filters(self) -> bool:
        return bool(
            self.selected_disciplines
            or self.selected_levels
            or self.selected_fee_range_label
            or self.debounced_keyword.strip()
        )


# =============================================================================
# PRICING CONTRACTS
# =============================================================================

class AdditionalCosts(BaseModel):
    """Non-tuition charges over the priced number of years."""
    model_config = ConfigDict(frozen=True)

    hostel: int = 0
    mess: int = 0
    registration: int = 0
    other: int = 0

    @property
    def total(self) -> int:
        return self.hostel + self.mess + self.registration + self.other


class CostBreakdown(BaseModel):
    """
    Output contract for the pricing resolver.
    Itemized cost of attendance for one program, applicant and duration.
    """
    model_config = ConfigDict(frozen=True)

    # Query
    program_id: str
    years: int
    country: str
    gpa: float

    # Tuition
    tuition_per_year: int
    total_tuition: int

    # Scholarship
    scholarship_percentage: float = Field(ge=0, le=100)
    scholarship_amount: int = Field(ge=0)
    base_fee: int = Field(ge=0)  # tuition after scholarship

    # Other charges
    additional_costs: AdditionalCosts

    # Totals
    gross_total: int = Field(ge=0)  # before scholarship
    total_payable: int = Field(ge=0)
    first_year_payable: int = Field(ge=0)
