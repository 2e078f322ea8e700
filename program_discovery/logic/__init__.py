"""
Discovery Logic Module

Provides the catalog filter, the fee and scholarship pricing resolver, and
the debounced discovery session.
"""

from .contracts import (
    EligibilityRequirement,
    FeeStructure,
    Program,
    ScholarshipRule,
    FeeRange,
    FilterConfig,
    FilterState,
    AdditionalCosts,
    CostBreakdown,
)
from .constants import Discipline, ProgramLevel, SessionStatus, EventType
from .exceptions import (
    DiscoveryError,
    InvalidPricingInput,
    ProgramNotFound,
    MalformedRecord,
    SessionClosed,
)
from .catalog import load_catalog, load_scholarship_rules, find_program
from .catalog_filter import filter_programs
from .pricing import (
    price,
    price_by_id,
    resolve_scholarship_percentage,
    available_countries,
    tiers_for_country,
    max_scholarship_percentage,
)
from .scheduling import AsyncioScheduler, ManualScheduler
from .events import ResultCountChanged, ProgramSelected, CalculatorUsed
from .session import DiscoverySession

__all__ = [
    # Main session
    "DiscoverySession",

    # Pure functions
    "filter_programs",
    "price",
    "price_by_id",
    "resolve_scholarship_percentage",
    "available_countries",
    "tiers_for_country",
    "max_scholarship_percentage",

    # Catalog
    "load_catalog",
    "load_scholarship_rules",
    "find_program",

    # Contracts
    "EligibilityRequirement",
    "FeeStructure",
    "Program",
    "ScholarshipRule",
    "FeeRange",
    "FilterConfig",
    "FilterState",
    "AdditionalCosts",
    "CostBreakdown",

    # Events
    "ResultCountChanged",
    "ProgramSelected",
    "CalculatorUsed",

    # Scheduling
    "AsyncioScheduler",
    "ManualScheduler",

    # Enums
    "Discipline",
    "ProgramLevel",
    "SessionStatus",
    "EventType",

    # Errors
    "DiscoveryError",
    "InvalidPricingInput",
    "ProgramNotFound",
    "MalformedRecord",
    "SessionClosed",
]
