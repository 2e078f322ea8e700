"""
Discovery Engine Constants

Defines the enums, default filter configuration, and timing values used by
the catalog filter, the pricing resolver, and the discovery session.
"""

from enum import Enum
from typing import List, Optional, Tuple


# =============================================================================
# CATALOG ENUMS
# =============================================================================

class Discipline(str, Enum):
    """Academic discipline a program belongs to."""
    ENGINEERING = "Engineering"
    MANAGEMENT = "Management"
    MEDICAL = "Medical"
    ARTS = "Arts"
    COMMERCE = "Commerce"
    SCIENCE = "Science"


class ProgramLevel(str, Enum):
    """Degree level of a program."""
    UNDERGRADUATE = "undergraduate"
    POSTGRADUATE = "postgraduate"
    DOCTORAL = "doctoral"


# =============================================================================
# SESSION & EVENTS
# =============================================================================

class SessionStatus(str, Enum):
    """Display state of a discovery session."""
    IDLE = "idle"
    FILTERING = "filtering"
    NO_RESULTS = "no_results"


class EventType(str, Enum):
    """Events reported to the analytics collaborator."""
    RESULT_COUNT_CHANGED = "result_count_changed"
    PROGRAM_SELECTED = "program_selected"
    CALCULATOR_USED = "calculator_use"


# Source label attached to selection events
EVENT_SOURCE = "program-finder"

# =============================================================================
# FILTER DEFAULTS
# =============================================================================

DEFAULT_DISCIPLINES: List[str] = [d.value for d in Discipline]

DEFAULT_LEVELS: List[str] = [level.value for level in ProgramLevel]

# (label, min, max) - max is exclusive, None means unbounded
DEFAULT_FEE_RANGES: List[Tuple[str, int, Optional[int]]] = [
    ("Under 5 Lakhs", 0, 500000),
    ("5-10 Lakhs", 500000, 1000000),
    ("10-15 Lakhs", 1000000, 1500000),
    ("Above 15 Lakhs", 1500000, None),
]

# =============================================================================
# TIMING
# =============================================================================

# Keyword input is applied after this much quiet time
DEFAULT_DEBOUNCE_MS = 500

# =============================================================================
# PRICING
# =============================================================================

# Used when a program's duration text has no leading year count
DEFAULT_DURATION_YEARS = 4

MIN_SCHOLARSHIP_PERCENTAGE = 0
MAX_SCHOLARSHIP_PERCENTAGE = 100
