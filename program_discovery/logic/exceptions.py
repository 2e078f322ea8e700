"""
Discovery Engine Exceptions

Typed errors raised synchronously by the catalog, pricing, and session layers:
- Invalid pricing input (years, GPA)
- Unknown program identifiers
- Catalog records that cannot be ingested
- Use of a session after teardown
"""

from typing import Optional


class DiscoveryError(Exception):
    """Base exception for the discovery engine."""
    kind: str = "DiscoveryError"

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class InvalidPricingInput(DiscoveryError):
    """
    Raised when a price is requested with inputs that cannot produce a
    meaningful amount.

    Examples:
    - years is zero, negative, or not an integer
    - GPA is NaN or infinite
    """
    kind = "InvalidPricingInput"


class ProgramNotFound(DiscoveryError):
    """Raised when a program id is not present in the catalog."""
    kind = "ProgramNotFound"

    def __init__(self, program_id: str):
        self.program_id = program_id
        super().__init__(f"Program not found: {program_id!r}")


class MalformedRecord(DiscoveryError):
    """
    Raised when a catalog or scholarship record cannot be ingested.

    Examples:
    - Missing required field (name, code, fees)
    - Empty curriculum or eligibility with validation enabled
    - fees.total below one year of tuition
    """
    kind = "MalformedRecord"

    def __init__(self, message: str, index: Optional[int] = None, record_id: Optional[str] = None):
        self.index = index
        self.record_id = record_id
        prefix = ""
        if index is not None:
            prefix = f"record {index}"
            if record_id:
                prefix += f" ({record_id})"
            prefix += ": "
        super().__init__(prefix + message)


class SessionClosed(DiscoveryError):
    """Raised when a closed discovery session is mutated."""
    kind = "SessionClosed"

    def __init__(self, message: str = "Discovery session is closed"):
        super().__init__(message)
