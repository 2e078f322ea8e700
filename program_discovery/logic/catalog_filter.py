"""
Catalog Filter

Selects the programs that satisfy every active facet of a FilterState.
Pure and order-preserving: the output keeps the relative order of the
catalog, and the same inputs always produce the same output.

Facets (AND-combined):
1. Disciplines - OR across selected values
2. Levels - OR across selected values
3. Fee range - min <= fees.total < max, skipped for unknown labels
4. Keyword - case-insensitive substring of name, code, discipline or
   any curriculum entry, skipped when blank
"""

import logging
from typing import List, Optional, Sequence

from .contracts import FilterConfig, FilterState, Program

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG = FilterConfig()


def normalize_keyword(keyword: Optional[str]) -> str:
    """Lower-cased, trimmed keyword; empty when the input is blank."""
    return (keyword or "").strip().lower()


def matches_keyword(program: Program, keyword: str) -> bool:
    """
    Check a normalized keyword against the searchable text of a program.
    Missing fields never match.
    """
    fields = [program.name, program.code, program.discipline]
    fields.extend(program.curriculum or [])
    return any(keyword in (text or "").lower() for text in fields)


def filter_programs(
    catalog: Sequence[Program],
    state: FilterState,
    config: Optional[FilterConfig] = None
) -> List[Program]:
    """
    Apply all active facets of `state` to the catalog.

    Args:
        catalog: Programs in display order
        state: Current filter selections
        config: Facet configuration used to resolve the fee-range label

    Returns:
        Matching programs, in catalog order
    """
    config = config or _DEFAULT_CONFIG
    results = list(catalog)

    if state.selected_disciplines:
        results = [p for p in results if p.discipline in state.selected_disciplines]

    if state.selected_levels:
        results = [p for p in results if p.level in state.selected_levels]

    if state.selected_fee_range_label:
        fee_range = config.fee_range(state.selected_fee_range_label)
        if fee_range is None:
            logger.warning(f"Unknown fee range {state.selected_fee_range_label!r} - facet ignored")
        else:
            results = [p for p in results if fee_range.contains(p.fees.total)]

    keyword = normalize_keyword(state.debounced_keyword)
    if keyword:
        results = [p for p in results if matches_keyword(p, keyword)]

    logger.debug(f"Filtered catalog: {len(results)}/{len(catalog)} programs")
    return results
