"""
Discovery Session

Owns the filter state of one user's program search and keeps the filtered
result list current.

State flow: idle -> filtering -> idle | no_results

- Checkbox and fee-range changes re-filter synchronously
- Keyword input is debounced: each keystroke replaces the pending timer,
  and only the last one applies the keyword and re-filters
- close() cancels the pending timer; a session is unusable afterwards
"""

import logging
from functools import partial
from typing import Callable, List, Optional, Sequence

from .. import config
from .catalog import find_program
from .catalog_filter import filter_programs
from .constants import SessionStatus
from .contracts import CostBreakdown, FilterConfig, FilterState, Program, ScholarshipRule
from .events import CalculatorUsed, EventSink, ProgramSelected, ResultCountChanged, emit
from .exceptions import SessionClosed
from .pricing import price
from .scheduling import AsyncioScheduler, Scheduler, TimerHandle

logger = logging.getLogger(__name__)


class DiscoverySession:
    """
    Interactive program finder over an immutable catalog.

    Collaborators:
    - scheduler: runs the keyword debounce timer
    - navigate: called with a program id when the user opens a program
    - event_sink: receives result-count, selection and calculator events
    """

    def __init__(
        self,
        catalog: Sequence[Program],
        rules: Sequence[ScholarshipRule] = (),
        scheduler: Optional[Scheduler] = None,
        navigate: Optional[Callable[[str], None]] = None,
        event_sink: Optional[EventSink] = None,
        filter_config: Optional[FilterConfig] = None,
        debounce_ms: Optional[int] = None,
        fallback_country: Optional[str] = None
    ):
        """
        Args:
            catalog: Programs in display order
            rules: Scholarship table used by cost previews
            scheduler: Timer source; defaults to the running asyncio loop,
                and construction fails with RuntimeError when there is none
            navigate: Navigation callback
            event_sink: Analytics callback
            filter_config: Facet values and fee ranges
            debounce_ms: Keyword quiet period; None uses the configured value
            fallback_country: Scholarship country used when the applicant's
                country has no rules; None uses the configured value
        """
        self._catalog: List[Program] = list(catalog)
        self._rules: List[ScholarshipRule] = list(rules)
        self._scheduler = scheduler or AsyncioScheduler()
        self._navigate = navigate
        self._event_sink = event_sink

        self.filter_config = filter_config or FilterConfig()
        self.debounce_ms = config.DEBOUNCE_MS if debounce_ms is None else debounce_ms
        self.fallback_country = (
            config.SCHOLARSHIP_FALLBACK_COUNTRY if fallback_country is None else fallback_country
        )

        self._state = FilterState()
        self._timer: Optional[TimerHandle] = None
        self._timer_generation = 0
        self._closed = False
        self._results: List[Program] = filter_programs(self._catalog, self._state, self.filter_config)
        self._status = SessionStatus.IDLE if self._results else SessionStatus.NO_RESULTS

        logger.info(f"🔎 Discovery session opened: {len(self._catalog)} programs, debounce {self.debounce_ms}ms")

    # =========================================================================
    # READ SURFACE
    # =========================================================================

    @property
    def state(self) -> FilterState:
        """Snapshot of the current filter state."""
        return self._state.model_copy(deep=True)

    @property
    def results(self) -> List[Program]:
        return list(self._results)

    @property
    def result_count(self) -> int:
        return len(self._results)

    @property
    def status(self) -> SessionStatus:
        if self.is_searching:
            return SessionStatus.FILTERING
        return self._status

    @property
    def is_searching(self) -> bool:
        """True while a keyword change is waiting for its debounce."""
        return self._timer is not None

    @property
    def has_active_filters(self) -> bool:
        return self._state.has_active_filters()

    @property
    def closed(self) -> bool:
        return self._closed

    # =========================================================================
    # FILTER MUTATIONS
    # =========================================================================

    def toggle_discipline(self, discipline: str) -> List[Program]:
        self._ensure_open()
        _toggle(self._state.selected_disciplines, discipline)
        return self._refilter()

    def toggle_level(self, level: str) -> List[Program]:
        self._ensure_open()
        _toggle(self._state.selected_levels, level)
        return self._refilter()

    def select_fee_range(self, label: Optional[str]) -> List[Program]:
        """Replace the fee-range selection; None or "" clears it."""
        self._ensure_open()
        self._state.selected_fee_range_label = label or None
        return self._refilter()

    def set_keyword(self, raw_keyword: str) -> None:
        """
        Record a keystroke and restart the debounce timer.

        The new timer is scheduled before any state changes, so a scheduler
        failure leaves the previous keyword and its pending timer intact.
        """
        self._ensure_open()
        generation = self._timer_generation + 1
        timer = self._scheduler.call_later(
            self.debounce_ms / 1000.0, partial(self._on_debounce_elapsed, generation)
        )
        self._cancel_timer()
        self._timer = timer
        self._timer_generation = generation
        self._state.raw_keyword = raw_keyword or ""

    def flush_keyword(self) -> List[Program]:
        """Apply a pending keyword now instead of waiting for the timer."""
        self._ensure_open()
        if self._timer is not None:
            self._cancel_timer()
            self._apply_keyword()
        return self.results

    def clear_filters(self) -> List[Program]:
        """Reset every facet and show the full catalog."""
        self._ensure_open()
        self._cancel_timer()
        self._state = FilterState()
        logger.info("Filters cleared")
        return self._refilter()

    # =========================================================================
    # SELECTION & PRICING
    # =========================================================================

    def select_program(self, program_id: str) -> Program:
        """
        Open a program: report the selection and navigate to it.
        Filter state is left untouched.

        Raises:
            ProgramNotFound: program_id is not in the catalog
        """
        self._ensure_open()
        program = find_program(self._catalog, program_id)
        logger.info(f"Program selected: {program.id} ({program.discipline}, {program.level})")

        emit(self._event_sink, ProgramSelected(
            program_id=program.id,
            program_name=program.name,
            discipline=program.discipline,
            level=program.level,
        ))
        if self._navigate is not None:
            self._navigate(program.id)
        return program

    def preview_cost(
        self,
        program_id: str,
        years: Optional[int],
        country: str,
        gpa: float
    ) -> CostBreakdown:
        """
        Price a catalog program for an applicant.

        Raises:
            ProgramNotFound: program_id is not in the catalog
            InvalidPricingInput: years or gpa is invalid
        """
        self._ensure_open()
        program = find_program(self._catalog, program_id)
        breakdown = price(program, years, country, gpa, self._rules, self.fallback_country)

        emit(self._event_sink, CalculatorUsed(
            program_id=program.id,
            country=country,
            gpa=gpa,
            scholarship_percentage=breakdown.scholarship_percentage,
            total_payable=breakdown.total_payable,
        ))
        return breakdown

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    def close(self) -> None:
        """Cancel the pending debounce timer. Safe to call repeatedly."""
        if self._closed:
            return
        self._cancel_timer()
        self._closed = True
        logger.info("Discovery session closed")

    def __enter__(self) -> "DiscoverySession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _ensure_open(self) -> None:
        if self._closed:
            raise SessionClosed()

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _on_debounce_elapsed(self, generation: int) -> None:
        if self._closed:
            logger.warning("Debounce timer fired after session close - ignored")
            return
        if self._timer is None or generation != self._timer_generation:
            logger.warning("Stale debounce timer fired - ignored")
            return
        self._timer = None
        self._apply_keyword()

    def _apply_keyword(self) -> None:
        self._state.debounced_keyword = self._state.raw_keyword
        self._refilter()

    def _refilter(self) -> List[Program]:
        self._status = SessionStatus.FILTERING
        previous_count = len(self._results)

        self._results = filter_programs(self._catalog, self._state, self.filter_config)
        self._status = SessionStatus.IDLE if self._results else SessionStatus.NO_RESULTS
        logger.debug(f"Re-filtered: {len(self._results)} results ({self._status.value})")

        if len(self._results) != previous_count:
            emit(self._event_sink, ResultCountChanged(
                result_count=len(self._results),
                previous_count=previous_count,
            ))
        return self.results


def _toggle(selected: set, value: str) -> None:
    if value in selected:
        selected.discard(value)
    else:
        selected.add(value)
