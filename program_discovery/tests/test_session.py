"""
Tests for the discovery session: synchronous facets, keyword debounce,
selection, cost preview and teardown.
"""

import asyncio
import logging

import pytest

from program_discovery.logic import (
    AsyncioScheduler,
    CalculatorUsed,
    DiscoverySession,
    EventType,
    InvalidPricingInput,
    ManualScheduler,
    ProgramNotFound,
    ProgramSelected,
    ResultCountChanged,
    SessionClosed,
    SessionStatus,
)


def ids(programs):
    return [p.id for p in programs]


class RecordingScheduler:
    """Scheduler whose handles ignore cancel(), to simulate a late timer."""

    def __init__(self):
        self.callbacks = []

    def call_later(self, delay, callback):
        self.callbacks.append(callback)
        return self

    def cancel(self):
        pass


class FailingAfterFirstScheduler(ManualScheduler):
    """Virtual clock whose call_later fails after the first timer."""

    def __init__(self):
        super().__init__()
        self.calls = 0

    def call_later(self, delay, callback):
        self.calls += 1
        if self.calls > 1:
            raise RuntimeError("timer queue unavailable")
        return super().call_later(delay, callback)


# =============================================================================
# SYNCHRONOUS FACETS
# =============================================================================

def test_session_starts_with_full_catalog(session):
    assert ids(session.results) == ["p1", "p2", "p3"]
    assert session.result_count == 3
    assert session.status == SessionStatus.IDLE
    assert not session.has_active_filters


def test_discipline_level_clear_scenario(session):
    assert ids(session.toggle_discipline("Engineering")) == ["p1", "p3"]
    assert ids(session.toggle_level("postgraduate")) == ["p3"]
    assert ids(session.clear_filters()) == ["p1", "p2", "p3"]
    assert session.state.selected_disciplines == set()
    assert not session.has_active_filters


def test_toggle_on_then_off_restores_results(session):
    session.toggle_level("postgraduate")
    before = ids(session.results)

    session.toggle_discipline("Management")
    assert ids(session.results) == ["p2"]
    session.toggle_discipline("Management")

    assert ids(session.results) == before


def test_fee_range_selection_replaces_previous(session):
    assert ids(session.select_fee_range("10-15 Lakhs")) == ["p3"]
    assert ids(session.select_fee_range("5-10 Lakhs")) == ["p1", "p2"]
    assert ids(session.select_fee_range(None)) == ["p1", "p2", "p3"]
    assert session.state.selected_fee_range_label is None


def test_no_results_is_a_state_not_an_error(session):
    session.toggle_discipline("Medical")
    assert session.results == []
    assert session.status == SessionStatus.NO_RESULTS

    session.clear_filters()
    assert session.status == SessionStatus.IDLE


def test_state_snapshot_cannot_mutate_session(session):
    snapshot = session.state
    snapshot.selected_disciplines.add("Engineering")
    assert session.result_count == 3
    assert session.state.selected_disciplines == set()


def test_result_count_events(session, events):
    session.toggle_discipline("Engineering")
    session.toggle_discipline("Engineering")
    session.select_fee_range("Under 1 Crore")  # unknown label, count unchanged

    counts = [(e.previous_count, e.result_count) for e in events if isinstance(e, ResultCountChanged)]
    assert counts == [(3, 2), (2, 3)]


# =============================================================================
# KEYWORD DEBOUNCE
# =============================================================================

def test_keyword_waits_for_debounce(session, scheduler):
    session.set_keyword("analy")

    assert session.state.raw_keyword == "analy"
    assert session.state.debounced_keyword == ""
    assert session.is_searching
    assert session.status == SessionStatus.FILTERING
    assert session.result_count == 3

    scheduler.advance(0.25)
    assert session.result_count == 3

    scheduler.advance(0.25)
    assert ids(session.results) == ["p2", "p3"]
    assert session.state.debounced_keyword == "analy"
    assert not session.is_searching
    assert session.status == SessionStatus.IDLE


def test_only_the_last_keystroke_applies(session, scheduler):
    for partial in ("s", "st", "str", "stru"):
        session.set_keyword(partial)
        scheduler.advance(0.25)

    assert scheduler.pending() == 1
    assert session.state.debounced_keyword == ""

    fired = scheduler.advance(0.25)
    assert fired == 1
    assert session.state.debounced_keyword == "stru"
    assert ids(session.results) == ["p1", "p3"]


def test_blank_keyword_restores_results(session, scheduler):
    session.set_keyword("marketing")
    scheduler.advance(0.5)
    assert ids(session.results) == ["p2"]

    session.set_keyword("   ")
    scheduler.advance(0.5)
    assert ids(session.results) == ["p1", "p2", "p3"]


def test_keyword_combines_with_facets(session, scheduler):
    session.toggle_discipline("Engineering")
    session.set_keyword("analysis")
    scheduler.advance(0.5)
    assert ids(session.results) == ["p3"]


def test_checkbox_change_does_not_wait_for_pending_keyword(session, scheduler):
    session.set_keyword("structural")
    assert ids(session.toggle_discipline("Management")) == ["p2"]
    assert session.status == SessionStatus.FILTERING

    scheduler.advance(0.5)
    assert session.results == []
    assert session.status == SessionStatus.NO_RESULTS


def test_flush_keyword_applies_immediately(session, scheduler):
    session.set_keyword("computer")
    assert ids(session.flush_keyword()) == ["p1"]
    assert scheduler.pending() == 0
    assert scheduler.advance(1.0) == 0


def test_clear_filters_cancels_pending_keyword(session, scheduler):
    session.set_keyword("computer")
    session.clear_filters()

    assert scheduler.pending() == 0
    scheduler.advance(1.0)
    assert session.state.raw_keyword == ""
    assert session.result_count == 3


def test_scheduler_failure_keeps_the_pending_keyword(scenario_catalog):
    scheduler = FailingAfterFirstScheduler()
    session = DiscoverySession(scenario_catalog, scheduler=scheduler, debounce_ms=500)
    session.set_keyword("computer")

    with pytest.raises(RuntimeError):
        session.set_keyword("computers")

    assert session.state.raw_keyword == "computer"
    assert session.is_searching

    scheduler.advance(1.0)
    assert session.state.debounced_keyword == "computer"
    assert ids(session.results) == ["p1"]


def test_replaced_timer_that_still_fires_is_ignored(scenario_catalog, caplog):
    scheduler = RecordingScheduler()
    session = DiscoverySession(scenario_catalog, scheduler=scheduler)
    session.set_keyword("comp")
    session.set_keyword("marketing")

    scheduler.callbacks[0]()
    assert session.state.debounced_keyword == ""
    assert session.is_searching
    assert "Stale debounce timer" in caplog.text

    scheduler.callbacks[1]()
    assert session.state.debounced_keyword == "marketing"
    assert ids(session.results) == ["p2"]
    assert not session.is_searching


def test_timer_fired_after_flush_is_ignored(scenario_catalog, caplog):
    scheduler = RecordingScheduler()
    session = DiscoverySession(scenario_catalog, scheduler=scheduler)
    session.set_keyword("computer")
    session.flush_keyword()
    session.toggle_discipline("Management")

    scheduler.callbacks[0]()
    assert session.results == []
    assert session.status == SessionStatus.NO_RESULTS
    assert "Stale debounce timer" in caplog.text


def test_default_scheduler_requires_a_running_loop(scenario_catalog):
    with pytest.raises(RuntimeError, match="running event loop"):
        DiscoverySession(scenario_catalog)


def test_asyncio_scheduler_with_explicit_loop(scenario_catalog):
    loop = asyncio.new_event_loop()
    try:
        session = DiscoverySession(scenario_catalog, scheduler=AsyncioScheduler(loop), debounce_ms=10)
        session.set_keyword("manage")
        loop.run_until_complete(asyncio.sleep(0.1))
        assert ids(session.results) == ["p2"]
        session.close()
    finally:
        loop.close()


def test_asyncio_scheduler_applies_keyword(scenario_catalog):
    async def search():
        session = DiscoverySession(scenario_catalog, scheduler=AsyncioScheduler(), debounce_ms=10)
        session.set_keyword("manage")
        assert session.is_searching
        await asyncio.sleep(0.1)
        session.close()
        return session

    session = asyncio.run(search())
    assert ids(session.results) == ["p2"]


def test_asyncio_scheduler_close_cancels_timer(scenario_catalog):
    async def search():
        session = DiscoverySession(scenario_catalog, scheduler=AsyncioScheduler(), debounce_ms=10)
        session.set_keyword("manage")
        session.close()
        await asyncio.sleep(0.1)
        return session

    session = asyncio.run(search())
    assert session.result_count == 3
    assert session.state.debounced_keyword == ""


# =============================================================================
# SELECTION & PRICING
# =============================================================================

def test_select_program_navigates_and_reports(scenario_catalog, scheduler, events):
    visited = []
    session = DiscoverySession(
        scenario_catalog, scheduler=scheduler, navigate=visited.append, event_sink=events.append
    )
    session.toggle_discipline("Engineering")
    state_before = session.state

    program = session.select_program("p3")

    assert program.id == "p3"
    assert visited == ["p3"]
    selected = [e for e in events if isinstance(e, ProgramSelected)]
    assert len(selected) == 1
    assert selected[0].event_type == EventType.PROGRAM_SELECTED
    assert (selected[0].program_id, selected[0].discipline, selected[0].level) == (
        "p3", "Engineering", "postgraduate"
    )
    assert selected[0].source == "program-finder"
    assert session.state == state_before


def test_select_unknown_program(session):
    with pytest.raises(ProgramNotFound):
        session.select_program("p404")


def test_preview_cost(session, events):
    breakdown = session.preview_cost("p1", 4, "Bangladesh", 3.7)

    assert breakdown.scholarship_amount == 440000
    assert breakdown.base_fee == 440000
    used = [e for e in events if isinstance(e, CalculatorUsed)]
    assert used[0].total_payable == breakdown.total_payable
    assert used[0].scholarship_percentage == 50


def test_preview_cost_errors_propagate(session):
    with pytest.raises(ProgramNotFound):
        session.preview_cost("p404", 4, "Bangladesh", 3.7)
    with pytest.raises(InvalidPricingInput):
        session.preview_cost("p1", 0, "Bangladesh", 3.7)


def test_failing_event_sink_is_logged_not_raised(scenario_catalog, scheduler, caplog):
    def broken_sink(event):
        raise RuntimeError("analytics down")

    session = DiscoverySession(scenario_catalog, scheduler=scheduler, event_sink=broken_sink)
    with caplog.at_level(logging.ERROR):
        assert ids(session.toggle_discipline("Management")) == ["p2"]

    assert "Event sink failed" in caplog.text


# =============================================================================
# TEARDOWN
# =============================================================================

def test_close_cancels_pending_timer(session, scheduler):
    session.set_keyword("computer")
    session.close()

    assert session.closed
    assert scheduler.pending() == 0
    assert scheduler.advance(1.0) == 0
    assert session.result_count == 3


def test_closed_session_rejects_mutations(session):
    session.close()
    session.close()

    with pytest.raises(SessionClosed):
        session.toggle_discipline("Engineering")
    with pytest.raises(SessionClosed):
        session.set_keyword("cse")
    with pytest.raises(SessionClosed):
        session.select_program("p1")


def test_late_timer_after_close_is_ignored(scenario_catalog, caplog):
    scheduler = RecordingScheduler()
    session = DiscoverySession(scenario_catalog, scheduler=scheduler)
    session.set_keyword("computer")
    session.close()

    scheduler.callbacks[-1]()

    assert session.state.debounced_keyword == ""
    assert session.result_count == 3
    assert "after session close" in caplog.text


def test_context_manager_closes(scenario_catalog, scheduler):
    with DiscoverySession(scenario_catalog, scheduler=scheduler) as session:
        session.set_keyword("computer")
    assert session.closed
    assert scheduler.pending() == 0


def test_empty_catalog_session(scheduler):
    session = DiscoverySession([], scheduler=scheduler)
    assert session.status == SessionStatus.NO_RESULTS
    assert session.toggle_discipline("Engineering") == []
