"""
Discovery Events

Fire-and-forget notifications for the analytics collaborator. The engine
never reads a result back from the sink.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Literal, Optional, Union

from pydantic import BaseModel, Field

from .constants import EVENT_SOURCE, EventType

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ResultCountChanged(BaseModel):
    event_type: Literal[EventType.RESULT_COUNT_CHANGED] = EventType.RESULT_COUNT_CHANGED
    timestamp: datetime = Field(default_factory=_utcnow)
    result_count: int
    previous_count: int


class ProgramSelected(BaseModel):
    event_type: Literal[EventType.PROGRAM_SELECTED] = EventType.PROGRAM_SELECTED
    timestamp: datetime = Field(default_factory=_utcnow)
    program_id: str
    program_name: str
    discipline: str
    level: str
    source: str = EVENT_SOURCE


class CalculatorUsed(BaseModel):
    event_type: Literal[EventType.CALCULATOR_USED] = EventType.CALCULATOR_USED
    timestamp: datetime = Field(default_factory=_utcnow)
    program_id: str
    country: str
    gpa: float
    scholarship_percentage: float
    total_payable: int


DiscoveryEvent = Union[ResultCountChanged, ProgramSelected, CalculatorUsed]
EventSink = Callable[[DiscoveryEvent], None]


def emit(sink: Optional[EventSink], event: DiscoveryEvent) -> None:
    """
    Deliver an event to the sink, if any.
    A failing sink is logged and does not interrupt the caller.
    """
    if sink is None:
        return
    try:
        sink(event)
    except Exception:
        logger.exception(f"Event sink failed for {event.event_type.value}")
