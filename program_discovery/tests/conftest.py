"""
Shared fixtures for the discovery engine tests.
"""

import pytest

from program_discovery.logic import (
    DiscoverySession,
    ManualScheduler,
    Program,
    ScholarshipRule,
)


def make_program(program_id, discipline, level, total, tuition_per_year, **extra):
    """Minimal catalog entry; only the fields the engine reads are required."""
    fees = {"total": total, "tuitionPerYear": tuition_per_year}
    fees.update(extra.pop("fees", {}))
    return Program.model_validate({
        "id": program_id,
        "name": extra.pop("name", f"Program {program_id}"),
        "code": extra.pop("code", program_id.upper()),
        "discipline": discipline,
        "level": level,
        "fees": fees,
        **extra,
    })


@pytest.fixture
def scenario_catalog():
    return [
        make_program(
            "p1", "Engineering", "undergraduate", 900000, 220000,
            name="B.Tech Computer Science", duration="4 years",
            curriculum=["Data Structures", "Operating Systems"],
        ),
        make_program(
            "p2", "Management", "postgraduate", 780000, 300000,
            name="Master of Business Administration", duration="2 years",
            curriculum=["Marketing", "Business Analytics"],
        ),
        make_program(
            "p3", "Engineering", "postgraduate", 1140000, 240000,
            name="M.Tech Structural Engineering", duration="2 years",
            curriculum=["Finite Element Analysis", "Structural Dynamics"],
        ),
    ]


@pytest.fixture
def bangladesh_rules():
    return [ScholarshipRule(country="Bangladesh", gpa_min=3.5, gpa_max=5.0, percentage=50)]


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def events():
    return []


@pytest.fixture
def session(scenario_catalog, bangladesh_rules, scheduler, events):
    session = DiscoverySession(
        scenario_catalog,
        rules=bangladesh_rules,
        scheduler=scheduler,
        event_sink=events.append,
        debounce_ms=500,
        fallback_country="",
    )
    yield session
    session.close()
