"""
Catalog Ingestion

Turns raw program and scholarship records (static data or a remote payload)
into immutable contract models, and looks programs up by id.

This is the only layer that inspects records for completeness - the filter
and the resolver assume well-formed input.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from pydantic import ValidationError

from .. import config
from .contracts import Program, ScholarshipRule
from .exceptions import MalformedRecord, ProgramNotFound

logger = logging.getLogger(__name__)

ProgramRecord = Union[Program, Dict[str, Any]]
RuleRecord = Union[ScholarshipRule, Dict[str, Any]]


def _record_id(record: ProgramRecord) -> Optional[str]:
    if isinstance(record, Program):
        return record.id
    if isinstance(record, dict):
        value = record.get("id")
        return str(value) if value is not None else None
    return None


def _check_display_ready(program: Program, index: int) -> None:
    """Invariants every displayed program must hold."""
    if not program.curriculum:
        raise MalformedRecord("curriculum must not be empty", index, program.id)
    if not program.eligibility:
        raise MalformedRecord("eligibility must not be empty", index, program.id)
    if program.fees.total < program.fees.tuition_per_year:
        raise MalformedRecord(
            f"fees.total ({program.fees.total}) is below one year of tuition "
            f"({program.fees.tuition_per_year})",
            index,
            program.id,
        )


def load_catalog(
    records: Iterable[ProgramRecord],
    validate: Optional[bool] = None
) -> List[Program]:
    """
    Build the program catalog from raw records.

    Args:
        records: Program dicts (camelCase or snake_case keys) or Program models
        validate: Enforce display invariants and unique ids. None uses the
            PROGRAM_DISCOVERY_VALIDATE_CATALOG setting.

    Returns:
        Programs in input order

    Raises:
        MalformedRecord: a record is missing a required field, has a wrong
            type, or (with validation) breaks a display invariant
    """
    if validate is None:
        validate = config.VALIDATE_CATALOG

    catalog: List[Program] = []
    seen_ids = set()

    for index, record in enumerate(records):
        if isinstance(record, Program):
            program = record
        else:
            try:
                program = Program.model_validate(record)
            except ValidationError as e:
                raise MalformedRecord(
                    f"{e.error_count()} invalid field(s): {e}", index, _record_id(record)
                ) from e

        if validate:
            _check_display_ready(program, index)
            if program.id in seen_ids:
                raise MalformedRecord("duplicate program id", index, program.id)
            seen_ids.add(program.id)

        catalog.append(program)

    logger.debug(f"Catalog loaded: {len(catalog)} programs (validate={validate})")
    return catalog


def load_scholarship_rules(records: Iterable[RuleRecord]) -> List[ScholarshipRule]:
    """
    Build the scholarship rule table.

    Raises:
        MalformedRecord: a rule has an inverted GPA band or a percentage
            outside (0, 100]
    """
    rules: List[ScholarshipRule] = []
    for index, record in enumerate(records):
        if isinstance(record, ScholarshipRule):
            rules.append(record)
            continue
        try:
            rules.append(ScholarshipRule.model_validate(record))
        except ValidationError as e:
            raise MalformedRecord(f"invalid scholarship rule: {e}", index) from e

    logger.debug(f"Scholarship table loaded: {len(rules)} rules")
    return rules


def find_program(catalog: Sequence[Program], program_id: str) -> Program:
    """
    Look up a program by id.

    Raises:
        ProgramNotFound: no program in the catalog has this id
    """
    for program in catalog:
        if program.id == program_id:
            return program
    raise ProgramNotFound(program_id)
