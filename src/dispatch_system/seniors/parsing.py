from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from ..common.datetime_utils import coerce_date
from ..common.rows import first_present
from .model import SeniorAbsence

logger = logging.getLogger(__name__)


def parse_senior_absence(row: Mapping[str, Any]) -> SeniorAbsence | None:
    """Build a SeniorAbsence from a DB row or API payload; None if malformed."""
    senior_id = first_present(row, "senior_id", "seniorId")
    absence_date = coerce_date(first_present(row, "absence_date", "date"))
    if not senior_id or absence_date is None:
        return None
    return SeniorAbsence(
        senior_id=str(senior_id),
        absence_date=absence_date,
        reason=first_present(row, "reason"),
    )


def parse_senior_absences(rows: Iterable[Mapping[str, Any]]) -> list[SeniorAbsence]:
    out: list[SeniorAbsence] = []
    for row in rows:
        absence = parse_senior_absence(row)
        if absence is None:
            logger.warning("Skipping malformed senior absence record: %r", row)
            continue
        out.append(absence)
    return out
