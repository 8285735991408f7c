"""Match report validation.

A report is all-or-nothing: one placeholder name or one non-numeric score in
any game discards the whole report.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from domain.models import PLACEHOLDER_TOKEN, MatchReport

_log = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class ValidationFailure:
    match_id: str
    reason: str


def _is_placeholder(name: str) -> bool:
    return PLACEHOLDER_TOKEN in name


def explain(report: MatchReport) -> Optional[ValidationFailure]:
    """Return why ``report`` is invalid, or None when it may be used."""
    for entry in report.lineup:
        if _is_placeholder(entry):
            return ValidationFailure(report.match_id, f"placeholder in lineup: {entry!r}")
    for idx, game in enumerate(report.details.singles, start=1):
        if any(_is_placeholder(p) for p in game.players):
            return ValidationFailure(report.match_id, f"placeholder player in single {idx}")
        if game.home_score is None or game.away_score is None:
            return ValidationFailure(report.match_id, f"non-numeric score in single {idx}")
    for idx, game in enumerate(report.details.doubles, start=1):
        if any(_is_placeholder(p) for p in game.players):
            return ValidationFailure(report.match_id, f"placeholder player in double {idx}")
        if game.home_score is None or game.away_score is None:
            return ValidationFailure(report.match_id, f"non-numeric score in double {idx}")
    return None


def is_valid(report: MatchReport) -> bool:
    return explain(report) is None


def filter_valid(reports: Iterable[Optional[MatchReport]]) -> List[MatchReport]:
    """Keep valid reports in order; rejected ones are logged with their reason."""
    kept: List[MatchReport] = []
    for report in reports:
        if report is None:
            continue
        failure = explain(report)
        if failure is not None:
            _log.info("Discarding match report %s: %s", failure.match_id, failure.reason)
            continue
        kept.append(report)
    return kept
