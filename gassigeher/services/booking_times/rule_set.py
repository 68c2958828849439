# gassigeher/services/booking_times/rule_set.py
"""
Named open/blocked time windows per day category.

Evaluation of an instant t for a category:
- no window contains t           → OUT_OF_HOURS
- any containing window blocked  → BLOCKED, reported with the blocked
                                   window that starts first (name breaks ties)
- otherwise                      → OPEN
"""

import logging

from ...domain import (
    DayCategory,
    TimeWindow,
    WindowMatch,
    WindowStatus,
    normalize_time_str,
    time_str_to_minutes,
)
from ...errors import ConfigurationError, RuleNotFoundError
from ...models import TimeRule
from ...repositories import TimeRuleRepository

logger = logging.getLogger(__name__)


def validate_rule_fields(category: str, name: str, start_time: str, end_time: str) -> tuple[str, str]:
    """
    Check one rule before it is stored.

    Returns:
        Normalized ("HH:MM", "HH:MM") start and end.

    Raises:
        ConfigurationError: unknown category, empty name, bad time, start >= end.
    """
    if category not in {c.value for c in DayCategory}:
        raise ConfigurationError(f"unknown category {category!r}")
    if not name or not name.strip():
        raise ConfigurationError("rule name must not be empty")
    try:
        start = time_str_to_minutes(start_time)
        end = time_str_to_minutes(end_time)
    except ValueError as exc:
        raise ConfigurationError(str(exc)) from exc
    if start >= end:
        raise ConfigurationError(
            f"rule {name!r}: start_time {start_time} must be before end_time {end_time}"
        )
    return normalize_time_str(start_time), normalize_time_str(end_time)


def rule_to_window(rule: TimeRule) -> TimeWindow:
    try:
        start = time_str_to_minutes(rule.start_time)
        end = time_str_to_minutes(rule.end_time)
    except ValueError as exc:
        raise ConfigurationError(f"stored rule {rule.id} is malformed: {exc}") from exc
    if start >= end:
        raise ConfigurationError(
            f"stored rule {rule.id} ({rule.name!r}) has start_time >= end_time"
        )
    return TimeWindow(name=rule.name, start=start, end=end, blocked=bool(rule.is_blocked))


def evaluate_windows(windows: list[TimeWindow], minute: int) -> WindowMatch:
    matching = [w for w in windows if w.contains(minute)]
    if not matching:
        return WindowMatch(WindowStatus.OUT_OF_HOURS)

    blocked = [w for w in matching if w.blocked]
    if blocked:
        first = min(blocked, key=lambda w: (w.start, w.name))
        return WindowMatch(WindowStatus.BLOCKED, first.name)

    first = min(matching, key=lambda w: (w.start, w.name))
    return WindowMatch(WindowStatus.OPEN, first.name)


class RuleSet:
    """Rule windows read from the repository on every evaluation."""

    def __init__(self, repository: TimeRuleRepository):
        self.repository = repository

    def windows_for(self, category: DayCategory | str) -> list[TimeWindow]:
        """Windows of a category ordered by (start, name)."""
        category = DayCategory(category)
        windows = [rule_to_window(rule) for rule in self.repository.list_rules(category.value)]
        return sorted(windows, key=lambda w: (w.start, w.name))

    def is_blocked(self, category: DayCategory | str, time_of_day: str) -> WindowMatch:
        return evaluate_windows(self.windows_for(category), time_str_to_minutes(time_of_day))

    # ── Administration ───────────────────────────────────────────────────

    def list_rules(self) -> dict[str, list[TimeRule]]:
        grouped: dict[str, list[TimeRule]] = {c.value: [] for c in DayCategory}
        for rule in self.repository.list_all():
            grouped.setdefault(rule.category, []).append(rule)
        return grouped

    def create_rule(
        self,
        category: str,
        name: str,
        start_time: str,
        end_time: str,
        is_blocked: bool = False,
    ) -> TimeRule:
        try:
            start, end = validate_rule_fields(category, name, start_time, end_time)
        except ConfigurationError as exc:
            logger.warning(f"Rejected time rule {category}/{name}: {exc}")
            raise
        return self.repository.create_rule(category, name.strip(), start, end, is_blocked)

    def update_rule(
        self,
        rule_id: int,
        name: str | None = None,
        start_time: str | None = None,
        end_time: str | None = None,
        is_blocked: bool | None = None,
    ) -> TimeRule:
        rule = self.repository.get(rule_id)
        if not rule:
            raise RuleNotFoundError(f"time rule {rule_id} not found")

        new_name = name.strip() if name is not None else rule.name
        try:
            start, end = validate_rule_fields(
                rule.category,
                new_name,
                start_time if start_time is not None else rule.start_time,
                end_time if end_time is not None else rule.end_time,
            )
        except ConfigurationError as exc:
            logger.warning(f"Rejected update of time rule {rule_id}: {exc}")
            raise

        return self.repository.update_rule(
            rule,
            name=new_name,
            start_time=start,
            end_time=end,
            is_blocked=is_blocked,
        )

    def delete_rule(self, rule_id: int) -> None:
        if not self.repository.delete_rule(rule_id):
            raise RuleNotFoundError(f"time rule {rule_id} not found")
