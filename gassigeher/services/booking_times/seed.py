"""
Default time rules and system settings.

Idempotent: existing (category, name) rules and existing setting keys are
never overwritten.
"""

import logging

from sqlalchemy.orm import Session

from ...repositories import SettingsRepository, TimeRuleRepository
from .rule_set import validate_rule_fields

logger = logging.getLogger(__name__)

# (category, name, start, end, blocked)
DEFAULT_TIME_RULES = [
    ("weekday", "Morning walk", "09:00", "12:00", False),
    ("weekday", "Lunch break", "13:00", "14:00", True),
    ("weekday", "Afternoon walk", "14:00", "16:30", False),
    ("weekday", "Feeding time", "16:30", "18:00", True),
    ("weekday", "Evening walk", "18:00", "19:30", False),
    ("weekend", "Morning walk", "09:00", "12:00", False),
    ("weekend", "Feeding time", "12:00", "13:00", True),
    ("weekend", "Lunch break", "13:00", "14:00", True),
    ("weekend", "Afternoon walk", "14:00", "17:00", False),
]

DEFAULT_SYSTEM_SETTINGS = {
    "morning_walk_requires_approval": "true",
    "approval_cutoff_time": "12:00",
    "use_feiertage_api": "true",
    "feiertage_state": "BW",
    "booking_time_granularity": "15",
    "feiertage_cache_days": "7",
    "booking_advance_days": "14",
}


def seed_default_rules(db: Session) -> int:
    """Insert missing default rules. Returns number of inserted rules."""
    repo = TimeRuleRepository(db)
    inserted = 0
    for category, name, start, end, blocked in DEFAULT_TIME_RULES:
        if repo.exists(category, name):
            continue
        start, end = validate_rule_fields(category, name, start, end)
        repo.create_rule(category, name, start, end, blocked)
        inserted += 1
    return inserted


def seed_defaults(db: Session) -> dict[str, int]:
    rules = seed_default_rules(db)
    settings_count = SettingsRepository(db).insert_missing(DEFAULT_SYSTEM_SETTINGS)
    logger.info(f"Seeded {rules} time rules and {settings_count} settings")
    return {"rules": rules, "settings": settings_count}
