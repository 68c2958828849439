"""Time rule repository - database operations for booking time rules"""

from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..errors import DuplicateRuleError
from ..models import TimeRule


class TimeRuleRepository:
    """Repository for booking time rules"""

    def __init__(self, db: Session):
        self.db = db

    def list_rules(self, category: str) -> list[TimeRule]:
        """Rules of one category, ordered by start time then name"""
        return (
            self.db.query(TimeRule)
            .filter(TimeRule.category == category)
            .order_by(TimeRule.start_time, TimeRule.name)
            .all()
        )

    def list_all(self) -> list[TimeRule]:
        return (
            self.db.query(TimeRule)
            .order_by(TimeRule.category, TimeRule.start_time, TimeRule.name)
            .all()
        )

    def get(self, rule_id: int) -> Optional[TimeRule]:
        return self.db.get(TimeRule, rule_id)

    def exists(self, category: str, name: str) -> bool:
        return (
            self.db.query(TimeRule.id)
            .filter(TimeRule.category == category, TimeRule.name == name)
            .first()
            is not None
        )

    def create_rule(
        self,
        category: str,
        name: str,
        start_time: str,
        end_time: str,
        is_blocked: bool = False,
    ) -> TimeRule:
        rule = TimeRule(
            category=category,
            name=name,
            start_time=start_time,
            end_time=end_time,
            is_blocked=is_blocked,
        )
        self.db.add(rule)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise DuplicateRuleError(
                f"rule {name!r} already exists for {category}"
            ) from exc
        self.db.refresh(rule)
        return rule

    def update_rule(self, rule: TimeRule, **updates) -> TimeRule:
        for key, value in updates.items():
            if value is not None and hasattr(rule, key):
                setattr(rule, key, value)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise DuplicateRuleError(
                f"rule {rule.name!r} already exists for {rule.category}"
            ) from exc
        self.db.refresh(rule)
        return rule

    def delete_rule(self, rule_id: int) -> bool:
        rule = self.get(rule_id)
        if not rule:
            return False
        self.db.delete(rule)
        self.db.commit()
        return True
