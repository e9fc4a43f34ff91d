"""Heuristic relevance scoring per entity type.

Every entity type is scored the same way and differs only in its
profile: an ordered list of field rules plus independent bonus rules.

- A text field that contains the term (case-insensitive) adds its weight;
  if the field also starts with the term it adds the prefix bonus.
- A list field adds its weight once per element that contains the term.
- Bonus rules add fixed points from record signals (recency, rating, ...).

Scores are local to an entity type and are not normalized across types.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from multisearch.application.dtos.search import RuleContribution
from multisearch.domain.entities import EntityRecord
from multisearch.domain.enums import EntityType
from multisearch.domain.value_objects import SearchTerm
from multisearch.shared.utils.datetime import utc_now, whole_days_between

Clock = Callable[[], datetime]


@dataclass(frozen=True)
class FieldRule:
    """Weight for a term match on one record field."""

    field: str
    weight: int
    prefix_bonus: int = 0
    per_element: bool = False


@dataclass(frozen=True)
class BonusRule:
    """Fixed points added when a record signal holds (independent of the term)."""

    name: str
    points: int
    applies: Callable[[EntityRecord, datetime], bool]


@dataclass(frozen=True)
class ScoringProfile:
    """Field and bonus rules for one entity type, in evaluation order."""

    entity_type: EntityType
    field_rules: tuple[FieldRule, ...]
    bonus_rules: tuple[BonusRule, ...] = ()


def _greater_than(field: str, threshold: float) -> Callable[[EntityRecord, datetime], bool]:
    def check(record: EntityRecord, now: datetime) -> bool:
        value = record.get(field)
        return value is not None and value > threshold

    return check


def _equals(field: str, expected: str) -> Callable[[EntityRecord, datetime], bool]:
    def check(record: EntityRecord, now: datetime) -> bool:
        return record.get(field) == expected

    return check


def _age_within(
    max_days: int, min_days: int | None = None
) -> Callable[[EntityRecord, datetime], bool]:
    """Record created at most max_days ago (and more than min_days ago, when given)."""

    def check(record: EntityRecord, now: datetime) -> bool:
        if record.created_at is None:
            return False
        days = whole_days_between(record.created_at, now)
        if min_days is not None and days <= min_days:
            return False
        return days <= max_days

    return check


def _starts_after_now(record: EntityRecord, now: datetime) -> bool:
    start = record.get("start_date")
    return start is not None and start > now


PROFILES: dict[EntityType, ScoringProfile] = {
    EntityType.USER: ScoringProfile(
        EntityType.USER,
        (
            FieldRule("name", 100, prefix_bonus=50),
            FieldRule("skills", 30, per_element=True),
            FieldRule("location", 25),
            FieldRule("company", 20),
            FieldRule("title", 15),
        ),
        (
            BonusRule("profile_complete", 10, _greater_than("profile_completion", 80)),
            BonusRule("well_connected", 5, _greater_than("connection_count", 100)),
        ),
    ),
    EntityType.JOB: ScoringProfile(
        EntityType.JOB,
        (
            FieldRule("title", 100, prefix_bonus=50),
            FieldRule("company", 40),
            FieldRule("description", 30),
            FieldRule("required_skills", 25, per_element=True),
            FieldRule("location", 20),
        ),
        (
            BonusRule("posted_this_week", 15, _age_within(7)),
            BonusRule("posted_this_month", 10, _age_within(30, min_days=7)),
        ),
    ),
    EntityType.EVENT: ScoringProfile(
        EntityType.EVENT,
        (
            FieldRule("title", 100, prefix_bonus=50),
            FieldRule("description", 40),
            FieldRule("organizer", 30),
            FieldRule("location", 25),
            FieldRule("event_type", 20),
        ),
        (BonusRule("upcoming", 15, _starts_after_now),),
    ),
    EntityType.SERVICE: ScoringProfile(
        EntityType.SERVICE,
        (
            FieldRule("service_name", 100, prefix_bonus=50),
            FieldRule("description", 40),
            FieldRule("category", 35),
            FieldRule("provider_name", 30),
            FieldRule("skills", 25, per_element=True),
        ),
        (BonusRule("highly_rated", 10, _greater_than("average_rating", 4.0)),),
    ),
    EntityType.INVESTOR: ScoringProfile(
        EntityType.INVESTOR,
        (
            FieldRule("name", 100, prefix_bonus=50),
            FieldRule("company", 40),
            FieldRule("investment_focus", 35, per_element=True),
            FieldRule("description", 30),
            FieldRule("location", 25),
        ),
        (BonusRule("large_fund", 15, _equals("fund_size", "large")),),
    ),
    EntityType.PROJECT: ScoringProfile(
        EntityType.PROJECT,
        (
            FieldRule("project_name", 100, prefix_bonus=50),
            FieldRule("description", 40),
            FieldRule("technologies", 35, per_element=True),
            FieldRule("category", 30),
            FieldRule("project_url", 20),
        ),
        (BonusRule("completed", 10, _equals("status", "completed")),),
    ),
}


class RelevanceScorer:
    """Pure scoring function for one entity type's records."""

    def __init__(self, profile: ScoringProfile, clock: Clock = utc_now) -> None:
        self.profile = profile
        self._clock = clock

    @classmethod
    def for_entity(cls, entity_type: EntityType, clock: Clock = utc_now) -> RelevanceScorer:
        return cls(PROFILES[entity_type], clock=clock)

    @property
    def entity_type(self) -> EntityType:
        return self.profile.entity_type

    def score(
        self,
        record: EntityRecord,
        term: SearchTerm | str,
        filters: Mapping[str, Any] | None = None,
    ) -> int:
        """Return the non-negative relevance score of record for term.

        filters are accepted for signature parity with the repository call;
        no current profile weights them.
        """
        return sum(c.points for c in self.explain(record, term, filters))

    def explain(
        self,
        record: EntityRecord,
        term: SearchTerm | str,
        filters: Mapping[str, Any] | None = None,
    ) -> list[RuleContribution]:
        """Return the non-zero contribution of every rule, in profile order."""
        needle = term.needle if isinstance(term, SearchTerm) else str(term).lower()
        contributions: list[RuleContribution] = []
        for rule in self.profile.field_rules:
            value = record.get(rule.field)
            if not value:
                continue
            if rule.per_element:
                matches = sum(1 for item in value if needle in item.lower())
                if matches:
                    contributions.append(
                        RuleContribution(rule.field, rule.weight * matches)
                    )
                continue
            text = str(value).lower()
            if needle in text:
                contributions.append(RuleContribution(rule.field, rule.weight))
                if rule.prefix_bonus and text.startswith(needle):
                    contributions.append(
                        RuleContribution(f"{rule.field}_prefix", rule.prefix_bonus)
                    )
        now = self._clock()
        for bonus in self.profile.bonus_rules:
            if bonus.applies(record, now):
                contributions.append(RuleContribution(bonus.name, bonus.points))
        return contributions
