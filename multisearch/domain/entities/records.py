"""Searchable entity records.

One frozen dataclass per entity type. All variants share the capability
set used by merging and sorting (id, display_name, created_at, views,
entity_type); the remaining fields are the entity-specific payload used by
scoring, facets and rendering.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, fields, replace
from datetime import date, datetime
from typing import Any, ClassVar

from pydantic.alias_generators import to_camel, to_snake

from multisearch.domain.enums import EntityType
from multisearch.shared.utils.datetime import ensure_utc


def _as_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value)
    return text if text.strip() else None


def _as_text_tuple(value: Any) -> tuple[str, ...]:
    """Coerce a scalar or iterable into a tuple of non-empty strings."""
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,) if value.strip() else ()
    if isinstance(value, Iterable):
        return tuple(str(item) for item in value if _as_text(item) is not None)
    return (str(value),)


def _as_float(value: Any) -> float | None:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _as_int(value: Any, default: int | None = None) -> int | None:
    number = _as_float(value)
    return int(number) if number is not None else default


def _as_datetime(value: Any) -> datetime | None:
    """Parse datetimes, dates and ISO-8601 strings into UTC-aware datetimes."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return ensure_utc(value)
    if isinstance(value, date):
        return ensure_utc(datetime(value.year, value.month, value.day))
    if isinstance(value, str):
        try:
            return ensure_utc(datetime.fromisoformat(value.replace("Z", "+00:00")))
        except ValueError:
            return None
    return None


@dataclass(frozen=True, kw_only=True)
class EntityRecord:
    """Common shape of a record returned by an entity repository."""

    entity_type: ClassVar[EntityType]
    display_field: ClassVar[str]
    list_fields: ClassVar[tuple[str, ...]] = ()
    float_fields: ClassVar[tuple[str, ...]] = ()
    int_fields: ClassVar[tuple[str, ...]] = ()
    datetime_fields: ClassVar[tuple[str, ...]] = ("created_at",)

    id: str
    created_at: datetime | None = None
    views: int = 0
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def display_name(self) -> str:
        """Name or title shown for the record; empty string when missing."""
        return getattr(self, self.display_field) or ""

    def get(self, name: str) -> Any:
        """Return a declared field or an extra attribute by snake_case name."""
        if name in self.field_names():
            return getattr(self, name)
        return self.extra.get(name)

    @classmethod
    def field_names(cls) -> frozenset[str]:
        return frozenset(f.name for f in fields(cls))

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> EntityRecord:
        """Build a record from a raw repository row (snake_case or camelCase keys).

        List-valued fields accept a scalar and become a one-element tuple.
        Keys that are not declared fields are kept in ``extra``.
        """
        known = cls.field_names() - {"extra"}
        values: dict[str, Any] = {}
        extra: dict[str, Any] = {}
        for key, value in raw.items():
            name = to_snake(key)
            if name in known:
                values[name] = value
            else:
                extra[key] = value
        if values.get("id") is None:
            raise ValueError(f"{cls.entity_type.value} record has no id")
        values["id"] = str(values["id"])
        values["views"] = _as_int(values.get("views"), 0)
        for name in cls.list_fields:
            values[name] = _as_text_tuple(values.get(name))
        for name in cls.float_fields:
            values[name] = _as_float(values.get(name))
        for name in cls.int_fields:
            values[name] = _as_int(values.get(name))
        for name in cls.datetime_fields:
            values[name] = _as_datetime(values.get(name))
        for name in known - set(cls.list_fields) - {"id", "views"}:
            if name in values and isinstance(values[name], str):
                values[name] = _as_text(values[name])
        return cls(**values, extra=extra)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to camelCase keys (lists for list fields, ISO strings for datetimes)."""
        data: dict[str, Any] = {}
        for f in fields(self):
            if f.name == "extra":
                continue
            value = getattr(self, f.name)
            if isinstance(value, tuple):
                value = list(value)
            elif isinstance(value, datetime):
                value = value.isoformat()
            data[to_camel(f.name)] = value
        data["displayName"] = self.display_name
        for key, value in self.extra.items():
            data.setdefault(key, value)
        return data


@dataclass(frozen=True, kw_only=True)
class UserRecord(EntityRecord):
    """People search hit."""

    entity_type: ClassVar[EntityType] = EntityType.USER
    display_field: ClassVar[str] = "name"
    list_fields: ClassVar[tuple[str, ...]] = ("skills",)
    float_fields: ClassVar[tuple[str, ...]] = ("profile_completion",)
    int_fields: ClassVar[tuple[str, ...]] = ("connection_count",)

    name: str | None = None
    title: str | None = None
    company: str | None = None
    location: str | None = None
    industry: str | None = None
    skills: tuple[str, ...] = ()
    profile_completion: float | None = None
    connection_count: int | None = None


@dataclass(frozen=True, kw_only=True)
class JobRecord(EntityRecord):
    """Job posting."""

    entity_type: ClassVar[EntityType] = EntityType.JOB
    display_field: ClassVar[str] = "title"
    list_fields: ClassVar[tuple[str, ...]] = ("required_skills",)

    title: str | None = None
    company: str | None = None
    description: str | None = None
    location: str | None = None
    required_skills: tuple[str, ...] = ()
    job_type: str | None = None
    experience_level: str | None = None
    salary_range: str | None = None


@dataclass(frozen=True, kw_only=True)
class EventRecord(EntityRecord):
    """Event listing."""

    entity_type: ClassVar[EntityType] = EntityType.EVENT
    display_field: ClassVar[str] = "title"
    datetime_fields: ClassVar[tuple[str, ...]] = ("created_at", "start_date")

    title: str | None = None
    description: str | None = None
    organizer: str | None = None
    location: str | None = None
    event_type: str | None = None
    event_mode: str | None = None
    start_date: datetime | None = None


@dataclass(frozen=True, kw_only=True)
class ServiceRecord(EntityRecord):
    """Service offered by a provider."""

    entity_type: ClassVar[EntityType] = EntityType.SERVICE
    display_field: ClassVar[str] = "service_name"
    list_fields: ClassVar[tuple[str, ...]] = ("skills",)
    float_fields: ClassVar[tuple[str, ...]] = ("average_rating",)

    service_name: str | None = None
    description: str | None = None
    category: str | None = None
    provider_name: str | None = None
    location: str | None = None
    skills: tuple[str, ...] = ()
    price_range: str | None = None
    average_rating: float | None = None


@dataclass(frozen=True, kw_only=True)
class InvestorRecord(EntityRecord):
    """Investor profile."""

    entity_type: ClassVar[EntityType] = EntityType.INVESTOR
    display_field: ClassVar[str] = "name"
    list_fields: ClassVar[tuple[str, ...]] = ("investment_focus",)

    name: str | None = None
    company: str | None = None
    description: str | None = None
    location: str | None = None
    investment_focus: tuple[str, ...] = ()
    fund_size: str | None = None
    investment_stage: str | None = None


@dataclass(frozen=True, kw_only=True)
class ProjectRecord(EntityRecord):
    """Portfolio project."""

    entity_type: ClassVar[EntityType] = EntityType.PROJECT
    display_field: ClassVar[str] = "project_name"
    list_fields: ClassVar[tuple[str, ...]] = ("technologies",)
    datetime_fields: ClassVar[tuple[str, ...]] = ("created_at", "start_date")

    project_name: str | None = None
    description: str | None = None
    category: str | None = None
    project_url: str | None = None
    technologies: tuple[str, ...] = ()
    status: str | None = None
    owner_name: str | None = None
    start_date: datetime | None = None


RECORD_TYPES: dict[EntityType, type[EntityRecord]] = {
    EntityType.USER: UserRecord,
    EntityType.JOB: JobRecord,
    EntityType.EVENT: EventRecord,
    EntityType.SERVICE: ServiceRecord,
    EntityType.INVESTOR: InvestorRecord,
    EntityType.PROJECT: ProjectRecord,
}


def _with_utc_datetimes(record: EntityRecord) -> EntityRecord:
    """Return record with its datetime fields UTC-aware (the same object if already so)."""
    changes = {}
    for name in record.datetime_fields:
        value = getattr(record, name)
        normalized = _as_datetime(value)
        if normalized != value or (value is not None and value.tzinfo is None):
            changes[name] = normalized
    return replace(record, **changes) if changes else record


def record_from_mapping(
    entity_type: EntityType, raw: Mapping[str, Any] | EntityRecord
) -> EntityRecord:
    """Return a typed record for a raw repository row.

    Typed records pass through, with naive datetimes read as UTC.
    """
    record_type = RECORD_TYPES[entity_type]
    if isinstance(raw, record_type):
        return _with_utc_datetimes(raw)
    if isinstance(raw, EntityRecord):
        raise TypeError(
            f"Expected {record_type.__name__}, got {type(raw).__name__}"
        )
    return record_type.from_mapping(raw)
