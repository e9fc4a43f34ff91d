"""Facet histograms (value -> count) over a result set."""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from multisearch.application.dtos.search import Facets, ScoredCandidate
from multisearch.domain.enums import EntityType
from multisearch.shared.utils.datetime import month_label


@dataclass(frozen=True)
class FacetDimension:
    """A named facet read from one record field.

    flatten counts each element of a list field; transform maps a raw value
    to its bucket label (e.g. a date to its month).
    """

    name: str
    field: str
    flatten: bool = False
    transform: Callable[[Any], Any] | None = None


def _bucket_values(candidate: ScoredCandidate, dimension: FacetDimension) -> list[str]:
    if dimension.field == "entity_type":
        return [candidate.entity_type.value]
    value = candidate.record.get(dimension.field)
    values = list(value) if dimension.flatten and value else [value]
    buckets: list[str] = []
    for item in values:
        if item is not None and item != "" and dimension.transform is not None:
            item = dimension.transform(item)
        if item is None or item == "":
            continue
        buckets.append(str(item))
    # a record counts at most once per bucket
    return list(dict.fromkeys(buckets))


GLOBAL_DIMENSIONS: tuple[FacetDimension, ...] = (
    FacetDimension("entityTypes", "entity_type"),
    FacetDimension("locations", "location"),
    FacetDimension("categories", "category"),
    # user and service skills only; job required_skills and project
    # technologies are not counted in the global skills facet
    FacetDimension("skills", "skills", flatten=True),
    FacetDimension("companies", "company"),
)

ENTITY_DIMENSIONS: dict[EntityType, tuple[FacetDimension, ...]] = {
    EntityType.USER: (
        FacetDimension("locations", "location"),
        FacetDimension("skills", "skills", flatten=True),
        FacetDimension("companies", "company"),
        FacetDimension("titles", "title"),
        FacetDimension("industries", "industry"),
    ),
    EntityType.JOB: (
        FacetDimension("locations", "location"),
        FacetDimension("companies", "company"),
        FacetDimension("jobTypes", "job_type"),
        FacetDimension("experienceLevels", "experience_level"),
        FacetDimension("salaryRanges", "salary_range"),
    ),
    EntityType.EVENT: (
        FacetDimension("locations", "location"),
        FacetDimension("eventTypes", "event_type"),
        FacetDimension("eventModes", "event_mode"),
        FacetDimension("organizers", "organizer"),
        FacetDimension("dates", "start_date", transform=month_label),
    ),
    EntityType.SERVICE: (
        FacetDimension("categories", "category"),
        FacetDimension("locations", "location"),
        FacetDimension("providers", "provider_name"),
        FacetDimension("priceRanges", "price_range"),
        # zero ratings are treated as missing
        FacetDimension(
            "ratings",
            "average_rating",
            transform=lambda r: math.floor(r) if r else None,
        ),
    ),
    EntityType.INVESTOR: (
        FacetDimension("locations", "location"),
        FacetDimension("investmentFocus", "investment_focus", flatten=True),
        FacetDimension("fundSizes", "fund_size"),
        FacetDimension("companies", "company"),
        FacetDimension("stages", "investment_stage"),
    ),
    EntityType.PROJECT: (
        FacetDimension("categories", "category"),
        FacetDimension("technologies", "technologies", flatten=True),
        FacetDimension("statuses", "status"),
        FacetDimension("owners", "owner_name"),
        FacetDimension("years", "start_date", transform=lambda d: d.year),
    ),
}


class FacetAggregator:
    """Builds value -> count histograms; missing or empty values count nowhere."""

    def compute(
        self,
        results: Iterable[ScoredCandidate],
        dimensions: Iterable[FacetDimension] = GLOBAL_DIMENSIONS,
    ) -> Facets:
        dimensions = tuple(dimensions)
        facets: Facets = {d.name: {} for d in dimensions}
        for candidate in results:
            for dimension in dimensions:
                bucket = facets[dimension.name]
                for value in _bucket_values(candidate, dimension):
                    bucket[value] = bucket.get(value, 0) + 1
        return facets

    def compute_global(self, results: Iterable[ScoredCandidate]) -> Facets:
        return self.compute(results, GLOBAL_DIMENSIONS)

    def compute_for_entity(
        self, entity_type: EntityType, results: Iterable[ScoredCandidate]
    ) -> Facets:
        return self.compute(results, ENTITY_DIMENSIONS[entity_type])
