"""Domain entities: typed record variants per entity type.

Pure domain models; no repository or transport concerns.
"""

from multisearch.domain.entities.records import (
    RECORD_TYPES,
    EntityRecord,
    EventRecord,
    InvestorRecord,
    JobRecord,
    ProjectRecord,
    ServiceRecord,
    UserRecord,
    record_from_mapping,
)

__all__ = [
    "RECORD_TYPES",
    "EntityRecord",
    "EventRecord",
    "InvestorRecord",
    "JobRecord",
    "ProjectRecord",
    "ServiceRecord",
    "UserRecord",
    "record_from_mapping",
]
