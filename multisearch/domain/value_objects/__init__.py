"""Domain value objects: immutable, self-validating types."""

from multisearch.domain.value_objects.core import SearchTerm

__all__ = ["SearchTerm"]
