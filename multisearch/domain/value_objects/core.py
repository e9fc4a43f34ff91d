"""Domain value objects for multisearch.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

from dataclasses import dataclass

from multisearch.domain.exceptions import InvalidQueryException


@dataclass(frozen=True)
class SearchTerm:
    """Value object for a free-text search term.

    The term is trimmed on construction and must keep at least
    min_length characters. Matching against record fields is
    case-insensitive substring containment of the whole term, so inner
    whitespace is significant ("software engineer" is one needle).
    """

    value: str
    min_length: int = 2

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise InvalidQueryException(self.min_length)
        trimmed = self.value.strip()
        if len(trimmed) < self.min_length:
            raise InvalidQueryException(self.min_length)
        object.__setattr__(self, "value", trimmed)

    @property
    def needle(self) -> str:
        """Lowercased term used for containment and prefix checks."""
        return self.value.lower()

    def __str__(self) -> str:
        return self.value
