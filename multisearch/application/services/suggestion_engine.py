"""Search suggestions from static seed lists."""

from __future__ import annotations

from collections.abc import Sequence

POPULAR_SEARCHES: tuple[str, ...] = (
    "Software Engineer",
    "Marketing Manager",
    "Data Scientist",
    "Product Manager",
    "UX Designer",
    "Business Analyst",
    "Sales Representative",
    "Project Manager",
    "Financial Analyst",
    "Human Resources",
)

TRENDING_SEARCHES: tuple[str, ...] = (
    "Remote Work",
    "AI/ML",
    "Blockchain",
    "Sustainability",
    "Digital Marketing",
    "Cloud Computing",
    "Cybersecurity",
    "E-commerce",
    "Mobile Development",
    "Data Analytics",
)


class SuggestionEngine:
    """Case-insensitive substring filter over the popular and trending seed lists.

    Order is seed order (popular first, then trending); no further ranking.
    """

    def __init__(
        self,
        popular: Sequence[str] = POPULAR_SEARCHES,
        trending: Sequence[str] = TRENDING_SEARCHES,
        max_suggestions: int = 10,
    ) -> None:
        self._popular = tuple(popular)
        self._trending = tuple(trending)
        self.max_suggestions = max_suggestions

    def suggest(self, term: str, limit: int | None = None) -> list[str]:
        """Return up to limit (capped at max_suggestions) seed terms containing term."""
        cap = self.max_suggestions if limit is None else min(limit, self.max_suggestions)
        needle = str(term).strip().lower()
        suggestions: list[str] = []
        for candidate in (*self._popular, *self._trending):
            if len(suggestions) >= cap:
                break
            if needle in candidate.lower() and candidate not in suggestions:
                suggestions.append(candidate)
        return suggestions

    def popular(self, limit: int = 20) -> list[str]:
        return list(self._popular[: max(limit, 0)])

    def trending(self, limit: int = 20) -> list[str]:
        return list(self._trending[: max(limit, 0)])
