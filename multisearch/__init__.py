"""multisearch: concurrent relevance search across users, jobs, events,
services, investors and projects."""

__version__ = "1.0.0"
