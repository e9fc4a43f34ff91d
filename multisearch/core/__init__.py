"""Core: config, in-process history store, and composition root.

Import SearchContainer from multisearch.core.container (kept out of this
module so shared code can import settings without the whole stack).
"""

from multisearch.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
