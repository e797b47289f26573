"""Runtime services backing the API."""
from .change_feed import ChangeFeed, EntriesChanged

__all__ = ["ChangeFeed", "EntriesChanged"]
