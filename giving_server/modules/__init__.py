"""Domain modules and their public exports."""

from . import campaigns, charities, common, donations, entities, feeds, formatting, posts, updates, users

__all__ = [
    "campaigns",
    "charities",
    "common",
    "donations",
    "entities",
    "feeds",
    "formatting",
    "posts",
    "updates",
    "users",
]
