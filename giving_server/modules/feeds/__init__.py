"""Feed exports"""

from .models import FeedItem
from .service import FeedService

__all__ = ["FeedItem", "FeedService"]
