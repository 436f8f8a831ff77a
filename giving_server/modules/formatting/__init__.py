"""Entity formatting exports"""

from .service import EntityFormatter, HIDDEN_FIELDS

__all__ = ["EntityFormatter", "HIDDEN_FIELDS"]
