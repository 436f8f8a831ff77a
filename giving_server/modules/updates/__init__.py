"""Charity update exports"""

from .service import UpdateCreateInput, UpdateEditInput, UpdateService

__all__ = ["UpdateCreateInput", "UpdateEditInput", "UpdateService"]
