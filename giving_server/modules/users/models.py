"""Input models for user use cases."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class UserCreateInput:
    email: str
    password: str = field(repr=False)
    name: str
    bio: str = ""
