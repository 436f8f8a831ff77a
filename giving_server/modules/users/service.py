"""Domain services for user accounts and their ledger balance."""

from __future__ import annotations

import logging
import re
from typing import cast

from giving_server.core.crypto import check_password_policy, hash_password, verify_password
from giving_server.core.errors import ConflictError, NotFoundError, ValidationError
from giving_server.modules.common.amounts import MAX_AMOUNT_CENTS, validate_amount
from giving_server.modules.entities.models import AtMost, Charity, EntityType, Mutation, User, generate_guid
from giving_server.modules.entities.repository import EntityStore

from .models import UserCreateInput

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[A-Za-z]{2,}$")


class UserService:
    """Encapsulates core user use cases."""

    def __init__(self, store: EntityStore) -> None:
        self._store = store

    async def get_user(self, guid: str) -> User:
        user = await self._store.find_one(EntityType.USER, {"guid": guid})
        if user is None:
            raise NotFoundError("user", guid)
        return cast(User, user)

    async def get_by_email(self, email: str) -> User | None:
        user = await self._store.find_one(EntityType.USER, {"email": email.strip().lower()})
        return cast(User, user) if user is not None else None

    async def register(self, payload: UserCreateInput) -> User:
        email = payload.email.strip().lower()
        if not EMAIL_PATTERN.match(email):
            raise ValidationError("Email is invalid", "email")
        if not payload.name.strip():
            raise ValidationError("Name is required", "name")
        check_password_policy(payload.password)

        # erased accounts still own their email address
        existing = await self._store.find_one(EntityType.USER, {"email": email}, include_erased=True)
        if existing is not None:
            raise ConflictError("An account with this email already exists")

        user = await self._store.upsert(
            EntityType.USER,
            {"guid": generate_guid()},
            Mutation(
                set_values={
                    "email": email,
                    "password_hash": hash_password(payload.password),
                    "name": payload.name.strip(),
                    "bio": payload.bio,
                    "balance": 0,
                }
            ),
        )
        logger.info("Registered user %s", user.guid)
        return cast(User, user)

    async def authenticate(self, email: str, password: str) -> User | None:
        user = await self.get_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            return None
        return user

    async def deposit(self, guid: str, amount_cents: int) -> User:
        """Credit ``amount_cents`` to the user's balance with a relative increment.

        The increment is guarded so the balance never passes ``MAX_AMOUNT_CENTS``.
        """
        validate_amount(amount_cents)
        user = await self._store.upsert(
            EntityType.USER,
            {"guid": guid, "balance": AtMost(MAX_AMOUNT_CENTS - amount_cents)},
            Mutation(increments={"balance": amount_cents}),
            upsert=False,
        )
        if user is None:
            if await self._store.find_one(EntityType.USER, {"guid": guid}) is None:
                raise NotFoundError("user", guid)
            raise ValidationError(f"Balance must not exceed {MAX_AMOUNT_CENTS} cents", "amount")
        logger.info("Credited %s cents to user %s", amount_cents, guid, extra={"user_guid": guid})
        return cast(User, user)

    async def follow_charity(self, user_guid: str, charity_guid: str) -> tuple[User, Charity]:
        user = await self.get_user(user_guid)
        charity = await self._store.find_one(EntityType.CHARITY, {"guid": charity_guid})
        if charity is None:
            raise NotFoundError("charity", charity_guid)
        if charity_guid in user.following_charities:
            return user, cast(Charity, charity)

        updated = await self._store.upsert(
            EntityType.USER,
            {"guid": user_guid},
            Mutation(appends={"following_charities": charity_guid}),
            upsert=False,
        )
        if updated is None:
            raise NotFoundError("user", user_guid)
        return cast(User, updated), cast(Charity, charity)
