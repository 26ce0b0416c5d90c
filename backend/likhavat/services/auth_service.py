"""
Kacchi Likhavat Backend — Account Service
==========================================

What:  Registration and login. Both return a signed bearer token together
       with the public account fields.
Who:   Called by routes/auth.py.

Emails are stored lower-cased (normalized by the request schemas), so
uniqueness and login are case-insensitive.
"""

import logging
from typing import Optional, Tuple

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from likhavat.auth.security import create_access_token, hash_password, verify_password
from likhavat.exceptions import AuthenticationError, ValidationError
from likhavat.models.user import User
from likhavat.services.base import translate_db_errors
from likhavat.services.profile_service import profile_service

logger = logging.getLogger(__name__)


class AuthService:

    async def _find_by_email(self, db: AsyncSession, email: str) -> Optional[User]:
        result = await db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def register(
        self,
        db: AsyncSession,
        email: str,
        password: str,
        name: Optional[str] = None,
    ) -> Tuple[str, User]:
        """
        Create an account and its empty profile.

        Raises:
            ValidationError: the email is already registered
        """
        with translate_db_errors("create the account"):
            if await self._find_by_email(db, email) is not None:
                raise ValidationError("An account with this email already exists", field="email")

            user = User(
                email=email,
                name=(name or "").strip() or email.split("@")[0],
                password_hash=hash_password(password),
            )
            db.add(user)
            try:
                await db.flush()
            except IntegrityError:
                # Lost a race with a concurrent registration of the same email
                raise ValidationError("An account with this email already exists", field="email")

            await profile_service.get_or_create(db, user.id, display_name=user.name)

        logger.info("Registered user %s", user.id)
        return create_access_token(user.id), user

    async def login(self, db: AsyncSession, email: str, password: str) -> Tuple[str, User]:
        """
        Raises:
            AuthenticationError: unknown email or wrong password (same message for both)
        """
        with translate_db_errors("log in"):
            user = await self._find_by_email(db, email)

        if user is None or not verify_password(password, user.password_hash):
            logger.info("Failed login attempt for %s", email)
            raise AuthenticationError("Invalid email or password")

        logger.info("User %s logged in", user.id)
        return create_access_token(user.id), user


auth_service = AuthService()
