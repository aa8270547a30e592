"""
AP Exam Sync: Demo Auth Service
================================

What:  Signup and login against the `users` collection.
How:   Plaintext password storage and comparison; no tokens or sessions.
       Email uniqueness is enforced by a linear scan at signup time.

This is demo-grade on purpose. Passwords are never logged and never
returned by any endpoint.
"""

import logging

from apsync.exceptions import ValidationError
from apsync.models.document import User, new_id
from apsync.schemas.auth import LoginRequest, SignupRequest
from apsync.schemas.common import PublicUser
from apsync.store import DocumentStore

logger = logging.getLogger(__name__)


def to_public(user: User) -> PublicUser:
    return PublicUser(id=user.id, email=user.email, name=user.name)


class AuthService:

    async def signup(self, store: DocumentStore, payload: SignupRequest) -> PublicUser:
        """
        Register a user.

        Raises:
            ValidationError: a field is missing ("Missing fields") or the
                             email is taken ("Email exists")
        """
        if not (payload.email and payload.password and payload.name):
            raise ValidationError(message="Missing fields")

        async with store.transaction() as doc:
            if doc.find_user_by_email(payload.email) is not None:
                raise ValidationError(message="Email exists", field="email")

            user = User(
                id=new_id(),
                email=payload.email,
                password=payload.password,
                name=payload.name,
            )
            doc.users.append(user)

        logger.info("User registered: %s", user.id)
        return to_public(user)

    async def login(self, store: DocumentStore, payload: LoginRequest) -> PublicUser:
        """
        Find the user whose email and password both match exactly.

        Raises:
            ValidationError: no such user ("Invalid credentials")
        """
        doc = await store.snapshot()
        user = next(
            (
                u for u in doc.users
                if u.email == payload.email and u.password == payload.password
            ),
            None,
        )
        if user is None:
            raise ValidationError(message="Invalid credentials")

        logger.info("User logged in: %s", user.id)
        return to_public(user)


auth_service = AuthService()
