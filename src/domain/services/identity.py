"""Identity service: known users and the current session."""

from __future__ import annotations

import asyncio

import structlog
from src.domain.models import Role, User
from src.domain.reference_data import SEED_USERS
from src.domain.services.identifiers import IdFactory, new_id
from src.infrastructure.repositories.state import SESSION_KEY, USERS_KEY, StateRepository

logger = structlog.get_logger()


class IdentityError(Exception):
    """Base exception for identity errors."""


class InvalidCredentialsError(IdentityError):
    """Raised when no known user matches the login email."""


class DuplicateEmailError(IdentityError):
    """Raised when registering an email that already belongs to a user."""


class IdentityService:
    """Holds the user list and the authenticated user.

    Passwords are accepted by the API surface but never checked or stored.
    """

    def __init__(
        self,
        repository: StateRepository,
        *,
        id_factory: IdFactory = new_id,
        auth_delay_seconds: float = 0.0,
    ) -> None:
        self.repository = repository
        self.id_factory = id_factory
        self.auth_delay_seconds = auth_delay_seconds
        self._users: tuple[User, ...] = ()
        self._current_user: User | None = None
        # Serializes user-list and session writes so the stored order matches memory.
        self._lock = asyncio.Lock()

    @property
    def users(self) -> tuple[User, ...]:
        return self._users

    @property
    def current_user(self) -> User | None:
        return self._current_user

    @property
    def is_authenticated(self) -> bool:
        return self._current_user is not None

    async def load(self) -> None:
        """Restore users and session, seeding demo accounts on first run."""
        stored_users = await self.repository.load(USERS_KEY)
        if stored_users is None:
            async with self._lock:
                await self._save_users(tuple(User.from_dict(item) for item in SEED_USERS))
            logger.info("identity_seeded", users=len(self._users))
        else:
            self._users = tuple(User.from_dict(item) for item in stored_users)

        stored_session = await self.repository.load(SESSION_KEY)
        self._current_user = User.from_dict(stored_session) if stored_session else None
        logger.info(
            "identity_loaded",
            users=len(self._users),
            session_user_id=self._current_user.id if self._current_user else None,
        )

    async def authenticate(self, email: str, password: str) -> User:
        """Match ``email`` against known users and open a session for the match."""
        await logger.ainfo("login_attempt", email=email)
        if self.auth_delay_seconds:
            await asyncio.sleep(self.auth_delay_seconds)

        user = next((u for u in self._users if u.email == email), None)
        if user is None:
            await logger.awarning("login_user_not_found", email=email)
            raise InvalidCredentialsError("Invalid credentials")

        async with self._lock:
            await self.repository.save(SESSION_KEY, user.to_dict())
            self._current_user = user
        await logger.ainfo("login_success", user_id=user.id, role=user.role.value)
        return user

    async def logout(self) -> None:
        async with self._lock:
            user_id = self._current_user.id if self._current_user else None
            await self.repository.delete(SESSION_KEY)
            self._current_user = None
        await logger.ainfo("logout", user_id=user_id)

    async def register_assignee(self, name: str, email: str, password: str = "") -> User:
        """Create a developer account. Emails are unique across all roles."""
        async with self._lock:
            if any(u.email == email for u in self._users):
                await logger.awarning("register_duplicate_email", email=email)
                raise DuplicateEmailError("A user with this email already exists")

            user = User(id=self.id_factory(), name=name, email=email, role=Role.ASSIGNEE)
            await self._save_users((*self._users, user))

        if self.auth_delay_seconds:
            await asyncio.sleep(self.auth_delay_seconds)

        await logger.ainfo("assignee_registered", user_id=user.id, email=email)
        return user

    def list_assignees(self) -> list[User]:
        return [u for u in self._users if u.role is Role.ASSIGNEE]

    def find_assignee(self, user_id: str) -> User | None:
        return next(
            (u for u in self._users if u.id == user_id and u.role is Role.ASSIGNEE),
            None,
        )

    def find_user(self, user_id: str) -> User | None:
        return next((u for u in self._users if u.id == user_id), None)

    async def _save_users(self, users: tuple[User, ...]) -> None:
        """Persist ``users`` and publish them. Callers hold the lock."""
        await self.repository.save(USERS_KEY, [u.to_dict() for u in users])
        self._users = users
