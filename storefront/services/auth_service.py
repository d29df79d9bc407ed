# storefront/services/auth_service.py
from dataclasses import dataclass, field, replace
from typing import FrozenSet, Optional

from sqlalchemy.orm import Session

from storefront.config import config
from storefront.exceptions import (
    AuthError, AuthorizationError, ValidationError, DatabaseError, NotFoundError
)
from storefront.logging_setup import get_logger
from storefront.models import User, UserRole
from storefront.services.store_service import StoreService
from storefront.utils.validation import validate_coordinate, validate_text

log = get_logger('auth')

@dataclass(frozen=True)
class UserSession:
    """Identity of the logged-in user, passed into every operation.

    Lives from a successful login until logout; nothing about it is kept
    in module state.
    """
    user_id: int
    name: str
    role: UserRole
    nearby_store_ids: FrozenSet[int] = field(default_factory=frozenset)

    @property
    def is_manager(self) -> bool:
        return self.role is UserRole.MANAGER

    def with_nearby_stores(self, store_ids) -> 'UserSession':
        return replace(self, nearby_store_ids=frozenset(store_ids))

class AuthService:
    """Service for registration, login and role checks."""

    def __init__(self, session: Session):
        """Initialize the auth service.

        Args:
            session: Database session
        """
        self.session = session
        self.store_service = StoreService(session)

    def register(self, name: str, password: str, latitude: float, longitude: float) -> int:
        """Register a new customer.

        Args:
            name: User name
            password: Password
            latitude: Latitude in the configured coordinate range
            longitude: Longitude in the configured coordinate range

        Returns:
            ID of the created user

        Raises:
            ValidationError: If a field is invalid or the name is taken
        """
        rules = config.store_rules
        name = validate_text(name, 'name', max_length=50)
        password = validate_text(password, 'password', max_length=11)
        latitude = validate_coordinate(latitude, 'latitude', rules['min_coordinate'], rules['max_coordinate'])
        longitude = validate_coordinate(longitude, 'longitude', rules['min_coordinate'], rules['max_coordinate'])

        existing = self.session.query(User.id).filter(User.name == name).first()
        if existing is not None:
            raise ValidationError(f"A user named '{name}' already exists")

        user = User(
            name=name,
            password=password,
            latitude=latitude,
            longitude=longitude,
            type=UserRole.CUSTOMER.value
        )
        self.session.add(user)

        try:
            self.session.commit()
        except Exception as e:
            self.session.rollback()
            raise DatabaseError(f"Failed to create user: {str(e)}")

        log.info(f"Registered customer {user.id}")
        return user.id

    def login(self, name: str, password: str) -> UserSession:
        """Authenticate a user and compute their nearby stores.

        Args:
            name: User name
            password: Password

        Returns:
            New UserSession

        Raises:
            AuthError: Unless exactly one user matches both fields
        """
        users = self.session.query(User).filter(
            User.name == (name or '').strip(),
            User.password == (password or '').strip()
        ).limit(2).all()

        if len(users) != 1:
            log.warning("Login failed")
            raise AuthError()

        user = users[0]
        try:
            role = user.role
        except ValueError as e:
            raise AuthError(str(e))

        user_session = UserSession(user_id=user.id, name=user.name.strip(), role=role)
        try:
            user_session = self.refresh_nearby_stores(user_session)
        except NotFoundError as e:
            # Without a location the user can still log in, just with no nearby stores
            log.warning(f"No nearby stores for user {user.id}: {str(e)}")

        log.info(f"User {user.id} logged in as {role}")
        return user_session

    def refresh_nearby_stores(self, user_session: UserSession) -> UserSession:
        """Recompute the session's nearby store set."""
        nearby = self.store_service.compute_nearby_stores(user_session.user_id)
        return user_session.with_nearby_stores(nearby)

    @staticmethod
    def is_manager(user_session: UserSession) -> Optional[int]:
        """Get the manager ID for a session.

        Args:
            user_session: Current user session

        Returns:
            The manager's own user ID, or None when the user is not a manager
        """
        if user_session is not None and user_session.is_manager:
            return user_session.user_id
        return None

    @classmethod
    def require_manager(cls, user_session: UserSession, action: str = "perform this operation") -> int:
        """Get the manager ID or refuse the operation.

        Raises:
            AuthorizationError: If the session is not a manager's
        """
        manager_id = cls.is_manager(user_session)
        if manager_id is None:
            user_id = user_session.user_id if user_session is not None else None
            log.warning(f"User {user_id} refused: {action}")
            raise AuthorizationError(f"You are not authorized to {action}.")
        return manager_id
