import logging
from typing import List, Optional
from sqlalchemy import or_
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from storyhub.errors import DuplicateKey, NotFound, ValidationFailed
from storyhub.models.schemas import UserCreate, UserUpdate
from storyhub.sa.models import User

logger = logging.getLogger(__name__)


class UserRepository:
    """Repository for managing User entities."""

    def __init__(self, session: Session):
        """Initialize the repository with a database session.

        Args:
            session: SQLAlchemy session for database operations
        """
        self.session = session

    def _check_unique(self, user_id: Optional[int] = None, external_id: Optional[str] = None,
                      username: Optional[str] = None, email: Optional[str] = None) -> None:
        clauses = []
        if external_id is not None:
            clauses.append(User.external_id == external_id)
        if username is not None:
            clauses.append(User.username == username)
        if email is not None:
            clauses.append(User.email == email)
        if not clauses:
            return

        query = self.session.query(User).filter(or_(*clauses))
        if user_id is not None:
            query = query.filter(User.id != user_id)
        clash = query.first()
        if clash is None:
            return

        if external_id is not None and clash.external_id == external_id:
            raise DuplicateKey(f"User with external id '{external_id}' already exists")
        if username is not None and clash.username == username:
            raise DuplicateKey(f"User with username '{username}' already exists")
        raise DuplicateKey(f"User with email '{email}' already exists")

    def create_user(self, data: UserCreate) -> User:
        """Create a new user.

        Args:
            data: Validated user fields. Unset fields take the column defaults.

        Returns:
            The created User object

        Raises:
            DuplicateKey: If the username, email or external id is taken
        """
        self._check_unique(external_id=data.external_id, username=data.username, email=data.email)

        user = User(**data.model_dump(exclude_none=True))
        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            raise DuplicateKey(f"User '{data.username}' conflicts with an existing user") from e
        logger.info("Created user %s (%s)", user.id, user.username)
        return user

    def update_user(self, user_id: int, data: UserUpdate) -> Optional[User]:
        """Update a user's details.

        Args:
            user_id: The ID of the user to update
            data: Fields to change; fields not set are left alone

        Returns:
            The updated User object if found, None otherwise

        Raises:
            ValidationFailed: If a required field would be cleared
            DuplicateKey: If the new username or email is taken
        """
        user = self.get_by_id(user_id)
        if not user:
            return None

        changes = data.model_dump(exclude_unset=True)
        nulled = sorted(f for f, v in changes.items() if v is None and not User.__table__.c[f].nullable)
        if nulled:
            raise ValidationFailed(f"Cannot clear {', '.join(nulled)} on user {user_id}")
        if 'email' in changes and changes['email']:
            changes['email'] = changes['email'].lower()
        self._check_unique(user_id=user_id, username=changes.get('username'), email=changes.get('email'))

        for field, value in changes.items():
            setattr(user, field, value)
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            raise DuplicateKey(f"Update of user {user_id} conflicts with an existing user") from e
        return user

    def delete_user(self, user_id: int) -> bool:
        result = self.session.query(User).filter(User.id == user_id).delete()
        self.session.commit()
        # Rows removed by ON DELETE CASCADE are still in the identity map
        self.session.expire_all()
        return result > 0

    def get_by_id(self, user_id: int) -> Optional[User]:
        """Get a user by their ID.

        Args:
            user_id: The ID of the user

        Returns:
            The User object if found, None otherwise
        """
        return self.session.get(User, user_id)

    def require(self, user_id: int) -> User:
        """Like get_by_id, but a missing user raises NotFound"""
        user = self.get_by_id(user_id)
        if user is None:
            raise NotFound("User", user_id)
        return user

    def get_by_external_id(self, external_id: str) -> Optional[User]:
        return self.session.query(User).filter(User.external_id == external_id).first()

    def get_by_username(self, username: str) -> Optional[User]:
        return self.session.query(User).filter(User.username == username).first()

    def get_by_email(self, email: str) -> Optional[User]:
        return self.session.query(User).filter(User.email == email.lower()).first()

    def search_users(self, query: str, limit: int = 20) -> List[User]:
        """Search users by username or display name"""
        base_query = self.session.query(User)
        if query:
            pattern = f"%{query}%"
            base_query = base_query.filter(or_(User.username.ilike(pattern), User.display_name.ilike(pattern)))
        return base_query.order_by(User.username).limit(limit).all()
