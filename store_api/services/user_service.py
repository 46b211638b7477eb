from typing import List, Optional
from sqlalchemy.orm import Session
from werkzeug.security import check_password_hash, generate_password_hash
from store_api.core.database import unit_of_work
from store_api.core.exceptions import StoreValidationError
from store_api.core.patch import patch_fields
from store_api.models.database import User
from store_api.models.schemas import UserCreate, UserResponse, UserUpdate
from store_api.repositories.user_repository import UserRepository
import logging

logger = logging.getLogger(__name__)


class UserService:
    """User accounts and password verification.

    Passwords are stored as salted werkzeug hashes and never leave this
    service; responses carry UserResponse only.
    """

    def __init__(self, db: Session):
        self.db = db
        self.users = UserRepository(db)

    async def get_all_users(self) -> List[UserResponse]:
        return [UserResponse.model_validate(user) for user in self.users.list_all()]

    async def get_user(self, user_id: int) -> Optional[UserResponse]:
        user = self.users.get(user_id)
        return UserResponse.model_validate(user) if user else None

    def _require_unique_email(self, email: str, user_id: Optional[int] = None) -> None:
        existing = self.users.get_by_email(email)
        if existing is not None and existing.id != user_id:
            raise StoreValidationError(f"A user with email {email} already exists.")

    async def create_user(self, user_data: UserCreate) -> UserResponse:
        self._require_unique_email(user_data.email)

        fields = user_data.model_dump(exclude={"password"})
        with unit_of_work(self.db):
            user = self.users.add(User(**fields, password_hash=generate_password_hash(user_data.password)))

        logger.info(f"User created with ID: {user.id}")
        return UserResponse.model_validate(user)

    async def update_user(self, user_id: int, user_update: UserUpdate) -> Optional[UserResponse]:
        user = self.users.get(user_id)
        if user is None:
            return None

        changes = patch_fields(user_update)
        if "email" in changes:
            self._require_unique_email(changes["email"], user_id)

        with unit_of_work(self.db):
            for field, value in changes.items():
                setattr(user, field, value)

        return UserResponse.model_validate(user)

    async def delete_user(self, user_id: int) -> bool:
        """Delete a user together with their orders"""
        user = self.users.get(user_id)
        if user is None:
            return False

        with unit_of_work(self.db):
            self.users.delete(user)

        logger.info(f"User {user_id} deleted")
        return True

    async def authenticate(self, email: str, password: str) -> Optional[UserResponse]:
        """Return the user whose password matches, or None"""
        user = self.users.get_by_email(email)
        if user is None or not check_password_hash(user.password_hash, password):
            logger.info(f"Failed login attempt for {email}")
            return None
        return UserResponse.model_validate(user)
