from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session
from store_api.models.database import User


class UserRepository:
    def __init__(self, db: Session):
        self.db = db

    def list_all(self) -> List[User]:
        return self.db.query(User).order_by(User.id).all()

    def get(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(func.lower(User.email) == email.strip().lower()).first()

    def exists(self, user_id: int) -> bool:
        return self.db.query(User.id).filter(User.id == user_id).first() is not None

    def add(self, user: User) -> User:
        self.db.add(user)
        self.db.flush()
        return user

    def delete(self, user: User) -> None:
        self.db.delete(user)
        self.db.flush()
