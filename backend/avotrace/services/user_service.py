"""
Back-office user accounts
"""
import logging
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from avotrace.core.exceptions import ConflictError
from avotrace.models.user import User
from avotrace.schemas.user import UserCreate
from avotrace.utils.security import hash_password, verify_password

logger = logging.getLogger(__name__)


def get_users(db: Session) -> List[User]:
    return db.query(User).order_by(User.id).all()


def get_user_by_username(db: Session, username: str) -> Optional[User]:
    return db.query(User).filter(func.lower(User.username) == username.lower()).first()


def create_user(db: Session, user_in: UserCreate) -> User:
    if get_user_by_username(db, user_in.username):
        raise ConflictError(f"Username {user_in.username} already exists")

    user = User(
        username=user_in.username,
        password_hash=hash_password(user_in.password),
        full_name=user_in.full_name,
        role=user_in.role.value,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info(f"Created user {user.username} ({user.role})")
    return user


def authenticate(db: Session, username: str, password: str) -> Optional[User]:
    user = get_user_by_username(db, username)
    if user and verify_password(password, user.password_hash):
        return user
    logger.info(f"Failed login for {username}")
    return None
