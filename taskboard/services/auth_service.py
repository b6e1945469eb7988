"""Credential store: registration, login and profile lookup"""

import logging
from typing import Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from taskboard.core.errors import DuplicateEmail, InvalidCredentials, NotFound, ValidationError
from taskboard.core.security import check_password, issue_token
from taskboard.models.user import User

logger = logging.getLogger(__name__)


def register(db: Session, name: str, email: str, password: str) -> User:
    name = (name or "").strip()
    email = User.normalize_email(email or "")
    if not name or not email or not password:
        raise ValidationError("name, email and password are required")

    if db.query(User.id).filter(User.email == email).first() is not None:
        raise DuplicateEmail()

    user = User(name=name, email=email)
    user.set_password(password)
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # inscription concurrente avec le même email
        db.rollback()
        raise DuplicateEmail()
    db.refresh(user)

    logger.info(f"Registered user {user.id}")
    return user


def login(db: Session, email: str, password: str) -> Tuple[User, str]:
    user = db.query(User).filter(User.email == User.normalize_email(email or "")).first()

    # check_password tourne aussi quand l'email est inconnu
    if not check_password(password or "", user.password_hash if user else None):
        logger.warning("Failed login attempt")
        raise InvalidCredentials()

    return user, issue_token(user.id)


def get_profile(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise NotFound("User not found")
    return user
