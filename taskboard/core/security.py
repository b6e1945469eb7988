from datetime import datetime, timedelta, timezone
from typing import Optional
import logging

import bcrypt
from jose import ExpiredSignatureError, JWTError, jwt

from taskboard.core.config import settings
from taskboard.core.errors import TokenExpired, TokenInvalid, ValidationError

logger = logging.getLogger(__name__)

# limite d'entrée de bcrypt
MAX_PASSWORD_BYTES = 72

# hash factice pour que la vérif d'un email inconnu coûte autant qu'un vrai
_DUMMY_HASH = bcrypt.hashpw(
    b"taskboard-dummy-password", bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
).decode()


def hash_password(password: str) -> str:
    raw = password.encode()
    if len(raw) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return bcrypt.hashpw(raw, bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)).decode()


def check_password(password: str, password_hash: Optional[str]) -> bool:
    """Compare a plain password to a stored bcrypt hash.

    With ``password_hash=None`` the comparison still runs against a dummy hash
    and always returns False.
    """
    raw = password.encode()
    if len(raw) > MAX_PASSWORD_BYTES:
        raw = raw[:MAX_PASSWORD_BYTES]
    matched = bcrypt.checkpw(raw, (password_hash or _DUMMY_HASH).encode())
    return matched and password_hash is not None


def issue_token(user_id: int, expires_delta: Optional[timedelta] = None) -> str:
    #crée un token d'accès JWT (30 jours par défaut)
    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.JWT_EXPIRE_MIN)
    payload = {
        "sub": str(user_id),
        "iat": now,
        "exp": now + expires_delta,
        "type": "access",
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def verify_token(token: str) -> int:
    """Return the user id a token was issued for.

    Raises TokenExpired once ``exp`` has passed and TokenInvalid for any
    signature, structure or claim problem.
    """
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except ExpiredSignatureError:
        logger.debug("Rejected expired token")
        raise TokenExpired()
    except JWTError as e:
        logger.debug(f"Rejected token: {e}")
        raise TokenInvalid()

    if payload.get("type") != "access" or "exp" not in payload:
        raise TokenInvalid()

    subject = payload.get("sub")
    try:
        return int(subject)
    except (TypeError, ValueError):
        raise TokenInvalid()
