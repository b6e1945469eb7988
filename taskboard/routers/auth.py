from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from taskboard.core.auth import CurrentUser, get_current_user
from taskboard.core.database import get_db
from taskboard.core.security import issue_token
from taskboard.models.user import User
from taskboard.schemas.user import RegisterRequest, LoginRequest, UserResponse, AuthResponse
from taskboard.services import auth_service

router = APIRouter(prefix="/auth", tags=["auth"])


def _with_token(user: User, token: str) -> AuthResponse:
    return AuthResponse(**UserResponse.model_validate(user).model_dump(), token=token)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(user_data: RegisterRequest, db: Session = Depends(get_db)):
    """Créer un compte et renvoyer directement un token"""
    user = auth_service.register(db, user_data.name, user_data.email, user_data.password)
    return _with_token(user, issue_token(user.id))


@router.post("/login", response_model=AuthResponse)
def login(credentials: LoginRequest, db: Session = Depends(get_db)):
    """Se connecter et recevoir un token"""
    user, token = auth_service.login(db, credentials.email, credentials.password)
    return _with_token(user, token)


@router.get("/profile", response_model=UserResponse)
def profile(current_user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    """Profil de l'utilisateur connecté"""
    return auth_service.get_profile(db, current_user.user_id)
