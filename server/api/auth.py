# server/api/auth.py

import logging
from fastapi import APIRouter, Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from core.errors import (
    DuplicateUser,
    InvalidCredentials,
    InvalidOtp,
    InvalidToken,
    MissingToken,
    NotFound,
)
from core.security import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)
from core.totp import generate_otp_secret, verify_totp
from database import get_db
from models.user import User as UserModel
from schemas import LoginRequest, RegisterRequest, RegisterResponse, TokenResponse, UserOut


logger = logging.getLogger(__name__)

router = APIRouter()

# auto_error=False so a missing header and a malformed one map to different errors.
bearer_scheme = HTTPBearer(auto_error=False)


# -------------------------------
# Authenticator
# -------------------------------

def register_user(db: Session, username: str, password: str) -> tuple[UserModel, str]:
    """
    Creates a user with a bcrypt hash and a fresh TOTP secret.
    The raw secret is returned here and never again.
    """
    user_exists = db.query(UserModel).filter(UserModel.username == username).first()
    if user_exists:
        raise DuplicateUser()

    otp_secret = generate_otp_secret()
    new_user = UserModel(
        username=username,
        hashed_password=get_password_hash(password),
        otp_secret=otp_secret,
    )
    db.add(new_user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateUser()
    db.refresh(new_user)

    logger.info("Registered user id=%s", new_user.id)
    return new_user, otp_secret


def authenticate_user(db: Session, username: str, password: str, otp: str | None = None) -> UserModel:
    # Unknown user and wrong password share one error so usernames stay private.
    user = db.query(UserModel).filter(UserModel.username == username).first()
    if not user or not verify_password(password, user.hashed_password):
        logger.info("Login rejected: invalid credentials")
        raise InvalidCredentials()

    if user.otp_secret and not verify_totp(user.otp_secret, otp):
        logger.info("Login rejected: invalid OTP for user id=%s", user.id)
        raise InvalidOtp()

    return user


def login_user(db: Session, username: str, password: str, otp: str | None = None) -> str:
    user = authenticate_user(db, username, password, otp)
    return create_access_token(user.id)


# -------------------------------
# Session Verifier
# -------------------------------

def get_current_user_id(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> int:
    """
    Resolves the bearer token in the Authorization header to a user id.
    """
    if credentials is None:
        if not request.headers.get("Authorization"):
            raise MissingToken()
        raise InvalidToken()

    return decode_access_token(credentials.credentials)


def get_current_user(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> UserModel:
    user = db.get(UserModel, user_id)
    if user is None:
        raise NotFound("User not found")
    return user


# -------------------------------
# Endpoints
# -------------------------------

@router.post("/register", response_model=RegisterResponse)
def register(req: RegisterRequest, db: Session = Depends(get_db)):
    user, otp_secret = register_user(db, req.username, req.password)
    return RegisterResponse(id=user.id, username=user.username, otp_secret=otp_secret)


@router.post("/login", response_model=TokenResponse)
def login(req: LoginRequest, db: Session = Depends(get_db)):
    token = login_user(db, req.username, req.password, req.otp)
    return {"token": token}


@router.get("/me", response_model=UserOut)
def read_users_me(current_user: UserModel = Depends(get_current_user)):
    return UserOut.model_validate(current_user)
