from typing import Optional
from datetime import datetime, timedelta

from fastapi import APIRouter, Depends, HTTPException, Response, Cookie, Header
from sqlalchemy.orm import Session

from foreclosure_hub.core.config import settings
from foreclosure_hub.core.database import get_db
from foreclosure_hub.core.security import (
    get_password_hash, verify_password, create_access_token, decode_access_token, ACCESS_TOKEN_EXPIRE_MINUTES
)
from foreclosure_hub.models.user import User
from foreclosure_hub.schemas.auth import UserCreate, UserLogin, UserResponse, Token

router = APIRouter(prefix="/auth", tags=["Authentication"])


# ---------------------------------------------------------
# REGISTER
# ---------------------------------------------------------
@router.post("/register", response_model=UserResponse)
def register(user_in: UserCreate, db: Session = Depends(get_db)):
    email = user_in.email.lower()

    # 1. Check if email exists
    if db.query(User).filter(User.email == email).first():
        raise HTTPException(status_code=400, detail="Email already registered")

    # 2. Create new user
    new_user = User(
        email=email,
        password_hash=get_password_hash(user_in.password),
        full_name=user_in.full_name,
        role="admin" if email in settings.ADMIN_EMAILS else "user",
    )

    db.add(new_user)
    db.commit()
    db.refresh(new_user)

    return new_user


# ---------------------------------------------------------
# LOGIN
# ---------------------------------------------------------
@router.post("/login", response_model=Token)
def login(response: Response, login_data: UserLogin, db: Session = Depends(get_db)):
    # 1. Check User
    user = db.query(User).filter(User.email == login_data.email.lower()).first()
    if not user or not user.is_active:
        raise HTTPException(status_code=400, detail="Incorrect email or password")

    # 2. Check Password
    if not verify_password(login_data.password, user.password_hash):
        raise HTTPException(status_code=400, detail="Incorrect email or password")

    user.last_login = datetime.utcnow()
    db.commit()

    # 3. Create Token (PyJWT requires a string subject)
    access_token = create_access_token(
        data={"sub": str(user.id), "email": user.email, "role": user.role},
        expires_delta=timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES),
    )

    # 4. Set cookie for the browser front end
    response.set_cookie(
        key="access_token",
        value=f"Bearer {access_token}",
        httponly=True,
        max_age=ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        expires=ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        samesite="lax",
        secure=settings.SITE_URL.startswith("https"),
    )

    return {"access_token": access_token, "token_type": "bearer"}


# ---------------------------------------------------------
# LOGOUT
# ---------------------------------------------------------
@router.post("/logout")
def logout(response: Response):
    response.delete_cookie("access_token")
    return {"message": "Logged out successfully"}


# ---------------------------------------------------------
# CURRENT USER (Dependencies)
# ---------------------------------------------------------
def get_current_user(
    access_token: Optional[str] = Cookie(None),
    authorization: Optional[str] = Header(None),
    db: Session = Depends(get_db),
) -> User:
    """
    Tries to get token from Cookie first, then Authorization header.
    """
    token = None
    if access_token:
        token = access_token.replace("Bearer ", "")
    elif authorization:
        token = authorization.replace("Bearer ", "")

    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")

    claims = decode_access_token(token)
    if not claims or not str(claims.get("sub", "")).isdigit():
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    user = db.query(User).filter(User.id == int(claims["sub"])).first()
    if not user or not user.is_active:
        raise HTTPException(status_code=401, detail="User not found")

    return user


def require_admin(user: User = Depends(get_current_user)) -> User:
    if user.role != "admin":
        raise HTTPException(status_code=403, detail="Admin access required")
    return user


@router.get("/me", response_model=UserResponse)
def me(user: User = Depends(get_current_user)):
    return user
