import os
from datetime import timedelta
from typing import Optional

from dotenv import load_dotenv
from fastapi import HTTPException, Request
from jose import JWTError, jwt
from passlib.context import CryptContext

from utils.clock import utcnow

load_dotenv()
SECRET_KEY = os.getenv("JWT_SECRET")
ALGORITHM = "HS256"
ACCESS_TOKEN_TTL_HOURS = int(os.getenv("ACCESS_TOKEN_TTL_HOURS", "12"))
PASSWORD_LINK_TTL_MINUTES = int(os.getenv("PASSWORD_LINK_TTL_MINUTES", "1440"))
APP_BASE_URL = os.getenv("APP_BASE_URL", "http://localhost:3000")

PASSWORD_SET_PURPOSE = "set-password"


def _signing_key() -> str:
    """Tokens are neither issued nor accepted without JWT_SECRET."""
    if not SECRET_KEY:
        raise RuntimeError("JWT_SECRET is not set")
    return SECRET_KEY


# Bcrypt
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, hashed: Optional[str]) -> bool:
    if not hashed:
        return False
    return pwd_context.verify(password, hashed)


def create_access_token(uid: str, email: str) -> str:
    """Signed session token; its payload is the identity {id, email}."""
    payload = {
        "id": uid,
        "email": email,
        "exp": utcnow() + timedelta(hours=ACCESS_TOKEN_TTL_HOURS),
    }
    return jwt.encode(payload, _signing_key(), algorithm=ALGORITHM)


def create_password_set_token(email: str) -> str:
    payload = {
        "email": email,
        "purpose": PASSWORD_SET_PURPOSE,
        "exp": utcnow() + timedelta(minutes=PASSWORD_LINK_TTL_MINUTES),
    }
    return jwt.encode(payload, _signing_key(), algorithm=ALGORITHM)


def decode_password_set_token(token: str) -> Optional[str]:
    """Return the e-mail the token was issued for, or None if it is invalid."""
    try:
        payload = jwt.decode(token, _signing_key(), algorithms=[ALGORITHM])
    except JWTError:
        return None
    if payload.get("purpose") != PASSWORD_SET_PURPOSE:
        return None
    return payload.get("email")


def generate_password_set_link(email: str) -> str:
    """Link a new user follows to choose a password (also used for resets)."""
    return f"{APP_BASE_URL}/set-password?token={create_password_set_token(email)}"


# Token Auth Dependency
def verify_token(request: Request) -> dict:
    auth = request.headers.get("Authorization")
    if not auth or not auth.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Missing token")
    token = auth.split(" ")[1]
    try:
        payload = jwt.decode(token, _signing_key(), algorithms=[ALGORITHM])
    except JWTError:
        raise HTTPException(status_code=403, detail="Invalid token")
    if not payload.get("id") or payload.get("purpose"):
        raise HTTPException(status_code=403, detail="Invalid token")
    return payload
