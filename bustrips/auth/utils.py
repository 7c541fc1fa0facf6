from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)

def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)

def create_access_token(data: dict, secret_key: str, algorithm: str = "HS256",
                        expires_delta: Optional[timedelta] = None) -> str:
    """Sign ``data`` into a JWT with an ``exp`` claim"""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(days=1))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, secret_key, algorithm=algorithm)

def decode_access_token(token: str, secret_key: str, algorithm: str = "HS256") -> dict:
    """Decode and verify a JWT; raises ``jwt.PyJWTError`` when invalid or expired"""
    return jwt.decode(token, secret_key, algorithms=[algorithm])
