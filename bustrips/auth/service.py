import uuid
from datetime import timedelta
from typing import Optional

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bustrips.auth.schemas import UserCreate
from bustrips.auth.utils import create_access_token, get_password_hash, verify_password
from bustrips.config import Settings
from bustrips.models import User

logger = structlog.get_logger(__name__)

class AuthenticationError(Exception):
    """Login failed; the message says whether the email or the password was wrong"""

class UserService:
    @staticmethod
    def get_user_by_email(db: Session, email: str) -> Optional[User]:
        """Get user by email"""
        return db.query(User).filter(User.email == email).first()
    
    @staticmethod
    def get_user_by_id(db: Session, user_id: str) -> Optional[User]:
        """Get user by ID"""
        return db.query(User).filter(User.id == user_id).first()
    
    @staticmethod
    def create_user(db: Session, user: UserCreate) -> User:
        """Create a new user with a hashed password"""
        if UserService.get_user_by_email(db, user.email):
            raise ValueError("User already exists")
        
        db_user = User(
            id=str(uuid.uuid4()),
            name=user.name,
            email=user.email,
            password=get_password_hash(user.password)
        )
        
        try:
            db.add(db_user)
            db.commit()
            db.refresh(db_user)
        except IntegrityError:
            # lost a race with a concurrent registration
            db.rollback()
            raise ValueError("User already exists")
        
        logger.info("user_registered", user_id=db_user.id)
        return db_user
    
    @staticmethod
    def authenticate_user(db: Session, email: str, password: str) -> User:
        """Check credentials and return the user"""
        user = UserService.get_user_by_email(db, email)
        if not user:
            raise AuthenticationError("User not found")
        if not verify_password(password, user.password):
            raise AuthenticationError("Invalid password")
        return user
    
    @staticmethod
    def issue_token(user: User, settings: Settings) -> str:
        return create_access_token(
            data={"id": user.id},
            secret_key=settings.SECRET_KEY,
            algorithm=settings.ALGORITHM,
            expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
        )
