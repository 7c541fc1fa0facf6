from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session
import structlog

from bustrips.auth.dependencies import get_current_user_id
from bustrips.auth.schemas import AuthResponse, LoginRequest, User, UserCreate
from bustrips.auth.service import AuthenticationError, UserService
from bustrips.database import get_db

logger = structlog.get_logger(__name__)

router = APIRouter()

@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register_user(user: UserCreate, request: Request, db: Session = Depends(get_db)):
    """Register a new user and return a token"""
    try:
        db_user = UserService.create_user(db=db, user=user)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except Exception as e:
        logger.exception("request_failed", action="register_user")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )
    
    token = UserService.issue_token(db_user, request.app.state.settings)
    return AuthResponse(user=User.model_validate(db_user), token=token)

@router.post("/login", response_model=AuthResponse)
def login(login_data: LoginRequest, request: Request, db: Session = Depends(get_db)):
    """Log in with email and password"""
    try:
        user = UserService.authenticate_user(db, login_data.email, login_data.password)
    except AuthenticationError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )
    
    token = UserService.issue_token(user, request.app.state.settings)
    return AuthResponse(user=User.model_validate(user), token=token)

@router.get("/validate", response_model=User)
def validate_token(user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    """Return the user behind a bearer token"""
    user = UserService.get_user_by_id(db, user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    return user
