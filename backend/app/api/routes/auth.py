"""
Authentication routes for signup, login, and logout.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from app.db.session import get_db, store_call
from app.schemas.user import UserCreate, UserLogin, Token, UserResponse
from app.models.user import User
from app.models.profile import Profile
from app.core.security import verify_password, get_password_hash, create_access_token, get_token_owner

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def signup(user_data: UserCreate, db: Session = Depends(get_db)):
    """Register a new user and create their empty profile."""
    with store_call(db, "sign up"):
        existing_user = db.query(User).filter(User.username == user_data.username).first()
        if existing_user:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Username already exists"
            )

        existing_email = db.query(User).filter(User.email == user_data.email).first()
        if existing_email:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Email already exists"
            )

        new_user = User(
            username=user_data.username,
            email=user_data.email,
            hashed_password=get_password_hash(user_data.password)
        )
        db.add(new_user)
        db.flush()

        # Every owner has exactly one profile
        db.add(Profile(owner_id=new_user.id, display_name=user_data.display_name or user_data.username))
        db.commit()
        db.refresh(new_user)

    logger.info(f"Registered user {new_user.id}")
    return new_user


@router.post("/login", response_model=Token)
async def login(credentials: UserLogin, db: Session = Depends(get_db)):
    """Login and get JWT token."""
    with store_call(db, "log in"):
        user = db.query(User).filter(User.username == credentials.username).first()

    if not user or not verify_password(credentials.password, user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password"
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is inactive"
        )

    access_token = create_access_token(user.id, user.username)

    return {"access_token": access_token, "token_type": "bearer"}


@router.post("/logout")
async def logout(token: str):
    """Logout (client-side token removal); only checks the token is valid."""
    owner_id = get_token_owner(token)
    if not owner_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token"
        )
    return {"message": "Logged out successfully"}
