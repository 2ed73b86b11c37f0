"""
User administration endpoints
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from avotrace.core.database import get_db
from avotrace.core.exceptions import AuthenticationError
from avotrace.schemas.user import LoginRequest, UserCreate, UserResponse
from avotrace.services import user_service

router = APIRouter()


@router.get("/users", response_model=List[UserResponse])
async def get_users(db: Session = Depends(get_db)):
    """List users; password hashes are never returned"""
    return user_service.get_users(db)


@router.post("/users", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(user: UserCreate, db: Session = Depends(get_db)):
    return user_service.create_user(db, user)


@router.post("/login", response_model=UserResponse)
async def login(credentials: LoginRequest, db: Session = Depends(get_db)):
    """Check a username/password pair and return the matching user"""
    user = user_service.authenticate(db, credentials.username, credentials.password)
    if not user:
        raise AuthenticationError("Invalid username or password")
    return user
