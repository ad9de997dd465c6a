from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from src.database import get_db
from src.auth.schemas import UserCreate, User, RegisterResponse, LoginRequest, Token
from src.auth.service import UserService
from src.auth.utils import create_access_token
from src.auth.dependencies import get_current_user

router = APIRouter()

@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register_user(user: UserCreate, db: Session = Depends(get_db)):
    """Register a new user"""
    try:
        db_user = UserService.create_user(db=db, user=user)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    return RegisterResponse(message="User registered", user=db_user)

@router.post("/login", response_model=Token)
def login_user(login_data: LoginRequest, db: Session = Depends(get_db)):
    """Exchange email and password for a bearer token"""
    try:
        user = UserService.authenticate_user(db, login_data.email, login_data.password)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )

    access_token = create_access_token(data={"sub": user.id, "is_admin": user.is_admin})
    return Token(token=access_token)

@router.get("/me", response_model=User)
def read_users_me(current_user=Depends(get_current_user)):
    """Get current user profile"""
    return current_user

@router.get("/all", response_model=List[User])
def get_all_users(db: Session = Depends(get_db)):
    return UserService.get_users(db)

@router.delete("/{user_id}")
def delete_user(user_id: str, db: Session = Depends(get_db)):
    if not UserService.delete_user(db, user_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    return {"message": "User deleted successfully"}
