from pydantic import EmailStr
from typing import Optional
from datetime import datetime
from src.schemas import APIModel

class UserBase(APIModel):
    name: str
    email: EmailStr
    phone: Optional[str] = None

class UserCreate(UserBase):
    password: str

class User(UserBase):
    id: str
    is_admin: bool = False
    created_at: Optional[datetime] = None

class RegisterResponse(APIModel):
    message: str
    user: User

class LoginRequest(APIModel):
    email: EmailStr
    password: str

class Token(APIModel):
    token: str
    token_type: str = "bearer"
