import logging
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from src.models import User
from src.auth.schemas import UserCreate
from src.auth.utils import get_password_hash, verify_password
from typing import List, Optional

logger = logging.getLogger(__name__)

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
    def get_users(db: Session) -> List[User]:
        return db.query(User).order_by(User.name).all()

    @staticmethod
    def create_user(db: Session, user: UserCreate) -> User:
        """Create a new user with a hashed password"""
        db_user = User(
            name=user.name,
            email=user.email,
            phone=user.phone,
            password=get_password_hash(user.password)
        )

        try:
            db.add(db_user)
            db.commit()
            db.refresh(db_user)
        except IntegrityError:
            db.rollback()
            raise ValueError("Email or phone already registered")

        logger.info("Registered user %s", db_user.id)
        return db_user

    @staticmethod
    def authenticate_user(db: Session, email: str, password: str) -> User:
        """Return the user for valid credentials, raise ValueError otherwise"""
        user = UserService.get_user_by_email(db, email)
        if not user:
            raise ValueError("User not found")
        if not verify_password(password, user.password):
            raise ValueError("Invalid credentials")
        return user

    @staticmethod
    def delete_user(db: Session, user_id: str) -> bool:
        user = UserService.get_user_by_id(db, user_id)
        if not user:
            return False
        db.delete(user)
        db.commit()
        logger.info("Deleted user %s", user_id)
        return True
