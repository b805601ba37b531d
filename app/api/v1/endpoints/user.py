from typing import List
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from app.api import deps
from app.core.permissions import PagePermission
from app.core.security import get_password_hash
from app.db.session import get_db
from app.models.user import User as UserModel
from app.schemas.user import User, UserCreate, UserUpdate

logger = logging.getLogger(__name__)

router = APIRouter()

# Standard error messages
USER_NOT_FOUND = "User not found"
EMAIL_IN_USE = "Email already registered"

require_users_page = deps.require_page_access(PagePermission.USERS)

@router.get("/", response_model=List[User])
def get_users(
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(require_users_page),
    skip: int = 0,
    limit: int = 100
):
    """Get all users (admin only)"""
    return db.query(UserModel).order_by(UserModel.id).offset(skip).limit(limit).all()

@router.post("/", response_model=User, status_code=status.HTTP_201_CREATED)
def create_user(
    user: UserCreate,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(require_users_page)
):
    """Create a user with a role (admin only)"""
    db_user = db.query(UserModel).filter(UserModel.email == user.email).first()
    if db_user:
        raise HTTPException(status_code=400, detail=EMAIL_IN_USE)

    db_user = UserModel(
        **user.model_dump(exclude={'password'}),
        hashed_password=get_password_hash(user.password)
    )
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    logger.info(f"User {db_user.id} created with role {db_user.role.value}")
    return db_user

@router.patch("/{user_id}", response_model=User)
def update_user(
    user_id: int,
    user: UserUpdate,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(require_users_page)
):
    """Update user details, role or active flag (admin only)"""
    db_user = db.query(UserModel).filter(UserModel.id == user_id).first()
    if not db_user:
        raise HTTPException(status_code=404, detail=USER_NOT_FOUND)

    for key, value in user.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(db_user, key, value)

    db.commit()
    db.refresh(db_user)
    return db_user
