from typing import Callable
import logging
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from sqlalchemy.orm import Session
from app.core.config import settings
from app.core.permissions import PagePermission, has_page_access
from app.core.security import get_token_payload
from app.db.session import get_db
from app.models.user import User as UserModel
from app.schemas.auth import TokenPayload

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_V1_STR}/auth/login")

def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db)
) -> UserModel:
    """Resolve the bearer token to an active user"""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        token_data = TokenPayload(**get_token_payload(token))
    except JWTError:
        raise credentials_exception
    if not token_data.sub or not token_data.sub.isdigit():
        raise credentials_exception

    user = db.query(UserModel).filter(UserModel.id == int(token_data.sub)).first()
    if not user:
        raise credentials_exception
    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Inactive user")
    return user

def require_page_access(permission: PagePermission) -> Callable[..., UserModel]:
    """
    Dependency factory guarding a route with a page permission
    """
    def checker(current_user: UserModel = Depends(get_current_user)) -> UserModel:
        if not has_page_access(current_user.role, permission):
            logger.info(
                f"User {current_user.id} ({current_user.role.value}) denied {permission.value}"
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Not enough permissions"
            )
        return current_user
    return checker
