from typing import Optional
from pydantic import BaseModel, EmailStr, constr
from app.core.permissions import Role

class UserBase(BaseModel):
    email: EmailStr
    name: str
    phone: Optional[str] = None
    is_active: Optional[bool] = True

class UserCreate(UserBase):
    password: constr(min_length=8)
    role: Role = Role.CUSTOMER

class UserUpdate(BaseModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    is_active: Optional[bool] = None
    role: Optional[Role] = None

class User(UserBase):
    id: int
    role: Role

    model_config = {
        "from_attributes": True
    }
