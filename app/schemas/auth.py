from typing import List, Optional
from pydantic import BaseModel
from app.core.permissions import MenuItem, PagePermission, Role

class Token(BaseModel):
    access_token: str
    token_type: str

class TokenPayload(BaseModel):
    sub: Optional[str] = None

class Navigation(BaseModel):
    role: Role
    role_label: str
    role_color: str
    items: List[MenuItem]

class PageAccess(BaseModel):
    permission: PagePermission
    allowed: bool
