from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

class CategoryBase(BaseModel):
    name: str
    description: Optional[str] = None
    image: Optional[str] = None

class CategoryCreate(CategoryBase):
    name: str = Field(..., min_length=2)
    parent_id: Optional[str] = None

class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2)
    description: Optional[str] = None
    image: Optional[str] = None
    parent_id: Optional[str] = None
    is_active: Optional[bool] = None
    sort_order: Optional[int] = None

class Category(CategoryBase):
    id: str
    slug: str
    parent_id: Optional[str] = None
    level: int = 0
    sort_order: int = 0
    is_active: bool = True

    model_config = ConfigDict(from_attributes=True)

class CategoryNode(Category):
    children: List["CategoryNode"] = []
    product_count: Optional[int] = None

# This is needed for the recursive List["CategoryNode"] reference
CategoryNode.model_rebuild()

class ChildCount(BaseModel):
    category_id: str
    count: int
