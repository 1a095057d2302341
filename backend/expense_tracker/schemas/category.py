from datetime import datetime
from pydantic import BaseModel


class CategoryBase(BaseModel):
    """Base category fields."""
    name: str
    color: str


class CategoryCreate(CategoryBase):
    """Fields for creating a category."""
    pass


class CategoryUpdate(BaseModel):
    """Fields for updating a category (all optional)."""
    name: str | None = None
    color: str | None = None


class CategoryResponse(CategoryBase):
    """Category response with all fields."""
    id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
