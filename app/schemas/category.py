from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime
from typing import Optional

from app.schemas.validation import SafeStringMixin


class CategoryCreate(BaseModel, SafeStringMixin):
    """Schema for creating a category"""
    name: str = Field(..., min_length=2, max_length=100, description="Unique category name", examples=["Drama"])
    description: Optional[str] = Field(None, max_length=500, description="Category description")

    @field_validator('name')
    @classmethod
    def clean_name(cls, v):
        return cls.validate_no_script(v)

    @field_validator('description')
    @classmethod
    def clean_description(cls, v):
        if v is None:
            return v
        return cls.sanitize_html(cls.validate_no_script(v))


class CategoryUpdate(CategoryCreate):
    """Schema for updating a category (all fields optional)"""
    name: Optional[str] = Field(None, min_length=2, max_length=100, description="New category name")


class CategoryResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class CategoryStats(BaseModel):
    total: int = Field(..., description="Number of active categories")
