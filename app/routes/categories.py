from fastapi import APIRouter, Depends, status
from typing import List

from app.schemas.category import CategoryCreate, CategoryUpdate, CategoryResponse, CategoryStats
from app.services.category_service import CategoryService
from app.utils.dependencies import get_category_service

router = APIRouter(prefix="/api/categories", tags=["Categories"])


@router.post("/", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
def create_category(
    category_data: CategoryCreate,
    service: CategoryService = Depends(get_category_service)
):
    """
    Create a new category

    - **name**: Unique name, 2-100 characters (case-insensitive uniqueness)
    - **description**: Optional, up to 500 characters
    """
    category = service.create(category_data.name, category_data.description)
    return CategoryResponse.model_validate(category)


@router.get("/", response_model=List[CategoryResponse])
def get_categories(service: CategoryService = Depends(get_category_service)):
    """Get all active categories ordered by name"""
    return [CategoryResponse.model_validate(category) for category in service.find_all()]


@router.get("/stats", response_model=CategoryStats)
def get_category_stats(service: CategoryService = Depends(get_category_service)):
    """Number of active categories"""
    return service.get_stats()


@router.get("/{category_id}", response_model=CategoryResponse)
def get_category(
    category_id: int,
    service: CategoryService = Depends(get_category_service)
):
    """Get a specific category"""
    return CategoryResponse.model_validate(service.find_one(category_id))


@router.put("/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: int,
    update_data: CategoryUpdate,
    service: CategoryService = Depends(get_category_service)
):
    """
    Update a category

    Renaming to a name used by another category returns 409.
    """
    category = service.update(category_id, update_data.model_dump(exclude_unset=True))
    return CategoryResponse.model_validate(category)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(
    category_id: int,
    service: CategoryService = Depends(get_category_service)
):
    """Deactivate a category (its movies are left untouched)"""
    service.remove(category_id)
    return None
