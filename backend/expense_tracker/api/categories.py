from fastapi import APIRouter, Depends, HTTPException

from ..schemas import CategoryCreate, CategoryUpdate, CategoryResponse
from ..services import CategoryService
from .deps import get_category_service

router = APIRouter()


def _get_or_404(service: CategoryService, category_id: int):
    category = service.get_category(category_id)
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return category


@router.get("/", response_model=list[CategoryResponse])
def list_categories(service: CategoryService = Depends(get_category_service)):
    """Get all categories, by name."""
    return service.list_categories()


@router.get("/{category_id}", response_model=CategoryResponse)
def get_category(category_id: int, service: CategoryService = Depends(get_category_service)):
    """Get a single category by ID."""
    return _get_or_404(service, category_id)


@router.post("/", response_model=CategoryResponse, status_code=201)
def create_category(
    category: CategoryCreate,
    service: CategoryService = Depends(get_category_service),
):
    """Create a new category."""
    return service.create_category(name=category.name, color=category.color)


@router.patch("/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: int,
    category: CategoryUpdate,
    service: CategoryService = Depends(get_category_service),
):
    """Update a category's name and/or color."""
    db_category = _get_or_404(service, category_id)
    return service.update_category(db_category, **category.model_dump(exclude_unset=True))


@router.delete("/{category_id}", status_code=204)
def delete_category(category_id: int, service: CategoryService = Depends(get_category_service)):
    """
    Delete a category.

    Expenses and budgets that reference it are kept; expenses then report
    under "Unknown".
    """
    service.delete_category(_get_or_404(service, category_id))
    return None
