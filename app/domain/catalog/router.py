"""Category router - Public catalog and admin management"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from .schemas import CategoryCreate, CategoryResponse, CategoryUpdate
from .service import CategoryService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/categories", tags=["Categories"])


def get_category_service(db: Session = Depends(get_db)) -> CategoryService:
    """Dependency injection for CategoryService"""
    return CategoryService(db)


@router.get("", response_model=list[CategoryResponse])
async def get_categories(service: CategoryService = Depends(get_category_service)):
    """All scrap categories (public)"""
    return [CategoryResponse.from_category(c) for c in service.list_categories()]


@router.post("", response_model=CategoryResponse, status_code=201)
async def create_category(
    data: CategoryCreate,
    current_user: User = Depends(get_current_user),
    service: CategoryService = Depends(get_category_service),
):
    return CategoryResponse.from_category(service.create_category(data, current_user))


@router.patch("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: int,
    data: CategoryUpdate,
    current_user: User = Depends(get_current_user),
    service: CategoryService = Depends(get_category_service),
):
    return CategoryResponse.from_category(service.update_category(category_id, data, current_user))


@router.delete("/{category_id}")
async def delete_category(
    category_id: int,
    current_user: User = Depends(get_current_user),
    service: CategoryService = Depends(get_category_service),
):
    """Delete an unused category (admin only)"""
    return service.delete_category(category_id, current_user)
