"""Category service - Scrap categories and their indicative rate bands"""

import logging
from decimal import Decimal
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...models import Category, User
from ...permissions import authorize
from ...shared.validators import to_money
from .repository import CategoryRepository
from .schemas import CategoryCreate, CategoryUpdate

logger = logging.getLogger(__name__)

# name, unit, min rate, max rate, icon
STANDARD_CATEGORIES = [
    ("Old AC", "unit", "800", "1500", "AirVent"),
    ("Refrigerator", "unit", "1200", "2000", "Refrigerator"),
    ("Washing Machine", "unit", "600", "1200", "WashingMachine"),
    ("Iron", "unit", "100", "300", "CircuitBoard"),
    ("Copper", "kg", "400", "500", "CircuitBoard"),
    ("Plastic", "kg", "10", "20", "Trash2"),
    ("Paper", "kg", "8", "15", "FileText"),
    ("Books", "kg", "12", "18", "BookOpen"),
    ("Clothes", "kg", "5", "10", "Shirt"),
]


def seed_categories(db: Session) -> int:
    """Insert the standard categories when the table is empty; returns how many were added"""
    if CategoryRepository.count_categories(db) > 0:
        return 0

    for name, unit, min_rate, max_rate, icon in STANDARD_CATEGORIES:
        db.add(
            Category(
                name=name,
                unit=unit,
                min_rate=Decimal(min_rate),
                max_rate=Decimal(max_rate),
                icon=icon,
            )
        )
    db.commit()

    logger.info(f"🌱 Seeded {len(STANDARD_CATEGORIES)} scrap categories")
    return len(STANDARD_CATEGORIES)


class CategoryService:
    """Service layer for category business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = CategoryRepository()

    def list_categories(self) -> list[Category]:
        return self.repo.get_categories(self.db)

    def _get(self, category_id: int) -> Category:
        category = self.repo.get_category_by_id(self.db, category_id)
        if not category:
            raise HTTPException(status_code=404, detail="Category not found")
        return category

    def _ensure_name_free(self, name: str, category_id: Optional[int] = None) -> None:
        existing = self.repo.get_category_by_name(self.db, name)
        if existing and existing.id != category_id:
            raise HTTPException(status_code=409, detail=f"Category '{name}' already exists")

    def create_category(self, data: CategoryCreate, user: User) -> Category:
        authorize(user, "category.manage")
        self._ensure_name_free(data.name)

        try:
            category = self.repo.create_category(
                self.db,
                name=data.name,
                unit=data.unit,
                min_rate=to_money(data.minRate),
                max_rate=to_money(data.maxRate),
                icon=data.icon,
            )
        except IntegrityError as e:
            self.db.rollback()
            raise HTTPException(status_code=409, detail=f"Category '{data.name}' already exists") from e

        logger.info(f"📂 Category {category.name} created by admin {user.id}")
        return category

    def update_category(self, category_id: int, data: CategoryUpdate, user: User) -> Category:
        authorize(user, "category.manage")
        category = self._get(category_id)

        if data.name is not None:
            self._ensure_name_free(data.name, category.id)

        min_rate = data.minRate if data.minRate is not None else category.min_rate
        max_rate = data.maxRate if data.maxRate is not None else category.max_rate
        if to_money(min_rate) > to_money(max_rate):
            raise HTTPException(status_code=400, detail="minRate cannot exceed maxRate")

        try:
            category = self.repo.update_category(
                self.db,
                category,
                name=data.name,
                unit=data.unit,
                min_rate=to_money(data.minRate) if data.minRate is not None else None,
                max_rate=to_money(data.maxRate) if data.maxRate is not None else None,
                icon=data.icon,
            )
        except IntegrityError as e:
            self.db.rollback()
            raise HTTPException(status_code=409, detail=f"Category '{data.name}' already exists") from e

        logger.info(f"✏️ Category {category.id} updated by admin {user.id}")
        return category

    def delete_category(self, category_id: int, user: User) -> dict:
        """Delete a category no booking item refers to"""
        authorize(user, "category.manage")
        category = self._get(category_id)

        if self.repo.is_category_in_use(self.db, category.id):
            raise HTTPException(
                status_code=409, detail="Category is used by existing bookings and cannot be deleted"
            )

        name = category.name
        self.repo.delete_category(self.db, category)
        logger.info(f"🗑️ Category {name} deleted by admin {user.id}")
        return {"message": "Category deleted"}
