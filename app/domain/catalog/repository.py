"""Category repository - Database operations for scrap categories"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import BookingItem, Category


class CategoryRepository:
    """Repository for category database operations"""

    @staticmethod
    def get_categories(db: Session) -> list[Category]:
        return db.query(Category).order_by(Category.id).all()

    @staticmethod
    def get_category_by_id(db: Session, category_id: int) -> Optional[Category]:
        return db.query(Category).filter(Category.id == category_id).first()

    @staticmethod
    def get_category_by_name(db: Session, name: str) -> Optional[Category]:
        return db.query(Category).filter(Category.name == name).first()

    @staticmethod
    def count_categories(db: Session) -> int:
        return db.query(Category).count()

    @staticmethod
    def is_category_in_use(db: Session, category_id: int) -> bool:
        """Whether any booking item references the category"""
        return (
            db.query(BookingItem.id).filter(BookingItem.category_id == category_id).first()
            is not None
        )

    @staticmethod
    def create_category(db: Session, **category_data) -> Category:
        """Create a new category"""
        category = Category(**category_data)
        db.add(category)
        db.commit()
        db.refresh(category)
        return category

    @staticmethod
    def update_category(db: Session, category: Category, **updates) -> Category:
        """Update a category with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(category, key):
                setattr(category, key, value)

        db.commit()
        db.refresh(category)
        return category

    @staticmethod
    def delete_category(db: Session, category: Category) -> None:
        db.delete(category)
        db.commit()
