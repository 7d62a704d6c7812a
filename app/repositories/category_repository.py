from typing import List, Optional

from sqlalchemy import func

from app.domain import Category
from app.models.category import Category as CategoryModel
from app.repositories.base import CategoryRepository, SqlAlchemyRepository


class SqlAlchemyCategoryRepository(SqlAlchemyRepository, CategoryRepository):

    def find_all(self) -> List[Category]:
        rows = (
            self.db.query(CategoryModel)
            .filter(CategoryModel.is_active == True)
            .order_by(CategoryModel.name.asc(), CategoryModel.id.asc())
            .all()
        )
        return [self._to_domain(row) for row in rows]

    def find_by_id(self, category_id: int) -> Optional[Category]:
        row = self._get_active(category_id)
        return self._to_domain(row) if row else None

    def find_by_name(self, name: str) -> Optional[Category]:
        row = self.db.query(CategoryModel).filter(
            func.lower(CategoryModel.name) == name.lower()
        ).first()
        return self._to_domain(row) if row else None

    def create(self, category: Category) -> Category:
        row = CategoryModel(
            name=category.name,
            description=category.description,
            is_active=category.is_active,
        )
        self.db.add(row)
        self._commit()
        self.db.refresh(row)
        return self._to_domain(row)

    def update(self, category: Category) -> Optional[Category]:
        row = self._get_active(category.id)
        if not row:
            return None

        row.name = category.name
        row.description = category.description
        self._commit()
        self.db.refresh(row)
        return self._to_domain(row)

    def delete(self, category_id: int) -> bool:
        affected = self.db.query(CategoryModel).filter(
            CategoryModel.id == category_id,
            CategoryModel.is_active == True
        ).update({"is_active": False}, synchronize_session=False)
        self._commit()
        return affected > 0

    def count(self) -> int:
        return self.db.query(func.count(CategoryModel.id)).filter(
            CategoryModel.is_active == True
        ).scalar() or 0

    def _get_active(self, category_id: int) -> Optional[CategoryModel]:
        return self.db.query(CategoryModel).filter(
            CategoryModel.id == category_id,
            CategoryModel.is_active == True
        ).first()

    @staticmethod
    def _to_domain(row: CategoryModel) -> Category:
        return Category(
            id=row.id,
            name=row.name,
            description=row.description,
            is_active=bool(row.is_active),
            created_at=row.created_at,
            updated_at=row.updated_at,
        )
