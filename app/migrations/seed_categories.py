"""
Seed the default movie categories

Safe to run more than once; categories that already exist are skipped:
    python -m app.migrations.seed_categories
"""

from app.database import SessionLocal
from app.errors import ConflictError
from app.repositories import SqlAlchemyCategoryRepository
from app.services.category_service import CategoryService


DEFAULT_CATEGORIES = [
    ("Terror", "Películas de terror y horror"),
    ("Suspenso", "Películas de suspenso y thriller"),
    ("Drama", "Películas dramáticas"),
    ("Comedia", "Películas de comedia y humor"),
]


def seed_categories(db=None):
    """
    Insert the default categories

    Returns:
        (created, skipped) counts
    """
    print("🌱 Seeding categories...")

    owns_session = db is None
    db = db or SessionLocal()
    service = CategoryService(SqlAlchemyCategoryRepository(db))
    created_count = 0
    skipped_count = 0

    try:
        for name, description in DEFAULT_CATEGORIES:
            try:
                service.create(name, description)
                created_count += 1
                print(f"  ✓ Created: {name}")
            except ConflictError:
                skipped_count += 1
                print(f"  ⊘ Skipped (already exists): {name}")
            except Exception as e:
                print(f"  ❌ Error creating {name}: {e}")
                continue

        print(f"\n✅ Seeding complete: {created_count} created, {skipped_count} skipped")
        return created_count, skipped_count
    finally:
        if owns_session:
            db.close()


if __name__ == "__main__":
    seed_categories()
