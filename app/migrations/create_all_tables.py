"""
Migration script to create all database tables

Run this script to create all database tables:
    python -m app.migrations.create_all_tables
"""

from app.database import engine, Base
# Import all models to ensure they're registered with Base
from app.models import Category, Movie, MovieGenre, User, UserMovie


def create_tables():
    """Create all database tables"""
    print("=" * 60)
    print("Creating all database tables...")
    print("=" * 60)

    try:
        Base.metadata.create_all(bind=engine)

        print("\n✅ All tables created successfully!")
        print("\nTables created:")
        for model in (Category, Movie, MovieGenre, User, UserMovie):
            print(f"   - {model.__tablename__}")
        print("=" * 60)

    except Exception as e:
        print(f"\n❌ Error creating tables: {e}")
        import traceback
        traceback.print_exc()
        raise


if __name__ == "__main__":
    create_tables()
