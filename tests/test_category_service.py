import pytest
from sqlalchemy.exc import IntegrityError

from app.domain import Category
from app.errors import ConflictError, NotFoundError
from app.migrations.seed_categories import DEFAULT_CATEGORIES, seed_categories


def test_create_category(category_service):
    category = category_service.create("Drama", "Dramatic films")

    assert category.id is not None
    assert category.name == "Drama"
    assert category.is_active is True


def test_duplicate_name_conflicts(category_service):
    category_service.create("Drama")

    with pytest.raises(ConflictError, match="Category with this name already exists"):
        category_service.create("Drama")


def test_name_uniqueness_ignores_case(category_service):
    category_service.create("Drama")

    with pytest.raises(ConflictError):
        category_service.create("drama")


def test_lost_race_is_reported_as_conflict(category_service, monkeypatch):
    category_service.create("Drama")
    # Simulate a concurrent insert the pre-check did not see
    monkeypatch.setattr(category_service.category_repository, "find_by_name", lambda name: None)

    with pytest.raises(ConflictError):
        category_service.create("Drama")


def test_find_all_ordered_by_name(category_service):
    for name in ("Terror", "Comedia", "Drama"):
        category_service.create(name)

    assert [c.name for c in category_service.find_all()] == ["Comedia", "Drama", "Terror"]


def test_find_one_missing(category_service):
    with pytest.raises(NotFoundError, match="Category with ID 99 not found"):
        category_service.find_one(99)


def test_update_description(category_service):
    category = category_service.create("Drama")

    updated = category_service.update(category.id, {"description": "Serious films"})

    assert updated.name == "Drama"
    assert updated.description == "Serious films"


def test_rename_to_own_name_allowed(category_service):
    category = category_service.create("Drama")

    updated = category_service.update(category.id, {"name": "DRAMA"})

    assert updated.name == "DRAMA"


def test_rename_to_taken_name_conflicts(category_service):
    category_service.create("Drama")
    comedy = category_service.create("Comedia")

    with pytest.raises(ConflictError):
        category_service.update(comedy.id, {"name": "drama"})


def test_update_ignores_unknown_fields(category_service):
    category = category_service.create("Drama")

    updated = category_service.update(category.id, {"is_active": False, "name": None})

    assert updated.is_active is True
    assert updated.name == "Drama"


def test_remove_is_logical(category_service):
    category = category_service.create("Drama")

    category_service.remove(category.id)

    with pytest.raises(NotFoundError):
        category_service.find_one(category.id)
    with pytest.raises(NotFoundError):
        category_service.remove(category.id)
    assert category_service.get_stats() == {"total": 0}


def test_removed_name_stays_reserved(category_service):
    category = category_service.create("Drama")
    category_service.remove(category.id)

    with pytest.raises(ConflictError):
        category_service.create("Drama")


def test_remove_conflicts_when_nothing_deleted(category_service, monkeypatch):
    category = category_service.create("Drama")
    monkeypatch.setattr(category_service.category_repository, "delete", lambda category_id: False)

    with pytest.raises(ConflictError, match="Unable to delete category"):
        category_service.remove(category.id)


def test_stats_counts_active(category_service):
    category_service.create("Drama")
    category_service.create("Comedia")

    assert category_service.get_stats() == {"total": 2}


def test_repository_rolls_back_on_integrity_error(category_service, db_session):
    category_service.create("Drama")
    repository = category_service.category_repository

    with pytest.raises(IntegrityError):
        repository.create(Category.create("drama"))

    # Session stays usable after the rollback
    assert repository.count() == 1


def test_seed_categories_is_idempotent(db_session):
    created, skipped = seed_categories(db_session)
    assert (created, skipped) == (len(DEFAULT_CATEGORIES), 0)

    created, skipped = seed_categories(db_session)
    assert (created, skipped) == (0, len(DEFAULT_CATEGORIES))
