from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from app.domain.dates import utcnow
from app.errors import ValidationError

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500


@dataclass(frozen=True)
class Category:
    id: Optional[int]
    name: str
    description: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        if not isinstance(self.name, str) or not NAME_MIN_LENGTH <= len(self.name) <= NAME_MAX_LENGTH:
            raise ValidationError(
                f"Category name must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters"
            )
        if self.description is not None and len(self.description) > DESCRIPTION_MAX_LENGTH:
            raise ValidationError(f"Category description cannot exceed {DESCRIPTION_MAX_LENGTH} characters")

    @classmethod
    def create(cls, name: str, description: Optional[str] = None) -> "Category":
        now = utcnow()
        return cls(id=None, name=name, description=description, created_at=now, updated_at=now)

    def with_changes(self, **changes) -> "Category":
        return replace(self, **changes)

    @property
    def display_name(self) -> str:
        return self.name
