from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Optional

from app.domain.dates import DateLike, as_date, utcnow


@dataclass(frozen=True)
class User:
    """
    Catalog user. password always holds a hash produced by
    app.utils.security.hash_password, never plain text.
    """

    id: Optional[int]
    first_name: str
    last_name: str
    email: str
    password: str
    phone_number: Optional[str] = None
    date_of_birth: Optional[date] = None
    avatar: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
        phone_number: Optional[str] = None,
        date_of_birth: Optional[date] = None,
        avatar: Optional[str] = None,
    ) -> "User":
        now = utcnow()
        return cls(
            id=None,
            first_name=first_name,
            last_name=last_name,
            email=email,
            password=password,
            phone_number=phone_number,
            date_of_birth=date_of_birth,
            avatar=avatar,
            created_at=now,
            updated_at=now,
        )

    def with_changes(self, **changes) -> "User":
        return replace(self, **changes)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def age(self, now: Optional[DateLike] = None) -> Optional[int]:
        """Whole years since date_of_birth, or None when it is unknown"""
        if not isinstance(self.date_of_birth, date):
            return None

        birth = self.date_of_birth.date() if isinstance(self.date_of_birth, datetime) else self.date_of_birth
        today = as_date(now)
        years = today.year - birth.year
        if (today.month, today.day) < (birth.month, birth.day):
            years -= 1
        return years
