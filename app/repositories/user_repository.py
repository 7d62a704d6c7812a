from typing import Dict, List, Optional

from sqlalchemy.orm import contains_eager, joinedload

from app.domain import Page, PageRequest, User, UserMovie, UserWithViewedMovies, ViewedMovie
from app.models.user import User as UserModel
from app.models.user_movie import UserMovie as UserMovieModel
from app.repositories.base import (
    SqlAlchemyRepository,
    UserMovieRepository,
    UserRepository,
    coerce_date,
)
from app.repositories.movie_repository import SqlAlchemyMovieRepository


class SqlAlchemyUserRepository(SqlAlchemyRepository, UserRepository):

    def create(self, user: User) -> User:
        row = UserModel(is_active=user.is_active)
        self._apply(row, user)
        row.password = user.password
        self.db.add(row)
        self._commit()
        self.db.refresh(row)
        return self._to_domain(row)

    def find_by_id(self, user_id: int) -> Optional[User]:
        row = self._get_active(user_id)
        return self._to_domain(row) if row else None

    def find_by_email(self, email: str) -> Optional[User]:
        row = self.db.query(UserModel).filter(UserModel.email == email).first()
        return self._to_domain(row) if row else None

    def find_all(self, page_request: PageRequest) -> Page[User]:
        query = self.db.query(UserModel).filter(UserModel.is_active == True)
        total = query.count()
        rows = (
            query.order_by(UserModel.created_at.desc(), UserModel.id.desc())
            .offset(page_request.offset)
            .limit(page_request.limit)
            .all()
        )
        return Page(
            data=[self._to_domain(row) for row in rows],
            total=total,
            page=page_request.page,
            limit=page_request.limit,
        )

    def update(self, user: User) -> Optional[User]:
        row = self._get_active(user.id)
        if not row:
            return None

        self._apply(row, user)
        self._commit()
        self.db.refresh(row)
        return self._to_domain(row)

    def delete(self, user_id: int) -> bool:
        affected = self.db.query(UserModel).filter(
            UserModel.id == user_id,
            UserModel.is_active == True
        ).update({"is_active": False}, synchronize_session=False)
        self._commit()
        return affected > 0

    def _get_active(self, user_id: int) -> Optional[UserModel]:
        return self.db.query(UserModel).filter(
            UserModel.id == user_id,
            UserModel.is_active == True
        ).first()

    @staticmethod
    def _apply(row: UserModel, user: User) -> None:
        # The password hash is only written on create
        row.first_name = user.first_name
        row.last_name = user.last_name
        row.email = user.email
        row.phone_number = user.phone_number
        row.date_of_birth = user.date_of_birth
        row.avatar = user.avatar

    @staticmethod
    def _to_domain(row: UserModel) -> User:
        return User(
            id=row.id,
            first_name=row.first_name,
            last_name=row.last_name,
            email=row.email,
            password=row.password,
            phone_number=row.phone_number,
            date_of_birth=coerce_date(row.date_of_birth),
            avatar=row.avatar,
            is_active=bool(row.is_active),
            created_at=row.created_at,
            updated_at=row.updated_at,
        )


class SqlAlchemyUserMovieRepository(SqlAlchemyRepository, UserMovieRepository):

    def create(self, user_movie: UserMovie) -> UserMovie:
        row = UserMovieModel(
            user_id=user_movie.user_id,
            movie_id=user_movie.movie_id,
            viewed_at=user_movie.viewed_at,
            rating=user_movie.rating,
            review=user_movie.review,
            is_favorite=user_movie.is_favorite,
            watch_time=user_movie.watch_time,
            completed_movie=user_movie.completed_movie,
        )
        self.db.add(row)
        self._commit()
        self.db.refresh(row)
        return self._to_domain(row)

    def find_by_user_and_movie(self, user_id: int, movie_id: int) -> Optional[UserMovie]:
        row = self.db.query(UserMovieModel).filter(
            UserMovieModel.user_id == user_id,
            UserMovieModel.movie_id == movie_id
        ).first()
        return self._to_domain(row) if row else None

    def find_by_user_id(self, user_id: int) -> List[ViewedMovie]:
        rows = (
            self.db.query(UserMovieModel)
            .options(joinedload(UserMovieModel.movie))
            .filter(UserMovieModel.user_id == user_id)
            .order_by(UserMovieModel.viewed_at.desc(), UserMovieModel.id.desc())
            .all()
        )
        return [self._to_viewed_movie(row) for row in rows]

    def update(self, user_movie: UserMovie) -> UserMovie:
        row = self.db.query(UserMovieModel).filter(UserMovieModel.id == user_movie.id).one()
        row.rating = user_movie.rating
        row.review = user_movie.review
        row.is_favorite = user_movie.is_favorite
        row.watch_time = user_movie.watch_time
        row.completed_movie = user_movie.completed_movie
        self._commit()
        self.db.refresh(row)
        return self._to_domain(row)

    def find_users_with_movies(self) -> List[UserWithViewedMovies]:
        rows = (
            self.db.query(UserMovieModel)
            .join(UserMovieModel.user)
            .options(contains_eager(UserMovieModel.user), joinedload(UserMovieModel.movie))
            .filter(UserModel.is_active == True)
            .order_by(UserModel.first_name.asc(), UserModel.id.asc(), UserMovieModel.viewed_at.desc())
            .all()
        )

        # Group by user, keeping the query order for users and their movies
        grouped: Dict[int, dict] = {}
        for row in rows:
            entry = grouped.setdefault(
                row.user_id,
                {"user": SqlAlchemyUserRepository._to_domain(row.user), "movies": []},
            )
            entry["movies"].append(self._to_viewed_movie(row))

        return [
            UserWithViewedMovies(user=entry["user"], movies=tuple(entry["movies"]))
            for entry in grouped.values()
        ]

    @classmethod
    def _to_viewed_movie(cls, row: UserMovieModel) -> ViewedMovie:
        return ViewedMovie(
            viewed=cls._to_domain(row),
            movie=SqlAlchemyMovieRepository._to_domain(row.movie),
        )

    @staticmethod
    def _to_domain(row: UserMovieModel) -> UserMovie:
        return UserMovie(
            id=row.id,
            user_id=row.user_id,
            movie_id=row.movie_id,
            viewed_at=row.viewed_at,
            rating=row.rating,
            review=row.review,
            is_favorite=bool(row.is_favorite),
            watch_time=row.watch_time,
            completed_movie=bool(row.completed_movie),
        )
