from datetime import timedelta
from typing import Iterable, List, Optional

from sqlalchemy import extract, or_

from app.domain import Movie, MovieFilters, Page
from app.domain.dates import DateLike, as_date
from app.domain.movie import NEW_RELEASE_WINDOW_DAYS
from app.models.movie import Movie as MovieModel, MovieGenre
from app.repositories.base import MovieRepository, SqlAlchemyRepository, coerce_date

LIKE_ESCAPE = "\\"


def escape_like(value: str) -> str:
    """Make %, _ and the escape character match literally in a LIKE pattern"""
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


class SqlAlchemyMovieRepository(SqlAlchemyRepository, MovieRepository):

    def create(self, movie: Movie) -> Movie:
        row = MovieModel(is_active=movie.is_active)
        self._apply(row, movie)
        self.db.add(row)
        self._commit()
        self.db.refresh(row)
        return self._to_domain(row)

    def find_by_id(self, movie_id: int) -> Optional[Movie]:
        row = self._get_active(movie_id)
        return self._to_domain(row) if row else None

    def find_all(self, filters: MovieFilters) -> Page[Movie]:
        query = self.db.query(MovieModel).filter(MovieModel.is_active == True)

        if filters.search:
            pattern = f"%{escape_like(filters.search)}%"
            query = query.filter(or_(
                MovieModel.title.ilike(pattern, escape=LIKE_ESCAPE),
                MovieModel.description.ilike(pattern, escape=LIKE_ESCAPE),
                MovieModel.director.ilike(pattern, escape=LIKE_ESCAPE),
            ))

        if filters.category_id is not None:
            query = query.filter(MovieModel.category_id == filters.category_id)

        if filters.genre:
            query = query.filter(MovieModel.genre_links.any(MovieGenre.name == filters.genre))

        if filters.year is not None:
            query = query.filter(extract("year", MovieModel.release_date) == filters.year)

        if filters.rating:
            query = query.filter(MovieModel.rating == filters.rating)

        page_request = filters.page_request
        total = query.count()
        rows = (
            query.order_by(MovieModel.release_date.desc(), MovieModel.id.desc())
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

    def find_new_releases(self, now: Optional[DateLike] = None) -> List[Movie]:
        window_start = as_date(now) - timedelta(days=NEW_RELEASE_WINDOW_DAYS)
        rows = (
            self.db.query(MovieModel)
            .filter(
                MovieModel.is_active == True,
                MovieModel.release_date > window_start
            )
            .order_by(MovieModel.release_date.desc(), MovieModel.id.desc())
            .all()
        )
        return [self._to_domain(row) for row in rows]

    def update(self, movie: Movie) -> Optional[Movie]:
        row = self._get_active(movie.id)
        if not row:
            return None

        self._apply(row, movie)
        self._commit()
        self.db.refresh(row)
        return self._to_domain(row)

    def delete(self, movie_id: int) -> bool:
        affected = self.db.query(MovieModel).filter(
            MovieModel.id == movie_id,
            MovieModel.is_active == True
        ).update({"is_active": False}, synchronize_session=False)
        self._commit()
        return affected > 0

    def _get_active(self, movie_id: int) -> Optional[MovieModel]:
        return self.db.query(MovieModel).filter(
            MovieModel.id == movie_id,
            MovieModel.is_active == True
        ).first()

    @staticmethod
    def _apply(row: MovieModel, movie: Movie) -> None:
        row.title = movie.title
        row.description = movie.description
        row.synopsis = movie.synopsis
        row.release_date = movie.release_date
        row.duration = movie.duration
        row.rating = movie.rating
        row.director = movie.director
        row.cast = list(movie.cast)
        row.country = movie.country
        row.language = movie.language
        row.category_id = movie.category_id
        row.imdb_rating = movie.imdb_rating
        row.poster = movie.poster
        row.trailer = movie.trailer
        SqlAlchemyMovieRepository._sync_genres(row, movie.genres)

    @staticmethod
    def _sync_genres(row: MovieModel, genres: Iterable[str]) -> None:
        # Reuse rows for genres that stay so (movie_id, name) never collides mid-flush
        existing = {link.name: link for link in row.genre_links}
        links = []
        for position, name in enumerate(dict.fromkeys(genres)):
            link = existing.pop(name, None) or MovieGenre(name=name)
            link.position = position
            links.append(link)
        row.genre_links = links

    @staticmethod
    def _to_domain(row: MovieModel) -> Movie:
        return Movie(
            id=row.id,
            title=row.title,
            description=row.description,
            synopsis=row.synopsis,
            release_date=coerce_date(row.release_date),
            duration=row.duration,
            rating=row.rating,
            director=row.director,
            cast=row.cast or [],
            genres=row.genres,
            country=row.country,
            language=row.language,
            category_id=row.category_id,
            is_active=bool(row.is_active),
            created_at=row.created_at,
            updated_at=row.updated_at,
            imdb_rating=row.imdb_rating,
            poster=row.poster,
            trailer=row.trailer,
        )
