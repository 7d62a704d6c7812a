from sqlalchemy import Column, Integer, String, Text, Float, Boolean, Date, DateTime, JSON, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.database import Base


class Movie(Base):
    __tablename__ = "movies"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False, index=True)
    description = Column(Text, nullable=False)
    synopsis = Column(Text, nullable=False)
    release_date = Column(Date, nullable=False, index=True)
    duration = Column(Integer, nullable=False)  # Minutes
    rating = Column(String(10), nullable=False)  # PG, PG-13, R, ...
    director = Column(String(200), nullable=False)
    cast = Column(JSON, nullable=False)  # Ordered list of actor names
    country = Column(String(100), nullable=False)
    language = Column(String(50), nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)
    imdb_rating = Column(Float, nullable=True)
    poster = Column(String(500), nullable=True)
    trailer = Column(String(500), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    category = relationship("Category", back_populates="movies")
    genre_links = relationship(
        "MovieGenre",
        back_populates="movie",
        order_by="MovieGenre.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @property
    def genres(self) -> list:
        return [link.name for link in self.genre_links]

    def __repr__(self):
        return f"<Movie(id={self.id}, title={self.title}, is_active={self.is_active})>"


class MovieGenre(Base):
    """
    Genre membership for a movie, one row per genre.
    Kept in its own table so "movie has genre X" is a plain EXISTS on any backend.
    """
    __tablename__ = "movie_genres"

    id = Column(Integer, primary_key=True, index=True)
    movie_id = Column(Integer, ForeignKey("movies.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    name = Column(String(50), nullable=False, index=True)

    movie = relationship("Movie", back_populates="genre_links")

    __table_args__ = (
        UniqueConstraint("movie_id", "name", name="unique_movie_genre"),
    )

    def __repr__(self):
        return f"<MovieGenre(movie_id={self.movie_id}, name={self.name})>"
