from sqlalchemy import Column, Integer, Text, Boolean, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.database import Base


class UserMovie(Base):
    """
    Viewed-movie record - a movie a user has watched, with optional rating and review
    """
    __tablename__ = "user_movies"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    movie_id = Column(Integer, ForeignKey("movies.id"), nullable=False, index=True)
    viewed_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    rating = Column(Integer, nullable=True)  # 1-5 stars
    review = Column(Text, nullable=True)
    is_favorite = Column(Boolean, default=False, nullable=False)
    watch_time = Column(Integer, nullable=True)  # Minutes watched
    completed_movie = Column(Boolean, default=True, nullable=False)

    # Relationships
    user = relationship("User", back_populates="viewed_movies")
    movie = relationship("Movie")

    # Ensure one viewed record per user per movie
    __table_args__ = (
        UniqueConstraint("user_id", "movie_id", name="unique_user_movie_viewed"),
    )

    def __repr__(self):
        return f"<UserMovie(user_id={self.user_id}, movie_id={self.movie_id}, is_favorite={self.is_favorite})>"
