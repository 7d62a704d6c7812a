from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.database import Base


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    movies = relationship("Movie", back_populates="category")

    # Names are unique regardless of case ("Drama" blocks "drama")
    __table_args__ = (
        Index("uq_categories_name_lower", func.lower(name), unique=True),
    )

    def __repr__(self):
        return f"<Category(id={self.id}, name={self.name}, is_active={self.is_active})>"
