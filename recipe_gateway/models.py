from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from .db import Base


def utcnow():
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    # case-sensitive as stored
    email = Column(String(320), unique=True, index=True, nullable=False)
    password_hash = Column(String(200), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow,
                        nullable=False)

    favorites = relationship("Favorite", back_populates="user")


class Favorite(Base):
    __tablename__ = "favorites"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True,
                     nullable=False)
    # no unique (user_id, recipe_id): the same recipe can be saved twice
    recipe_id = Column(String(64), index=True, nullable=False)
    title = Column(String(300), nullable=False)
    image = Column(Text, nullable=True)
    category = Column(String(100), nullable=True)
    area = Column(String(100), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow,
                        nullable=False)

    user = relationship("User", back_populates="favorites")
