from .base import Base

from sqlalchemy import JSON, Boolean, Column, Integer, String
from sqlalchemy.dialects.postgresql import JSONB

# JSONB on PostgreSQL, plain JSON elsewhere
JSONDocument = JSON().with_variant(JSONB(), "postgresql")


class Recipe(Base):
    __tablename__ = "recipes"

    id = Column(String(255), primary_key=True)
    title = Column(String(255), index=True, nullable=False)
    cook_time = Column(Integer, nullable=False)
    difficulty = Column(String(50), nullable=False)
    favourite = Column(Boolean, default=False, nullable=False)
    portion_size = Column(Integer, nullable=False)
    notes = Column(String(50000))
    tags = Column(JSONDocument)
    ingredients = Column(JSONDocument, default=[], nullable=False)
    extra_ingredients = Column(JSONDocument, default=[], nullable=False)
    location = Column(JSONDocument, nullable=False)
