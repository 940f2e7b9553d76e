"""SQLAlchemy adapters for parsed JSON:API documents."""

from .models import to_model
from .preloads import SQLAlchemyPreloader

__all__ = ["SQLAlchemyPreloader", "to_model"]
