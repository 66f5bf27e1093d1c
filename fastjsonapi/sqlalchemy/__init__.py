"""SQLAlchemy adapters for JSON:API serialization."""

from .data_layer import SQLAlchemyDataLayer
from .handle import SQLAlchemyModelHandle

__all__ = ["SQLAlchemyDataLayer", "SQLAlchemyModelHandle"]
