# --- START OF FILE database/models/__init__.py ---
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """The base class for all SQLAlchemy ORM models in the project."""
    pass

# --- END OF FILE database/models/__init__.py ---
