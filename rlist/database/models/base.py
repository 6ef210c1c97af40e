"""
Base Classes
------------

Foundational ORM class for the rlist database.

Classes:
    - Base: Declarative base for all SQLAlchemy models
"""
from sqlalchemy.orm import DeclarativeBase


# --- Base ORM class ---
class Base(DeclarativeBase):
    """
    Base class for all ORM models.

    Serves as the declarative base for SQLAlchemy models and provides
    access to the metadata object for table creation.
    """

    pass
