"""
Database initialization helpers.

We only wire up the metadata here. Models are imported so their
tables get registered on Base.metadata.
"""

from employee_records.db.session import Database
from employee_records.models.base import Base

from employee_records.models import employee, user  # noqa: F401


def init_db(database: Database) -> None:
    """
    Create all tables based on SQLAlchemy models.
    """
    Base.metadata.create_all(bind=database.engine)
