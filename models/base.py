from sqlalchemy import Column, DateTime, MetaData, func
from sqlalchemy.orm import DeclarativeBase

# Constraint names match the ones in the Alembic migrations
NAMING_CONVENTION = {
     "ix": "ix_%(table_name)s_%(column_0_name)s",
     "uq": "uq_%(table_name)s_%(column_0_name)s",
     "fk": "fk_%(table_name)s_%(column_0_name)s",
     "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
     """
     Base class for all SQLAlchemy models.

     Every model names its table explicitly; the metadata carries the
     constraint naming convention used by the migrations.
     """
     metadata = MetaData(naming_convention=NAMING_CONVENTION)


class TimestampMixin:
     """created_at / updated_at columns shared by every stored document."""

     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)
