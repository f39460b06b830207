"""
Data access layer - queries against the relational store

Repositories return ORM rows. Driver failures become StoreError (or
ConflictError for uniqueness violations) after the session is rolled back.
"""
import functools

from loguru import logger
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from tcgcollect import db
from tcgcollect.errors import ConflictError, StoreError


def store_call(func):
    """Translate SQLAlchemy failures into typed errors"""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except IntegrityError as e:
            db.session.rollback()
            logger.warning(f'{func.__qualname__}: constraint violated: {e.orig}')
            raise ConflictError() from e
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f'{func.__qualname__}: store failure: {e}')
            raise StoreError() from e

    return wrapper


def apply_updates(row, updates):
    for field, value in updates.items():
        setattr(row, field, value)
    return row


from tcgcollect.repositories.cards import CardRepository  # noqa: E402
from tcgcollect.repositories.prices import PriceRepository  # noqa: E402
from tcgcollect.repositories.collections import CollectionRepository  # noqa: E402
from tcgcollect.repositories.profiles import ProfileRepository  # noqa: E402

__all__ = [
    'store_call', 'apply_updates',
    'CardRepository', 'PriceRepository', 'CollectionRepository', 'ProfileRepository',
]
