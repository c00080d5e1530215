# propchat/db/__init__.py
from .base_class import Base
from .session import get_db, init_db
from .models import Listing, LISTING_FIELDS
from .repositories.listing_repository import ListingRepository

__all__ = [
    'Base',
    'get_db',
    'init_db',
    'Listing',
    'LISTING_FIELDS',
    'ListingRepository'
]
