"""
Business rules - validation and aggregation on top of the repositories
"""
from tcgcollect.services.cards import CardService
from tcgcollect.services.prices import PriceService
from tcgcollect.services.collections import CollectionService
from tcgcollect.services.profiles import ProfileService

__all__ = ['CardService', 'PriceService', 'CollectionService', 'ProfileService']
