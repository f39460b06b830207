"""
Data models
"""
from tcgcollect.models.card import Card
from tcgcollect.models.price import CardPrice
from tcgcollect.models.collection import UserCollection
from tcgcollect.models.user import UserProfile, CurrentUser

__all__ = [
    'Card',
    'CardPrice',
    'UserCollection',
    'UserProfile', 'CurrentUser',
]
