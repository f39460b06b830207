"""
Client for the TCG collection API
"""
from tcgclient.client import (
    ApiClient,
    ApiResponse,
    ApiServices,
    CardsService,
    CollectionService,
    PricesService,
    ProfilesService,
)

__all__ = [
    'ApiClient',
    'ApiResponse',
    'ApiServices',
    'CardsService',
    'CollectionService',
    'PricesService',
    'ProfilesService',
]
