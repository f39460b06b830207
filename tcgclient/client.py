"""
HTTP client for the TCG collection API

Every call returns an ApiResponse instead of raising: ``data`` on success,
``error`` (the server's message, or a transport failure) otherwise.
"""
import os
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Union

import requests
from loguru import logger

DEFAULT_TIMEOUT = float(os.environ.get('TCG_API_TIMEOUT', 10))


@dataclass
class ApiResponse:
    data: Any = None
    error: Optional[str] = None

    @property
    def ok(self):
        return self.error is None


class ApiClient:
    """
    Thin wrapper over requests

    ``token`` is a bearer token string or a callable returning the current
    one (e.g. from a login session); None sends anonymous requests.
    """

    def __init__(self, base_url: str, token: Union[str, Callable[[], Optional[str]], None] = None,
                 timeout: float = DEFAULT_TIMEOUT, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip('/')
        self.token = token
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            'User-Agent': 'TCG-Collection-Client/1.0',
            'Content-Type': 'application/json',
        })

    def _current_token(self):
        return self.token() if callable(self.token) else self.token

    def _request(self, method: str, endpoint: str, params: Optional[Dict[str, Any]] = None,
                 json: Any = None) -> ApiResponse:
        headers = {}
        token = self._current_token()
        if token:
            headers['Authorization'] = f'Bearer {token}'

        try:
            response = self.session.request(
                method,
                f'{self.base_url}{endpoint}',
                params=params,
                json=json,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f'API error for {endpoint}: {e}')
            return ApiResponse(error=str(e))

        if not response.ok:
            message = _error_message(response)
            logger.error(f'API error for {endpoint}: {message}')
            return ApiResponse(error=message)

        try:
            return ApiResponse(data=response.json())
        except ValueError:
            logger.error(f'API error for {endpoint}: invalid JSON')
            return ApiResponse(error='Invalid JSON in response')

    def get(self, endpoint, params=None):
        return self._request('GET', endpoint, params=params)

    def post(self, endpoint, data):
        return self._request('POST', endpoint, json=data)

    def put(self, endpoint, data):
        return self._request('PUT', endpoint, json=data)

    def delete(self, endpoint):
        return self._request('DELETE', endpoint)


def _error_message(response):
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get('error'):
        return body['error']
    return f'HTTP {response.status_code}: {response.reason}'


def _query(**params):
    """Drop unset parameters; booleans as 'true'/'false'"""
    query = {}
    for key, value in params.items():
        if value is None or value is False or value == '':
            continue
        query[key] = 'true' if value is True else str(value)
    return query


class CardsService:

    def __init__(self, client: ApiClient):
        self.client = client

    def get_cards(self, game=None, search=None, include_prices=False, limit=None, offset=None):
        return self.client.get('/cards', _query(game=game, search=search, include_prices=include_prices,
                                                limit=limit, offset=offset))

    def get_card_by_id(self, card_id):
        return self.client.get(f'/cards/{card_id}')

    def search_cards_by_set(self, set_name, game=None):
        return self.client.get('/cards', _query(set=set_name, game=game))

    def create_card(self, card):
        return self.client.post('/cards', card)

    def update_card(self, card_id, updates):
        return self.client.put(f'/cards/{card_id}', updates)

    def delete_card(self, card_id):
        return self.client.delete(f'/cards/{card_id}')


class CollectionService:

    def __init__(self, client: ApiClient):
        self.client = client

    def get_user_collections(self):
        return self.client.get('/collections')

    def get_collection_stats(self):
        return self.client.get('/collections/stats')

    def add_to_collection(self, card_id, condition='near_mint', quantity=1, **extra):
        return self.client.post('/collections', {
            'card_id': card_id, 'condition': condition, 'quantity': quantity, **extra,
        })

    def update_collection(self, entry_id, updates):
        return self.client.put(f'/collections/{entry_id}', updates)

    def remove_from_collection(self, entry_id):
        return self.client.delete(f'/collections/{entry_id}')


class PricesService:

    def __init__(self, client: ApiClient):
        self.client = client

    def get_card_prices(self, card_id):
        return self.client.get('/prices', {'card_id': str(card_id)})

    def get_price_history(self, card_id, condition, days=None):
        return self.client.get('/prices/history', _query(card_id=card_id, condition=condition, days=days))

    def get_top_gainers(self, game=None, limit=None):
        return self.client.get('/prices/top-gainers', _query(game=game, limit=limit))

    def add_price(self, card_id, condition, price, currency=None, source=None):
        payload = {'card_id': card_id, 'condition': condition, 'price': price}
        if currency:
            payload['currency'] = currency
        if source:
            payload['source'] = source
        return self.client.post('/prices', payload)

    def update_price(self, price_id, updates):
        return self.client.put(f'/prices/{price_id}', updates)

    def delete_price(self, price_id):
        return self.client.delete(f'/prices/{price_id}')


class ProfilesService:

    def __init__(self, client: ApiClient):
        self.client = client

    def get_profile(self, user_id):
        return self.client.get(f'/profiles/{user_id}')

    def get_my_profile(self):
        return self.client.get('/profiles/me')

    def update_my_profile(self, updates):
        return self.client.put('/profiles/me', updates)


class ApiServices:
    """All services over one shared client"""

    def __init__(self, base_url, token=None, timeout=DEFAULT_TIMEOUT, session=None):
        self.client = ApiClient(base_url, token=token, timeout=timeout, session=session)
        self.cards = CardsService(self.client)
        self.collections = CollectionService(self.client)
        self.prices = PricesService(self.client)
        self.profiles = ProfilesService(self.client)
