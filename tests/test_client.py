"""
API client and text view tests
"""
import requests

from tcgclient import ApiClient, ApiServices
from tcgclient.cli import build_parser
from tcgclient.views import (
    format_price,
    price_trend,
    render_card,
    render_collection_stats,
    render_price_history,
    render_top_gainers,
)


class FakeResponse:

    def __init__(self, status_code=200, payload=None, reason='OK', invalid_json=False):
        self.status_code = status_code
        self.ok = 200 <= status_code < 400
        self.reason = reason
        self._payload = payload
        self._invalid_json = invalid_json

    def json(self):
        if self._invalid_json:
            raise ValueError('not json')
        return self._payload


class FakeSession:

    def __init__(self, response=None, error=None):
        self.headers = {}
        self.response = response
        self.error = error
        self.calls = []

    def request(self, method, url, params=None, json=None, headers=None, timeout=None):
        self.calls.append({'method': method, 'url': url, 'params': params, 'json': json,
                           'headers': headers, 'timeout': timeout})
        if self.error:
            raise self.error
        return self.response


class TestApiClient:

    def test_success(self):
        session = FakeSession(FakeResponse(payload=[{'id': 1}]))
        client = ApiClient('http://api.local/', token='tok', timeout=4, session=session)

        response = client.get('/cards', {'game': 'mtg'})
        assert response.ok
        assert response.data == [{'id': 1}]
        call = session.calls[0]
        assert call['url'] == 'http://api.local/cards'
        assert call['headers'] == {'Authorization': 'Bearer tok'}
        assert call['timeout'] == 4

    def test_token_callable(self):
        session = FakeSession(FakeResponse(payload={}))
        ApiClient('http://api.local', token=lambda: 'fresh', session=session).get('/profiles/me')
        assert session.calls[0]['headers'] == {'Authorization': 'Bearer fresh'}

    def test_anonymous(self):
        session = FakeSession(FakeResponse(payload=[]))
        ApiClient('http://api.local', session=session).get('/cards')
        assert session.calls[0]['headers'] == {}

    def test_server_error_message(self):
        session = FakeSession(FakeResponse(400, payload={'error': 'Price must be greater than 0'}, reason='BAD REQUEST'))
        response = ApiClient('http://api.local', session=session).post('/prices', {'price': 0})
        assert not response.ok
        assert response.data is None
        assert response.error == 'Price must be greater than 0'

    def test_status_fallback(self):
        session = FakeSession(FakeResponse(502, reason='Bad Gateway', invalid_json=True))
        response = ApiClient('http://api.local', session=session).get('/cards')
        assert response.error == 'HTTP 502: Bad Gateway'

    def test_transport_failure(self):
        session = FakeSession(error=requests.ConnectionError('refused'))
        response = ApiClient('http://api.local', session=session).delete('/cards/1')
        assert response.error == 'refused'


class TestServices:

    def test_endpoints(self):
        session = FakeSession(FakeResponse(payload={}))
        api = ApiServices('http://api.local', token='tok', session=session)

        api.cards.get_cards(game='pokemon', include_prices=True)
        api.collections.add_to_collection(7, quantity=2)
        api.prices.get_price_history(7, 'near_mint', days=90)
        api.prices.get_top_gainers(limit=5)
        api.profiles.update_my_profile({'display_name': 'Ash'})

        calls = [(c['method'], c['url'].replace('http://api.local', '')) for c in session.calls]
        assert calls == [
            ('GET', '/cards'),
            ('POST', '/collections'),
            ('GET', '/prices/history'),
            ('GET', '/prices/top-gainers'),
            ('PUT', '/profiles/me'),
        ]
        assert session.calls[0]['params'] == {'game': 'pokemon', 'include_prices': 'true'}
        assert session.calls[1]['json'] == {'card_id': 7, 'condition': 'near_mint', 'quantity': 2}
        assert session.calls[2]['params'] == {'card_id': '7', 'condition': 'near_mint', 'days': '90'}
        assert session.calls[3]['params'] == {'limit': '5'}


class TestViews:

    def test_format_price(self):
        assert format_price(1234.5) == '€1,234.50'
        assert format_price(1234.5, 'USD') == '$1,234.50'
        assert format_price(1234.4, 'JPY') == '¥1,234'
        assert format_price(None) == '-'

    def test_price_trend(self):
        assert price_trend(110, 100) == ('up', 10.0)
        assert price_trend(90, 100) == ('down', -10.0)
        assert price_trend(100, 100) == ('flat', 0.0)
        assert price_trend(5, 0) == ('up', None)
        assert price_trend(5, None) == ('none', None)

    def test_render_card(self):
        text = render_card({'name': 'Black Lotus', 'game': 'mtg', 'rarity': 'Rare', 'set_name': 'Alpha'},
                           current_price=8500, previous_price=8000, owned=1)
        assert text.splitlines()[0] == 'Black Lotus [MTG] Rare'
        assert '€8,500.00' in text
        assert '+6.2%' in text
        assert '(owned: 1)' in text

    def test_render_collection_stats(self):
        text = render_collection_stats({
            'totalCards': 2, 'totalValue': 70.0,
            'topGainer': {'name': 'Dark Magician', 'change': 8.2}, 'rarest': 'Black Lotus (Alpha)',
        })
        assert 'Total value:  €70.00' in text
        assert '+8.2%  Dark Magician' in text
        assert 'Black Lotus (Alpha)' in text

    def test_render_without_gainer(self):
        text = render_collection_stats({'totalCards': 0, 'totalValue': 0, 'topGainer': None, 'rarest': 'No cards'})
        assert 'Top gainer:   -' in text

    def test_render_top_gainers(self):
        text = render_top_gainers([{
            'card_id': 1, 'condition': 'near_mint', 'price': 110.0, 'previous_price': 100.0,
            'change_percent': 10.0, 'currency': 'EUR', 'cards': {'name': 'Dark Magician'},
        }])
        assert text == ' 1. Dark Magician (near_mint)  €100.00 -> €110.00  +10.00%'
        assert render_top_gainers([]).startswith('No price movements')

    def test_render_price_history(self):
        text = render_price_history({
            'card_id': 1, 'condition': 'near_mint', 'days': 30,
            'prices': [
                {'price': 40.0, 'currency': 'EUR', 'source': 'tcgplayer', 'recorded_at': '2025-08-01T10:00:00'},
                {'price': 50.0, 'currency': 'EUR', 'source': None, 'recorded_at': '2025-08-10T10:00:00'},
            ],
        })
        lines = text.splitlines()
        assert lines[1] == '  2025-08-01  €40.00  tcgplayer'
        assert lines[-1] == '  trend: up (+25.0%)'


class TestCli:

    def test_parses_history(self):
        args = build_parser().parse_args(['--base-url', 'http://api.local', 'history', '7', 'near_mint', '--days', '90'])
        assert args.base_url == 'http://api.local'
        assert (args.card_id, args.condition, args.days) == (7, 'near_mint', 90)
