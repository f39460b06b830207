"""
Shared fixtures
"""
from datetime import timedelta
from decimal import Decimal

import pytest

from tcgcollect import create_app, db
from tcgcollect.enums import Condition, Game
from tcgcollect.models import Card, CardPrice
from tcgcollect.utils import utcnow


@pytest.fixture
def app():
    """Test app on an in-memory database; each request gets its own app context"""
    app = create_app('testing')
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def issue_token(app):
    """Bearer token factory for the signed identity backend"""
    def _issue(user_id='user-1', username=None, display_name=None):
        return app.extensions['tcg_identity'].issue_token(user_id, username, display_name)
    return _issue


@pytest.fixture
def auth_headers(issue_token):
    return {'Authorization': f'Bearer {issue_token()}'}


@pytest.fixture
def make_card(app):
    """Insert a card, return its id"""
    def _make(name='Dark Magician', game=Game.YUGIOH, set_name='Legend of Blue Eyes',
              card_number=None, rarity='Ultra Rare'):
        with app.app_context():
            card = Card(name=name, game=game, set_name=set_name, card_number=card_number, rarity=rarity)
            db.session.add(card)
            db.session.commit()
            return card.id
    return _make


@pytest.fixture
def make_price(app):
    """Insert a price observation ``days_ago`` days back, return its id"""
    def _make(card_id, price, condition=Condition.NEAR_MINT, days_ago=0, currency='EUR', source='tcgplayer'):
        with app.app_context():
            record = CardPrice(
                card_id=card_id,
                condition=condition,
                price=Decimal(str(price)),
                currency=currency,
                source=source,
                recorded_at=utcnow() - timedelta(days=days_ago),
            )
            db.session.add(record)
            db.session.commit()
            return record.id
    return _make
