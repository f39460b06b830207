"""
Card queries
"""
from tcgcollect import db
from tcgcollect.models.card import Card
from tcgcollect.models.price import CardPrice
from tcgcollect.pricing import latest_by
from tcgcollect.repositories import apply_updates, store_call


class CardRepository:

    @store_call
    def list_cards(self, game=None, search=None, limit=50, offset=0):
        q = self._filtered(game, search)
        return q.order_by(Card.name.asc(), Card.id.asc()).offset(offset).limit(limit).all()

    @store_call
    def list_with_latest_prices(self, game=None, search=None, limit=50, offset=0):
        """
        Cards that have at least one price, each paired with its newest
        observation across all conditions
        """
        q = self._filtered(game, search).filter(Card.prices.any())
        cards = q.order_by(Card.name.asc(), Card.id.asc()).offset(offset).limit(limit).all()
        if not cards:
            return []

        prices = CardPrice.query.filter(CardPrice.card_id.in_([c.id for c in cards])).all()
        latest = latest_by(prices, key=lambda p: p.card_id)
        return [(card, latest[card.id]) for card in cards if card.id in latest]

    @store_call
    def get(self, card_id):
        return db.session.get(Card, card_id)

    @store_call
    def find_duplicate(self, name, game, set_name=None, card_number=None, exclude_id=None):
        q = Card.query.filter_by(name=name, game=game, set_name=set_name, card_number=card_number)
        if exclude_id is not None:
            q = q.filter(Card.id != exclude_id)
        return q.first()

    @store_call
    def search_by_set(self, set_name, game=None):
        q = Card.query.filter(Card.set_name.ilike(f'%{set_name}%'))
        if game:
            q = q.filter(Card.game == game)
        return q.order_by(Card.card_number.asc(), Card.id.asc()).all()

    @store_call
    def create(self, **fields):
        card = Card(**fields)
        db.session.add(card)
        db.session.commit()
        return card

    @store_call
    def update(self, card, updates):
        apply_updates(card, updates)
        db.session.commit()
        return card

    @store_call
    def delete(self, card):
        db.session.delete(card)
        db.session.commit()

    def _filtered(self, game, search):
        q = Card.query
        if game:
            q = q.filter(Card.game == game)
        if search:
            q = q.filter(Card.name.ilike(f'%{search}%'))
        return q
