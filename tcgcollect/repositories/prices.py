"""
Price history queries
"""
from sqlalchemy.orm import contains_eager

from tcgcollect import db
from tcgcollect.models.card import Card
from tcgcollect.models.price import CardPrice
from tcgcollect.repositories import apply_updates, store_call


class PriceRepository:

    @store_call
    def for_card(self, card_id):
        """Every observation of a card, newest first"""
        return CardPrice.query.filter(CardPrice.card_id == card_id)\
            .order_by(CardPrice.recorded_at.desc(), CardPrice.id.desc()).all()

    @store_call
    def history(self, card_id, condition, since, until):
        """Observations of one (card, condition) in [since, until], oldest first"""
        return CardPrice.query.filter(
            CardPrice.card_id == card_id,
            CardPrice.condition == condition,
            CardPrice.recorded_at >= since,
            CardPrice.recorded_at <= until,
        ).order_by(CardPrice.recorded_at.asc(), CardPrice.id.asc()).all()

    @store_call
    def recorded_since(self, since, game=None, card_ids=None):
        """Observations newer than ``since`` with their cards loaded, newest first"""
        q = CardPrice.query.join(Card, CardPrice.card_id == Card.id)\
            .options(contains_eager(CardPrice.card))\
            .filter(CardPrice.recorded_at >= since)
        if game:
            q = q.filter(Card.game == game)
        if card_ids is not None:
            if not card_ids:
                return []
            q = q.filter(CardPrice.card_id.in_(card_ids))
        return q.order_by(CardPrice.recorded_at.desc(), CardPrice.id.desc()).all()

    @store_call
    def for_cards(self, card_ids):
        if not card_ids:
            return []
        return CardPrice.query.filter(CardPrice.card_id.in_(card_ids)).all()

    @store_call
    def get(self, price_id):
        return db.session.get(CardPrice, price_id)

    @store_call
    def create(self, **fields):
        price = CardPrice(**fields)
        db.session.add(price)
        db.session.commit()
        return price

    @store_call
    def update(self, price, updates):
        apply_updates(price, updates)
        db.session.commit()
        return price

    @store_call
    def delete(self, price):
        db.session.delete(price)
        db.session.commit()
