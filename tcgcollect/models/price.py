"""
Price history model
"""
from tcgcollect import db
from tcgcollect.enums import Condition
from tcgcollect.utils import isoformat, to_float, utcnow


class CardPrice(db.Model):
    """
    One price observation for a (card, condition) at a point in time
    Append-only: a new price is a new row, history is never rewritten
    """
    __tablename__ = 'card_prices'

    id = db.Column(db.Integer, primary_key=True)

    card_id = db.Column(db.Integer, db.ForeignKey('cards.id', ondelete='CASCADE'), nullable=False, index=True)

    # mint / near_mint / light_play / moderate_play / heavy_play / damaged
    condition = db.Column(db.Enum(Condition, name='card_condition', values_callable=lambda e: e.values()),
                          nullable=False)

    price = db.Column(db.Numeric(10, 2), nullable=False)

    # ISO code: EUR / USD / GBP / JPY
    currency = db.Column(db.String(3), nullable=False, default='EUR')

    # Where the price came from (tcgplayer, cardmarket, ...)
    source = db.Column(db.String(100))

    recorded_at = db.Column(db.DateTime, nullable=False, default=utcnow, index=True)

    card = db.relationship('Card', back_populates='prices')

    # Latest-price and history lookups walk this index
    __table_args__ = (
        db.Index('idx_price_card_condition_time', 'card_id', 'condition', 'recorded_at'),
    )

    EDITABLE_FIELDS = ('condition', 'price', 'currency', 'source')

    def __repr__(self):
        return f'<CardPrice card={self.card_id} {self.condition} {self.price} {self.currency}>'

    def to_dict(self):
        return {
            'id': self.id,
            'card_id': self.card_id,
            'condition': self.condition.value if self.condition else None,
            'price': to_float(self.price),
            'currency': self.currency,
            'source': self.source,
            'recorded_at': isoformat(self.recorded_at),
        }
