"""
User collection model
"""
from tcgcollect import db
from tcgcollect.enums import Condition
from tcgcollect.utils import isoformat, to_float, utcnow


class UserCollection(db.Model):
    """
    User collection - cards the user owns
    One row per (user, card, condition); quantity accumulates on that row
    """
    __tablename__ = 'user_collections'

    id = db.Column(db.Integer, primary_key=True)

    # Owner (identity id from the auth service)
    user_id = db.Column(db.String(64), nullable=False, index=True)

    card_id = db.Column(db.Integer, db.ForeignKey('cards.id', ondelete='CASCADE'), nullable=False, index=True)

    condition = db.Column(db.Enum(Condition, name='card_condition', values_callable=lambda e: e.values()),
                          nullable=False, default=Condition.NEAR_MINT)

    quantity = db.Column(db.Integer, nullable=False, default=1)

    # Purchase price (optional)
    purchase_price = db.Column(db.Numeric(10, 2))

    # Purchase date (optional)
    purchase_date = db.Column(db.Date)

    notes = db.Column(db.Text)

    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    card = db.relationship('Card', back_populates='collections')

    __table_args__ = (
        db.UniqueConstraint('user_id', 'card_id', 'condition', name='uq_user_collection'),
        db.CheckConstraint('quantity > 0', name='ck_collection_quantity_positive'),
    )

    EDITABLE_FIELDS = ('condition', 'quantity', 'purchase_price', 'purchase_date', 'notes')

    def __repr__(self):
        return f'<UserCollection user={self.user_id} card={self.card_id} x{self.quantity}>'

    def to_dict(self, with_card=False):
        data = {
            'id': self.id,
            'user_id': self.user_id,
            'card_id': self.card_id,
            'condition': self.condition.value if self.condition else None,
            'quantity': self.quantity,
            'purchase_price': to_float(self.purchase_price),
            'purchase_date': isoformat(self.purchase_date),
            'notes': self.notes,
            'created_at': isoformat(self.created_at),
            'updated_at': isoformat(self.updated_at),
        }
        if with_card:
            data['cards'] = self.card.to_dict() if self.card else None
        return data
