"""
Card model - the master catalog
"""
from tcgcollect import db
from tcgcollect.enums import Game
from tcgcollect.utils import isoformat, utcnow


class Card(db.Model):
    """
    A printed card
    Publicly readable; only created/updated through administrative calls
    """
    __tablename__ = 'cards'

    id = db.Column(db.Integer, primary_key=True)

    # Card name (as printed)
    name = db.Column(db.String(200), nullable=False, index=True)

    # Game: yugioh / mtg / pokemon
    game = db.Column(db.Enum(Game, name='game_type', values_callable=lambda e: e.values()),
                     nullable=False, index=True)

    # Set / expansion name (e.g. "Legend of Blue Eyes")
    set_name = db.Column(db.String(200), index=True)

    rarity = db.Column(db.String(50))

    # Collector number within the set (e.g. LOB-005, 232)
    card_number = db.Column(db.String(30))

    image_url = db.Column(db.String(500))
    description = db.Column(db.Text)

    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    # Deleting a card removes its price history and every collection entry
    prices = db.relationship('CardPrice', back_populates='card', lazy='dynamic', cascade='all, delete-orphan')
    collections = db.relationship('UserCollection', back_populates='card', lazy='dynamic', cascade='all, delete-orphan')

    __table_args__ = (
        db.UniqueConstraint('name', 'game', 'set_name', 'card_number', name='uq_card_identity'),
    )

    # Fields a client may set
    EDITABLE_FIELDS = ('name', 'game', 'set_name', 'rarity', 'card_number', 'image_url', 'description')

    def __repr__(self):
        return f'<Card {self.name} ({self.game})>'

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'game': self.game.value if self.game else None,
            'set_name': self.set_name,
            'rarity': self.rarity,
            'card_number': self.card_number,
            'image_url': self.image_url,
            'description': self.description,
            'created_at': isoformat(self.created_at),
            'updated_at': isoformat(self.updated_at),
        }

    def summary(self):
        """The subset embedded in price rankings"""
        return {
            'id': self.id,
            'name': self.name,
            'game': self.game.value if self.game else None,
            'set_name': self.set_name,
            'rarity': self.rarity,
        }
