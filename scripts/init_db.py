#!/usr/bin/env python3
"""
Initialise the database

    python scripts/init_db.py            # create tables
    python scripts/init_db.py --seed     # ... and load the sample catalog
"""
import argparse
import os
import sys
from decimal import Decimal
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from loguru import logger

from tcgcollect import create_app, db
from tcgcollect.enums import Condition, Game
from tcgcollect.models import Card, CardPrice

SAMPLE_CARDS = [
    {'name': 'Dark Magician', 'game': Game.YUGIOH, 'set_name': 'Legend of Blue Eyes',
     'rarity': 'Ultra Rare', 'card_number': 'LOB-005', 'image_url': '/assets/yugioh-card.jpg'},
    {'name': 'Black Lotus', 'game': Game.MTG, 'set_name': 'Alpha',
     'rarity': 'Rare', 'card_number': '232', 'image_url': '/assets/mtg-card.jpg'},
    {'name': 'Blue-Eyes White Dragon', 'game': Game.YUGIOH, 'set_name': 'Legend of Blue Eyes',
     'rarity': 'Ultra Rare', 'card_number': 'LOB-001', 'image_url': '/assets/yugioh-card.jpg'},
]

SAMPLE_PRICES = [
    ('Dark Magician', Condition.NEAR_MINT, Decimal('45.99')),
    ('Black Lotus', Condition.LIGHT_PLAY, Decimal('8500.00')),
]


def seed_sample_data():
    """Sample cards and prices; cards already present are left alone"""
    added = 0
    for fields in SAMPLE_CARDS:
        exists = Card.query.filter_by(name=fields['name'], game=fields['game'],
                                      card_number=fields['card_number']).first()
        if exists is None:
            db.session.add(Card(**fields))
            added += 1
    db.session.commit()

    for name, condition, price in SAMPLE_PRICES:
        card = Card.query.filter_by(name=name).first()
        if card.prices.filter_by(condition=condition).first() is None:
            db.session.add(CardPrice(card_id=card.id, condition=condition, price=price,
                                     currency='EUR', source='tcgplayer'))
    db.session.commit()
    logger.info(f'Seeded {added} sample cards')


def init_database(seed=False):
    """Create all tables"""
    app = create_app()
    with app.app_context():
        db.create_all()
        logger.info('Database tables created')
        if seed:
            seed_sample_data()


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='Initialise the TCG collection database')
    parser.add_argument('--seed', action='store_true', help='load the sample catalog')
    args = parser.parse_args()
    init_database(seed=args.seed)
