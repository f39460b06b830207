"""
Price rules - current prices, history windows, top gainers, observations
"""
from datetime import timedelta

from flask import current_app
from loguru import logger

from tcgcollect.enums import Condition, Currency, Game
from tcgcollect.errors import NotFoundError, ValidationError
from tcgcollect.models.price import CardPrice
from tcgcollect.pricing import GAINER_WINDOW, rank_top_gainers, resolve_latest_prices
from tcgcollect.repositories import CardRepository, PriceRepository
from tcgcollect.utils import isoformat, to_float, utcnow
from tcgcollect.validation import clean_text, parse_id, parse_int, parse_price, pick_fields

DEFAULT_HISTORY_DAYS = 30
MAX_HISTORY_DAYS = 365
DEFAULT_GAINERS = 10
MAX_GAINERS = 50


class PriceService:

    def __init__(self, repository=None, cards=None, clock=utcnow, default_currency=None):
        self.repository = repository or PriceRepository()
        self.cards = cards or CardRepository()
        self.clock = clock
        self.default_currency = default_currency

    def get_card_prices(self, card_id):
        """Newest observation of each condition a card has been priced in"""
        card_id = parse_id(card_id, 'Card ID')
        latest = resolve_latest_prices(self.repository.for_card(card_id))
        return [latest[condition].to_dict() for condition in Condition if condition in latest]

    def get_price_history(self, card_id, condition, days=DEFAULT_HISTORY_DAYS):
        if card_id in (None, '') or condition in (None, ''):
            raise ValidationError('Card ID and condition are required')
        card_id = parse_id(card_id, 'Card ID')
        days = parse_int(days, 'Days', default=DEFAULT_HISTORY_DAYS, minimum=1, maximum=MAX_HISTORY_DAYS,
                         maximum_message=f'Cannot fetch price history for more than {MAX_HISTORY_DAYS} days')
        condition = Condition.parse(condition)

        now = self.clock()
        prices = self.repository.history(card_id, condition, since=now - timedelta(days=days), until=now)
        return {
            'card_id': card_id,
            'condition': condition.value,
            'days': days,
            'prices': [
                {
                    'price': to_float(p.price),
                    'currency': p.currency,
                    'source': p.source,
                    'recorded_at': isoformat(p.recorded_at),
                }
                for p in prices
            ],
        }

    def get_top_gainers(self, game=None, limit=DEFAULT_GAINERS):
        game = Game.parse(game) if game else None
        limit = parse_int(limit, 'Limit', default=DEFAULT_GAINERS, minimum=1, maximum=MAX_GAINERS,
                          maximum_message=f'Limit cannot exceed {MAX_GAINERS}')

        now = self.clock()
        records = self.repository.recorded_since(now - 2 * GAINER_WINDOW, game=game)
        return [movement_to_dict(m) for m in rank_top_gainers(records, now, limit=limit)]

    def top_gainers_for_cards(self, card_ids):
        """Every rankable movement among the given cards, best first"""
        now = self.clock()
        records = self.repository.recorded_since(now - 2 * GAINER_WINDOW, card_ids=list(card_ids))
        return rank_top_gainers(records, now, limit=len(records))

    def add_price(self, data):
        card_id, condition = data.get('card_id'), data.get('condition')
        if card_id in (None, '') or condition in (None, ''):
            raise ValidationError('Card ID and condition are required')
        if data.get('price') is None:
            raise ValidationError('Price is required')

        fields = {
            'card_id': parse_id(card_id, 'Card ID'),
            'condition': Condition.parse(condition),
            'price': parse_price(data.get('price')),
            'currency': Currency.parse(data.get('currency') or self._default_currency()).value,
            'source': clean_text(data.get('source'), 'Source', max_length=100),
        }
        if self.cards.get(fields['card_id']) is None:
            raise NotFoundError('Card not found')

        price = self.repository.create(**fields)
        logger.info(f'Price recorded: card={price.card_id} {price.condition.value} {price.price} {price.currency}')
        return price.to_dict()

    def update_price(self, price_id, data):
        """Administrative correction of an existing observation"""
        price = self._get_or_404(price_id)
        updates = pick_fields(data, CardPrice.EDITABLE_FIELDS)
        if 'condition' in updates:
            updates['condition'] = Condition.parse(updates['condition'])
        if 'price' in updates:
            updates['price'] = parse_price(updates['price'])
        if 'currency' in updates:
            updates['currency'] = Currency.parse(updates['currency']).value
        if 'source' in updates:
            updates['source'] = clean_text(updates['source'], 'Source', max_length=100)

        price = self.repository.update(price, updates)
        logger.info(f'Price corrected: {price.id} {sorted(updates)}')
        return price.to_dict()

    def delete_price(self, price_id):
        price = self._get_or_404(price_id)
        self.repository.delete(price)
        logger.info(f'Price deleted: {price_id}')

    def _default_currency(self):
        return self.default_currency or current_app.config.get('DEFAULT_CURRENCY', 'EUR')

    def _get_or_404(self, price_id):
        price = self.repository.get(parse_id(price_id, 'Price ID'))
        if price is None:
            raise NotFoundError('Price not found')
        return price


def movement_to_dict(movement):
    """A ranked price change, with the card it belongs to"""
    return {
        'card_id': movement.card_id,
        'condition': str(movement.condition),
        'price': to_float(movement.price),
        'previous_price': to_float(movement.previous.price),
        'change': to_float(movement.change),
        'change_percent': round(float(movement.change_percent), 2),
        'currency': movement.currency,
        'recorded_at': isoformat(movement.recorded_at),
        'cards': movement.card.summary() if movement.card is not None else None,
    }
