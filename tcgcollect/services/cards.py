"""
Card rules - listing, lookup and administrative edits
"""
from loguru import logger

from tcgcollect.enums import Game
from tcgcollect.errors import ConflictError, NotFoundError, ValidationError
from tcgcollect.models.card import Card
from tcgcollect.repositories import CardRepository
from tcgcollect.validation import MAX_INT, clean_text, parse_id, parse_int, pick_fields

MAX_CARDS_PER_PAGE = 100

# Optional text fields and their column widths
_TEXT_FIELDS = {
    'set_name': 200,
    'rarity': 50,
    'card_number': 30,
    'image_url': 500,
    'description': None,
}


class CardService:

    def __init__(self, repository=None):
        self.repository = repository or CardRepository()

    def get_cards(self, game=None, search=None, include_prices=False, limit=50, offset=0):
        """
        List cards ordered by name

        With ``include_prices`` only priced cards are returned, each carrying
        its newest observation as ``latest_price``.
        """
        game = Game.parse(game) if game else None
        limit = parse_int(limit, 'Limit', default=50, minimum=1, maximum=MAX_CARDS_PER_PAGE,
                          maximum_message=f'Limit cannot exceed {MAX_CARDS_PER_PAGE} cards')
        offset = parse_int(offset, 'Offset', default=0, minimum=0, maximum=MAX_INT)
        search = clean_text(search, 'Search')

        if not include_prices:
            return [card.to_dict() for card in self.repository.list_cards(game, search, limit, offset)]

        result = []
        for card, price in self.repository.list_with_latest_prices(game, search, limit, offset):
            data = card.to_dict()
            observed = price.to_dict()
            data['latest_price'] = {
                field: observed[field] for field in ('price', 'condition', 'currency', 'recorded_at')
            }
            result.append(data)
        return result

    def get_card(self, card_id):
        return self._get_or_404(card_id).to_dict()

    def search_by_set(self, set_name, game=None):
        set_name = set_name.strip() if isinstance(set_name, str) else ''
        if len(set_name) < 2:
            raise ValidationError('Set name must be at least 2 characters long')
        game = Game.parse(game) if game else None
        return [card.to_dict() for card in self.repository.search_by_set(set_name, game)]

    def create_card(self, data):
        fields = pick_fields(data, Card.EDITABLE_FIELDS)
        fields['name'] = clean_text(fields.get('name'), 'Card name', required=True, max_length=200)
        fields['game'] = Game.parse(fields.get('game'))
        for field, max_length in _TEXT_FIELDS.items():
            fields[field] = clean_text(fields.get(field), field, max_length=max_length)

        self._ensure_unique(fields)
        card = self._write(self.repository.create, **fields)
        logger.info(f'Card created: {card.id} {card.name} ({card.game.value})')
        return card.to_dict()

    def update_card(self, card_id, data):
        card = self._get_or_404(card_id)
        updates = pick_fields(data, Card.EDITABLE_FIELDS)
        if 'name' in updates:
            updates['name'] = clean_text(updates['name'], 'Card name', required=True, max_length=200)
        if 'game' in updates:
            updates['game'] = Game.parse(updates['game'])
        for field, max_length in _TEXT_FIELDS.items():
            if field in updates:
                updates[field] = clean_text(updates[field], field, max_length=max_length)

        identity = {field: updates.get(field, getattr(card, field))
                    for field in ('name', 'game', 'set_name', 'card_number')}
        self._ensure_unique(identity, exclude_id=card.id)

        card = self._write(self.repository.update, card, updates)
        logger.info(f'Card updated: {card.id} {sorted(updates)}')
        return card.to_dict()

    def delete_card(self, card_id):
        card = self._get_or_404(card_id)
        self.repository.delete(card)
        logger.info(f'Card deleted: {card_id}')

    def _get_or_404(self, card_id):
        card_id = parse_id(card_id, 'Card ID')
        card = self.repository.get(card_id)
        if card is None:
            raise NotFoundError('Card not found')
        return card

    def _ensure_unique(self, fields, exclude_id=None):
        duplicate = self.repository.find_duplicate(
            fields['name'], fields['game'], fields.get('set_name'), fields.get('card_number'),
            exclude_id=exclude_id,
        )
        if duplicate is not None:
            raise ValidationError('A card with this name, game, set and number already exists')

    @staticmethod
    def _write(operation, *args, **kwargs):
        try:
            return operation(*args, **kwargs)
        except ConflictError:
            raise ValidationError('A card with this name, game, set and number already exists') from None
