"""
Collection rules - a user's owned cards and their value
"""
from loguru import logger

from tcgcollect.enums import Condition
from tcgcollect.errors import ConflictError, NotFoundError, ValidationError
from tcgcollect.models.collection import UserCollection
from tcgcollect.pricing import summarize_collection
from tcgcollect.repositories import CardRepository, CollectionRepository, PriceRepository
from tcgcollect.services.prices import PriceService
from tcgcollect.utils import to_float
from tcgcollect.validation import (
    MAX_INT, clean_text, parse_date, parse_id, parse_purchase_price, parse_quantity, pick_fields,
)


class CollectionService:

    def __init__(self, repository=None, cards=None, prices=None, price_service=None):
        self.repository = repository or CollectionRepository()
        self.cards = cards or CardRepository()
        self.prices = prices or PriceRepository()
        self.price_service = price_service or PriceService(repository=self.prices, cards=self.cards)

    def get_user_collections(self, user_id):
        self._require_user(user_id)
        return [entry.to_dict(with_card=True) for entry in self.repository.list_for_user(user_id)]

    def add_card_to_collection(self, user_id, data):
        """
        Add copies of a card in a given condition

        An existing (card, condition) entry absorbs the new copies, so a
        retried request grows the quantity instead of failing.
        """
        self._require_user(user_id)
        card_id = data.get('card_id')
        if card_id in (None, ''):
            raise ValidationError('User ID and Card ID are required')
        card_id = parse_id(card_id, 'Card ID')
        condition = Condition.parse(data.get('condition') or Condition.NEAR_MINT)
        quantity = parse_quantity(data.get('quantity', 1))
        purchase_price = parse_purchase_price(data.get('purchase_price'))
        purchase_date = parse_date(data.get('purchase_date'), 'Purchase date')
        notes = clean_text(data.get('notes'), 'Notes')

        if self.cards.get(card_id) is None:
            raise NotFoundError('Card not found')

        existing = self.repository.find(user_id, card_id, condition)
        if existing is not None:
            updates = {'quantity': self._merged_quantity(existing, quantity)}
            if purchase_price is not None:
                updates['purchase_price'] = purchase_price
            if purchase_date is not None:
                updates['purchase_date'] = purchase_date
            if notes is not None:
                updates['notes'] = notes
            entry = self.repository.update(existing, updates)
            logger.info(f'Collection entry {entry.id} of {user_id}: +{quantity} -> {entry.quantity}')
            return entry.to_dict()

        try:
            entry = self.repository.create(
                user_id,
                card_id=card_id,
                condition=condition,
                quantity=quantity,
                purchase_price=purchase_price,
                purchase_date=purchase_date,
                notes=notes,
            )
        except ConflictError:
            # A concurrent insert won the race; fold into it
            existing = self.repository.find(user_id, card_id, condition)
            if existing is None:
                raise
            entry = self.repository.update(existing, {'quantity': self._merged_quantity(existing, quantity)})
        logger.info(f'Collection entry {entry.id} of {user_id}: card={card_id} {condition.value} x{entry.quantity}')
        return entry.to_dict()

    def update_collection_item(self, user_id, entry_id, data):
        entry = self._get_or_404(user_id, entry_id)
        updates = pick_fields(data, UserCollection.EDITABLE_FIELDS)
        if 'condition' in updates:
            updates['condition'] = Condition.parse(updates['condition'])
        if 'quantity' in updates:
            updates['quantity'] = parse_quantity(updates['quantity'])
        if 'purchase_price' in updates:
            updates['purchase_price'] = parse_purchase_price(updates['purchase_price'])
        if 'purchase_date' in updates:
            updates['purchase_date'] = parse_date(updates['purchase_date'], 'Purchase date')
        if 'notes' in updates:
            updates['notes'] = clean_text(updates['notes'], 'Notes')

        condition = updates.get('condition')
        if condition is not None and condition != entry.condition:
            clash = self.repository.find(user_id, entry.card_id, condition)
            if clash is not None:
                raise ValidationError('This card is already in the collection in that condition')

        entry = self.repository.update(entry, updates)
        logger.info(f'Collection entry {entry.id} of {user_id} updated: {sorted(updates)}')
        return entry.to_dict()

    def remove_from_collection(self, user_id, entry_id):
        entry = self._get_or_404(user_id, entry_id)
        self.repository.delete(entry)
        logger.info(f'Collection entry {entry_id} of {user_id} removed')

    def get_collection_stats(self, user_id):
        """Entry count, estimated value, rarest card and best performer"""
        self._require_user(user_id)
        entries = self.repository.list_for_user(user_id)
        card_ids = sorted({entry.card_id for entry in entries})

        summary = summarize_collection(
            entries,
            self.prices.for_cards(card_ids),
            gainers=self.price_service.top_gainers_for_cards(card_ids),
        )

        top_gainer = None
        if summary.top_gainer is not None:
            top_gainer = {
                'name': summary.top_gainer.card.name,
                'change': round(float(summary.top_gainer.change_percent), 1),
            }
        return {
            'totalCards': summary.total_cards,
            'totalQuantity': summary.total_quantity,
            'totalValue': to_float(summary.total_value),
            'topGainer': top_gainer,
            'rarest': summary.rarest,
        }

    def _get_or_404(self, user_id, entry_id):
        self._require_user(user_id)
        if entry_id in (None, ''):
            raise ValidationError('User ID and Collection ID are required')
        entry = self.repository.get_for_user(user_id, parse_id(entry_id, 'Collection ID'))
        if entry is None:
            raise NotFoundError('Collection entry not found')
        return entry

    @staticmethod
    def _merged_quantity(entry, quantity):
        total = entry.quantity + quantity
        if total > MAX_INT:
            raise ValidationError('Quantity is too large')
        return total

    @staticmethod
    def _require_user(user_id):
        if not user_id:
            raise ValidationError('User ID is required')
