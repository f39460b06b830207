"""
Price aggregation - latest price resolution, top gainers, collection value

Everything here works on plain sequences of records that have already been
filtered by the store. A price record is anything with ``id``, ``card_id``,
``condition``, ``price``, ``currency`` and ``recorded_at`` (CardPrice rows in
the app, simple namespaces in tests). Nothing here touches the database.
"""
from dataclasses import dataclass
from datetime import timedelta
from decimal import Decimal
from typing import Any, Callable, Dict, Hashable, Iterable, List, Optional

# Rolling comparison window for gainers: current week vs the week before
GAINER_WINDOW = timedelta(days=7)

NO_CARDS = 'No cards'


def _money(value):
    """Exact decimal for a price, whether it arrives as Decimal, int or float"""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _recency(record):
    """Ordering key for observations; id breaks timestamp ties"""
    return (record.recorded_at, record.id)


def latest_by(records: Iterable[Any], key: Callable[[Any], Hashable]) -> Dict[Hashable, Any]:
    """
    Group records by ``key`` and keep the most recent one of each group

    Most recent means the greatest (recorded_at, id): when two observations
    share a timestamp the one inserted later wins, whatever the input order.
    """
    latest = {}
    for record in records:
        group = key(record)
        current = latest.get(group)
        if current is None or _recency(record) > _recency(current):
            latest[group] = record
    return latest


def resolve_latest_prices(records: Iterable[Any]) -> Dict[Any, Any]:
    """Latest observation per condition, for the records of one card"""
    return latest_by(records, key=lambda r: r.condition)


@dataclass
class PriceMovement:
    """Price change of one (card, condition) between two weeks"""
    card_id: Any
    condition: Any
    card: Any
    current: Any
    previous: Any
    change: Decimal
    change_percent: Decimal

    @property
    def price(self):
        return self.current.price

    @property
    def currency(self):
        return self.current.currency

    @property
    def recorded_at(self):
        return self.current.recorded_at


def rank_top_gainers(records: Iterable[Any], now, limit: int = 10,
                     window: timedelta = GAINER_WINDOW) -> List[PriceMovement]:
    """
    Rank (card, condition) pairs by percentage price change

    ``current`` is the newest observation in [now - window, now], ``previous``
    the newest in [now - 2*window, now - window). Pairs missing either side are
    dropped, as are pairs whose previous price is not positive (no meaningful
    percentage). Ties on the percentage fall back to card id and condition so
    the order never depends on input order.
    """
    current_start = now - window
    previous_start = now - 2 * window

    buckets = {}
    for record in sorted(records, key=_recency, reverse=True):
        slot = buckets.setdefault((record.card_id, record.condition), {})
        if current_start <= record.recorded_at <= now:
            slot.setdefault('current', record)
        elif previous_start <= record.recorded_at < current_start:
            slot.setdefault('previous', record)

    movements = []
    for (card_id, condition), slot in buckets.items():
        current, previous = slot.get('current'), slot.get('previous')
        if current is None or previous is None:
            continue
        previous_price = _money(previous.price)
        if previous_price <= 0:
            continue
        change = _money(current.price) - previous_price
        movements.append(PriceMovement(
            card_id=card_id,
            condition=condition,
            card=getattr(current, 'card', None),
            current=current,
            previous=previous,
            change=change,
            change_percent=change / previous_price * 100,
        ))

    movements.sort(key=lambda m: (-m.change_percent, m.card_id, str(m.condition)))
    return movements[:limit]


@dataclass
class CollectionSummary:
    total_cards: int
    total_quantity: int
    total_value: Decimal
    rarest: str
    top_gainer: Optional[PriceMovement] = None


def summarize_collection(entries: Iterable[Any], price_records: Iterable[Any],
                         gainers: Optional[List[PriceMovement]] = None) -> CollectionSummary:
    """
    Aggregate one user's collection

    ``entries`` are collection rows (``card_id``, ``condition``, ``quantity``,
    ``card``); ``price_records`` are the observations of those cards. Each
    entry is valued at the latest price of its own (card, condition) times its
    quantity; entries without any price add nothing. ``total_cards`` counts
    entries, not copies. The rarest card is the entry with the highest latest
    price, the earlier entry winning a tie.
    """
    entries = sorted(entries, key=lambda e: e.id)
    latest = latest_by(price_records, key=lambda r: (r.card_id, r.condition))

    total_value = Decimal('0')
    rarest_entry, rarest_price = None, None
    for entry in entries:
        record = latest.get((entry.card_id, entry.condition))
        if record is None:
            continue
        price = _money(record.price)
        total_value += price * entry.quantity
        if rarest_price is None or price > rarest_price:
            rarest_entry, rarest_price = entry, price

    owned = {(e.card_id, e.condition) for e in entries}
    top_gainer = next((g for g in gainers or [] if (g.card_id, g.condition) in owned), None)

    return CollectionSummary(
        total_cards=len(entries),
        total_quantity=sum(e.quantity for e in entries),
        total_value=total_value,
        rarest=card_label(rarest_entry.card) if rarest_entry else NO_CARDS,
        top_gainer=top_gainer,
    )


def card_label(card):
    """Display label: name (set_name), or just the name for cards without a set"""
    if getattr(card, 'set_name', None):
        return f'{card.name} ({card.set_name})'
    return card.name
