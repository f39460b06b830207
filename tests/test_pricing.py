"""
Price aggregation tests - plain records, no database
"""
from datetime import datetime, timedelta
from decimal import Decimal
from types import SimpleNamespace

from tcgcollect.enums import Condition
from tcgcollect.pricing import (
    NO_CARDS,
    card_label,
    latest_by,
    rank_top_gainers,
    resolve_latest_prices,
    summarize_collection,
)

NOW = datetime(2025, 8, 20, 12, 0, 0)
NM = Condition.NEAR_MINT
LP = Condition.LIGHT_PLAY


def price(id, card_id, amount, days_ago, condition=NM, currency='EUR', card=None):
    return SimpleNamespace(
        id=id,
        card_id=card_id,
        condition=condition,
        price=Decimal(str(amount)),
        currency=currency,
        recorded_at=NOW - timedelta(days=days_ago),
        card=card,
    )


def card(name, set_name=None):
    return SimpleNamespace(name=name, set_name=set_name)


def entry(id, card_id, quantity, condition=NM, card_obj=None):
    return SimpleNamespace(id=id, card_id=card_id, condition=condition, quantity=quantity, card=card_obj)


class TestLatestPrice:

    def test_newest_per_condition(self):
        records = [
            price(1, 1, 10, days_ago=5),
            price(2, 1, 12, days_ago=1),
            price(3, 1, 50, days_ago=3, condition=LP),
        ]
        latest = resolve_latest_prices(records)
        assert latest[NM].id == 2
        assert latest[LP].id == 3

    def test_same_timestamp_later_id_wins(self):
        first = price(1, 1, 10, days_ago=1)
        second = price(2, 1, 11, days_ago=1)
        assert resolve_latest_prices([first, second])[NM].id == 2
        assert resolve_latest_prices([second, first])[NM].id == 2

    def test_empty(self):
        assert latest_by([], key=lambda r: r.card_id) == {}


class TestTopGainers:

    def test_week_over_week_change(self):
        records = [price(1, 1, 100, days_ago=10), price(2, 1, 110, days_ago=1)]
        gainers = rank_top_gainers(records, NOW)
        assert len(gainers) == 1
        assert gainers[0].change == Decimal('10')
        assert gainers[0].change_percent == Decimal('10')
        assert gainers[0].previous.id == 1
        assert gainers[0].current.id == 2

    def test_uses_newest_of_each_week(self):
        records = [
            price(1, 1, 80, days_ago=12),
            price(2, 1, 100, days_ago=9),
            price(3, 1, 150, days_ago=6),
            price(4, 1, 120, days_ago=2),
        ]
        gainer = rank_top_gainers(records, NOW)[0]
        assert gainer.previous.id == 2
        assert gainer.current.id == 4
        assert gainer.change_percent == Decimal('20')

    def test_missing_previous_week_is_skipped(self):
        records = [price(1, 1, 100, days_ago=3), price(2, 1, 130, days_ago=1)]
        assert rank_top_gainers(records, NOW) == []

    def test_older_than_two_weeks_ignored(self):
        records = [price(1, 1, 10, days_ago=20), price(2, 1, 100, days_ago=1)]
        assert rank_top_gainers(records, NOW) == []

    def test_zero_previous_price_is_skipped(self):
        records = [price(1, 1, 0, days_ago=10), price(2, 1, 5, days_ago=1)]
        assert rank_top_gainers(records, NOW) == []

    def test_ordering_and_limit(self):
        records = [
            price(1, 1, 100, days_ago=10), price(2, 1, 105, days_ago=1),
            price(3, 2, 100, days_ago=10), price(4, 2, 150, days_ago=1),
            price(5, 3, 100, days_ago=10), price(6, 3, 90, days_ago=1),
        ]
        ranked = rank_top_gainers(records, NOW)
        assert [g.card_id for g in ranked] == [2, 1, 3]
        assert ranked[-1].change_percent == Decimal('-10')
        assert [g.card_id for g in rank_top_gainers(records, NOW, limit=2)] == [2, 1]

    def test_conditions_ranked_separately(self):
        records = [
            price(1, 1, 100, days_ago=10), price(2, 1, 120, days_ago=1),
            price(3, 1, 100, days_ago=10, condition=LP), price(4, 1, 101, days_ago=1, condition=LP),
        ]
        ranked = rank_top_gainers(records, NOW)
        assert [(g.card_id, g.condition) for g in ranked] == [(1, NM), (1, LP)]

    def test_ties_broken_by_card_id(self):
        records = [
            price(1, 7, 10, days_ago=10), price(2, 7, 20, days_ago=1),
            price(3, 3, 10, days_ago=10), price(4, 3, 20, days_ago=1),
        ]
        assert [g.card_id for g in rank_top_gainers(records, NOW)] == [3, 7]


class TestCollectionSummary:

    def test_value_and_rarest(self):
        a, b = card('A', 'Alpha'), card('B', 'Beta')
        entries = [entry(1, 1, 2, card_obj=a), entry(2, 2, 1, card_obj=b)]
        records = [price(1, 1, 10, days_ago=1), price(2, 2, 50, days_ago=1)]

        summary = summarize_collection(entries, records)
        assert summary.total_cards == 2
        assert summary.total_quantity == 3
        assert summary.total_value == Decimal('70')
        assert summary.rarest == 'B (Beta)'
        assert summary.top_gainer is None

    def test_entry_valued_at_its_own_condition(self):
        a = card('A')
        entries = [entry(1, 1, 2, condition=LP, card_obj=a)]
        records = [price(1, 1, 100, days_ago=1), price(2, 1, 30, days_ago=2, condition=LP)]
        summary = summarize_collection(entries, records)
        assert summary.total_value == Decimal('60')
        assert summary.rarest == 'A'

    def test_unpriced_entries_add_nothing(self):
        entries = [entry(1, 1, 5, card_obj=card('A'))]
        summary = summarize_collection(entries, [])
        assert summary.total_cards == 1
        assert summary.total_value == Decimal('0')
        assert summary.rarest == NO_CARDS

    def test_empty_collection(self):
        summary = summarize_collection([], [])
        assert summary.total_cards == 0
        assert summary.total_value == Decimal('0')
        assert summary.rarest == NO_CARDS

    def test_rarest_tie_goes_to_earlier_entry(self):
        entries = [entry(2, 2, 1, card_obj=card('Second')), entry(1, 1, 1, card_obj=card('First'))]
        records = [price(1, 1, 50, days_ago=1), price(2, 2, 50, days_ago=1)]
        assert summarize_collection(entries, records).rarest == 'First'

    def test_top_gainer_restricted_to_owned(self):
        owned = card('Owned')
        entries = [entry(1, 1, 1, card_obj=owned)]
        records = [
            price(1, 1, 100, days_ago=10, card=owned), price(2, 1, 105, days_ago=1, card=owned),
            price(3, 2, 100, days_ago=10), price(4, 2, 200, days_ago=1),
        ]
        gainers = rank_top_gainers(records, NOW)
        summary = summarize_collection(entries, records, gainers=gainers)
        assert summary.top_gainer.card_id == 1
        assert summary.top_gainer.card.name == 'Owned'


class TestCardLabel:

    def test_with_and_without_set(self):
        assert card_label(card('Black Lotus', 'Alpha')) == 'Black Lotus (Alpha)'
        assert card_label(card('Black Lotus')) == 'Black Lotus'
