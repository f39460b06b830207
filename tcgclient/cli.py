"""
TCG collection command line client

Usage:
    tcg cards --game pokemon --search char      # browse the catalog
    tcg cards --set "Base Set"                   # search a set
    tcg stats                                    # my collection stats
    tcg gainers --game mtg --limit 5             # top price movers
    tcg history 42 near_mint --days 90           # price history of a card

The API address and token come from --base-url / --token, or the
TCG_API_URL / TCG_API_TOKEN environment variables.
"""
import argparse
import os
import sys

from tcgclient.client import DEFAULT_TIMEOUT, ApiServices
from tcgclient.views import (
    render_card,
    render_collection_stats,
    render_price_history,
    render_top_gainers,
)

DEFAULT_BASE_URL = 'http://localhost:5000'


def _fail(response):
    print(f'Error: {response.error}', file=sys.stderr)
    return 1


def cmd_cards(api, args):
    """Browse cards"""
    if args.set:
        response = api.cards.search_cards_by_set(args.set, game=args.game)
    else:
        response = api.cards.get_cards(game=args.game, search=args.search,
                                       include_prices=True, limit=args.limit)
    if not response.ok:
        return _fail(response)

    if not response.data:
        print('No cards found')
        return 0
    for card in response.data:
        latest = card.get('latest_price') or {}
        print(render_card(card, current_price=latest.get('price'),
                          currency=latest.get('currency', 'EUR')))
    return 0


def cmd_stats(api, args):
    """Collection stats"""
    response = api.collections.get_collection_stats()
    if not response.ok:
        return _fail(response)
    print(render_collection_stats(response.data))
    return 0


def cmd_gainers(api, args):
    """Top gainers"""
    response = api.prices.get_top_gainers(game=args.game, limit=args.limit)
    if not response.ok:
        return _fail(response)
    print(render_top_gainers(response.data))
    return 0


def cmd_history(api, args):
    """Price history"""
    response = api.prices.get_price_history(args.card_id, args.condition, days=args.days)
    if not response.ok:
        return _fail(response)
    print(render_price_history(response.data))
    return 0


def build_parser():
    parser = argparse.ArgumentParser(
        prog='tcg',
        description='TCG collection client',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument('--base-url', default=os.environ.get('TCG_API_URL', DEFAULT_BASE_URL))
    parser.add_argument('--token', default=os.environ.get('TCG_API_TOKEN'))
    parser.add_argument('--timeout', type=float, default=DEFAULT_TIMEOUT)
    subparsers = parser.add_subparsers(dest='command', help='sub-command')

    cards_parser = subparsers.add_parser('cards', help='browse the catalog')
    cards_parser.add_argument('--game', choices=['yugioh', 'mtg', 'pokemon'])
    cards_parser.add_argument('--search', type=str, help='name contains')
    cards_parser.add_argument('--set', type=str, help='set name contains')
    cards_parser.add_argument('--limit', type=int)
    cards_parser.set_defaults(func=cmd_cards)

    stats_parser = subparsers.add_parser('stats', help='collection stats (needs a token)')
    stats_parser.set_defaults(func=cmd_stats)

    gainers_parser = subparsers.add_parser('gainers', help='top price gainers')
    gainers_parser.add_argument('--game', choices=['yugioh', 'mtg', 'pokemon'])
    gainers_parser.add_argument('--limit', type=int)
    gainers_parser.set_defaults(func=cmd_gainers)

    history_parser = subparsers.add_parser('history', help='price history of a card')
    history_parser.add_argument('card_id', type=int)
    history_parser.add_argument('condition')
    history_parser.add_argument('--days', type=int)
    history_parser.set_defaults(func=cmd_history)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    api = ApiServices(args.base_url, token=args.token, timeout=args.timeout)
    return args.func(api, args)


if __name__ == '__main__':
    sys.exit(main())
