"""
Plain-text renderers for cards, collection stats and price trends
"""

CURRENCY_SYMBOLS = {'EUR': '€', 'USD': '$', 'GBP': '£', 'JPY': '¥'}


def format_price(amount, currency='EUR'):
    """€1,234.50 / ¥1,235; unknown currencies get a code suffix"""
    if amount is None:
        return '-'
    symbol = CURRENCY_SYMBOLS.get(currency)
    if currency == 'JPY':
        return f'{symbol}{amount:,.0f}'
    if symbol:
        return f'{symbol}{amount:,.2f}'
    return f'{amount:,.2f} {currency}'


def price_trend(current, previous):
    """
    Direction and percentage between two prices: ('up' | 'down' | 'flat', pct)
    ``pct`` is None when there is nothing to compare against
    """
    if current is None or previous is None:
        return 'none', None
    change = current - previous
    direction = 'up' if change > 0 else 'down' if change < 0 else 'flat'
    if previous == 0:
        return direction, None
    return direction, round(change / previous * 100, 1)


_ARROWS = {'up': '▲', 'down': '▼', 'flat': '=', 'none': ' '}


def render_card(card, current_price=None, previous_price=None, owned=0, currency='EUR'):
    """One card as two lines: name/badges, then set, price and trend"""
    badges = ' '.join(filter(None, [f"[{card.get('game', '').upper()}]", card.get('rarity')]))
    direction, pct = price_trend(current_price, previous_price)
    trend = f"{_ARROWS[direction]} {pct:+.1f}%" if pct is not None else _ARROWS[direction]

    details = [card.get('set_name') or '-']
    if card.get('condition'):
        details.append(card['condition'])
    line2 = f"  {' • '.join(details)}  {format_price(current_price, currency)} {trend}".rstrip()
    if owned:
        line2 += f'  (owned: {owned})'
    return f"{card.get('name')} {badges}\n{line2}"


def render_collection_stats(stats):
    """The four headline numbers of a collection"""
    gainer = stats.get('topGainer')
    if gainer:
        gainer_line = f"Top gainer:   {gainer['change']:+.1f}%  {gainer['name']}"
    else:
        gainer_line = 'Top gainer:   -'
    return '\n'.join([
        f"Total cards:  {stats.get('totalCards', 0):,}",
        f"Total value:  {format_price(stats.get('totalValue', 0))}",
        gainer_line,
        f"Rarest card:  {stats.get('rarest', '-')}",
    ])


def render_top_gainers(gainers):
    if not gainers:
        return 'No price movements in the last two weeks'
    lines = []
    for rank, item in enumerate(gainers, start=1):
        card = item.get('cards') or {}
        lines.append(
            f"{rank:>2}. {card.get('name', item.get('card_id'))} ({item.get('condition')})  "
            f"{format_price(item.get('previous_price'), item.get('currency'))} -> "
            f"{format_price(item.get('price'), item.get('currency'))}  "
            f"{item.get('change_percent', 0):+.2f}%"
        )
    return '\n'.join(lines)


def render_price_history(history):
    prices = history.get('prices') or []
    header = f"Card {history.get('card_id')} · {history.get('condition')}"
    if not prices:
        return f'{header}\n  no prices recorded'
    rows = [f"  {p['recorded_at'][:10]}  {format_price(p['price'], p.get('currency', 'EUR'))}"
            f"{'  ' + p['source'] if p.get('source') else ''}" for p in prices]
    first, last = prices[0]['price'], prices[-1]['price']
    direction, pct = price_trend(last, first)
    summary = f'  trend: {direction}' + (f' ({pct:+.1f}%)' if pct is not None else '')
    return '\n'.join([header, *rows, summary])
