"""
Price routes - current prices, history and trends
"""
from flask import Blueprint, jsonify, request

from tcgcollect.errors import ValidationError
from tcgcollect.routes import created, deleted
from tcgcollect.services import PriceService
from tcgcollect.validation import json_body

bp = Blueprint('prices', __name__, url_prefix='/prices')

service = PriceService()


@bp.route('', methods=['GET'])
def card_prices():
    """Current price of each condition of ?card_id="""
    card_id = request.args.get('card_id')
    if not card_id:
        raise ValidationError('card_id is required')
    return jsonify(service.get_card_prices(card_id))


@bp.route('/history', methods=['GET'])
def price_history():
    """Chart data: ?card_id=&condition=&days="""
    card_id = request.args.get('card_id')
    condition = request.args.get('condition')
    if not card_id or not condition:
        raise ValidationError('card_id and condition are required')
    return jsonify(service.get_price_history(card_id, condition, request.args.get('days')))


@bp.route('/top-gainers', methods=['GET'])
def top_gainers():
    """Biggest week-over-week percentage gains: ?game=&limit="""
    return jsonify(service.get_top_gainers(
        game=request.args.get('game') or None,
        limit=request.args.get('limit'),
    ))


@bp.route('', methods=['POST'])
def add_price():
    """Record a new observation"""
    return created(service.add_price(json_body()))


@bp.route('/<price_id>', methods=['PUT'])
def update_price(price_id):
    return jsonify(service.update_price(price_id, json_body()))


@bp.route('/<price_id>', methods=['DELETE'])
def delete_price(price_id):
    service.delete_price(price_id)
    return deleted()
