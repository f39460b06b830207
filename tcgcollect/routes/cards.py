"""
Card routes - public catalog
"""
from flask import Blueprint, jsonify, request

from tcgcollect.routes import created, deleted
from tcgcollect.services import CardService
from tcgcollect.validation import json_body, parse_bool

bp = Blueprint('cards', __name__, url_prefix='/cards')

service = CardService()


@bp.route('', methods=['GET'])
def card_list():
    """List cards, or search a set with ?set="""
    game = request.args.get('game') or None
    set_name = request.args.get('set')

    if set_name:
        return jsonify(service.search_by_set(set_name, game))

    cards = service.get_cards(
        game=game,
        search=request.args.get('search') or None,
        include_prices=parse_bool(request.args.get('include_prices')),
        limit=request.args.get('limit'),
        offset=request.args.get('offset'),
    )
    return jsonify(cards)


@bp.route('/<card_id>', methods=['GET'])
def card_detail(card_id):
    return jsonify(service.get_card(card_id))


@bp.route('', methods=['POST'])
def create_card():
    return created(service.create_card(json_body()))


@bp.route('/<card_id>', methods=['PUT'])
def update_card(card_id):
    """Partial update"""
    return jsonify(service.update_card(card_id, json_body()))


@bp.route('/<card_id>', methods=['DELETE'])
def delete_card(card_id):
    """Delete a card with its prices and collection entries"""
    service.delete_card(card_id)
    return deleted()
