"""
Collection routes - the caller's own cards; every route needs a bearer token
"""
from flask import Blueprint, jsonify
from flask_login import current_user, login_required

from tcgcollect.routes import created, deleted
from tcgcollect.services import CollectionService
from tcgcollect.validation import json_body

bp = Blueprint('collections', __name__, url_prefix='/collections')

service = CollectionService()


@bp.route('', methods=['GET'])
@login_required
def collection_list():
    """My collection, newest first, each entry with its card"""
    return jsonify(service.get_user_collections(current_user.id))


@bp.route('/stats', methods=['GET'])
@login_required
def collection_stats():
    return jsonify(service.get_collection_stats(current_user.id))


@bp.route('', methods=['POST'])
@login_required
def add_to_collection():
    """Add copies; an existing card + condition entry grows instead"""
    return created(service.add_card_to_collection(current_user.id, json_body()))


@bp.route('/<entry_id>', methods=['PUT'])
@login_required
def update_collection_item(entry_id):
    return jsonify(service.update_collection_item(current_user.id, entry_id, json_body()))


@bp.route('/<entry_id>', methods=['DELETE'])
@login_required
def remove_from_collection(entry_id):
    service.remove_from_collection(current_user.id, entry_id)
    return deleted()
