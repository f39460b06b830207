"""
Profile routes - public read, owner-only write
"""
from flask import Blueprint, jsonify
from flask_login import current_user, login_required

from tcgcollect.services import ProfileService
from tcgcollect.validation import json_body

bp = Blueprint('profiles', __name__, url_prefix='/profiles')

service = ProfileService()


@bp.route('/me', methods=['GET'])
@login_required
def my_profile():
    return jsonify(service.get_profile(current_user.id))


@bp.route('/me', methods=['PUT'])
@login_required
def update_my_profile():
    return jsonify(service.update_profile(current_user.id, json_body()))


@bp.route('/<user_id>', methods=['GET'])
def profile(user_id):
    return jsonify(service.get_profile(user_id))
