"""
HTTP routes - one blueprint per slice
"""
from flask import jsonify


def created(payload):
    return jsonify(payload), 201


def deleted():
    return jsonify({'success': True})
