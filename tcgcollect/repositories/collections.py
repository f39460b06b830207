"""
Collection queries - every query is scoped to its owner
"""
from sqlalchemy.orm import joinedload

from tcgcollect import db
from tcgcollect.models.collection import UserCollection
from tcgcollect.repositories import apply_updates, store_call


class CollectionRepository:

    @store_call
    def list_for_user(self, user_id):
        return UserCollection.query.options(joinedload(UserCollection.card))\
            .filter(UserCollection.user_id == user_id)\
            .order_by(UserCollection.created_at.desc(), UserCollection.id.desc()).all()

    @store_call
    def get_for_user(self, user_id, entry_id):
        """An entry owned by ``user_id``; other users' entries look absent"""
        return UserCollection.query.filter_by(id=entry_id, user_id=user_id).first()

    @store_call
    def find(self, user_id, card_id, condition):
        return UserCollection.query.filter_by(user_id=user_id, card_id=card_id, condition=condition).first()

    @store_call
    def create(self, user_id, **fields):
        entry = UserCollection(user_id=user_id, **fields)
        db.session.add(entry)
        db.session.commit()
        return entry

    @store_call
    def update(self, entry, updates):
        apply_updates(entry, updates)
        db.session.commit()
        return entry

    @store_call
    def delete(self, entry):
        db.session.delete(entry)
        db.session.commit()
