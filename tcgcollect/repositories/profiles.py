"""
Profile queries
"""
from tcgcollect import db
from tcgcollect.models.user import UserProfile
from tcgcollect.repositories import apply_updates, store_call


class ProfileRepository:

    @store_call
    def get_by_user(self, user_id):
        return UserProfile.query.filter_by(user_id=user_id).first()

    @store_call
    def get_by_username(self, username):
        return UserProfile.query.filter_by(username=username).first()

    @store_call
    def create(self, user_id, **fields):
        profile = UserProfile(user_id=user_id, **fields)
        db.session.add(profile)
        db.session.commit()
        return profile

    @store_call
    def update(self, profile, updates):
        apply_updates(profile, updates)
        db.session.commit()
        return profile
