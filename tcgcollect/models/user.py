"""
User profile model
"""
from flask_login import UserMixin

from tcgcollect import db
from tcgcollect.utils import isoformat, utcnow


class UserProfile(db.Model):
    """Public profile attached to an external identity"""
    __tablename__ = 'profiles'

    id = db.Column(db.Integer, primary_key=True)

    # Identity id (one profile per identity)
    user_id = db.Column(db.String(64), unique=True, nullable=False, index=True)

    # Username (unique, optional)
    username = db.Column(db.String(50), unique=True, index=True)

    display_name = db.Column(db.String(100))
    avatar_url = db.Column(db.String(500))

    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    EDITABLE_FIELDS = ('username', 'display_name', 'avatar_url')

    def __repr__(self):
        return f'<UserProfile {self.user_id} {self.username}>'

    def to_dict(self):
        return {
            'id': self.id,
            'user_id': self.user_id,
            'username': self.username,
            'display_name': self.display_name,
            'avatar_url': self.avatar_url,
            'created_at': isoformat(self.created_at),
            'updated_at': isoformat(self.updated_at),
        }


class CurrentUser(UserMixin):
    """
    The authenticated caller for one request
    Built from a resolved identity; never persisted
    """

    def __init__(self, identity):
        self.id = identity.user_id
        self.identity = identity

    def __repr__(self):
        return f'<CurrentUser {self.id}>'
