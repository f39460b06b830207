"""
Profile rules
"""
from loguru import logger

from tcgcollect.errors import ConflictError, NotFoundError, ValidationError
from tcgcollect.models.user import UserProfile
from tcgcollect.repositories import ProfileRepository
from tcgcollect.validation import clean_text, pick_fields


class ProfileService:

    def __init__(self, repository=None):
        self.repository = repository or ProfileRepository()

    def ensure_profile(self, identity):
        """The caller's profile, created on first sight of the identity"""
        profile = self.repository.get_by_user(identity.user_id)
        if profile is not None:
            return profile

        username = identity.username
        if username and self.repository.get_by_username(username) is not None:
            username = None
        try:
            profile = self.repository.create(identity.user_id, username=username,
                                             display_name=identity.display_name)
        except ConflictError:
            # Another request created it first
            profile = self.repository.get_by_user(identity.user_id)
            if profile is None:
                raise
            return profile
        logger.info(f'Profile created for {identity.user_id}')
        return profile

    def get_profile(self, user_id):
        profile = self.repository.get_by_user(user_id)
        if profile is None:
            raise NotFoundError('Profile not found')
        return profile.to_dict()

    def update_profile(self, user_id, data):
        """Only the owner reaches this: user_id comes from the token"""
        profile = self.repository.get_by_user(user_id)
        if profile is None:
            raise NotFoundError('Profile not found')

        updates = pick_fields(data, UserProfile.EDITABLE_FIELDS)
        if 'username' in updates:
            updates['username'] = clean_text(updates['username'], 'Username', max_length=50)
            other = self.repository.get_by_username(updates['username']) if updates['username'] else None
            if other is not None and other.user_id != user_id:
                raise ValidationError('Username is already taken')
        if 'display_name' in updates:
            updates['display_name'] = clean_text(updates['display_name'], 'Display name', max_length=100)
        if 'avatar_url' in updates:
            updates['avatar_url'] = clean_text(updates['avatar_url'], 'Avatar URL', max_length=500)

        try:
            profile = self.repository.update(profile, updates)
        except ConflictError:
            raise ValidationError('Username is already taken') from None
        logger.info(f'Profile of {user_id} updated: {sorted(updates)}')
        return profile.to_dict()
