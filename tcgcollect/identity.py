"""
Caller identity - bearer tokens resolved through an identity provider

The app never checks credentials itself. A provider turns a bearer token
into an Identity (or None) and Flask-Login's request loader exposes it as
``current_user`` for the request.
"""
from dataclasses import dataclass
from typing import Optional

import requests
from flask import current_app, request
from itsdangerous import BadSignature, URLSafeTimedSerializer
from loguru import logger

from tcgcollect import login_manager
from tcgcollect.errors import AuthError
from tcgcollect.models.user import CurrentUser
from tcgcollect.services.profiles import ProfileService

EXTENSION_KEY = 'tcg_identity'


@dataclass(frozen=True)
class Identity:
    user_id: str
    username: Optional[str] = None
    display_name: Optional[str] = None


class SignedTokenIdentity:
    """
    Tokens signed with the app's secret key

    Stands in for an external auth service in development and tests; the
    token carries the identity and expires after ``max_age`` seconds.
    """
    salt = 'tcg-identity'

    def __init__(self, secret_key, max_age=3600):
        self.serializer = URLSafeTimedSerializer(secret_key, salt=self.salt)
        self.max_age = max_age

    def issue_token(self, user_id, username=None, display_name=None):
        return self.serializer.dumps({
            'sub': str(user_id),
            'username': username,
            'display_name': display_name,
        })

    def resolve(self, token) -> Optional[Identity]:
        try:
            claims = self.serializer.loads(token, max_age=self.max_age)
        except BadSignature:
            return None
        if not isinstance(claims, dict) or not claims.get('sub'):
            return None
        return Identity(claims['sub'], claims.get('username'), claims.get('display_name'))


class RemoteIdentity:
    """
    Ask an external auth service who owns a token

    ``GET url`` with the bearer token; a 2xx JSON body with an ``id`` is the
    user. Anything else, including transport failures, is unauthenticated.
    """

    def __init__(self, url, api_key=None, timeout=5, session=None):
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({'User-Agent': 'TCG-Collection-Manager/1.0'})
        if api_key:
            self.session.headers.update({'apikey': api_key})

    def resolve(self, token) -> Optional[Identity]:
        try:
            response = self.session.get(
                self.url,
                headers={'Authorization': f'Bearer {token}'},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f'Identity service unreachable: {e}')
            return None

        if not response.ok:
            logger.debug(f'Identity service rejected token: HTTP {response.status_code}')
            return None
        try:
            data = response.json()
        except ValueError:
            logger.error('Identity service returned invalid JSON')
            return None
        if not isinstance(data, dict) or not data.get('id'):
            return None

        metadata = data.get('user_metadata') or {}
        return Identity(str(data['id']), metadata.get('username'), metadata.get('display_name'))


def build_provider(config):
    backend = config.get('IDENTITY_BACKEND', 'signed')
    if backend == 'signed':
        return SignedTokenIdentity(config['SECRET_KEY'], max_age=config.get('TOKEN_MAX_AGE', 3600))
    if backend == 'remote':
        if not config.get('IDENTITY_URL'):
            raise RuntimeError('IDENTITY_URL must be set for the remote identity backend')
        return RemoteIdentity(config['IDENTITY_URL'], api_key=config.get('IDENTITY_API_KEY'),
                              timeout=config.get('IDENTITY_TIMEOUT', 5))
    raise RuntimeError(f'Unknown IDENTITY_BACKEND: {backend}')


def get_provider():
    return current_app.extensions[EXTENSION_KEY]


def bearer_token(header):
    """Token from an ``Authorization: Bearer <token>`` header"""
    if not header:
        return None
    scheme, _, token = header.partition(' ')
    if scheme.lower() != 'bearer' or not token.strip():
        return None
    return token.strip()


def init_identity(app):
    app.extensions[EXTENSION_KEY] = build_provider(app.config)


@login_manager.request_loader
def load_user_from_request(req):
    """Flask-Login request loader: bearer token -> CurrentUser"""
    token = bearer_token(req.headers.get('Authorization'))
    if token is None:
        return None
    identity = get_provider().resolve(token)
    if identity is None:
        return None

    ProfileService().ensure_profile(identity)
    return CurrentUser(identity)


@login_manager.unauthorized_handler
def unauthorized():
    if not request.headers.get('Authorization'):
        raise AuthError('Authorization header required')
    raise AuthError('Unauthorized')
