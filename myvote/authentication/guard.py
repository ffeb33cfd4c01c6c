# myvote/authentication/guard.py

from functools import wraps
from flask import g, request
import logging

from myvote.errors import Forbidden, Unauthorized

logger = logging.getLogger(__name__)

# Two access levels: any authenticated user, and administrators
# (users whose is_admin flag is set).


def extract_bearer_token(req):
    auth = req.headers.get('Authorization', '')
    scheme, _, token = auth.partition(' ')
    token = token.strip()
    if scheme.lower() != 'bearer' or not token:
        return None
    return token


class AuthorizationGuard:
    def __init__(self, token_manager, credential_store):
        self.token_manager = token_manager
        self.credential_store = credential_store

    def resolve_caller(self, req=None):
        req = req if req is not None else request
        token = extract_bearer_token(req)
        if token is None:
            return None
        user_id = self.token_manager.get_identity(token)
        if not user_id:
            return None
        # Token claims may be stale; always load the live record.
        user = self.credential_store.get_user(user_id)
        if user is None:
            logger.info("Valid token for unknown user %s", user_id)
        return user

    def require_authenticated(self, req=None):
        user = self.resolve_caller(req)
        if user is None:
            raise Unauthorized('Missing or invalid token')
        return user

    def require_admin(self, req=None):
        user = self.require_authenticated(req)
        if not user.is_admin:
            raise Forbidden('Admin access required')
        return user

    def login_required(self, func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            g.current_user = self.require_authenticated()
            return func(*args, **kwargs)
        return wrapper

    def admin_required(self, func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            g.current_user = self.require_admin()
            return func(*args, **kwargs)
        return wrapper
