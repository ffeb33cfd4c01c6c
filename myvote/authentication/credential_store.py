# myvote/authentication/credential_store.py

import logging
import uuid
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from myvote import db
from myvote.database.models import User
from myvote.errors import AuthError, ConflictError, InternalError

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = 'Invalid credentials'


def safe_user(user):
    # Public view of a user record; never includes the password hash.
    return {
        'id': user.id,
        'name': user.name,
        'email': user.email,
        'phone': user.phone,
        'isAdmin': bool(user.is_admin),
    }


class CredentialStore:
    """Registration, login and user lookup.

    Uniqueness of email and phone is checked up front for a friendly message
    and enforced again by the database's UNIQUE constraints on commit.
    """

    def __init__(self, password_service, token_manager, audit_logger, validator):
        self.password_service = password_service
        self.token_manager = token_manager
        self.audit_logger = audit_logger
        self.validator = validator
        self._unknown_user_hash = None

    def _dummy_hash(self):
        if self._unknown_user_hash is None:
            self._unknown_user_hash = self.password_service.hash_password(uuid.uuid4().hex)
        return self._unknown_user_hash

    def get_user(self, user_id):
        if not user_id:
            return None
        return db.session.get(User, user_id)

    def find_by_identifier(self, identifier):
        return db.session.query(User).filter(
            or_(User.email == identifier, User.phone == identifier)
        ).first()

    def register(self, payload):
        data = self.validator.validate_registration(payload)

        if data['email'] and db.session.query(User).filter_by(email=data['email']).first():
            raise ConflictError('Email already registered.')
        if data['phone'] and db.session.query(User).filter_by(phone=data['phone']).first():
            raise ConflictError('Phone already registered.')

        password_hash = self.password_service.hash_password(data.pop('password'))
        user_id = str(uuid.uuid4())
        db.session.add(User(id=user_id, password_hash=password_hash, is_admin=False, **data))
        try:
            db.session.commit()
        except IntegrityError as e:
            db.session.rollback()
            logger.info("Registration lost a uniqueness race: %s", e.orig)
            raise ConflictError('Email or phone already registered.') from e
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error("Could not save user: %s", e, exc_info=True)
            raise InternalError('Could not save user') from e

        self.audit_logger.log_security_event('user_registered', {'user_id': user_id}, user_id=user_id)
        return user_id

    def authenticate(self, identifier, password):
        identifier, password = self.validator.validate_login({'identifier': identifier, 'password': password})

        user = self.find_by_identifier(identifier)
        if user is None:
            # Unknown identifiers still pay for one argon2 verify.
            self.password_service.verify_password(password, self._dummy_hash())
        if not user or not self.password_service.verify_password(password, user.password_hash):
            self.audit_logger.log_security_event('failed_login', {'identifier': identifier})
            raise AuthError(INVALID_CREDENTIALS)

        if self.password_service.needs_rehash(user.password_hash):
            self._rehash(user, password)

        token = self.token_manager.generate_token(user)
        self.audit_logger.log_security_event('successful_login', {'user_id': user.id}, user_id=user.id)
        return token

    def _rehash(self, user, password):
        # Upgrading the stored hash is opportunistic; login still succeeds if it fails.
        try:
            user.password_hash = self.password_service.hash_password(password)
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.warning("Could not upgrade password hash for %s: %s", user.id, e)
