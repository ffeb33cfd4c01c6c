# myvote/encryption/password_hashing.py

from argon2 import PasswordHasher
from argon2.exceptions import HashingError, InvalidHashError, VerificationError

from myvote.errors import InternalError, ValidationError

MIN_PASSWORD_LENGTH = 6

# Salted one-way password hashing with Argon2id. The salt is generated per
# hash and embedded in the encoded digest.


class PasswordHashingService:
    def __init__(self):
        self.ph = PasswordHasher(
            time_cost=3,
            memory_cost=65536,
            parallelism=4,
            hash_len=32,
            salt_len=16,
        )

    def hash_password(self, password: str) -> str:
        if not self.is_acceptable_password(password):
            raise ValidationError(
                f"Password is required and must be at least {MIN_PASSWORD_LENGTH} characters."
            )
        try:
            return self.ph.hash(password)
        except HashingError as e:
            raise InternalError(f"Password hashing failed: {e}") from e

    def verify_password(self, password: str, hash_value: str) -> bool:
        if not isinstance(password, str) or not hash_value:
            return False
        try:
            return self.ph.verify(hash_value, password)
        except (VerificationError, InvalidHashError):
            return False

    def needs_rehash(self, hash_value: str) -> bool:
        return self.ph.check_needs_rehash(hash_value)

    def is_acceptable_password(self, password) -> bool:
        return isinstance(password, str) and len(password) >= MIN_PASSWORD_LENGTH
