# myvote/security/token_manager.py
from datetime import timedelta
from flask_jwt_extended import create_access_token, decode_token
from flask import current_app, Flask

SESSION_TTL = timedelta(hours=8)


# Signed bearer tokens via Flask-JWT-Extended. The token carries the user id
# as its subject plus name/email/phone claims; those claims are informational
# only and callers re-resolve the live user record by id.
class TokenManager:
    def __init__(self, app: Flask = None):
        if app:
            self.init_app(app)

    def init_app(self, app: Flask):
        app.config.setdefault("JWT_SECRET_KEY", "change_this_secret_key")
        app.config.setdefault("JWT_ACCESS_TOKEN_EXPIRES", SESSION_TTL)

    def generate_token(self, user, expires_in: int = None) -> str:
        claims = {
            "id": user.id,
            "name": user.name or "",
            "email": user.email or "",
            "phone": user.phone or "",
        }
        expires_delta = timedelta(seconds=expires_in) if expires_in is not None else SESSION_TTL
        return create_access_token(identity=user.id, additional_claims=claims, expires_delta=expires_delta)

    def validate_token(self, token: str):
        # Return the verified claims, or None for any malformed, forged or expired token.
        if not token:
            return None
        try:
            claims = decode_token(token, allow_expired=False)
        except Exception as e:
            current_app.logger.warning(f"Token validation failed: {str(e)}")
            return None
        if claims.get("type") != "access":
            return None
        return claims

    def get_identity(self, token: str):
        claims = self.validate_token(token)
        return claims.get("sub") if claims else None
