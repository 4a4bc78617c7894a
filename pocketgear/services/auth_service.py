import hmac
import logging
from typing import Any, Mapping, Optional
from pocketgear.config import settings
from pocketgear.schemas.auth import SessionIdentity

logger = logging.getLogger(__name__)

SESSION_USER_KEY = "user"


class AuthService:
    """Credential check and session identity handling."""

    @staticmethod
    def authenticate(email: str, password: str) -> Optional[SessionIdentity]:
        """Return the identity for a matching credential, else None."""
        email_ok = hmac.compare_digest(email.strip().lower().encode(), settings.admin_email.lower().encode())
        password_ok = hmac.compare_digest(password.encode(), settings.admin_password.encode())
        if not (email_ok and password_ok):
            logger.warning("Failed login attempt for %s", email)
            return None
        return SessionIdentity(email=settings.admin_email, name="Admin")

    @staticmethod
    def identity_from_session(session: Mapping[str, Any]) -> Optional[SessionIdentity]:
        data = session.get(SESSION_USER_KEY)
        if not isinstance(data, dict):
            return None
        return SessionIdentity(**data)

    @staticmethod
    def store_identity(session: dict, identity: SessionIdentity) -> None:
        session[SESSION_USER_KEY] = identity.model_dump()
