from __future__ import annotations

import logging

from supabase import Client

from cookbook.app.domain.errors import AuthError
from cookbook.app.domain.models import AuthenticatedUser
from cookbook.app.infra.auth.base import TokenVerifier

logger = logging.getLogger(__name__)


class SupabaseTokenVerifier(TokenVerifier):
    def __init__(self, client: Client):
        self._client = client

    def verify(self, token: str) -> AuthenticatedUser:
        try:
            res = self._client.auth.get_user(token)
        except Exception as error:
            logger.info("Token rejected by identity provider: %s", error)
            raise AuthError("Invalid/expired token") from error

        user = getattr(res, "user", None) if res else None
        if not user:
            raise AuthError("Invalid token")

        # display name lives in user metadata
        name = None
        meta = getattr(user, "user_metadata", None) or {}
        if isinstance(meta, dict):
            name = meta.get("name") or meta.get("display_name")

        return AuthenticatedUser(uid=str(user.id), email=user.email, name=name)
