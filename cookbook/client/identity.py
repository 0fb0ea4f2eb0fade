# cookbook/client/identity.py
"""
Identity provider port and its Supabase adapter.
The rest of the client only talks to IdentityProvider.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Optional

from supabase import Client, create_client

from cookbook.client.config import ClientSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthenticatedUser:
    uid: str
    email: Optional[str] = None
    name: Optional[str] = None


IdentityListener = Callable[[Optional[AuthenticatedUser]], None]
Unsubscribe = Callable[[], None]


class IdentityProvider(ABC):
    """
    Abstract interface for the external identity service.

    Implementations:
    - SupabaseIdentityProvider: Supabase GoTrue through supabase-py
    """

    @abstractmethod
    def sign_in(self, email: str, password: str) -> AuthenticatedUser:
        pass

    @abstractmethod
    def sign_up(self, email: str, password: str) -> AuthenticatedUser:
        pass

    @abstractmethod
    def update_display_name(self, name: str) -> None:
        pass

    @abstractmethod
    def sign_out(self) -> None:
        pass

    @abstractmethod
    def current_user(self) -> Optional[AuthenticatedUser]:
        pass

    @abstractmethod
    def fetch_token(self) -> str:
        """Mint a fresh bearer token for the signed-in user."""
        pass

    @abstractmethod
    def on_auth_state_change(self, listener: IdentityListener) -> Unsubscribe:
        """
        Push identity changes to ``listener``. The current identity is
        delivered once right after subscribing.
        """
        pass


def _user_from_supabase(user: Any) -> Optional[AuthenticatedUser]:
    if not user:
        return None
    meta = getattr(user, "user_metadata", None) or {}
    name = meta.get("name") if isinstance(meta, dict) else None
    return AuthenticatedUser(uid=str(user.id), email=getattr(user, "email", None), name=name)


class SupabaseIdentityProvider(IdentityProvider):
    def __init__(self, client: Client):
        self._client = client

    @classmethod
    def from_settings(cls, settings: ClientSettings) -> "SupabaseIdentityProvider":
        if not settings.SUPABASE_URL or not settings.SUPABASE_ANON_KEY:
            raise ValueError("COOKBOOK_SUPABASE_URL and COOKBOOK_SUPABASE_ANON_KEY required")
        return cls(create_client(settings.SUPABASE_URL, settings.SUPABASE_ANON_KEY))

    def sign_in(self, email: str, password: str) -> AuthenticatedUser:
        res = self._client.auth.sign_in_with_password({"email": email, "password": password})
        user = _user_from_supabase(res.user)
        if user is None:
            raise PermissionError("Sign in returned no user")
        return user

    def sign_up(self, email: str, password: str) -> AuthenticatedUser:
        res = self._client.auth.sign_up({"email": email, "password": password})
        user = _user_from_supabase(res.user)
        if user is None:
            raise PermissionError("Sign up returned no user")
        return user

    def update_display_name(self, name: str) -> None:
        self._client.auth.update_user({"data": {"name": name}})

    def sign_out(self) -> None:
        self._client.auth.sign_out()

    def current_user(self) -> Optional[AuthenticatedUser]:
        session = self._client.auth.get_session()
        return _user_from_supabase(session.user) if session else None

    def fetch_token(self) -> str:
        res = self._client.auth.refresh_session()
        session = getattr(res, "session", None)
        if not session or not session.access_token:
            raise PermissionError("No active session")
        return session.access_token

    def on_auth_state_change(self, listener: IdentityListener) -> Unsubscribe:
        def _callback(event: Any, session: Any) -> None:
            logger.debug("Auth event: %s", event)
            listener(_user_from_supabase(session.user) if session else None)

        subscription = self._client.auth.on_auth_state_change(_callback)
        listener(self.current_user())
        return subscription.unsubscribe
