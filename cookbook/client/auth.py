from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import Callable, Optional

from starlette.concurrency import run_in_threadpool

from cookbook.client.identity import AuthenticatedUser, IdentityProvider, Unsubscribe

log = logging.getLogger(__name__)


class AuthState(str, Enum):
    LOADING = "loading"
    AUTHENTICATED = "authenticated"
    ANONYMOUS = "anonymous"


AuthListener = Callable[["AuthContext"], None]


class AuthContext:
    """
    Current identity, driven by the provider's change notifications.

    Starts in LOADING and settles on AUTHENTICATED or ANONYMOUS. Listeners
    hear about a notification only when the state or the identity changed.
    """

    def __init__(self, provider: IdentityProvider) -> None:
        self._provider = provider
        self._lock = threading.Lock()
        self._listeners: list[AuthListener] = []
        self._unsubscribe: Optional[Unsubscribe] = None
        self.state = AuthState.LOADING
        self.user: Optional[AuthenticatedUser] = None

    @property
    def loading(self) -> bool:
        return self.state is AuthState.LOADING

    def start(self) -> None:
        if self._unsubscribe is None:
            self._unsubscribe = self._provider.on_auth_state_change(self._on_identity)

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def subscribe(self, listener: AuthListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def login(self, email: str, password: str) -> None:
        await run_in_threadpool(self._provider.sign_in, email, password)

    async def register(self, name: str, email: str, password: str) -> None:
        await run_in_threadpool(self._provider.sign_up, email, password)
        display_name = name.strip()
        if display_name:
            await run_in_threadpool(self._provider.update_display_name, display_name)

    async def logout(self) -> None:
        await run_in_threadpool(self._provider.sign_out)

    async def get_token(self) -> Optional[str]:
        """A fresh token per call, or None when nobody is signed in."""
        if await run_in_threadpool(self._provider.current_user) is None:
            return None
        return await run_in_threadpool(self._provider.fetch_token)

    def _on_identity(self, user: Optional[AuthenticatedUser]) -> None:
        new_state = AuthState.AUTHENTICATED if user else AuthState.ANONYMOUS
        with self._lock:
            if new_state is self.state and user == self.user:
                return
            self.state = new_state
            self.user = user
        log.info("Auth state -> %s (%s)", new_state.value, user.uid if user else "-")
        for listener in list(self._listeners):
            listener(self)
