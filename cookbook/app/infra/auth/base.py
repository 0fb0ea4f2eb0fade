# cookbook/app/infra/auth/base.py
"""
Abstract base class for bearer token verification.
"""
from __future__ import annotations

from abc import ABC, abstractmethod

from cookbook.app.domain.models import AuthenticatedUser


class TokenVerifier(ABC):
    """
    Verifies identity-provider tokens on every request. Results are never cached.

    Implementations:
    - SupabaseTokenVerifier: validates against Supabase GoTrue
    """

    @abstractmethod
    def verify(self, token: str) -> AuthenticatedUser:
        """
        Verify a bearer token.

        Args:
            token: Raw token from the Authorization header

        Returns:
            The verified caller

        Raises:
            AuthError: If the token is invalid or expired
        """
        pass
