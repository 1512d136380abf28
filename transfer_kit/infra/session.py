"""
Authenticated session seam

The wallet SDK owns login and token refresh; this package only reads the
current bearer token.
"""

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class Session(Protocol):
    """Source of the bearer token for the balances API"""

    @property
    def token(self) -> Optional[str]:
        """Current bearer token, or None when logged out"""
        ...


class StaticSession:
    """
    Session holding a fixed token

    Usage:
        session = StaticSession(os.environ["DYNAMIC_AUTH_TOKEN"])
    """

    def __init__(self, token: Optional[str] = None):
        self._token = token or None

    @property
    def token(self) -> Optional[str]:
        return self._token

    def __repr__(self) -> str:
        state = "authenticated" if self._token else "anonymous"
        return f"StaticSession({state})"
