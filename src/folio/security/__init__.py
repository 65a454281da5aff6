"""Anti-forgery token sources."""

from folio.security.csrf import CSRFConfig, SessionTokenSource

__all__ = ["CSRFConfig", "SessionTokenSource"]
