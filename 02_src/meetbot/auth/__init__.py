"""Authorization module."""

from .oauth import SCOPES, AuthorizationGate, IAuthorizationGate

__all__ = ["AuthorizationGate", "IAuthorizationGate", "SCOPES"]
