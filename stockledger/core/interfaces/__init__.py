"""Abstract interfaces implemented by the infrastructure layer."""

from stockledger.core.interfaces.item_store import (
    IItemStore,
    ItemMutation,
    ItemPage,
    ItemQuery,
)
from stockledger.core.interfaces.security import (
    IPasswordHasher,
    ITokenService,
    TokenClaims,
)
from stockledger.core.interfaces.user_store import IUserStore

__all__ = [
    "IItemStore",
    "ItemMutation",
    "ItemPage",
    "ItemQuery",
    "IPasswordHasher",
    "ITokenService",
    "TokenClaims",
    "IUserStore",
]
