from .account import Account
from .mapping import Mapping

__all__ = [
    "Account",
    "Mapping",
]
