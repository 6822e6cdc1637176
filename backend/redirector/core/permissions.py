"""Account capabilities packed into a 6-bit code.

Bit order, most to least significant: admin, manage, moderate, list, own, random.
``admin`` implies every other capability.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Iterable

FLAG_NAMES = ("admin", "manage", "moderate", "list", "own", "random")
FLAG_COUNT = len(FLAG_NAMES)
MAX_CODE = (1 << FLAG_COUNT) - 1

FULL_ADMIN_TEXT = "can admin (do anything they want)"
NO_PERMISSIONS_TEXT = "can nothing (no permissions to do anything)"

# Order matters: render() lists capabilities in this order
DESCRIPTIONS: dict[str, str] = {
    "manage": "can manage (add/remove/edit auths lower than themself and list all auths except admin)",
    "moderate": "can mod (edit/delete all redirects)",
    "list": "can list (list all redirects)",
    "own": "can own (create/edit/delete/list own redirects)",
    "random": "can random (create random named redirects)",
}


@dataclass(frozen=True)
class PermissionCode:
    admin: int = 0
    manage: int = 0
    moderate: int = 0
    list: int = 0
    own: int = 0
    random: int = 0

    def __post_init__(self) -> None:
        # anything other than 1 counts as "not set"
        for f in fields(self):
            object.__setattr__(self, f.name, 1 if getattr(self, f.name) == 1 else 0)

    @classmethod
    def decode(cls, code: object) -> PermissionCode:
        try:
            value = int(code)  # type: ignore[call-overload]
        except (TypeError, ValueError, OverflowError):
            value = 0
        if value < 0:
            value = 0
        value &= MAX_CODE
        return cls(*((value >> shift) & 1 for shift in range(FLAG_COUNT - 1, -1, -1)))

    def encode(self) -> int:
        value = 0
        for bit in self.as_flags():
            value = (value << 1) | bit
        return value

    @classmethod
    def from_flags(cls, flags: Iterable[object]) -> PermissionCode:
        """Build from a sequence of 0/1 values; missing entries are 0, extras ignored."""
        values = tuple(flags)[:FLAG_COUNT]
        return cls(*values)

    def as_flags(self) -> tuple[int, ...]:
        return tuple(getattr(self, name) for name in FLAG_NAMES)

    @classmethod
    def full_admin(cls) -> PermissionCode:
        return cls(admin=1)

    @classmethod
    def none(cls) -> PermissionCode:
        return cls()

    # can do anything they want
    def can_admin(self) -> bool:
        return self.admin == 1

    def can_manage(self) -> bool:
        return self.manage == 1 or self.can_admin()

    def can_moderate(self) -> bool:
        return self.moderate == 1 or self.can_admin()

    def can_list(self) -> bool:
        return self.list == 1 or self.can_admin()

    def can_own(self) -> bool:
        return self.own == 1 or self.can_admin()

    def can_random(self) -> bool:
        return self.random == 1 or self.can_admin()

    def can_nothing(self) -> bool:
        # raw bits only, no admin implication
        return not any(self.as_flags())

    def render(self) -> str:
        if self.can_admin():
            return FULL_ADMIN_TEXT

        checks = {
            "manage": self.can_manage(),
            "moderate": self.can_moderate(),
            "list": self.can_list(),
            "own": self.can_own(),
            "random": self.can_random(),
        }
        parts = [text for name, text in DESCRIPTIONS.items() if checks[name]]
        return " and ".join(parts) or NO_PERMISSIONS_TEXT

    def __str__(self) -> str:
        return self.render()


# Raw bits given to the account created on an empty deployment.
# Only "manage" is set, not "admin".
SEED_PERMISSION = PermissionCode(manage=1)
