"""
Module: ability.py
Description: Capability object for authorization checks.

Handlers receive an Ability explicitly and ask it whether an action on
a subject is permitted, instead of consulting ambient request state.

Key Components:
- Ability: Immutable set of (action, subject) permissions
- ability_for_api_key(): Resolve the ability granted to a caller

Dependencies: typing, auth.api_key
"""

from typing import FrozenSet, Iterable, Optional, Tuple

from auth.api_key import needs_rehash, verify_api_key
from utils.logger import get_logger

logger = get_logger(__name__)

MANAGE = "manage"
ALL = "all"

WEBHOOK_DELIVERY = "webhook_delivery"


class Ability:
    """
    Permissions held by a caller.

    "manage" matches every action and "all" matches every subject.

    Example:
        >>> ability = Ability([("create", "webhook_delivery")])
        >>> ability.can("create", "webhook_delivery")
        True
        >>> ability.can("destroy", "webhook_delivery")
        False
    """

    def __init__(self, permissions: Iterable[Tuple[str, str]] = ()):
        self.permissions: FrozenSet[Tuple[str, str]] = frozenset(permissions)

    @classmethod
    def none(cls) -> "Ability":
        return cls()

    @classmethod
    def admin(cls) -> "Ability":
        return cls([(MANAGE, ALL)])

    def can(self, action: str, subject: str) -> bool:
        for granted_action, granted_subject in self.permissions:
            if granted_action not in (action, MANAGE):
                continue
            if granted_subject in (subject, ALL):
                return True
        return False

    def cannot(self, action: str, subject: str) -> bool:
        return not self.can(action, subject)

    def __repr__(self) -> str:
        return f"Ability({sorted(self.permissions)!r})"


def ability_for_api_key(api_key: Optional[str], api_key_hash: Optional[str]) -> Ability:
    """
    Resolve the ability of a caller presenting api_key.

    A key matching the configured hash may dispatch webhook deliveries;
    anything else gets no permissions. A hash made with fewer iterations
    than current still verifies but is reported.
    """
    if api_key and api_key_hash and verify_api_key(api_key, api_key_hash):
        if needs_rehash(api_key_hash):
            logger.warning("Configured API key hash is outdated, regenerate API_KEY_HASH")
        return Ability([("create", WEBHOOK_DELIVERY)])

    logger.info("API key grants no permissions", has_key=bool(api_key))
    return Ability.none()
