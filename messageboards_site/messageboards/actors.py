from __future__ import annotations

from messageboards.models import UserPreference


class NullUser:
    """Stand-in for the acting user when nobody is signed in.

    Offers the attributes the gate and the policies read from real users, and
    is never granted anything beyond reading.
    """

    pk = None
    id = None
    username = ""
    is_active = False
    is_staff = False
    is_superuser = False
    is_authenticated = False
    is_anonymous = True
    messageboards_anonymous = True

    def __eq__(self, other: object) -> bool:
        return isinstance(other, NullUser)

    def __hash__(self) -> int:
        return hash(NullUser)

    def get_username(self) -> str:
        return self.username

    def has_perm(self, perm, obj=None) -> bool:
        return False

    def has_perms(self, perm_list, obj=None) -> bool:
        return False

    def has_module_perms(self, module) -> bool:
        return False

    def get_all_permissions(self, obj=None) -> set:
        return set()

    def __str__(self) -> str:  # pragma: no cover
        return "anonymous"

    @property
    def messageboards_preference(self) -> UserPreference:
        return UserPreference()


def is_anonymous(actor) -> bool:
    if actor is None:
        return True
    return bool(getattr(actor, "messageboards_anonymous", not getattr(actor, "is_authenticated", False)))
