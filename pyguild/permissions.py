from __future__ import annotations

import typing

from .enums import OverwriteType
from .flags import Permissions

if typing.TYPE_CHECKING:
    from . import raw

_new_permissions = Permissions.__new__


class PermissionOverwrite:
    """Represents a single channel permission overwrite for a member or role."""

    id: str
    """:class:`str`: The ID of the member or role this overwrite applies to.

    The guild's own ID denotes the ``@everyone`` overwrite.
    """

    type: OverwriteType
    """:class:`.OverwriteType`: Whether :attr:`id` refers to a member or a role."""

    raw_allow: int
    """:class:`int`: The raw value of allowed permissions."""

    raw_deny: int
    """:class:`int`: The raw value of denied permissions."""

    __slots__ = ('id', 'type', 'raw_allow', 'raw_deny')

    def __init__(
        self,
        id: str,
        type: OverwriteType,
        /,
        *,
        allow: Permissions = Permissions.NONE,
        deny: Permissions = Permissions.NONE,
    ) -> None:
        self.id = id
        self.type = OverwriteType(type)
        self.raw_allow = allow.value
        self.raw_deny = deny.value

    @property
    def allow(self) -> Permissions:
        """:class:`.Permissions`: The permissions to allow."""
        ret = _new_permissions(Permissions)
        ret.value = self.raw_allow
        return ret

    @allow.setter
    def allow(self, allow: Permissions) -> None:
        self.raw_allow = allow.value

    @property
    def deny(self) -> Permissions:
        """:class:`.Permissions`: The permissions to deny."""
        ret = _new_permissions(Permissions)
        ret.value = self.raw_deny
        return ret

    @deny.setter
    def deny(self, deny: Permissions) -> None:
        self.raw_deny = deny.value

    def is_empty(self) -> bool:
        """:class:`bool`: Whether the overwrite neither allows nor denies anything."""
        return self.raw_allow == 0 and self.raw_deny == 0

    def build(self) -> raw.PermissionOverwrite:
        return {
            'id': self.id,
            'type': self.type.value,
            'allow': self.raw_allow,
            'deny': self.raw_deny,
        }

    def __eq__(self, other: object, /) -> bool:
        return (
            self is other
            or isinstance(other, PermissionOverwrite)
            and self.id == other.id
            and self.type == other.type
            and self.raw_allow == other.raw_allow
            and self.raw_deny == other.raw_deny
        )

    def __hash__(self) -> int:
        return hash((self.id, self.raw_allow, self.raw_deny))

    def __repr__(self) -> str:
        return f'<PermissionOverwrite id={self.id!r} type={self.type!r} allow={self.raw_allow} deny={self.raw_deny}>'


ADMINISTRATOR: typing.Final[int] = Permissions.administrator.value
ALL_PERMISSIONS: typing.Final[int] = Permissions.ALL_VALUE

__all__ = (
    'PermissionOverwrite',
    'ADMINISTRATOR',
    'ALL_PERMISSIONS',
)
