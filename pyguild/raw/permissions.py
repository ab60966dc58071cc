from __future__ import annotations

import typing


class PermissionOverwrite(typing.TypedDict):
    id: str
    type: typing.Literal['role', 'member']
    allow: int
    deny: int


class DataEditChannelPermission(typing.TypedDict):
    allow: int
    deny: int
    type: typing.Literal['role', 'member']


__all__ = (
    'PermissionOverwrite',
    'DataEditChannelPermission',
)
