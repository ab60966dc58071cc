from __future__ import annotations

import typing
import typing_extensions

from .guilds import User


class InviteGuild(typing.TypedDict):
    id: str
    name: str


class InviteChannel(typing.TypedDict):
    id: str
    name: str
    type: int


class Invite(typing.TypedDict):
    code: str
    guild: typing_extensions.NotRequired[InviteGuild]
    channel: InviteChannel
    inviter: typing_extensions.NotRequired[User]
    uses: typing_extensions.NotRequired[int]
    max_uses: typing_extensions.NotRequired[int]
    max_age: typing_extensions.NotRequired[int]
    temporary: typing_extensions.NotRequired[bool]
    created_at: typing_extensions.NotRequired[str]


class DataCreateInvite(typing.TypedDict):
    max_age: typing_extensions.NotRequired[int]
    max_uses: typing_extensions.NotRequired[int]
    temporary: typing_extensions.NotRequired[bool]
    unique: typing_extensions.NotRequired[bool]


__all__ = (
    'InviteGuild',
    'InviteChannel',
    'Invite',
    'DataCreateInvite',
)
