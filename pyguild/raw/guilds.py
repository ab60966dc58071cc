from __future__ import annotations

import typing
import typing_extensions

if typing.TYPE_CHECKING:
    from .channels import GuildChannel


class Role(typing.TypedDict):
    id: str
    name: str
    color: typing_extensions.NotRequired[int]
    hoist: typing_extensions.NotRequired[bool]
    position: int
    permissions: int
    managed: typing_extensions.NotRequired[bool]
    mentionable: typing_extensions.NotRequired[bool]


class User(typing.TypedDict):
    id: str
    username: str
    discriminator: typing_extensions.NotRequired[str]
    avatar: typing_extensions.NotRequired[typing.Optional[str]]
    bot: typing_extensions.NotRequired[bool]


class Member(typing.TypedDict):
    user: User
    nick: typing_extensions.NotRequired[typing.Optional[str]]
    roles: list[str]
    joined_at: typing_extensions.NotRequired[typing.Optional[str]]
    deaf: typing_extensions.NotRequired[bool]
    mute: typing_extensions.NotRequired[bool]


class Guild(typing.TypedDict):
    id: str
    name: str
    owner_id: str
    icon: typing_extensions.NotRequired[typing.Optional[str]]
    roles: list[Role]
    members: typing_extensions.NotRequired[list[Member]]
    channels: typing_extensions.NotRequired[list[GuildChannel]]


__all__ = (
    'Role',
    'User',
    'Member',
    'Guild',
)
