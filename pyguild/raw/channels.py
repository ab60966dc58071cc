from __future__ import annotations

import typing
import typing_extensions

from .guilds import Member
from .permissions import PermissionOverwrite


class GuildChannel(typing.TypedDict):
    id: str
    type: int
    guild_id: typing_extensions.NotRequired[str]
    name: str
    position: int
    permission_overwrites: list[PermissionOverwrite]
    nsfw: typing_extensions.NotRequired[bool]
    topic: typing_extensions.NotRequired[typing.Optional[str]]
    last_message_id: typing_extensions.NotRequired[typing.Optional[str]]
    last_pin_timestamp: typing_extensions.NotRequired[typing.Optional[str]]
    bitrate: typing_extensions.NotRequired[int]
    user_limit: typing_extensions.NotRequired[int]
    voice_members: typing_extensions.NotRequired[list[Member]]


class PartialGuildChannel(typing.TypedDict):
    id: typing_extensions.NotRequired[str]
    type: typing_extensions.NotRequired[int]
    name: typing_extensions.NotRequired[str]
    position: typing_extensions.NotRequired[int]
    permission_overwrites: typing_extensions.NotRequired[list[PermissionOverwrite]]
    nsfw: typing_extensions.NotRequired[bool]
    topic: typing_extensions.NotRequired[typing.Optional[str]]
    last_message_id: typing_extensions.NotRequired[typing.Optional[str]]
    last_pin_timestamp: typing_extensions.NotRequired[typing.Optional[str]]
    bitrate: typing_extensions.NotRequired[int]
    user_limit: typing_extensions.NotRequired[int]


class DataEditChannel(typing.TypedDict):
    name: typing_extensions.NotRequired[str]
    topic: typing_extensions.NotRequired[typing.Optional[str]]
    bitrate: typing_extensions.NotRequired[int]
    user_limit: typing_extensions.NotRequired[int]
    nsfw: typing_extensions.NotRequired[bool]


class DataChannelPosition(typing.TypedDict):
    id: str
    position: int


__all__ = (
    'GuildChannel',
    'PartialGuildChannel',
    'DataEditChannel',
    'DataChannelPosition',
)
