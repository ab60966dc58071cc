from __future__ import annotations

import typing
import typing_extensions

from .guilds import User


class Webhook(typing.TypedDict):
    id: str
    type: typing_extensions.NotRequired[int]
    guild_id: typing_extensions.NotRequired[str]
    channel_id: str
    user: typing_extensions.NotRequired[User]
    name: typing.Optional[str]
    avatar: typing.Optional[str]
    token: typing_extensions.NotRequired[str]


class DataCreateWebhook(typing.TypedDict):
    name: str
    avatar: typing_extensions.NotRequired[typing.Optional[str]]


__all__ = (
    'Webhook',
    'DataCreateWebhook',
)
