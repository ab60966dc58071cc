from __future__ import annotations

import typing
import typing_extensions

from .guilds import User


class Message(typing.TypedDict):
    id: str
    channel_id: str
    author: User
    content: str
    timestamp: str
    edited_timestamp: typing.Optional[str]
    pinned: bool
    tts: typing_extensions.NotRequired[bool]


class DataBulkDeleteMessages(typing.TypedDict):
    messages: list[str]


__all__ = (
    'Message',
    'DataBulkDeleteMessages',
)
