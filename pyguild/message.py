"""
The MIT License (MIT)

Copyright (c) 2024-present MCausc78

Permission is hereby granted, free of charge, to any person obtaining a
copy of this software and associated documentation files (the "Software"),
to deal in the Software without restriction, including without limitation
the rights to use, copy, modify, merge, publish, distribute, sublicense,
and/or sell copies of the Software, and to permit persons to whom the
Software is furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in
all copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS
OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING
FROM, OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER
DEALINGS IN THE SOFTWARE.
"""

from __future__ import annotations

from attrs import define, field
from datetime import datetime
import typing

from .base import Base

if typing.TYPE_CHECKING:
    from .channel import TextChannel


@define(slots=True)
class Message(Base):
    """Represents a message in a guild text channel."""

    channel_id: str = field(repr=True, kw_only=True)
    """:class:`str`: The ID of the channel the message was sent in."""

    author_id: str = field(repr=True, kw_only=True)
    """:class:`str`: The ID of the user who sent the message."""

    content: str = field(repr=True, kw_only=True)
    """:class:`str`: The message's content."""

    edited_at: typing.Optional[datetime] = field(repr=True, kw_only=True)
    """Optional[:class:`~datetime.datetime`]: When the message was last edited."""

    pinned: bool = field(repr=True, kw_only=True)
    """:class:`bool`: Whether the message is pinned."""

    tts: bool = field(repr=False, kw_only=True, default=False)
    """:class:`bool`: Whether the message was sent as text-to-speech."""

    @property
    def timestamp(self) -> datetime:
        """:class:`~datetime.datetime`: When the message was sent. Equivalent to :attr:`.created_at`."""
        return self.created_at

    def is_in(self, channel: TextChannel, /) -> bool:
        """:class:`bool`: Whether the message belongs to given channel."""
        return self.channel_id == channel.id


__all__ = ('Message',)
