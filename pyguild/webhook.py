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
import typing

from .base import Base


@define(slots=True)
class Webhook(Base):
    """Represents a channel webhook."""

    channel_id: str = field(repr=True, kw_only=True)
    """:class:`str`: The ID of the channel the webhook posts to."""

    guild_id: typing.Optional[str] = field(repr=True, kw_only=True)
    """Optional[:class:`str`]: The ID of the guild the webhook belongs to."""

    creator_id: typing.Optional[str] = field(repr=True, kw_only=True)
    """Optional[:class:`str`]: The ID of the user who created the webhook."""

    name: typing.Optional[str] = field(repr=True, kw_only=True)
    """Optional[:class:`str`]: The webhook's default name."""

    avatar: typing.Optional[str] = field(repr=True, kw_only=True)
    """Optional[:class:`str`]: The webhook's default avatar hash."""

    token: typing.Optional[str] = field(repr=False, kw_only=True)
    """Optional[:class:`str`]: The webhook's secret token."""


__all__ = ('Webhook',)
