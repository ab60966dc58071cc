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


@define(slots=True)
class Invite:
    """Represents an invite to a guild channel."""

    code: str = field(repr=True, kw_only=True)
    """:class:`str`: The invite's code."""

    guild_id: typing.Optional[str] = field(repr=True, kw_only=True)
    """Optional[:class:`str`]: The ID of the guild the invite points to."""

    channel_id: str = field(repr=True, kw_only=True)
    """:class:`str`: The ID of the channel the invite points to."""

    inviter_id: typing.Optional[str] = field(repr=True, kw_only=True)
    """Optional[:class:`str`]: The ID of the user who created the invite."""

    uses: int = field(repr=True, kw_only=True)
    """:class:`int`: How many times the invite was used."""

    max_uses: int = field(repr=True, kw_only=True)
    """:class:`int`: How many times the invite can be used. Zero means unlimited."""

    max_age: int = field(repr=True, kw_only=True)
    """:class:`int`: How long the invite lasts in seconds. Zero means it never expires."""

    temporary: bool = field(repr=True, kw_only=True)
    """:class:`bool`: Whether the invite grants temporary membership."""

    created_at: typing.Optional[datetime] = field(repr=True, kw_only=True)
    """Optional[:class:`~datetime.datetime`]: When the invite was created."""

    def __hash__(self) -> int:
        return hash(self.code)

    def __eq__(self, other: object, /) -> bool:
        return self is other or isinstance(other, Invite) and self.code == other.code

    @property
    def url(self) -> str:
        """:class:`str`: The invite URL."""
        return f'https://discord.gg/{self.code}'


__all__ = ('Invite',)
