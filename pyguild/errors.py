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

import typing

if typing.TYPE_CHECKING:
    from aiohttp import ClientResponse as Response


# Thanks Rapptz/discord.py for docs


class PyguildError(Exception):
    """Base exception class for pyguild

    Ideally speaking, this could be caught to handle any exceptions raised from this library.
    """

    __slots__ = ()


class HTTPException(PyguildError):
    """Exception that's raised when an HTTP request operation fails.

    Attributes
    ------------
    response: :class:`aiohttp.ClientResponse`
        The response of the failed HTTP request. This is an
        instance of :class:`aiohttp.ClientResponse`.
    data: Union[Dict[:class:`str`, Any], :class:`str`]
        The data of the error. Could be an empty string.
    status: :class:`int`
        The status code of the HTTP request.
    code: :class:`int`
        The API specific error code for the failure. ``0`` if the body was not JSON.
    text: :class:`str`
        The text of the error. Could be an empty string.
    errors: Optional[Dict[:class:`str`, Any]]
        The per-field validation errors, if any.
    retry_after: Optional[:class:`float`]
        The duration in seconds to wait until ratelimit expires.
        Only applicable to :class:`Ratelimited`.
    """

    __slots__ = (
        'response',
        'data',
        'status',
        'code',
        'text',
        'errors',
        'retry_after',
    )

    def __init__(
        self,
        response: Response,
        data: typing.Union[dict[str, typing.Any], str],
        /,
    ) -> None:
        self.response: Response = response
        self.data: typing.Union[dict[str, typing.Any], str] = data
        self.status: int = response.status

        if isinstance(data, dict):
            self.code: int = data.get('code', 0)
            self.text: str = data.get('message', '')
            self.errors: typing.Optional[dict[str, typing.Any]] = data.get('errors')
            self.retry_after: typing.Optional[float] = data.get('retry_after')
        else:
            self.code = 0
            self.text = data or ''
            self.errors = None
            self.retry_after = None

        fmt = '{0.status} {0.reason} (error code: {1})'
        if self.text:
            fmt += ': {2}'

        super().__init__(fmt.format(self.response, self.code, self.text))


class Unauthorized(HTTPException):
    __slots__ = ()


class Forbidden(HTTPException):
    __slots__ = ()


class NotFound(HTTPException):
    __slots__ = ()


class Ratelimited(HTTPException):
    __slots__ = ()


class InternalServerError(HTTPException):
    __slots__ = ()


class BadGateway(HTTPException):
    __slots__ = ()


class InvalidData(PyguildError):
    """Exception that's raised when the library encounters unknown
    or invalid data from the API.
    """

    __slots__ = ('reason',)

    def __init__(self, reason: str, /) -> None:
        self.reason: str = reason
        super().__init__(reason)


class NoData(PyguildError):
    """Exception that's raised when an entity is not present in local state."""

    __slots__ = ('what', 'type')

    def __init__(self, what: str, type: str) -> None:
        self.what = what
        self.type = type
        super().__init__(f'Unable to find {type} {what} in cache')


class MemberNotFound(NoData):
    """Exception that's raised when resolving permissions for a member the guild does not know.

    Attributes
    ----------
    member_id: :class:`str`
        The ID of the member that was looked up.
    guild_id: :class:`str`
        The ID of the guild the member was looked up in.
    """

    __slots__ = ('member_id', 'guild_id')

    def __init__(self, member_id: str, guild_id: str) -> None:
        self.member_id = member_id
        self.guild_id = guild_id
        super().__init__(member_id, f'member of guild {guild_id}')


__all__ = (
    'PyguildError',
    'HTTPException',
    'Unauthorized',
    'Forbidden',
    'NotFound',
    'Ratelimited',
    'InternalServerError',
    'BadGateway',
    'InvalidData',
    'NoData',
    'MemberNotFound',
)
