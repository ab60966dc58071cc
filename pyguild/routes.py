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
from urllib.parse import quote

HTTPMethod = typing.Literal['GET', 'POST', 'PATCH', 'DELETE', 'PUT']


class CompiledRoute:
    """Represents a compiled API route."""

    __slots__ = ('route', 'args')

    def __init__(self, route: Route, /, **args: typing.Any) -> None:
        self.route: Route = route
        self.args: dict[str, typing.Any] = args

    def __repr__(self) -> str:
        return f'<CompiledRoute route={self.route!r} args={self.args!r}>'

    def build(self) -> str:
        return self.route.path.format_map({k: quote(str(v)) for k, v in self.args.items()})


class Route:
    """Represents an API route."""

    __slots__ = (
        'method',
        'path',
    )

    def __init__(self, method: HTTPMethod, path: str, /) -> None:
        self.method: HTTPMethod = method
        self.path: str = path

    def __repr__(self) -> str:
        return f'<Route method={self.method!r} path={self.path!r}>'

    def compile(self, **args: typing.Any) -> CompiledRoute:
        """Compiles route."""
        return CompiledRoute(self, **args)


GET: typing.Final[HTTPMethod] = 'GET'
POST: typing.Final[HTTPMethod] = 'POST'
PUT: typing.Final[HTTPMethod] = 'PUT'
DELETE: typing.Final[HTTPMethod] = 'DELETE'
PATCH: typing.Final[HTTPMethod] = 'PATCH'

CHANNELS_CHANNEL_DELETE: typing.Final[Route] = Route(DELETE, '/channels/{channel_id}')
CHANNELS_CHANNEL_EDIT: typing.Final[Route] = Route(PATCH, '/channels/{channel_id}')
CHANNELS_INVITE_CREATE: typing.Final[Route] = Route(POST, '/channels/{channel_id}/invites')
CHANNELS_INVITE_FETCH_ALL: typing.Final[Route] = Route(GET, '/channels/{channel_id}/invites')
CHANNELS_MESSAGE_DELETE: typing.Final[Route] = Route(DELETE, '/channels/{channel_id}/messages/{message_id}')
CHANNELS_MESSAGE_DELETE_BULK: typing.Final[Route] = Route(POST, '/channels/{channel_id}/messages/bulk-delete')
CHANNELS_MESSAGE_QUERY: typing.Final[Route] = Route(GET, '/channels/{channel_id}/messages')
CHANNELS_PERMISSIONS_DELETE: typing.Final[Route] = Route(DELETE, '/channels/{channel_id}/permissions/{overwrite_id}')
CHANNELS_PERMISSIONS_SET: typing.Final[Route] = Route(PUT, '/channels/{channel_id}/permissions/{overwrite_id}')
CHANNELS_WEBHOOK_CREATE: typing.Final[Route] = Route(POST, '/channels/{channel_id}/webhooks')
CHANNELS_WEBHOOK_FETCH_ALL: typing.Final[Route] = Route(GET, '/channels/{channel_id}/webhooks')

GUILDS_CHANNEL_POSITIONS_EDIT: typing.Final[Route] = Route(PATCH, '/guilds/{guild_id}/channels')

__all__ = (
    'HTTPMethod',
    'CompiledRoute',
    'Route',
    'GET',
    'POST',
    'PUT',
    'DELETE',
    'PATCH',
    'CHANNELS_CHANNEL_DELETE',
    'CHANNELS_CHANNEL_EDIT',
    'CHANNELS_INVITE_CREATE',
    'CHANNELS_INVITE_FETCH_ALL',
    'CHANNELS_MESSAGE_DELETE',
    'CHANNELS_MESSAGE_DELETE_BULK',
    'CHANNELS_MESSAGE_QUERY',
    'CHANNELS_PERMISSIONS_DELETE',
    'CHANNELS_PERMISSIONS_SET',
    'CHANNELS_WEBHOOK_CREATE',
    'CHANNELS_WEBHOOK_FETCH_ALL',
    'GUILDS_CHANNEL_POSITIONS_EDIT',
)
