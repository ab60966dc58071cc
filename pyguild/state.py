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

from .parser import Parser

if typing.TYPE_CHECKING:
    from .http import HTTPClient

DEFAULT_MESSAGE_LIMIT: typing.Final[int] = 100


class State:
    """Represents the context shared by every pyguild object.

    Entities keep a reference to the state instead of looking up a global client,
    and reach the HTTP client and configuration through it.

    Attributes
    ----------
    parser: :class:`Parser`
        The parser.
    message_limit: :class:`int`
        The default amount of messages each text channel keeps in memory.
    """

    __slots__ = (
        '_http',
        'parser',
        'message_limit',
    )

    def __init__(
        self,
        *,
        http: typing.Optional[HTTPClient] = None,
        parser: typing.Optional[Parser] = None,
        message_limit: int = DEFAULT_MESSAGE_LIMIT,
    ) -> None:
        self._http = http
        self.parser: Parser = parser if parser else Parser(state=self)
        self.message_limit: int = message_limit

    def setup(
        self,
        *,
        http: typing.Optional[HTTPClient] = None,
        parser: typing.Optional[Parser] = None,
        message_limit: typing.Optional[int] = None,
    ) -> State:
        if http:
            self._http = http
        if parser:
            self.parser = parser
        if message_limit is not None:
            self.message_limit = message_limit
        return self

    @property
    def http(self) -> HTTPClient:
        assert self._http, 'State has no HTTP client attached'
        return self._http


__all__ = (
    'DEFAULT_MESSAGE_LIMIT',
    'State',
)
