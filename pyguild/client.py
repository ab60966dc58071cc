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

import logging
import typing

import aiohttp

from . import utils
from .core import UNDEFINED, UndefinedOr
from .http import HTTPClient
from .parser import Parser
from .state import DEFAULT_MESSAGE_LIMIT, State

if typing.TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from typing_extensions import Self

    from . import raw
    from .guild import Guild

_L = logging.getLogger(__name__)


def _session_factory(_) -> aiohttp.ClientSession:
    return aiohttp.ClientSession()


class Client:
    """A client that owns the shared :class:`.State` and the HTTP client every guild entity delegates to.

    Parameters
    ----------
    token: :class:`str`
        The authentication token.
    bot: :class:`bool`
        Whether the token belongs to bot account. Defaults to ``True``.
    http_base: Optional[:class:`str`]
        The base URL of the API.
    message_limit: :class:`int`
        The default number of messages each text channel keeps in memory. Defaults to ``100``.
    user_agent: Optional[:class:`str`]
        The HTTP user agent.
    http: Optional[Callable[[:class:`.Client`, :class:`.State`], :class:`.HTTPClient`]]
        The HTTP client factory.
    parser: Optional[Callable[[:class:`.Client`, :class:`.State`], :class:`.Parser`]]
        The parser factory.
    state: Optional[Union[Callable[[:class:`.Client`], :class:`.State`], :class:`.State`]]
        The state, or its factory. When given, other state-related parameters are ignored.
    log_handler: UndefinedOr[Optional[:class:`logging.Handler`]]
        The log handler to use for the library's logger. If this is ``None``
        then the library will not set up anything logging related. Logging
        will still work if ``None`` is passed, though it is your responsibility
        to set it up.

        The default log handler if not provided is :class:`logging.StreamHandler`.
    log_formatter: UndefinedOr[:class:`logging.Formatter`]
        The formatter to use with the given log handler. If not provided then it
        defaults to a color based logging formatter (if available).
    log_level: UndefinedOr[:class:`int`]
        The default log level for the library's logger. Defaults to ``logging.INFO``.
    root_logger: :class:`bool`
        Whether to set up the root logger rather than the library logger.
        Defaults to ``False``.
    """

    __slots__ = (
        '_state',
        '_token',
        'bot',
        'closed',
    )

    def __init__(
        self,
        token: str = '',
        *,
        bot: bool = True,
        http_base: typing.Optional[str] = None,
        message_limit: int = DEFAULT_MESSAGE_LIMIT,
        user_agent: typing.Optional[str] = None,
        http: typing.Optional[Callable[[Client, State], HTTPClient]] = None,
        parser: typing.Optional[Callable[[Client, State], Parser]] = None,
        state: typing.Optional[typing.Union[Callable[[Client], State], State]] = None,
        log_handler: UndefinedOr[typing.Optional[logging.Handler]] = UNDEFINED,
        log_formatter: UndefinedOr[logging.Formatter] = UNDEFINED,
        log_level: UndefinedOr[int] = UNDEFINED,
        root_logger: bool = False,
    ) -> None:
        if log_handler is not None:
            utils.setup_logging(
                handler=log_handler,
                formatter=log_formatter,
                level=log_level,
                root=root_logger,
            )

        self.closed: bool = False

        if state:
            if callable(state):
                self._state: State = state(self)
            else:
                self._state = state
        else:
            state = State(message_limit=message_limit)

            if parser:
                state.setup(parser=parser(self, state))
            state.setup(
                http=(
                    http(self, state)
                    if http
                    else HTTPClient(
                        token,
                        base=http_base,
                        bot=bot,
                        session=_session_factory,
                        state=state,
                        user_agent=user_agent,
                    )
                ),
            )
            self._state = state

        self._token: str = token
        self.bot: bool = bot

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: typing.Optional[type[BaseException]],
        exc_value: typing.Optional[BaseException],
        traceback: typing.Optional[TracebackType],
        /,
    ) -> None:
        await self.close()

    @property
    def state(self) -> State:
        """:class:`.State`: The state shared by entities this client produces."""
        return self._state

    @property
    def http(self) -> HTTPClient:
        """:class:`.HTTPClient`: The HTTP client."""
        return self._state.http

    @property
    def parser(self) -> Parser:
        """:class:`.Parser`: The parser."""
        return self._state.parser

    @property
    def message_limit(self) -> int:
        """:class:`int`: The default number of messages each text channel keeps in memory."""
        return self._state.message_limit

    def parse_guild(self, payload: raw.Guild, /) -> Guild:
        """Builds a guild with its roles, members and channels from a guild snapshot.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The guild snapshot.

        Returns
        -------
        :class:`.Guild`
            The guild.
        """
        guild = self._state.parser.parse_guild(payload)
        _L.debug('Loaded guild %s with %i channels', guild.id, len(guild.channels))
        return guild

    async def close(self) -> None:
        """|coro|

        Closes the HTTP session.
        """
        if self.closed:
            return
        self.closed = True
        await self.http.cleanup()


__all__ = ('Client',)
