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

from datetime import timedelta
from inspect import isawaitable
import logging
import typing
from urllib.parse import quote

import aiohttp
from multidict import CIMultiDict

from . import routes, utils
from .core import UNDEFINED, UndefinedOr, __version__ as version, time_snowflake
from .enums import OverwriteType
from .errors import (
    HTTPException,
    Unauthorized,
    Forbidden,
    NotFound,
    Ratelimited,
    InternalServerError,
    BadGateway,
)

if typing.TYPE_CHECKING:
    from collections.abc import Callable

    from . import raw
    from .channel import BaseGuildChannel, GuildChannel
    from .flags import Permissions
    from .invite import Invite
    from .message import Message
    from .state import State
    from .webhook import Webhook

DEFAULT_HTTP_USER_AGENT = f'pyguild (https://github.com/pyguild/pyguild, {version})'

BULK_DELETE_MAX_AGE: typing.Final[timedelta] = timedelta(milliseconds=1209600000)
BULK_DELETE_MAX_MESSAGES: typing.Final[int] = 100
MESSAGE_QUERY_MAX_LIMIT: typing.Final[int] = 100


_L = logging.getLogger(__name__)
_STATUS_TO_ERRORS = {
    401: Unauthorized,
    403: Forbidden,
    404: NotFound,
    429: Ratelimited,
    500: InternalServerError,
    502: BadGateway,
}


class HTTPClient:
    """Represents an HTTP client sending HTTP requests to the API.

    Attributes
    ----------
    bot: :class:`bool`
        Whether the token belongs to bot account.
    state: :class:`State`
        The state.
    token: :class:`str`
        The token in use.
    user_agent: :class:`str`
        The HTTP user agent used when making requests.
    """

    __slots__ = (
        '_base',
        '_session',
        'bot',
        'state',
        'token',
        'user_agent',
    )

    def __init__(
        self,
        token: typing.Optional[str] = None,
        *,
        base: typing.Optional[str] = None,
        bot: bool = True,
        state: State,
        session: typing.Union[utils.MaybeAwaitableFunc[[HTTPClient], aiohttp.ClientSession], aiohttp.ClientSession],
        user_agent: typing.Optional[str] = None,
    ) -> None:
        if base is None:
            base = 'https://discord.com/api/v10'
        self._base: str = base.rstrip('/')
        self.bot: bool = bot
        self._session: typing.Union[
            utils.MaybeAwaitableFunc[[HTTPClient], aiohttp.ClientSession], aiohttp.ClientSession
        ] = session
        self.state: State = state
        self.token: str = token or ''
        self.user_agent: str = user_agent or DEFAULT_HTTP_USER_AGENT

    @property
    def base(self) -> str:
        """:class:`str`: The base URL used for API requests."""
        return self._base

    def add_headers(
        self,
        headers: CIMultiDict[typing.Any],
        route: routes.CompiledRoute,
        /,
        *,
        accept_json: bool = True,
        json_body: bool = False,
        reason: typing.Optional[str] = None,
        token: UndefinedOr[typing.Optional[str]] = UNDEFINED,
        user_agent: UndefinedOr[typing.Optional[str]] = UNDEFINED,
    ) -> utils.MaybeAwaitable[None]:
        if accept_json:
            headers['Accept'] = 'application/json'

        if json_body:
            headers['Content-type'] = 'application/json'

        if token is UNDEFINED:
            token = self.token

        if token:
            headers['Authorization'] = f'Bot {token}' if self.bot else token

        if user_agent is UNDEFINED:
            user_agent = self.user_agent

        if user_agent is not None:
            headers['User-Agent'] = user_agent

        if reason:
            headers['X-Audit-Log-Reason'] = quote(reason)

    async def send_request(
        self,
        session: aiohttp.ClientSession,
        /,
        *,
        method: str,
        url: str,
        headers: CIMultiDict[typing.Any],
        **kwargs,
    ) -> aiohttp.ClientResponse:
        return await session.request(
            method,
            url,
            headers=headers,
            **kwargs,
        )

    async def raw_request(
        self,
        route: routes.CompiledRoute,
        *,
        accept_json: bool = True,
        json: UndefinedOr[typing.Any] = UNDEFINED,
        reason: typing.Optional[str] = None,
        token: UndefinedOr[typing.Optional[str]] = UNDEFINED,
        user_agent: UndefinedOr[str] = UNDEFINED,
        **kwargs,
    ) -> aiohttp.ClientResponse:
        """|coro|

        Perform a HTTP request, with errors handling.

        Failed requests are never retried.

        Parameters
        ----------
        route: :class:`~routes.CompiledRoute`
            The route.
        accept_json: :class:`bool`
            Whether to explicitly receive JSON or not. Defaults to ``True``.
        json: UndefinedOr[typing.Any]
            The JSON payload to pass in.
        reason: Optional[:class:`str`]
            The reason shown in the audit log.
        token: UndefinedOr[Optional[:class:`str`]]
            The token to use when requesting the route.
        user_agent: UndefinedOr[:class:`str`]
            The user agent to use for HTTP request. Defaults to :attr:`.user_agent`.

        Raises
        ------
        :class:`HTTPException`
            Something went wrong during request.

        Returns
        -------
        :class:`aiohttp.ClientResponse`
            The aiohttp response.
        """
        headers: CIMultiDict[str]

        try:
            headers = CIMultiDict(kwargs.pop('headers'))
        except KeyError:
            headers = CIMultiDict()

        tmp = self.add_headers(
            headers,
            route,
            accept_json=accept_json,
            json_body=json is not UNDEFINED,
            reason=reason,
            token=token,
            user_agent=user_agent,
        )
        if isawaitable(tmp):
            await tmp

        method = route.route.method
        path = route.build()
        url = self._base + path

        if json is not UNDEFINED:
            kwargs['data'] = utils.to_json(json)

        _L.debug('Sending request to %s %s with %s', method, path, kwargs.get('data'))

        session = self._session
        if callable(session):
            session = await utils.maybe_coroutine(session, self)
            # detect recursion
            if callable(session):
                raise TypeError(f'Expected aiohttp.ClientSession, not {type(session)!r}')
            # Do not call factory on future requests
            self._session = session

        response = await self.send_request(
            session,
            method=method,
            url=url,
            headers=headers,
            **kwargs,
        )

        if response.status >= 400:
            _L.debug('%s %s has returned %s', method, path, response.status)
            data = await utils._json_or_text(response)
            raise _STATUS_TO_ERRORS.get(response.status, HTTPException)(response, data)
        return response

    async def request(
        self,
        route: routes.CompiledRoute,
        *,
        accept_json: bool = True,
        json: UndefinedOr[typing.Any] = UNDEFINED,
        log: bool = True,
        reason: typing.Optional[str] = None,
        token: UndefinedOr[typing.Optional[str]] = UNDEFINED,
        user_agent: UndefinedOr[str] = UNDEFINED,
        **kwargs,
    ) -> typing.Any:
        """|coro|

        Perform a HTTP request, with errors handling.

        Parameters
        ----------
        route: :class:`~routes.CompiledRoute`
            The route.
        accept_json: :class:`bool`
            Whether to explicitly receive JSON or not. Defaults to ``True``.
        json: UndefinedOr[typing.Any]
            The JSON payload to pass in.
        log: :class:`bool`
            Whether to log successful response or not. This option is intended to avoid console spam caused
            by routes like ``GET /channels/{channel_id}/messages``. Defaults to ``True``.
        reason: Optional[:class:`str`]
            The reason shown in the audit log.
        token: UndefinedOr[Optional[:class:`str`]]
            The token to use when requesting the route.
        user_agent: UndefinedOr[:class:`str`]
            The user agent to use for HTTP request. Defaults to :attr:`.user_agent`.

        Raises
        ------
        :class:`HTTPException`
            Something went wrong during request.

        Returns
        -------
        typing.Any
            The parsed JSON response.
        """
        response = await self.raw_request(
            route,
            accept_json=accept_json,
            json=json,
            reason=reason,
            token=token,
            user_agent=user_agent,
            **kwargs,
        )
        result = await utils._json_or_text(response)

        method = response.request_info.method
        url = response.request_info.url

        if log:
            _L.debug('%s %s has received %s %s', method, url, response.status, result)
        else:
            _L.debug('%s %s has received %s [too large response]', method, url, response.status)

        response.close()
        return result

    async def cleanup(self) -> None:
        """|coro|

        Closes the aiohttp session.
        """
        if not callable(self._session):
            await self._session.close()

    # Channels control

    async def edit_channel(
        self,
        channel: BaseGuildChannel,
        *,
        name: UndefinedOr[str] = UNDEFINED,
        topic: UndefinedOr[typing.Optional[str]] = UNDEFINED,
        bitrate: UndefinedOr[int] = UNDEFINED,
        user_limit: UndefinedOr[int] = UNDEFINED,
        nsfw: UndefinedOr[bool] = UNDEFINED,
        reason: typing.Optional[str] = None,
    ) -> GuildChannel:
        """|coro|

        Edits a guild channel.

        Parameters
        ----------
        channel: :class:`.BaseGuildChannel`
            The channel to edit.
        name: UndefinedOr[:class:`str`]
            The new channel name.
        topic: UndefinedOr[Optional[:class:`str`]]
            The new channel topic.
        bitrate: UndefinedOr[:class:`int`]
            The new voice channel bitrate.
        user_limit: UndefinedOr[:class:`int`]
            The new voice channel user limit.
        nsfw: UndefinedOr[:class:`bool`]
            To mark the channel as NSFW or not.
        reason: Optional[:class:`str`]
            The reason shown in the audit log.

        Raises
        ------
        :class:`HTTPException`
            Editing the channel failed.

        Returns
        -------
        :class:`.GuildChannel`
            The newly updated channel.
        """
        payload: raw.DataEditChannel = {}
        if name is not UNDEFINED:
            payload['name'] = name
        if topic is not UNDEFINED:
            payload['topic'] = topic
        if bitrate is not UNDEFINED:
            payload['bitrate'] = bitrate
        if user_limit is not UNDEFINED:
            payload['user_limit'] = user_limit
        if nsfw is not UNDEFINED:
            payload['nsfw'] = nsfw

        resp: raw.GuildChannel = await self.request(
            routes.CHANNELS_CHANNEL_EDIT.compile(channel_id=channel.id),
            json=payload,
            reason=reason,
        )
        return self.state.parser.parse_guild_channel(resp, channel.guild)

    async def edit_channel_position(self, channel: BaseGuildChannel, position: int, /) -> None:
        """|coro|

        Moves a channel to a new position among guild channels of same type.

        The channels between old and new positions are shifted, and only the changed positions are sent.
        Nothing is sent when the position is unchanged.

        Parameters
        ----------
        channel: :class:`.BaseGuildChannel`
            The channel to move.
        position: :class:`int`
            The new position.

        Raises
        ------
        :class:`HTTPException`
            Moving the channel failed.
        """
        if channel.position == position:
            return

        lo = min(position, channel.position)
        hi = max(position, channel.position)

        siblings = sorted(
            (
                c
                for c in channel.guild.channels.values()
                if c.type == channel.type and lo <= c.position <= hi and c.id != channel.id
            ),
            key=lambda c: c.position,
        )
        if position > channel.position:
            siblings.append(channel)
        else:
            siblings.insert(0, channel)

        payload: list[raw.DataChannelPosition] = [{'id': c.id, 'position': lo + i} for i, c in enumerate(siblings)]

        await self.request(
            routes.GUILDS_CHANNEL_POSITIONS_EDIT.compile(guild_id=channel.guild.id),
            json=payload,
        )

    async def delete_channel(self, channel_id: str, *, reason: typing.Optional[str] = None) -> None:
        """|coro|

        Deletes a guild channel.

        Parameters
        ----------
        channel_id: :class:`str`
            The channel's ID.
        reason: Optional[:class:`str`]
            The reason shown in the audit log.

        Raises
        ------
        :class:`HTTPException`
            Deleting the channel failed.
        """
        await self.request(routes.CHANNELS_CHANNEL_DELETE.compile(channel_id=channel_id), reason=reason)

    async def edit_channel_permission(
        self,
        channel_id: str,
        overwrite_id: str,
        *,
        allow: Permissions,
        deny: Permissions,
        type: OverwriteType,
        reason: typing.Optional[str] = None,
    ) -> None:
        """|coro|

        Creates or replaces a channel permission overwrite.

        Parameters
        ----------
        channel_id: :class:`str`
            The channel's ID.
        overwrite_id: :class:`str`
            The ID of the member or role.
        allow: :class:`.Permissions`
            The permissions to allow.
        deny: :class:`.Permissions`
            The permissions to deny.
        type: :class:`.OverwriteType`
            Whether the overwrite is for a member or a role.
        reason: Optional[:class:`str`]
            The reason shown in the audit log.

        Raises
        ------
        :class:`HTTPException`
            Editing the overwrite failed.
        """
        payload: raw.DataEditChannelPermission = {
            'allow': allow.value,
            'deny': deny.value,
            'type': OverwriteType(type).value,
        }
        await self.request(
            routes.CHANNELS_PERMISSIONS_SET.compile(channel_id=channel_id, overwrite_id=overwrite_id),
            json=payload,
            reason=reason,
        )

    async def delete_channel_permission(
        self, channel_id: str, overwrite_id: str, *, reason: typing.Optional[str] = None
    ) -> None:
        """|coro|

        Deletes a channel permission overwrite.

        Parameters
        ----------
        channel_id: :class:`str`
            The channel's ID.
        overwrite_id: :class:`str`
            The ID of the member or role.
        reason: Optional[:class:`str`]
            The reason shown in the audit log.

        Raises
        ------
        :class:`HTTPException`
            Deleting the overwrite failed.
        """
        await self.request(
            routes.CHANNELS_PERMISSIONS_DELETE.compile(channel_id=channel_id, overwrite_id=overwrite_id),
            reason=reason,
        )

    # Invites

    async def get_channel_invites(self, channel_id: str, /) -> list[Invite]:
        """|coro|

        Retrieves all invites to a channel.

        Returns
        -------
        List[:class:`.Invite`]
            The invites.
        """
        resp: list[raw.Invite] = await self.request(routes.CHANNELS_INVITE_FETCH_ALL.compile(channel_id=channel_id))
        return list(map(self.state.parser.parse_invite, resp))

    async def create_channel_invite(
        self,
        channel_id: str,
        /,
        *,
        max_age: int = 86400,
        max_uses: int = 0,
        temporary: bool = False,
        unique: bool = False,
        reason: typing.Optional[str] = None,
    ) -> Invite:
        """|coro|

        Creates an invite to a channel.

        Parameters
        ----------
        channel_id: :class:`str`
            The channel's ID.
        max_age: :class:`int`
            How long the invite should last in seconds.
        max_uses: :class:`int`
            How many times the invite can be used.
        temporary: :class:`bool`
            Whether the invite grants temporary membership.
        unique: :class:`bool`
            Whether to always create a new invite.
        reason: Optional[:class:`str`]
            The reason shown in the audit log.

        Raises
        ------
        :class:`HTTPException`
            Creating the invite failed.

        Returns
        -------
        :class:`.Invite`
            The created invite.
        """
        payload: raw.DataCreateInvite = {
            'max_age': max_age,
            'max_uses': max_uses,
            'temporary': temporary,
            'unique': unique,
        }
        resp: raw.Invite = await self.request(
            routes.CHANNELS_INVITE_CREATE.compile(channel_id=channel_id),
            json=payload,
            reason=reason,
        )
        return self.state.parser.parse_invite(resp)

    # Webhooks

    async def get_channel_webhooks(self, channel_id: str, /) -> list[Webhook]:
        """|coro|

        Retrieves all webhooks in a channel.

        Returns
        -------
        List[:class:`.Webhook`]
            The webhooks.
        """
        resp: list[raw.Webhook] = await self.request(routes.CHANNELS_WEBHOOK_FETCH_ALL.compile(channel_id=channel_id))
        return list(map(self.state.parser.parse_webhook, resp))

    async def create_channel_webhook(
        self,
        channel_id: str,
        /,
        *,
        name: str,
        avatar: typing.Optional[str] = None,
        reason: typing.Optional[str] = None,
    ) -> Webhook:
        """|coro|

        Creates a webhook in a channel.

        Parameters
        ----------
        channel_id: :class:`str`
            The channel's ID.
        name: :class:`str`
            The webhook name.
        avatar: Optional[:class:`str`]
            The webhook avatar as a data URI.
        reason: Optional[:class:`str`]
            The reason shown in the audit log.

        Returns
        -------
        :class:`.Webhook`
            The created webhook.
        """
        payload: raw.DataCreateWebhook = {'name': name}
        if avatar is not None:
            payload['avatar'] = avatar

        resp: raw.Webhook = await self.request(
            routes.CHANNELS_WEBHOOK_CREATE.compile(channel_id=channel_id),
            json=payload,
            reason=reason,
        )
        return self.state.parser.parse_webhook(resp)

    # Messages

    async def get_messages(
        self,
        channel_id: str,
        /,
        *,
        limit: int = MESSAGE_QUERY_MAX_LIMIT,
        before: typing.Optional[str] = None,
        after: typing.Optional[str] = None,
    ) -> list[Message]:
        """|coro|

        Retrieves a page of channel history, newest first.

        Parameters
        ----------
        channel_id: :class:`str`
            The channel's ID.
        limit: :class:`int`
            The maximum number of messages to get, up to 100.
        before: Optional[:class:`str`]
            Only get messages sent before this message ID.
        after: Optional[:class:`str`]
            Only get messages sent after this message ID.

        Raises
        ------
        :class:`HTTPException`
            Retrieving messages failed.

        Returns
        -------
        List[:class:`.Message`]
            The messages.
        """
        params: dict[str, typing.Any] = {'limit': min(limit, MESSAGE_QUERY_MAX_LIMIT)}
        if before is not None:
            params['before'] = before
        if after is not None:
            params['after'] = after

        resp: list[raw.Message] = await self.request(
            routes.CHANNELS_MESSAGE_QUERY.compile(channel_id=channel_id),
            log=False,
            params=params,
        )
        return list(map(self.state.parser.parse_message, resp))

    async def delete_message(self, channel_id: str, message_id: str, /, *, reason: typing.Optional[str] = None) -> None:
        """|coro|

        Deletes a message.

        Parameters
        ----------
        channel_id: :class:`str`
            The channel's ID.
        message_id: :class:`str`
            The message's ID.
        reason: Optional[:class:`str`]
            The reason shown in the audit log.

        Raises
        ------
        :class:`HTTPException`
            Deleting the message failed.
        """
        await self.request(
            routes.CHANNELS_MESSAGE_DELETE.compile(channel_id=channel_id, message_id=message_id),
            reason=reason,
        )

    async def delete_messages(
        self,
        channel_id: str,
        message_ids: list[str],
        /,
        *,
        reason: typing.Optional[str] = None,
    ) -> None:
        """|coro|

        Deletes multiple messages.

        A single message is deleted directly. Otherwise messages older than two weeks are skipped,
        and the rest are bulk deleted in batches of 100.

        Parameters
        ----------
        channel_id: :class:`str`
            The channel's ID.
        message_ids: List[:class:`str`]
            The IDs of messages to delete.
        reason: Optional[:class:`str`]
            The reason shown in the audit log.

        Raises
        ------
        :class:`HTTPException`
            Deleting the messages failed.
        """
        if not message_ids:
            return

        if len(message_ids) == 1:
            return await self.delete_message(channel_id, message_ids[0], reason=reason)

        oldest_allowed = int(time_snowflake(utils.utcnow() - BULK_DELETE_MAX_AGE))
        message_ids = [m for m in message_ids if int(m) > oldest_allowed]

        if len(message_ids) != 0:
            _L.debug('Bulk deleting %i messages in %s', len(message_ids), channel_id)

        for chunk in utils.chunked(message_ids, BULK_DELETE_MAX_MESSAGES):
            if len(chunk) == 1:
                await self.delete_message(channel_id, chunk[0], reason=reason)
                continue

            payload: raw.DataBulkDeleteMessages = {'messages': list(chunk)}
            await self.request(
                routes.CHANNELS_MESSAGE_DELETE_BULK.compile(channel_id=channel_id),
                json=payload,
                reason=reason,
            )

    async def purge_channel(
        self,
        channel_id: str,
        limit: typing.Optional[int] = 100,
        /,
        *,
        check: typing.Optional[
            typing.Union[Callable[[Message], utils.MaybeAwaitable[bool]], str]
        ] = None,
        before: typing.Optional[str] = None,
        after: typing.Optional[str] = None,
        reason: typing.Optional[str] = None,
    ) -> int:
        """|coro|

        Deletes messages in a channel matching a filter.

        History is searched backwards 100 messages at a time, and the search stops
        at ``limit``, at the first message older than two weeks, at ``after``, or at the end of history.

        .. note::

            ``after`` does not change the direction. History is still walked from ``before``
            (or the newest message) towards ``after``, so ``limit`` counts messages from the newest side.

        Parameters
        ----------
        channel_id: :class:`str`
            The channel's ID.
        limit: Optional[:class:`int`]
            The maximum number of messages to search through. ``None`` means no limit.
        check: Optional[Union[Callable[[:class:`.Message`], MaybeAwaitable[:class:`bool`]], :class:`str`]]
            The filter. A string matches messages containing it.
        before: Optional[:class:`str`]
            Only search messages sent before this message ID.
        after: Optional[:class:`str`]
            Only search messages sent after this message ID.
        reason: Optional[:class:`str`]
            The reason shown in the audit log.

        Raises
        ------
        :class:`HTTPException`
            Retrieving or deleting messages failed.

        Returns
        -------
        :class:`int`
            The number of messages deleted.
        """
        predicate: typing.Optional[Callable[[Message], utils.MaybeAwaitable[bool]]]
        if isinstance(check, str):
            needle = check

            def predicate(message: Message, /) -> bool:
                return needle in message.content

        else:
            predicate = check

        oldest_allowed = utils.utcnow() - BULK_DELETE_MAX_AGE
        stop_at = None if after is None else int(after)
        remaining = limit

        to_delete: list[str] = []

        done = remaining == 0
        while not done:
            messages = await self.get_messages(channel_id, limit=MESSAGE_QUERY_MAX_LIMIT, before=before)

            for message in messages:
                if remaining is not None and remaining <= 0:
                    done = True
                    break
                if message.created_at < oldest_allowed:
                    done = True
                    break
                if stop_at is not None and int(message.id) <= stop_at:
                    done = True
                    break

                if predicate is None or await utils.maybe_coroutine(predicate, message):
                    to_delete.append(message.id)

                if remaining is not None:
                    remaining -= 1

            if len(messages) < MESSAGE_QUERY_MAX_LIMIT or (remaining is not None and remaining <= 0):
                done = True
            else:
                before = messages[-1].id

        _L.debug('Purging %i messages in %s', len(to_delete), channel_id)

        await self.delete_messages(channel_id, to_delete, reason=reason)
        return len(to_delete)


__all__ = (
    'DEFAULT_HTTP_USER_AGENT',
    'BULK_DELETE_MAX_AGE',
    'BULK_DELETE_MAX_MESSAGES',
    'MESSAGE_QUERY_MAX_LIMIT',
    'HTTPClient',
)
