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
from .core import UNDEFINED, UndefinedOr, IDOr, resolve_id
from .enums import ChannelType, OverwriteType
from .errors import MemberNotFound
from .flags import Permissions
from .guild import Member, Role
from .permissions import ADMINISTRATOR, PermissionOverwrite

if typing.TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping

    from .guild import Guild
    from .invite import Invite
    from .message import Message
    from .webhook import Webhook


@define(slots=True)
class PartialGuildChannel(Base):
    """Represents a partial guild channel.

    Unlike full :class:`.BaseGuildChannel`, the fields are set to :data:`.UNDEFINED` when
    they were not provided.
    """

    name: UndefinedOr[str] = field(repr=True, kw_only=True)
    """UndefinedOr[:class:`str`]: The new channel's name."""

    topic: UndefinedOr[typing.Optional[str]] = field(repr=True, kw_only=True)
    """UndefinedOr[Optional[:class:`str`]]: The new channel's topic."""

    position: UndefinedOr[int] = field(repr=True, kw_only=True)
    """UndefinedOr[:class:`int`]: The new channel's position."""

    bitrate: UndefinedOr[int] = field(repr=True, kw_only=True)
    """UndefinedOr[:class:`int`]: The new voice channel's bitrate."""

    user_limit: UndefinedOr[int] = field(repr=True, kw_only=True)
    """UndefinedOr[:class:`int`]: The new voice channel's user limit."""

    nsfw: UndefinedOr[bool] = field(repr=True, kw_only=True)
    """UndefinedOr[:class:`bool`]: Whether the channel is explicitly flagged as not safe for work."""

    permission_overwrites: UndefinedOr[dict[str, PermissionOverwrite]] = field(repr=True, kw_only=True)
    """UndefinedOr[Dict[:class:`str`, :class:`.PermissionOverwrite`]]: The new channel's permission overwrites."""

    last_message_id: UndefinedOr[typing.Optional[str]] = field(repr=True, kw_only=True)
    """UndefinedOr[Optional[:class:`str`]]: The ID of the last message sent in the channel."""

    last_pin_timestamp: UndefinedOr[typing.Optional[datetime]] = field(repr=True, kw_only=True)
    """UndefinedOr[Optional[:class:`~datetime.datetime`]]: When the last message was pinned."""


def is_nsfw_name(name: str, /) -> bool:
    """:class:`bool`: Whether the channel name marks it as not safe for work."""
    if len(name) == 4:
        return name == 'nsfw'
    return name.startswith('nsfw-')


def calculate_guild_channel_permissions(
    initial_permissions: typing.Union[Permissions, int],
    role_ids: Iterable[str],
    /,
    *,
    member_id: str,
    guild_id: str,
    overwrites: Mapping[str, PermissionOverwrite],
) -> Permissions:
    """Calculates the permissions in :class:`.BaseGuildChannel` scope.

    Parameters
    ----------
    initial_permissions: Union[:class:`.Permissions`, :class:`int`]
        The initial permissions to use. Should be ``member.permissions``.
    role_ids: Iterable[:class:`str`]
        The IDs of member's roles.
    member_id: :class:`str`
        The member's ID.
    guild_id: :class:`str`
        The guild's ID. The overwrite keyed by it applies to everyone.
    overwrites: Mapping[:class:`str`, :class:`.PermissionOverwrite`]
        The channel permission overwrites (:attr:`.BaseGuildChannel.permission_overwrites`).

    Returns
    -------
    :class:`.Permissions`
        The calculated permissions.
    """
    if isinstance(initial_permissions, Permissions):
        result = initial_permissions.value
    else:
        result = initial_permissions

    if result & ADMINISTRATOR:
        return Permissions.all()

    overwrite = overwrites.get(guild_id)
    if overwrite is not None:
        result = (result & ~overwrite.raw_deny) | overwrite.raw_allow

    deny = 0
    allow = 0
    for role_id in role_ids:
        overwrite = overwrites.get(role_id)
        if overwrite is not None:
            deny |= overwrite.raw_deny
            allow |= overwrite.raw_allow

    result = (result & ~deny) | allow

    overwrite = overwrites.get(member_id)
    if overwrite is not None:
        result = (result & ~overwrite.raw_deny) | overwrite.raw_allow

    return Permissions(result)


@define(slots=True)
class BaseGuildChannel(Base):
    """Represents a channel that belongs to a guild."""

    guild: Guild = field(repr=False, kw_only=True, eq=False)
    """:class:`.Guild`: The guild the channel belongs to."""

    name: str = field(repr=True, kw_only=True)
    """:class:`str`: The channel's name."""

    position: int = field(repr=True, kw_only=True)
    """:class:`int`: The channel's sorting position among channels of same type."""

    permission_overwrites: dict[str, PermissionOverwrite] = field(repr=False, kw_only=True)
    """Dict[:class:`str`, :class:`.PermissionOverwrite`]: The channel's permission overwrites, keyed by target ID."""

    nsfw: bool = field(repr=True, kw_only=True)
    """:class:`bool`: Whether the channel is not safe for work.

    This is derived from channel's name and explicit flag, and recomputed on every update.
    """

    def __str__(self) -> str:
        return self.name

    @property
    def type(self) -> ChannelType:
        raise NotImplementedError

    @property
    def guild_id(self) -> str:
        """:class:`str`: The ID of the guild the channel belongs to."""
        return self.guild.id

    @property
    def mention(self) -> str:
        """:class:`str`: The channel mention."""
        return f'<#{self.id}>'

    def _compute_nsfw(self, data: PartialGuildChannel, /) -> bool:
        return is_nsfw_name(self.name) or data.nsfw is True

    def locally_update(self, data: PartialGuildChannel, /) -> None:
        """Locally updates channel with provided data.

        .. warning::
            This is called by library internally to keep cache up to date.

        Parameters
        ----------
        data: :class:`.PartialGuildChannel`
            The data to update channel with.
        """
        if data.name is not UNDEFINED:
            self.name = data.name
        if data.position is not UNDEFINED:
            self.position = data.position
        if data.permission_overwrites is not UNDEFINED:
            self.permission_overwrites = data.permission_overwrites
        self.nsfw = self._compute_nsfw(data)

    def get_overwrite(self, target: IDOr[typing.Union[Member, Role]], /) -> typing.Optional[PermissionOverwrite]:
        """Optional[:class:`.PermissionOverwrite`]: Retrieves a permission overwrite for given member or role."""
        return self.permission_overwrites.get(resolve_id(target))

    def permissions_for(self, member: IDOr[Member], /) -> Permissions:
        """Calculate permissions for given member.

        Parameters
        ----------
        member: Union[:class:`str`, :class:`.Member`]
            The member to calculate permissions for.

        Raises
        ------
        :class:`MemberNotFound`
            The guild does not know about the member.

        Returns
        -------
        :class:`.Permissions`
            The calculated permissions.
        """
        guild = self.guild
        member_id = resolve_id(member)

        target = guild.get_member(member_id)
        if target is None:
            raise MemberNotFound(member_id, guild.id)

        return calculate_guild_channel_permissions(
            target.permissions,
            target.role_ids,
            member_id=target.id,
            guild_id=guild.id,
            overwrites=self.permission_overwrites,
        )

    async def edit(
        self,
        *,
        name: UndefinedOr[str] = UNDEFINED,
        topic: UndefinedOr[typing.Optional[str]] = UNDEFINED,
        bitrate: UndefinedOr[int] = UNDEFINED,
        user_limit: UndefinedOr[int] = UNDEFINED,
        nsfw: UndefinedOr[bool] = UNDEFINED,
        reason: typing.Optional[str] = None,
    ) -> GuildChannel:
        """|coro|

        Edits the channel.

        You must have :attr:`~Permissions.manage_channels` to do this.

        Parameters
        ----------
        name: UndefinedOr[:class:`str`]
            The new channel name.
        topic: UndefinedOr[Optional[:class:`str`]]
            The new channel topic. Only applicable to :class:`.TextChannel`.
        bitrate: UndefinedOr[:class:`int`]
            The new bitrate. Only applicable to :class:`.VoiceChannel`.
        user_limit: UndefinedOr[:class:`int`]
            The new user limit. Only applicable to :class:`.VoiceChannel`.
        nsfw: UndefinedOr[:class:`bool`]
            To mark the channel as NSFW or not.
        reason: Optional[:class:`str`]
            The reason shown in the audit log.

        Raises
        ------
        :class:`Forbidden`
            You do not have permissions to edit the channel.
        :class:`NotFound`
            The channel was not found.
        :class:`HTTPException`
            Editing the channel failed.

        Returns
        -------
        :class:`.GuildChannel`
            The newly updated channel.
        """
        return await self.state.http.edit_channel(
            self,
            name=name,
            topic=topic,
            bitrate=bitrate,
            user_limit=user_limit,
            nsfw=nsfw,
            reason=reason,
        )

    async def edit_position(self, position: int, /) -> None:
        """|coro|

        Moves the channel to a new position among guild channels of same type.

        Parameters
        ----------
        position: :class:`int`
            The new position.

        Raises
        ------
        :class:`Forbidden`
            You do not have permissions to reorder channels.
        :class:`HTTPException`
            Moving the channel failed.
        """
        return await self.state.http.edit_channel_position(self, position)

    async def delete(self, *, reason: typing.Optional[str] = None) -> None:
        """|coro|

        Deletes the channel.

        You must have :attr:`~Permissions.manage_channels` to do this.

        Parameters
        ----------
        reason: Optional[:class:`str`]
            The reason shown in the audit log.

        Raises
        ------
        :class:`Forbidden`
            You do not have permissions to delete the channel.
        :class:`NotFound`
            The channel was not found.
        :class:`HTTPException`
            Deleting the channel failed.
        """
        return await self.state.http.delete_channel(self.id, reason=reason)

    async def edit_permission(
        self,
        overwrite: typing.Union[str, PermissionOverwrite, Member, Role],
        /,
        *,
        allow: UndefinedOr[Permissions] = UNDEFINED,
        deny: UndefinedOr[Permissions] = UNDEFINED,
        type: UndefinedOr[typing.Union[OverwriteType, str]] = UNDEFINED,
        reason: typing.Optional[str] = None,
    ) -> None:
        """|coro|

        Creates or replaces a permission overwrite in the channel.

        You must have :attr:`~Permissions.manage_roles` to do this.

        Parameters
        ----------
        overwrite: Union[:class:`str`, :class:`.PermissionOverwrite`, :class:`.Member`, :class:`.Role`]
            The overwrite target. When a :class:`.PermissionOverwrite` is passed, its values are used
            for parameters that were not provided.
        allow: UndefinedOr[:class:`.Permissions`]
            The permissions to allow. Defaults to none.
        deny: UndefinedOr[:class:`.Permissions`]
            The permissions to deny. Defaults to none.
        type: UndefinedOr[Union[:class:`.OverwriteType`, :class:`str`]]
            The overwrite type. Required when ``overwrite`` is a bare ID.
        reason: Optional[:class:`str`]
            The reason shown in the audit log.

        Raises
        ------
        :class:`ValueError`
            The overwrite type could not be determined or is invalid.
        :class:`Forbidden`
            You do not have permissions to edit permissions.
        :class:`HTTPException`
            Editing permissions failed.
        """
        if isinstance(overwrite, PermissionOverwrite):
            if allow is UNDEFINED:
                allow = overwrite.allow
            if deny is UNDEFINED:
                deny = overwrite.deny
            if type is UNDEFINED:
                type = overwrite.type
        elif isinstance(overwrite, Member):
            if type is UNDEFINED:
                type = OverwriteType.member
        elif isinstance(overwrite, Role):
            if type is UNDEFINED:
                type = OverwriteType.role

        if type is UNDEFINED:
            raise ValueError('Overwrite type must be provided when passing an ID')

        return await self.state.http.edit_channel_permission(
            self.id,
            resolve_id(overwrite),
            allow=Permissions.none() if allow is UNDEFINED else allow,
            deny=Permissions.none() if deny is UNDEFINED else deny,
            type=OverwriteType(type),
            reason=reason,
        )

    async def delete_permission(
        self,
        overwrite: typing.Union[str, PermissionOverwrite, Member, Role],
        /,
        *,
        reason: typing.Optional[str] = None,
    ) -> None:
        """|coro|

        Deletes a permission overwrite from the channel.

        Parameters
        ----------
        overwrite: Union[:class:`str`, :class:`.PermissionOverwrite`, :class:`.Member`, :class:`.Role`]
            The overwrite to delete.
        reason: Optional[:class:`str`]
            The reason shown in the audit log.

        Raises
        ------
        :class:`Forbidden`
            You do not have permissions to edit permissions.
        :class:`HTTPException`
            Deleting the overwrite failed.
        """
        return await self.state.http.delete_channel_permission(self.id, resolve_id(overwrite), reason=reason)

    async def get_invites(self) -> list[Invite]:
        """|coro|

        Retrieves all invites to the channel.

        Raises
        ------
        :class:`Forbidden`
            You do not have permissions to view invites.
        :class:`HTTPException`
            Retrieving invites failed.

        Returns
        -------
        List[:class:`.Invite`]
            The invites.
        """
        return await self.state.http.get_channel_invites(self.id)

    async def create_invite(
        self,
        *,
        max_age: int = 86400,
        max_uses: int = 0,
        temporary: bool = False,
        unique: bool = False,
        reason: typing.Optional[str] = None,
    ) -> Invite:
        """|coro|

        Creates an invite to the channel.

        You must have :attr:`~Permissions.create_instant_invite` to do this.

        Parameters
        ----------
        max_age: :class:`int`
            How long the invite should last in seconds. ``0`` means it never expires.
        max_uses: :class:`int`
            How many times the invite can be used. ``0`` means unlimited.
        temporary: :class:`bool`
            Whether the invite grants temporary membership.
        unique: :class:`bool`
            Whether to always create a new invite instead of reusing a similar one.
        reason: Optional[:class:`str`]
            The reason shown in the audit log.

        Raises
        ------
        :class:`Forbidden`
            You do not have permissions to create an invite.
        :class:`HTTPException`
            Creating the invite failed.

        Returns
        -------
        :class:`.Invite`
            The invite that was created.
        """
        return await self.state.http.create_channel_invite(
            self.id,
            max_age=max_age,
            max_uses=max_uses,
            temporary=temporary,
            unique=unique,
            reason=reason,
        )

    async def get_webhooks(self) -> list[Webhook]:
        """|coro|

        Retrieves all webhooks in the channel.

        You must have :attr:`~Permissions.manage_webhooks` to do this.

        Returns
        -------
        List[:class:`.Webhook`]
            The webhooks.
        """
        return await self.state.http.get_channel_webhooks(self.id)

    async def create_webhook(
        self,
        *,
        name: str,
        avatar: typing.Optional[str] = None,
        reason: typing.Optional[str] = None,
    ) -> Webhook:
        """|coro|

        Creates a webhook in the channel.

        You must have :attr:`~Permissions.manage_webhooks` to do this.

        Parameters
        ----------
        name: :class:`str`
            The webhook name.
        avatar: Optional[:class:`str`]
            The webhook avatar as a data URI.
        reason: Optional[:class:`str`]
            The reason shown in the audit log.

        Raises
        ------
        :class:`Forbidden`
            You do not have permissions to create a webhook.
        :class:`HTTPException`
            Creating the webhook failed.

        Returns
        -------
        :class:`.Webhook`
            The created webhook.
        """
        return await self.state.http.create_channel_webhook(self.id, name=name, avatar=avatar, reason=reason)

    async def delete_messages(
        self,
        messages: Iterable[IDOr[Message]],
        /,
        *,
        reason: typing.Optional[str] = None,
    ) -> None:
        """|coro|

        Deletes multiple messages in the channel.

        Messages older than two weeks cannot be bulk deleted and are skipped.

        You must have :attr:`~Permissions.manage_messages` to do this.

        Parameters
        ----------
        messages: Iterable[Union[:class:`str`, :class:`.Message`]]
            The messages to delete.
        reason: Optional[:class:`str`]
            The reason shown in the audit log.

        Raises
        ------
        :class:`Forbidden`
            You do not have permissions to delete messages.
        :class:`HTTPException`
            Deleting the messages failed.
        """
        return await self.state.http.delete_messages(
            self.id,
            [resolve_id(message) for message in messages],
            reason=reason,
        )

    async def purge(
        self,
        limit: typing.Optional[int] = 100,
        /,
        *,
        check: typing.Optional[typing.Union[Callable[[Message], bool], str]] = None,
        before: typing.Optional[IDOr[Message]] = None,
        after: typing.Optional[IDOr[Message]] = None,
        reason: typing.Optional[str] = None,
    ) -> int:
        """|coro|

        Deletes messages in the channel matching a filter.

        You must have :attr:`~Permissions.manage_messages` and :attr:`~Permissions.read_message_history` to do this.

        Messages are searched newest first, even when ``after`` is given.

        Parameters
        ----------
        limit: Optional[:class:`int`]
            The maximum number of messages to search through. ``None`` or ``-1`` means no limit.
        check: Optional[Union[Callable[[:class:`.Message`], :class:`bool`], :class:`str`]]
            The filter. A string matches messages containing it.
        before: Optional[Union[:class:`str`, :class:`.Message`]]
            Only search messages sent before this one.
        after: Optional[Union[:class:`str`, :class:`.Message`]]
            Only search messages sent after this one.
        reason: Optional[:class:`str`]
            The reason shown in the audit log.

        Raises
        ------
        :class:`ValueError`
            The limit is negative.
        :class:`Forbidden`
            You do not have permissions to read or delete messages.
        :class:`HTTPException`
            Purging failed.

        Returns
        -------
        :class:`int`
            The number of messages deleted.
        """
        if limit is not None and limit < 0:
            if limit != -1:
                raise ValueError(f'Purge limit must be non-negative, got {limit}')
            limit = None

        return await self.state.http.purge_channel(
            self.id,
            limit,
            check=check,
            before=None if before is None else resolve_id(before),
            after=None if after is None else resolve_id(after),
            reason=reason,
        )


@define(slots=True)
class TextChannel(BaseGuildChannel):
    """Represents a guild channel that holds messages.

    Every channel type other than :attr:`.ChannelType.voice` is represented by this class.
    """

    type: ChannelType = field(repr=True, kw_only=True)  # type: ignore
    """:class:`.ChannelType`: The channel's type."""

    topic: typing.Optional[str] = field(repr=True, kw_only=True)
    """Optional[:class:`str`]: The channel's topic."""

    last_message_id: typing.Optional[str] = field(repr=True, kw_only=True)
    """Optional[:class:`str`]: The ID of the last message sent in the channel."""

    last_pin_timestamp: typing.Optional[datetime] = field(repr=False, kw_only=True)
    """Optional[:class:`~datetime.datetime`]: When the last message was pinned."""

    message_limit: int = field(repr=False, kw_only=True)
    """:class:`int`: The maximum number of messages kept in :attr:`messages`. ``0`` disables history."""

    messages: dict[str, Message] = field(repr=False, kw_only=True, factory=dict)
    """Dict[:class:`str`, :class:`.Message`]: The most recently seen messages, oldest first."""

    def locally_update(self, data: PartialGuildChannel, /) -> None:
        """Locally updates channel with provided data.

        .. warning::
            This is called by library internally to keep cache up to date.

        Parameters
        ----------
        data: :class:`.PartialGuildChannel`
            The data to update channel with.
        """
        BaseGuildChannel.locally_update(self, data)
        if data.topic is not UNDEFINED:
            self.topic = data.topic
        if data.last_message_id is not UNDEFINED:
            self.last_message_id = data.last_message_id
        if data.last_pin_timestamp is not UNDEFINED:
            self.last_pin_timestamp = data.last_pin_timestamp

    def get_message(self, message_id: str, /) -> typing.Optional[Message]:
        """Optional[:class:`.Message`]: Retrieves a message from channel history."""
        return self.messages.get(message_id)

    def locally_add_message(self, message: Message, /) -> None:
        """Stores a message in channel history, evicting the oldest messages beyond :attr:`message_limit`.

        Parameters
        ----------
        message: :class:`.Message`
            The message to store.
        """
        if self.message_limit <= 0:
            return

        messages = self.messages
        messages[message.id] = message

        while len(messages) > self.message_limit:
            del messages[next(iter(messages))]

    def locally_remove_message(self, message_id: str, /) -> typing.Optional[Message]:
        return self.messages.pop(message_id, None)


@define(slots=True)
class VoiceChannel(BaseGuildChannel):
    """Represents a guild voice channel."""

    bitrate: int = field(repr=True, kw_only=True)
    """:class:`int`: The channel's bitrate in bits per second."""

    user_limit: int = field(repr=True, kw_only=True)
    """:class:`int`: The maximum number of members in the channel. ``0`` means unlimited."""

    voice_members: dict[str, Member] = field(repr=False, kw_only=True, factory=dict)
    """Dict[:class:`str`, :class:`.Member`]: The members currently connected to the channel."""

    @property
    def type(self) -> typing.Literal[ChannelType.voice]:
        """Literal[:attr:`.ChannelType.voice`]: The channel's type."""
        return ChannelType.voice

    def _compute_nsfw(self, data: PartialGuildChannel, /) -> bool:
        return False

    def locally_update(self, data: PartialGuildChannel, /) -> None:
        """Locally updates channel with provided data.

        .. warning::
            This is called by library internally to keep cache up to date.

        Parameters
        ----------
        data: :class:`.PartialGuildChannel`
            The data to update channel with.
        """
        BaseGuildChannel.locally_update(self, data)
        if data.bitrate is not UNDEFINED:
            self.bitrate = data.bitrate
        if data.user_limit is not UNDEFINED:
            self.user_limit = data.user_limit

    def locally_add_voice_member(self, member: Member, /) -> None:
        self.voice_members[member.id] = member

    def locally_remove_voice_member(self, member_id: str, /) -> typing.Optional[Member]:
        return self.voice_members.pop(member_id, None)


GuildChannel = typing.Union[TextChannel, VoiceChannel]

__all__ = (
    'PartialGuildChannel',
    'is_nsfw_name',
    'calculate_guild_channel_permissions',
    'BaseGuildChannel',
    'TextChannel',
    'VoiceChannel',
    'GuildChannel',
)
