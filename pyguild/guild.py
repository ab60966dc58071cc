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
import logging
import typing

from .base import Base
from .errors import MemberNotFound, NoData
from .flags import Permissions
from .permissions import ADMINISTRATOR

if typing.TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from .channel import PartialGuildChannel, TextChannel, VoiceChannel, GuildChannel

_L = logging.getLogger(__name__)
_new_permissions = Permissions.__new__


@define(slots=True)
class Role(Base):
    """Represents a guild role."""

    guild_id: str = field(repr=True, kw_only=True)
    """:class:`str`: The ID of the guild the role belongs to."""

    name: str = field(repr=True, kw_only=True)
    """:class:`str`: The role's name."""

    position: int = field(repr=True, kw_only=True)
    """:class:`int`: The role's position in hierarchy."""

    raw_permissions: int = field(repr=True, kw_only=True)
    """:class:`int`: The raw value of guild-level permissions granted by the role."""

    color: int = field(repr=False, kw_only=True, default=0)
    """:class:`int`: The role's color."""

    hoist: bool = field(repr=False, kw_only=True, default=False)
    """:class:`bool`: Whether the role is displayed separately in member list."""

    mentionable: bool = field(repr=False, kw_only=True, default=False)
    """:class:`bool`: Whether the role can be mentioned by anyone."""

    @property
    def permissions(self) -> Permissions:
        """:class:`.Permissions`: The guild-level permissions granted by the role."""
        ret = _new_permissions(Permissions)
        ret.value = self.raw_permissions
        return ret

    @property
    def mention(self) -> str:
        """:class:`str`: Returns the role's mention."""
        return f'<@&{self.id}>'

    def is_default(self) -> bool:
        """:class:`bool`: Whether the role is the ``@everyone`` role."""
        return self.id == self.guild_id


def calculate_guild_permissions(
    member_id: str,
    role_ids: Iterable[str],
    /,
    *,
    guild_id: str,
    owner_id: str,
    roles: Mapping[str, Role],
) -> Permissions:
    """Calculates the permissions in :class:`.Guild` scope.

    Parameters
    ----------
    member_id: :class:`str`
        The ID of the member.
    role_ids: Iterable[:class:`str`]
        The IDs of roles the member has. Unknown IDs are skipped.
    guild_id: :class:`str`
        The guild's ID, also the ID of the ``@everyone`` role.
    owner_id: :class:`str`
        The ID of the guild owner (:attr:`.Guild.owner_id`).
    roles: Mapping[:class:`str`, :class:`.Role`]
        The guild's roles (:attr:`.Guild.roles`).

    Returns
    -------
    :class:`.Permissions`
        The calculated permissions.
    """
    if member_id == owner_id:
        return Permissions.all()

    default_role = roles.get(guild_id)
    result = 0 if default_role is None else default_role.raw_permissions

    if result & ADMINISTRATOR:
        return Permissions.all()

    for role_id in role_ids:
        role = roles.get(role_id)
        if role is None:
            continue
        result |= role.raw_permissions
        if result & ADMINISTRATOR:
            return Permissions.all()

    return Permissions(result)


@define(slots=True)
class Member(Base):
    """Represents a guild member.

    :attr:`.id` is the ID of the underlying user.
    """

    guild: Guild = field(repr=False, kw_only=True, eq=False)
    """:class:`.Guild`: The guild the member is in."""

    name: str = field(repr=True, kw_only=True)
    """:class:`str`: The user's name."""

    nick: typing.Optional[str] = field(repr=True, kw_only=True)
    """Optional[:class:`str`]: The member's guild nickname."""

    role_ids: list[str] = field(repr=True, kw_only=True)
    """List[:class:`str`]: The IDs of roles the member has, not including ``@everyone``."""

    joined_at: typing.Optional[datetime] = field(repr=False, kw_only=True)
    """Optional[:class:`~datetime.datetime`]: When the member joined the guild."""

    bot: bool = field(repr=False, kw_only=True, default=False)
    """:class:`bool`: Whether the member is a bot."""

    deaf: bool = field(repr=False, kw_only=True, default=False)
    """:class:`bool`: Whether the member is deafened in voice channels."""

    mute: bool = field(repr=False, kw_only=True, default=False)
    """:class:`bool`: Whether the member is muted in voice channels."""

    def __str__(self) -> str:
        return self.display_name

    @property
    def display_name(self) -> str:
        """:class:`str`: The member's nickname, or user's name if the member has no nickname."""
        return self.nick or self.name

    @property
    def mention(self) -> str:
        """:class:`str`: Returns the member's mention."""
        return f'<@{self.id}>'

    @property
    def roles(self) -> list[Role]:
        """List[:class:`.Role`]: The member's roles the guild knows about."""
        roles = self.guild.roles
        return [roles[role_id] for role_id in self.role_ids if role_id in roles]

    @property
    def permissions(self) -> Permissions:
        """:class:`.Permissions`: The member's guild-level permissions."""
        guild = self.guild
        return calculate_guild_permissions(
            self.id,
            self.role_ids,
            guild_id=guild.id,
            owner_id=guild.owner_id,
            roles=guild.roles,
        )


@define(slots=True)
class Guild(Base):
    """Represents a guild (a server) with its roles, members and channels."""

    name: str = field(repr=True, kw_only=True)
    """:class:`str`: The guild's name."""

    owner_id: str = field(repr=True, kw_only=True)
    """:class:`str`: The ID of the user who owns the guild."""

    icon: typing.Optional[str] = field(repr=False, kw_only=True, default=None)
    """Optional[:class:`str`]: The guild's icon hash."""

    roles: dict[str, Role] = field(repr=False, kw_only=True, factory=dict)
    """Dict[:class:`str`, :class:`.Role`]: The guild's roles."""

    members: dict[str, Member] = field(repr=False, kw_only=True, factory=dict)
    """Dict[:class:`str`, :class:`.Member`]: The guild's members."""

    channels: dict[str, GuildChannel] = field(repr=False, kw_only=True, factory=dict)
    """Dict[:class:`str`, :class:`.GuildChannel`]: The guild's channels."""

    def get_member(self, member_id: str, /) -> typing.Optional[Member]:
        """Retrieves a guild member.

        Parameters
        ----------
        member_id: :class:`str`
            The user ID of the member.

        Returns
        -------
        Optional[:class:`.Member`]
            The member or ``None`` if not found.
        """
        return self.members.get(member_id)

    def get_role(self, role_id: str, /) -> typing.Optional[Role]:
        """Optional[:class:`.Role`]: Retrieves a guild role by its ID."""
        return self.roles.get(role_id)

    def get_channel(self, channel_id: str, /) -> typing.Optional[GuildChannel]:
        """Optional[:class:`.GuildChannel`]: Retrieves a guild channel by its ID."""
        return self.channels.get(channel_id)

    @property
    def default_role(self) -> Role:
        """:class:`.Role`: The ``@everyone`` role."""
        role = self.roles.get(self.id)
        if role is None:
            raise NoData(self.id, 'default role')
        return role

    @property
    def owner(self) -> typing.Optional[Member]:
        """Optional[:class:`.Member`]: The guild owner, if the guild knows about them."""
        return self.members.get(self.owner_id)

    @property
    def text_channels(self) -> list[TextChannel]:
        """List[:class:`.TextChannel`]: The guild's non-voice channels, sorted by position."""
        from .channel import TextChannel

        return sorted(
            (c for c in self.channels.values() if isinstance(c, TextChannel)),
            key=lambda c: (c.position, c.id),
        )

    @property
    def voice_channels(self) -> list[VoiceChannel]:
        """List[:class:`.VoiceChannel`]: The guild's voice channels, sorted by position."""
        from .channel import VoiceChannel

        return sorted(
            (c for c in self.channels.values() if isinstance(c, VoiceChannel)),
            key=lambda c: (c.position, c.id),
        )

    def permissions_for(self, member: typing.Union[str, Member], /) -> Permissions:
        """Calculate guild-level permissions for given member.

        Parameters
        ----------
        member: Union[:class:`str`, :class:`.Member`]
            The member to calculate permissions for.

        Raises
        ------
        :class:`MemberNotFound`
            The member is not in the guild.

        Returns
        -------
        :class:`.Permissions`
            The calculated permissions.
        """
        if isinstance(member, str):
            target = self.members.get(member)
            if target is None:
                raise MemberNotFound(member, self.id)
            member = target
        return member.permissions

    def locally_add_member(self, member: Member, /) -> None:
        self.members[member.id] = member

    def locally_remove_member(self, member_id: str, /) -> typing.Optional[Member]:
        member = self.members.pop(member_id, None)
        if member is not None:
            self.locally_move_voice_member(member_id, None)
        return member

    def locally_add_channel(self, channel: GuildChannel, /) -> None:
        """Registers a channel that was created or first observed in the guild.

        .. warning::
            This is called by library internally to keep cache up to date.

        Parameters
        ----------
        channel: :class:`.GuildChannel`
            The channel to add.
        """
        _L.debug('Guild %s: adding channel %s (%r)', self.id, channel.id, channel.name)
        self.channels[channel.id] = channel

    def locally_update_channel(self, data: PartialGuildChannel, /) -> typing.Optional[GuildChannel]:
        """Applies a partial channel update to the channel it refers to.

        .. warning::
            This is called by library internally to keep cache up to date.

        Parameters
        ----------
        data: :class:`.PartialGuildChannel`
            The data to update channel with.

        Returns
        -------
        Optional[:class:`.GuildChannel`]
            The updated channel, or ``None`` if the guild does not have it.
        """
        channel = self.channels.get(data.id)
        if channel is None:
            _L.debug('Guild %s: ignoring update for unknown channel %s', self.id, data.id)
            return None
        channel.locally_update(data)
        _L.debug('Guild %s: updated channel %s', self.id, channel.id)
        return channel

    def locally_remove_channel(self, channel_id: str, /) -> typing.Optional[GuildChannel]:
        """Removes a deleted channel from the guild.

        .. warning::
            This is called by library internally to keep cache up to date.

        Parameters
        ----------
        channel_id: :class:`str`
            The ID of the channel to remove.

        Returns
        -------
        Optional[:class:`.GuildChannel`]
            The removed channel, if the guild had it.
        """
        channel = self.channels.pop(channel_id, None)
        if channel is not None:
            _L.debug('Guild %s: removed channel %s', self.id, channel_id)
        return channel

    def locally_move_voice_member(
        self, member_id: str, channel_id: typing.Optional[str], /
    ) -> typing.Optional[VoiceChannel]:
        """Moves a member between voice channels.

        The member is removed from whatever voice channel they were in and, when ``channel_id``
        is given, added to that channel.

        Parameters
        ----------
        member_id: :class:`str`
            The member's ID.
        channel_id: Optional[:class:`str`]
            The voice channel's ID the member is now in, or ``None`` if they disconnected.

        Returns
        -------
        Optional[:class:`.VoiceChannel`]
            The voice channel the member was added to.
        """
        from .channel import VoiceChannel

        for channel in self.channels.values():
            if isinstance(channel, VoiceChannel):
                channel.locally_remove_voice_member(member_id)

        if channel_id is None:
            return None

        channel = self.channels.get(channel_id)
        member = self.members.get(member_id)
        if not isinstance(channel, VoiceChannel) or member is None:
            return None

        channel.locally_add_voice_member(member)
        return channel


__all__ = (
    'Role',
    'calculate_guild_permissions',
    'Member',
    'Guild',
)
