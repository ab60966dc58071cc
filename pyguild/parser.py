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

from datetime import datetime
import sys
import typing

from .channel import PartialGuildChannel, TextChannel, VoiceChannel
from .core import UNDEFINED
from .enums import ChannelType, OverwriteType
from .errors import InvalidData
from .guild import Guild, Member, Role
from .invite import Invite
from .message import Message
from .permissions import PermissionOverwrite
from .webhook import Webhook

if typing.TYPE_CHECKING:
    from . import raw
    from .channel import GuildChannel
    from .state import State

_new_permission_overwrite = PermissionOverwrite.__new__

if sys.version_info >= (3, 11):
    _parse_dt = datetime.fromisoformat
else:
    # datetime.fromisoformat in Python 3.10 doesn't understand 'Z' suffix
    # Example: 2025-02-03T19:39:34.263Z

    def _parse_dt(date_string: str, /) -> datetime:
        if date_string.endswith('Z'):
            date_string = date_string[:-1] + '+00:00'
        return datetime.fromisoformat(date_string)


class Parser:
    """An factory that produces wrapper objects from raw data.

    Attributes
    ----------
    state: :class:`.State`
        The state the parser is attached to.
    """

    __slots__ = ('state',)

    def __init__(self, *, state: State) -> None:
        self.state: State = state

    def parse_guild(self, payload: raw.Guild, /) -> Guild:
        """Parses a guild object, including its roles, members and channels.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The guild payload to parse.

        Returns
        -------
        :class:`.Guild`
            The parsed guild object.
        """
        guild_id = payload['id']

        guild = Guild(
            state=self.state,
            id=guild_id,
            name=payload['name'],
            owner_id=payload['owner_id'],
            icon=payload.get('icon'),
            roles={r['id']: self.parse_role(r, guild_id) for r in payload.get('roles', ())},
        )

        for m in payload.get('members', ()):
            guild.locally_add_member(self.parse_member(m, guild))

        for c in payload.get('channels', ()):
            guild.locally_add_channel(self.parse_guild_channel(c, guild))

        return guild

    def parse_role(self, payload: raw.Role, guild_id: str, /) -> Role:
        """Parses a role object.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The role payload to parse.
        guild_id: :class:`str`
            The ID of the guild the role belongs to.

        Returns
        -------
        :class:`.Role`
            The parsed role object.
        """
        return Role(
            state=self.state,
            id=payload['id'],
            guild_id=guild_id,
            name=payload['name'],
            position=payload['position'],
            raw_permissions=int(payload['permissions']),
            color=payload.get('color', 0),
            hoist=payload.get('hoist', False),
            mentionable=payload.get('mentionable', False),
        )

    def parse_member(self, payload: raw.Member, guild: Guild, /) -> Member:
        """Parses a member object.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The member payload to parse.
        guild: :class:`.Guild`
            The guild the member is in.

        Returns
        -------
        :class:`.Member`
            The parsed member object.
        """
        user = payload['user']
        joined_at = payload.get('joined_at')

        return Member(
            state=self.state,
            id=user['id'],
            guild=guild,
            name=user['username'],
            nick=payload.get('nick'),
            role_ids=list(payload.get('roles', ())),
            joined_at=_parse_dt(joined_at) if joined_at else None,
            bot=user.get('bot', False),
            deaf=payload.get('deaf', False),
            mute=payload.get('mute', False),
        )

    def parse_permission_overwrite(self, payload: raw.PermissionOverwrite, /) -> PermissionOverwrite:
        """Parses a permission overwrite object.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The permission overwrite payload to parse.

        Raises
        ------
        :class:`InvalidData`
            The overwrite type is unknown.

        Returns
        -------
        :class:`.PermissionOverwrite`
            The parsed permission overwrite object.
        """
        try:
            type = OverwriteType(payload['type'])
        except ValueError:
            raise InvalidData(f'Unknown permission overwrite type: {payload["type"]!r}') from None

        ret = _new_permission_overwrite(PermissionOverwrite)
        ret.id = payload['id']
        ret.type = type
        ret.raw_allow = int(payload['allow'])
        ret.raw_deny = int(payload['deny'])
        return ret

    def parse_permission_overwrites(
        self, payload: list[raw.PermissionOverwrite], /
    ) -> dict[str, PermissionOverwrite]:
        return {o['id']: self.parse_permission_overwrite(o) for o in payload}

    def parse_partial_guild_channel(self, payload: raw.PartialGuildChannel, /) -> PartialGuildChannel:
        """Parses a partial guild channel object.

        Keys that are missing from payload are set to :data:`.UNDEFINED`.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The partial channel payload to parse.

        Raises
        ------
        :class:`InvalidData`
            The payload has no ID.

        Returns
        -------
        :class:`.PartialGuildChannel`
            The parsed partial channel object.
        """
        try:
            channel_id = payload['id']
        except KeyError:
            raise InvalidData('Channel payload is missing an ID') from None

        permission_overwrites = payload.get('permission_overwrites')
        last_pin_timestamp = payload.get('last_pin_timestamp', UNDEFINED)

        return PartialGuildChannel(
            state=self.state,
            id=channel_id,
            name=payload.get('name', UNDEFINED),
            topic=payload.get('topic', UNDEFINED),
            position=payload.get('position', UNDEFINED),
            bitrate=payload.get('bitrate', UNDEFINED),
            user_limit=payload.get('user_limit', UNDEFINED),
            nsfw=payload.get('nsfw', UNDEFINED),
            permission_overwrites=UNDEFINED
            if permission_overwrites is None
            else self.parse_permission_overwrites(permission_overwrites),
            last_message_id=payload.get('last_message_id', UNDEFINED),
            last_pin_timestamp=_parse_dt(last_pin_timestamp) if last_pin_timestamp else last_pin_timestamp,
        )

    def parse_guild_channel(
        self,
        payload: raw.GuildChannel,
        guild: Guild,
        /,
        *,
        message_limit: typing.Optional[int] = None,
    ) -> GuildChannel:
        """Parses a guild channel object.

        :attr:`.ChannelType.voice` payloads produce :class:`.VoiceChannel`, and every other type
        produces :class:`.TextChannel`.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The channel payload to parse.
        guild: :class:`.Guild`
            The guild the channel belongs to.
        message_limit: Optional[:class:`int`]
            The number of messages the text channel keeps in memory. Defaults to :attr:`.State.message_limit`.

        Raises
        ------
        :class:`InvalidData`
            The payload has no ID.

        Returns
        -------
        :class:`.GuildChannel`
            The parsed channel object.
        """
        data = self.parse_partial_guild_channel(payload)
        type = ChannelType.try_value(payload.get('type', 0))

        channel: GuildChannel
        if type is ChannelType.voice:
            channel = VoiceChannel(
                state=self.state,
                id=data.id,
                guild=guild,
                name='',
                position=0,
                permission_overwrites={},
                nsfw=False,
                bitrate=0,
                user_limit=0,
            )
            for m in payload.get('voice_members', ()):
                member = guild.get_member(m['user']['id']) or self.parse_member(m, guild)
                channel.locally_add_voice_member(member)
        else:
            channel = TextChannel(
                state=self.state,
                id=data.id,
                guild=guild,
                name='',
                position=0,
                permission_overwrites={},
                nsfw=False,
                type=type,
                topic=None,
                last_message_id=None,
                last_pin_timestamp=None,
                message_limit=self.state.message_limit if message_limit is None else message_limit,
            )

        channel.locally_update(data)
        return channel

    def parse_message(self, payload: raw.Message, /) -> Message:
        """Parses a message object.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The message payload to parse.

        Returns
        -------
        :class:`.Message`
            The parsed message object.
        """
        edited_timestamp = payload.get('edited_timestamp')

        return Message(
            state=self.state,
            id=payload['id'],
            channel_id=payload['channel_id'],
            author_id=payload['author']['id'],
            content=payload.get('content', ''),
            edited_at=_parse_dt(edited_timestamp) if edited_timestamp else None,
            pinned=payload.get('pinned', False),
            tts=payload.get('tts', False),
        )

    def parse_invite(self, payload: raw.Invite, /) -> Invite:
        """Parses an invite object.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The invite payload to parse.

        Returns
        -------
        :class:`.Invite`
            The parsed invite object.
        """
        guild = payload.get('guild')
        inviter = payload.get('inviter')
        created_at = payload.get('created_at')

        return Invite(
            code=payload['code'],
            guild_id=None if guild is None else guild['id'],
            channel_id=payload['channel']['id'],
            inviter_id=None if inviter is None else inviter['id'],
            uses=payload.get('uses', 0),
            max_uses=payload.get('max_uses', 0),
            max_age=payload.get('max_age', 0),
            temporary=payload.get('temporary', False),
            created_at=_parse_dt(created_at) if created_at else None,
        )

    def parse_webhook(self, payload: raw.Webhook, /) -> Webhook:
        """Parses a webhook object.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The webhook payload to parse.

        Returns
        -------
        :class:`.Webhook`
            The parsed webhook object.
        """
        user = payload.get('user')

        return Webhook(
            state=self.state,
            id=payload['id'],
            channel_id=payload['channel_id'],
            guild_id=payload.get('guild_id'),
            creator_id=None if user is None else user['id'],
            name=payload.get('name'),
            avatar=payload.get('avatar'),
            token=payload.get('token'),
        )


__all__ = ('Parser',)
