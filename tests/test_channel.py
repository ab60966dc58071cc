from __future__ import annotations

from datetime import datetime, timedelta, timezone
import json

import pytest
import pyguild

with open('./tests/data/guild.json', 'r') as fp:
    guild_payload = json.load(fp)


def parse_guild(*, message_limit: int = 100) -> pyguild.Guild:
    state = pyguild.State(message_limit=message_limit)
    return state.parser.parse_guild(guild_payload)


def make_message(channel: pyguild.TextChannel, message_id: str, content: str = '') -> pyguild.Message:
    return pyguild.Message(
        state=channel.state,
        id=message_id,
        channel_id=channel.id,
        author_id='1001',
        content=content,
        edited_at=None,
        pinned=False,
    )


def test_construction():
    guild = parse_guild()

    general = guild.get_channel('10')
    assert isinstance(general, pyguild.TextChannel)
    assert general.type is pyguild.ChannelType.text
    assert general.name == 'general'
    assert general.position == 0
    assert general.topic == 'General chat'
    assert general.last_message_id is None
    assert general.last_pin_timestamp is None
    assert general.permission_overwrites == {}
    assert general.nsfw is False
    assert general.guild is guild
    assert general.guild_id == '100'
    assert general.message_limit == 100
    assert general.messages == {}

    art = guild.get_channel('12')
    assert isinstance(art, pyguild.TextChannel)
    assert art.last_pin_timestamp == datetime(2018, 2, 3, 19, 39, 34, 263000, tzinfo=timezone.utc)

    lounge = guild.get_channel('20')
    assert isinstance(lounge, pyguild.VoiceChannel)
    assert lounge.type is pyguild.ChannelType.voice
    assert lounge.bitrate == 64000
    assert lounge.user_limit == 10
    assert lounge.voice_members == {}
    assert not hasattr(lounge, 'messages')

    info = guild.get_channel('30')
    assert isinstance(info, pyguild.TextChannel)
    assert info.type is pyguild.ChannelType.category


def test_construction_defaults():
    guild = parse_guild()
    parser = guild.state.parser

    channel = parser.parse_guild_channel({'id': '40', 'type': 0}, guild)  # type: ignore
    assert isinstance(channel, pyguild.TextChannel)
    assert channel.name == ''
    assert channel.position == 0
    assert channel.topic is None
    assert channel.permission_overwrites == {}
    assert channel.nsfw is False

    channel = parser.parse_guild_channel({'id': '41', 'type': 2}, guild)  # type: ignore
    assert isinstance(channel, pyguild.VoiceChannel)
    assert channel.bitrate == 0
    assert channel.user_limit == 0


def test_unknown_type_builds_text_channel():
    guild = parse_guild()
    channel = guild.state.parser.parse_guild_channel(
        {'id': '42', 'type': 15, 'name': 'forum', 'position': 5, 'permission_overwrites': []},
        guild,
    )
    assert isinstance(channel, pyguild.TextChannel)
    assert channel.type == 15


def test_missing_id():
    guild = parse_guild()
    with pytest.raises(pyguild.InvalidData):
        guild.state.parser.parse_guild_channel({'type': 0, 'name': 'nameless'}, guild)  # type: ignore


def test_last_write_wins():
    guild = parse_guild()
    parser = guild.state.parser

    channel = guild.get_channel('13')
    assert isinstance(channel, pyguild.TextChannel)
    assert len(channel.permission_overwrites) == 3

    guild.locally_update_channel(parser.parse_partial_guild_channel({'id': '13', 'topic': 'Read only'}))
    assert channel.topic == 'Read only'
    assert channel.name == 'announcements'
    assert channel.position == 3
    assert len(channel.permission_overwrites) == 3

    guild.locally_update_channel(parser.parse_partial_guild_channel({'id': '13', 'name': 'news', 'position': 7}))
    assert channel.name == 'news'
    assert channel.position == 7
    assert channel.topic == 'Read only'
    assert len(channel.permission_overwrites) == 3

    guild.locally_update_channel(parser.parse_partial_guild_channel({'id': '13', 'topic': None}))
    assert channel.topic is None


def test_overwrites_replaced_wholesale():
    guild = parse_guild()
    parser = guild.state.parser

    channel = guild.get_channel('13')
    assert channel is not None

    guild.locally_update_channel(
        parser.parse_partial_guild_channel(
            {
                'id': '13',
                'permission_overwrites': [{'id': '400', 'type': 'role', 'allow': 0, 'deny': 2048}],
            }
        )
    )
    assert list(channel.permission_overwrites) == ['400']

    overwrite = channel.get_overwrite('400')
    assert overwrite is not None
    assert overwrite.type is pyguild.OverwriteType.role
    assert overwrite.deny.send_messages is True
    assert overwrite.allow.value == 0

    guild.locally_update_channel(parser.parse_partial_guild_channel({'id': '13', 'permission_overwrites': []}))
    assert channel.permission_overwrites == {}


def test_unknown_overwrite_type():
    guild = parse_guild()
    overwrites = [{'id': '1', 'type': 'everyone', 'allow': 0, 'deny': 0}]
    with pytest.raises(pyguild.InvalidData):
        guild.state.parser.parse_partial_guild_channel({'id': '13', 'permission_overwrites': overwrites})


def test_is_nsfw_name():
    assert pyguild.is_nsfw_name('nsfw')
    assert pyguild.is_nsfw_name('nsfw-art')
    assert not pyguild.is_nsfw_name('nsfw_')
    assert not pyguild.is_nsfw_name('NSFW')
    assert not pyguild.is_nsfw_name('nsfwart')
    assert not pyguild.is_nsfw_name('not-nsfw')
    assert not pyguild.is_nsfw_name('nsf')
    assert not pyguild.is_nsfw_name('')


def test_nsfw_recomputed():
    guild = parse_guild()
    parser = guild.state.parser

    assert guild.channels['11'].nsfw is True
    assert guild.channels['12'].nsfw is True

    general = guild.channels['10']
    assert general.nsfw is False

    guild.locally_update_channel(parser.parse_partial_guild_channel({'id': '10', 'name': 'nsfw'}))
    assert general.nsfw is True

    guild.locally_update_channel(parser.parse_partial_guild_channel({'id': '10', 'name': 'nsfw-memes'}))
    assert general.nsfw is True

    guild.locally_update_channel(parser.parse_partial_guild_channel({'id': '10', 'name': 'general'}))
    assert general.nsfw is False

    guild.locally_update_channel(parser.parse_partial_guild_channel({'id': '10', 'nsfw': True}))
    assert general.nsfw is True

    # an update without the flag does not keep the old one
    guild.locally_update_channel(parser.parse_partial_guild_channel({'id': '10', 'topic': 'Hello'}))
    assert general.nsfw is False


def test_voice_channel_never_nsfw():
    guild = parse_guild()
    channel = guild.channels['21']
    assert isinstance(channel, pyguild.VoiceChannel)
    assert channel.name == 'nsfw'
    assert channel.nsfw is False

    guild.locally_update_channel(
        guild.state.parser.parse_partial_guild_channel({'id': '21', 'name': 'nsfw-voice', 'nsfw': True})
    )
    assert channel.nsfw is False


def test_variant_invariants():
    guild = parse_guild()
    parser = guild.state.parser

    guild.locally_update_channel(
        parser.parse_partial_guild_channel(
            {'id': '20', 'topic': 'ignored', 'last_message_id': '5', 'bitrate': 96000, 'user_limit': 2}
        )
    )
    lounge = guild.channels['20']
    assert isinstance(lounge, pyguild.VoiceChannel)
    assert lounge.bitrate == 96000
    assert lounge.user_limit == 2
    assert lounge.type is pyguild.ChannelType.voice
    assert not hasattr(lounge, 'topic')
    assert not hasattr(lounge, 'messages')

    guild.locally_update_channel(
        parser.parse_partial_guild_channel({'id': '10', 'bitrate': 96000, 'user_limit': 2, 'last_message_id': '5'})
    )
    general = guild.channels['10']
    assert isinstance(general, pyguild.TextChannel)
    assert general.last_message_id == '5'
    assert general.type is pyguild.ChannelType.text
    assert not hasattr(general, 'bitrate')
    assert not hasattr(general, 'voice_members')


def test_update_unknown_channel():
    guild = parse_guild()
    data = guild.state.parser.parse_partial_guild_channel({'id': '999', 'name': 'ghost'})
    assert guild.locally_update_channel(data) is None
    assert '999' not in guild.channels


def test_mention():
    guild = parse_guild()
    channel = guild.state.parser.parse_guild_channel({'id': '123', 'type': 0, 'name': 'x'}, guild)  # type: ignore
    assert channel.mention == '<#123>'
    assert guild.channels['20'].mention == '<#20>'
    assert str(guild.channels['10']) == 'general'


def test_message_history_is_bounded():
    guild = parse_guild(message_limit=3)
    channel = guild.channels['10']
    assert isinstance(channel, pyguild.TextChannel)
    assert channel.message_limit == 3

    for i in range(1, 6):
        channel.locally_add_message(make_message(channel, str(i)))

    assert list(channel.messages) == ['3', '4', '5']
    assert channel.get_message('1') is None
    assert channel.get_message('5') is not None

    # replacing a stored message does not evict anything
    channel.locally_add_message(make_message(channel, '4', 'edited'))
    assert list(channel.messages) == ['3', '4', '5']
    assert channel.messages['4'].content == 'edited'

    removed = channel.locally_remove_message('3')
    assert removed is not None
    assert removed.is_in(channel)
    assert list(channel.messages) == ['4', '5']
    assert channel.locally_remove_message('3') is None


def test_message_history_disabled():
    guild = parse_guild(message_limit=0)
    channel = guild.channels['10']
    assert isinstance(channel, pyguild.TextChannel)

    channel.locally_add_message(make_message(channel, '1'))
    assert channel.messages == {}


def test_explicit_message_limit():
    guild = parse_guild()
    channel = guild.state.parser.parse_guild_channel(
        {'id': '50', 'type': 0, 'name': 'logs', 'position': 9, 'permission_overwrites': []},
        guild,
        message_limit=1,
    )
    assert isinstance(channel, pyguild.TextChannel)
    assert channel.message_limit == 1

    channel.locally_add_message(make_message(channel, '1'))
    channel.locally_add_message(make_message(channel, '2'))
    assert list(channel.messages) == ['2']


def test_message_timestamp():
    guild = parse_guild()
    channel = guild.channels['10']
    assert isinstance(channel, pyguild.TextChannel)

    now = datetime.now(timezone.utc)
    message = make_message(channel, pyguild.time_snowflake(now))
    assert abs(message.timestamp - now) < timedelta(milliseconds=2)
