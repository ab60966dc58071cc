from __future__ import annotations

from datetime import datetime, timezone
import json
import logging

import pytest
import pyguild

with open('./tests/data/guild.json', 'r') as fp:
    guild_payload = json.load(fp)


def parse_guild() -> pyguild.Guild:
    state = pyguild.State()
    return state.parser.parse_guild(guild_payload)


def test_parse_guild():
    guild = parse_guild()

    assert guild.id == '100'
    assert guild.name == 'Testing Grounds'
    assert guild.owner_id == '1000'
    assert guild.icon is None
    assert len(guild.roles) == 4
    assert len(guild.members) == 6
    assert len(guild.channels) == 7

    default_role = guild.default_role
    assert default_role.is_default()
    assert default_role.permissions.read_messages is True
    assert default_role.mention == '<@&100>'

    moderators = guild.get_role('200')
    assert moderators is not None
    assert moderators.hoist is True
    assert moderators.color == 3447003
    assert moderators.permissions.manage_messages is True

    alice = guild.get_member('1001')
    assert alice is not None
    assert alice.name == 'alice'
    assert alice.display_name == 'Alice'
    assert str(alice) == 'Alice'
    assert alice.mention == '<@1001>'
    assert alice.joined_at == datetime(2017, 5, 4, 12, 30, tzinfo=timezone.utc)
    assert [r.id for r in alice.roles] == ['200']

    erin = guild.get_member('1005')
    assert erin is not None
    assert erin.bot is True
    assert erin.deaf is True
    assert erin.joined_at is None

    owner = guild.owner
    assert owner is not None
    assert owner.display_name == 'owner'


def test_channel_lists():
    guild = parse_guild()

    assert [c.id for c in guild.text_channels] == ['10', '30', '11', '12', '13']
    assert [c.id for c in guild.voice_channels] == ['20', '21']


def test_channel_lifecycle(caplog: pytest.LogCaptureFixture):
    caplog.set_level(logging.DEBUG, logger='pyguild')

    guild = parse_guild()
    parser = guild.state.parser

    channel = parser.parse_guild_channel(
        {'id': '60', 'type': 0, 'name': 'new-channel', 'position': 4, 'permission_overwrites': []},
        guild,
    )
    guild.locally_add_channel(channel)
    assert guild.get_channel('60') is channel

    updated = guild.locally_update_channel(parser.parse_partial_guild_channel({'id': '60', 'name': 'renamed'}))
    assert updated is channel
    assert channel.name == 'renamed'

    removed = guild.locally_remove_channel('60')
    assert removed is channel
    assert guild.get_channel('60') is None
    assert guild.locally_remove_channel('60') is None

    messages = [r.getMessage() for r in caplog.records if r.name == 'pyguild.guild']
    assert any('adding channel 60' in m for m in messages)
    assert any('updated channel 60' in m for m in messages)
    assert any('removed channel 60' in m for m in messages)


def test_missing_default_role():
    guild = pyguild.Guild(state=pyguild.State(), id='1', name='Empty', owner_id='2')
    with pytest.raises(pyguild.NoData):
        guild.default_role


def test_voice_members():
    guild = parse_guild()
    lounge = guild.channels['20']
    afk = guild.channels['21']
    assert isinstance(lounge, pyguild.VoiceChannel)
    assert isinstance(afk, pyguild.VoiceChannel)

    assert guild.locally_move_voice_member('1001', '20') is lounge
    assert list(lounge.voice_members) == ['1001']

    guild.locally_move_voice_member('1001', '21')
    assert lounge.voice_members == {}
    assert list(afk.voice_members) == ['1001']

    # text channels never gain voice members
    assert guild.locally_move_voice_member('1001', '10') is None
    assert afk.voice_members == {}

    guild.locally_move_voice_member('1002', '21')
    assert guild.locally_remove_member('1002') is not None
    assert afk.voice_members == {}
    assert guild.get_member('1002') is None

    assert guild.locally_move_voice_member('31337', '21') is None


def test_voice_members_from_payload():
    guild = parse_guild()
    channel = guild.state.parser.parse_guild_channel(
        {
            'id': '70',
            'type': 2,
            'name': 'Stage',
            'position': 3,
            'permission_overwrites': [],
            'voice_members': [
                {'user': {'id': '1001', 'username': 'alice'}, 'roles': ['200']},
                {'user': {'id': '2000', 'username': 'stranger'}, 'roles': []},
            ],
        },
        guild,
    )
    assert isinstance(channel, pyguild.VoiceChannel)
    assert channel.voice_members['1001'] is guild.members['1001']
    assert channel.voice_members['2000'].name == 'stranger'

    channel.locally_remove_voice_member('2000')
    assert list(channel.voice_members) == ['1001']
