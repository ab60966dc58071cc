from __future__ import annotations

import json

import pytest
import pyguild

with open('./tests/data/guild.json', 'r') as fp:
    guild_payload = json.load(fp)

SEND = pyguild.Permissions.send_messages.value
VIEW = pyguild.Permissions.read_messages.value


def parse_guild() -> pyguild.Guild:
    state = pyguild.State()
    return state.parser.parse_guild(guild_payload)


def overwrites(*items: pyguild.PermissionOverwrite) -> dict[str, pyguild.PermissionOverwrite]:
    return {o.id: o for o in items}


def test_member_overwrite_wins():
    result = pyguild.calculate_guild_channel_permissions(
        SEND,
        ['2'],
        member_id='3',
        guild_id='1',
        overwrites=overwrites(
            pyguild.PermissionOverwrite('1', pyguild.OverwriteType.role, deny=pyguild.Permissions(SEND)),
            pyguild.PermissionOverwrite('2', pyguild.OverwriteType.role, allow=pyguild.Permissions(SEND)),
            pyguild.PermissionOverwrite('3', pyguild.OverwriteType.member, deny=pyguild.Permissions(SEND)),
        ),
    )
    assert result.send_messages is False
    assert result.value == 0


def test_role_overwrite_beats_everyone():
    result = pyguild.calculate_guild_channel_permissions(
        SEND | VIEW,
        ['2'],
        member_id='3',
        guild_id='1',
        overwrites=overwrites(
            pyguild.PermissionOverwrite('1', pyguild.OverwriteType.role, deny=pyguild.Permissions(VIEW)),
            pyguild.PermissionOverwrite('2', pyguild.OverwriteType.role, allow=pyguild.Permissions(VIEW)),
        ),
    )
    assert result.read_messages is True
    assert result.send_messages is True
    assert result.value == SEND | VIEW


def test_role_overwrites_are_unioned():
    # allow from one role overrides deny from another, since unions are applied together
    result = pyguild.calculate_guild_channel_permissions(
        pyguild.Permissions(send_messages=True, embed_links=True),
        ['2', '4'],
        member_id='3',
        guild_id='1',
        overwrites=overwrites(
            pyguild.PermissionOverwrite(
                '2', 'role', deny=pyguild.Permissions(send_messages=True, embed_links=True)
            ),
            pyguild.PermissionOverwrite('4', 'role', allow=pyguild.Permissions(send_messages=True)),
        ),
    )
    assert result.send_messages is True
    assert result.embed_links is False


def test_overwrites_for_other_subjects_are_ignored():
    result = pyguild.calculate_guild_channel_permissions(
        SEND,
        [],
        member_id='3',
        guild_id='1',
        overwrites=overwrites(
            pyguild.PermissionOverwrite('2', 'role', deny=pyguild.Permissions(SEND)),
            pyguild.PermissionOverwrite('5', 'member', deny=pyguild.Permissions(SEND)),
        ),
    )
    assert result.value == SEND


def test_administrator_short_circuit():
    result = pyguild.calculate_guild_channel_permissions(
        pyguild.ADMINISTRATOR,
        ['2'],
        member_id='3',
        guild_id='1',
        overwrites=overwrites(
            pyguild.PermissionOverwrite('1', 'role', deny=pyguild.Permissions.all()),
            pyguild.PermissionOverwrite('2', 'role', deny=pyguild.Permissions.all()),
            pyguild.PermissionOverwrite('3', 'member', deny=pyguild.Permissions.all()),
        ),
    )
    assert result == pyguild.Permissions.all()
    assert result.value == pyguild.ALL_PERMISSIONS


def test_channel_permissions_for():
    guild = parse_guild()
    announcements = guild.channels['13']

    alice = announcements.permissions_for('1001')
    assert alice.read_messages is True
    assert alice.send_messages is True
    assert alice.manage_messages is True
    assert alice.kick_members is True

    carol = guild.get_member('1003')
    assert carol is not None
    assert announcements.permissions_for(carol) == alice

    dave = announcements.permissions_for('1004')
    assert dave.send_messages is False
    assert dave.read_messages is False
    assert dave.read_message_history is True
    assert dave.value == pyguild.Permissions.read_message_history.value

    general = guild.channels['10']
    assert general.permissions_for('1004').value == 68608


def test_channel_permissions_for_administrators():
    guild = parse_guild()
    lounge = guild.channels['20']

    assert lounge.permissions_for('1004').connect is False
    assert lounge.permissions_for('1002') == pyguild.Permissions.all()
    assert lounge.permissions_for('1000') == pyguild.Permissions.all()

    announcements = guild.channels['13']
    assert announcements.permissions_for('1002').send_messages is True


def test_missing_member():
    guild = parse_guild()
    channel = guild.channels['10']

    with pytest.raises(pyguild.MemberNotFound) as exc_info:
        channel.permissions_for('31337')

    assert exc_info.value.member_id == '31337'
    assert exc_info.value.guild_id == '100'
    assert isinstance(exc_info.value, pyguild.NoData)


def test_guild_permissions():
    guild = parse_guild()

    owner = guild.get_member('1000')
    assert owner is not None
    assert owner.permissions == pyguild.Permissions.all()

    alice = guild.permissions_for('1001')
    assert alice.value == 68608 | 8194

    bob = guild.get_member('1002')
    assert bob is not None
    assert bob.permissions.value == pyguild.ALL_PERMISSIONS

    dave = guild.permissions_for('1004')
    assert dave.value == 68608

    # unknown roles are skipped
    erin = guild.get_member('1005')
    assert erin is not None
    assert erin.roles == []
    assert erin.permissions.value == 68608

    with pytest.raises(pyguild.MemberNotFound):
        guild.permissions_for('31337')


def test_calculate_guild_permissions_without_default_role():
    roles = {
        '7': pyguild.Role(
            state=pyguild.State(),
            id='7',
            guild_id='1',
            name='Helpers',
            position=1,
            raw_permissions=SEND,
        ),
    }
    result = pyguild.calculate_guild_permissions('3', ['7'], guild_id='1', owner_id='2', roles=roles)
    assert result.value == SEND


def test_overwrite_wire_shape():
    overwrite = pyguild.PermissionOverwrite(
        '200',
        'member',
        allow=pyguild.Permissions(send_messages=True),
        deny=pyguild.Permissions(read_messages=True),
    )
    assert overwrite.type is pyguild.OverwriteType.member
    assert overwrite.build() == {'id': '200', 'type': 'member', 'allow': 2048, 'deny': 1024}
    assert not overwrite.is_empty()
    assert pyguild.PermissionOverwrite('1', 'role').is_empty()

    overwrite.deny = pyguild.Permissions.none()
    assert overwrite.raw_deny == 0
