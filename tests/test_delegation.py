from __future__ import annotations

import json
import typing

import pytest
import pyguild

with open('./tests/data/guild.json', 'r') as fp:
    guild_payload = json.load(fp)


class RecordingHTTPClient:
    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple[typing.Any, ...], dict[str, typing.Any]]] = []
        self.error: typing.Optional[Exception] = None

    def __getattr__(self, name: str) -> typing.Any:
        if name.startswith('_'):
            raise AttributeError(name)

        async def method(*args: typing.Any, **kwargs: typing.Any) -> typing.Any:
            self.calls.append((name, args, kwargs))
            if self.error is not None:
                raise self.error
            return name

        return method


def setup() -> tuple[RecordingHTTPClient, pyguild.Guild]:
    http = RecordingHTTPClient()
    state = pyguild.State(http=http)  # type: ignore
    return http, state.parser.parse_guild(guild_payload)


@pytest.mark.asyncio
async def test_edit():
    http, guild = setup()
    channel = guild.channels['10']

    result = await channel.edit(name='chat', topic=None, reason='Tidying up')
    assert result == 'edit_channel'
    assert http.calls == [
        (
            'edit_channel',
            (channel,),
            {
                'name': 'chat',
                'topic': None,
                'bitrate': pyguild.UNDEFINED,
                'user_limit': pyguild.UNDEFINED,
                'nsfw': pyguild.UNDEFINED,
                'reason': 'Tidying up',
            },
        )
    ]
    # channel fields only change when the update comes back
    assert channel.name == 'general'


@pytest.mark.asyncio
async def test_edit_position_and_delete():
    http, guild = setup()
    channel = guild.channels['11']

    await channel.edit_position(3)
    await channel.delete(reason='Unused')

    assert http.calls == [
        ('edit_channel_position', (channel, 3), {}),
        ('delete_channel', ('11',), {'reason': 'Unused'}),
    ]


@pytest.mark.asyncio
async def test_edit_permission():
    http, guild = setup()
    channel = guild.channels['13']

    await channel.edit_permission(
        '1004',
        allow=pyguild.Permissions(send_messages=True),
        type='member',
        reason='Trusted',
    )
    name, args, kwargs = http.calls[-1]
    assert name == 'edit_channel_permission'
    assert args == ('13', '1004')
    assert kwargs['allow'].value == 2048
    assert kwargs['deny'].value == 0
    assert kwargs['type'] is pyguild.OverwriteType.member
    assert kwargs['reason'] == 'Trusted'

    role = guild.roles['400']
    await channel.edit_permission(role, deny=pyguild.Permissions(send_messages=True))
    name, args, kwargs = http.calls[-1]
    assert args == ('13', '400')
    assert kwargs['type'] is pyguild.OverwriteType.role
    assert kwargs['deny'].value == 2048

    member = guild.members['1003']
    await channel.edit_permission(member)
    name, args, kwargs = http.calls[-1]
    assert args == ('13', '1003')
    assert kwargs['type'] is pyguild.OverwriteType.member

    overwrite = channel.permission_overwrites['200']
    await channel.edit_permission(overwrite, deny=pyguild.Permissions(embed_links=True))
    name, args, kwargs = http.calls[-1]
    assert args == ('13', '200')
    assert kwargs['type'] is pyguild.OverwriteType.role
    assert kwargs['allow'].value == 2048
    assert kwargs['deny'].value == pyguild.Permissions.embed_links.value


@pytest.mark.asyncio
async def test_edit_permission_validates_type():
    http, guild = setup()
    channel = guild.channels['13']

    with pytest.raises(ValueError):
        await channel.edit_permission('1004', allow=pyguild.Permissions(send_messages=True))

    with pytest.raises(ValueError):
        await channel.edit_permission('1004', type='everyone')

    assert http.calls == []


@pytest.mark.asyncio
async def test_delete_permission():
    http, guild = setup()
    channel = guild.channels['13']

    await channel.delete_permission(channel.permission_overwrites['1004'], reason='Forgiven')
    await channel.delete_permission('200')

    assert http.calls == [
        ('delete_channel_permission', ('13', '1004'), {'reason': 'Forgiven'}),
        ('delete_channel_permission', ('13', '200'), {'reason': None}),
    ]


@pytest.mark.asyncio
async def test_invites_and_webhooks():
    http, guild = setup()
    channel = guild.channels['20']

    assert await channel.get_invites() == 'get_channel_invites'
    assert await channel.create_invite(max_age=0, unique=True) == 'create_channel_invite'
    assert await channel.get_webhooks() == 'get_channel_webhooks'
    assert await channel.create_webhook(name='Captain Hook', reason='Alerts') == 'create_channel_webhook'

    assert http.calls == [
        ('get_channel_invites', ('20',), {}),
        (
            'create_channel_invite',
            ('20',),
            {'max_age': 0, 'max_uses': 0, 'temporary': False, 'unique': True, 'reason': None},
        ),
        ('get_channel_webhooks', ('20',), {}),
        ('create_channel_webhook', ('20',), {'name': 'Captain Hook', 'avatar': None, 'reason': 'Alerts'}),
    ]


@pytest.mark.asyncio
async def test_delete_messages():
    http, guild = setup()
    channel = guild.channels['10']
    assert isinstance(channel, pyguild.TextChannel)

    message = pyguild.Message(
        state=channel.state,
        id='555',
        channel_id='10',
        author_id='1001',
        content='hi',
        edited_at=None,
        pinned=False,
    )
    await channel.delete_messages(['553', message, '557'], reason='Spam')

    assert http.calls == [('delete_messages', ('10', ['553', '555', '557']), {'reason': 'Spam'})]


@pytest.mark.asyncio
async def test_purge():
    http, guild = setup()
    channel = guild.channels['10']

    def check(message: pyguild.Message, /) -> bool:
        return message.author_id == '1004'

    assert await channel.purge(50, check=check, before='900') == 'purge_channel'
    await channel.purge(-1, check='spam')
    await channel.purge(None)

    assert http.calls == [
        ('purge_channel', ('10', 50), {'check': check, 'before': '900', 'after': None, 'reason': None}),
        ('purge_channel', ('10', None), {'check': 'spam', 'before': None, 'after': None, 'reason': None}),
        ('purge_channel', ('10', None), {'check': None, 'before': None, 'after': None, 'reason': None}),
    ]

    with pytest.raises(ValueError):
        await channel.purge(-5)

    assert len(http.calls) == 3


@pytest.mark.asyncio
async def test_errors_propagate():
    http, guild = setup()
    channel = guild.channels['10']

    http.error = pyguild.PyguildError('boom')

    with pytest.raises(pyguild.PyguildError) as exc_info:
        await channel.delete()
    assert exc_info.value is http.error

    with pytest.raises(pyguild.PyguildError):
        await channel.get_invites()

    assert [name for name, _, _ in http.calls] == ['delete_channel', 'get_channel_invites']


def test_state_without_http():
    state = pyguild.State()
    with pytest.raises(AssertionError):
        state.http
