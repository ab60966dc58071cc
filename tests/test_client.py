from __future__ import annotations

import json
import logging

import pytest
import pyguild

with open('./tests/data/guild.json', 'r') as fp:
    guild_payload = json.load(fp)


@pytest.mark.asyncio
async def test_client_wiring():
    async with pyguild.Client('token', message_limit=5, log_handler=None) as client:
        assert client.bot is True
        assert client.message_limit == 5
        assert client.http.token == 'token'
        assert client.http.bot is True
        assert client.http.base == 'https://discord.com/api/v10'
        assert client.http.state is client.state
        assert client.parser.state is client.state

        guild = client.parse_guild(guild_payload)
        channel = guild.channels['10']
        assert isinstance(channel, pyguild.TextChannel)
        assert channel.state is client.state
        assert channel.message_limit == 5

    assert client.closed is True
    # closing twice does nothing
    await client.close()


@pytest.mark.asyncio
async def test_client_factories():
    class CustomParser(pyguild.Parser):
        __slots__ = ()

    client = pyguild.Client(
        'token',
        bot=False,
        http_base='http://127.0.0.1:5300/api/',
        user_agent='custom',
        parser=lambda client, state: CustomParser(state=state),
        log_handler=None,
    )

    assert isinstance(client.parser, CustomParser)
    assert client.http.base == 'http://127.0.0.1:5300/api'
    assert client.http.user_agent == 'custom'
    assert client.http.bot is False

    state = pyguild.State()
    http = pyguild.HTTPClient('other', state=state, session=lambda _: None)  # type: ignore
    state.setup(http=http)

    other = pyguild.Client(state=state, log_handler=None)
    assert other.state is state
    assert other.http is http

    # session was never created, so there is nothing to close
    await client.close()
    await other.close()


def test_logging_handler_added_once():
    logger = logging.getLogger('pyguild')
    previous_handlers = logger.handlers[:]
    previous_level = logger.level
    logger.handlers.clear()

    try:
        for _ in range(3):
            pyguild.Client('token')
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], logging.StreamHandler)

        handler = logging.NullHandler()
        pyguild.Client('token', log_handler=handler)
        pyguild.Client('token', log_handler=handler)
        assert logger.handlers.count(handler) == 1
        assert len(logger.handlers) == 2

        pyguild.Client('token', log_handler=None)
        assert len(logger.handlers) == 2
    finally:
        logger.handlers[:] = previous_handlers
        logger.setLevel(previous_level)
