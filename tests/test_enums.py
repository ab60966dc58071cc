from __future__ import annotations

import pytest
import pyguild


def test_members():
    assert list(pyguild.OverwriteType) == [pyguild.OverwriteType.role, pyguild.OverwriteType.member]
    assert [m.value for m in pyguild.ChannelType] == [0, 1, 2, 3, 4, 5, 6]

    voice = pyguild.ChannelType.voice
    assert voice.name == 'voice'
    assert voice.value == 2
    assert repr(voice) == '<ChannelType.voice: 2>'
    assert str(voice) == 'ChannelType.voice'


def test_lookup():
    assert pyguild.ChannelType(2) is pyguild.ChannelType.voice
    assert pyguild.OverwriteType('member') is pyguild.OverwriteType.member
    assert pyguild.ChannelType(pyguild.ChannelType.text) is pyguild.ChannelType.text

    with pytest.raises(ValueError):
        pyguild.ChannelType(99)
    with pytest.raises(ValueError):
        pyguild.OverwriteType(['role'])


def test_try_value():
    assert pyguild.ChannelType.try_value(4) is pyguild.ChannelType.category
    # unknown values pass through untouched
    assert pyguild.ChannelType.try_value(15) == 15
    assert pyguild.OverwriteType.try_value({}) == {}


def test_instancecheck():
    assert isinstance(pyguild.ChannelType.text, pyguild.ChannelType)
    assert not isinstance(pyguild.ChannelType.text, pyguild.OverwriteType)
    assert not isinstance(0, pyguild.ChannelType)


def test_immutable():
    with pytest.raises(TypeError):
        pyguild.ChannelType.text = 10  # type: ignore
    assert pyguild.ChannelType.text.value == 0
