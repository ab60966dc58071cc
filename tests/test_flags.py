import pyguild


def test_flags():
    permissions = pyguild.Permissions()
    assert permissions.value == 0

    permissions.manage_webhooks = True
    assert permissions.manage_webhooks is True
    assert permissions.value == 536870912

    permissions.manage_webhooks = False
    assert permissions.manage_webhooks is False
    assert permissions.value == 0

    permissions = pyguild.Permissions(manage_webhooks=True)
    assert permissions.manage_webhooks is True
    assert permissions.value == 536870912

    permissions.manage_webhooks = False
    assert permissions.manage_webhooks is False
    assert permissions.value == 0


def test_alias():
    permissions = pyguild.Permissions(view_channel=True)
    assert permissions.read_messages is True
    assert permissions.value == 1024

    permissions.read_messages = False
    assert permissions.view_channel is False


def test_unknown_flag():
    try:
        pyguild.Permissions(fly=True)
    except TypeError:
        pass
    else:
        raise AssertionError('Expected TypeError')


def test_all():
    assert pyguild.Permissions.ALL_VALUE == 2146958847
    assert pyguild.Permissions.all().value == pyguild.ALL_PERMISSIONS
    assert pyguild.Permissions.none().value == 0
    assert 'view_channel' not in pyguild.Permissions.VALID_FLAGS
    assert len(pyguild.Permissions.VALID_FLAGS) == 29


def test_groups():
    text = pyguild.Permissions.all_text()
    assert text.send_messages
    assert text.read_message_history
    assert not text.connect

    voice = pyguild.Permissions.all_voice()
    assert voice.connect
    assert voice.speak
    assert not voice.send_messages

    guild = pyguild.Permissions.all_guild()
    assert guild.ban_members
    assert guild.manage_roles
    assert not guild.read_messages

    assert (text | voice | guild).is_subset(pyguild.Permissions.ALL)


def test_operators():
    permissions = pyguild.Permissions(send_messages=True) | pyguild.Permissions.read_messages
    assert permissions.value == 3072
    assert pyguild.Permissions.send_messages.value in permissions
    assert (~permissions).send_messages is False
    assert (~permissions).administrator is True
    assert permissions <= pyguild.Permissions.ALL
