from __future__ import annotations

import inspect
import typing

from .utils import MISSING

if typing.TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from typing_extensions import Self

BF = typing.TypeVar('BF', bound='BaseFlags')


class flag(typing.Generic[BF]):
    __slots__ = (
        '__doc__',
        '_func',
        '_parent',
        'name',
        'value',
        'alias',
    )

    def __init__(self, *, alias: bool = False) -> None:
        self.__doc__: typing.Optional[str] = None
        self._func: Callable[[BF], int] = MISSING
        self._parent: type[BF] = MISSING
        self.name: str = ''
        self.value: int = 0
        self.alias: bool = alias

    def __call__(self, func: Callable[[BF], int], /) -> Self:
        self._func = func
        self.__doc__ = func.__doc__
        self.name = func.__name__
        return self

    @typing.overload
    def __get__(self, instance: None, owner: type[BF], /) -> Self: ...

    @typing.overload
    def __get__(self, instance: BF, owner: type[BF], /) -> bool: ...

    def __get__(self, instance: typing.Optional[BF], owner: type[BF], /) -> typing.Union[bool, Self]:
        if instance is None:
            return self
        return (instance.value & self.value) == self.value

    def __set__(self, instance: BF, value: bool, /) -> None:
        if value:
            instance.value |= self.value
        else:
            instance.value &= ~self.value

    def __and__(self, other: typing.Union[BF, flag[BF], int], /) -> BF:
        return self._parent(self.value) & other

    def __or__(self, other: typing.Union[BF, flag[BF], int], /) -> BF:
        return self._parent(self.value) | other

    def __xor__(self, other: typing.Union[BF, flag[BF], int], /) -> BF:
        return self._parent(self.value) ^ other

    def __int__(self) -> int:
        return self.value

    def __repr__(self) -> str:
        return f'<flag {self.name}={self.value}>'


class BaseFlags:
    """Base class for flags."""

    if typing.TYPE_CHECKING:
        ALL_VALUE: typing.ClassVar[int]
        VALID_FLAGS: typing.ClassVar[dict[str, int]]

        ALL: typing.ClassVar[Self]
        NONE: typing.ClassVar[Self]
        FLAGS: typing.ClassVar[dict[str, flag]]

    __slots__ = ('value',)

    def __init_subclass__(cls, *, support_kwargs: bool = True) -> None:
        valid_flags = {}
        flags = {}
        for _, f in inspect.getmembers(cls):
            if isinstance(f, flag):
                f.value = f._func(cls)
                f._parent = cls
                if f.alias:
                    continue
                valid_flags[f.name] = f.value
                flags[f.name] = f

        all = 0
        for value in valid_flags.values():
            all |= value

        cls.ALL_VALUE = all
        cls.VALID_FLAGS = valid_flags

        if support_kwargs:

            def init_with_kwargs(self, value: int = 0, /, **kwargs: bool) -> None:
                self.value = value

                for k, f in kwargs.items():
                    if not isinstance(getattr(cls, k, None), flag):
                        raise TypeError(f'Unknown flag {k}')
                    setattr(self, k, f)

            cls.__init__ = init_with_kwargs
        else:

            def init_without_kwargs(self, value: int = 0, /) -> None:
                self.value = value

            cls.__init__ = init_without_kwargs  # type: ignore

        cls.ALL = cls(cls.ALL_VALUE)
        cls.NONE = cls(0)
        cls.FLAGS = flags

    if typing.TYPE_CHECKING:

        def __init__(self, value: int = 0, /, **kwargs: bool) -> None:
            pass

    @classmethod
    def all(cls) -> Self:
        """Returns instance with all flags."""
        return cls(cls.ALL_VALUE)

    @classmethod
    def none(cls) -> Self:
        """Returns instance with no flags."""
        return cls(0)

    @classmethod
    def from_value(cls, value: int, /) -> Self:
        self = cls.__new__(cls)
        self.value = value
        return self

    def __hash__(self) -> int:
        return hash(self.value)

    def __iter__(self) -> Iterator[tuple[str, bool]]:
        for name in self.VALID_FLAGS:
            yield (name, getattr(self, name))

    def __repr__(self, /) -> str:
        return f'<{self.__class__.__name__}: {self.value}>'

    def copy(self) -> Self:
        """Copies the flag value."""
        return self.__class__(self.value)

    def _value_of(self, other: typing.Union[Self, flag[Self], int], /) -> int:
        if isinstance(other, int):
            return other
        elif isinstance(other, (flag, self.__class__)):
            return other.value
        else:
            raise TypeError(f'cannot get {other.__class__.__name__} value')

    def is_subset(self, other: typing.Union[Self, flag[Self], int], /) -> bool:
        """:class:`bool`: Returns ``True`` if self has the same or fewer flags as other."""
        return (self.value & self._value_of(other)) == self.value

    def is_superset(self, other: typing.Union[Self, flag[Self], int], /) -> bool:
        """:class:`bool`: Returns ``True`` if self has the same or more flags as other."""
        return (self.value | self._value_of(other)) == self.value

    def is_strict_subset(self, other: typing.Union[Self, flag[Self], int], /) -> bool:
        """:class:`bool`: Returns ``True`` if the flags on other are a strict subset of those on self."""
        return self.is_subset(other) and self.value != self._value_of(other)

    def is_strict_superset(self, other: typing.Union[Self, flag[Self], int], /) -> bool:
        """:class:`bool`: Returns ``True`` if the flags on other are a strict superset of those on self."""
        return self.is_superset(other) and self.value != self._value_of(other)

    __le__ = is_subset
    __ge__ = is_superset
    __lt__ = is_strict_subset
    __gt__ = is_strict_superset

    def __and__(self, other: typing.Union[Self, flag[Self], int], /) -> Self:
        return self.__class__(self.value & self._value_of(other))

    def __bool__(self) -> bool:
        return self.value != 0

    def __contains__(self, other: typing.Union[Self, flag[Self], int], /) -> bool:
        ov = self._value_of(other)
        return (self.value & ov) == ov

    def __eq__(self, other: object, /) -> bool:
        return self is other or isinstance(other, self.__class__) and self.value == other.value

    def __iand__(self, other: typing.Union[Self, flag[Self], int], /) -> Self:
        self.value &= self._value_of(other)
        return self

    def __int__(self) -> int:
        return self.value

    def __invert__(self) -> Self:
        return self.from_value(self.value ^ self.ALL_VALUE)

    def __ior__(self, other: typing.Union[Self, flag[Self], int], /) -> Self:
        self.value |= self._value_of(other)
        return self

    def __ixor__(self, other: typing.Union[Self, flag[Self], int], /) -> Self:
        self.value ^= self._value_of(other)
        return self

    def __ne__(self, other: object, /) -> bool:
        return not self.__eq__(other)

    def __or__(self, other: typing.Union[Self, flag[Self], int], /) -> Self:
        return self.__class__(self.value | self._value_of(other))

    def __xor__(self, other: typing.Union[Self, flag[Self], int], /) -> Self:
        return self.__class__(self.value ^ self._value_of(other))


def doc_flags(intro: str, /) -> Callable[[type[BF]], type[BF]]:
    """Document flag classes.

    Parameters
    ----------
    intro: :class:`str`
        The intro.

    Returns
    -------
    Callable[[Type[BF]], Type[BF]]
        The documented class.
    """

    def decorator(cls: type[BF]) -> type[BF]:
        cls.__doc__ = f"""{intro}

    .. container:: operations

        .. describe:: x == y

            Checks if two flags are equal.
        .. describe:: x | y, x |= y

            Returns a {cls.__name__} instance with all enabled flags from
            both x and y.
        .. describe:: x & y, x &= y

            Returns a {cls.__name__} instance with only flags enabled on
            both x and y.
        .. describe:: ~x

            Returns a {cls.__name__} instance with all flags inverted from x.
        .. describe:: iter(x)

            Returns an iterator of ``(name, value)`` pairs.

    Attributes
    ----------
    value: :class:`int`
        The raw value. You should query flags via the properties
        rather than using this raw value.
"""
        return cls

    return decorator


@doc_flags('Wraps up a guild or channel permission bitmask.')
class Permissions(BaseFlags, support_kwargs=True):
    __slots__ = ()

    # * General permissions

    @flag()
    def create_instant_invite(cls) -> int:
        """:class:`bool`: Whether the user can create invites."""
        return 1 << 0

    @flag()
    def kick_members(cls) -> int:
        """:class:`bool`: Whether the user can kick members from the guild."""
        return 1 << 1

    @flag()
    def ban_members(cls) -> int:
        """:class:`bool`: Whether the user can ban members from the guild."""
        return 1 << 2

    @flag()
    def administrator(cls) -> int:
        """:class:`bool`: Whether the user is an administrator.

        Administrators bypass every channel permission overwrite.
        """
        return 1 << 3

    @flag()
    def manage_channels(cls) -> int:
        """:class:`bool`: Whether the user can edit, delete, or create channels in the guild.

        This also corresponds to the "Manage Channel" channel-specific overwrite.
        """
        return 1 << 4

    @flag()
    def manage_guild(cls) -> int:
        """:class:`bool`: Whether the user can edit guild properties."""
        return 1 << 5

    @flag()
    def add_reactions(cls) -> int:
        """:class:`bool`: Whether the user can add reactions to messages."""
        return 1 << 6

    @flag()
    def view_audit_log(cls) -> int:
        """:class:`bool`: Whether the user can view the guild's audit log."""
        return 1 << 7

    @flag()
    def priority_speaker(cls) -> int:
        """:class:`bool`: Whether the user is heard over others in a voice channel."""
        return 1 << 8

    # % bit 9 unused

    # * Text permissions

    @flag()
    def read_messages(cls) -> int:
        """:class:`bool`: Whether the user can view the channel."""
        return 1 << 10

    @flag(alias=True)
    def view_channel(cls) -> int:
        """:class:`bool`: An alias for :attr:`read_messages`."""
        return 1 << 10

    @flag()
    def send_messages(cls) -> int:
        """:class:`bool`: Whether the user can send messages."""
        return 1 << 11

    @flag()
    def send_tts_messages(cls) -> int:
        """:class:`bool`: Whether the user can send text-to-speech messages."""
        return 1 << 12

    @flag()
    def manage_messages(cls) -> int:
        """:class:`bool`: Whether the user can delete or pin other's messages."""
        return 1 << 13

    @flag()
    def embed_links(cls) -> int:
        """:class:`bool`: Whether links sent by the user are embedded."""
        return 1 << 14

    @flag()
    def attach_files(cls) -> int:
        """:class:`bool`: Whether the user can upload files."""
        return 1 << 15

    @flag()
    def read_message_history(cls) -> int:
        """:class:`bool`: Whether the user can read a channel's past message history."""
        return 1 << 16

    @flag()
    def mention_everyone(cls) -> int:
        """:class:`bool`: Whether the user can mention ``@everyone`` and ``@here``."""
        return 1 << 17

    @flag()
    def external_emojis(cls) -> int:
        """:class:`bool`: Whether the user can use emojis from other guilds."""
        return 1 << 18

    # % bit 19 unused

    # * Voice permissions

    @flag()
    def connect(cls) -> int:
        """:class:`bool`: Whether the user can connect to a voice channel."""
        return 1 << 20

    @flag()
    def speak(cls) -> int:
        """:class:`bool`: Whether the user can speak in a voice channel."""
        return 1 << 21

    @flag()
    def mute_members(cls) -> int:
        """:class:`bool`: Whether the user can mute other members in a voice channel."""
        return 1 << 22

    @flag()
    def deafen_members(cls) -> int:
        """:class:`bool`: Whether the user can deafen other members in a voice channel."""
        return 1 << 23

    @flag()
    def move_members(cls) -> int:
        """:class:`bool`: Whether the user can move members between voice channels."""
        return 1 << 24

    @flag()
    def use_voice_activity(cls) -> int:
        """:class:`bool`: Whether the user can use voice activity detection instead of push-to-talk."""
        return 1 << 25

    # * Member permissions

    @flag()
    def change_nickname(cls) -> int:
        """:class:`bool`: Whether the user can change own nickname."""
        return 1 << 26

    @flag()
    def manage_nicknames(cls) -> int:
        """:class:`bool`: Whether the user can change or remove other's nicknames."""
        return 1 << 27

    @flag()
    def manage_roles(cls) -> int:
        """:class:`bool`: Whether the user can manage roles below their own.

        This also corresponds to the "Manage Permissions" channel-specific overwrite.
        """
        return 1 << 28

    @flag()
    def manage_webhooks(cls) -> int:
        """:class:`bool`: Whether the user can manage webhooks."""
        return 1 << 29

    @flag()
    def manage_emojis(cls) -> int:
        """:class:`bool`: Whether the user can manage guild emojis."""
        return 1 << 30

    @classmethod
    def all_guild(cls) -> Self:
        """:class:`Permissions`: Returns permissions that only make sense on guild level."""
        return cls(0b01111100_00000000_00000000_10111110)

    @classmethod
    def all_text(cls) -> Self:
        """:class:`Permissions`: Returns permissions that apply to text channels."""
        return cls(0b00110000_00000111_11111100_01010001)

    @classmethod
    def all_voice(cls) -> Self:
        """:class:`Permissions`: Returns permissions that apply to voice channels."""
        return cls(0b00110011_11110000_00000100_00010001)


__all__ = (
    'flag',
    'BaseFlags',
    'doc_flags',
    'Permissions',
)
