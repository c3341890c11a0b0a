import dataclasses
import enum


@dataclasses.dataclass(init=True, frozen=True, slots=True, kw_only=True, repr=True)
class Phrase:
    original: str
    translation: str


@dataclasses.dataclass(init=True, frozen=True, slots=True, kw_only=True)
class RoundEntry:
    phrase: Phrase
    attempts: int   # incorrect submissions before the phrase was recognized


class LogLevel(enum.Enum):
    Off = "off"
    Error = "error"
    Warn = "warn"
    Info = "info"
    Debug = "debug"
    Trace = "trace"


class EventKind(enum.Enum):
    Enter = 0
    Back = 1
    Quit = 2
    RemoveCharacter = 3
    Character = 4


@dataclasses.dataclass(init=True, frozen=True, slots=True, repr=True)
class Event:
    kind: EventKind
    char: str | None = None     # only present on Character events

    @classmethod
    def enter(cls) -> 'Event':
        return cls(EventKind.Enter)

    @classmethod
    def back(cls) -> 'Event':
        return cls(EventKind.Back)

    @classmethod
    def quit(cls) -> 'Event':
        return cls(EventKind.Quit)

    @classmethod
    def remove_character(cls) -> 'Event':
        return cls(EventKind.RemoveCharacter)

    @classmethod
    def character(cls, char: str) -> 'Event':
        return cls(EventKind.Character, char)


class KeyCode(enum.Enum):
    Enter = 0
    Esc = 1
    Backspace = 2
    Char = 3
    Other = 4


class KeyEventKind(enum.Enum):
    Press = 0
    Repeat = 1
    Release = 2


@dataclasses.dataclass(init=True, frozen=True, slots=True, kw_only=True, repr=True)
class KeyEvent:
    code: KeyCode
    char: str | None = None     # only present if code == Char
    ctrl: bool = False
    kind: KeyEventKind = KeyEventKind.Press


class GamePhase(enum.Enum):
    Input = 0
    Feedback = 1
    RoundEnd = 2


class SettingsPhase(enum.Enum):
    ChoosingOption = 0
    ChangingOption = 1
