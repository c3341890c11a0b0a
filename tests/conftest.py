import io
import logging

import pytest

from phrasey.classes import Event, Phrase
from phrasey.config import Config
from phrasey.renderer import Renderer
from phrasey.states import AppContext


class FakeStore:
    def __init__(self, phrases: list[Phrase]):
        self.phrases = phrases
        self.requests: list[int] = []

    def sample(self, n: int) -> list[Phrase]:
        self.requests.append(n)
        return list(self.phrases[:n])


class ScriptedDispatcher:
    """Hands out a fixed list of events, one per `get()` call."""

    def __init__(self, events: list[Event], log: list[str] | None = None):
        self.events = list(events)
        self.log = log if log is not None else []

    def get(self) -> Event:
        self.log.append("read")
        return self.events.pop(0)


def typed(text: str) -> list[Event]:
    return [Event.character(c) for c in text]


@pytest.fixture
def root_logger(monkeypatch) -> logging.Logger:
    logger = logging.getLogger()
    level = logger.level
    monkeypatch.setattr(logger, "handlers", [])
    yield logger
    for handler in list(logger.handlers):
        if type(handler) in (logging.FileHandler, logging.StreamHandler, logging.NullHandler):
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(level)


@pytest.fixture
def phrases() -> list[Phrase]:
    return [
        Phrase(original="cat", translation="chat"),
        Phrase(original="dog", translation="chien"),
        Phrase(original="sun", translation="soleil"),
    ]


@pytest.fixture
def store(phrases) -> FakeStore:
    return FakeStore(phrases)


@pytest.fixture
def config() -> Config:
    return Config(db_conn_string="file://phrases.csv", log_level="info",
                  input_box_width=40, phrases_per_round=3)


@pytest.fixture
def output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def renderer(config, output) -> Renderer:
    return Renderer(config, output)


@pytest.fixture
def ctx(config, store, renderer) -> AppContext:
    return AppContext(config=config, store=store, renderer=renderer)
