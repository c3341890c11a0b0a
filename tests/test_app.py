import pytest

from phrasey import states
from phrasey.app import App
from phrasey.classes import Event, Phrase
from phrasey.game import Game
from phrasey.renderer import SHOW_CURSOR

from .conftest import FakeStore, ScriptedDispatcher, typed


class RecordingGame(Game):
    instances: list['RecordingGame'] = []
    log: list[str] = []

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        RecordingGame.instances.append(self)

    def end_round(self):
        RecordingGame.log.append("end_round")
        super().end_round()


@pytest.fixture
def recording_game(monkeypatch) -> type[RecordingGame]:
    RecordingGame.instances = []
    RecordingGame.log = []
    monkeypatch.setattr(states, "Game", RecordingGame)
    return RecordingGame


def test_quit_from_main_menu(config, store, renderer, output):
    dispatcher = ScriptedDispatcher([Event.quit(), Event.enter()])

    App(config, store, user_input=dispatcher, renderer=renderer).run()

    assert dispatcher.events == []
    assert "Goodbye!" in output.getvalue()
    assert output.getvalue().endswith(SHOW_CURSOR)


def test_full_round_then_back_to_menu_and_quit(config, renderer, output):
    store = FakeStore([Phrase(original="cat", translation="chat")])
    events = (
        [Event.enter()]
        + typed("chien") + [Event.enter(), Event.enter()]
        + typed("Chat") + [Event.enter(), Event.enter()]
        + [Event.character("b"), Event.character("q"), Event.enter()]
    )
    dispatcher = ScriptedDispatcher(events)

    App(config, store, user_input=dispatcher, renderer=renderer).run()

    text = output.getvalue()
    assert dispatcher.events == []
    assert "Incorrect! The correct answer was:" in text
    assert "Correct!" in text
    assert "Round completed! All 1 phrases recognized." in text
    assert text.count("What do you want to do?") == 2


def test_quit_mid_round_ends_round_before_terminating(config, store, renderer, recording_game):
    log = recording_game.log
    events = [Event.enter()] + typed("chat") + [Event.enter(), Event.enter(), Event.quit(), Event.enter()]
    dispatcher = ScriptedDispatcher(events, log)

    App(config, store, user_input=dispatcher, renderer=renderer).run()

    game = recording_game.instances[0]
    assert game.unrecognized == ()
    assert game.recognized == ()
    assert game.current_index is None
    assert log.count("end_round") == 1
    # the round is ended as soon as the game is left, before the goodbye screen takes its key press
    assert log[-2:] == ["end_round", "read"]


def test_settings_saved_value_is_used_by_next_game(config, store, renderer):
    events = (
        [Event.character("s"), Event.character("p")] + typed("2")
        + [Event.enter(), Event.character("s"), Event.back(), Event.enter(), Event.quit(), Event.enter()]
    )

    App(config, store, user_input=ScriptedDispatcher(events), renderer=renderer).run()

    assert config.phrases_per_round == 2
    assert store.requests == [2]


def test_error_during_read_still_closes_active_state(config, store, renderer, output, recording_game):
    class FailingDispatcher(ScriptedDispatcher):
        def get(self) -> Event:
            if not self.events:
                raise OSError("terminal gone")
            return super().get()

    dispatcher = FailingDispatcher([Event.enter()])

    with pytest.raises(OSError):
        App(config, store, user_input=dispatcher, renderer=renderer).run()

    assert recording_game.log == ["end_round"]
    assert recording_game.instances[0].current_index is None
    assert output.getvalue().endswith(SHOW_CURSOR)
