import dataclasses
import enum
import logging
from abc import ABC, abstractmethod

from . import utils
from .classes import Event, EventKind, GamePhase, SettingsPhase
from .config import Config
from .database import PhraseStore
from .exceptions import InvalidSettingValue, RoundComplete
from .game import Game
from .renderer import Renderer

logger = logging.getLogger("phrasey.states")


@dataclasses.dataclass(init=True, frozen=True, slots=True, kw_only=True)
class AppContext:
    config: Config
    store: PhraseStore
    renderer: Renderer


class TransitionKind(enum.Enum):
    Stay = 0
    Switch = 1
    Terminate = 2


@dataclasses.dataclass(init=True, frozen=True, slots=True)
class StateTransition:
    kind: TransitionKind
    state: 'AppState | None' = None     # only present if kind == Switch

    @classmethod
    def stay(cls) -> 'StateTransition':
        return cls(TransitionKind.Stay)

    @classmethod
    def switch(cls, state: 'AppState') -> 'StateTransition':
        return cls(TransitionKind.Switch, state)

    @classmethod
    def terminate(cls) -> 'StateTransition':
        return cls(TransitionKind.Terminate)


def edit_buffer(buffer: str | None, event: Event) -> str | None:
    """
    Applies a Character or RemoveCharacter event to a pending input buffer.
    An emptied buffer becomes None again, so "nothing typed" and "typed, then erased" look the same.
    """
    if event.kind == EventKind.Character:
        return event.char if buffer is None else buffer + event.char
    if event.kind == EventKind.RemoveCharacter:
        if buffer is None:
            logger.log(utils.TRACE, "User input is empty, cannot remove character")
            return None
        return buffer[:-1] or None
    return buffer


class AppState(ABC):
    ctx: AppContext

    def __init__(self, ctx: AppContext):
        self.ctx = ctx

    @property
    def config(self) -> Config:
        return self.ctx.config

    @property
    def renderer(self) -> Renderer:
        return self.ctx.renderer

    @abstractmethod
    def handle_event(self, event: Event) -> StateTransition:
        raise NotImplementedError

    @abstractmethod
    def render(self):
        raise NotImplementedError

    def close(self):
        pass

    def to_main_menu(self) -> StateTransition:
        logger.log(utils.TRACE, "Going back to main menu")
        return StateTransition.switch(MainMenuState(self.ctx))

    def to_quit(self) -> StateTransition:
        logger.log(utils.TRACE, "Quitting application")
        return StateTransition.switch(QuitState(self.ctx))


class MainMenuState(AppState):
    user_input: str | None

    def __init__(self, ctx: AppContext):
        super().__init__(ctx)
        self.user_input = None

    def handle_event(self, event: Event) -> StateTransition:
        if event.kind == EventKind.Enter:
            logger.log(utils.TRACE, "Creating new game state")
            return StateTransition.switch(GameState(self.ctx))
        if event.kind == EventKind.Quit:
            return self.to_quit()
        if event.kind == EventKind.Character:
            choice = event.char.lower()
            if choice == "s":
                logger.log(utils.TRACE, "Transitioning to settings state")
                return StateTransition.switch(SettingsState(self.ctx))
            if choice == "q":
                return self.to_quit()
            logger.log(utils.TRACE, f"Unhandled character input in main menu: {event.char}")
            self.user_input = edit_buffer(self.user_input, event)
        elif event.kind == EventKind.RemoveCharacter:
            self.user_input = edit_buffer(self.user_input, event)
        else:
            logger.warning(f"Unhandled event in main menu: {event}")
        return StateTransition.stay()

    def render(self):
        self.renderer.render_main_menu()


class GameState(AppState):
    game: Game
    phase: GamePhase
    user_input: str | None
    last_answer: str
    last_correct: bool
    round_size: int

    def __init__(self, ctx: AppContext):
        super().__init__(ctx)
        self.game = Game(ctx.config, ctx.store)
        self.user_input = None
        self.last_answer = ""
        self.last_correct = False
        self.round_size = 0
        self.start_round()

    def start_round(self):
        self.game.start_round()
        self.round_size = self.game.progress()[1]
        self.user_input = None
        if self.game.in_progress:
            self.phase = GamePhase.Input
        else:
            logger.warning("No phrases found in database, nothing to ask")
            self.phase = GamePhase.RoundEnd

    def handle_event(self, event: Event) -> StateTransition:
        if event.kind == EventKind.Quit:
            return self.to_quit()
        if event.kind == EventKind.Back:
            return self.to_main_menu()

        if self.phase == GamePhase.Input:
            if event.kind == EventKind.Enter:
                self.submit()
            else:
                self.user_input = edit_buffer(self.user_input, event)
        elif self.phase == GamePhase.Feedback:
            if event.kind == EventKind.Enter:
                self.next_phrase()
            else:
                logger.log(utils.TRACE, f"Ignoring {event} on feedback screen")
        elif self.phase == GamePhase.RoundEnd:
            if event.kind == EventKind.Enter:
                logger.debug("User chose to play another round")
                self.start_round()
            elif event.kind == EventKind.Character and event.char.lower() == "b":
                return self.to_main_menu()
            else:
                logger.log(utils.TRACE, f"Ignoring {event} on round end screen")
        return StateTransition.stay()

    def submit(self):
        answer = self.user_input or ""
        self.last_answer = answer
        self.last_correct = self.game.check(answer)
        self.user_input = None
        self.phase = GamePhase.Feedback
        if self.last_correct:
            logger.debug(f"Correct answer for '{self.game.current_original()}'")
        else:
            logger.debug(f"Wrong answer for '{self.game.current_original()}': '{answer}'")

    def next_phrase(self):
        try:
            self.game.advance(self.last_correct)
        except RoundComplete:
            logger.debug("Round completed")
            self.game.end_round()
            self.phase = GamePhase.RoundEnd
        else:
            self.phase = GamePhase.Input

    def render(self):
        if self.phase == GamePhase.Input:
            self.renderer.render_guessing_screen(self.game.current_original(), self.user_input, self.game.progress())
        elif self.phase == GamePhase.Feedback:
            self.renderer.render_feedback_screen(self.last_correct, self.last_answer, self.game.current_translation())
        else:
            self.renderer.render_round_end_screen(self.round_size)

    def close(self):
        if self.game.in_progress:
            logger.debug("Game left in the middle of a round")
            self.game.end_round()


class SettingsState(AppState):
    options = {
        "p": ("phrases_per_round", "Enter new number of phrases per round..."),
        "w": ("input_box_width", "Enter new input box width..."),
    }
    save_keys = frozenset("sq")

    working: Config
    phase: SettingsPhase
    editing: str | None
    user_input: str | None
    message: str | None

    def __init__(self, ctx: AppContext):
        super().__init__(ctx)
        self.working = ctx.config.working_copy()
        self.phase = SettingsPhase.ChoosingOption
        self.editing = None
        self.user_input = None
        self.message = None

    def handle_event(self, event: Event) -> StateTransition:
        if event.kind == EventKind.Quit:
            return self.to_quit()
        if event.kind == EventKind.Back:
            if self.phase == SettingsPhase.ChangingOption:
                logger.debug(f"Discarding pending edit of {self.editing}")
            return self.to_main_menu()

        if self.phase == SettingsPhase.ChoosingOption:
            return self.choose_option(event)
        if event.kind == EventKind.Enter:
            self.change_option()
        else:
            self.user_input = edit_buffer(self.user_input, event)
        return StateTransition.stay()

    def choose_option(self, event: Event) -> StateTransition:
        if event.kind != EventKind.Character:
            logger.log(utils.TRACE, f"Ignoring {event} while choosing an option")
            return StateTransition.stay()
        choice = event.char.lower()
        if choice == "b":
            return self.to_main_menu()
        if choice in self.save_keys:
            self.config.commit(self.working)
            self.message = "Settings saved."
        elif choice in self.options:
            self.editing = self.options[choice][0]
            self.phase = SettingsPhase.ChangingOption
            self.message = None
            logger.debug(f"User chose to change {self.editing}")
        else:
            logger.log(utils.TRACE, f"Unhandled character input in settings menu: {event.char}")
        return StateTransition.stay()

    def change_option(self):
        raw = self.user_input or ""
        try:
            self.working = self.working.with_value(self.editing, raw)
        except InvalidSettingValue as e:
            logger.warning(f"Rejected value '{raw}' for {self.editing}: {e}")
            self.message = f"Invalid value: {e}"
        else:
            logger.info(f"User provided new value for {self.editing}: {getattr(self.working, self.editing)}")
            self.message = "Value changed. Press [S] to save."
        self.user_input = None
        self.editing = None
        self.phase = SettingsPhase.ChoosingOption

    def render(self):
        placeholder = None
        if self.phase == SettingsPhase.ChangingOption:
            placeholder = next(text for name, text in self.options.values() if name == self.editing)
        self.renderer.render_settings_menu(self.working, self.user_input, placeholder, self.message)


class QuitState(AppState):
    def handle_event(self, event: Event) -> StateTransition:
        logger.log(utils.TRACE, f"No-op event in quit state: {event}")
        return StateTransition.terminate()

    def render(self):
        self.renderer.render_quit_screen()
