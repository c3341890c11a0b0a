import logging

from .config import Config
from .database import PhraseStore
from .events import EventDispatcher
from .renderer import Renderer
from .states import AppContext, AppState, MainMenuState, TransitionKind

logger = logging.getLogger("phrasey.app")


class App:
    ctx: AppContext
    user_input: EventDispatcher

    def __init__(self, config: Config, store: PhraseStore, *,
                 user_input: EventDispatcher | None = None, renderer: Renderer | None = None):
        self.ctx = AppContext(
            config=config,
            store=store,
            renderer=Renderer(config) if renderer is None else renderer,
        )
        self.user_input = EventDispatcher() if user_input is None else user_input

    def run(self):
        """
        Renders the active state, waits for one event and hands it over, until the quit state terminates.
        Every state that is left gets closed, including the active one when an exception unwinds the loop.
        """
        state: AppState = MainMenuState(self.ctx)
        logger.info("App started")
        try:
            while True:
                state.render()
                event = self.user_input.get()
                transition = state.handle_event(event)
                if transition.kind == TransitionKind.Stay:
                    continue
                if transition.kind == TransitionKind.Terminate:
                    break
                logger.debug(f"Transition: {type(state).__name__} -> {type(transition.state).__name__}")
                state.close()
                state = transition.state
        finally:
            state.close()
            self.ctx.renderer.close()
        logger.info("App finished")
