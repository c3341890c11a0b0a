import logging
import sys
import textwrap
import typing

from . import utils
from .config import Config

logger = logging.getLogger("phrasey.renderer")

CLEAR_SCREEN = "\x1b[2J\x1b[1;1H"
HIDE_CURSOR = "\x1b[?25l"
SHOW_CURSOR = "\x1b[?25h"
GREY = "\x1b[90m"
RESET = "\x1b[0m"

LOGO = (
    "   ██████╗ ██╗  ██╗██████╗  █████╗ ███████╗███████╗██╗   ██╗   ",
    "   ██╔══██╗██║  ██║██╔══██╗██╔══██╗██╔════╝██╔════╝╚██╗ ██╔╝   ",
    "   ██████╔╝███████║██████╔╝███████║███████╗█████╗   ╚████╔╝    ",
    "   ██╔═══╝ ██╔══██║██╔══██╗██╔══██║╚════██║██╔══╝    ╚██╔╝     ",
    "   ██║     ██║  ██║██║  ██║██║  ██║███████║███████╗   ██║      ",
    "   ╚═╝     ╚═╝  ╚═╝╚═╝  ╚═╝╚═╝  ╚═╝╚══════╝╚══════╝   ╚═╝      ",
)


class Renderer:
    config: Config
    stream: typing.TextIO

    def __init__(self, config: Config, stream: typing.TextIO | None = None):
        self.config = config
        self.stream = sys.stdout if stream is None else stream

    def _write(self, *lines: str):
        for line in lines:
            self.stream.write(line + "\n")

    def _begin(self, *, show_cursor: bool):
        self.stream.write(CLEAR_SCREEN)
        self.stream.write(SHOW_CURSOR if show_cursor else HIDE_CURSOR)
        self._write("", *LOGO, "")

    def _finish(self):
        self.stream.flush()

    def close(self):
        self.stream.write(SHOW_CURSOR)
        self.stream.flush()

    def text_chunks(self, text: str) -> list[str]:
        # typed text keeps its whitespace, so it is chunked rather than wrapped
        text_width = self.config.input_box_width - 2
        return [text[i:i + text_width] for i in range(0, len(text), text_width)] or [""]

    def input_box_lines(self, text: str | None, placeholder: str) -> list[str]:
        box_width = self.config.input_box_width
        text_width = box_width - 2
        if text is None:
            shown = placeholder[:text_width]
            body = [f"│ {GREY}{shown}{RESET}{' ' * (text_width - len(shown))} │"]
        else:
            body = [f"│ {chunk.ljust(text_width)} │" for chunk in self.text_chunks(text)]
        return [f" ┌{'─' * box_width}┐", *[" " + line for line in body], f" └{'─' * box_width}┘"]

    def input_box_cursor(self, text: str | None) -> str:
        """
        Moves the cursor from below the box back to the end of the typed text,
        or to the start of the placeholder when nothing is typed.
        """
        offset = 3 if text is None else 3 + len(self.text_chunks(text)[-1])
        return f"\x1b[2A\x1b[{offset}C"

    def render_input_box(self, text: str | None, placeholder: str):
        self._write(*self.input_box_lines(text, placeholder))
        self.stream.write(self.input_box_cursor(text))
        logger.log(utils.TRACE, "Input box rendered")

    def render_main_menu(self):
        self._begin(show_cursor=False)
        self._write(
            "   What do you want to do?",
            "",
            "    [Enter]  New game",
            "    [S]      Settings",
            "    [Q]      Quit",
            "",
        )
        self._finish()
        logger.log(utils.TRACE, "Main menu rendered")

    def render_settings_menu(self, config: Config, user_input: str | None, placeholder: str | None,
                             message: str | None = None):
        """
        Paints the settings screen with the values from `config`, which is the
        working copy being edited rather than the shared configuration.
        An input box is only shown while an option is being changed.
        """
        self._begin(show_cursor=placeholder is not None)
        self._write(
            "   Settings",
            "",
            f"    Database URI: {config.db_conn_string}",
            f"    [P] Phrases per round: {config.phrases_per_round}",
            f"    [W] Input box width: {config.input_box_width}",
            "    [S] Save",
            "    [B] Back to main menu",
            "",
        )
        if message is not None:
            self._write(f"   {message}", "")
        if placeholder is not None:
            self.render_input_box(user_input, placeholder)
        self._finish()
        logger.log(utils.TRACE, "Settings menu rendered")

    def render_guessing_screen(self, original: str, user_input: str | None, progress: tuple[int, int]):
        self._begin(show_cursor=True)
        recognized, total = progress
        self._write(f"   Recognized: {recognized}/{total}", "")
        wrapped = textwrap.wrap(original, width=self.config.input_box_width) or [""]
        self._write(f"   Sentence: {wrapped[0]}", *[f"             {line}" for line in wrapped[1:]], "")
        self.render_input_box(user_input, "Enter your answer...")
        self._finish()
        logger.log(utils.TRACE, f"Game screen rendered for phrase: {original}")

    def render_feedback_screen(self, is_correct: bool, answer: str, correct_answer: str):
        self._begin(show_cursor=False)
        if is_correct:
            self._write("   Correct!")
        else:
            self._write(f"   Your answer:  {answer}", "   Incorrect! The correct answer was:", f"\t{correct_answer}")
        self._write("", "    [Enter]  Continue", "")
        self._finish()
        logger.log(utils.TRACE, f"Feedback screen rendered, is_correct={is_correct}")

    def render_round_end_screen(self, total: int):
        self._begin(show_cursor=False)
        if total == 0:
            self._write("   There are no phrases in the database.")
        else:
            self._write(f"   Round completed! All {total} phrases recognized. Ready for the next one?")
        self._write(
            "",
            "    [Enter]  Next game",
            "    [B]      Back to main menu",
            "",
        )
        self._finish()
        logger.log(utils.TRACE, "Round end screen rendered")

    def render_quit_screen(self):
        self._begin(show_cursor=False)
        self._write("   Goodbye!", "")
        self._finish()
        logger.log(utils.TRACE, "Goodbye screen rendered")
