"""Screen state machine: key handling and rendering for each screen."""

import logging
from enum import Enum

from core.config import STATISTICS_ROWS, SCROLL_MARGIN
from core.session import DrillSession, Mode

from cli.render import render_answering, render_statistics, render_validation

logger = logging.getLogger(__name__)

QUIT_KEYS = {'escape', 'ctrl+c', 'ctrl+q'}
FULLSCREEN_KEY = 'ctrl+a'
STATISTICS_KEY = 'ctrl+s'


class ScreenKind(Enum):
    ANSWERING = 'answering'
    VALIDATION = 'validation'
    STATISTICS = 'statistics'


class Effect(Enum):
    """What the hosting app must do after a key was handled."""
    NONE = 'none'
    TOGGLE_FULLSCREEN = 'toggle_fullscreen'
    QUIT = 'quit'


class StatisticsView:
    """Scrollable list of every prompt with its counters."""

    def __init__(self, prompts: list, rows: int = STATISTICS_ROWS, margin: int = SCROLL_MARGIN):
        self.prompts = prompts
        self.rows = rows
        self.margin = margin
        self.first_shown_index = 0
        self.selected_row = 0

    @property
    def selected_index(self) -> int:
        return self.first_shown_index + self.selected_row

    def _shown_rows(self) -> int:
        return min(self.rows, len(self.prompts))

    def scroll_down(self) -> None:
        if self.selected_index >= len(self.prompts) - 1:
            return
        if self.selected_row < self.rows - self.margin - 1:
            self.selected_row += 1
        elif self.first_shown_index + self.rows < len(self.prompts):
            self.first_shown_index += 1
        elif self.selected_row < self._shown_rows() - 1:
            self.selected_row += 1

    def scroll_up(self) -> None:
        if self.selected_row > self.margin:
            self.selected_row -= 1
        elif self.first_shown_index > 0:
            self.first_shown_index -= 1
        elif self.selected_row > 0:
            self.selected_row -= 1

    def visible_rows(self) -> list:
        """(prompt, selected) pairs currently on screen."""
        shown = self.prompts[self.first_shown_index:self.first_shown_index + self.rows]
        return [(prompt, row == self.selected_row) for row, prompt in enumerate(shown)]


class DrillController:
    """Routes keys to the active screen and renders it."""

    def __init__(self, session: DrillSession):
        self.session = session
        self.statistics_view = None
        self._handlers = {
            ScreenKind.ANSWERING: self._answering_key,
            ScreenKind.VALIDATION: self._validation_key,
            ScreenKind.STATISTICS: self._statistics_key,
        }
        self._renderers = {
            ScreenKind.ANSWERING: lambda: render_answering(self.session),
            ScreenKind.VALIDATION: lambda: render_validation(self.session),
            ScreenKind.STATISTICS: lambda: render_statistics(self.statistics_view, self.session.store),
        }

    @property
    def kind(self) -> ScreenKind:
        if self.statistics_view is not None:
            return ScreenKind.STATISTICS
        if self.session.mode == Mode.INPUT:
            return ScreenKind.ANSWERING
        return ScreenKind.VALIDATION

    def handle_key(self, key: str, character: str = None) -> Effect:
        """Handle one key press. character is set for printable keys."""
        if key in QUIT_KEYS:
            logger.info('Quitting...')
            return Effect.QUIT
        if key == FULLSCREEN_KEY:
            return Effect.TOGGLE_FULLSCREEN
        self._handlers[self.kind](key, character)
        return Effect.NONE

    def render(self):
        return self._renderers[self.kind]()

    def _open_statistics(self) -> None:
        self.statistics_view = StatisticsView(self.session.store.prompts())

    def _answering_key(self, key: str, character: str) -> None:
        if key == 'enter':
            self.session.submit()
        elif key == STATISTICS_KEY:
            self._open_statistics()
        elif key == 'backspace':
            self.session.delete_char()
        elif character:
            self.session.type_text(character)

    def _validation_key(self, key: str, character: str) -> None:
        if key == 'enter':
            self.session.next_question()
        elif key == STATISTICS_KEY:
            self._open_statistics()

    def _statistics_key(self, key: str, character: str) -> None:
        if key in (STATISTICS_KEY, 'backspace'):
            self.statistics_view = None
        elif key in ('j', 'down'):
            self.statistics_view.scroll_down()
        elif key in ('k', 'up'):
            self.statistics_view.scroll_up()
