"""Textual application hosting the drill screens."""

import logging

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Static

from core.errors import DrillError, ExitCode
from core.session import DrillSession

from cli.screens import DrillController, Effect

logger = logging.getLogger(__name__)


class DrillApp(App):
    """Full-terminal drill. Quitting saves statistics first."""

    CSS = """
    Screen {
        background: #000000;
        align: left top;
    }
    Screen.-fullscreen {
        align: center middle;
    }
    #board {
        width: auto;
        height: auto;
    }
    """

    # Keep the default quit bindings from exiting without a save
    BINDINGS = [
        Binding('escape', 'quit_drill', show=False, priority=True),
        Binding('ctrl+c', 'quit_drill', show=False, priority=True),
        Binding('ctrl+q', 'quit_drill', show=False, priority=True),
    ]

    def __init__(self, session: DrillSession, fullscreen: bool = True):
        super().__init__()
        self.session = session
        self.controller = DrillController(session)
        self.fullscreen = fullscreen
        self.saved = False
        # Exit status chosen by the drill itself; None if textual stopped the app
        self.exit_status = None

    def compose(self) -> ComposeResult:
        yield Static(id='board')

    def on_mount(self) -> None:
        self.screen.set_class(self.fullscreen, '-fullscreen')
        self.refresh_board()

    def refresh_board(self) -> None:
        self.query_one('#board', Static).update(self.controller.render())

    def on_key(self, event: events.Key) -> None:
        character = event.character if event.is_printable else None
        event.stop()
        try:
            effect = self.controller.handle_key(event.key, character)
        except DrillError as e:
            logger.critical(str(e))
            self.session.save()
            self.exit_status = e.exit_code
            self.exit(return_code=int(e.exit_code), message=str(e))
            return
        if effect == Effect.QUIT:
            self.action_quit_drill()
            return
        if effect == Effect.TOGGLE_FULLSCREEN:
            self.toggle_fullscreen()
        self.refresh_board()

    def toggle_fullscreen(self) -> None:
        self.fullscreen = not self.fullscreen
        self.screen.set_class(self.fullscreen, '-fullscreen')

    def action_quit_drill(self) -> None:
        """Save statistics, then exit. A failed save still exits."""
        self.saved = self.session.save()
        self.exit_status = ExitCode.OK if self.saved else ExitCode.STATISTICS_ERROR
        self.exit(return_code=int(self.exit_status))
