"""
FlashDrill: Desktop Flashcard Trainer
-------------------------------------

Flet shell around the practice core. Builds the collaborators once and
hands them to the trainer view; nothing is looked up from shared state.
"""

import logging
import sys
from pathlib import Path

# Ensure project root is on sys.path for absolute imports
_ROOT = Path(__file__).resolve().parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import flet as ft

from flashdrill.config import Config, SettingsManager
from flashdrill.core import SessionController
from flashdrill.services import (
    AudioResolver,
    CSVSetProvider,
    SetProviderRegistry,
    SQLiteProficiencyStore,
)
from flashdrill.ui import QuestionTimers, TrainerView
from flashdrill.utils import setup_logger

logger = logging.getLogger("flashdrill.app")


class FlashDrillApp:
    """Main application controller."""

    def __init__(self, page: ft.Page) -> None:
        """
        Initialize the application.

        Args:
            page: Flet page instance
        """
        self.page = page
        self.settings = SettingsManager()
        setup_logger(level=self.settings.get("LOG_LEVEL", "INFO"))

        self._setup_page()
        self._init_session()
        self._build_ui()

    def _setup_page(self) -> None:
        """Configure page settings and theme."""
        self.page.title = "FlashDrill"
        self.page.theme_mode = ft.ThemeMode.DARK
        self.page.bgcolor = "#121212"
        self.page.theme = ft.Theme(
            color_scheme_seed="#7C4DFF",
            font_family="Inter, Roboto, Segoe UI, sans-serif",
        )
        self.page.padding = 0
        self.page.window.min_width = 520
        self.page.window.min_height = 480
        self.page.window.width = 720
        self.page.window.height = 640

    def _init_session(self) -> None:
        """Wire store, set providers and audio into a practice session."""
        deadline = self.settings.response_deadline
        hold = self.settings.feedback_hold

        self.registry = SetProviderRegistry([CSVSetProvider(Config.SETS_DIR)])
        self.session = SessionController(
            store=SQLiteProficiencyStore(Config.DB_PATH),
            providers=self.registry,
            audio=AudioResolver(Config.AUDIO_DIR),
            response_deadline=deadline,
            feedback_hold=hold,
        )
        self.timers = QuestionTimers(response_deadline=deadline, feedback_hold=hold)

    def _build_ui(self) -> None:
        set_names = self.registry.list_sets()
        if not set_names:
            logger.warning("No flashcard sets found in %s", Config.SETS_DIR)

        self.trainer = TrainerView(
            self.page,
            self.session,
            set_names,
            timers=self.timers,
            initial_set=self.settings.get("LAST_SET") or None,
            on_set_activated=lambda name: self.settings.set("LAST_SET", name),
        )
        self.page.add(self.trainer.container)
        self.page.on_close = lambda _: self._shutdown()

    def _shutdown(self) -> None:
        self.timers.cancel_all()
        self.trainer.audio_player.stop()
        self.session.close()


def main(page: ft.Page) -> None:
    """
    Main entry point for Flet application.

    Args:
        page: Flet page instance
    """
    try:
        FlashDrillApp(page)
    except Exception:
        import traceback
        error_text = traceback.format_exc()
        logger.error("UI failed to start:\n%s", error_text)
        page.add(
            ft.Container(
                content=ft.Column(
                    controls=[
                        ft.Text("UI failed to start", size=20, weight=ft.FontWeight.BOLD, color=ft.Colors.RED_400),
                        ft.Container(
                            content=ft.Text(error_text, size=11, selectable=True, color=ft.Colors.WHITE70),
                            padding=10,
                            bgcolor=ft.Colors.with_opacity(0.08, ft.Colors.WHITE),
                            border_radius=8,
                        ),
                    ],
                    spacing=10,
                ),
                padding=20,
            )
        )
        page.update()


def run() -> None:
    """Console-script entry point."""
    ft.run(main)


if __name__ == "__main__":
    run()
