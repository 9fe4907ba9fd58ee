"""
Trainer View - the practice screen.

A thin adapter: widgets call SessionController methods and render the
returned snapshots. The view owns the question timers and forwards only
two signals into the core, a submission and the response deadline.
"""

import logging
from typing import Callable, Optional

import flet as ft

from ..errors import FlashDrillError, SetLoadError
from ..core.session import SessionController
from ..models import Outcome, SessionSnapshot, SessionState
from ..utils.helpers import set_title
from .audio_player import AudioPlayer
from .timers import QuestionTimers

logger = logging.getLogger(__name__)


def set_options(set_names: list) -> list:
    """Picker entries: the set name as key, its display title as text."""
    return [ft.dropdown.Option(key=name, text=set_title(name)) for name in set_names]


class DesignTokens:
    """Colors and sizes for the trainer view."""
    BG_SURFACE = "#1A1A1B"
    BG_CARD = "#242426"

    TEXT_PRIMARY = "#FFFFFF"
    TEXT_SECONDARY = "#B3B3B3"
    TEXT_MUTED = "#5C5C5C"

    ACCENT_PRIMARY = "#7C4DFF"
    ACCENT_SUCCESS = "#81C784"
    ACCENT_DANGER = "#E57373"

    SPACING_SM = 8
    SPACING_MD = 16
    SPACING_LG = 24

    RADIUS_MD = 12

    QUESTION_SIZE = 48
    ANSWER_SIZE = 24


class TrainerView:
    """
    Practice view: set picker, question, answer field and set status.

    Usage:
        view = TrainerView(page, session, set_names)
        page.add(view.container)
    """

    def __init__(
        self,
        page: ft.Page,
        session: SessionController,
        set_names: list,
        timers: Optional[QuestionTimers] = None,
        initial_set: Optional[str] = None,
        on_set_activated: Optional[Callable[[str], None]] = None,
        audio_player: Optional[AudioPlayer] = None,
    ) -> None:
        """
        Initialize the trainer view.

        Args:
            page: Flet page instance for updates
            session: Practice session the view drives
            set_names: Sets offered in the picker
            timers: Question timers (defaults use the session's windows)
            initial_set: Set to activate right away, if any
            on_set_activated: Called with the set name after each activation
            audio_player: Plays card audio after an answer
        """
        self.page = page
        self.session = session
        self.set_names = list(set_names)
        self.on_set_activated = on_set_activated
        self.audio_player = audio_player or AudioPlayer(page)
        self.timers = timers or QuestionTimers(
            response_deadline=session.response_deadline,
            feedback_hold=session.feedback_hold,
        )

        self._set_selector: Optional[ft.Dropdown] = None
        self._status_button: Optional[ft.IconButton] = None
        self._question: Optional[ft.Container] = None
        self._question_text: Optional[ft.Text] = None
        self._correct_answer: Optional[ft.Text] = None
        self._answer: Optional[ft.TextField] = None
        self._next_label: Optional[ft.Text] = None
        self._next_button: Optional[ft.ElevatedButton] = None
        self._answer_time: Optional[ft.Text] = None
        self._spinner: Optional[ft.ProgressRing] = None
        self._summary: Optional[ft.Text] = None
        self._status_list: Optional[ft.ListView] = None

        self._container = self._build_view()
        if initial_set and initial_set in self.set_names:
            self._activate(initial_set)

    @property
    def container(self) -> ft.Container:
        """Get the main container for this view."""
        return self._container

    # ==================== Layout ====================

    def _build_view(self) -> ft.Container:
        self._set_selector = ft.Dropdown(
            options=set_options(self.set_names),
            label="Set",
            width=320,
            border_color=ft.Colors.WHITE24,
            focused_border_color=ft.Colors.INDIGO_200,
        )
        self._set_selector.on_change = self._on_set_selected

        self._status_button = ft.IconButton(
            icon=ft.Icons.INFO_OUTLINE,
            tooltip="Set status",
            disabled=True,
            on_click=self._on_toggle_status,
        )

        self._question_text = ft.Text(
            "",
            size=DesignTokens.QUESTION_SIZE,
            weight=ft.FontWeight.BOLD,
            color=DesignTokens.TEXT_PRIMARY,
            text_align=ft.TextAlign.CENTER,
        )
        self._question = ft.Container(
            content=self._question_text,
            padding=DesignTokens.SPACING_LG,
            border_radius=DesignTokens.RADIUS_MD,
            bgcolor=DesignTokens.BG_CARD,
            alignment=ft.Alignment(0, 0),
        )
        self._correct_answer = ft.Text(
            "",
            size=DesignTokens.ANSWER_SIZE,
            color=DesignTokens.ACCENT_SUCCESS,
            visible=False,
            text_align=ft.TextAlign.CENTER,
        )
        self._answer = ft.TextField(
            width=320,
            text_align=ft.TextAlign.CENTER,
            disabled=True,
            autofocus=True,
            on_submit=self._on_submit,
        )
        self._spinner = ft.ProgressRing(width=16, height=16, visible=False)
        self._next_label = ft.Text("Start")
        self._next_button = ft.ElevatedButton(
            content=self._next_label,
            disabled=True,
            on_click=self._on_next,
        )
        self._answer_time = ft.Text("", color=DesignTokens.TEXT_SECONDARY)

        self._summary = ft.Text("", color=DesignTokens.TEXT_SECONDARY, visible=False)
        self._status_list = ft.ListView(height=200, spacing=2, visible=False)

        return ft.Container(
            content=ft.Column(
                controls=[
                    ft.Row(
                        controls=[self._set_selector, self._status_button],
                        alignment=ft.MainAxisAlignment.CENTER,
                    ),
                    self._question,
                    self._correct_answer,
                    self._answer,
                    ft.Row(
                        controls=[self._spinner, self._next_button, self._answer_time],
                        alignment=ft.MainAxisAlignment.CENTER,
                        spacing=DesignTokens.SPACING_MD,
                    ),
                    self._summary,
                    self._status_list,
                ],
                horizontal_alignment=ft.CrossAxisAlignment.CENTER,
                spacing=DesignTokens.SPACING_MD,
            ),
            padding=DesignTokens.SPACING_LG,
            bgcolor=DesignTokens.BG_SURFACE,
            expand=True,
        )

    # ==================== Event handlers ====================

    async def _on_set_selected(self, e) -> None:
        if e.control.value:
            self._activate(e.control.value)

    async def _on_next(self, e) -> None:
        self.timers.disarm_feedback_hold()
        try:
            snapshot = self.session.start_next()
        except FlashDrillError as err:
            self._show_snackbar(str(err), error=True)
            return
        self._render_question(snapshot)
        if snapshot.deadline_seconds is not None:
            self.timers.arm_deadline(self._on_deadline, snapshot.deadline_seconds)

    async def _on_submit(self, e) -> None:
        snapshot = self.session.submit_answer(self._answer.value or "")
        if snapshot is not None:
            self._render_outcome(snapshot)

    def _on_deadline(self) -> None:
        snapshot = self.session.on_deadline_elapsed(self._answer.value or "")
        if snapshot is not None:
            self._render_outcome(snapshot)

    def _on_hold_elapsed(self) -> None:
        self._enable_next()
        self.page.update()

    async def _on_toggle_status(self, e) -> None:
        if self._status_list.visible:
            self._status_list.visible = False
            self._summary.visible = False
        elif self._summary.visible:
            self._status_list.visible = True
        else:
            self._render_status(self.session.snapshot())
            self._summary.visible = True
        self.page.update()

    # ==================== Rendering ====================

    def _activate(self, set_name: str) -> None:
        self.timers.cancel_all()
        self.audio_player.stop()
        try:
            snapshot = self.session.activate(set_name)
        except SetLoadError as err:
            logger.error("Could not activate '%s': %s", set_name, err)
            self._show_snackbar(str(err), error=True)
            return

        self._set_selector.value = set_name
        self._next_label.value = "Start"
        self._status_button.disabled = False
        self._answer.disabled = True
        self._question_text.value = ""
        self._correct_answer.visible = False
        self.page.title = f"FlashDrill - {set_title(set_name)}"
        self._render_status(snapshot)
        if snapshot.can_advance:
            self._enable_next()
        self.page.update()
        if self.on_set_activated is not None:
            self.on_set_activated(set_name)

    def _render_question(self, snapshot: SessionSnapshot) -> None:
        self._question.bgcolor = DesignTokens.BG_CARD
        self._question_text.value = snapshot.question
        self._correct_answer.value = snapshot.answer
        self._correct_answer.visible = False
        self._set_selector.disabled = True
        self._next_button.disabled = True
        self._next_label.value = "Next"
        self._answer.value = ""
        self._answer.disabled = False
        self._answer_time.value = ""
        self._spinner.visible = True
        self.page.update()

    def _render_outcome(self, snapshot: SessionSnapshot) -> None:
        if snapshot.cancel_deadline:
            self.timers.disarm_deadline()

        if snapshot.outcome is Outcome.CORRECT:
            self._question.bgcolor = DesignTokens.ACCENT_SUCCESS
            self._answer_time.value = f"{snapshot.answer_time} s"
        else:
            self._question.bgcolor = DesignTokens.ACCENT_DANGER
            self._correct_answer.visible = snapshot.reveal_answer

        if snapshot.feedback_hold_seconds is not None:
            self.timers.arm_feedback_hold(self._on_hold_elapsed, snapshot.feedback_hold_seconds)
        elif snapshot.can_advance:
            self._enable_next()

        if snapshot.audio_path:
            self.audio_player.play(snapshot.audio_path)

        if not snapshot.persisted:
            self._show_snackbar("Progress could not be saved", error=True)

        self._spinner.visible = False
        self._set_selector.disabled = False
        self._answer.disabled = True
        self._render_status(snapshot)
        self.page.update()

    def _render_status(self, snapshot: SessionSnapshot) -> None:
        self._summary.value = snapshot.summary or ""
        self._status_list.controls = [
            ft.Text(line, size=12, color=DesignTokens.TEXT_SECONDARY)
            for line in snapshot.status_lines
        ]

    def _enable_next(self) -> None:
        self._next_button.disabled = self.session.state is not SessionState.IDLE

    def _show_snackbar(self, message: str, error: bool = False) -> None:
        snackbar = ft.SnackBar(
            content=ft.Text(message, color=DesignTokens.TEXT_PRIMARY),
            bgcolor=DesignTokens.ACCENT_DANGER if error else DesignTokens.ACCENT_PRIMARY,
            duration=3500,
        )
        for ctrl in list(self.page.overlay):
            if isinstance(ctrl, ft.SnackBar):
                self.page.overlay.remove(ctrl)
        self.page.overlay.append(snackbar)
        snackbar.open = True
        self.page.update()
