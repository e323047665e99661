"""Error dialog modal screen."""

from __future__ import annotations

from rich.markup import escape
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, Static


class ErrorDialog(ModalScreen[str]):
    """Modal dialog shown when a book cannot be opened.

    Dismisses with the key of the chosen option, or ``"dismiss"`` on escape.
    """

    BINDINGS = [
        Binding("escape", "dismiss_dialog", "Close", show=False),
        Binding("q", "choose('q')", "Quit", show=False),
    ]

    def __init__(
        self,
        title: str,
        message: str,
        options: list[tuple[str, str]] | None = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.dialog_title = title
        self.message = message
        self.options = options or [("q", "Quit")]

    def compose(self) -> ComposeResult:
        """Create child widgets."""
        with Container(id="error-dialog"):
            yield Static(f"[bold red]{escape(self.dialog_title)}[/]", id="error-title")
            yield Static(escape(self.message), id="error-message")
            with Horizontal(id="error-actions"):
                for key, label in self.options:
                    yield Button(escape(f"[{key.upper()}] {label}"), id=f"btn-{key}")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id
        if button_id and button_id.startswith("btn-"):
            self.dismiss(button_id[4:])  # Remove "btn-" prefix

    def action_choose(self, key: str) -> None:
        self.dismiss(key)

    def action_dismiss_dialog(self) -> None:
        self.dismiss("dismiss")
