"""
MedTrackr Onboarding UI Components

Terminal widgets for the onboarding wizard, built on rich. Every prompt
that a step handler uses can return the ``BACK`` sentinel when called with
``allow_back=True``, so handlers never parse navigation words themselves.
"""

import re
from datetime import date
from typing import Any, Optional, List, Callable, Sequence, Tuple, Union
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.prompt import Prompt, Confirm
from rich.table import Table


MASK = "********"

# Key names whose values are never shown
SECRET_PATTERNS = [
    "password", "passwd", "pwd", "token", "secret", "credential",
    "api_key", "apikey", "auth", "bearer", "jwt",
]

# Values that are secrets whatever they are labelled
_SECRET_VALUES = [
    re.compile(r'\$pbkdf2-sha256\$[^\s"\']+'),
    re.compile(r'eyJ[a-zA-Z0-9_\-]{10,}\.[a-zA-Z0-9_\-]{10,}\.[a-zA-Z0-9_\-]+'),
]

_SECRET_ASSIGNMENTS = [
    re.compile(rf'({key}["\']?\s*[=:]\s*["\']?)([^"\'\s,)]+)(["\']?)', re.IGNORECASE)
    for key in SECRET_PATTERNS
]

# Typing one of these at a prompt goes back one step
BACK_COMMANDS = ("back", "b", "<")

# Typing one of these at a date prompt removes the stored date
CLEAR_COMMANDS = ("none", "clear", "-")

# level -> (symbol, style)
_STATUS = {
    "success": ("✓", "green"),
    "error": ("✗", "red"),
    "warning": ("⚠", "yellow"),
    "info": ("ℹ", "blue"),
}


class _Back:
    """Sentinel returned by prompts when the user asks to go back."""

    def __repr__(self) -> str:
        return "BACK"


BACK = _Back()


def mask_secrets(text: str, mask: str = MASK) -> str:
    """Replace password hashes, JWTs and ``password=...`` style values.

    Args:
        text: Anything about to be shown or logged
        mask: Replacement for each secret

    Returns:
        ``text`` with every recognised secret replaced
    """
    if not text:
        return text

    # Whole-value formats go first so the key=value pass keeps their quoting
    for pattern in _SECRET_VALUES:
        text = pattern.sub(mask, text)
    for pattern in _SECRET_ASSIGNMENTS:
        text = pattern.sub(rf'\1{mask}\3', text)
    return text


def is_secret_key(key: str) -> bool:
    """True for labels such as ``Password`` or ``auth_token``."""
    lowered = key.lower()
    return any(pattern in lowered for pattern in SECRET_PATTERNS)


def _is_back(value: Optional[str]) -> bool:
    return value is not None and value.strip().lower() in BACK_COMMANDS


def _match_option(token: str, choices: Sequence[str]) -> Optional[str]:
    """Resolve a 1-based number or a case-insensitive name to a choice."""
    token = token.strip()
    if token.isdigit():
        position = int(token)
        return choices[position - 1] if 1 <= position <= len(choices) else None
    return next((choice for choice in choices if choice.lower() == token.lower()), None)


def _display(value: Any) -> str:
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, (list, tuple)):
        return ", ".join(str(item) for item in value)
    return "" if value is None else str(value)


class WizardUI:
    """Prompts, status lines and panels for the onboarding wizard."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    # Status output

    def _status(self, level: str, message: str):
        symbol, style = _STATUS[level]
        self.console.print(f"[{style}]{symbol}[/{style}] {message}")

    def print_success(self, message: str):
        self._status("success", message)

    def print_error(self, message: str):
        self._status("error", message)

    def print_warning(self, message: str):
        self._status("warning", message)

    def print_info(self, message: str):
        self._status("info", message)

    def print_header(self, title: str = "Welcome to MedTrackr"):
        self.console.print()
        self.console.print(Panel(f"[bold blue]{title}[/bold blue]", border_style="blue", padding=(0, 2)))
        self.console.print()

    def print_step_header(
        self,
        step_num: int,
        total_steps: int,
        title: str,
        description: str = "",
        progress: Optional[float] = None
    ):
        """Print ``Step n/total: title`` with an optional dim description."""
        done = f" [dim]({progress:.0f}%)[/dim]" if progress is not None else ""
        self.console.print()
        self.console.print(f"[bold cyan]Step {step_num}/{total_steps}:[/bold cyan] [bold]{title}[/bold]{done}")
        if description:
            self.console.print(f"[dim]{description}[/dim]")
        self.console.print()

    def print_back_hint(self, first_step: bool = False):
        target = "leave onboarding" if first_step else "return to the previous step"
        self.console.print(f"[dim]Type '{BACK_COMMANDS[0]}' to {target}.[/dim]")

    # Prompts

    def prompt_text(
        self,
        prompt: str,
        default: str = "",
        required: bool = False,
        allow_back: bool = False
    ) -> Union[str, _Back]:
        """Free text; ``required`` re-asks on blank input."""
        while True:
            value = Prompt.ask(prompt, default=default or None, console=self.console)
            if allow_back and _is_back(value):
                return BACK
            value = value or ""
            if not required or value.strip():
                return value
            self.print_error("This field is required")

    def prompt_password(self, prompt: str, required: bool = False) -> str:
        """Hidden input; never echoed or given a default."""
        value = Prompt.ask(prompt, password=True, console=self.console)
        while required and not value:
            self.print_error("This field is required")
            value = Prompt.ask(prompt, password=True, console=self.console)
        return value

    def prompt_confirm(self, prompt: str, default: bool = False) -> bool:
        return Confirm.ask(prompt, default=default, console=self.console)

    def prompt_yes_no(
        self,
        prompt: str,
        current: Optional[bool] = None,
        allow_back: bool = False
    ) -> Union[bool, _Back]:
        """Prompt for an explicit yes or no.

        Unlike ``prompt_confirm`` there is no default unless an earlier
        answer exists, so the user has to choose.
        """
        default = None if current is None else ("yes" if current else "no")
        while True:
            value = Prompt.ask(f"{prompt} (yes/no)", default=default, console=self.console)
            if allow_back and _is_back(value):
                return BACK
            answer = (value or "").strip().lower()
            if answer in ("y", "yes"):
                return True
            if answer in ("n", "no"):
                return False
            self.print_error("Please answer yes or no")

    def _list_options(self, prompt: str, choices: Sequence[str], marked: Callable[[str], bool], marker: str):
        self.console.print(f"\n{prompt}")
        for number, choice in enumerate(choices, 1):
            flag = f"[bold green]{marker}[/bold green]" if marked(choice) else " "
            self.console.print(f"  {flag} [{number}] {choice}")

    def prompt_choice(
        self,
        prompt: str,
        choices: Sequence[str],
        default: Optional[str] = None,
        allow_back: bool = False
    ) -> Union[str, _Back]:
        """Single choice by number or name; ``default`` is preselected."""
        self._list_options(prompt, choices, lambda choice: choice == default, "→")
        default_number = str(choices.index(default) + 1) if default in choices else None

        while True:
            selection = Prompt.ask("Enter number or name", default=default_number, console=self.console)
            if allow_back and _is_back(selection):
                return BACK
            match = _match_option(selection or "", choices)
            if match is not None:
                return match
            self.print_error(f"Invalid selection. Choose 1-{len(choices)}")

    def prompt_multi_choice(
        self,
        prompt: str,
        choices: Sequence[str],
        selected: Sequence[str] = (),
        allow_custom: bool = False,
        required: bool = False,
        allow_back: bool = False
    ) -> Union[Tuple[str, ...], _Back]:
        """Prompt for any number of choices, comma separated.

        Entries may be numbers or names. With ``allow_custom`` any other text
        is kept as a custom entry. Pressing Enter keeps the current selection.
        """
        self._list_options(prompt, choices, lambda choice: choice in selected, "✓")
        custom = [item for item in selected if item not in choices]
        if custom:
            self.console.print(f"  [dim]Custom: {', '.join(custom)}[/dim]")
        hint = "numbers or names, comma separated"
        if allow_custom:
            hint += "; type anything else to add your own"
        self.console.print(f"[dim]({hint})[/dim]")

        while True:
            raw = Prompt.ask("Your selection", default=", ".join(selected) or None, console=self.console)
            if allow_back and _is_back(raw):
                return BACK

            picked: List[str] = []
            unknown: List[str] = []
            for token in filter(None, (part.strip() for part in (raw or "").split(","))):
                match = _match_option(token, choices) or (token if allow_custom else None)
                if match is None:
                    unknown.append(token)
                elif match not in picked:
                    picked.append(match)

            if unknown:
                self.print_error(f"Unknown option(s): {', '.join(unknown)}")
            elif required and not picked:
                self.print_error("Pick at least one option")
            else:
                return tuple(picked)

    def prompt_date(
        self,
        prompt: str,
        current: Optional[date] = None,
        allow_back: bool = False
    ) -> Union[Optional[date], _Back]:
        """Prompt for an optional date in YYYY-MM-DD format.

        Enter keeps ``current`` (or skips when there is none). One of
        ``CLEAR_COMMANDS`` returns None so an earlier date can be removed.
        """
        hint = f"YYYY-MM-DD, '{CLEAR_COMMANDS[0]}' to clear" if current else "YYYY-MM-DD, Enter to skip"
        while True:
            value = Prompt.ask(
                f"{prompt} ({hint})",
                default=current.isoformat() if current else "",
                show_default=bool(current),
                console=self.console
            )
            if allow_back and _is_back(value):
                return BACK
            value = (value or "").strip()
            if not value or value.lower() in CLEAR_COMMANDS:
                return None
            try:
                return date.fromisoformat(value)
            except ValueError:
                self.print_error("Use the format YYYY-MM-DD")

    # Progress and results

    def show_progress(self, description: str, task_func: Callable[[], Any]) -> Any:
        """Run ``task_func`` behind a transient spinner and return its result."""
        columns = (SpinnerColumn(), TextColumn("[progress.description]{task.description}"))
        with Progress(*columns, transient=True, console=self.console) as progress:
            progress.add_task(description, total=None)
            return task_func()

    def show_summary_table(self, title: str, data: dict):
        """Two-column answer table; secret labels are masked outright."""
        table = Table(title=title, border_style="blue")
        table.add_column("Question", style="cyan")
        table.add_column("Answer", style="white")

        for label, value in data.items():
            text = _display(value)
            if not text:
                shown = "[dim]not set[/dim]"
            elif is_secret_key(label):
                shown = MASK
            else:
                shown = mask_secrets(text)
            table.add_row(label, shown)

        self.console.print(table)

    def show_completion_panel(self, title: str, content: str, next_steps: List[str]):
        """Green panel followed by a numbered next-steps list."""
        self.console.print()
        self.console.print(Panel(f"[bold green]{title}[/bold green]\n\n{content}", border_style="green", padding=(1, 2)))

        if not next_steps:
            return
        self.console.print()
        self.console.print("[bold]Next Steps:[/bold]")
        for number, line in enumerate(next_steps, 1):
            self.console.print(f"  {number}. {line}")
