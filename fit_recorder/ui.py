"""Interactive terminal prompts: checkbox choice, text entry with autocomplete, list pick.

Each prompt is a small state machine (a *model*) that reacts to key presses and
renders itself as text. The ``get_*`` functions run a model in the terminal.
They return the chosen text, or ``None`` when the user cancels with Ctrl+C or
Ctrl+D.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional, Protocol, Sequence, Union, runtime_checkable

from prompt_toolkit.application import Application
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.keys import Keys
from prompt_toolkit.layout import Layout, Window
from prompt_toolkit.layout.controls import FormattedTextControl

CHAR_LIMIT = 156
MAX_DROPDOWN_ITEMS = 10
CUSTOM_VALUE = "(Type custom value)"

_CHECKBOX_HELP = "(↑/↓ to move, enter/space to select, ctrl+c/ctrl+d to cancel)"
_DROPDOWN_HELP = "(↑/↓ to navigate, Tab to complete, Enter to select, Esc to close)"
_LIST_HELP = "(↑/↓ to move, type to filter, enter to select, ctrl+c/ctrl+d to cancel)"


class InputType(Enum):
    """How a prompt asks for its answer."""

    TEXT = 0
    LIST = 1
    CHECKBOX = 2
    AUTOCOMPLETE = 3


class Key(Enum):
    """Special keys the prompt models react to; printable text is passed as ``str``."""

    CTRL_C = "ctrl+c"
    CTRL_D = "ctrl+d"
    UP = "up"
    DOWN = "down"
    TAB = "tab"
    SHIFT_TAB = "shift+tab"
    ENTER = "enter"
    SPACE = "space"
    ESC = "esc"
    BACKSPACE = "backspace"


KeyPress = Union[Key, str]


class CheckboxModel:
    """Pick exactly one of several choices; the highlighted one is the checked one."""

    def __init__(self, prompt: str, choices: Sequence[str]) -> None:
        if not choices:
            raise ValueError("a checkbox needs at least one choice")
        self.prompt = prompt
        self.choices: List[str] = list(choices)
        self.cursor = 0
        self.selected = ""
        self.cancelled = False
        self.done = False

    def handle_key(self, key: KeyPress) -> bool:
        """Apply a key press; return True once the prompt is finished."""
        if key in (Key.CTRL_C, Key.CTRL_D):
            self.cancelled = True
            self.done = True
        elif key in (Key.UP, Key.SHIFT_TAB):
            if self.cursor > 0:
                self.cursor -= 1
        elif key in (Key.DOWN, Key.TAB):
            if self.cursor < len(self.choices) - 1:
                self.cursor += 1
        elif key in (Key.ENTER, Key.SPACE):
            self.selected = self.choices[self.cursor]
            self.done = True
        return self.done

    def view(self) -> str:
        lines = [self.prompt + "\n\n"]
        for index, choice in enumerate(self.choices):
            mark = ">" if index == self.cursor else " "
            checked = "x" if index == self.cursor else " "
            lines.append(f"{mark} [{checked}] {choice}\n")
        lines.append(f"\n{_CHECKBOX_HELP}\n")
        return "".join(lines)


class TextInputModel:
    """A line of text with an optional dropdown of matching suggestions."""

    def __init__(self, prompt: str, suggestions: Optional[Sequence[str]] = None) -> None:
        self.prompt = prompt
        self.suggestions: List[str] = list(suggestions or [])
        self.text = ""
        self.filtered: List[str] = []
        self.selected_index = 0
        self.show_dropdown = False
        self.value = ""
        self.cancelled = False
        self.submitted = False
        self.done = False

    def handle_key(self, key: KeyPress) -> bool:
        """Apply a key press; return True once the prompt is finished."""
        if key in (Key.CTRL_C, Key.CTRL_D):
            self.cancelled = True
            self.done = True
            return True
        if key is Key.ENTER:
            if self.show_dropdown and self.selected_index < len(self.filtered):
                self.value = self.filtered[self.selected_index]
            else:
                self.value = self.text
            self.submitted = True
            self.done = True
            return True
        if key is Key.DOWN and self.show_dropdown and self.filtered:
            self.selected_index = (self.selected_index + 1) % len(self.filtered)
            return False
        if key is Key.UP and self.show_dropdown and self.filtered:
            self.selected_index = (self.selected_index - 1) % len(self.filtered)
            return False
        if key is Key.TAB and self.filtered:
            # Completion sets the text directly and leaves the filter untouched.
            self.text = self.filtered[self.selected_index][:CHAR_LIMIT]
            self.show_dropdown = False
            self.selected_index = 0
            return False
        if key is Key.ESC:
            self.show_dropdown = False
            self.selected_index = 0
            return False

        if key is Key.SPACE:
            self.set_text(self.text + " ")
        elif key is Key.BACKSPACE:
            self.set_text(self.text[:-1])
        elif isinstance(key, str):
            self.set_text(self.text + key)
        return False

    def set_text(self, text: str) -> None:
        """Replace the typed text, as editing does, and refresh the suggestions."""
        new_text = text[:CHAR_LIMIT]
        if new_text != self.text:
            self.text = new_text
            self._update_filtered()

    def _update_filtered(self) -> None:
        current = self.text.lower()
        if not current or not self.suggestions:
            self.show_dropdown = False
            self.filtered = []
            self.selected_index = 0
            return
        previous = self.filtered
        self.filtered = [s for s in self.suggestions if current in s.lower()]
        self.show_dropdown = bool(self.filtered)
        if len(previous) != len(self.filtered) or self.selected_index >= len(self.filtered):
            self.selected_index = 0

    def view(self) -> str:
        parts = [self.prompt + self.text]
        if self.show_dropdown and self.filtered:
            parts.append("\n")
            for index, suggestion in enumerate(self.filtered[:MAX_DROPDOWN_ITEMS]):
                mark = "> " if index == self.selected_index else "  "
                parts.append("\n" + mark + suggestion)
            if len(self.filtered) > MAX_DROPDOWN_ITEMS:
                parts.append("\n  ...")
            parts.append(f"\n\n{_DROPDOWN_HELP}")
        return "".join(parts) + "\n"


class ListModel:
    """Pick one suggestion from a filterable list, or ask for a custom value."""

    def __init__(self, prompt: str, suggestions: Sequence[str]) -> None:
        self.prompt = prompt
        self.items: List[str] = [*suggestions, CUSTOM_VALUE]
        self.filter_text = ""
        self.cursor = 0
        self.choice = ""
        self.cancelled = False
        self.quitting = False
        self.done = False

    @property
    def visible(self) -> List[str]:
        """Items matching the current filter, in their original order."""
        needle = self.filter_text.lower()
        return [item for item in self.items if needle in item.lower()]

    def handle_key(self, key: KeyPress) -> bool:
        """Apply a key press; return True once the prompt is finished."""
        if key in (Key.CTRL_C, Key.CTRL_D):
            self.cancelled = True
            self.quitting = True
            self.done = True
        elif key is Key.ENTER:
            visible = self.visible
            if self.cursor < len(visible):
                self.choice = visible[self.cursor]
            if self.choice != CUSTOM_VALUE:
                self.quitting = True
            self.done = True
        elif key is Key.UP:
            if self.cursor > 0:
                self.cursor -= 1
        elif key is Key.DOWN:
            if self.cursor < len(self.visible) - 1:
                self.cursor += 1
        elif key is Key.BACKSPACE:
            self.filter_text = self.filter_text[:-1]
            self.cursor = 0
        elif key is Key.SPACE:
            self.filter_text += " "
            self.cursor = 0
        elif isinstance(key, str):
            self.filter_text += key
            self.cursor = 0
        return self.done

    def view(self) -> str:
        if self.quitting:
            return ""
        parts = [self.prompt + "\n"]
        if self.filter_text:
            parts.append(f"Filter: {self.filter_text}\n")
        parts.append("\n")
        for index, item in enumerate(self.visible):
            mark = "> " if index == self.cursor else "  "
            parts.append(mark + item + "\n")
        parts.append(f"\n{_LIST_HELP}\n")
        return "".join(parts)


@runtime_checkable
class InputProvider(Protocol):
    """Source of user answers; commands take one so tests can script the input."""

    def get_input_with_type(
        self, prompt: str, suggestions: Optional[Sequence[str]], input_type: InputType
    ) -> Optional[str]: ...


class TerminalInputProvider:
    """Asks the user at the terminal."""

    def get_input_with_type(
        self, prompt: str, suggestions: Optional[Sequence[str]], input_type: InputType
    ) -> Optional[str]:
        return get_input_with_type(prompt, suggestions, input_type)


_KEY_NAMES = (
    ("c-c", Key.CTRL_C),
    ("c-d", Key.CTRL_D),
    ("up", Key.UP),
    ("down", Key.DOWN),
    ("tab", Key.TAB),
    ("s-tab", Key.SHIFT_TAB),
    ("enter", Key.ENTER),
    (" ", Key.SPACE),
    ("escape", Key.ESC),
    ("backspace", Key.BACKSPACE),
)


def _bind(bindings: KeyBindings, name: str, key: Key, model) -> None:
    @bindings.add(name, eager=key is Key.ESC)
    def _handler(event) -> None:
        if model.handle_key(key):
            event.app.exit()


def _run(model, full_screen: bool = False) -> bool:
    """Drive a model in the terminal until it finishes; False if the terminal failed."""
    bindings = KeyBindings()
    for name, key in _KEY_NAMES:
        _bind(bindings, name, key, model)

    @bindings.add(Keys.Any)
    def _typed(event) -> None:
        for char in event.data:
            if char.isprintable() and model.handle_key(char):
                event.app.exit()
                return

    app = Application(
        layout=Layout(Window(FormattedTextControl(model.view), wrap_lines=True)),
        key_bindings=bindings,
        full_screen=full_screen,
    )
    try:
        app.run()
    except Exception:  # any terminal failure counts as a cancelled prompt
        return False
    return True


def _text_input(prompt: str, suggestions: Optional[Sequence[str]]) -> Optional[str]:
    model = TextInputModel(prompt, suggestions)
    if not _run(model) or model.cancelled:
        return None
    return model.value.strip()


def get_checkbox_selection(prompt: str, choices: Sequence[str]) -> Optional[str]:
    """Let the user check one of ``choices``; None if cancelled."""
    model = CheckboxModel(prompt, choices)
    if not _run(model) or model.cancelled:
        return None
    return model.selected


def get_list_selection(prompt: str, suggestions: Sequence[str]) -> Optional[str]:
    """Let the user pick from ``suggestions`` or type a value; None if cancelled."""
    model = ListModel(prompt, suggestions)
    if not _run(model, full_screen=True) or model.cancelled:
        return None
    if model.choice == CUSTOM_VALUE:
        return get_input(prompt, None)
    return model.choice


def get_input(prompt: str, suggestions: Optional[Sequence[str]] = None) -> Optional[str]:
    """Ask for a plain line of text."""
    return get_input_with_type(prompt, suggestions, InputType.TEXT)


def get_input_with_type(
    prompt: str, suggestions: Optional[Sequence[str]], input_type: InputType
) -> Optional[str]:
    """Ask the user in the way ``input_type`` names; None if cancelled."""
    if input_type is InputType.CHECKBOX:
        return get_checkbox_selection(prompt, suggestions or [])
    if input_type is InputType.LIST and suggestions:
        return get_list_selection(prompt, suggestions)
    if input_type in (InputType.LIST, InputType.AUTOCOMPLETE):
        return _text_input(prompt, suggestions)
    return _text_input(prompt, None)