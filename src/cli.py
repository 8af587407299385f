"""Command-line interface loop for the todo cards board.

Each cycle re-reads the document and redraws the cards. Commands refer to
cards and tasks by the numbers shown on screen; a toggle command turns
those numbers into (section label, task text) and hands them to the patch
path, so the document file stays the only record of task state.
"""
import os
from dataclasses import replace
from typing import List, Optional
from display import CardGrid
from models import CardView, Settings
from service import TodoCards
from storage import DocumentError, Storage

# We aggressively clear: ESC[3J (scrollback), ESC[H (home), ESC[2J (screen), ESC[H (home))
# Order (3J first) improves reliability in some terminals.
def _clear_screen() -> None:
    print("\033[3J\033[H\033[2J\033[H", end="", flush=True)


def _truthy_env(value: Optional[str], default: bool = True) -> bool:
    if value is None:
        return default
    return value.strip().lower() not in {"0", "false", "no", "off", ""}


def _enter_alt_screen() -> None:
    # Switch to alternate screen buffer
    print("\033[?1049h", end="", flush=True)


def _leave_alt_screen() -> None:
    # Return to normal screen buffer
    print("\033[?1049l", end="", flush=True)


# command -> new done state (None flips the current one)
TOGGLE_COMMANDS = {
    'x': True,
    'done': True,
    'o': False,
    'open': False,
    't': None,
    'toggle': None,
}

# command -> Settings field; values are integers
SETTING_COMMANDS = {
    'width': 'card_width',
    'gap': 'card_gap',
    'days': 'days',
    'offset': 'week_offset',
}


class CLI:
    def __init__(self, app: TodoCards, persist_settings: bool = True):
        self.app: TodoCards = app
        self.persist_settings = persist_settings
        self.cards: List[CardView] = []
        # Alt screen default ON; disable with TODOCARDS_ALT_SCREEN=0 (or false/no/off)
        self.alt_screen: bool = _truthy_env(os.getenv("TODOCARDS_ALT_SCREEN"), True)

    def run(self) -> None:
        """Main REPL loop; cards are re-read and redrawn each cycle."""
        exit_message: Optional[str] = None
        message = ""
        if self.alt_screen:
            _enter_alt_screen()
        try:
            while True:
                _clear_screen()
                self._draw()
                if message:
                    print(message)
                line = input("\n: ").strip()
                if not line:
                    message = ""
                    continue
                lower = line.lower()
                if lower == 'help':
                    _clear_screen()
                    self._help()
                    input("\nPress Enter to return to the board...")
                    message = ""
                    continue
                if lower in ('exit', 'quit', 'q'):
                    exit_message = "Goodbye."
                    break
                message = self.handle_command(line)
        except (KeyboardInterrupt, EOFError):
            exit_message = "Interrupted. Goodbye."
        finally:
            if self.alt_screen:
                _leave_alt_screen()
            if exit_message:
                print(exit_message)

    def _draw(self) -> None:
        settings = self.app.settings
        heading = "All sections" if settings.mode == 'all' else f"{settings.days} days"
        print(f"{self.app.store.path} - {heading}:")
        try:
            self.cards = self.app.cards()
        except DocumentError as exc:
            self.cards = []
            print(str(exc))
            return
        CardGrid(settings).display(self.cards)

    # -------------------- command dispatch --------------------
    def handle_command(self, line: str) -> str:
        """Run one command and return the message to show (may be empty)."""
        tokens = line.split()
        if not tokens:
            return ""
        cmd = tokens[0].lower()
        try:
            if cmd in TOGGLE_COMMANDS:
                return self._cmd_toggle(tokens, TOGGLE_COMMANDS[cmd])
            if cmd in SETTING_COMMANDS:
                return self._cmd_setting(tokens, SETTING_COMMANDS[cmd])
            if cmd == 'mode':
                return self._cmd_mode(tokens)
            if cmd in ('next', 'n'):
                self.app.page += 1
                return ""
            if cmd in ('prev', 'p'):
                self.app.page -= 1
                return ""
            if cmd == 'today':
                self.app.page = 0
                return ""
        except DocumentError as exc:
            return str(exc)
        return "Unknown command. Type 'help' for instructions."

    # ---- individual command helpers ----
    def _cmd_toggle(self, tokens: list[str], new_done: Optional[bool]) -> str:
        usage = f"Usage: {tokens[0]} <card> <task>"
        if len(tokens) != 3:
            return usage
        try:
            card_no, task_no = int(tokens[1]), int(tokens[2])
        except ValueError:
            return usage
        if not 1 <= card_no <= len(self.cards):
            return f"No card #{card_no}."
        card = self.cards[card_no - 1]
        if not 1 <= task_no <= len(card.tasks):
            return f"No task #{task_no} on card {card_no}."
        task = card.tasks[task_no - 1]
        target = (not task.done) if new_done is None else new_done
        if self.app.toggle(card.label, task.text, target):
            return ""
        if task.done == target:
            return f'Task "{task.text}" already {"done" if target else "open"}.'
        return f'Task "{task.text}" could not be updated; the document may have changed.'

    def _cmd_setting(self, tokens: list[str], field_name: str) -> str:
        usage = f"Usage: {tokens[0]} <number>"
        if len(tokens) != 2:
            return usage
        try:
            value = int(tokens[1])
        except ValueError:
            return usage
        return self._update(**{field_name: value})

    def _cmd_mode(self, tokens: list[str]) -> str:
        if len(tokens) != 2:
            return "Usage: mode window|all"
        return self._update(mode=tokens[1].lower())

    def _update(self, **changes) -> str:
        try:
            settings: Settings = replace(self.app.settings, **changes)
        except ValueError as exc:
            return str(exc)
        self.app.settings = settings
        self.app.page = 0
        if self.persist_settings:
            try:
                Storage.save_settings(settings)
            except OSError as exc:
                return f"Settings not saved: {exc}"
        return ""

    # -------------------- user-interactive flows --------------------
    def _help(self) -> None:
        print("Commands:")
        print("  x <card> <task>     Mark a task done (e.g., x 2 1)")
        print("  o <card> <task>     Mark a task open again")
        print("  t <card> <task>     Toggle a task")
        print("  next / prev         Shift the day window forward / back")
        print("  today               Return the day window to today")
        print("  mode window|all     Show a fixed day window or every section")
        print("  days <n>            Number of days in the window")
        print("  offset <n>          Window start, in days after Sunday")
        print("  width <px>          Card width (pixels, 8 per column)")
        print("  gap <px>            Gap between cards (pixels)")
        print("  help                Show this help (press Enter to return)")
        print("  exit                Exit")
