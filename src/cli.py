"""Interactive loop for the TODO list.

Each cycle redraws the list, reads one command, hands it to the service and
goes round again; leaving the loop is the only way to dismiss it.
"""
from typing import List, Optional
from loguru import logger
from models import Task
from service import TodoService, Outcome
from todo_list import render_task_line, status_summary
from theme import color, HEADER_COLOR, STATUS_COLOR, ID_COLOR, EMPTY_COLOR, LEVEL_COLOR, BOLD

STATUS_ICON = "☑"


def _clear_screen() -> None:
    # ESC[3J (scrollback) first, then home + clear screen
    print("\033[3J\033[H\033[2J\033[H", end="", flush=True)


def _enter_alt_screen() -> None:
    print("\033[?1049h", end="", flush=True)


def _leave_alt_screen() -> None:
    print("\033[?1049l", end="", flush=True)


TOGGLE_COMMANDS = {'x', 'toggle', 'done'}
CONFIRM_ANSWERS = {'y', 'yes'}


def format_task(number: int, task: Task) -> str:
    status = 'done' if task.done else 'pending'
    return color(f"{number}.", ID_COLOR) + ' ' + color(render_task_line(task), STATUS_COLOR[status])


def format_outcome(outcome: Outcome) -> str:
    return color(outcome.message, LEVEL_COLOR.get(outcome.level, ''))


class CLI:
    def __init__(self, service: TodoService, alt_screen: bool = True):
        self.service: TodoService = service
        self.alt_screen: bool = alt_screen
        # tasks as last drawn; toggles are checked against it
        self.shown: List[Task] = []
        self.message: Optional[str] = None

    def run(self) -> None:
        exit_message: Optional[str] = None
        if self.alt_screen:
            _enter_alt_screen()
        try:
            while True:
                _clear_screen()
                self.draw()
                if self.message:
                    print("\n" + self.message)
                    self.message = None
                line = input("\n: ").strip()
                if not line:
                    continue
                lower = line.lower()
                if lower == 'help':
                    _clear_screen()
                    self._help()
                    input("\nPress Enter to return to the list...")
                    continue
                if lower in ('exit', 'quit', 'q'):
                    exit_message = "Goodbye."
                    break
                self.handle_command(line)
        except (KeyboardInterrupt, EOFError):
            exit_message = "Interrupted. Goodbye."
        finally:
            if self.alt_screen:
                _leave_alt_screen()
            if exit_message:
                print(exit_message)

    # -------------------- display --------------------
    def draw(self) -> None:
        outcome = self.service.tasks()
        self.shown = outcome.tasks
        print(color(f"{STATUS_ICON} TODOs: ", HEADER_COLOR, BOLD) + status_summary(self.shown))
        print(color('-' * 40, HEADER_COLOR))
        if not self.shown:
            print(color('(empty)', EMPTY_COLOR))
        for number, task in enumerate(self.shown, start=1):
            print(format_task(number, task))
        if not outcome.ok:
            print("\n" + format_outcome(outcome))

    # -------------------- command dispatch --------------------
    def handle_command(self, line: str) -> Optional[Outcome]:
        tokens = line.split()
        if not tokens:
            return None
        cmd = tokens[0].lower()
        outcome: Optional[Outcome] = None
        if cmd == 'add':
            outcome = self._cmd_add(line)
        elif cmd in TOGGLE_COMMANDS:
            outcome = self._cmd_toggle(tokens)
        elif cmd in ('sort', 'reorder'):
            outcome = self.service.reorder()
        elif cmd == 'clear':
            outcome = self._cmd_clear()
        elif cmd == 'log':
            self._cmd_log()
        else:
            self.message = "Unknown command. Type 'help' for instructions."
        if outcome is not None and outcome.message:
            self.message = format_outcome(outcome)
        return outcome

    # ---- individual command helpers ----
    def _cmd_add(self, line: str) -> Optional[Outcome]:
        parts = line.split(None, 1)
        title = parts[1] if len(parts) > 1 else ''
        if not title.strip():
            title = input("Enter task description: ")
        return self.service.add(title)

    def _cmd_toggle(self, tokens: List[str]) -> Optional[Outcome]:
        if len(tokens) != 2:
            self.message = "Usage: x <number>"
            return None
        raw = tokens[1].rstrip('.')
        if not raw.isdigit():
            self.message = "Invalid task number."
            return None
        index = int(raw) - 1
        expected = self.shown[index].description if 0 <= index < len(self.shown) else None
        return self.service.toggle(index, expected=expected)

    def _cmd_clear(self) -> Optional[Outcome]:
        answer = input("Clear ALL tasks? This cannot be undone [y/N]: ").strip().lower()
        if answer not in CONFIRM_ANSWERS:
            self.message = "Clear cancelled."
            return None
        return self.service.clear()

    def _cmd_log(self) -> None:
        entries = self.service.history()
        _clear_screen()
        print(color("Completed:", HEADER_COLOR, BOLD))
        if not entries:
            print(color('(empty)', EMPTY_COLOR))
        for entry in entries:
            print(f"{entry.timestamp}  {entry.description}")
        input("\nPress Enter to return to the list...")

    def _help(self) -> None:
        print("Commands:")
        print("  add                 Add a new task (prompts for the description)")
        print("  add <text...>       Add a task inline (e.g., add write report)")
        print("  x <n>               Toggle task n done/pending (also: toggle, done)")
        print("  sort                Move pending tasks above done tasks")
        print("  clear               Remove all tasks (asks for confirmation)")
        print("  log                 Show completed tasks, newest first")
        print("  help                Show this help (press Enter to return)")
        print("  exit                Leave the list")


def run_interactive(service: TodoService, alt_screen: bool = True) -> None:
    logger.debug("Starting interactive list for {}", service.todo_file)
    CLI(service, alt_screen=alt_screen).run()
