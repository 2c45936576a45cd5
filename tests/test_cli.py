import builtins
import pytest
from click.testing import CliRunner
from cli import CLI
from main import cli
from service import TodoService
from storage import FileStorage


@pytest.fixture
def repl(service):
    return CLI(service, alt_screen=False)


def feed(monkeypatch, *answers):
    replies = iter(answers)
    monkeypatch.setattr(builtins, "input", lambda prompt="": next(replies))


# -------------------- interactive loop --------------------
def test_add_inline_and_toggle(repl, todo_path, capsys):
    repl.handle_command("add Write tests")
    repl.draw()
    repl.handle_command("x 1")
    assert todo_path.read_text() == "Write tests [DONE]"
    assert "Write tests" in capsys.readouterr().out


def test_add_prompts_when_no_text(repl, todo_path, monkeypatch):
    feed(monkeypatch, "Prompted task")
    repl.handle_command("add")
    assert todo_path.read_text() == "Prompted task"


def test_blank_add_sets_warning(repl, monkeypatch):
    feed(monkeypatch, "   ")
    outcome = repl.handle_command("add")
    assert outcome.level == "warning"
    assert "empty" in repl.message


def test_toggle_uses_drawn_snapshot(repl, todo_path, capsys):
    todo_path.write_text("Task A\nTask B")
    repl.draw()
    todo_path.write_text("New\nTask A\nTask B")
    outcome = repl.handle_command("x 1")
    assert outcome.level == "warning"
    assert todo_path.read_text() == "New\nTask A\nTask B"


def test_toggle_bad_number(repl):
    assert repl.handle_command("x one") is None
    assert repl.message == "Invalid task number."


def test_clear_requires_confirmation(repl, todo_path, monkeypatch):
    todo_path.write_text("Task A")
    feed(monkeypatch, "n")
    repl.handle_command("clear")
    assert todo_path.read_text() == "Task A"
    feed(monkeypatch, "y")
    repl.handle_command("clear")
    assert todo_path.read_text() == ""


def test_sort_command(repl, todo_path):
    todo_path.write_text("A [DONE]\nB")
    repl.handle_command("sort")
    assert todo_path.read_text() == "B\nA [DONE]"


def test_unknown_command(repl):
    repl.handle_command("frobnicate")
    assert "Unknown command" in repl.message


def test_run_loop_exits(repl, todo_path, monkeypatch, capsys):
    feed(monkeypatch, "add Loop task", "exit")
    repl.run()
    assert todo_path.read_text() == "Loop task"
    assert "Goodbye." in capsys.readouterr().out


def test_run_loop_handles_eof(repl, monkeypatch, capsys):
    def raise_eof(prompt=""):
        raise EOFError
    monkeypatch.setattr(builtins, "input", raise_eof)
    repl.run()
    assert "Interrupted. Goodbye." in capsys.readouterr().out


# -------------------- command line --------------------
@pytest.fixture
def runner(clean_env, monkeypatch):
    monkeypatch.setenv("TODO_LOG_PATH", str(clean_env / "logs" / "todo.log"))
    return CliRunner()


def test_cli_add_list_toggle_status(runner, clean_env):
    assert runner.invoke(cli, ["add", "Task", "A"]).exit_code == 0
    assert runner.invoke(cli, ["add", "Task B"]).exit_code == 0
    result = runner.invoke(cli, ["list"])
    assert result.output.splitlines() == ["1. ○ Task B", "2. ○ Task A"]
    assert runner.invoke(cli, ["toggle", "1"]).exit_code == 0
    assert runner.invoke(cli, ["status"]).output.strip() == "Task A"
    assert (clean_env / "todo.txt").read_text() == "Task B [DONE]\nTask A"
    log = runner.invoke(cli, ["log"]).output
    assert log.strip().endswith("Task B")


def test_cli_toggle_out_of_range(runner):
    result = runner.invoke(cli, ["toggle", "3"])
    assert result.exit_code == 2
    assert "No task #3" in result.output


def test_cli_clear(runner, clean_env):
    runner.invoke(cli, ["add", "Task A"])
    result = runner.invoke(cli, ["clear"], input="n\n")
    assert "Clear cancelled." in result.output
    assert (clean_env / "todo.txt").read_text() == "Task A"
    assert runner.invoke(cli, ["clear", "--yes"]).exit_code == 0
    assert (clean_env / "todo.txt").read_text() == ""


def test_cli_file_option(runner, tmp_path):
    target = tmp_path / "other" / "list.txt"
    assert runner.invoke(cli, ["--file", str(target), "add", "Elsewhere"]).exit_code == 0
    assert target.read_text() == "Elsewhere"


def test_cli_reorder(runner, clean_env):
    (clean_env / "todo.txt").write_text("A [DONE]\nB")
    assert runner.invoke(cli, ["reorder"]).exit_code == 0
    assert (clean_env / "todo.txt").read_text() == "B\nA [DONE]"


def test_cli_status_read_error_exits_nonzero(runner, clean_env):
    (clean_env / "todo.txt").write_bytes(b"\xff\xfe\xfa broken")
    result = runner.invoke(cli, ["status"])
    assert result.exit_code == 1
    assert "All TODOs done!" not in result.output


def test_cli_log_path_directory_does_not_crash(runner, clean_env, monkeypatch):
    monkeypatch.setenv("TODO_LOG_PATH", str(clean_env))
    result = runner.invoke(cli, ["list"])
    assert result.exit_code == 0
    assert result.exception is None


class CountingStorage(FileStorage):
    def __init__(self):
        super().__init__()
        self.reads = 0

    def read(self, path):
        self.reads += 1
        return super().read(path)


def test_draw_reads_file_once(todo_path, log_path, capsys):
    todo_path.write_text("Task A\nTask B [DONE]")
    storage = CountingStorage()
    repl = CLI(TodoService(todo_path, log_path, storage=storage), alt_screen=False)
    repl.draw()
    assert storage.reads == 1
    assert "TODOs: Task A" in capsys.readouterr().out
