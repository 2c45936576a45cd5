import pytest
from models import StorageError
from service import TodoService


class FailingStorage:
    """Storage double whose reads and/or writes fail for chosen paths."""

    def __init__(self, files=None, fail_read=(), fail_write=()):
        self.files = dict(files or {})
        self.fail_read = {str(p) for p in fail_read}
        self.fail_write = {str(p) for p in fail_write}

    def read(self, path):
        if str(path) in self.fail_read:
            raise StorageError(path, PermissionError("read denied"))
        return self.files.get(str(path))

    def write(self, path, text):
        if str(path) in self.fail_write:
            raise StorageError(path, PermissionError("write denied"))
        self.files[str(path)] = text


@pytest.fixture
def todo_path(tmp_path):
    return tmp_path / "todo.txt"


@pytest.fixture
def log_path(tmp_path):
    return tmp_path / "todo-completed.txt"


@pytest.fixture
def service(todo_path, log_path):
    return TodoService(todo_path, log_path)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for key in ("TODO_DATA_DIR", "TODO_FILE", "TODO_LOG_FILE", "TODO_COMPLETION_LOG",
                "TODO_INSERT", "TODO_REORDER", "TODO_ALT_SCREEN", "TODO_LOG_LEVEL",
                "TODO_LOG_PATH"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path
