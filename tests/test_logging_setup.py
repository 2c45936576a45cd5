from loguru import logger
from logging_setup import configure_logging


def test_file_sink_receives_records(tmp_path):
    log_path = tmp_path / "logs" / "todo.log"
    configure_logging(log_path, "DEBUG")
    logger.info("hello from the list")
    logger.remove()
    assert "hello from the list" in log_path.read_text()


def test_directory_log_path_runs_without_sink(tmp_path):
    configure_logging(tmp_path, "INFO")
    # no sink attached, so this is dropped rather than raising
    logger.error("nowhere to go")
    logger.remove()


def test_unknown_level_falls_back_to_info(tmp_path):
    log_path = tmp_path / "todo.log"
    configure_logging(log_path, "LOUD")
    logger.debug("hidden")
    logger.info("shown")
    logger.remove()
    text = log_path.read_text()
    assert "shown" in text and "hidden" not in text
