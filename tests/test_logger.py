import json

from loguru import logger

from market_scout.utils import logger as logger_module
from market_scout.utils.config import Config, LoggingConfig
from market_scout.utils.logger import setup_logging


def test_file_sink_receives_messages(tmp_path, monkeypatch):
    monkeypatch.setattr(logger_module, "get_config", lambda: Config())
    log_file = tmp_path / "logs" / "scout.log"

    setup_logging("INFO", str(log_file))
    logger.info("report built")
    logger.debug("hidden")
    logger.remove()

    content = log_file.read_text(encoding="utf-8")
    assert "report built" in content
    assert "hidden" not in content


def test_json_file_sink(tmp_path, monkeypatch):
    config = Config(logging=LoggingConfig(json_file=True))
    monkeypatch.setattr(logger_module, "get_config", lambda: config)
    log_file = tmp_path / "scout.jsonl"

    setup_logging("WARNING", str(log_file))
    logger.warning("degenerate input")
    logger.remove()

    record = json.loads(log_file.read_text(encoding="utf-8").splitlines()[0])
    assert record["record"]["message"] == "degenerate input"
    assert record["record"]["level"]["name"] == "WARNING"
