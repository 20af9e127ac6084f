import json
import logging
import sys

from storefront.exceptions import DatasetLoadError
from storefront.log import JSONFormatter, close_file_handlers, setup_logging


def _record(msg: str, **kwargs) -> logging.LogRecord:
    return logging.LogRecord("storefront.test", logging.WARNING, __file__, 1, msg, None, kwargs.get("exc_info"))


def test_formatter_carries_data_and_tracked_error_fields() -> None:
    try:
        raise DatasetLoadError("Failed to load categories", dataset="categories", trace_id="abc123")
    except DatasetLoadError:
        record = _record("dataset_failed", exc_info=sys.exc_info())
    record.data = {"dataset": "categories"}

    entry = json.loads(JSONFormatter().format(record))

    assert entry["level"] == "WARNING"
    assert entry["data"] == {"dataset": "categories"}
    assert entry["error"] == "Failed to load categories"
    assert entry["error_type"] == "dataset_load"
    assert entry["trace_id"] == "abc123"


def test_setup_logging_does_not_duplicate_handlers(tmp_path) -> None:
    logger = setup_logging(tmp_path, "debug")
    try:
        setup_logging(tmp_path, "debug")
        names = [handler.get_name() for handler in logger.handlers]
        assert names.count("storefront-stderr") == 1
        assert len([name for name in names if name and name.startswith("storefront-file:")]) == 1
        assert logger.level == logging.DEBUG
    finally:
        close_file_handlers()
        logger.setLevel(logging.INFO)
    assert (tmp_path / "storefront.jsonl").exists()
