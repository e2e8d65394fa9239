from __future__ import annotations

import logging

from logging_config import ContextualFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="storage.snapshot_store",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="Ignoring corrupt snapshot",
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_appends_known_context() -> None:
    formatter = ContextualFormatter(fmt="%(levelname)s %(message)s")

    message = formatter.format(_record(path="/tmp/mackerel-plugin-x", reason="bad json", other="x"))

    assert message == "WARNING Ignoring corrupt snapshot | path=/tmp/mackerel-plugin-x reason=\"bad json\""


def test_formatter_skips_missing_and_none_context() -> None:
    formatter = ContextualFormatter(fmt="%(message)s")

    assert formatter.format(_record(prefix=None)) == "Ignoring corrupt snapshot"


def test_formatter_quotes_values_with_separators() -> None:
    formatter = ContextualFormatter(fmt="%(message)s", context_keys=("reason", "value_count"))

    message = formatter.format(_record(reason='unexpected "}" at 3', value_count=0))

    assert message == 'Ignoring corrupt snapshot | reason="unexpected \\"}\\" at 3" value_count=0'


def test_formatter_quotes_empty_prefix() -> None:
    formatter = ContextualFormatter(fmt="%(message)s")

    assert formatter.format(_record(prefix="")) == 'Ignoring corrupt snapshot | prefix=""'
