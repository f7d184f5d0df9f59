import logging

import pytest

from tele_fun_facts.logger import resolve_level, setup_logging


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("debug", logging.DEBUG),
        (" WARNING ", logging.WARNING),
        (None, logging.INFO),
        ("", logging.INFO),
        ("chatty", logging.INFO),
    ],
)
def test_resolve_level(name, expected) -> None:
    assert resolve_level(name) == expected


def test_setup_logging_reads_env_and_quiets_http(monkeypatch) -> None:
    root = logging.getLogger()
    previous = root.level
    monkeypatch.setenv("LOG_LEVEL", "debug")

    try:
        setup_logging()
        assert root.level == logging.DEBUG
    finally:
        root.setLevel(previous)

    assert root.handlers
    assert logging.getLogger("httpx").level == logging.WARNING
    assert logging.getLogger("telegram").level == logging.WARNING
