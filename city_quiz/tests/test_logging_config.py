"""
Tests for the production JSON log formatter.
"""

from __future__ import annotations

import json
import logging

from city_quiz.logging_config import QuizJSONFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="city_quiz.session",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Accepted %s",
        args=("Oslo",),
        exc_info=None,
    )
    record.__dict__.update(extra)
    return record


class TestQuizJSONFormatter:
    def test_message_level_and_logger(self):
        payload = json.loads(QuizJSONFormatter().format(_record()))
        assert payload["message"] == "Accepted Oslo"
        assert payload["level"] == "INFO"
        assert payload["logger"] == "city_quiz.session"
        assert "time" in payload

    def test_extra_fields_become_keys(self):
        payload = json.loads(QuizJSONFormatter().format(_record(mode="europe", session="abc")))
        assert payload["mode"] == "europe"
        assert payload["session"] == "abc"
