# log_redactor/service/log_filter.py

"""Logging integration: redacts each record's message as it is emitted."""

import logging
from typing import Optional

from log_redactor.engine.redactor import RedactionEngine
from log_redactor.service.pipeline import RedactionService


class RedactionFilter(logging.Filter):
    """Rewrites record messages through a RedactionEngine.

    Attach to a handler (or logger) to redact every message before it is
    formatted. The message is rendered with its args first, so values
    passed as %-style arguments are redacted too. Only the message text is
    touched; extra fields are left alone.

    Example:
        handler = logging.StreamHandler()
        handler.addFilter(RedactionFilter())
    """

    def __init__(self, engine: Optional[RedactionEngine] = None, name: str = ""):
        super().__init__(name)
        self._engine = engine

    @property
    def engine(self) -> RedactionEngine:
        if self._engine is None:
            self._engine = RedactionService.get_instance()
        return self._engine

    def filter(self, record: logging.LogRecord) -> bool:
        # The name only narrows which records are redacted, never drops any
        if not super().filter(record):
            return True

        # A record that cannot be rendered is left for the handler to report
        try:
            message = record.getMessage()
        except Exception:
            return True

        redacted = self.engine.redact(message)

        if redacted is not message:
            record.msg = redacted
            record.args = None

        return True
