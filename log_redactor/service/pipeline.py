# log_redactor/service/pipeline.py

"""Process-wide redaction service and runtime entry point."""

import logging
import threading
from typing import Optional

from log_redactor.service.config import settings
from log_redactor.engine.redactor import RedactionEngine
from log_redactor.core.exceptions import InitializationError, PolicyLoadError

logger = logging.getLogger(__name__)


class RedactionService:
    """Singleton service wrapper for the redaction engine.

    Loads the configured policy once and hands the same engine to every
    thread. A policy that fails to load is a fatal startup error.
    """

    _instance: Optional[RedactionEngine] = None
    _lock = threading.Lock()

    @classmethod
    def get_instance(cls) -> RedactionEngine:
        """Returns singleton redaction engine instance.

        Returns:
            Initialized RedactionEngine

        Raises:
            PolicyLoadError: If the configured policy is invalid
            InitializationError: If engine initialization fails otherwise
        """
        if cls._instance is None:
            with cls._lock:
                # Double-checked locking pattern
                if cls._instance is None:
                    try:
                        policy_path = settings.policy_path
                        logger.info(
                            "Initializing redaction engine",
                            extra={"policy_path": str(policy_path)},
                        )

                        if policy_path is None:
                            logger.warning("No redaction policy configured")
                            cls._instance = RedactionEngine.empty()
                        else:
                            cls._instance = RedactionEngine.from_file(policy_path)

                        logger.info("Redaction engine initialized successfully")

                    except Exception as e:
                        logger.error(
                            "Failed to initialize redaction engine", exc_info=True
                        )
                        if isinstance(e, (InitializationError, PolicyLoadError)):
                            raise
                        raise InitializationError(
                            "Redaction engine initialization failed"
                        ) from e

        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drops the shared engine so the next call reloads the policy."""
        with cls._lock:
            cls._instance = None


def redact_message(message: str) -> str:
    """Main entry point for redacting one log message.

    Args:
        message: Log message on the emitting thread

    Returns:
        The (potentially) redacted message
    """
    return RedactionService.get_instance().redact(message)
