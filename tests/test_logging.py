import logging

from app.config.settings import settings
from app.core.logging import setup_logging


def test_setup_logging_configures_root_logger(capsys):
    root = logging.getLogger()
    saved_level, saved_handlers = root.level, root.handlers[:]

    try:
        setup_logging("info")

        assert root.level == logging.INFO
        assert len(root.handlers) == 1
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING

        output = capsys.readouterr().out
        assert f"{settings.app_name} v{settings.version}" in output
    finally:
        root.handlers = saved_handlers
        root.setLevel(saved_level)
