import logging

from tracker.logging_setup import setup_logging


def test_setup_logging_is_idempotent():
    root = logging.getLogger()
    setup_logging("DEBUG")
    setup_logging("INFO")
    named = [h for h in root.handlers if h.get_name() == "tracker-console"]
    assert len(named) == 1
    assert root.level == logging.INFO
    root.removeHandler(named[0])
