import logging

from payroll_engine.exceptions import InvalidInputError, PayrollError, UnknownCategoryError
from payroll_engine.helpers import LOG_FORMAT, get_logger


def test_get_logger_namespaces_name():
    logger = get_logger("batch")
    assert logger.name == "payroll_engine.batch"
    assert get_logger("payroll_engine.batch") is logger


def test_get_logger_attaches_single_handler():
    logger = get_logger("handler_check")
    get_logger("handler_check")

    assert len(logger.handlers) == 1
    assert logger.handlers[0].formatter._fmt == LOG_FORMAT
    assert logger.propagate


def test_logger_propagates_to_caplog(caplog):
    with caplog.at_level(logging.WARNING, logger="payroll_engine"):
        get_logger("propagation").warning("PTKP fallback")
    assert "PTKP fallback" in caplog.text


def test_exception_hierarchy():
    assert issubclass(InvalidInputError, ValueError)
    assert issubclass(InvalidInputError, PayrollError)
    assert issubclass(UnknownCategoryError, LookupError)
    assert str(UnknownCategoryError("X/1")) == "Unknown PTKP status 'X/1'"
