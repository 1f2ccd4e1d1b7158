# -*- coding: utf-8 -*-
# Copyright (c) 2025, PT. Innovasi Terbaik Bangsa and contributors
# For license information, please see license.txt

"""
Common helper functions for the payroll engine.

This module provides utility functions for consistent logging across the engine.
It can be safely imported from any context, including:
- Batch payroll runs
- Worker processes
- Tests

Usage:
    from payroll_engine.helpers import get_logger

    logger = get_logger("my_module")
    logger.info("This is an info message")
"""

import logging

LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"


def get_logger(name: str, fallback_level: int = logging.INFO) -> logging.Logger:
    """
    Get a logger namespaced under ``payroll_engine``.

    Creates a logger that will:
    1. Prefix the name with ``payroll_engine.`` when missing
    2. Attach a stream handler with the engine format if none is configured
    3. Keep propagating to the root logger so host applications can capture it

    Args:
        name: The name of the logger, typically the module name
        fallback_level: Log level used when the logger is first configured

    Returns:
        logging.Logger: A configured logger instance
    """
    if not name.startswith("payroll_engine"):
        logger_name = f"payroll_engine.{name}"
    else:
        logger_name = name

    logger = logging.getLogger(logger_name)

    if not logger.handlers:
        logger.setLevel(fallback_level)

        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger


logger = get_logger(__name__)
