"""Shared fixtures for the annodoc test suite."""

import logging
import textwrap

import pytest

from annodoc.output.formatter import SourceFormatter
from annodoc.output.markdown import MarkdownRenderer
from annodoc.parsers.annotation_parser import AnnotationParser

ANNOTATED_SOURCE = textwrap.dedent("""\
    /*
    Author: Jane Doe
    Date: 2024-03-01
    File: two_sum.go
    Problem: Find two numbers that add up to a target
    Solution: {
    Walk the slice once.
    Keep a map of seen values.
    }
    Time Complexity: O(n)
    Space Complexity: O(n)
    Note: {
    Returns nil when no pair exists.
    }
    */
    package main

    func twoSum(nums []int, target int) []int {
    \treturn nil
    }
""")


@pytest.fixture
def annotated_source() -> str:
    """Source text with a complete annotation block."""
    return ANNOTATED_SOURCE


@pytest.fixture
def parser() -> AnnotationParser:
    """Create an AnnotationParser with Go comment tokens."""
    return AnnotationParser()


@pytest.fixture
def renderer() -> MarkdownRenderer:
    """Create a renderer that embeds the body without formatting."""
    return MarkdownRenderer(formatter=SourceFormatter(None), language="go")


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Drop handlers installed by setup_logging during a test."""
    yield
    package_logger = logging.getLogger("annodoc")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
