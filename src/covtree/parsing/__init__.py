"""Readers turning coverage tracefiles into raw records."""

from covtree.parsing.lcov import parse_lcov_file, parse_lcov_string

__all__ = ["parse_lcov_file", "parse_lcov_string"]
