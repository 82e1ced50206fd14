"""covtree: hierarchical coverage reports from LCOV tracefiles."""

__version__ = "0.1.0"
