"""Quick Analyzer - project health report for JavaScript/TypeScript checkouts."""

__version__ = "1.0.0"
