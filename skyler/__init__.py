"""Parser combinators with backtracking input, error reporting and syntax trees."""

__version__ = "0.1.0"