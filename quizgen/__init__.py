"""Topic quiz generator: turns a free-text topic into a validated batch of quiz questions."""

__version__ = "0.1.0"
