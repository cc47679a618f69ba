"""Momentum: goal and habit analysis with robustness-scored LLM parsing."""

__version__ = "1.0.0"
