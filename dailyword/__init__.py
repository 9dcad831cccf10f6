"""Daily word guessing game with a practice mode and play statistics."""

__version__ = "1.0.0"
