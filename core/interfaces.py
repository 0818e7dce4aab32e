"""Abstract base classes for dependency injection."""

from abc import ABC, abstractmethod

from .models import Question


class Storage(ABC):
    """Abstract base class for statistics persistence and the mistake log."""

    @abstractmethod
    def load_statistics(self) -> dict | None:
        """Load saved statistics. Returns decoded data or None if nothing was saved."""
        pass

    @abstractmethod
    def save_statistics(self, data: dict) -> None:
        """Save statistics, replacing any previous save."""
        pass

    @abstractmethod
    def log_mistake(self, question: Question, answer: str) -> None:
        """Append a wrong answer to the mistake log. Must not raise."""
        pass
