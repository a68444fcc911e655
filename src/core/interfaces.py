from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable, Sequence

if TYPE_CHECKING:
    from ..application.interview_session import Answer
    from ..application.question_bank import Question

class ScoringPolicy(ABC):
    @abstractmethod
    def score(self, questions: Sequence["Question"], answers: Sequence["Answer"]) -> int:
        """Compute a final score in [0, 100] from the answer transcript."""
        pass

class Ticker(ABC):
    @abstractmethod
    def start(self, callback: Callable[[], None]) -> None:
        """Begin calling `callback` once per interval."""
        pass

    @abstractmethod
    def stop(self) -> None:
        """Stop scheduling further ticks. Safe to call more than once."""
        pass

    @property
    @abstractmethod
    def running(self) -> bool:
        pass

class SessionManager(ABC):
    @abstractmethod
    def create_session(self, category=None, user_id: str | None = None):
        """Create a new interview session and return (session_id, session)."""
        pass

    @abstractmethod
    def get_session(self, session_id: str):
        """Return the live session for `session_id`."""
        pass

    @abstractmethod
    def get_outcome(self, session_id: str):
        """Return the terminal outcome recorded for `session_id`, if any."""
        pass
