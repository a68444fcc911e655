from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple

import structlog

from ..core.exceptions import (
    EmptyQuestionSetError,
    InvalidTransitionError,
    SessionClosedError,
)
from ..core.interfaces import ScoringPolicy, Ticker
from .question_bank import DEFAULT_SAMPLE_SIZE, Category, Question, filter_questions
from .scoring import RandomScoringPolicy, safe_score
from .timer import NullTicker, format_elapsed, progress_percent

logger = structlog.get_logger(__name__)

CompleteCallback = Callable[[int, Tuple["Answer", ...]], None]
CancelCallback = Callable[[], None]


class SessionState(str, Enum):
    PRESENTING = "presenting"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    CLOSED = "closed"


@dataclass(frozen=True)
class Answer:
    question_id: str
    answer_text: str


@dataclass(frozen=True)
class SessionSnapshot:
    state: SessionState
    current_index: int
    total_questions: int
    question: Question
    draft_answer_text: str
    is_recording: bool
    elapsed_seconds: int
    elapsed_display: str
    progress_percent: int
    answered_count: int
    remaining_count: int
    answers: Tuple[Answer, ...]


class InterviewSession:
    """
    One practice attempt over a fixed sequence of questions.

    The session presents questions in order, collects non-blank answers and
    reports its outcome exactly once, through `on_complete(score, answers)`
    after the last question or `on_cancel()` when abandoned. The ticker is
    started on construction and stopped on every exit path, so no tick can
    reach a finished session.
    """

    def __init__(self,
                 questions: Sequence[Question],
                 on_complete: CompleteCallback,
                 on_cancel: CancelCallback,
                 scoring_policy: Optional[ScoringPolicy] = None,
                 ticker: Optional[Ticker] = None,
                 fallback_score: int = 50):
        if not questions:
            raise EmptyQuestionSetError("Cannot start an interview session without questions")

        self.questions: Tuple[Question, ...] = tuple(questions)
        self.current_index = 0
        self.draft_answer_text = ""
        self.is_recording = False
        self.elapsed_seconds = 0
        self.state = SessionState.PRESENTING
        self.score: Optional[int] = None

        self._answers: List[Answer] = []
        self._on_complete = on_complete
        self._on_cancel = on_cancel
        self._scoring_policy = scoring_policy or RandomScoringPolicy()
        self._fallback_score = fallback_score
        self._progress = progress_percent(0, len(self.questions))

        self._ticker = ticker or NullTicker()
        self._ticker.start(self.tick)
        logger.info("session_started", total_questions=len(self.questions))

    @classmethod
    def from_corpus(cls,
                    corpus: Sequence[Question],
                    on_complete: CompleteCallback,
                    on_cancel: CancelCallback,
                    category: Category | str | None = None,
                    sample_size: int = DEFAULT_SAMPLE_SIZE,
                    **kwargs) -> "InterviewSession":
        questions = filter_questions(corpus, category, sample_size)
        return cls(questions, on_complete, on_cancel, **kwargs)

    def __enter__(self) -> "InterviewSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def answers(self) -> Tuple[Answer, ...]:
        return tuple(self._answers)

    @property
    def current_question(self) -> Question:
        return self.questions[self.current_index]

    @property
    def is_last_question(self) -> bool:
        return self.current_index == len(self.questions) - 1

    @property
    def is_active(self) -> bool:
        return self.state == SessionState.PRESENTING

    @property
    def progress_percent(self) -> int:
        return self._progress

    @property
    def elapsed_display(self) -> str:
        return format_elapsed(self.elapsed_seconds)

    @property
    def timer_running(self) -> bool:
        return self._ticker.running

    def edit_draft(self, text: str) -> None:
        self._ensure_active()
        self.draft_answer_text = text

    def clear_draft(self) -> None:
        self._ensure_active()
        self.draft_answer_text = ""

    def toggle_recording(self) -> bool:
        self._ensure_active()
        self.is_recording = not self.is_recording
        return self.is_recording

    def tick(self) -> None:
        self._ensure_active()
        self.elapsed_seconds += 1

    def advance(self) -> bool:
        """
        Commit the draft and move on, completing the session after the last
        question. A blank draft is rejected and leaves the session untouched.
        """
        self._ensure_active()
        if not self.draft_answer_text.strip():
            logger.debug("advance_rejected_blank_draft", index=self.current_index)
            return False

        question = self.current_question
        self._answers.append(Answer(question_id=question.id,
                                    answer_text=self.draft_answer_text))
        logger.info("answer_recorded",
                    question_id=question.id,
                    answer_length=len(self.draft_answer_text))

        if self.is_last_question:
            self._complete()
        else:
            self._move_next()
        return True

    def skip(self) -> None:
        self._ensure_active()
        if self.is_last_question:
            raise InvalidTransitionError(
                "The last question cannot be skipped; submit an answer to finish"
            )
        logger.info("question_skipped", question_id=self.current_question.id)
        self._move_next()

    def cancel(self) -> None:
        self._ensure_active()
        self.state = SessionState.CANCELLED
        self.draft_answer_text = ""
        self._ticker.stop()
        logger.info("session_cancelled",
                    index=self.current_index,
                    answered=len(self._answers),
                    elapsed_seconds=self.elapsed_seconds)
        self._on_cancel()

    def close(self) -> None:
        """
        Tear the session down for its hosting view: stop the clock and refuse
        further actions. No outcome is reported. Safe to call more than once.
        """
        self._ticker.stop()
        if self.state == SessionState.PRESENTING:
            self.state = SessionState.CLOSED
            self.draft_answer_text = ""
            logger.info("session_closed",
                        index=self.current_index,
                        answered=len(self._answers))

    def snapshot(self) -> SessionSnapshot:
        answers = self.answers
        return SessionSnapshot(
            state=self.state,
            current_index=self.current_index,
            total_questions=len(self.questions),
            question=self.current_question,
            draft_answer_text=self.draft_answer_text,
            is_recording=self.is_recording,
            elapsed_seconds=self.elapsed_seconds,
            elapsed_display=self.elapsed_display,
            progress_percent=self._progress,
            answered_count=len(answers),
            remaining_count=len(self.questions) - len(answers),
            answers=answers,
        )

    def _move_next(self) -> None:
        self.current_index += 1
        self.draft_answer_text = ""
        self._progress = progress_percent(self.current_index, len(self.questions))

    def _complete(self) -> None:
        self.state = SessionState.COMPLETED
        self.draft_answer_text = ""
        self._ticker.stop()
        answers = self.answers
        self.score = safe_score(self._scoring_policy,
                                self.questions,
                                answers,
                                fallback=self._fallback_score)
        logger.info("session_completed",
                    score=self.score,
                    answered=len(answers),
                    elapsed_seconds=self.elapsed_seconds)
        self._on_complete(self.score, answers)

    def _ensure_active(self) -> None:
        if self.state != SessionState.PRESENTING:
            raise SessionClosedError(f"Interview session is already {self.state.value}")
