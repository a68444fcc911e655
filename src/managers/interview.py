import uuid
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Sequence, Tuple

import structlog

from ..application.interview_session import Answer, InterviewSession, SessionState
from ..application.question_bank import DEFAULT_QUESTIONS, Category, Question, filter_questions
from ..application.scoring import get_scoring_policy
from ..application.timer import AsyncioTicker, NullTicker
from ..core.config import Settings, get_settings
from ..core.exceptions import SessionClosedError, SessionNotFoundError
from ..core.interfaces import ScoringPolicy, SessionManager, Ticker

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class SessionOutcome:
    session_id: str
    state: SessionState
    score: Optional[int]
    answers: Tuple[Answer, ...]
    elapsed_seconds: int
    user_id: Optional[str] = None


class InterviewManager(SessionManager):
    """
    Hosts interview sessions in memory, one per session id.

    The manager is the session's hosting view: it receives the terminal
    callbacks, keeps the outcome and drops the finished session.
    """

    def __init__(self,
                 settings: Optional[Settings] = None,
                 corpus: Optional[Sequence[Question]] = None,
                 scoring_policy: Optional[ScoringPolicy] = None,
                 ticker_factory: Optional[Callable[[], Ticker]] = None):
        self.settings = settings or get_settings()
        self.corpus: Tuple[Question, ...] = tuple(corpus if corpus is not None else DEFAULT_QUESTIONS)
        self.scoring_policy = scoring_policy or get_scoring_policy(self.settings)
        self.ticker_factory = ticker_factory or self._default_ticker_factory

        self._sessions: Dict[str, InterviewSession] = {}
        # Oldest outcomes are evicted past MAX_STORED_OUTCOMES
        self._outcomes: "OrderedDict[str, SessionOutcome]" = OrderedDict()

    def _default_ticker_factory(self) -> Ticker:
        if self.settings.TIMER_ENABLED:
            return AsyncioTicker(self.settings.TICK_INTERVAL_SECONDS)
        return NullTicker()

    @property
    def active_session_count(self) -> int:
        return len(self._sessions)

    def list_questions(self, category: Category | str | None = None) -> Tuple[Question, ...]:
        return filter_questions(self.corpus, category, self.settings.QUESTION_SAMPLE_SIZE)

    def create_session(self,
                       category: Category | str | None = None,
                       user_id: Optional[str] = None) -> Tuple[str, InterviewSession]:
        session_id = str(uuid.uuid4())
        log = logger.bind(session_id=session_id)

        def on_complete(score: int, answers: Tuple[Answer, ...]) -> None:
            self._finish(session_id, SessionState.COMPLETED, score, answers, user_id)

        def on_cancel() -> None:
            session = self._sessions.get(session_id)
            answers = session.answers if session is not None else ()
            self._finish(session_id, SessionState.CANCELLED, None, answers, user_id)

        session = InterviewSession.from_corpus(
            self.corpus,
            on_complete,
            on_cancel,
            category=category,
            sample_size=self.settings.QUESTION_SAMPLE_SIZE,
            scoring_policy=self.scoring_policy,
            ticker=self.ticker_factory(),
            fallback_score=self.settings.FALLBACK_SCORE,
        )
        self._sessions[session_id] = session
        log.info("session_created",
                 category=getattr(category, "value", category),
                 user_id=user_id,
                 total_questions=len(session.questions))
        return session_id, session

    def get_session(self, session_id: str) -> InterviewSession:
        session = self._sessions.get(session_id)
        if session is None and session_id in self._outcomes:
            state = self._outcomes[session_id].state
            raise SessionClosedError(f"Interview session '{session_id}' is already {state.value}")
        if session is None:
            raise SessionNotFoundError(f"Interview session '{session_id}' not found")
        return session

    def get_outcome(self, session_id: str) -> Optional[SessionOutcome]:
        return self._outcomes.get(session_id)

    def edit_draft(self, session_id: str, text: str) -> InterviewSession:
        session = self.get_session(session_id)
        session.edit_draft(text)
        return session

    def clear_draft(self, session_id: str) -> InterviewSession:
        session = self.get_session(session_id)
        session.clear_draft()
        return session

    def toggle_recording(self, session_id: str) -> InterviewSession:
        session = self.get_session(session_id)
        session.toggle_recording()
        return session

    def advance(self, session_id: str, text: Optional[str] = None) -> Tuple[InterviewSession, bool]:
        session = self.get_session(session_id)
        if text is not None:
            session.edit_draft(text)
        return session, session.advance()

    def skip(self, session_id: str) -> InterviewSession:
        session = self.get_session(session_id)
        session.skip()
        return session

    def cancel(self, session_id: str) -> InterviewSession:
        session = self.get_session(session_id)
        session.cancel()
        return session

    def close_all(self) -> None:
        """Stop the clocks of every live session and forget them."""
        for session_id, session in list(self._sessions.items()):
            session.close()
            logger.info("session_closed", session_id=session_id)
        self._sessions.clear()

    def _finish(self,
                session_id: str,
                state: SessionState,
                score: Optional[int],
                answers: Tuple[Answer, ...],
                user_id: Optional[str]) -> None:
        session = self._sessions.pop(session_id, None)
        elapsed = session.elapsed_seconds if session is not None else 0
        self._outcomes[session_id] = SessionOutcome(
            session_id=session_id,
            state=state,
            score=score,
            answers=answers,
            elapsed_seconds=elapsed,
            user_id=user_id,
        )
        while len(self._outcomes) > max(self.settings.MAX_STORED_OUTCOMES, 1):
            evicted, _ = self._outcomes.popitem(last=False)
            logger.debug("session_outcome_evicted", session_id=evicted)
        logger.info("session_finished",
                    session_id=session_id,
                    state=state.value,
                    score=score,
                    answered=len(answers))
