# tests/test_manager.py
import pytest
from src.application.interview_session import Answer, SessionState
from src.application.scoring import FixedScoringPolicy
from src.application.timer import NullTicker
from src.core.config import Settings
from src.core.exceptions import (
    EmptyQuestionSetError,
    SessionClosedError,
    SessionNotFoundError,
)
from src.managers.interview import InterviewManager

@pytest.fixture
def manager(corpus):
    return InterviewManager(
        settings=Settings(TIMER_ENABLED=False),
        corpus=corpus,
        scoring_policy=FixedScoringPolicy(90),
    )

def test_create_session_uses_sample(manager):
    session_id, session = manager.create_session()
    assert manager.get_session(session_id) is session
    assert [q.id for q in session.questions] == ["q1", "q2", "q3"]
    assert manager.active_session_count == 1

def test_timer_disabled_uses_null_ticker(manager):
    assert isinstance(manager.ticker_factory(), NullTicker)

def test_complete_records_outcome_and_discards_session(manager):
    session_id, _ = manager.create_session(category="technical", user_id="user-1")
    manager.advance(session_id, "hashing")
    _, accepted = manager.advance(session_id, "token bucket")

    assert accepted
    outcome = manager.get_outcome(session_id)
    assert outcome.state == SessionState.COMPLETED
    assert outcome.score == 90
    assert outcome.answers == (Answer("q2", "hashing"), Answer("q4", "token bucket"))
    assert outcome.user_id == "user-1"
    assert manager.active_session_count == 0

    with pytest.raises(SessionClosedError):
        manager.advance(session_id, "again")

def test_cancel_keeps_partial_answers(manager):
    session_id, _ = manager.create_session()
    manager.advance(session_id, "first")
    manager.cancel(session_id)

    outcome = manager.get_outcome(session_id)
    assert outcome.state == SessionState.CANCELLED
    assert outcome.score is None
    assert outcome.answers == (Answer("q1", "first"),)
    with pytest.raises(SessionClosedError):
        manager.get_session(session_id)

def test_blank_advance_not_accepted(manager):
    session_id, session = manager.create_session()
    _, accepted = manager.advance(session_id, "   ")
    assert not accepted
    assert session.current_index == 0

def test_draft_and_recording_actions(manager):
    session_id, session = manager.create_session()
    manager.edit_draft(session_id, "hello")
    assert session.draft_answer_text == "hello"
    manager.clear_draft(session_id)
    assert session.draft_answer_text == ""
    manager.toggle_recording(session_id)
    assert session.is_recording
    manager.skip(session_id)
    assert session.current_index == 1

def test_unknown_session(manager):
    with pytest.raises(SessionNotFoundError):
        manager.get_session("missing")
    assert manager.get_outcome("missing") is None

def test_empty_category_fails_without_registering(manager):
    with pytest.raises(EmptyQuestionSetError):
        manager.create_session(category="soft-skills")
    assert manager.active_session_count == 0

def test_close_all_stops_clocks(manager):
    tickers = []

    def factory():
        ticker = NullTicker()
        tickers.append(ticker)
        return ticker

    manager.ticker_factory = factory
    manager.create_session()
    manager.create_session()
    assert all(t.running for t in tickers)

    manager.close_all()
    assert manager.active_session_count == 0
    assert not any(t.running for t in tickers)

def test_list_questions(manager):
    assert [q.id for q in manager.list_questions("general")] == ["q1", "q3"]

def test_oldest_outcomes_are_evicted(corpus):
    manager = InterviewManager(
        settings=Settings(TIMER_ENABLED=False, MAX_STORED_OUTCOMES=2),
        corpus=corpus,
        scoring_policy=FixedScoringPolicy(90),
    )
    finished = []
    for _ in range(3):
        session_id, _ = manager.create_session()
        manager.cancel(session_id)
        finished.append(session_id)

    assert manager.get_outcome(finished[0]) is None
    assert manager.get_outcome(finished[1]) is not None
    assert manager.get_outcome(finished[2]) is not None
    with pytest.raises(SessionNotFoundError):
        manager.get_session(finished[0])
