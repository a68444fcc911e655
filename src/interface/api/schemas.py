from typing import List, Optional

from pydantic import BaseModel, Field

from src.application.interview_session import Answer, SessionSnapshot, SessionState
from src.application.question_bank import Category, Difficulty, Question
from src.managers.interview import SessionOutcome


class QuestionView(BaseModel):
    id: str
    text: str
    category: Category
    difficulty: Difficulty

    @classmethod
    def from_question(cls, question: Question) -> "QuestionView":
        return cls(id=question.id,
                   text=question.text,
                   category=question.category,
                   difficulty=question.difficulty)


class AnswerView(BaseModel):
    question_id: str
    answer_text: str

    @classmethod
    def from_answer(cls, answer: Answer) -> "AnswerView":
        return cls(question_id=answer.question_id, answer_text=answer.answer_text)


class SessionView(BaseModel):
    current_index: int
    total_questions: int
    question: QuestionView
    draft_answer_text: str
    is_recording: bool
    elapsed_seconds: int
    elapsed_display: str
    progress_percent: int
    answered_count: int
    remaining_count: int
    answers: List[AnswerView]

    @classmethod
    def from_snapshot(cls, snapshot: SessionSnapshot) -> "SessionView":
        return cls(
            current_index=snapshot.current_index,
            total_questions=snapshot.total_questions,
            question=QuestionView.from_question(snapshot.question),
            draft_answer_text=snapshot.draft_answer_text,
            is_recording=snapshot.is_recording,
            elapsed_seconds=snapshot.elapsed_seconds,
            elapsed_display=snapshot.elapsed_display,
            progress_percent=snapshot.progress_percent,
            answered_count=snapshot.answered_count,
            remaining_count=snapshot.remaining_count,
            answers=[AnswerView.from_answer(a) for a in snapshot.answers],
        )


class OutcomeView(BaseModel):
    score: Optional[int] = None
    answers: List[AnswerView]
    elapsed_seconds: int
    user_id: Optional[str] = None

    @classmethod
    def from_outcome(cls, outcome: SessionOutcome) -> "OutcomeView":
        return cls(score=outcome.score,
                   answers=[AnswerView.from_answer(a) for a in outcome.answers],
                   elapsed_seconds=outcome.elapsed_seconds,
                   user_id=outcome.user_id)


class SessionResponse(BaseModel):
    session_id: str
    state: SessionState
    accepted: bool = True
    session: Optional[SessionView] = None
    outcome: Optional[OutcomeView] = None


class CreateSessionRequest(BaseModel):
    category: Optional[Category] = None
    user_id: Optional[str] = None


class DraftRequest(BaseModel):
    text: str = Field(default="", max_length=20000)


class AdvanceRequest(BaseModel):
    text: Optional[str] = Field(default=None, max_length=20000)
