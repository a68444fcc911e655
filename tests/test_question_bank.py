# tests/test_question_bank.py
import pytest
from src.application.question_bank import (
    DEFAULT_QUESTIONS,
    Category,
    filter_questions,
)
from src.core.exceptions import EmptyQuestionSetError, InvalidCategoryError

def test_category_keeps_corpus_order(corpus):
    selected = filter_questions(corpus, Category.TECHNICAL)
    assert [q.id for q in selected] == ["q2", "q4"]

def test_category_accepts_string_value(corpus):
    selected = filter_questions(corpus, "general")
    assert [q.id for q in selected] == ["q1", "q3"]

def test_no_category_takes_fixed_prefix(corpus):
    assert [q.id for q in filter_questions(corpus)] == ["q1", "q2", "q3"]
    assert [q.id for q in filter_questions(corpus, sample_size=2)] == ["q1", "q2"]

def test_prefix_larger_than_corpus(corpus):
    assert len(filter_questions(corpus, sample_size=10)) == len(corpus)

def test_category_without_matches_fails_fast(corpus):
    with pytest.raises(EmptyQuestionSetError, match="soft-skills"):
        filter_questions(corpus, Category.SOFT_SKILLS)

def test_empty_corpus_fails_fast():
    with pytest.raises(EmptyQuestionSetError):
        filter_questions(())

def test_unknown_category_rejected(corpus):
    with pytest.raises(InvalidCategoryError):
        filter_questions(corpus, "leadership")

def test_default_bank_covers_every_category():
    ids = [q.id for q in DEFAULT_QUESTIONS]
    assert len(ids) == len(set(ids))
    for category in Category:
        assert filter_questions(DEFAULT_QUESTIONS, category)
