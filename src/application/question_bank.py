from dataclasses import dataclass
from enum import Enum
from typing import Sequence, Tuple

from ..core.exceptions import EmptyQuestionSetError, InvalidCategoryError

DEFAULT_SAMPLE_SIZE = 3

class Category(str, Enum):
    SOFT_SKILLS = "soft-skills"
    TECHNICAL = "technical"
    GENERAL = "general"

class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

@dataclass(frozen=True)
class Question:
    id: str
    text: str
    category: Category
    difficulty: Difficulty

DEFAULT_QUESTIONS: Tuple[Question, ...] = (
    Question("1", "Tell me about yourself and your professional background.",
             Category.GENERAL, Difficulty.EASY),
    Question("2", "Describe a time you had to resolve a conflict within your team.",
             Category.SOFT_SKILLS, Difficulty.MEDIUM),
    Question("3", "Explain the difference between a process and a thread.",
             Category.TECHNICAL, Difficulty.MEDIUM),
    Question("4", "Why do you want to work for our company?",
             Category.GENERAL, Difficulty.EASY),
    Question("5", "How do you prioritize work when every task looks urgent?",
             Category.SOFT_SKILLS, Difficulty.MEDIUM),
    Question("6", "How would you design a URL shortening service?",
             Category.TECHNICAL, Difficulty.HARD),
    Question("7", "Where do you see yourself in five years?",
             Category.GENERAL, Difficulty.MEDIUM),
    Question("8", "Tell me about a piece of feedback that changed how you work.",
             Category.SOFT_SKILLS, Difficulty.HARD),
    Question("9", "What happens when you type a URL into the browser and press enter?",
             Category.TECHNICAL, Difficulty.HARD),
)

def parse_category(value: Category | str | None) -> Category | None:
    if value is None or isinstance(value, Category):
        return value
    try:
        return Category(value)
    except ValueError:
        allowed = ", ".join(c.value for c in Category)
        raise InvalidCategoryError(
            f"Unknown question category '{value}' (expected one of: {allowed})"
        ) from None

def filter_questions(
    corpus: Sequence[Question],
    category: Category | str | None = None,
    sample_size: int = DEFAULT_SAMPLE_SIZE,
) -> Tuple[Question, ...]:
    """
    Select the question sequence for one session.

    With a category, every matching question is returned in corpus order.
    Without one, the first `sample_size` questions of the corpus are used.
    Raises EmptyQuestionSetError when nothing is left to ask.
    """
    category = parse_category(category)
    if category is not None:
        selected = tuple(q for q in corpus if q.category == category)
    else:
        selected = tuple(corpus[:max(sample_size, 0)])

    if not selected:
        if category is not None:
            raise EmptyQuestionSetError(
                f"No questions available for category '{category.value}'"
            )
        raise EmptyQuestionSetError(
            f"No questions selected (bank size {len(corpus)}, sample size {sample_size})"
        )
    return selected
