from fastapi import status

# Starlette renamed the 422 constant; the old name warns on access
HTTP_422 = getattr(status, "HTTP_422_UNPROCESSABLE_CONTENT", 422)


class InterviewSimulatorError(Exception):
    """Base class for errors raised by the interview simulator."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class EmptyQuestionSetError(InterviewSimulatorError):
    """No questions left after filtering, so a session cannot start."""

    status_code = HTTP_422


class InvalidCategoryError(InterviewSimulatorError, ValueError):
    status_code = HTTP_422


class InvalidTransitionError(InterviewSimulatorError):
    """The requested action is not allowed from the current question."""

    status_code = status.HTTP_409_CONFLICT


class SessionClosedError(InterviewSimulatorError):
    """The session already completed or was cancelled."""

    status_code = status.HTTP_409_CONFLICT


class SessionNotFoundError(InterviewSimulatorError):
    status_code = status.HTTP_404_NOT_FOUND
