"""Pytest configuration and fixtures."""

import os

# Must be set before the application (and its cached settings) is imported
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "test")

from collections.abc import Generator  # noqa: E402
from datetime import UTC, datetime  # noqa: E402
from typing import Any  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402

from studycompanion import models  # noqa: E402
from studycompanion.database import Base, create_database_engine, get_db  # noqa: E402
from studycompanion.domain.subject import Subject  # noqa: E402
from studycompanion.main import app  # noqa: E402

# Test database URL (in-memory SQLite)
TEST_DATABASE_URL = "sqlite:///:memory:"

# Create test engine; foreign keys are enforced so cascades behave as in production
test_engine = create_database_engine(TEST_DATABASE_URL)

# Create test session factory
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """Create a fresh database session for each test."""
    # Create all tables
    Base.metadata.create_all(bind=test_engine)

    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        # Drop all tables after test
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def client(db_session: Session) -> Generator[TestClient, Any, None]:
    """Create a test client with database session."""

    def override_get_db() -> Generator[Session, None, None]:
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def create_flashcard(
    db_session: Session,
    question: str = "What is Newton's second law?",
    answer: str = "F = ma",
    subject: Subject = Subject.PHYSICS,
) -> models.Flashcard:
    flashcard = models.Flashcard(question=question, answer=answer, subject=subject)
    db_session.add(flashcard)
    db_session.commit()
    db_session.refresh(flashcard)
    return flashcard


def create_quiz(
    db_session: Session,
    subject: Subject = Subject.CHEMISTRY,
    questions: list[tuple[str, int, list[tuple[str, bool]]]] | None = None,
) -> models.Quiz:
    """Create a quiz from (content, points, [(option, is_correct), ...]) tuples."""
    if questions is None:
        questions = [
            ("Symbol for sodium?", 2, [("Na", True), ("So", False), ("S", False)]),
            ("pH of pure water?", 1, [("7", True), ("1", False)]),
        ]
    quiz = models.Quiz(
        subject=subject,
        questions=[
            models.Question(
                content=content,
                points=points,
                options=[
                    models.Option(content=option, is_correct=is_correct)
                    for option, is_correct in options
                ],
            )
            for content, points, options in questions
        ],
    )
    db_session.add(quiz)
    db_session.commit()
    db_session.refresh(quiz)
    return quiz


def create_task(
    db_session: Session,
    title: str = "Read chapter 3",
    subject: Subject = Subject.MATHEMATICS,
    description: str | None = None,
    completed: bool = False,
) -> models.Task:
    task = models.Task(title=title, subject=subject, description=description, completed=completed)
    db_session.add(task)
    db_session.commit()
    db_session.refresh(task)
    return task


def create_time_entry(
    db_session: Session,
    task: models.Task,
    start_time: datetime,
    end_time: datetime | None = None,
) -> models.TimeEntry:
    entry = models.TimeEntry(task_id=task.id, start_time=start_time, end_time=end_time)
    db_session.add(entry)
    db_session.commit()
    db_session.refresh(entry)
    return entry


@pytest.fixture
def test_flashcard(db_session: Session) -> models.Flashcard:
    """Create a physics flashcard."""
    return create_flashcard(db_session)


@pytest.fixture
def test_quiz(db_session: Session) -> models.Quiz:
    """Create a chemistry quiz with two questions."""
    return create_quiz(db_session)


@pytest.fixture
def test_task(db_session: Session) -> models.Task:
    """Create an open mathematics task."""
    return create_task(db_session)


@pytest.fixture
def test_time_entry(db_session: Session, test_task: models.Task) -> models.TimeEntry:
    """Create a closed one-hour time entry on test_task."""
    return create_time_entry(
        db_session,
        test_task,
        start_time=datetime(2026, 3, 2, 9, 0, tzinfo=UTC),
        end_time=datetime(2026, 3, 2, 10, 0, tzinfo=UTC),
    )


@pytest.fixture
def make_flashcard(db_session: Session) -> Any:
    """Factory for flashcards bound to the test session."""
    return lambda **kwargs: create_flashcard(db_session, **kwargs)


@pytest.fixture
def make_quiz(db_session: Session) -> Any:
    """Factory for quizzes bound to the test session."""
    return lambda **kwargs: create_quiz(db_session, **kwargs)


@pytest.fixture
def make_task(db_session: Session) -> Any:
    """Factory for tasks bound to the test session."""
    return lambda **kwargs: create_task(db_session, **kwargs)


@pytest.fixture
def make_time_entry(db_session: Session) -> Any:
    """Factory for time entries bound to the test session."""
    return lambda task, **kwargs: create_time_entry(db_session, task, **kwargs)
