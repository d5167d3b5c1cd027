from dependency_injector import containers, providers
from sqlalchemy.orm import Session

from studycompanion.repositories import (
    FlashcardRepository,
    QuizRepository,
    TaskRepository,
    TimeEntryRepository,
)
from studycompanion.services import FlashcardService, QuizService, TaskService, TimeEntryService


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    # Declare db as a dependency that will be provided at runtime
    db = providers.Dependency(instance_of=Session)

    # Repositories
    flashcard_repository = providers.Factory(FlashcardRepository, db=db)
    quiz_repository = providers.Factory(QuizRepository, db=db)
    task_repository = providers.Factory(TaskRepository, db=db)
    time_entry_repository = providers.Factory(TimeEntryRepository, db=db)

    # Services
    flashcard_service = providers.Factory(
        FlashcardService,
        db=db,
        flashcard_repository=flashcard_repository,
    )
    quiz_service = providers.Factory(
        QuizService,
        db=db,
        quiz_repository=quiz_repository,
    )
    task_service = providers.Factory(
        TaskService,
        db=db,
        task_repository=task_repository,
    )
    time_entry_service = providers.Factory(
        TimeEntryService,
        db=db,
        time_entry_repository=time_entry_repository,
    )


container = Container()
