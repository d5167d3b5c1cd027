"""Study companion backend: flashcards, quizzes and task time tracking."""
