"""Flashcard review session: deck traversal and scoring."""

import random
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Protocol

import httpx
import structlog

from studycompanion import schemas
from studycompanion.client.notifications import Notifier
from studycompanion.domain.subject import Subject
from studycompanion.utils import percentage

logger = structlog.get_logger(__name__)


class FlashcardApi(Protocol):
    async def get_flashcard_counts(self) -> dict[Subject, int]: ...

    async def get_flashcards_by_subject(self, subject: str) -> list[schemas.Flashcard]: ...


class FlashcardPhase(StrEnum):
    SUBJECT_SELECT = "subject-select"
    LOADING = "loading"
    SESSION = "session"
    SCORING = "scoring"
    COMPLETED = "completed"


@dataclass
class FlashcardSessionState:
    """Everything the flashcard page renders from."""

    phase: FlashcardPhase = FlashcardPhase.SUBJECT_SELECT
    subject: Subject | None = None
    subject_counts: dict[Subject, int] = field(default_factory=dict)
    # Full shuffled deck for the current subject
    cards: list[schemas.Flashcard] = field(default_factory=list)
    remaining: list[schemas.Flashcard] = field(default_factory=list)
    index: int = 0
    show_answer: bool = False
    correct: int = 0
    incorrect: int = 0
    wrong_answers: list[schemas.Flashcard] = field(default_factory=list)
    review: bool = False
    error: str | None = None

    @property
    def current_card(self) -> schemas.Flashcard | None:
        if self.phase != FlashcardPhase.SESSION or not self.remaining:
            return None
        return self.remaining[self.index]

    @property
    def score_percentage(self) -> int:
        """Share of answers marked correct, 0 before any answer."""
        return percentage(self.correct, self.correct + self.incorrect)


class FlashcardSessionController:
    """
    Drives a flashcard review session.

    The state is only changed through the transition methods below. Each
    deck fetch is tagged with a generation number; a response arriving after
    a newer fetch (or a reset) was started is dropped.
    """

    def __init__(
        self,
        api: FlashcardApi,
        rng: random.Random | None = None,
        notifier: Notifier | None = None,
    ) -> None:
        self.api = api
        self.rng = rng or random.Random()
        self.notifier = notifier or Notifier()
        self.state = FlashcardSessionState()
        self._generation = 0

    async def load_subject_counts(self) -> None:
        """Fetch how many cards each subject has for the selection view."""
        try:
            counts = await self.api.get_flashcard_counts()
        except httpx.HTTPError as e:
            self._fail("Failed to load subjects", e)
            return
        self.state.subject_counts = counts

    async def select_subject(self, subject: Subject) -> None:
        """Load the subject's cards and start a session on a shuffled deck."""
        generation = self._next_generation()
        previous_phase = self.state.phase
        self.state.phase = FlashcardPhase.LOADING
        self.state.error = None

        try:
            cards = await self.api.get_flashcards_by_subject(subject.value)
        except httpx.HTTPError as e:
            if generation == self._generation:
                self.state.phase = previous_phase
                self._fail("Failed to load flashcards", e)
            return

        if generation != self._generation:
            logger.debug("stale_fetch_discarded", fetch="flashcards", subject=subject.value)
            return

        if not cards:
            self.state.phase = FlashcardPhase.SUBJECT_SELECT
            self.state.error = f"No flashcards found for {subject.value.lower()}"
            self.notifier.error("No flashcards", self.state.error)
            return

        deck = list(cards)
        self.rng.shuffle(deck)
        self.state = FlashcardSessionState(
            phase=FlashcardPhase.SESSION,
            subject=subject,
            subject_counts=self.state.subject_counts,
            cards=deck,
            remaining=list(deck),
        )
        logger.info("flashcard_session_started", subject=subject.value, card_count=len(deck))

    def flip(self) -> None:
        if self.state.phase == FlashcardPhase.SESSION:
            self.state.show_answer = not self.state.show_answer

    def mark_correct(self) -> None:
        if self.state.current_card is None:
            return
        self.state.correct += 1
        self._remove_current()

    def mark_incorrect(self) -> None:
        card = self.state.current_card
        if card is None:
            return
        self.state.incorrect += 1
        self.state.wrong_answers.append(card)
        self._remove_current()

    def next_card(self) -> None:
        """Move to the next remaining card, wrapping around; counters are untouched."""
        if self.state.current_card is None:
            return
        self.state.index = (self.state.index + 1) % len(self.state.remaining)
        self.state.show_answer = False

    def shuffle(self) -> None:
        if self.state.current_card is None:
            return
        self.rng.shuffle(self.state.remaining)
        self.state.index = 0
        self.state.show_answer = False

    def review_wrong_answers(self) -> None:
        """
        Start a pass over the cards answered incorrectly.

        Only valid from the scoring view. Correct and incorrect counters keep
        accumulating across the review pass.
        """
        if self.state.phase != FlashcardPhase.SCORING or not self.state.wrong_answers:
            return
        self.state.remaining = self.state.wrong_answers
        self.state.wrong_answers = []
        self.state.index = 0
        self.state.show_answer = False
        self.state.review = True
        self.state.phase = FlashcardPhase.SESSION

    async def retry_same_subject(self) -> None:
        """Refetch the current subject and start over with fresh counters."""
        if self.state.subject is None:
            return
        await self.select_subject(self.state.subject)

    def reset(self) -> None:
        """Return to subject selection, discarding any fetch still in flight."""
        self._next_generation()
        self.state = FlashcardSessionState(subject_counts=self.state.subject_counts)

    def _remove_current(self) -> None:
        state = self.state
        state.remaining.pop(state.index)
        state.show_answer = False

        if state.remaining:
            state.index = min(state.index, len(state.remaining) - 1)
            return

        state.index = 0
        if state.wrong_answers:
            state.phase = FlashcardPhase.SCORING
        else:
            # Every card answered correctly: refill for the completed view
            state.phase = FlashcardPhase.COMPLETED
            state.remaining = list(state.cards)
        logger.info(
            "flashcard_pass_finished",
            subject=state.subject.value if state.subject else None,
            correct=state.correct,
            incorrect=state.incorrect,
            review=state.review,
        )

    def _next_generation(self) -> int:
        self._generation += 1
        return self._generation

    def _fail(self, title: str, error: httpx.HTTPError) -> None:
        logger.warning("flashcard_fetch_failed", error=str(error))
        self.state.error = title
        self.notifier.error(title, "Please try again later.")
