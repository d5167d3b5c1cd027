"""Tests for the flashcard session controller."""

import asyncio
import random

import pytest
from fakes import FakeApi, make_card

from studycompanion.client import FlashcardPhase, FlashcardSessionController
from studycompanion.client.notifications import NotificationVariant
from studycompanion.domain.subject import Subject


def _controller(api: FakeApi) -> FlashcardSessionController:
    return FlashcardSessionController(api, rng=random.Random(7))


def _with_cards(api: FakeApi, count: int, subject: Subject = Subject.PHYSICS) -> None:
    api.cards[subject] = [make_card(card_id, subject) for card_id in range(1, count + 1)]


class TestSelectSubject:
    @pytest.mark.asyncio
    async def test_starts_session_on_shuffled_deck(self, fake_api: FakeApi) -> None:
        _with_cards(fake_api, 5)
        controller = _controller(fake_api)

        await controller.select_subject(Subject.PHYSICS)

        state = controller.state
        assert state.phase == FlashcardPhase.SESSION
        assert state.subject == Subject.PHYSICS
        assert sorted(card.id for card in state.remaining) == [1, 2, 3, 4, 5]
        assert state.remaining == state.cards
        assert (state.correct, state.incorrect, state.index) == (0, 0, 0)
        assert state.wrong_answers == []
        assert state.show_answer is False
        assert fake_api.calls == [("get_flashcards_by_subject", "PHYSICS")]

    @pytest.mark.asyncio
    async def test_empty_subject_stays_in_selection(self, fake_api: FakeApi) -> None:
        controller = _controller(fake_api)

        await controller.select_subject(Subject.CHEMISTRY)

        assert controller.state.phase == FlashcardPhase.SUBJECT_SELECT
        assert controller.state.error == "No flashcards found for chemistry"
        assert controller.notifier.last is not None
        assert controller.notifier.last.variant == NotificationVariant.DESTRUCTIVE

    @pytest.mark.asyncio
    async def test_fetch_failure_keeps_previous_state(self, fake_api: FakeApi) -> None:
        _with_cards(fake_api, 2)
        controller = _controller(fake_api)
        fake_api.failing.add("get_flashcards_by_subject")

        await controller.select_subject(Subject.PHYSICS)

        assert controller.state.phase == FlashcardPhase.SUBJECT_SELECT
        assert controller.state.error == "Failed to load flashcards"
        assert controller.state.remaining == []

    @pytest.mark.asyncio
    async def test_stale_fetch_is_discarded(self, fake_api: FakeApi) -> None:
        _with_cards(fake_api, 3, Subject.PHYSICS)
        _with_cards(fake_api, 2, Subject.CHEMISTRY)
        gate = asyncio.Event()
        fake_api.gates["PHYSICS"] = gate
        controller = _controller(fake_api)

        slow = asyncio.create_task(controller.select_subject(Subject.PHYSICS))
        await asyncio.sleep(0)
        await controller.select_subject(Subject.CHEMISTRY)
        gate.set()
        await slow

        assert controller.state.subject == Subject.CHEMISTRY
        assert {card.subject for card in controller.state.remaining} == {Subject.CHEMISTRY}

    @pytest.mark.asyncio
    async def test_load_subject_counts(self, fake_api: FakeApi) -> None:
        _with_cards(fake_api, 3, Subject.MATHEMATICS)
        controller = _controller(fake_api)

        await controller.load_subject_counts()

        assert controller.state.subject_counts == {
            Subject.PHYSICS: 0,
            Subject.CHEMISTRY: 0,
            Subject.MATHEMATICS: 3,
        }


class TestSessionTransitions:
    @pytest.mark.asyncio
    async def test_all_correct_goes_straight_to_completed(self, fake_api: FakeApi) -> None:
        _with_cards(fake_api, 3)
        controller = _controller(fake_api)
        await controller.select_subject(Subject.PHYSICS)
        deck = list(controller.state.cards)

        for _ in range(3):
            controller.mark_correct()

        state = controller.state
        assert state.phase == FlashcardPhase.COMPLETED
        assert state.correct == 3
        assert state.wrong_answers == []
        assert state.remaining == deck
        assert state.score_percentage == 100

    @pytest.mark.asyncio
    async def test_incorrect_answer_leads_to_scoring(self, fake_api: FakeApi) -> None:
        _with_cards(fake_api, 3)
        controller = _controller(fake_api)
        await controller.select_subject(Subject.PHYSICS)
        missed = controller.state.current_card

        controller.mark_incorrect()
        controller.mark_correct()
        controller.mark_correct()

        state = controller.state
        assert state.phase == FlashcardPhase.SCORING
        assert state.wrong_answers == [missed]
        assert (state.correct, state.incorrect) == (2, 1)
        assert state.score_percentage == 67

    @pytest.mark.asyncio
    async def test_review_wrong_answers_keeps_counters(self, fake_api: FakeApi) -> None:
        _with_cards(fake_api, 2)
        controller = _controller(fake_api)
        await controller.select_subject(Subject.PHYSICS)
        controller.mark_incorrect()
        controller.mark_incorrect()
        wrong = list(controller.state.wrong_answers)

        controller.review_wrong_answers()

        state = controller.state
        assert state.phase == FlashcardPhase.SESSION
        assert state.review is True
        assert state.remaining == wrong
        assert state.wrong_answers == []
        assert (state.correct, state.incorrect) == (0, 2)

        controller.mark_correct()
        controller.mark_correct()
        assert controller.state.phase == FlashcardPhase.COMPLETED
        assert (controller.state.correct, controller.state.incorrect) == (2, 2)

    @pytest.mark.asyncio
    async def test_review_only_from_scoring(self, fake_api: FakeApi) -> None:
        _with_cards(fake_api, 2)
        controller = _controller(fake_api)
        await controller.select_subject(Subject.PHYSICS)
        controller.mark_incorrect()

        controller.review_wrong_answers()

        assert controller.state.review is False
        assert len(controller.state.remaining) == 1

    @pytest.mark.asyncio
    async def test_flip_next_and_shuffle(self, fake_api: FakeApi) -> None:
        _with_cards(fake_api, 3)
        controller = _controller(fake_api)
        await controller.select_subject(Subject.PHYSICS)

        controller.flip()
        assert controller.state.show_answer is True

        controller.next_card()
        controller.next_card()
        assert controller.state.index == 2
        assert controller.state.show_answer is False
        controller.next_card()
        assert controller.state.index == 0

        controller.next_card()
        controller.shuffle()
        assert controller.state.index == 0
        assert sorted(card.id for card in controller.state.remaining) == [1, 2, 3]
        assert (controller.state.correct, controller.state.incorrect) == (0, 0)

    @pytest.mark.asyncio
    async def test_removing_last_position_clamps_index(self, fake_api: FakeApi) -> None:
        _with_cards(fake_api, 3)
        controller = _controller(fake_api)
        await controller.select_subject(Subject.PHYSICS)
        controller.next_card()
        controller.next_card()

        controller.mark_correct()

        assert controller.state.index == 1
        assert controller.state.current_card is controller.state.remaining[1]

    @pytest.mark.asyncio
    async def test_retry_same_subject_resets_counters(self, fake_api: FakeApi) -> None:
        _with_cards(fake_api, 2)
        controller = _controller(fake_api)
        await controller.select_subject(Subject.PHYSICS)
        controller.mark_incorrect()
        controller.mark_incorrect()
        controller.review_wrong_answers()

        await controller.retry_same_subject()

        state = controller.state
        assert state.phase == FlashcardPhase.SESSION
        assert state.review is False
        assert (state.correct, state.incorrect) == (0, 0)
        assert len(state.remaining) == 2

    @pytest.mark.asyncio
    async def test_reset_returns_to_subject_select(self, fake_api: FakeApi) -> None:
        _with_cards(fake_api, 2)
        controller = _controller(fake_api)
        await controller.select_subject(Subject.PHYSICS)

        controller.reset()

        assert controller.state.phase == FlashcardPhase.SUBJECT_SELECT
        assert controller.state.subject is None
        assert controller.state.remaining == []

    def test_score_percentage_without_answers(self, fake_api: FakeApi) -> None:
        assert _controller(fake_api).state.score_percentage == 0
