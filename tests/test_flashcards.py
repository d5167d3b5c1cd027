"""Tests for flashcards API endpoints."""

from typing import Any

import pytest
from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from studycompanion import models
from studycompanion.domain.subject import Subject


class TestCreateFlashcard:
    """Test suite for POST /flashcards endpoint."""

    def test_create_flashcard_success(self, client: TestClient, db_session: Session) -> None:
        """Test successful creation of a flashcard."""
        response = client.post(
            "/api/flashcards",
            json={"question": "2+2?", "answer": "4", "subject": "MATHEMATICS"},
        )

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert isinstance(data["id"], int)
        assert data["question"] == "2+2?"
        assert data["answer"] == "4"
        assert data["subject"] == "MATHEMATICS"
        assert "createdAt" in data
        assert "updatedAt" in data

        # Verify flashcard was created in database
        db_flashcard = db_session.get(models.Flashcard, data["id"])
        assert db_flashcard is not None
        assert db_flashcard.subject == Subject.MATHEMATICS

    def test_create_then_fetch_by_lowercase_subject(self, client: TestClient) -> None:
        """Test the created card is listed under the lower-cased subject path."""
        created = client.post(
            "/api/flashcards",
            json={"question": "2+2?", "answer": "4", "subject": "MATHEMATICS"},
        ).json()

        response = client.get("/api/flashcards/subject/mathematics")

        assert response.status_code == status.HTTP_200_OK
        assert [card["id"] for card in response.json()] == [created["id"]]

    @pytest.mark.parametrize("subject", list(Subject))
    def test_create_then_fetch_round_trips_every_subject(
        self, client: TestClient, subject: Subject
    ) -> None:
        """Test each subject survives create, fetch by id and fetch by subject."""
        created = client.post(
            "/api/flashcards",
            json={"question": "Q?", "answer": "A", "subject": subject.value},
        ).json()

        fetched = client.get(f"/api/flashcards/{created['id']}")
        by_subject = client.get(f"/api/flashcards/subject/{subject.value.lower()}")

        assert fetched.json() == created
        assert fetched.json()["subject"] == subject.value
        assert [card["id"] for card in by_subject.json()] == [created["id"]]

    def test_create_flashcard_missing_field(self, client: TestClient) -> None:
        """Test creating a flashcard without an answer fails."""
        response = client.post(
            "/api/flashcards",
            json={"question": "2+2?", "subject": "MATHEMATICS"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "Missing required fields"}

    def test_create_flashcard_empty_question(self, client: TestClient) -> None:
        """Test creating a flashcard with an empty question fails."""
        response = client.post(
            "/api/flashcards",
            json={"question": "", "answer": "4", "subject": "MATHEMATICS"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_create_flashcard_invalid_subject(
        self, client: TestClient, db_session: Session
    ) -> None:
        """Test creating a flashcard with a subject outside the enum fails."""
        response = client.post(
            "/api/flashcards",
            json={"question": "Who wrote Hamlet?", "answer": "Shakespeare", "subject": "HISTORY"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "Invalid subject"}
        assert db_session.query(models.Flashcard).count() == 0

    def test_create_flashcard_subject_is_case_sensitive(self, client: TestClient) -> None:
        """Test that request bodies must use the exact enum value."""
        response = client.post(
            "/api/flashcards",
            json={"question": "2+2?", "answer": "4", "subject": "mathematics"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestGetFlashcards:
    """Test suite for GET /flashcards endpoints."""

    def test_get_flashcards_newest_first(self, client: TestClient, make_flashcard: Any) -> None:
        """Test flashcards are listed newest first."""
        first = make_flashcard(question="First")
        second = make_flashcard(question="Second")

        response = client.get("/api/flashcards")

        assert response.status_code == status.HTTP_200_OK
        assert [card["id"] for card in response.json()] == [second.id, first.id]

    def test_get_flashcards_filtered_by_subject(
        self, client: TestClient, make_flashcard: Any
    ) -> None:
        """Test the subject query parameter filters the list."""
        physics = make_flashcard(subject=Subject.PHYSICS)
        make_flashcard(subject=Subject.CHEMISTRY)

        response = client.get("/api/flashcards", params={"subject": "PHYSICS"})

        assert response.status_code == status.HTTP_200_OK
        assert [card["id"] for card in response.json()] == [physics.id]

    def test_get_flashcards_empty_subject_filter_lists_all(
        self, client: TestClient, make_flashcard: Any
    ) -> None:
        """Test an empty subject query parameter applies no filter."""
        physics = make_flashcard(subject=Subject.PHYSICS)
        chemistry = make_flashcard(subject=Subject.CHEMISTRY)

        response = client.get("/api/flashcards", params={"subject": ""})

        assert response.status_code == status.HTTP_200_OK
        assert [card["id"] for card in response.json()] == [chemistry.id, physics.id]

    def test_get_flashcards_invalid_subject_filter(self, client: TestClient) -> None:
        """Test an unknown subject filter is rejected."""
        response = client.get("/api/flashcards", params={"subject": "BIOLOGY"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_get_flashcard_by_id(
        self, client: TestClient, test_flashcard: models.Flashcard
    ) -> None:
        """Test fetching a single flashcard."""
        response = client.get(f"/api/flashcards/{test_flashcard.id}")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["question"] == test_flashcard.question
        assert data["subject"] == "PHYSICS"

    def test_get_flashcard_not_found(self, client: TestClient) -> None:
        """Test fetching a non-existent flashcard."""
        response = client.get("/api/flashcards/99999")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"error": "Flashcard not found"}

    def test_get_flashcards_by_invalid_subject_path(self, client: TestClient) -> None:
        """Test an unknown subject path segment is rejected."""
        response = client.get("/api/flashcards/subject/biology")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "Invalid subject"}

    def test_get_flashcard_counts(self, client: TestClient, make_flashcard: Any) -> None:
        """Test counts include every subject, with zero for empty ones."""
        make_flashcard(subject=Subject.PHYSICS)
        make_flashcard(subject=Subject.PHYSICS)
        make_flashcard(subject=Subject.MATHEMATICS)

        response = client.get("/api/flashcards/counts")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"PHYSICS": 2, "CHEMISTRY": 0, "MATHEMATICS": 1}


class TestUpdateFlashcard:
    """Test suite for PUT /flashcards/:id endpoint."""

    def test_update_flashcard_success(
        self, client: TestClient, db_session: Session, test_flashcard: models.Flashcard
    ) -> None:
        """Test replacing a flashcard's fields."""
        response = client.put(
            f"/api/flashcards/{test_flashcard.id}",
            json={"question": "What is F?", "answer": "Force", "subject": "CHEMISTRY"},
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["question"] == "What is F?"
        assert data["answer"] == "Force"
        assert data["subject"] == "CHEMISTRY"

        db_session.refresh(test_flashcard)
        assert test_flashcard.subject == Subject.CHEMISTRY

    def test_update_flashcard_not_found(self, client: TestClient) -> None:
        """Test updating a non-existent flashcard."""
        response = client.put(
            "/api/flashcards/99999",
            json={"question": "Q", "answer": "A", "subject": "PHYSICS"},
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_update_flashcard_validates_fields(
        self, client: TestClient, test_flashcard: models.Flashcard
    ) -> None:
        """Test an update with a missing field is rejected."""
        response = client.put(
            f"/api/flashcards/{test_flashcard.id}",
            json={"question": "Q", "subject": "PHYSICS"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestDeleteFlashcard:
    """Test suite for DELETE /flashcards/:id endpoint."""

    def test_delete_flashcard_success(
        self, client: TestClient, db_session: Session, test_flashcard: models.Flashcard
    ) -> None:
        """Test deleting a flashcard."""
        flashcard_id = test_flashcard.id

        response = client.delete(f"/api/flashcards/{flashcard_id}")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"message": "Flashcard deleted successfully"}
        db_session.expire_all()
        assert db_session.get(models.Flashcard, flashcard_id) is None

    def test_delete_flashcard_not_found(self, client: TestClient) -> None:
        """Test deleting a non-existent flashcard."""
        response = client.delete("/api/flashcards/99999")

        assert response.status_code == status.HTTP_404_NOT_FOUND
