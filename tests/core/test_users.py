"""Tests for user operations and the goal mutator."""

import pytest

from studyhub.core.errors import MissingFieldError, NotFoundError


class TestCreateUser:
    """Tests for StudyService.create_user."""

    def test_create_user(self, service, user_payload, clock):
        user = service.create_user(user_payload)

        assert user.id == "id-001"
        assert user.name == "Ana"
        assert user.email == "a@x.com"
        assert user.progress == "beginner"
        assert user.goals == "A1"
        assert user.courses == ()
        assert user.created_at == clock.now
        assert user.updated_at == user.created_at

    def test_email_not_validated_or_unique(self, service, user_payload):
        """Email format and uniqueness are not enforced."""
        user_payload["email"] = "not-an-email"

        first = service.create_user(user_payload)
        second = service.create_user(user_payload)

        assert first.email == second.email == "not-an-email"
        assert len(service.get_all_users()) == 2

    @pytest.mark.parametrize("missing", ["name", "email", "progress", "goals"])
    def test_create_missing_field(self, service, user_payload, missing):
        del user_payload[missing]

        with pytest.raises(MissingFieldError) as exc_info:
            service.create_user(user_payload)

        assert exc_info.value.field == missing
        assert service.get_all_users() == []

    def test_payload_courses_ignored(self, service, user_payload):
        """courses always starts empty."""
        user_payload["courses"] = ["c1"]

        assert service.create_user(user_payload).courses == ()


class TestGetUser:
    """Tests for StudyService.get_user / get_all_users."""

    def test_get_user(self, service, user_payload):
        user = service.create_user(user_payload)

        assert service.get_user(user.id) == user

    def test_get_missing(self, service):
        with pytest.raises(NotFoundError, match="User with ID=u-1 not found."):
            service.get_user("u-1")

    def test_get_all_users(self, service, user_payload):
        service.create_user(user_payload)
        service.create_user({**user_payload, "name": "Luis"})

        assert sorted(u.name for u in service.get_all_users()) == ["Ana", "Luis"]


class TestSetLanguageLearningGoal:
    """Tests for StudyService.set_language_learning_goal."""

    def test_only_goals_change(self, service, user_payload, clock):
        """Every other field, updated_at included, is untouched."""
        user = service.create_user(user_payload)
        clock.advance(10_000)

        updated = service.set_language_learning_goal(user.id, "B2")

        assert updated.goals == "B2"
        assert updated.id == user.id
        assert updated.name == user.name
        assert updated.email == user.email
        assert updated.progress == user.progress
        assert updated.courses == user.courses
        assert updated.created_at == user.created_at
        assert updated.updated_at == user.updated_at

    def test_goal_is_persisted(self, service, user_payload):
        """createUser -> setLanguageLearningGoal -> getUser sees the new goal."""
        user = service.create_user(user_payload)

        updated = service.set_language_learning_goal(user.id, "B1")

        fetched = service.get_user(user.id)
        assert fetched == updated
        assert fetched.goals == "B1"
        assert fetched.progress == "beginner"

    def test_missing_user(self, service):
        with pytest.raises(NotFoundError) as exc_info:
            service.set_language_learning_goal("nobody", "B2")

        assert exc_info.value.entity_id == "nobody"
        assert service.get_all_users() == []
