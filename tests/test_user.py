"""Tests for user service and commands."""

import pytest
from billtrack.cli.main import cli
from billtrack.domain.entities import UserRole
from billtrack.domain.errors import ConflictError, NotFoundError, ValidationError


def test_create_user(user_service):
    user_id = user_service.create_user(
        username="joao", password="pw", name="João Lima", email="joao@example.com", role="admin"
    )

    user = user_service.get_user(user_id)
    assert user.username == "joao"
    assert user.role == UserRole.ADMIN
    assert user_service.get_user_by_username("joao").id == user_id


def test_default_role_is_ordinary(user_service, sample_user):
    assert sample_user.role == UserRole.ORDINARY


def test_duplicate_username(user_service, sample_user):
    with pytest.raises(ConflictError, match="maria"):
        user_service.create_user(username="maria", password="x", name="Other", email="o@example.com")


def test_invalid_role(user_service):
    with pytest.raises(ValidationError, match="role"):
        user_service.create_user(username="x", password="x", name="X", email="x@x", role="root")


def test_list_users_sorted_by_username(user_service, sample_user):
    user_service.create_user(username="ana", password="x", name="Ana", email="ana@example.com")
    assert [u.username for u in user_service.list_users()] == ["ana", "maria"]


def test_delete_user(user_service, sample_user):
    user_service.delete_user(sample_user.id)
    assert user_service.get_user(sample_user.id) is None
    with pytest.raises(NotFoundError):
        user_service.delete_user(sample_user.id)


def test_user_commands(cli_runner, temp_db):
    result = cli_runner.invoke(
        cli,
        [
            "--db-path", temp_db.database_path,
            "user", "create", "carla",
            "--name", "Carla Dias",
            "--email", "carla@example.com",
            "--password", "s3cret",
        ],
    )
    assert result.exit_code == 0
    assert "Created user 'carla'" in result.output

    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "user", "list"])
    assert result.exit_code == 0
    assert "carla" in result.output
    assert "ordinary" in result.output

    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "user", "delete", "carla"])
    assert result.exit_code == 0

    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "user", "delete", "carla"])
    assert result.exit_code == 1
    assert "not found" in result.output
