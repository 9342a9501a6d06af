"""Tests for category service and commands."""

import pytest
from billtrack.cli.main import cli
from billtrack.domain.category import DEFAULT_CATEGORIES
from billtrack.domain.errors import ConflictError, NotFoundError


class TestCategoryService:
    """Tests for CategoryService."""

    def test_seed_default_categories(self, category_service):
        created = category_service.seed_default_categories()

        assert len(created) == len(DEFAULT_CATEGORIES)
        names = [c.name for c in category_service.list_categories()]
        assert names == ["Rent/Facilities", "Equipment", "Services", "Materials", "Sales"]

    def test_seed_is_idempotent(self, category_service):
        category_service.create_category("Services", "Custom description")

        created = category_service.seed_default_categories()

        assert len(created) == len(DEFAULT_CATEGORIES) - 1
        assert category_service.get_category_by_name("Services").description == "Custom description"
        assert category_service.seed_default_categories() == []

    def test_seed_custom_defaults(self, category_service):
        created = category_service.seed_default_categories([("Taxes", None)])
        assert len(created) == 1
        assert category_service.get_category(created[0]).name == "Taxes"

    def test_create_duplicate(self, category_service):
        category_service.create_category("Travel")
        with pytest.raises(ConflictError, match="Travel"):
            category_service.create_category("Travel")

    def test_update_category(self, category_service, sample_categories):
        updated = category_service.update_category(
            sample_categories["Materials"], name="Office Materials", description="Paper and pens"
        )

        assert updated.name == "Office Materials"
        assert updated.description == "Paper and pens"

    def test_update_to_existing_name(self, category_service, sample_categories):
        with pytest.raises(ConflictError):
            category_service.update_category(sample_categories["Materials"], name="Services")

    def test_update_missing(self, category_service):
        with pytest.raises(NotFoundError):
            category_service.update_category(999, name="X")

    def test_delete_category(self, category_service, sample_categories):
        category_service.delete_category(sample_categories["Sales"])

        assert category_service.get_category_by_name("Sales") is None
        with pytest.raises(NotFoundError):
            category_service.delete_category(sample_categories["Sales"])


def test_init_categories(cli_runner, temp_db):
    """Test initializing categories."""
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "init-categories"]
    )

    assert result.exit_code == 0
    assert f"Successfully created {len(DEFAULT_CATEGORIES)} categories." in result.output


def test_init_categories_duplicate(cli_runner, temp_db):
    """Test initializing categories twice."""
    result1 = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "init-categories"]
    )
    assert result1.exit_code == 0

    result2 = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "init-categories"]
    )
    assert "already exist" in result2.output.lower()

    result3 = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "init-categories", "--force"]
    )
    assert "Successfully created 0 categories." in result3.output


def test_category_list(cli_runner, temp_db, sample_categories):
    """Test listing categories."""
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "category", "list"]
    )

    assert result.exit_code == 0
    assert "Rent/Facilities" in result.output
    assert "Sales" in result.output


def test_category_list_empty(cli_runner, temp_db):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "category", "list"]
    )

    assert result.exit_code == 0
    assert "init-categories" in result.output


def test_category_create_duplicate(cli_runner, temp_db, sample_categories):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "category", "create", "Services"]
    )

    assert result.exit_code == 1
    assert "already exists" in result.output


def test_category_update_and_delete(cli_runner, temp_db, sample_categories):
    result = cli_runner.invoke(
        cli,
        ["--db-path", temp_db.database_path, "category", "update", "Materials", "--name", "Supplies"],
    )
    assert result.exit_code == 0
    assert "Updated category 'Supplies'" in result.output

    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "category", "delete", "Supplies", "--yes"]
    )
    assert result.exit_code == 0
    assert "Deleted category 'Supplies'" in result.output


def test_category_delete_cancelled(cli_runner, temp_db, sample_categories):
    result = cli_runner.invoke(
        cli,
        ["--db-path", temp_db.database_path, "category", "delete", "Sales"],
        input="n\n",
    )
    assert result.exit_code == 0
    assert "Deletion cancelled." in result.output
