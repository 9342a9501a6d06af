"""Integration tests for end-to-end workflows."""

import json

from billtrack.cli.main import cli


def test_full_workflow(cli_runner, temp_db):
    """Categories → user → partners → invoices → payment → dashboard → report."""
    db_args = ["--db-path", temp_db.database_path]

    # Step 1: Initialize categories
    result = cli_runner.invoke(cli, [*db_args, "init-categories"])
    assert result.exit_code == 0

    # Step 2: Create a user
    result = cli_runner.invoke(
        cli,
        [*db_args, "user", "create", "maria", "--name", "Maria", "--email", "m@example.com", "--password", "pw"],
    )
    assert result.exit_code == 0

    # Step 3: Create a supplier and a client
    for name, document, entity_type in (
        ("Landlord SA", "100", "supplier"),
        ("Customer SA", "200", "client"),
    ):
        result = cli_runner.invoke(
            cli, [*db_args, "partner", "create", name, "--document", document, "--type", entity_type]
        )
        assert result.exit_code == 0

    # Step 4: Record invoices
    invoices = [
        ("payable", "Landlord SA", "Rent/Facilities", "2.500,00", "+5"),
        ("payable", "Landlord SA", "Rent/Facilities", "150,00", "-3"),
        ("receivable", "Customer SA", "Sales", "R$ 4.000,00", "+2"),
    ]
    for number, (invoice_type, partner, category, amount, due) in enumerate(invoices, start=1):
        result = cli_runner.invoke(
            cli,
            [
                *db_args, "invoice", "add",
                "--type", invoice_type,
                "--number", f"NF-{number}",
                "--partner", partner,
                "--category", category,
                "--amount", amount,
                "--due-date", due,
                "--user", "maria",
            ],
        )
        assert result.exit_code == 0, result.output

    # Step 5: Pay the overdue rent
    result = cli_runner.invoke(cli, [*db_args, "invoice", "pay", "2"])
    assert result.exit_code == 0

    # Step 6: Dashboard
    result = cli_runner.invoke(cli, [*db_args, "dashboard", "stats", "--json"])
    assert result.exit_code == 0
    stats = json.loads(result.output)
    assert stats["total_invoices"] == 3
    assert stats["to_pay"] == "2500.00"
    assert stats["overdue_payables"] == "0.00"
    assert stats["paid"] == "150.00"
    assert stats["to_receive"] == "4000.00"
    assert stats["next_week_receivables"] == 1

    result = cli_runner.invoke(cli, [*db_args, "dashboard", "categories", "--json"])
    distribution = json.loads(result.output)
    assert [entry["name"] for entry in distribution] == ["Sales", "Rent/Facilities"]
    assert distribution[1]["icon"] == "building"

    # Step 7: Deleting a partner drops its invoices from joined views
    result = cli_runner.invoke(cli, [*db_args, "partner", "delete", "Customer SA", "--yes"])
    assert result.exit_code == 0

    result = cli_runner.invoke(cli, [*db_args, "dashboard", "upcoming", "--json"])
    assert [row["number"] for row in json.loads(result.output)] == ["NF-1"]

    result = cli_runner.invoke(cli, [*db_args, "dashboard", "top-partners", "--json"])
    ranking = json.loads(result.output)
    assert [entry["name"] for entry in ranking] == ["Unknown", "Landlord SA"]
    assert ranking[0]["type"] == "unknown"

    # Step 8: Report for the current month
    result = cli_runner.invoke(cli, [*db_args, "report"])
    assert result.exit_code == 0
    assert "Invoices: 2" in result.output


def test_help_does_not_touch_database(cli_runner, tmp_path):
    db_path = tmp_path / "never.db"
    result = cli_runner.invoke(cli, ["--db-path", str(db_path), "--help"])

    assert result.exit_code == 0
    assert "dashboard" in result.output
    assert not db_path.exists()


def test_verbose_flag(cli_runner, temp_db):
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "-v", "category", "list"])
    assert result.exit_code == 0
