"""End to end runs of the hourbank command line against a temporary database."""

from hourbank import state as app_state
from hourbank.repository.configuration import CONFIGURATION_REPO
from hourbank.terminal.app import app


def migrated(cli):
    result = cli.invoke("migrate")
    assert result.exit_code == 0, result.output
    return cli


def test_commands_fail_before_migration(cli):
    result = cli.invoke("balance")

    assert result.exit_code == 1
    assert "error:" in result.output
    assert "hourbank migrate" in result.output


def test_migrate_then_migrate_again(cli):
    first = cli.invoke("migrate")
    second = cli.invoke("m")

    assert first.exit_code == 0
    assert "Database migrated to version 3" in first.output
    assert second.exit_code == 0
    assert "already at the latest version (3)" in second.output


def test_schema_reports_versions(cli):
    before = cli.invoke("schema")
    migrated(cli)
    after = cli.invoke("sc")

    assert before.exit_code == 0
    assert "Not set" in before.output
    assert after.exit_code == 0
    assert "Database schema version:  3" in after.output
    assert "Latest available version: 3" in after.output


def test_add_and_balance(cli):
    migrated(cli)

    assert cli.invoke("add", "2024-01-01", "3.5").exit_code == 0
    assert cli.invoke("a", "2024-01-01", "1.0").exit_code == 0
    negative = cli.invoke("add", "2024-01-02", "-2.0")
    assert negative.exit_code == 0, negative.output
    assert "Added entry 3" in negative.output

    result = cli.invoke("balance")

    assert result.exit_code == 0
    assert "Total hour balance: 2.5" in result.output


def test_add_zero_is_rejected(cli):
    migrated(cli)

    result = cli.invoke("add", "now", "0")

    assert result.exit_code == 1
    assert "amount cannot be zero" in result.output


def test_add_rejects_huge_amount_and_ledger_stays_usable(cli):
    migrated(cli)

    result = cli.invoke("add", "now", "1000000000000000000000000000")

    assert result.exit_code == 1
    assert "amount must be smaller than" in result.output
    balance = cli.invoke("balance")
    assert balance.exit_code == 0
    assert "Total hour balance: 0.0" in balance.output


def test_add_rejects_malformed_input(cli):
    migrated(cli)

    assert cli.invoke("add", "not-a-date", "1").exit_code == 2
    assert cli.invoke("add", "now", "lots").exit_code == 2


def test_tail_entry_and_date(cli):
    migrated(cli)
    cli.invoke("add", "2024-01-01", "3.5")
    cli.invoke("add", "2024-01-01", "1.0")
    cli.invoke("add", "2024-01-02", "-2.0")

    entries = cli.invoke("tail", "entry", "-n", "2")
    dates = cli.invoke("t", "d", "-n", "2")

    assert entries.exit_code == 0
    assert "2024-01-02" in entries.output
    assert "-2.0" in entries.output
    assert "3.5" not in entries.output
    assert dates.exit_code == 0
    assert "4.5" in dates.output
    assert dates.output.index("2024-01-02") < dates.output.index("2024-01-01")


def test_delete_by_date_and_undo(cli):
    migrated(cli)
    cli.invoke("add", "2024-01-01", "3.5")
    cli.invoke("add", "2024-01-01", "1.0")
    cli.invoke("add", "2024-01-02", "-2.0")

    deleted = cli.invoke("delete", "-d", "2024-01-01")
    assert deleted.exit_code == 0
    assert "Deleted 2 entries" in deleted.output
    assert "Total hour balance: -2.0" in cli.invoke("balance").output

    undone = cli.invoke("undo")
    assert undone.exit_code == 0
    assert "Undid delete operation" in undone.output
    assert "Total hour balance: 2.5" in cli.invoke("balance").output


def test_delete_by_id_list(cli):
    migrated(cli)
    for amount in ("1", "2", "4", "8"):
        cli.invoke("add", "2024-01-01", amount)

    result = cli.invoke("d", "-e", "1,3-4")

    assert result.exit_code == 0
    assert "Deleted 3 entries" in result.output
    assert "Total hour balance: 2.0" in cli.invoke("b").output


def test_delete_without_selector(cli):
    migrated(cli)

    result = cli.invoke("delete")

    assert result.exit_code == 1
    assert "no entry ids or dates selected" in result.output


def test_delete_matching_nothing(cli):
    migrated(cli)

    result = cli.invoke("delete", "-e", "99")

    assert result.exit_code == 0
    assert "nothing deleted" in result.output


def test_undo_too_deep(cli):
    migrated(cli)
    cli.invoke("add", "2024-01-01", "1")

    result = cli.invoke("undo", "2")

    assert result.exit_code == 1
    assert "cannot undo 2 operation(s), only 1 available" in result.output
    assert "Total hour balance: 1.0" in cli.invoke("balance").output


def test_show_deleted_entry(cli):
    migrated(cli)
    cli.invoke("add", "2024-01-01", "1.25")
    cli.invoke("delete", "-e", "1")

    result = cli.invoke("show", "1")

    assert result.exit_code == 0
    assert "1.25" in result.output
    assert "yes" in result.output


def test_show_unknown_entry(cli):
    migrated(cli)

    result = cli.invoke("show", "7")

    assert result.exit_code == 1
    assert "entry 7 does not exist" in result.output


def test_history_lists_operations(cli):
    migrated(cli)
    cli.invoke("add", "2024-01-01", "1")
    cli.invoke("delete", "-e", "1")
    cli.invoke("undo")

    result = cli.invoke("history")

    assert result.exit_code == 0
    assert "delete" in result.output
    assert "add" in result.output
    assert "1 operation(s) can be undone" in result.output


def test_config_set_tail_count(cli):
    result = cli.invoke("config", "set", "--tail-count", "3", "--log-level", "info")

    assert result.exit_code == 0
    config = CONFIGURATION_REPO.get_config()
    assert config["tail_count"] == 3
    assert config["log_level"] == "INFO"


def test_config_set_rejects_unknown_log_level(cli):
    result = cli.invoke("c", "s", "--log-level", "loud")

    assert result.exit_code == 2


def test_tail_header_names_report_and_ledger(cli):
    migrated(cli)
    cli.invoke("add", "2024-01-01", "1")
    app_state.set_show_header(True)

    result = cli.runner.invoke(
        app, ["--database", str(cli.database_path), "tail", "entry"]
    )

    assert result.exit_code == 0
    assert "hourbank latest entries" in result.output
    assert str(cli.database_path) in result.output
