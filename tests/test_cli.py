"""End-to-end tests for the fintrack CLI."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from fintrack.cli import app
from fintrack.config import get_visible_series
from fintrack.domain.models import Month
from fintrack.store import get_db_path, get_snapshot, list_snapshots

runner = CliRunner()

HISTORY_CSV = "mes;ingresos;gastos;saldo\n2023-12;100,00;50,00;200,00\n2024-01;1500,00;800,00;3200,50\n"


@pytest.fixture
def workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    result = runner.invoke(app, ["init"])
    assert result.exit_code == 0, result.output
    return tmp_path


def import_history(workspace: Path) -> None:
    source = workspace / "history.csv"
    source.write_text(HISTORY_CSV, encoding="utf-8")
    result = runner.invoke(app, ["import", str(source), "--yes"])
    assert result.exit_code == 0, result.output


class TestInit:
    """Tests for the init command."""

    def test_creates_database_and_config(self, workspace: Path) -> None:
        """Should create the database and config under XDG paths."""
        assert get_db_path().exists()
        assert (workspace / "config" / "fintrack" / "config.toml").exists()

    def test_refuses_second_init(self, workspace: Path) -> None:
        """Should fail when already initialized."""
        result = runner.invoke(app, ["init"])

        assert result.exit_code == 1

    def test_force_keeps_stored_months(self, workspace: Path) -> None:
        """Should reset the config without dropping data."""
        import_history(workspace)

        result = runner.invoke(app, ["init", "--force"])

        assert result.exit_code == 0, result.output
        assert len(list_snapshots()) == 2

    def test_malformed_config(self, workspace: Path) -> None:
        """Should report an unparsable config file instead of crashing."""
        (workspace / "config" / "fintrack" / "config.toml").write_text("locale = \n", encoding="utf-8")

        for args in (["history"], ["init", "--force"]):
            result = runner.invoke(app, args)
            assert result.exit_code == 1
            assert "Invalid config file" in result.output

    def test_commands_require_init(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should fail before init."""
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))

        result = runner.invoke(app, ["history"])

        assert result.exit_code == 1
        assert "fintrack init" in result.output


class TestImport:
    """Tests for the import command."""

    def test_history_import(self, workspace: Path) -> None:
        """Should store every parsed month."""
        import_history(workspace)

        stored = get_snapshot(Month("2024-01"))
        assert stored is not None
        assert stored.balance_cents == 320050
        assert len(list_snapshots()) == 2

    def test_invalid_file_stores_nothing(self, workspace: Path) -> None:
        """Should abort without writing when any row is invalid."""
        source = workspace / "bad.csv"
        source.write_text("2024-01;1;1;1\n2024-02;x;1;1\n", encoding="utf-8")

        result = runner.invoke(app, ["import", str(source), "--yes"])

        assert result.exit_code == 1
        assert "line 2" in result.output
        assert list_snapshots() == []

    def test_amount_too_large_to_store(self, workspace: Path) -> None:
        """Should fail cleanly on amounts beyond the stored integer range."""
        source = workspace / "huge.csv"
        source.write_text("2024-01;100000000000000000;1;1\n", encoding="utf-8")

        result = runner.invoke(app, ["import", str(source), "--yes"])

        assert result.exit_code == 1
        assert "Invalid values on line 1" in result.output
        assert list_snapshots() == []

    def test_non_utf8_file(self, workspace: Path) -> None:
        """Should report a file that is not UTF-8 instead of crashing."""
        source = workspace / "legacy.csv"
        source.write_bytes("mes;año;ingresos;gastos;saldo\n3;2024;1;1;1\n".encode("cp1252"))

        result = runner.invoke(app, ["import", str(source), "--yes"])

        assert result.exit_code == 1
        assert "Could not read" in result.output
        assert list_snapshots() == []

    def test_single_month_from_stdin(self, workspace: Path) -> None:
        """Should import pasted text for one month."""
        result = runner.invoke(
            app,
            ["import", "-", "--scope", "month", "--month", "2024-03", "--yes"],
            input="1200.50,600,900\n",
        )

        assert result.exit_code == 0, result.output
        stored = get_snapshot(Month("2024-03"))
        assert stored is not None
        assert stored.income_cents == 120050

    def test_stdin_requires_yes(self, workspace: Path) -> None:
        """Should refuse to prompt after reading stdin."""
        result = runner.invoke(app, ["import", "-"], input="2024-01,1,1,1\n")

        assert result.exit_code == 1
        assert list_snapshots() == []

    def test_declined_confirmation(self, workspace: Path) -> None:
        """Should store nothing when the prompt is declined."""
        source = workspace / "history.csv"
        source.write_text(HISTORY_CSV, encoding="utf-8")

        result = runner.invoke(app, ["import", str(source)], input="n\n")

        assert result.exit_code == 0
        assert list_snapshots() == []

    def test_unknown_scope(self, workspace: Path) -> None:
        """Should reject unknown scopes."""
        result = runner.invoke(app, ["import", "-", "--scope", "week", "--yes"], input="")

        assert result.exit_code == 1


class TestSaveAndDelete:
    """Tests for the save and delete commands."""

    def test_save_month(self, workspace: Path) -> None:
        """Should save a manual entry."""
        result = runner.invoke(
            app,
            ["save", "--month", "2024-05", "--income", "10,50", "--expense", "0", "--balance", "-3"],
        )

        assert result.exit_code == 0, result.output
        stored = get_snapshot(Month("2024-05"))
        assert stored is not None
        assert stored.income_cents == 1050
        assert stored.balance_cents == -300

    def test_save_rejects_negative_expense(self, workspace: Path) -> None:
        """Should reject a negative expense."""
        result = runner.invoke(
            app,
            ["save", "--month", "2024-05", "--income", "1", "--expense", "-1", "--balance", "0"],
        )

        assert result.exit_code == 1
        assert get_snapshot(Month("2024-05")) is None

    def test_delete_year(self, workspace: Path) -> None:
        """Should delete only the chosen year."""
        import_history(workspace)

        result = runner.invoke(app, ["delete", "--year", "2024", "--yes"])

        assert result.exit_code == 0, result.output
        assert [s.month for s in list_snapshots()] == ["2023-12"]

    def test_delete_needs_one_target(self, workspace: Path) -> None:
        """Should require exactly one of --month, --year or --all."""
        result = runner.invoke(app, ["delete", "--year", "2024", "--all", "--yes"])

        assert result.exit_code == 1


class TestReports:
    """Tests for month, year and history views."""

    def test_views_render(self, workspace: Path) -> None:
        """Should render each view without errors."""
        import_history(workspace)

        for args in (
            ["month", "--month", "2024-01"],
            ["year", "--year", "2024", "--sort", "balance", "--desc"],
            ["history"],
        ):
            result = runner.invoke(app, args)
            assert result.exit_code == 0, result.output

    def test_year_without_data(self, workspace: Path) -> None:
        """Should report an empty year."""
        result = runner.invoke(app, ["year", "--year", "2020"])

        assert result.exit_code == 0
        assert "No data for 2020" in result.output

    def test_unknown_sort_key(self, workspace: Path) -> None:
        """Should reject an unknown sort key."""
        import_history(workspace)

        result = runner.invoke(app, ["history", "--sort", "nope"])

        assert result.exit_code == 1

    def test_invalid_year_option(self, workspace: Path) -> None:
        """Should reject a malformed year."""
        result = runner.invoke(app, ["year", "--year", "24"])

        assert result.exit_code == 1


class TestExportAndVisibility:
    """Tests for export and visibility commands."""

    def test_csv_export_to_file_reimports(self, workspace: Path) -> None:
        """Should write a CSV the import reads back."""
        import_history(workspace)
        output = workspace / "export.csv"

        result = runner.invoke(app, ["export", "csv", "--output", str(output)])
        assert result.exit_code == 0, result.output
        assert output.read_text(encoding="utf-8").startswith("mes;ingresos;gastos;saldo al cierre\n")

        runner.invoke(app, ["delete", "--all", "--yes"])
        result = runner.invoke(app, ["import", str(output), "--yes"])

        assert result.exit_code == 0, result.output
        assert len(list_snapshots()) == 2
        assert get_snapshot(Month("2023-12")) is not None

    def test_sql_export_to_stdout(self, workspace: Path) -> None:
        """Should print the SQL dump."""
        import_history(workspace)

        result = runner.invoke(app, ["export", "sql"])

        assert result.exit_code == 0
        assert "VALUES ('2024-01', 150000, 80000, 320050);" in result.output

    def test_hide_series(self, workspace: Path) -> None:
        """Should persist a hidden series."""
        result = runner.invoke(app, ["visibility", "year", "benefit", "--hide"])

        assert result.exit_code == 0, result.output
        assert "benefit" not in get_visible_series("year")

    def test_unknown_view(self, workspace: Path) -> None:
        """Should reject unknown views."""
        result = runner.invoke(app, ["visibility", "week", "income"])

        assert result.exit_code == 1
