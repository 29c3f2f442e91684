import json

import pytest

from bill_reporter.cli import run


def make_record(**kwargs):
    base = {
        "owner": None,
        "name": "Rent",
        "amountDue": 1000,
        "dueDayOfMonth": 15,
        "dueDate": {"date": 15, "type": "MONTHLY"},
        "isSignificant": False,
        "reasonForDeferment": None,
        "comment": None,
        "amountDueCanVary": False,
        "isPaid": False,
        "cardSource": "DEBIT",
    }
    base.update(kwargs)
    return base


@pytest.fixture
def bills_file(tmp_path):
    path = tmp_path / "bills.data.json"
    records = [
        make_record(),
        make_record(name="Phone", owner="alex", cardSource="AMEX"),
        make_record(name="Broken", cardSource="VISA"),
    ]
    path.write_text(json.dumps({"bills": records}), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    for name in ("YEAR", "MONTH", "DAY", "SEARCH_DAY_LIMIT"):
        monkeypatch.delenv(name, raising=False)


def test_run_prints_report_and_malformed_records(bills_file, capsys):
    text = run(
        [str(bills_file), "--year", "2025", "--month", "1", "--day", "10", "--today", "2025-01-12"]
    )

    assert "OWNER: Family" in text
    assert "OWNER: alex" in text
    assert "to: Thu Jan 23 2025" in text
    assert "Malformed bills found: 1" in text
    assert '"name": "Broken"' in text
    assert capsys.readouterr().out.startswith("-- BILLS")


def test_run_reads_window_from_environment(bills_file, monkeypatch, tmp_path):
    monkeypatch.setenv("YEAR", "2025")
    monkeypatch.setenv("MONTH", "1")
    monkeypatch.setenv("DAY", "1")
    monkeypatch.setenv("SEARCH_DAY_LIMIT", "20")
    output = tmp_path / "report.txt"

    text = run([str(bills_file), "--owner", "Family", "--today", "2025-01-01", "--output", str(output)])

    assert output.read_text(encoding="utf-8") == text
    assert "OWNER: alex" not in text
    assert "to: Tue Jan 21 2025" in text
    assert "Due of Total: 1,000.00 of 1,000.00" in text


def test_invalid_day_limit_falls_back_to_default(bills_file, monkeypatch):
    monkeypatch.setenv("SEARCH_DAY_LIMIT", "soon")
    text = run([str(bills_file), "--year", "2025", "--month", "1", "--day", "1"])
    assert "to: Tue Jan 14 2025" in text


@pytest.mark.parametrize("missing", ["year", "month", "day"])
def test_missing_start_date_part_exits(bills_file, missing):
    args = {"year": "2025", "month": "1", "day": "10"}
    del args[missing]
    argv = [str(bills_file)]
    for name, value in args.items():
        argv.extend([f"--{name}", value])

    with pytest.raises(SystemExit) as excinfo:
        run(argv)
    assert missing.upper() in str(excinfo.value)


def test_impossible_start_date_exits(bills_file):
    with pytest.raises(SystemExit) as excinfo:
        run([str(bills_file), "--year", "2025", "--month", "2", "--day", "30"])
    assert "Invalid window start date" in str(excinfo.value)


def test_negative_window_exits(bills_file):
    with pytest.raises(SystemExit):
        run([str(bills_file), "--year", "2025", "--month", "1", "--day", "10", "--days", "-1"])


def test_missing_bills_file_exits(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        run([str(tmp_path / "nope.json"), "--year", "2025", "--month", "1", "--day", "1"])
    assert "Bills file not found" in str(excinfo.value)


def test_run_writes_excel_workbook(bills_file, tmp_path):
    from openpyxl import load_workbook

    workbook_path = tmp_path / "out" / "bills.xlsx"
    run(
        [
            str(bills_file),
            "--year", "2025", "--month", "1", "--day", "10",
            "--today", "2025-01-12",
            "--excel-output", str(workbook_path),
        ]
    )

    wb = load_workbook(workbook_path)
    assert wb.sheetnames == ["Family", "alex"]
