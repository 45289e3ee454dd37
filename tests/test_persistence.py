import json
from pathlib import Path

from freight_quote.persistence.filesystem import FileStorage


def test_file_storage_creates_run_directory(tmp_path: Path) -> None:
    storage = FileStorage(root=tmp_path)
    run_dir = storage.make_run_directory()

    assert run_dir.exists()
    assert run_dir.is_dir()
    assert run_dir.parent == tmp_path / "outputs"
    assert run_dir.name.startswith("quote_")


def test_file_storage_writes_json_and_csv(tmp_path: Path) -> None:
    storage = FileStorage(root=tmp_path)
    run_dir = storage.make_run_directory(prefix="quote_test")

    quote_path = run_dir / "quote.json"
    breakdown_path = run_dir / "breakdown.csv"

    storage.write_json(quote_path, {"total": 167.56, "currency": "EUR"})
    storage.write_csv(breakdown_path, "line,amount,currency\r\nfuel,25.56,EUR\r\n")

    assert json.loads(quote_path.read_text(encoding="utf-8")) == {"total": 167.56, "currency": "EUR"}
    assert breakdown_path.read_bytes() == b"line,amount,currency\r\nfuel,25.56,EUR\r\n"
