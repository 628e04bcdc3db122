"""Tests for the command-line interface."""

import numpy as np
import yaml
from faker import Faker

from pdf_table.cli import generate_sample_table, load_table, main
from pdf_table.content import LinkElement, StyledText


def test_sample_table_shape():
    rng = np.random.default_rng(7)
    fake = Faker()
    fake.seed_instance(7)
    table = generate_sample_table(rng, fake, num_rows=4)

    assert [c.title for c in table.columns] == ["Date", "Vendor", "Description", "Amount"]
    assert len(table.rows) == 4
    row = table.rows[0]
    assert isinstance(row["vendor"], LinkElement)
    assert isinstance(row["amount"], StyledText)
    assert row["amount"].alignment == "right"


def test_sample_command_writes_pdf(tmp_path, capsys):
    out = tmp_path / "sample.pdf"
    assert main(["sample", "--rows", "5", "--seed", "3", "-o", str(out)]) == 0
    assert out.read_bytes().startswith(b"%PDF")
    assert "Rows: 6" in capsys.readouterr().out


def test_render_command_from_yaml(tmp_path):
    table_path = tmp_path / "table.yaml"
    table_path.write_text(yaml.safe_dump([["Name", "Qty"], ["apple", 3], ["pear", 12]]))
    out = tmp_path / "out" / "table.pdf"

    assert main(["render", str(table_path), "-o", str(out), "--style", "grid"]) == 0
    assert out.exists()


def test_load_table_stringifies_scalars(tmp_path):
    path = tmp_path / "object.yaml"
    path.write_text(yaml.safe_dump({
        "columns": [{"title": "Qty", "key": "qty"}],
        "rows": [{"qty": 4}],
    }))
    assert load_table(path)["rows"] == [{"qty": "4"}]


def test_layout_errors_exit_with_code(tmp_path, capsys):
    table_path = tmp_path / "table.yaml"
    table_path.write_text(yaml.safe_dump([["A", "B"], ["x", "y"]]))
    options_path = tmp_path / "options.yaml"
    options_path.write_text(yaml.safe_dump({"column": {"override_widths": [10]}}))

    code = main([
        "render", str(table_path), "-o", str(tmp_path / "bad.pdf"),
        "--options", str(options_path),
    ])
    assert code == 1
    assert "ERR_COLUMN_COUNT_MISMATCH" in capsys.readouterr().err
