"""Command-line interface for drawing tables into PDF files."""

import argparse
import logging
import sys
from datetime import date, timedelta
from pathlib import Path
from typing import Any, List, Optional

import numpy as np
import yaml
from faker import Faker

from .config import TableOptions, load_options
from .content import Column, LinkElement, StyledText, TableObject
from .errors import DrawTableError
from .layout_engine import LayoutResult
from .pdf_renderer import draw_table
from .styles import TABLE_STYLES
from .surface import LANDSCAPE_SIZE, PORTRAIT_SIZE, ReportLabSurface


DEFAULT_START_X = 50
DEFAULT_TOP_MARGIN = 50


def _normalise_cell(value: Any) -> Any:
    """YAML scalars such as numbers and dates become display strings."""
    if value is None or isinstance(value, (str, dict, list)):
        if isinstance(value, list):
            return [_normalise_cell(v) for v in value]
        return value
    return str(value)


def load_table(path: Path) -> Any:
    """Load rows or a table object from a YAML or JSON file."""
    with open(path, "r") as f:
        data = yaml.safe_load(f)

    if isinstance(data, dict) and "columns" in data and "rows" in data:
        data["rows"] = [
            {key: _normalise_cell(value) for key, value in row.items()}
            for row in data["rows"]
        ]
        return data
    if isinstance(data, list):
        return [
            [_normalise_cell(cell) for cell in row] if isinstance(row, list) else row
            for row in data
        ]
    raise ValueError(f"{path} does not contain a list of rows or a table object")


def generate_sample_table(
    rng: np.random.Generator,
    fake: Faker,
    num_rows: int = 15,
) -> TableObject:
    """Generate a payments table with styled amounts and vendor links."""
    columns = [
        Column(title="Date", key="date"),
        Column(title="Vendor", key="vendor"),
        Column(title="Description", key="description"),
        Column(title="Amount", key="amount"),
    ]

    rows = []
    start = date(2025, 1, 1)
    for _ in range(num_rows):
        paid_on = start + timedelta(days=int(rng.integers(0, 365)))
        amount = float(rng.uniform(50, 25000))
        vendor = fake.company()
        rows.append({
            "date": paid_on.strftime("%m/%d/%y"),
            "vendor": LinkElement(text=vendor, url=f"https://{fake.domain_name()}"),
            "description": fake.sentence(nb_words=int(rng.integers(3, 9))).rstrip("."),
            "amount": StyledText(text=f"{amount:,.2f}", alignment="right"),
        })

    rows.sort(key=lambda r: r["date"])
    return TableObject(columns=columns, rows=rows)


def render_to_pdf(
    table: Any,
    out_path: Path,
    options: TableOptions,
    start_x: float = DEFAULT_START_X,
    start_y: Optional[float] = None,
    orientation: str = "portrait",
) -> LayoutResult:
    """Draw one table on a fresh single-page PDF."""
    pagesize = LANDSCAPE_SIZE if orientation == "landscape" else PORTRAIT_SIZE
    out_path.parent.mkdir(parents=True, exist_ok=True)

    surface = ReportLabSurface(out_path, pagesize=pagesize)
    if start_y is None:
        start_y = surface.page_height() - DEFAULT_TOP_MARGIN

    result = draw_table(surface, table, start_x, start_y, options)
    surface.save()
    return result


def print_summary(out_path: Path, result: LayoutResult) -> None:
    print(f"Wrote {out_path}")
    print(f"  Columns: {len(result.column_widths)}")
    print(f"  Rows: {len(result.row_heights)}")
    print(f"  Size: {result.width:.1f} x {result.height:.1f} pt")
    print(f"  Ends at: ({result.end_x:.1f}, {result.end_y:.1f})")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Draw tables into PDF files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log layout decisions",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_common(sub: argparse.ArgumentParser):
        sub.add_argument(
            "-o", "--out",
            type=Path,
            required=True,
            help="Output PDF path",
        )
        sub.add_argument(
            "--options",
            type=Path,
            help="Path to YAML table options",
        )
        sub.add_argument(
            "--style",
            choices=sorted(TABLE_STYLES),
            help="Style preset applied beneath the options file",
        )
        sub.add_argument("--x", type=float, default=DEFAULT_START_X, help="Left edge of the table")
        sub.add_argument("--y", type=float, help="Top edge of the table (default: near page top)")
        sub.add_argument(
            "--landscape",
            action="store_true",
            help="Use a landscape page",
        )

    render = subparsers.add_parser("render", help="Draw a table from a YAML or JSON file")
    render.add_argument("table", type=Path, help="Rows or table object file")
    add_common(render)

    sample = subparsers.add_parser("sample", help="Draw a generated sample table")
    sample.add_argument("--rows", type=int, default=15, help="Number of data rows")
    sample.add_argument("--seed", type=int, default=42, help="Random seed")
    add_common(sample)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    style = args.style
    if args.command == "sample":
        style = style or "zebra"
        rng = np.random.default_rng(args.seed)
        fake = Faker()
        fake.seed_instance(args.seed)
        table = generate_sample_table(rng, fake, args.rows)
        overrides_title = "Sample payments"
    else:
        table = load_table(args.table)
        overrides_title = None

    options = load_options(args.options, style=style)
    if overrides_title and not options.title.text:
        options.title.text = overrides_title

    try:
        result = render_to_pdf(
            table,
            args.out,
            options,
            start_x=args.x,
            start_y=args.y,
            orientation="landscape" if args.landscape else "portrait",
        )
    except DrawTableError as e:
        print(f"error: [{e.code.value}] {e}", file=sys.stderr)
        return 1

    print_summary(args.out, result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
