#!/usr/bin/env python3

"""
Benchmark csvtable's table operations against the nearest pandas / polars calls

Each library runs the same steps on the same generated document:
parse, insert and drop a column, stable sort by the first column,
render back to CSV, and render aligned text.

# Install dependencies
pip install -e ".[bench]"

# 50 thousand rows × 8 columns
python scripts/benchmark_python.py --rows 50000 --cols 8

# Only csvtable
python scripts/benchmark_python.py --only csvtable
"""

import argparse
import io
import random
import time

STEPS = ('parse', 'insert+drop column', 'sort', 'to csv', 'aligned')


def generate_csv(rows: int, cols: int, seed: int = 0) -> str:
    """Build a CSV document with quoted fields and blank cells sprinkled in."""
    rng = random.Random(seed)
    lines = [','.join(f'col{i}' for i in range(cols))]
    for row_num in range(rows):
        fields = [f'k{rng.randrange(rows):07d}']
        for i in range(1, cols):
            roll = rng.random()
            if roll < 0.05:
                fields.append('')
            elif roll < 0.15:
                fields.append(f'"v{row_num}, {i}"')
            else:
                fields.append(f'v{row_num}_{i}')
        lines.append(','.join(fields))
    return '\n'.join(lines)


def _timed(fn, *args):
    start = time.perf_counter()
    result = fn(*args)
    return result, time.perf_counter() - start


def run_csvtable(content: str) -> dict:
    import csvtable

    timings = {}
    table, timings['parse'] = _timed(csvtable.CsvTable, content)

    def insert_drop():
        table.insert_column(1)
        table.remove_column(1)

    _, timings['insert+drop column'] = _timed(insert_drop)
    _, timings['sort'] = _timed(lambda: table.sort(key=lambda row: row.get(0) or ''))
    _, timings['to csv'] = _timed(table.to_string)
    _, timings['aligned'] = _timed(table.to_aligned_string)
    return timings


def run_pandas(content: str) -> dict:
    import pandas as pd

    timings = {}
    df, timings['parse'] = _timed(lambda: pd.read_csv(io.StringIO(content), dtype=str))

    def insert_drop():
        df.insert(1, '_new', None)
        return df.drop(columns='_new')

    df, timings['insert+drop column'] = _timed(insert_drop)
    df, timings['sort'] = _timed(lambda: df.sort_values(df.columns[0], kind='stable'))
    _, timings['to csv'] = _timed(lambda: df.to_csv(index=False))
    _, timings['aligned'] = _timed(lambda: df.to_string(index=False))
    return timings


def run_polars(content: str) -> dict:
    import polars as pl

    timings = {}
    df, timings['parse'] = _timed(
        lambda: pl.read_csv(io.BytesIO(content.encode('utf-8')), infer_schema_length=0)
    )

    def insert_drop():
        widened = df.insert_column(1, pl.Series('_new', [None] * df.height, dtype=pl.Utf8))
        return widened.drop('_new')

    df, timings['insert+drop column'] = _timed(insert_drop)
    df, timings['sort'] = _timed(lambda: df.sort(df.columns[0], maintain_order=True))
    _, timings['to csv'] = _timed(df.write_csv)
    with pl.Config(tbl_rows=-1, tbl_cols=-1):
        _, timings['aligned'] = _timed(lambda: str(df))
    return timings


RUNNERS = {
    'csvtable': run_csvtable,
    'pandas': run_pandas,
    'polars': run_polars,
}


def main():
    parser = argparse.ArgumentParser(description='Benchmark table operations')
    parser.add_argument('--rows', type=int, default=50_000, help='Number of data rows')
    parser.add_argument('--cols', type=int, default=8, help='Number of columns')
    parser.add_argument('--only', choices=sorted(RUNNERS), action='append',
                        help='Run only this library (repeatable)')
    args = parser.parse_args()

    content = generate_csv(args.rows, args.cols)
    print(f"Document: {args.rows:,} rows × {args.cols} columns, "
          f"{len(content) / 1024**2:.1f} MB of text\n")

    results = {}
    for name in args.only or RUNNERS:
        try:
            results[name] = RUNNERS[name](content)
        except ImportError as e:
            print(f"{name}: skipped ({e.name} not installed)")

    if not results:
        return

    header = f"{'Step':<20}" + ''.join(f"{name:>12}" for name in results)
    print(header)
    print('-' * len(header))
    for step in STEPS:
        print(f"{step:<20}" + ''.join(f"{results[name][step]:>11.3f}s" for name in results))


if __name__ == '__main__':
    main()
