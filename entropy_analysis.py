"""
---
version: 0.1.0
created: 2026-10-18
updated: 2026-10-18
---

entropy_analysis.py — Entropy and redundancy of Russian text.

Estimates H1 (monograms) and H2 (bigrams) with and without spaces, for both
overlapping ("intersected") and block ("not intersected") bigram counting,
and the redundancy R = 1 - H / H0 with H0 = log2 of the 33-letter alphabet.
Frequency tables are written as plain-text reports.

Usage:
    python3 entropy_analysis.py TEXT [--save-dir DIR] [--no-plots]
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from textstats import (
    RUSSIAN, RUSSIAN_WITH_SPACE,
    Alphabet,
    monogram_frequencies, bigram_frequencies,
    entropy, max_entropy, redundancy,
    format_monogram_report, format_bigram_table,
    plot_monogram_frequencies,
)


def _space_label(alphabet: Alphabet) -> str:
    return "with spaces" if " " in alphabet else "without spaces"


def analyse_text(raw_text: str) -> list[dict]:
    """
    Compute every entropy estimate for a text.

    Returns a list of dicts, one per estimate, each with:
        name: report label (e.g. "H1 with spaces")
        order: n-gram order
        alphabet: the Alphabet used
        sliding: bigram mode (None for monograms)
        table: the frequency table
        entropy, redundancy: bits per symbol and 1 - H / H0
        report_name: file name for the frequency report
    """
    # H0 is always taken over the letters, with or without the space symbol.
    size = RUSSIAN.size
    results: list[dict] = []

    for alphabet in (RUSSIAN_WITH_SPACE, RUSSIAN):
        label = _space_label(alphabet)
        table = monogram_frequencies(alphabet, raw_text)
        h = entropy(table, 1)
        results.append({
            "name": f"H1 {label}",
            "order": 1,
            "alphabet": alphabet,
            "sliding": None,
            "table": table,
            "entropy": h,
            "redundancy": redundancy(h, size),
            "report_name": f"monograms {label}.txt",
        })

    for sliding in (True, False):
        mode = "intersected" if sliding else "not intersected"
        for alphabet in (RUSSIAN_WITH_SPACE, RUSSIAN):
            label = _space_label(alphabet)
            table = bigram_frequencies(alphabet, raw_text, sliding=sliding)
            h = entropy(table, 2)
            results.append({
                "name": f"H2 for {mode} {label}",
                "order": 2,
                "alphabet": alphabet,
                "sliding": sliding,
                "table": table,
                "entropy": h,
                "redundancy": redundancy(h, size),
                "report_name": f"{mode} bigrams {label}.txt",
            })

    return results


def format_summary(results: list[dict]) -> str:
    """H0/R0 followed by every H/R pair, one per line."""
    h0 = max_entropy(RUSSIAN.size)
    lines = [f"{'H0':<37} = {h0:f}", f"{'R0':<37} = {redundancy(h0, RUSSIAN.size):f}"]
    for r in results:
        r_name = "R" + r["name"][1:]
        lines.append(f"{r['name']:<37} = {r['entropy']:f}")
        lines.append(f"{r_name:<37} = {r['redundancy']:f}")
    return "\n".join(lines)


def write_reports(results: list[dict], save_dir: Path) -> list[Path]:
    """Write one frequency report per estimate. Returns the paths written."""
    save_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for r in results:
        if r["order"] == 1:
            body = format_monogram_report(r["table"])
        else:
            body = format_bigram_table(r["alphabet"], r["table"])
        path = save_dir / r["report_name"]
        path.write_text(body, encoding="utf-8")
        written.append(path)
    return written


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Entropy and redundancy of Russian text")
    parser.add_argument("text", type=str, help="Path to the sample text file")
    parser.add_argument("--save-dir", type=str, default=".", help="Directory for reports")
    parser.add_argument("--no-plots", action="store_true", help="Skip plot generation")
    args = parser.parse_args(argv)

    path = Path(args.text)
    if not path.is_file():
        print(f"Text file not found: {path}", file=sys.stderr)
        sys.exit(2)
    raw_text = path.read_text(encoding="utf-8")
    save_dir = Path(args.save_dir)

    print("=" * 70)
    print("ENTROPY AND REDUNDANCY")
    print(f"Source: {path}")
    print("=" * 70)

    results = analyse_text(raw_text)
    print(format_summary(results))

    print("\nWriting frequency reports...")
    for written in write_reports(results, save_dir):
        print(f"  {written}")

    if not args.no_plots:
        print("\nGenerating plots...")
        for r in results:
            if r["order"] == 1:
                name = r["report_name"].replace(".txt", ".png")
                plot_monogram_frequencies(r["table"], title=r["name"], save_path=save_dir / name)


if __name__ == "__main__":
    main()
