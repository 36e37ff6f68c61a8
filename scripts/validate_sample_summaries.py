#!/usr/bin/env python3
"""
Validate that the sample summary exports in tests/fixtures/ still parse as expected.

This script checks:
1. Every sample file has an entry in expected.json
2. Each sample parses to the expected category, buy-in, re-entries, result and currency
3. Samples expected to be unrecognized are skipped by the parser
4. Warns about expectations whose sample file no longer exists

Run (after `pip install -e .`): python scripts/validate_sample_summaries.py
"""

import json
import sys
from decimal import Decimal
from pathlib import Path

from dealsplit import SummaryParser


def load_expectations(expected_file: Path) -> dict:
    """Load filename -> expected fields (None = must be skipped)."""
    return json.loads(expected_file.read_text(encoding="utf-8"))


def check_sample(parser: SummaryParser, sample: Path, expected) -> list[str]:
    """Parse one sample and return a list of mismatch descriptions."""
    fact = parser.parse(sample.read_text(encoding="utf-8"), sample.name)

    if expected is None:
        if fact is not None:
            return [f"{sample.name}: expected to be skipped, parsed as {fact.name!r}"]
        return []

    if fact is None:
        return [f"{sample.name}: not recognized"]

    errors = []
    actual = {
        "category": fact.category.value,
        "buy_in": fact.buy_in,
        "re_entries": fact.re_entries,
        "result": fact.result,
        "currency_code": fact.currency_code,
    }
    for field, value in expected.items():
        want = Decimal(value) if field in ("buy_in", "result") else value
        if actual.get(field) != want:
            errors.append(f"{sample.name}: {field} is {actual.get(field)}, expected {want}")

    if fact.total_entries != fact.re_entries + 1:
        errors.append(f"{sample.name}: total_entries {fact.total_entries} != re_entries + 1")

    return errors


def main():
    # Find project root (where this script is in scripts/)
    script_dir = Path(__file__).parent
    project_root = script_dir.parent

    fixtures_dir = project_root / 'tests' / 'fixtures'
    expected_file = fixtures_dir / 'expected.json'

    if not expected_file.exists():
        print(f"❌ Expectations file not found: {expected_file}")
        sys.exit(1)

    expectations = load_expectations(expected_file)
    samples = sorted(fixtures_dir.glob('*.txt'))
    sample_names = {sample.name for sample in samples}

    parser = SummaryParser()
    errors = []
    warnings = []

    for sample in samples:
        if sample.name not in expectations:
            errors.append(f"Missing expectation: {sample.name}")
            continue
        errors.extend(check_sample(parser, sample, expectations[sample.name]))

    for name in sorted(set(expectations) - sample_names):
        warnings.append(f"Expectation without sample file: {name}")

    # Print results
    print("=" * 60)
    print("Sample Summary Validation")
    print("=" * 60)
    print(f"\nSamples found:      {len(samples)}")
    print(f"Expectations found: {len(expectations)}")

    if errors:
        print(f"\n❌ ERRORS ({len(errors)}):")
        for error in errors:
            print(f"   - {error}")

    if warnings:
        print(f"\n⚠️  WARNINGS ({len(warnings)}):")
        for warning in warnings:
            print(f"   - {warning}")

    if not errors and not warnings:
        print("\n✅ All samples parse as expected!")

    print("\n" + "=" * 60)

    if errors:
        sys.exit(1)

    sys.exit(0)


if __name__ == '__main__':
    main()
