#!/usr/bin/env python3
"""
Validate that test_scenarios_business_summary.md stays in sync with test_integration_scenarios.py.

This script checks:
1. All scenario classes in the test file are documented
2. All scenario methods are referenced in the doc
3. Warns about documented scenarios that no longer exist

Run: python scripts/validate_test_docs_sync.py
"""

import re
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
TEST_FILE = PROJECT_ROOT / 'tests' / 'test_integration_scenarios.py'
DOC_FILE = PROJECT_ROOT / 'docs' / 'test_scenarios_business_summary.md'

CLASS_PATTERN = re.compile(r'^class (Test\w+)')
METHOD_PATTERN = re.compile(r'^\s+def (test_\w+)')
DOC_CLASS_PATTERN = re.compile(r'\*\*Scenario Group\*\*:\s*`(Test\w+)`')
DOC_METHOD_PATTERN = re.compile(r'\*\*Test\*\*:\s*`(test_\w+)`')


def scenario_tests(test_file: Path) -> dict[str, list[str]]:
    """Map each scenario class in the test file to its test methods."""
    classes: dict[str, list[str]] = {}
    current_class = None

    for line in test_file.read_text().splitlines():
        class_match = CLASS_PATTERN.match(line)
        if class_match:
            current_class = class_match.group(1)
            classes[current_class] = []
            continue

        method_match = METHOD_PATTERN.match(line)
        if current_class and method_match:
            classes[current_class].append(method_match.group(1))

    return classes


def documented_tests(doc_file: Path) -> tuple[set[str], set[str]]:
    """Class and method names referenced in the business summary."""
    content = doc_file.read_text()
    return set(DOC_CLASS_PATTERN.findall(content)), set(DOC_METHOD_PATTERN.findall(content))


def find_sync_problems(test_file: Path, doc_file: Path) -> tuple[list[str], list[str]]:
    """
    Compare tests with documentation.

    Returns (errors, warnings): errors are undocumented tests, warnings are
    documented tests that no longer exist.
    """
    classes = scenario_tests(test_file)
    doc_classes, doc_methods = documented_tests(doc_file)
    methods = {method for names in classes.values() for method in names}

    errors = [f"Missing class documentation: {cls}" for cls in sorted(set(classes) - doc_classes)]
    errors += [f"Missing method documentation: {m}" for m in sorted(methods - doc_methods)]
    warnings = [f"Documented class no longer exists: {cls}" for cls in sorted(doc_classes - set(classes))]
    warnings += [f"Documented method no longer exists: {m}" for m in sorted(doc_methods - methods)]
    return errors, warnings


def main():
    for path in (TEST_FILE, DOC_FILE):
        if not path.exists():
            print(f"❌ File not found: {path}")
            sys.exit(1)

    errors, warnings = find_sync_problems(TEST_FILE, DOC_FILE)
    classes = scenario_tests(TEST_FILE)
    doc_classes, doc_methods = documented_tests(DOC_FILE)

    print("=" * 60)
    print("Scenario Documentation Sync Validation")
    print("=" * 60)
    print(f"\nScenario groups found: {len(classes)}")
    print(f"Scenarios found:       {sum(len(m) for m in classes.values())}")

    if errors:
        print(f"\n❌ ERRORS ({len(errors)}):")
        for error in errors:
            print(f"   - {error}")

    if warnings:
        print(f"\n⚠️  WARNINGS ({len(warnings)}):")
        for warning in warnings:
            print(f"   - {warning}")

    if not errors and not warnings:
        print("\n✅ All scenarios are documented and in sync!")

    print("\nCoverage by Scenario Group:")
    for cls, methods in sorted(classes.items()):
        print(f"\n  {'✅' if cls in doc_classes else '❌'} {cls}")
        for method in methods:
            print(f"      {'✅' if method in doc_methods else '❌'} {method}")

    sys.exit(1 if errors else 0)


if __name__ == '__main__':
    main()
