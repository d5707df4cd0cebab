"""
Functional tests compiling the schemas of test_data/functional.

Each test case lists fragments that must (or must not) appear in the joined
output.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from schema_compiler import CompilerConfig, SchemaCompiler


def load_all_test_cases():
    """Load all test cases from all JSON files in test_data/functional directory."""
    functional_dir = Path(__file__).parent / "test_data" / "functional"
    test_cases = []

    for json_file in sorted(functional_dir.glob("*_tests.json")):
        with open(json_file) as f:
            data = json.load(f)

        for test_case in data:
            test_case["_source_file"] = json_file.name
            test_cases.append(test_case)

    return test_cases


def _compile(schema, config_dict):
    config = CompilerConfig.from_dict(config_dict or {})
    return "\n".join(SchemaCompiler(config).compile_schema(schema))


@pytest.mark.parametrize("test_case", load_all_test_cases(), ids=lambda test_case: test_case["name"])
def test_functional_generation(test_case):
    """Unified test for all JSON test cases using a single pattern."""
    name = test_case["name"]
    source_file = test_case.get("_source_file", "unknown")
    print(f"\nTesting: {name} (from {source_file})")
    print(f"Description: {test_case['description']}")

    generated_code = _compile(test_case["schema"], test_case.get("config"))

    for pattern in test_case.get("expected_contains", []):
        assert pattern in generated_code, f"Expected pattern '{pattern}' not found in output"

    for pattern in test_case.get("expected_not_contains", []):
        assert pattern not in generated_code, f"Unexpected pattern '{pattern}' found in output"


if __name__ == "__main__":
    pytest.main([__file__])
