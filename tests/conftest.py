"""
Test Configuration and Fixtures
================================

Shared pytest fixtures for the code layers test suite.

Usage:
    pytest tests/                    # Run all tests
    pytest tests/ -v                 # Verbose output
    pytest tests/ -k "index"         # Run only index tests
    pytest tests/ --quick            # Skip slow tests
"""

import pytest
import json
import tempfile
from pathlib import Path
from typing import Dict, Any

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from codelayers.core import FileInfo, Layer


# =============================================================================
# Custom Markers
# =============================================================================

def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line("markers", "slow: marks tests as slow")
    config.addinivalue_line("markers", "integration: marks integration tests")


def pytest_addoption(parser):
    """Add custom command line options"""
    parser.addoption(
        "--quick",
        action="store_true",
        default=False,
        help="Skip slow tests",
    )


def pytest_collection_modifyitems(config, items):
    """Skip slow tests if --quick is specified"""
    if config.getoption("--quick"):
        skip_slow = pytest.mark.skip(reason="Skipped with --quick")
        for item in items:
            if "slow" in item.keywords:
                item.add_marker(skip_slow)


# =============================================================================
# Layer Fixtures
# =============================================================================

@pytest.fixture
def deadcode_layer() -> Layer:
    """Dead code layer over two files"""
    return Layer(
        files=[
            ("src/a.py", FileInfo(
                micro_level=[(1, "dead"), (2, "dead"), (3, "dead")],
                macro_level=[("dead_file", 0.3)],
            )),
            ("lib/b.py", FileInfo(
                micro_level=[(10, "dead")],
                macro_level=[("dead_file", 0.1)],
            )),
        ],
        kinds=[("dead", "red"), ("dead_file", "grey53")],
    )


@pytest.fixture
def coverage_layer() -> Layer:
    """Coverage layer overlapping the dead code layer on src/a.py line 3"""
    return Layer(
        files=[
            ("src/a.py", FileInfo(
                micro_level=[(3, "covered"), (4, "not_covered")],
                macro_level=[("covered", 0.5), ("not_covered", 0.5)],
            )),
        ],
        kinds=[("covered", "green"), ("not_covered", "yellow")],
    )


@pytest.fixture
def layer_json() -> Dict[str, Any]:
    """The deadcode layer in its JSON form"""
    return {
        "files": [
            ["src/a.py", {
                "micro_level": [[1, "dead"], [2, "dead"], [3, "dead"]],
                "macro_level": [["dead_file", 0.3]],
            }],
            ["lib/b.py", {
                "micro_level": [[10, "dead"]],
                "macro_level": [["dead_file", 0.1]],
            }],
        ],
        "kinds": [["dead", "red"], ["dead_file", "grey53"]],
    }


# =============================================================================
# File Fixtures
# =============================================================================

@pytest.fixture
def temp_dir():
    """Temporary directory for test outputs"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def layer_file(layer_json, temp_dir) -> Path:
    """Deadcode layer saved as JSON"""
    filepath = temp_dir / "deadcode.json"
    with open(filepath, "w") as f:
        json.dump(layer_json, f)
    return filepath
