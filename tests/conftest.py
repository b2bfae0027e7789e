"""Pytest configuration.

This repo follows the `src/` layout. Some environments may invoke a `pytest`
entrypoint from a different Python install than the one used for
`python -m pip install -e ...`, which can cause `import lecoal` to fail.

To keep the suite robust, we ensure `src/` is on `sys.path` during tests.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


def pytest_configure() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    src_dir = repo_root / "src"
    sys.path.insert(0, str(src_dir))


# =============================================================================
# Shared bundle fixtures
# =============================================================================


def make_bundle(name: str, files: dict[str, list[tuple[str, list[tuple[str, str]]]]]) -> "Bundle":
    """Build a Bundle from {file_name: [(section_name, [(key, value), ...]), ...]}.

    Dict insertion order is the file order.
    """
    from lecoal.core.model import Bundle, File, Section

    return Bundle(
        name,
        tuple(
            File(file_name, tuple(Section.from_pairs(sec_name, pairs) for sec_name, pairs in sections))
            for file_name, sections in files.items()
        ),
    )


@pytest.fixture
def scenario_bundle():
    """The `Coalesced_INT.bin` scenario: one file, one section, one multiline pair."""
    return make_bundle(
        "Coalesced_INT.bin",
        {
            "BIOGame/Config.ini": [
                (
                    "Engine.Settings",
                    [("bFullscreen", "True"), ("sDescription", "Line1\r\nLine2")],
                ),
            ],
        },
    )


@pytest.fixture
def rich_bundle():
    """Several files with empty sections, duplicate keys/sections and odd values."""
    return make_bundle(
        "Coalesced_ENU.bin",
        {
            "..\\..\\BIOGame\\Config\\BIOEngine.ini": [
                ("Core.System", [("Paths", "..\\..\\Engine\\Content"), ("Paths", "..\\BIOGame\\Content")]),
                ("Engine.Engine", []),
                ("Core.System", [("Extensions", "upk")]),
            ],
            "BIOGame/Localization/INT/BIOGame.int": [
                (
                    "BIOUI",
                    [
                        ("sTitle", ""),
                        ("sBody", "first\nsecond\nthird"),
                        ("sMac", "a\rb\rc\rd"),
                        ("sWin", "x\r\ny\r\n\r\nz"),
                        ("  spaced key ", " value = with equals "),
                    ],
                ),
            ],
            "Empty.ini": [],
        },
    )
