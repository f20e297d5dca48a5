from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
FIXTURES = ROOT / "tests" / "fixtures"
for entry in (ROOT, FIXTURES):
    if str(entry) not in sys.path:
        sys.path.insert(0, str(entry))


@pytest.fixture(autouse=True)
def _fresh_fixture_modules(monkeypatch: pytest.MonkeyPatch) -> None:
    # Fixture modules keep call logs at module level; re-import them per test.
    for name in list(sys.modules):
        if name == "modhost_fixtures" or name.startswith("modhost_fixtures."):
            monkeypatch.delitem(sys.modules, name)
    monkeypatch.delenv("MODHOST_CONTEXT", raising=False)
