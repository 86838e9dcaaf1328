import logging
import sys
from pathlib import Path

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))


class ScriptedRandom:
    """Stand-in for RandomSource that replays a fixed list of draws.

    ``range`` and ``random`` return the next value as-is; ``choice`` treats
    the next value as an index into the sequence.
    """

    def __init__(self, values):
        self.values = list(values)
        self.calls = []

    def _next(self, kind):
        if not self.values:
            raise AssertionError(f"ScriptedRandom exhausted on {kind}()")
        self.calls.append(kind)
        return self.values.pop(0)

    def range(self, lo, hi):
        v = self._next("range")
        assert lo <= v < hi, f"scripted {v} outside [{lo}, {hi})"
        return v

    def random(self):
        return self._next("random")

    def choice(self, seq):
        return seq[self._next("choice")]

    def weighted_choice(self, weights):
        v = self._next("weighted_choice")
        assert v in weights
        return v


@pytest.fixture
def scripted():
    return ScriptedRandom


@pytest.fixture(autouse=True)
def _restore_package_logger():
    pkg_logger = logging.getLogger("catacomb")
    handlers, level = list(pkg_logger.handlers), pkg_logger.level
    yield
    pkg_logger.handlers[:] = handlers
    pkg_logger.setLevel(level)
