from __future__ import annotations

import hashlib
import json
import logging
import random
import secrets
from dataclasses import dataclass
from typing import Any, Dict, List, Sequence, Union

logger = logging.getLogger(__name__)

Seed = Union[int, str, bytes, None]

# blake2b personalization; bump when the derivation changes
_PERSON = b"catacomb-seed-v2"


def canonicalize_seed(seed: Seed) -> bytes:
    """Bytes that identify a master seed.

    Ints are taken by their decimal text, so ``5`` and ``"5"`` name the same
    run and negative seeds are accepted.
    """
    if seed is None:
        return b""
    if isinstance(seed, bytes):
        return seed
    if isinstance(seed, int):
        return str(seed).encode("ascii")
    if isinstance(seed, str):
        return seed.strip().encode("utf-8")
    raise TypeError("Unsupported seed type: %r" % (type(seed),))


def derive_seed(master: Seed, *identifiers: Any) -> int:
    """Derive a 64-bit integer seed from a master seed and identifiers.

    ``derive_seed("run-1", "level", 5)`` always yields the same value, so a
    level can be regenerated without replaying the levels before it. A
    ``None`` master seed is replaced by fresh random bytes (and logged).
    """
    if master is None:
        raw = secrets.token_bytes(16)
        logger.info("No master seed provided; generated random seed: %s", raw.hex())
    else:
        raw = canonicalize_seed(master)
    h = hashlib.blake2b(raw, digest_size=8, person=_PERSON)
    h.update(json.dumps(list(identifiers), separators=(",", ":")).encode("utf-8"))
    seed_int = int.from_bytes(h.digest(), "big")
    logger.debug("Derived seed ids=%s -> %d", identifiers, seed_int)
    return seed_int


@dataclass
class RandomSource:
    """
    A thin wrapper around random.Random that is passed explicitly through
    every generation phase:
    - exclusive-upper integer range draws
    - floats in [0, 1)
    - uniform and weighted choice

    Two sources built from the same seed and consumed in the same order
    produce the same draws.
    """

    seed: int | None = None

    def __post_init__(self) -> None:
        if self.seed is not None:
            self._rng = random.Random(self.seed)
            logger.debug("Initialized RandomSource with deterministic seed=%s", self.seed)
        else:
            self._rng = random.Random()
            logger.debug("Initialized RandomSource with non-deterministic seed")

    def range(self, lo: int, hi: int) -> int:
        """Uniform integer in ``[lo, hi)``."""
        if hi <= lo:
            raise ValueError(f"RandomSource.range() received an empty range [{lo}, {hi})")
        return self._rng.randrange(lo, hi)

    def random(self) -> float:
        return self._rng.random()

    def choice(self, seq: Sequence[Any]) -> Any:
        if not seq:
            raise ValueError("RandomSource.choice() received an empty sequence")
        return seq[self._rng.randrange(0, len(seq))]

    def weighted_choice(self, weights: Dict[Any, float]) -> Any:
        """
        Select a key from a dictionary of weights where values are non-negative numbers.
        If all weights are zero, raises ValueError.
        """
        if not weights:
            raise ValueError("weighted_choice requires a non-empty weights mapping")

        keys: List[Any] = []
        cumulative: List[float] = []
        total = 0.0
        for k, w in weights.items():
            if w < 0:
                raise ValueError(f"Weight for {k!r} must be non-negative, got {w}")
            if w == 0:
                continue
            total += w
            keys.append(k)
            cumulative.append(total)

        if total == 0:
            raise ValueError("All weights are zero; cannot make a weighted choice")

        r = self._rng.random() * total
        for i, c in enumerate(cumulative):
            if r < c:
                return keys[i]
        return keys[-1]


__all__ = ["RandomSource", "derive_seed", "canonicalize_seed"]
