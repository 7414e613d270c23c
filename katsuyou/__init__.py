"""
Katsuyou: Japanese conjugation tables
Builds the full paradigm of a verb or adjective from JMdict-style rules.
"""

import time
from typing import Tuple

__version__ = "0.1.0"

from katsuyou.conjugations import (  # noqa: E402
    Conjugations,
    Conjugator,
    Variant,
    conjugate,
    construct_conjugation,
    get_default_conjugator,
)
from katsuyou.constants import ConjType  # noqa: E402
from katsuyou.errors import ConfigurationError  # noqa: E402
from katsuyou.pos import PosClass, PosResolver  # noqa: E402
from katsuyou.rules import ConjugationRule, RuleTable, load_conj_rules  # noqa: E402


def warm_up(verbose: bool = False) -> Tuple[float, int]:
    """
    Load the bundled rule table before the first conjugation request.

    Call this once at application startup (before starting worker
    threads) to avoid paying the load cost on the first request.

    Args:
        verbose: If True, print timing information.

    Returns:
        Tuple of (elapsed_seconds, number_of_rules)

    Example:
        >>> import katsuyou
        >>> elapsed, rules = katsuyou.warm_up()
        >>> katsuyou.conjugate("美味しい", "adj-i").past[0].plain
        '美味しかった'
    """
    t0 = time.perf_counter()
    conjugator = get_default_conjugator()
    elapsed = time.perf_counter() - t0
    if verbose:
        print(f"Loaded {len(conjugator.rules)} rules in {elapsed * 1000:.1f}ms")
    return elapsed, len(conjugator.rules)


__all__ = [
    "ConfigurationError",
    "ConjType",
    "ConjugationRule",
    "Conjugations",
    "Conjugator",
    "PosClass",
    "PosResolver",
    "RuleTable",
    "Variant",
    "conjugate",
    "construct_conjugation",
    "get_default_conjugator",
    "load_conj_rules",
    "warm_up",
]
