from __future__ import annotations

import pytest

from branching_corpses.core.endings import EndingResolver, resolve_ending


def test_boundary_values_map_deterministically() -> None:
    resolver = EndingResolver()
    assert resolver.resolve(0) == "losing"
    assert resolver.resolve(0.0001) == "retribution"
    assert resolver.resolve(19.999) == "retribution"
    assert resolver.resolve(20) == "hero"
    assert resolver.resolve(100) == "hero"


def test_resolver_is_total_over_negative_and_large_inputs() -> None:
    resolver = EndingResolver()
    assert resolver.resolve(-1e9) == "losing"
    assert resolver.resolve(-0.5) == "losing"
    assert resolver.resolve(1e9) == "hero"


def test_resolver_is_monotonic() -> None:
    order = {"losing": 0, "retribution": 1, "hero": 2}
    values = [-10 + index * 0.25 for index in range(200)]
    ranks = [order[resolve_ending(value)] for value in values]
    assert ranks == sorted(ranks)


def test_thresholds_are_configurable() -> None:
    resolver = EndingResolver(losing_max=10.0, hero_min=60.0)
    assert resolver.resolve(10.0) == "losing"
    assert resolver.resolve(30.0) == "retribution"
    assert resolver.resolve(60.0) == "hero"


def test_inverted_thresholds_are_rejected() -> None:
    with pytest.raises(ValueError, match="hero_min"):
        EndingResolver(losing_max=20.0, hero_min=20.0)
