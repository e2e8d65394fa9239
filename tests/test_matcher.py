"""Unit tests for wildcard name matching."""

from __future__ import annotations

import pytest

from services.matcher import effective_name, has_wildcard, match_keys

_READINGS = {"a.b.x": 1.0, "a.b.y": 2.0, "a.c.x": 3.0}


def test_effective_name_omits_empty_graph_name() -> None:
    assert effective_name("", "uptime") == "uptime"
    assert effective_name("dice", "d6") == "dice.d6"
    assert effective_name("inode.percentage.#", "used") == "inode.percentage.#.used"


def test_has_wildcard_only_for_whole_segments() -> None:
    assert has_wildcard("a.*.x")
    assert has_wildcard("a.b.#")
    assert not has_wildcard("a.b.x")
    assert not has_wildcard("a.b*.x")


def test_literal_pattern_denotes_itself() -> None:
    assert list(match_keys("a.b.x", _READINGS)) == ["a.b.x"]
    assert list(match_keys("a.b.z", _READINGS)) == []


def test_wildcard_matches_single_segment() -> None:
    assert set(match_keys("a.*.x", _READINGS)) == {"a.b.x", "a.c.x"}
    assert set(match_keys("a.#.x", _READINGS)) == {"a.b.x", "a.c.x"}
    assert set(match_keys("a.b.*", _READINGS)) == {"a.b.x", "a.b.y"}


def test_wildcard_requires_same_segment_count() -> None:
    assert list(match_keys("a.*.x.etc", _READINGS)) == []
    assert list(match_keys("*.x", _READINGS)) == []


def test_wildcard_rejects_empty_and_foreign_segments() -> None:
    readings = {
        "percentage.sda1.used": 48.2,
        "percentage.sda-2_1Z.used": 63.7,
        "percentage.sda3.used.etc": 72.1,
        "percentage..used": 36.2,
        "percentage.sd a.used": 1.0,
        "percentage.sda%.used": 2.0,
    }

    assert set(match_keys("percentage.#.used", readings)) == {
        "percentage.sda1.used",
        "percentage.sda-2_1Z.used",
    }


def test_wildcards_at_every_position() -> None:
    assert set(match_keys("*.*.*", _READINGS)) == set(_READINGS)


def test_empty_pattern_is_rejected() -> None:
    with pytest.raises(ValueError):
        list(match_keys("", _READINGS))
