"""Tests for citation deduplication."""

import random

from models.research import Citation
from research.citations import merge


def _c(url: str, title: str = "") -> Citation:
    return Citation(url=url, title=title)


def test_merge_keeps_first_seen_order():
    merged = merge([
        [_c("https://a"), _c("https://shared", "first")],
        [_c("https://shared", "second"), _c("https://b")],
    ])

    assert [c.url for c in merged] == ["https://a", "https://shared", "https://b"]
    assert merged[1].title == "first"


def test_merge_drops_duplicates_within_one_list():
    merged = merge([[_c("https://a"), _c("https://a"), _c("https://b"), _c("https://a")]])

    assert [c.url for c in merged] == ["https://a", "https://b"]


def test_merge_empty_inputs():
    assert merge([]) == []
    assert merge([[], []]) == []


def test_merge_never_returns_duplicate_keys():
    rng = random.Random(7)
    urls = [f"https://source/{i}" for i in range(6)]
    for _ in range(50):
        lists = [
            [_c(rng.choice(urls)) for _ in range(rng.randint(0, 8))]
            for _ in range(rng.randint(0, 5))
        ]

        keys = [c.key for c in merge(lists)]

        assert len(keys) == len(set(keys))
        assert set(keys) == {c.url for lst in lists for c in lst}
