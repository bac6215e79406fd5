from __future__ import annotations

import itertools

import pytest

from raceready.matching.identity import matches_identity, name_tokens


def test_name_tokens_normalize_case_punctuation_and_order() -> None:
    assert name_tokens("Smith, Jane") == ["jane", "smith"]
    assert name_tokens("  O'Brien-Ng   Tom ") == ["obrienng", "tom"]
    assert name_tokens("1234 ...") == []


@pytest.mark.parametrize(
    ("query", "candidate"),
    [
        ("Smith, Jane", "Jane Smith"),
        ("JANE SMITH", "jane smith"),
        ("Sam Lee", "Samuel Lee"),
        ("Jane Smith", "Smith, Jane Marie"),
        ("Lee", "Lee, Samuel"),
    ],
)
def test_matching_names(query: str, candidate: str) -> None:
    assert matches_identity(query, candidate) is True


@pytest.mark.parametrize(
    ("query", "candidate"),
    [
        ("Jane Smith", "John Smith"),
        ("Jane Smith", "Jane Doe"),
        ("Ana Lopez", "Ben Lopez"),
        ("", "Jane Smith"),
        ("Jane Smith", "---"),
    ],
)
def test_non_matching_names(query: str, candidate: str) -> None:
    assert matches_identity(query, candidate) is False


def test_matching_is_symmetric() -> None:
    names = [
        "Smith, Jane",
        "Jane Smith",
        "Jan Smith",
        "Janet Smith",
        "Sam Lee",
        "Samuel Lee",
        "Lee",
        "Jane Marie Smith",
        "",
        "J. Smith",
    ]

    for left, right in itertools.product(names, repeat=2):
        assert matches_identity(left, right) == matches_identity(right, left), (left, right)
