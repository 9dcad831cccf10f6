"""
Testing the pure guess scorer.
"""

from collections import Counter

import pytest

from dailyword.game import LengthMismatch, score_guess, is_solved

E, P, A = "exact", "present", "absent"


def test_all_letters_present_none_in_place():
    assert score_guess("route", "outer") == [P, P, P, P, P]


def test_repeated_letters_in_secret_and_guess():
    # b and t absent; both e and the final l sit in place, leaving nothing for "present"
    assert score_guess("level", "betel") == [A, E, A, E, E]


def test_exact_match_is_solved():
    marks = score_guess("crane", "crane")
    assert marks == [E] * 5
    assert is_solved(marks)


def test_no_common_letters():
    assert score_guess("crane", "pilot") == [A] * 5


def test_exact_letter_is_not_credited_again_as_present():
    # the only "e" in the secret is matched exactly, so the first "e" gets nothing
    assert score_guess("apple", "eerie") == [A, A, A, A, E]


def test_earlier_duplicate_claims_present_first():
    # only one "e" in the secret, the first guessed "e" takes it
    assert score_guess("abcde", "eexxx") == [P, A, A, A, A]


def test_length_mismatch_raises():
    with pytest.raises(LengthMismatch):
        score_guess("route", "rout")
    with pytest.raises(ValueError):
        score_guess("route", "routes")


def test_scoring_is_deterministic():
    assert score_guess("level", "betel") == score_guess("level", "betel")


@pytest.mark.parametrize(
    "secret,guess",
    [
        ("level", "betel"),
        ("route", "outer"),
        ("apple", "pappy"),
        ("sassy", "assss"),
        ("eerie", "level"),
        ("mamma", "ammam"),
    ],
)
def test_letter_credit_never_exceeds_secret_count(secret, guess):
    marks = score_guess(secret, guess)
    exact_positions = sum(1 for s, g in zip(secret, guess) if s == g)
    assert marks.count(E) == exact_positions

    credited = Counter(g for g, m in zip(guess, marks) if m != A)
    available = Counter(secret)
    for letter, n in credited.items():
        assert n <= available[letter]
