"""
Tests for English frequency scoring
"""

import pytest

from cryptoscope.core.text_scorer import CHAR_FREQUENCIES, score_bytes, score_text


def test_table_covers_letters_and_space():
    assert set(CHAR_FREQUENCIES) == set("abcdefghijklmnopqrstuvwxyz ")
    assert CHAR_FREQUENCIES['a'] == 653
    assert CHAR_FREQUENCIES[' '] == 1829


def test_table_is_read_only():
    with pytest.raises(TypeError):
        CHAR_FREQUENCIES['a'] = 1


def test_score_is_case_insensitive():
    assert score_text("Hello World") == score_text("hello world")


def test_score_sums_weights():
    assert score_text("ab ") == 653 + 126 + 1829


def test_unknown_characters_score_zero():
    assert score_text("123!?\n\x00") == 0
    assert score_text("") == 0


def test_english_beats_noise():
    assert score_text("the cat sat on the mat") > score_text("#$%^&*()_+{}|:<>?~`[]")


def test_score_bytes_undecodable_is_zero():
    assert score_bytes(b"\xff\xfe\xfa") == 0
    assert score_bytes(b"abc") == score_text("abc")
