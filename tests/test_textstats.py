import string

import numpy as np
import pytest

from textstats import (
    CIPHER_ALPHABET, RUSSIAN, RUSSIAN_WITH_SPACE,
    Alphabet,
    monogram_frequencies, bigram_frequencies, bigram_matrix,
    entropy, max_entropy, redundancy, index_of_coincidence,
    rank_by_frequency,
    format_monogram_report, format_bigram_table, format_text_preview,
)

ENGLISH = Alphabet(string.ascii_lowercase)
ENGLISH_WITH_SPACE = Alphabet(string.ascii_lowercase + " ")

ENGLISH_SAMPLE = (
    "It was the best of times, it was the worst of times, it was the age of "
    "wisdom, it was the age of foolishness, it was the epoch of belief, it was "
    "the epoch of incredulity, it was the season of Light, it was the season "
    "of Darkness, it was the spring of hope, it was the winter of despair, we "
    "had everything before us, we had nothing before us, we were all going "
    "direct to Heaven, we were all going direct the other way."
)

RUSSIAN_SAMPLE = (
    "Все счастливые семьи похожи друг на друга, каждая несчастливая семья "
    "несчастлива по-своему. Всё смешалось в доме Облонских. Жена узнала, что "
    "муж был в связи с бывшею в их доме француженкою-гувернанткой, и объявила "
    "мужу, что не может жить с ним в одном доме."
)


# ----------------------------------------------------------------------------
# Alphabet
# ----------------------------------------------------------------------------

def test_alphabet_sizes():
    assert RUSSIAN.size == 33
    assert RUSSIAN_WITH_SPACE.size == 34
    assert CIPHER_ALPHABET.size == 31
    assert CIPHER_ALPHABET.modulus == 961


def test_alphabet_rejects_duplicates_and_bad_folds():
    with pytest.raises(ValueError):
        Alphabet("abca")
    with pytest.raises(ValueError):
        Alphabet("a")
    with pytest.raises(ValueError):
        Alphabet("abc", folds=(("x", "z"),))


def test_digraph_index_roundtrip():
    assert CIPHER_ALPHABET.digraph_index("ст") == 17 * 31 + 18
    assert CIPHER_ALPHABET.digraph_index("аа") == 0
    assert CIPHER_ALPHABET.digraph_index("яя") == 960
    for x in range(CIPHER_ALPHABET.modulus):
        assert CIPHER_ALPHABET.digraph_index(CIPHER_ALPHABET.digraph_letters(x)) == x


def test_digraph_index_rejects_bad_input():
    with pytest.raises(ValueError):
        CIPHER_ALPHABET.digraph_index("ё")
    with pytest.raises(ValueError):
        CIPHER_ALPHABET.digraph_index("ёж")


def test_normalize_without_space():
    assert ENGLISH.normalize("Hello, World!\n  42") == "helloworld"


def test_normalize_with_space_collapses_whitespace():
    text = "  Hello,   World!\n\tFoo-bar  "
    assert ENGLISH_WITH_SPACE.normalize(text) == "hello world foobar"


def test_normalize_applies_folds_before_filtering():
    assert CIPHER_ALPHABET.normalize("Ёлка, подъезд!") == "елкаподьезд"
    # Without folds the variants are simply dropped.
    assert Alphabet(CIPHER_ALPHABET.letters).normalize("Ёлка подъезд") == "лкаподезд"


# ----------------------------------------------------------------------------
# Frequencies
# ----------------------------------------------------------------------------

def test_monogram_frequencies_small_text():
    table = monogram_frequencies(Alphabet("abc"), "aab")
    assert table == pytest.approx({"a": 2 / 3, "b": 1 / 3, "c": 0.0})
    assert list(table) == ["a", "b", "c"]


def test_monogram_frequencies_empty_text():
    table = monogram_frequencies(ENGLISH, "123 !!")
    assert len(table) == 26
    assert all(p == 0.0 for p in table.values())


def test_bigram_sliding_counts_every_window():
    table = bigram_frequencies(Alphabet("ab"), "abab", sliding=True)
    assert table == pytest.approx({"aa": 0.0, "ab": 2 / 3, "ba": 1 / 3, "bb": 0.0})


def test_bigram_block_counts_pairs_and_drops_tail():
    table = bigram_frequencies(Alphabet("ab"), "ababa", sliding=False)
    assert table == pytest.approx({"aa": 0.0, "ab": 1.0, "ba": 0.0, "bb": 0.0})


def test_bigram_matrix_counts():
    alphabet = Alphabet("abc")
    sliding = bigram_matrix(alphabet, "abcab", sliding=True)
    block = bigram_matrix(alphabet, "abcab", sliding=False)
    assert sliding.sum() == 4
    assert sliding[0, 1] == 2  # ab
    assert sliding[1, 2] == 1  # bc
    assert sliding[2, 0] == 1  # ca
    assert block.sum() == 2
    assert block[0, 1] == 1  # ab
    assert block[2, 0] == 1  # ca


def test_bigram_frequencies_short_text_is_all_zero():
    table = bigram_frequencies(ENGLISH, "a", sliding=True)
    assert len(table) == 26 * 26
    assert sum(table.values()) == 0.0


@pytest.mark.parametrize("alphabet", [RUSSIAN, RUSSIAN_WITH_SPACE, CIPHER_ALPHABET])
def test_tables_sum_to_one_and_have_every_key(alphabet):
    mono = monogram_frequencies(alphabet, RUSSIAN_SAMPLE)
    assert len(mono) == alphabet.size
    assert sum(mono.values()) == pytest.approx(1.0)
    for sliding in (True, False):
        bi = bigram_frequencies(alphabet, RUSSIAN_SAMPLE, sliding=sliding)
        assert len(bi) == alphabet.size ** 2
        assert sum(bi.values()) == pytest.approx(1.0)


# ----------------------------------------------------------------------------
# Entropy and coincidence
# ----------------------------------------------------------------------------

def test_entropy_of_uniform_distribution():
    table = {c: 0.25 for c in "abcd"}
    assert entropy(table, 1) == pytest.approx(2.0)
    assert entropy(table, 2) == pytest.approx(1.0)


def test_entropy_ignores_zero_entries_and_empty_table():
    assert entropy({"a": 1.0, "b": 0.0}, 1) == pytest.approx(0.0)
    assert entropy({"a": 0.0, "b": 0.0}, 1) == 0.0
    with pytest.raises(ValueError):
        entropy({"a": 1.0}, 0)


def test_entropy_of_language_is_below_maximum():
    h1 = entropy(monogram_frequencies(RUSSIAN, RUSSIAN_SAMPLE), 1)
    h2 = entropy(bigram_frequencies(RUSSIAN, RUSSIAN_SAMPLE, sliding=True), 2)
    h0 = max_entropy(RUSSIAN.size)
    assert 0 < h2 < h1 < h0
    assert 0 < redundancy(h1, RUSSIAN.size) < 1


def test_max_entropy_and_redundancy():
    assert max_entropy(32) == pytest.approx(5.0)
    assert redundancy(5.0, 32) == pytest.approx(0.0)
    assert redundancy(2.5, 32) == pytest.approx(0.5)


def test_index_of_coincidence_values():
    assert index_of_coincidence("") == 0.0
    assert index_of_coincidence("a") == 0.0
    assert index_of_coincidence("aaaa") == pytest.approx(1.0)
    assert index_of_coincidence("abab") == pytest.approx(4 / 12)


def test_index_of_coincidence_language_vs_random():
    english = ENGLISH.normalize(ENGLISH_SAMPLE)
    assert index_of_coincidence(english) > 0.05

    rng = np.random.default_rng(42)
    letters = np.array(list(string.ascii_lowercase))
    rejected = 0
    for _ in range(50):
        noise = "".join(rng.choice(letters, size=len(english)))
        if index_of_coincidence(noise) <= 0.05:
            rejected += 1
    assert rejected >= 48


# ----------------------------------------------------------------------------
# Ranking and output
# ----------------------------------------------------------------------------

def test_rank_by_frequency_descending_with_table_order_ties():
    table = {"a": 0.1, "b": 0.4, "c": 0.1, "d": 0.4, "e": 0.0}
    assert rank_by_frequency(table) == ["b", "d", "a", "c", "e"]


def test_rank_is_deterministic_for_all_zero_table():
    table = bigram_frequencies(ENGLISH, "", sliding=False)
    assert rank_by_frequency(table) == list(table)


def test_format_monogram_report():
    report = format_monogram_report({"a": 0.25, "b": 0.75})
    assert report.splitlines() == [
        "letter  frequency",
        "     b 0.75000000",
        "     a 0.25000000",
    ]


def test_format_bigram_table_groups_columns_by_seven():
    alphabet = Alphabet("abcdefghi")
    table = bigram_frequencies(alphabet, "abcdefghi", sliding=True)
    lines = format_bigram_table(alphabet, table).splitlines()
    # Two column groups (7 + 2), each a header plus one row per letter.
    assert len(lines) == 2 * (1 + 9)
    assert lines[0] == " " + "".join(f" {c:>10}" for c in "abcdefg")
    assert lines[1] == "a 0.00000000 0.12500000" + " 0.00000000" * 5
    assert lines[10] == " " + "".join(f" {c:>10}" for c in "hi")
    assert lines[18] == "h 0.00000000 0.12500000"


def test_format_text_preview_wraps():
    preview = format_text_preview("x" * 150, width=70).splitlines()
    assert len(preview) == 3
    assert preview[1].startswith("     70: ")
