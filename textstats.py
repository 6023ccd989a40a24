"""
---
version: 0.2.0
created: 2026-10-18
updated: 2026-10-18
---

textstats.py — Shared module for n-gram statistics over a fixed alphabet.

Six sections:
  1. Data constants (alphabets, reference bigrams, plausibility threshold)
  2. Alphabet and text normalization
  3. N-gram frequency tables (monograms, sliding and block bigrams)
  4. Entropy, redundancy, index of coincidence
  5. Ranking
  6. Output utils (frequency reports, plots)
"""

from __future__ import annotations

import math
import re
import warnings
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path

import numpy as np
from scipy import stats as sp_stats


# ============================================================================
# 1. DATA CONSTANTS
# ============================================================================

# Full Russian alphabet, used for entropy estimates.
RUSSIAN_LETTERS = "абвгдеёжзийклмнопрстуфхцчшщъыьэюя"

# Cipher alphabet for the digraph affine cipher: 31 symbols, no "ё" / "ъ".
# The order (ь before ы) fixes the digraph indices and must not change.
CIPHER_LETTERS = "абвгдежзийклмнопрстуфхцчшщьыэюя"
CIPHER_FOLDS: tuple[tuple[str, str], ...] = (("ё", "е"), ("ъ", "ь"))

# Most frequent Russian bigrams, most frequent first.
RUSSIAN_FREQUENT_BIGRAMS: tuple[str, ...] = ("ст", "но", "то", "на", "ен")

# Index of coincidence above which a decryption counts as natural language.
# Russian text: ~0.055. Uniform over 31 symbols: ~0.032.
IC_THRESHOLD: float = 0.05


# ============================================================================
# 2. ALPHABET
# ============================================================================

@dataclass(frozen=True)
class Alphabet:
    """
    Ordered set of symbols with optional orthographic folds.

    letters defines the symbol <-> index mapping; folds maps variant
    characters onto alphabet symbols before anything else is filtered.
    """

    letters: str
    folds: tuple[tuple[str, str], ...] = ()
    _index: dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if len(self.letters) < 2:
            raise ValueError("Alphabet needs at least two symbols")
        if len(set(self.letters)) != len(self.letters):
            raise ValueError(f"Alphabet symbols must be distinct: {self.letters!r}")
        for src, dst in self.folds:
            if dst not in self.letters:
                raise ValueError(f"Fold target {dst!r} is not in the alphabet")
        object.__setattr__(self, "_index", {c: i for i, c in enumerate(self.letters)})

    @property
    def size(self) -> int:
        return len(self.letters)

    @property
    def modulus(self) -> int:
        """Number of digraphs, L**2."""
        return self.size * self.size

    def __contains__(self, symbol: str) -> bool:
        return symbol in self._index

    def index(self, symbol: str) -> int:
        try:
            return self._index[symbol]
        except KeyError:
            raise ValueError(f"Symbol {symbol!r} is not in the alphabet") from None

    def indices(self, text: str) -> np.ndarray:
        """Symbol indices of an already-normalized text."""
        return np.array([self.index(c) for c in text], dtype=np.int64)

    def digraph_index(self, pair: str) -> int:
        """index(first) * L + index(second)."""
        if len(pair) != 2:
            raise ValueError(f"Digraph must have two symbols, got {pair!r}")
        return self.index(pair[0]) * self.size + self.index(pair[1])

    def digraph_letters(self, x: int) -> str:
        """Inverse of digraph_index."""
        first, second = divmod(int(x), self.size)
        return self.letters[first] + self.letters[second]

    def normalize(self, text: str) -> str:
        """
        Reduce raw text to the alphabet.

        Lower-cases, applies folds, drops every character outside the
        alphabet, collapses runs of spaces and strips the ends. When the
        alphabet has a space, any whitespace (newlines, tabs) counts as one.
        """
        text = text.lower()
        for src, dst in self.folds:
            text = text.replace(src, dst)
        if " " in self._index:
            text = re.sub(r"\s", " ", text)
        text = "".join(c for c in text if c in self._index)
        return re.sub(r" {2,}", " ", text).strip()


RUSSIAN = Alphabet(RUSSIAN_LETTERS)
RUSSIAN_WITH_SPACE = Alphabet(RUSSIAN_LETTERS + " ")
CIPHER_ALPHABET = Alphabet(CIPHER_LETTERS, CIPHER_FOLDS)


# ============================================================================
# 3. FREQUENCY TABLES
# ============================================================================

def monogram_frequencies(alphabet: Alphabet, text: str) -> dict[str, float]:
    """
    Probability of each symbol in the normalized text.

    Every alphabet symbol is a key, in alphabet order. An empty text gives
    an all-zero table.
    """
    idx = alphabet.indices(alphabet.normalize(text))
    counts = np.bincount(idx, minlength=alphabet.size).astype(float)
    if idx.size:
        counts /= idx.size
    return {c: float(counts[i]) for i, c in enumerate(alphabet.letters)}


def bigram_matrix(alphabet: Alphabet, text: str, sliding: bool = True) -> np.ndarray:
    """
    L x L bigram count matrix from text.

    sliding=True counts every overlapping pair (step 1); sliding=False
    splits the text into adjacent non-overlapping pairs (step 2), dropping a
    final unpaired symbol.
    """
    idx = alphabet.indices(alphabet.normalize(text))
    matrix = np.zeros((alphabet.size, alphabet.size), dtype=float)
    n = idx.size
    if n < 2:
        return matrix
    step = 1 if sliding else 2
    np.add.at(matrix, (idx[0:n - 1:step], idx[1:n:step]), 1)
    return matrix


def bigram_frequencies(
    alphabet: Alphabet,
    text: str,
    sliding: bool = True,
) -> dict[str, float]:
    """
    Probability of each bigram, normalized by the number of windows counted.

    All L**2 bigrams are keys, in row-major alphabet order.
    """
    matrix = bigram_matrix(alphabet, text, sliding)
    total = matrix.sum()
    if total > 0:
        matrix /= total
    letters = alphabet.letters
    return {
        a + b: float(matrix[i, j])
        for i, a in enumerate(letters)
        for j, b in enumerate(letters)
    }


# ============================================================================
# 4. ENTROPY AND COINCIDENCE
# ============================================================================

def entropy(table: dict[str, float], order: int) -> float:
    """
    Empirical order-n entropy in bits per symbol.

    Shannon entropy of the n-gram distribution divided by n.
    """
    if order < 1:
        raise ValueError(f"N-gram order must be positive, got {order}")
    probs = np.array([p for p in table.values() if p > 0], dtype=float)
    if probs.size == 0:
        return 0.0
    return float(sp_stats.entropy(probs, base=2)) / order


def max_entropy(alphabet_size: int) -> float:
    """H0 = log2(L)."""
    return math.log2(alphabet_size)


def redundancy(h: float, alphabet_size: int) -> float:
    """R = 1 - H / H0."""
    return 1.0 - h / max_entropy(alphabet_size)


def index_of_coincidence(text: str) -> float:
    """
    Compute the index of coincidence for a text.

    Russian: ~0.055. English: ~0.0667. Uniform over L symbols: 1 / L.
    """
    n = len(text)
    if n < 2:
        return 0.0
    counts = Counter(text)
    return sum(c * (c - 1) for c in counts.values()) / (n * (n - 1))


# ============================================================================
# 5. RANKING
# ============================================================================

def rank_by_frequency(table: dict[str, float]) -> list[str]:
    """
    Keys of a frequency table, most probable first.

    Ties keep the table's own order, which is alphabet order for every
    table built in this module.
    """
    position = {key: i for i, key in enumerate(table)}
    return sorted(table, key=lambda key: (-table[key], position[key]))


# ============================================================================
# 6. OUTPUT UTILS
# ============================================================================

def format_monogram_report(table: dict[str, float]) -> str:
    """Letter / frequency listing, most frequent first."""
    lines = ["letter  frequency"]
    for letter in rank_by_frequency(table):
        lines.append(f"{letter:>6} {table[letter]:.8f}")
    return "\n".join(lines)


def format_bigram_table(
    alphabet: Alphabet,
    table: dict[str, float],
    group: int = 7,
) -> str:
    """
    Bigram probabilities as a grid, split into blocks of `group` columns.

    Rows are first symbols, columns second symbols. The narrow blocks fit a
    portrait page in a word processor.
    """
    letters = alphabet.letters
    lines: list[str] = []
    for start in range(0, len(letters), group):
        columns = letters[start:start + group]
        lines.append(" " + "".join(f" {c:>10}" for c in columns))
        for first in letters:
            cells = "".join(f" {table[first + second]:.8f}" for second in columns)
            lines.append(f"{first}{cells}")
    return "\n".join(lines) + "\n"


def format_text_preview(text: str, width: int = 70) -> str:
    """
    Format a long string for display with line wrapping.
    """
    lines: list[str] = []
    for i in range(0, len(text), width):
        lines.append(f"  {i:5d}: {text[i:i + width]}")
    return "\n".join(lines)


def plot_monogram_frequencies(
    table: dict[str, float],
    title: str = "",
    save_path: str | Path | None = None,
) -> None:
    """
    Bar chart of monogram probabilities, most frequent first.

    Requires matplotlib (optional dependency).
    """
    try:
        import matplotlib
        if save_path:
            matplotlib.use("Agg")
        import matplotlib.pyplot as plt
    except ImportError:
        warnings.warn("matplotlib not available; skipping plot")
        return

    letters = rank_by_frequency(table)
    labels = [repr(c) if c == " " else c for c in letters]

    fig, ax = plt.subplots(figsize=(10, 4))
    ax.bar(range(len(letters)), [table[c] for c in letters], alpha=0.7)
    ax.set_xticks(range(len(letters)))
    ax.set_xticklabels(labels, fontsize=8)
    ax.set_ylabel("Probability")
    if title:
        ax.set_title(title)

    plt.tight_layout()
    if save_path:
        plt.savefig(str(save_path), dpi=150, bbox_inches="tight")
        print(f"Saved: {save_path}")
    else:
        plt.show()
    plt.close(fig)


# ============================================================================
# SELF-TEST — Run when executed directly
# ============================================================================

def _self_test() -> None:
    """Frequency tables, entropy and ranking on a Russian pangram."""
    print("=== textstats.py self-test ===\n")

    sample = "Съешь же ещё этих мягких французских булок, да выпей же чаю."

    clean = CIPHER_ALPHABET.normalize(sample)
    print(f"Normalized (cipher alphabet): '{clean}'")
    assert "ё" not in clean and "ъ" not in clean

    mono = monogram_frequencies(RUSSIAN_WITH_SPACE, sample)
    assert len(mono) == RUSSIAN_WITH_SPACE.size
    assert abs(sum(mono.values()) - 1.0) < 1e-9
    print(f"Top monograms: {rank_by_frequency(mono)[:5]}")

    for sliding in (True, False):
        bi = bigram_frequencies(RUSSIAN, sample, sliding=sliding)
        assert len(bi) == RUSSIAN.modulus
        assert abs(sum(bi.values()) - 1.0) < 1e-9
        h2 = entropy(bi, 2)
        print(f"H2 (sliding={sliding}): {h2:.4f}  R2: {redundancy(h2, RUSSIAN.size):.4f}")

    ic = index_of_coincidence(CIPHER_ALPHABET.normalize(sample))
    print(f"IC: {ic:.4f}")

    print("\n=== Self-test complete ===")


if __name__ == "__main__":
    _self_test()
