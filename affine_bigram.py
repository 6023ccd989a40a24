"""
---
version: 0.3.0
created: 2026-10-18
updated: 2026-10-18
---

affine_bigram.py — Ciphertext-only attack on the affine cipher over digraphs.

The cipher maps each digraph index X (0 <= X < L**2) to Y = a*X + b mod L**2.
Without any known plaintext the key is recovered from statistics alone:

  1. Rank the ciphertext's non-overlapping bigrams by frequency.
  2. Pair two of the most frequent plaintext-language bigrams with two of the
     most frequent ciphertext bigrams. Subtracting the two equations
     Y1 = a*X1 + b and Y2 = a*X2 + b leaves a*(X1 - X2) = Y1 - Y2 mod L**2,
     which gives candidate values of a; each a then fixes b.
  3. Decrypt under every candidate key and accept the first decryption whose
     index of coincidence looks like natural language.

Usage:
    python3 affine_bigram.py CIPHERTEXT [--references ст,но,то,на,ен]
                             [--threshold 0.05] [--quiet] [--save-json PATH]
"""

from __future__ import annotations

import argparse
import json
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, NamedTuple, Sequence

import numpy as np

from modarith import NoInverseExists, NoSolution, modular_inverse, solve_linear_congruence
from textstats import (
    CIPHER_ALPHABET, IC_THRESHOLD, RUSSIAN_FREQUENT_BIGRAMS,
    Alphabet,
    bigram_frequencies, rank_by_frequency, index_of_coincidence,
    format_text_preview,
)


# ============================================================================
# 1. DIGRAPH CODEC
# ============================================================================

def to_digraphs(alphabet: Alphabet, text: str) -> np.ndarray:
    """
    Digraph indices of a normalized text, taken in non-overlapping pairs.

    A final unpaired symbol is dropped.
    """
    idx = alphabet.indices(text)
    n = idx.size - idx.size % 2
    return idx[0:n:2] * alphabet.size + idx[1:n:2]


def from_digraphs(alphabet: Alphabet, digraphs: np.ndarray) -> str:
    """Inverse of to_digraphs."""
    firsts, seconds = np.divmod(np.asarray(digraphs, dtype=np.int64), alphabet.size)
    letters = alphabet.letters
    return "".join(letters[f] + letters[s] for f, s in zip(firsts.tolist(), seconds.tolist()))


def encrypt(
    text: str,
    key: tuple[int, int],
    alphabet: Alphabet = CIPHER_ALPHABET,
) -> str:
    """
    Encrypt text under the digraph affine key (a, b).

    The text is normalized to the alphabet first.

    Raises:
        NoInverseExists: If a is not invertible modulo L**2 (the result
            could never be decrypted).
    """
    a, b = key
    m = alphabet.modulus
    modular_inverse(a, m)
    xs = to_digraphs(alphabet, alphabet.normalize(text))
    return from_digraphs(alphabet, (a * xs + b) % m)


def decrypt(
    text: str,
    key: tuple[int, int],
    alphabet: Alphabet = CIPHER_ALPHABET,
) -> str:
    """
    Decrypt text under the digraph affine key (a, b): X = a^-1 * (Y - b).

    Raises:
        NoInverseExists: If a is not invertible modulo L**2.
    """
    a, b = key
    m = alphabet.modulus
    inverse = modular_inverse(a, m)
    ys = to_digraphs(alphabet, alphabet.normalize(text))
    return from_digraphs(alphabet, inverse * (ys - b) % m)


# ============================================================================
# 2. SEARCH TYPES
# ============================================================================

class Hypothesis(NamedTuple):
    """Two plaintext digraphs assumed to encrypt to two ciphertext digraphs."""

    plain: tuple[str, str]
    cipher: tuple[str, str]
    ranks: tuple[int, int, int, int]  # (i, k) reference, (j, l) ciphertext


@dataclass(frozen=True)
class Decryption:
    """Outcome of decrypting under one candidate key."""

    key: tuple[int, int]
    plaintext: str = ""
    ok: bool = True
    reason: str = ""
    ic: float = 0.0


@dataclass
class AttackResult:
    """Outcome of a full search. plaintext is empty when nothing passed."""

    ciphertext: str
    plaintext: str = ""
    key: tuple[int, int] | None = None
    hypothesis: Hypothesis | None = None
    hypotheses_tried: int = 0
    keys_tried: int = 0
    ic: float = 0.0

    @property
    def found(self) -> bool:
        return self.key is not None

    def to_dict(self) -> dict:
        h = self.hypothesis
        return {
            "found": self.found,
            "key": list(self.key) if self.key else None,
            "hypothesis": None if h is None else {
                "plain": list(h.plain),
                "cipher": list(h.cipher),
                "ranks": list(h.ranks),
            },
            "hypotheses_tried": self.hypotheses_tried,
            "keys_tried": self.keys_tried,
            "ic": self.ic,
            "ciphertext": self.ciphertext,
            "plaintext": self.plaintext,
        }


# ============================================================================
# 3. ATTACK
# ============================================================================

class AffineBigramBreaker:
    """
    Frequency-pairing attack on the digraph affine cipher.

    Args:
        alphabet: Cipher alphabet (with its folds).
        reference_bigrams: Most frequent plaintext-language bigrams, most
            frequent first.
        threshold: Minimum index of coincidence for an accepted decryption.
        verbose: Print a trace line for every hypothesis and key tried.
    """

    def __init__(
        self,
        alphabet: Alphabet = CIPHER_ALPHABET,
        reference_bigrams: Sequence[str] = RUSSIAN_FREQUENT_BIGRAMS,
        threshold: float = IC_THRESHOLD,
        verbose: bool = False,
    ) -> None:
        references = tuple(reference_bigrams)
        if len(references) < 2:
            raise ValueError("Need at least two reference bigrams")
        if len(set(references)) != len(references):
            raise ValueError(f"Reference bigrams must be distinct: {references}")
        if len(references) > alphabet.modulus:
            raise ValueError("More reference bigrams than digraphs in the alphabet")
        for bigram in references:
            alphabet.digraph_index(bigram)
        self.alphabet = alphabet
        self.references = references
        self.threshold = threshold
        self.verbose = verbose

    def hypotheses(self, ranked: Sequence[str]) -> Iterator[Hypothesis]:
        """
        Pairings of reference and ciphertext bigrams, in search order.

        For reference positions i < k, ciphertext positions j, l range over
        [0, k] with j != l, so lower-ranked references only meet
        lower-ranked ciphertext bigrams.
        """
        refs = self.references
        r = len(refs)
        for i in range(r):
            for k in range(i + 1, r):
                for j in range(k + 1):
                    for l in range(k + 1):
                        if l == j:
                            continue
                        yield Hypothesis(
                            plain=(refs[i], refs[k]),
                            cipher=(ranked[j], ranked[l]),
                            ranks=(i, k, j, l),
                        )

    def candidate_keys(self, hypothesis: Hypothesis) -> Iterator[tuple[int, int]]:
        """Keys (a, b) consistent with a hypothesis; none if it is incompatible."""
        m = self.alphabet.modulus
        x1, x2 = (self.alphabet.digraph_index(p) for p in hypothesis.plain)
        y1, y2 = (self.alphabet.digraph_index(c) for c in hypothesis.cipher)

        try:
            a_values = solve_linear_congruence(x1 - x2, y1 - y2, m)
        except NoSolution as exc:
            self._trace(f"No a values: {exc}")
            return
        self._trace(f"Potential a values: {a_values}")

        for a in a_values:
            # Coefficient 1 always has exactly one solution.
            b_values = solve_linear_congruence(1, y1 - a * x1, m)
            self._trace(f"Potential b values for a={a}: {b_values}")
            for b in b_values:
                yield a, b

    def try_key(self, digraphs: np.ndarray, key: tuple[int, int]) -> Decryption:
        """Decrypt ciphertext digraph indices under one candidate key."""
        a, b = key
        m = self.alphabet.modulus
        try:
            inverse = modular_inverse(a, m)
        except NoInverseExists as exc:
            return Decryption(key=key, ok=False, reason=str(exc))
        plaintext = from_digraphs(self.alphabet, inverse * (digraphs - b) % m)
        return Decryption(key=key, plaintext=plaintext, ic=index_of_coincidence(plaintext))

    def is_informative(self, decryption: Decryption) -> bool:
        return decryption.ok and decryption.ic > self.threshold

    def break_cipher(self, ciphertext: str) -> AttackResult:
        """
        Search for a key and return the first plausible decryption.

        Hypotheses are visited in the order of hypotheses(), and keys in the
        order of candidate_keys(), so the result is reproducible.
        """
        clean = self.alphabet.normalize(ciphertext)
        digraphs = to_digraphs(self.alphabet, clean)
        result = AttackResult(ciphertext=clean)
        if digraphs.size == 0:
            return result

        ranked = rank_by_frequency(bigram_frequencies(self.alphabet, clean, sliding=False))

        for hypothesis in self.hypotheses(ranked):
            result.hypotheses_tried += 1
            self._trace(f"X1={hypothesis.plain[0]} Y1={hypothesis.cipher[0]}")
            self._trace(f"X2={hypothesis.plain[1]} Y2={hypothesis.cipher[1]}")

            for key in self.candidate_keys(hypothesis):
                result.keys_tried += 1
                attempt = self.try_key(digraphs, key)
                if not attempt.ok:
                    self._trace(f"For a={key[0]} b={key[1]} no decryption ({attempt.reason})")
                elif self.is_informative(attempt):
                    self._trace(f"For a={key[0]} b={key[1]} text is informative (IC={attempt.ic:.4f})")
                    result.plaintext = attempt.plaintext
                    result.key = key
                    result.hypothesis = hypothesis
                    result.ic = attempt.ic
                    return result
                else:
                    self._trace(f"For a={key[0]} b={key[1]} text is not informative (IC={attempt.ic:.4f})")

        return result

    def _trace(self, message: str) -> None:
        if self.verbose:
            print(message)


# ============================================================================
# 4. OUTPUT
# ============================================================================

def format_attack_report(result: AttackResult, width: int = 70) -> str:
    """Summary of an attack: key, search effort, ciphertext and plaintext."""
    lines = ["=" * 70, "DIGRAPH AFFINE ATTACK", "=" * 70]
    lines.append(f"  Hypotheses tried: {result.hypotheses_tried}")
    lines.append(f"  Keys tried:       {result.keys_tried}")
    if result.found:
        a, b = result.key
        h = result.hypothesis
        lines.append(f"  Key:              a = {a}, b = {b}")
        lines.append(f"  Pairing:          {h.plain[0]}->{h.cipher[0]}, {h.plain[1]}->{h.cipher[1]}")
        lines.append(f"  IC:               {result.ic:.4f}")
    else:
        lines.append("  Key:              not found")
    lines.append("\nEncrypted text:")
    lines.append(format_text_preview(result.ciphertext, width))
    lines.append("\nDecrypted text:")
    lines.append(format_text_preview(result.plaintext, width) if result.found else "  (none)")
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Ciphertext-only attack on the affine cipher over digraphs")
    parser.add_argument("ciphertext", type=str, help="Path to the ciphertext file")
    parser.add_argument("--references", type=str, default=",".join(RUSSIAN_FREQUENT_BIGRAMS),
                        help="Comma-separated frequent plaintext bigrams, most frequent first")
    parser.add_argument("--threshold", type=float, default=IC_THRESHOLD,
                        help=f"Index of coincidence threshold (default: {IC_THRESHOLD})")
    parser.add_argument("--quiet", action="store_true", help="Skip the per-hypothesis trace")
    parser.add_argument("--save-json", type=str, default=None,
                        help="Write the result summary to this JSON file")
    args = parser.parse_args(argv)

    path = Path(args.ciphertext)
    if not path.is_file():
        print(f"Ciphertext file not found: {path}", file=sys.stderr)
        sys.exit(2)
    text = path.read_text(encoding="utf-8")

    references = [r.strip() for r in args.references.split(",") if r.strip()]
    try:
        breaker = AffineBigramBreaker(
            CIPHER_ALPHABET, references, threshold=args.threshold, verbose=not args.quiet)
    except ValueError as exc:
        parser.error(f"--references: {exc}")

    t0 = time.time()
    result = breaker.break_cipher(text)
    elapsed = time.time() - t0

    print()
    print(format_attack_report(result))
    print(f"\nCompleted in {elapsed:.1f}s")

    if args.save_json:
        with open(args.save_json, "w", encoding="utf-8") as f:
            json.dump(result.to_dict(), f, indent=2, ensure_ascii=False)
        print(f"Saved: {args.save_json}")

    if not result.found:
        sys.exit(1)


if __name__ == "__main__":
    main()
