"""Text to document-term matrix featurization."""
from __future__ import annotations

import re
from typing import Callable, Iterable, List

import scipy.sparse as sp
from sklearn.feature_extraction.text import HashingVectorizer

__all__ = ["word_tokenizer", "make_dtm_builder"]

_WORD_RE = re.compile(r"\w+", re.UNICODE)


def word_tokenizer(text: str) -> List[str]:
    """Lowercase word tokens."""
    return _WORD_RE.findall(text.lower())


def make_dtm_builder(hash_bits: int = 18) -> Callable[[Iterable[str]], sp.csr_matrix]:
    """Return a function mapping raw texts to a hashed document-term matrix.

    The vectorizer is stateless, so the same function featurizes training
    texts and the perturbed texts LIME generates.
    """
    vectorizer = HashingVectorizer(
        n_features=2**hash_bits,
        tokenizer=word_tokenizer,
        token_pattern=None,
        lowercase=False,
        alternate_sign=False,
        norm=None,
    )

    def build(texts: Iterable[str]) -> sp.csr_matrix:
        return vectorizer.transform(list(texts)).tocsr()

    return build
