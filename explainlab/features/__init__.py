"""Feature builders."""

from .text import make_dtm_builder, word_tokenizer  # noqa: F401
