"""Token-budgeted text chunking for speech synthesis.

Text is encoded once with the speech model's tokenizer, the token sequence is
sliced into contiguous runs of at most ``max_tokens`` tokens, and each run is
decoded back to text. Boundaries fall purely on token counts, so a chunk may
end mid-sentence or mid-word.

Decoding a slice and re-encoding the result reproduces the slice for ordinary
text, but the original string is not guaranteed to round-trip byte for byte:
a slice boundary inside a multi-byte character decodes to a replacement
character, and some tokenizers normalise whitespace at the edges.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, List, Protocol, Sequence

import tiktoken

from config.tts.defaults import MAX_TOKENS, TOKENIZER_MODEL
from core.exceptions import EncodingError

logger = logging.getLogger(__name__)

_FALLBACK_ENCODING = "o200k_base"


class Tokenizer(Protocol):
    def encode(self, text: str) -> List[int]: ...

    def decode(self, tokens: Sequence[int]) -> str: ...


class TiktokenTokenizer:
    """Tokenizer backed by ``tiktoken`` for a given OpenAI model name."""

    def __init__(self, model_name: str = TOKENIZER_MODEL) -> None:
        self.model_name = model_name
        self._encoding: tiktoken.Encoding | None = None

    @property
    def encoding(self) -> tiktoken.Encoding:
        if self._encoding is None:
            try:
                self._encoding = tiktoken.encoding_for_model(self.model_name)
            except KeyError:
                logger.warning(
                    "No tiktoken mapping for model %s, using %s",
                    self.model_name,
                    _FALLBACK_ENCODING,
                )
                self._encoding = tiktoken.get_encoding(_FALLBACK_ENCODING)
        return self._encoding

    def encode(self, text: str) -> List[int]:
        return self.encoding.encode(text)

    def decode(self, tokens: Sequence[int]) -> str:
        return self.encoding.decode(list(tokens))


@dataclass(frozen=True, slots=True)
class TextChunk:
    """One model-safe slice of the input text."""

    index: int
    token_count: int
    content: str


class TextChunker:
    """Split text into chunks that never exceed ``max_tokens`` tokens."""

    def __init__(self, tokenizer: Tokenizer | None = None, max_tokens: int = MAX_TOKENS) -> None:
        if max_tokens <= 0:
            raise ValueError("max_tokens must be positive")
        self._tokenizer = tokenizer or TiktokenTokenizer()
        self.max_tokens = max_tokens

    def _encode(self, text: str) -> List[int]:
        try:
            return list(self._tokenizer.encode(text))
        except Exception as exc:
            raise EncodingError("Failed to tokenize text for speech synthesis", original_error=exc) from exc

    def count_tokens(self, text: str) -> int:
        return len(self._encode(text))

    def iter_chunks(self, text: str) -> Iterator[TextChunk]:
        """Yield chunks lazily; the text is encoded on the first ``next()``."""

        tokens = self._encode(text)
        for index, start in enumerate(range(0, len(tokens), self.max_tokens)):
            window = tokens[start : start + self.max_tokens]
            try:
                content = self._tokenizer.decode(window)
            except Exception as exc:
                raise EncodingError(
                    f"Failed to decode tokens for chunk {index}", original_error=exc
                ) from exc
            yield TextChunk(index=index, token_count=len(window), content=content)

    def chunk(self, text: str) -> List[TextChunk]:
        """Return every chunk for ``text``; empty text yields an empty list."""

        if not text:
            return []
        chunks = list(self.iter_chunks(text))
        logger.info(
            "Split %s characters into %s chunk(s) (max_tokens=%s)",
            len(text),
            len(chunks),
            self.max_tokens,
        )
        return chunks


__all__ = ["TextChunk", "TextChunker", "TiktokenTokenizer", "Tokenizer"]
