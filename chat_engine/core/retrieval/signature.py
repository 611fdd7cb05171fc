"""
Chunk-set fingerprinting.

A cheap, order-sensitive signature lets repeated context updates with the
same chunks skip re-embedding. Only ids, page ranges and text lengths are
folded in, never the text itself.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from chat_engine.models.chunk import Chunk

FNV_OFFSET_BASIS = 2166136261
FNV_PRIME = 16777619
_UINT32_MASK = 0xFFFFFFFF


@dataclass(frozen=True)
class ChunkSignature:
    """Chunk count paired with a 32-bit FNV-1a hash."""

    count: int
    hash: int

    def __str__(self) -> str:
        return f"{self.count}:{self.hash:x}"


def compute_chunk_signature(chunks: Sequence[Chunk]) -> ChunkSignature:
    """
    Fingerprint an ordered chunk list.

    Args:
        chunks: Chunks in the order they were received

    Returns:
        ChunkSignature: Count and hash of the chunk list
    """
    value = FNV_OFFSET_BASIS
    for chunk in chunks:
        token = f"{chunk.id}|{chunk.page_start}|{chunk.page_end}|{len(chunk.text)}"
        for char in token:
            value ^= ord(char)
            value = (value * FNV_PRIME) & _UINT32_MASK
    return ChunkSignature(count=len(chunks), hash=value)
