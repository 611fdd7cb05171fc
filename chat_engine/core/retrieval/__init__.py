"""Lexical, dense and hybrid retrieval over session chunks."""

from chat_engine.core.retrieval.assembler import ContextBudget, assemble_context
from chat_engine.core.retrieval.dense import cosine_similarity, dense_scores
from chat_engine.core.retrieval.fusion import Candidate, build_candidates, fuse_scores, normalize_scores
from chat_engine.core.retrieval.lexical import score_chunk
from chat_engine.core.retrieval.mmr import mmr_select
from chat_engine.core.retrieval.selector import (
    ContextSelector,
    embeddings_aligned,
    select_context_lexical,
)
from chat_engine.core.retrieval.signature import ChunkSignature, compute_chunk_signature
from chat_engine.core.retrieval.tokenizer import tokenize

__all__ = [
    "Candidate",
    "ChunkSignature",
    "ContextBudget",
    "ContextSelector",
    "assemble_context",
    "build_candidates",
    "compute_chunk_signature",
    "cosine_similarity",
    "dense_scores",
    "embeddings_aligned",
    "fuse_scores",
    "mmr_select",
    "normalize_scores",
    "score_chunk",
    "select_context_lexical",
    "tokenize",
]
