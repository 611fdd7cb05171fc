"""
Maximal Marginal Relevance selection.

Greedy pass that keeps relevance high while penalizing candidates similar
to ones already picked. Not globally optimal.
"""

from collections.abc import Sequence

from chat_engine.core.retrieval.dense import cosine_similarity
from chat_engine.core.retrieval.fusion import Candidate

MMR_LAMBDA = 0.75


def mmr_select(
    candidates: Sequence[Candidate],
    k: int,
    lambda_: float = MMR_LAMBDA,
) -> list[Candidate]:
    """
    Select up to ``k`` candidates trading relevance against redundancy.

    Each round picks the remaining candidate maximizing
    ``lambda * hybrid - (1 - lambda) * max_similarity_to_selected``.
    Ties go to the earlier candidate in hybrid-descending order.

    Args:
        candidates: Scored candidates
        k: Number of candidates to keep
        lambda_: Relevance weight in [0, 1]

    Returns:
        list[Candidate]: Selected candidates in pick order; the input
            unchanged when it holds ``k`` or fewer items
    """
    if len(candidates) <= k:
        return list(candidates)
    if k <= 0:
        return []

    # sorted() is stable, so equal scores keep input order
    remaining = sorted(candidates, key=lambda c: c.hybrid_score, reverse=True)
    selected = [remaining.pop(0)]
    # Highest similarity of each remaining candidate to anything selected so far
    max_similarity = [0.0] * len(remaining)

    while len(selected) < k and remaining:
        last_picked = selected[-1]
        best_index = 0
        best_score = float("-inf")

        for index, candidate in enumerate(remaining):
            similarity = cosine_similarity(candidate.embedding, last_picked.embedding)
            if similarity > max_similarity[index]:
                max_similarity[index] = similarity

            score = lambda_ * candidate.hybrid_score - (1 - lambda_) * max_similarity[index]
            if score > best_score:
                best_score = score
                best_index = index

        selected.append(remaining.pop(best_index))
        max_similarity.pop(best_index)

    return selected
