"""
Thread Splitter

Splits long text into numbered posts ("1/3\n...") that fit a size limit,
preferring line breaks, then spaces, and hard-cutting only as a last resort.
"""

from typing import List

# Cuts that would leave a post shorter than this are not worth a clean break
MIN_CHUNK_CHARS = 120


def _find_cut(text: str, limit: int) -> int:
    cut = text.rfind("\n", 0, limit + 1)
    if cut < MIN_CHUNK_CHARS:
        cut = text.rfind(" ", 0, limit + 1)
    if cut < MIN_CHUNK_CHARS:
        cut = limit
    return cut


def split_into_thread(text: str, limit: int = 280) -> List[str]:
    """
    Split text into numbered thread posts.

    Args:
        text: The full draft.
        limit: Maximum characters per post, excluding the "i/n" label.

    Returns:
        Posts labelled "i/n" on their own first line. Empty text yields [].
    """
    if limit < 1:
        raise ValueError(f"Thread chunk limit must be positive, got {limit}")

    chunks = []
    remaining = (text or "").strip()

    while len(remaining) > limit:
        cut = _find_cut(remaining, limit)
        chunks.append(remaining[:cut].strip())
        remaining = remaining[cut:].strip()

    if remaining:
        chunks.append(remaining)

    total = len(chunks)
    return [f"{i}/{total}\n{chunk}" for i, chunk in enumerate(chunks, start=1)]
