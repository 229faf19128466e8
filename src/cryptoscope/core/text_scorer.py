"""
English Text Scoring
Ranks decoded candidates by summed English character frequencies
"""

from types import MappingProxyType

# Relative English character frequencies (per 10,000 characters)
# Source: http://www.macfreek.nl/memory/Letter_Distribution
CHAR_FREQUENCIES = MappingProxyType({
    'a': 653, 'b': 126, 'c': 223, 'd': 328, 'e': 1026,
    'f': 198, 'g': 162, 'h': 498, 'i': 567, 'j': 10,
    'k': 56, 'l': 331, 'm': 203, 'n': 571, 'o': 616,
    'p': 150, 'q': 8, 'r': 499, 's': 532, 't': 752,
    'u': 228, 'v': 80, 'w': 170, 'x': 14, 'y': 143,
    'z': 5, ' ': 1829,
})


def score_text(text: str) -> int:
    """
    Score text for English-like character distribution

    Case-insensitive; characters outside the table contribute nothing.

    Args:
        text: Decoded candidate string

    Returns:
        Non-negative score, larger means more English-like
    """
    return sum(CHAR_FREQUENCIES.get(c, 0) for c in text.lower())


def score_bytes(data: bytes, encoding: str = 'utf-8') -> int:
    """Decode then score; undecodable data scores 0"""
    try:
        text = data.decode(encoding)
    except UnicodeDecodeError:
        return 0
    return score_text(text)
