"""
Shared fixtures for the Cryptoscope test suite
"""

import sys
from pathlib import Path

import pytest

# Allow running the suite from a source checkout without installation
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from cryptoscope.core.byte_utils import repeating_key_xor

ENGLISH_CORPUS = (
    "It was late in the autumn when the old ferry stopped running, and the people of the "
    "island had to learn again how to wait for the weather. Most mornings the fishermen would "
    "gather by the harbour wall and argue about the wind, the price of diesel, and whether the "
    "new harbour master knew anything at all about boats. The children walked to the school at "
    "the top of the hill, where a single schoolmistress taught every class from a room that smelled of "
    "chalk and wet wool. In the evenings the lights in the kitchen windows came on one by one, "
    "and the sound of the radio drifted across the lanes with the smoke from the chimneys.\n"
    "Nobody on the island could remember exactly when the lighthouse keeper had arrived. Some "
    "said he came with the storm of the great winter, others that he had always been there, "
    "that he was as much a part of the rock as the gulls and the heather. He kept to himself, "
    "but every week he walked down to the shop to buy bread, tea, a newspaper that was already "
    "three days old, and a small bag of sweets that he never seemed to eat. When people asked "
    "him about the light he would smile and say that it was simple work, that a light only "
    "needs someone who remembers to turn it on, and that the sea does the rest.\n"
    "In the spring the ferry returned, painted a bright new blue, and with it came visitors "
    "who wanted to walk the cliffs and photograph the puffins. They asked the same questions "
    "every year, and the islanders gave the same answers, and both sides seemed content with "
    "the arrangement. The keeper watched them from the gallery at the top of the tower, and "
    "when the last boat of the day pulled away from the pier he would wave, although none of "
    "them ever noticed. Then he would go inside, wind the clock, light the lamp, and sit by the "
    "window with his tea until the stars came out over the water and the long night began.\n"
)

CORPUS_KEY = b"K3y!x0R"


@pytest.fixture
def english_text() -> bytes:
    return ENGLISH_CORPUS.encode('utf-8')


@pytest.fixture
def corpus_key() -> bytes:
    return CORPUS_KEY


@pytest.fixture
def xor_ciphertext(english_text, corpus_key) -> bytes:
    """English corpus encrypted with a 7-byte repeating key"""
    return repeating_key_xor(english_text, corpus_key)
