"""Unit tests for shortcode generation.

Test coverage includes:

1. Output shape
   - Exact length, characters drawn from the alphabet only.

2. Randomness
   - Codes are drawn with secrets.choice, not derived from input.

3. Argument validation
   - Bad lengths and alphabets raise TypeError / ValueError.
"""

import re

import pytest

from snipurl.constants import Shortener
from snipurl.utils import shortener
from snipurl.utils.shortener import generate_shortcode


# -------------------------------
# 1. Output shape
# -------------------------------


def test_default_shortcode():
    shortcode = generate_shortcode()

    assert len(shortcode) == 6
    assert re.fullmatch(r'[A-Za-z0-9_-]{6}', shortcode)


@pytest.mark.parametrize('length', [1, 7, 12, 32])
def test_custom_length(length):
    assert len(generate_shortcode(length=length)) == length


def test_custom_alphabet():
    shortcodes = [generate_shortcode(length=10, alphabet='ab') for _ in range(50)]

    assert all(set(s) <= {'a', 'b'} for s in shortcodes)


def test_default_alphabet_is_url_safe():
    assert len(Shortener.ALPHABET) == 64
    assert len(set(Shortener.ALPHABET)) == 64


# -------------------------------
# 2. Randomness
# -------------------------------


def test_uses_secrets_choice(monkeypatch):
    picks = iter('V1StGX')
    monkeypatch.setattr(shortener.secrets, 'choice', lambda alphabet: next(picks))

    assert generate_shortcode() == 'V1StGX'


def test_codes_are_not_repeated():
    shortcodes = {generate_shortcode() for _ in range(1000)}

    # 1000 draws out of 64^6 codes; a repeat is practically impossible
    assert len(shortcodes) == 1000


# -------------------------------
# 3. Argument validation
# -------------------------------


@pytest.mark.parametrize('length', ['6', 6.0, None, True])
def test_length_invalid_type(length):
    with pytest.raises(TypeError, match='Length must be of type integer'):
        generate_shortcode(length=length)


@pytest.mark.parametrize('length', [0, -1])
def test_length_not_positive(length):
    with pytest.raises(ValueError, match='Length must be a positive integer'):
        generate_shortcode(length=length)


def test_alphabet_invalid_type():
    with pytest.raises(TypeError, match='Alphabet must be of type string'):
        generate_shortcode(alphabet=['a', 'b'])


@pytest.mark.parametrize(
    'alphabet,message',
    [
        ('', 'at least 2 characters'),
        ('a', 'at least 2 characters'),
        ('abca', 'duplicate characters'),
        ('ab/c', 'URL-safe characters'),
        ('ab c', 'URL-safe characters'),
    ],
)
def test_alphabet_invalid_value(alphabet, message):
    with pytest.raises(ValueError, match=message):
        generate_shortcode(alphabet=alphabet)
