"""Shortcode generation utility

This module provides a helper function for generating short, unpredictable,
URL-safe identifiers drawn uniformly from an alphabet with a CSPRNG.

Functions:
    generate_shortcode(length=6, alphabet=ALPHABET):
        Generate a random fixed-length shortcode suitable for use as a URL slug.

Example:
    >>> from snipurl.utils import generate_shortcode
    >>> generate_shortcode()
    'V1StGX'
    >>> generate_shortcode(length=8, alphabet='0123456789abcdef')
    '9f3a0c1e'
"""

import re
import secrets

from snipurl.constants import Shortener


ALPHABET = Shortener.ALPHABET  # [A-Za-z0-9_-], 64 symbols
URL_SAFE = re.compile(r'^[A-Za-z0-9_-]+$')


def generate_shortcode(length: int = Shortener.SHORTCODE_LENGTH, alphabet: str = ALPHABET) -> str:
    """Generate a random, fixed-length shortcode.

    Every character is picked independently with `secrets.choice`, so codes are
    unpredictable and evenly distributed over `alphabet ** length` values.
    With the default 64-symbol alphabet and 6 characters there are 2^36
    (~68.7 billion) possible codes.

    Args:
        length (int, optional):
            Exact length of the shortcode. Defaults to 6.

        alphabet (str, optional):
            Characters to draw from. Must be URL-safe ([A-Za-z0-9_-]),
            hold at least 2 characters and contain no duplicates.
            Defaults to the 64-symbol URL-safe alphabet.

    Returns:
        str: A random shortcode of exactly `length` characters.

    NOTE:
        - Uniqueness is NOT guaranteed. Callers must insert with a uniqueness
          check and retry with a fresh code on collision.
    """
    if not isinstance(length, int) or isinstance(length, bool):
        raise TypeError(f'Length must be of type integer (given type: {type(length)}).')
    if length < 1:
        raise ValueError(f'Length must be a positive integer (given value: {length}).')
    if not isinstance(alphabet, str):
        raise TypeError(f'Alphabet must be of type string (given type: {type(alphabet)}).')
    if len(alphabet) < 2:
        raise ValueError(f'Alphabet must hold at least 2 characters (given value: {alphabet!r}).')
    if len(set(alphabet)) != len(alphabet):
        raise ValueError(f'Alphabet must not contain duplicate characters (given value: {alphabet!r}).')
    if not URL_SAFE.match(alphabet):
        raise ValueError(f'Alphabet must only contain URL-safe characters [A-Za-z0-9_-] (given value: {alphabet!r}).')

    return ''.join(secrets.choice(alphabet) for _ in range(length))
