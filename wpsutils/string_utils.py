import re
from types import MappingProxyType
from typing import Callable, Dict, Mapping, Optional

from .exceptions import InvalidWord, NegativeCount
from .utils import logger

IRREGULAR_PLURALS = MappingProxyType({
    'addendum': 'addenda',
    'analysis': 'analyses',
    'child':    'children',
    'goose':    'geese',
    'locus':    'loci',
    'louse':    'lice',
    'oasis':    'oases',
    'ovum':     'ova',
    'man':      'men',
    'mouse':    'mice',
    'tooth':    'teeth',
    'woman':    'women',
})

VOWELS = ('a', 'e', 'i', 'o', 'u')

WORD_PATTERN = re.compile(r'^[A-Za-z]{2,}$')


def get_plural_exceptions() -> Dict[str, str]:
    """Return a new copy of the default irregular plurals."""
    return dict(IRREGULAR_PLURALS)


def pluralize(word: str,
              count: int = 2,
              prefix_with_count: bool = False,
              exceptions_provider: Optional[Callable[[], Mapping[str, str]]] = None,
              custom_rules: Optional[dict] = None) -> str:
    """
    Convert a singular noun to the form required by ``count``.

    :param word: The noun to pluralize, at least two letters.
    :param count: How many. The word is pluralized only when ``count > 1``.
    :param prefix_with_count: Whether to return ``'<count> <word>'``.
    :param exceptions_provider: A function returning the irregular plurals. Defaults
        to ``get_plural_exceptions``. Replace it to override the default list, or
        return ``{**get_plural_exceptions(), ...}`` to extend it.
    :param custom_rules: A dictionary of irregular plurals applied on top of the
        ones returned by the provider.
    :return: The word in lowercase, pluralized if ``count > 1``.
    :raises InvalidWord: If ``word`` is not made of two or more ASCII letters.
    :raises NegativeCount: If ``count`` is negative.

    Example::

        pluralize('boy', 0)          # 'boy'
        pluralize('mango', 2)        # 'mangoes'
        pluralize('knife', 3, True)  # '3 knives'

    Suffix rules, the first one matching wins:

    1. ``ies``: ends in a consonant + y (baby, lady)
    2. ``ves``: ends in f or fe (leaf, knife)
    3. ``es``: ends in a consonant + o (volcano, mango), or in ch, sh, ss, s, x, z
       (match, dish, glass, bus, fox, buzz)
    4. ``s``: everything else (boy, radio, cat)
    """
    if not isinstance(word, str) or not WORD_PATTERN.match(word.strip()):
        raise InvalidWord(f'Impossible to pluralize {word!r}: a noun must have two or more letters.')

    # lowercase, even the first letter, because the count may be placed before the word
    word = word.strip().lower()

    if count > 1:
        word = _plural(word, {**(exceptions_provider or get_plural_exceptions)(), **(custom_rules or {})})
    elif count < 0:
        raise NegativeCount(f'Impossible to pluralize {word!r} for a negative count ({count}).')

    if prefix_with_count:
        return f'{count} {word}'

    return word


def _plural(word: str, exceptions: Mapping[str, str]) -> str:
    if word in exceptions:
        logger.debug(f'{word}: irregular plural')
        return exceptions[word]

    if word.endswith('y') and word[-2] not in VOWELS:
        logger.debug(f'{word}: consonant + y rule')
        return word[:-1] + 'ies'

    if word.endswith('f'):
        logger.debug(f'{word}: f rule')
        return word[:-1] + 'ves'
    if word.endswith('fe'):
        logger.debug(f'{word}: fe rule')
        return word[:-2] + 'ves'

    if (word.endswith('o') and word[-2] not in VOWELS) or word.endswith(('ch', 'sh', 'ss', 's', 'x', 'z')):
        logger.debug(f'{word}: es rule')
        return word + 'es'

    logger.debug(f'{word}: s rule')
    return word + 's'
