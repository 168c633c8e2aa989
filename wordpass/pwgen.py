# pwgen
# (memorable password generator)
#

import functools
import logging
from pathlib import Path
from random import SystemRandom

from .errors import ResourceError, ExhaustedRetriesError
from .moderation import Verdict, NO_CHECK
from .options import GenerationOptions, WORDLIST_PATH

random = SystemRandom()

MIN_WORD_LENGTH = 3
NUMBER_RANGE = (100, 9999)  # upper bound exclusive
MAX_CHECKS = 100

log = logging.getLogger(__name__)


def filter_wordlist(words) -> tuple:
    """Strip words, drop those too short or with non-letters (e.g. "'")."""
    stripped = (w.strip() for w in words)
    return tuple(w for w in stripped if len(w) >= MIN_WORD_LENGTH and w.isalpha())


@functools.lru_cache(maxsize=None)
def load_wordlist(path: Path = WORDLIST_PATH) -> tuple:
    """Load and return a word list."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            lines = f.readlines()
    except (OSError, UnicodeDecodeError) as e:
        raise ResourceError(f"Cannot read word list {str(path)!r}: {e}") from e
    words = filter_wordlist(lines)
    if not words:
        raise ResourceError(f"No usable words in word list {str(path)!r}")
    log.debug("Loaded %d words from %s", len(words), path)
    return words


def choose_words(words, checker=NO_CHECK, rng=random,
                 max_checks: int = MAX_CHECKS) -> tuple:
    """Choose two random words, until `checker` accepts the pair.

    Unknown verdict (service failure) rejects the pair too.

    """
    for _ in range(max_checks):
        word1, word2 = rng.choice(words), rng.choice(words)
        if checker.check(word1, word2) is Verdict.ACCEPTABLE:
            return word1, word2
    raise ExhaustedRetriesError(
        f"No acceptable pair of words found in {max_checks} attempts.")


def compose_password(words, options: GenerationOptions,
                     checker=NO_CHECK, rng=random,
                     max_checks: int = MAX_CHECKS) -> str:
    """Compose one password candidate from two words, a number and a symbol.

    :param words: Word list to choose from
    :param options: Format options (exclusions, symbols)
    :param checker: Acceptability checker of the word pair
    :param rng: Source of randomness (`choice`, `randrange`, `shuffle`)
    :param max_checks: Give up after this many rejected word pairs
    :returns: The candidate. Its length is not checked here.

    """
    block1, block2 = choose_words(words, checker, rng, max_checks)
    number = None
    if not options.exclude_numbers:
        number = rng.randrange(*NUMBER_RANGE)
    separator = ''
    if not options.exclude_symbols:
        separator = rng.choice(options.separators)
    # First word is upper unless only lower-case is allowed,
    # second word is lower unless only upper-case is allowed
    if options.exclude_upper and not options.exclude_lower:
        block1 = block1.lower()
    else:
        block1 = block1.upper()
    if options.exclude_lower and not options.exclude_upper:
        block2 = block2.upper()
    else:
        block2 = block2.lower()
    parts = [block1, block2]
    if number is not None:
        parts.append(str(number))
    rng.shuffle(parts)
    return separator.join(parts)
