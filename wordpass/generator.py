# generator
# (validated, length-bounded password generation)
#

import logging

from .errors import ExhaustedRetriesError
from .moderation import make_checker
from .options import GenerationOptions, validate_options
from . import pwgen

MAX_ATTEMPTS = 10_000

log = logging.getLogger(__name__)


def generate(options: GenerationOptions = None,
             service=None,
             words=None,
             checker=None,
             rng=pwgen.random,
             max_attempts: int = MAX_ATTEMPTS) -> str:
    """Generate a password of length within the bounds given by `options`.

    Options are validated and the checker selected before anything
    is loaded, so a bad configuration fails without side effects.

    :param options: Format options (default: :class:`GenerationOptions`)
    :param service: Moderation service config, needed for acceptability check
    :param words: Word list (default: loaded from `options.wordlist`)
    :param checker: Override the checker selected by `make_checker`
    :param rng: Source of randomness
    :param max_attempts: Give up after this many out-of-range candidates
    :returns: The password.

    """
    options = options or GenerationOptions()
    validate_options(options)
    if checker is not None:
        return _generate(options, words, checker, rng, max_attempts)
    # Checker selected here is ours to close
    checker = make_checker(options, service)
    try:
        return _generate(options, words, checker, rng, max_attempts)
    finally:
        checker.close()


def _generate(options, words, checker, rng, max_attempts) -> str:
    if words is None:
        words = pwgen.load_wordlist(options.wordlist)
    for attempt in range(1, max_attempts + 1):
        candidate = pwgen.compose_password(words, options, checker, rng)
        if options.min_length <= len(candidate) <= options.max_length:
            log.debug("Got password after %d attempt(s)", attempt)
            return candidate
    raise ExhaustedRetriesError(
        f"No password of length {options.min_length}-{options.max_length} "
        f"generated in {max_attempts} attempts. Check the word list and length bounds.")
