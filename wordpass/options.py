# GenerationOptions
# (password format options and their validation)
#

from pathlib import Path

from .errors import ConfigurationError

MIN_LENGTH = 15
MAX_LENGTH = 32
SYMBOLS = '!@#$%^&*_+-='

# Shortest length that two words plus the other blocks can safely reach
MIN_LENGTH_FULL = 11
MIN_LENGTH_NO_SYMBOLS = 9

WORDLIST_PATH = Path(__file__).parent / 'words.txt'


class GenerationOptions:

    """Options controlling the format of generated passwords.

    `exclude_upper` and `exclude_lower` are mutually exclusive,
    see :func:`validate_options`.

    """

    def __init__(self,
                 min_length: int = MIN_LENGTH,
                 max_length: int = MAX_LENGTH,
                 exclude_upper: bool = False,
                 exclude_lower: bool = False,
                 exclude_numbers: bool = False,
                 exclude_symbols: bool = False,
                 symbols: str = SYMBOLS,
                 check_acceptability: bool = False,
                 wordlist=WORDLIST_PATH):
        self.min_length = min_length
        self.max_length = max_length
        self.exclude_upper = exclude_upper
        self.exclude_lower = exclude_lower
        self.exclude_numbers = exclude_numbers
        self.exclude_symbols = exclude_symbols
        self.symbols = symbols
        self.check_acceptability = check_acceptability
        self.wordlist = Path(wordlist)

    def __repr__(self):
        a = ('{}={!r}'.format(k, v) for k, v in vars(self).items())
        return "{}({})".format(self.__class__.__name__, ', '.join(a))

    @property
    def separators(self) -> tuple:
        """Distinct separator characters, in stable order."""
        return tuple(sorted(set(self.symbols)))


def validate_options(options: GenerationOptions):
    """Check `options` for impossible or unsafe combinations.

    Raises :class:`ConfigurationError` describing the first problem found.

    """
    if options.min_length < 1 or options.max_length < 1:
        raise ConfigurationError("Password length must be a positive number.")
    if options.min_length > options.max_length:
        raise ConfigurationError(
            f"Minimum length ({options.min_length}) is greater than "
            f"maximum length ({options.max_length}).")
    if options.exclude_upper and options.exclude_lower:
        raise ConfigurationError(
            "Cannot exclude both upper-case and lower-case letters.")
    if not options.exclude_numbers:
        if not options.exclude_symbols and options.min_length < MIN_LENGTH_FULL:
            raise ConfigurationError(
                f"Minimum length must be at least {MIN_LENGTH_FULL} "
                f"when numbers and symbols are included.")
        if options.exclude_symbols and options.min_length < MIN_LENGTH_NO_SYMBOLS:
            raise ConfigurationError(
                f"Minimum length must be at least {MIN_LENGTH_NO_SYMBOLS} "
                f"when numbers are included.")
    if not options.exclude_symbols:
        if not options.symbols:
            raise ConfigurationError("No symbols to choose a separator from.")
        bad = [c for c in options.separators if c.isalnum() or c.isspace()]
        if bad:
            raise ConfigurationError(
                f"Symbols must not contain letters, digits or whitespace: {''.join(bad)!r}")
