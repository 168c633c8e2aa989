import os
import sys
import logging
import argparse
import configparser
from pathlib import Path

from blessed import Terminal
import pyperclip

from . import options as opts
from .errors import WordpassError, ConfigurationError
from .generator import generate
from .moderation import ServiceConfig, API_URL, MODEL, TIMEOUT

DATA_DIR = Path('~/.wordpass')
API_KEY_ENV = 'WORDPASS_API_KEY'

log = logging.getLogger(__name__)


class Config:

    def __init__(self, config_file):
        self.api_key = None
        self.api_url = API_URL
        self.model = MODEL
        self.timeout = TIMEOUT
        self.wordlist = None
        self.symbols = None
        self.load(config_file)
        self.api_key = os.environ.get(API_KEY_ENV) or self.api_key

    def load(self, config_file):
        config_file = Path(config_file).expanduser()
        log.debug("Loading config %r...", str(config_file))
        config = configparser.ConfigParser(interpolation=None)
        config.read(config_file, encoding='utf-8')
        for section in config.sections():
            if section != 'wordpass':
                log.warning("unknown section %r in config %r", section, str(config_file))
                continue
            section = config[section]
            for key in section:
                if key == 'api_key':
                    self.api_key = section[key]
                elif key == 'api_url':
                    self.api_url = section[key]
                elif key == 'model':
                    self.model = section[key]
                elif key == 'timeout':
                    self.timeout = section.getfloat(key)
                    if self.timeout <= 0:
                        raise ConfigurationError(
                            f"timeout must be a positive number of seconds, got {section[key]!r}")
                elif key == 'wordlist':
                    self.wordlist = Path(section[key]).expanduser()
                elif key == 'symbols':
                    self.symbols = section[key]
                else:
                    log.warning("unknown key [%r] %r in config %r",
                                section.name, key, str(config_file))

    def service(self) -> ServiceConfig:
        return ServiceConfig(api_key=self.api_key, api_url=self.api_url,
                             model=self.model, timeout=self.timeout)


def positive_int(value: str) -> int:
    """Argparse type: integer greater than zero."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value!r} is not an integer")
    if number < 1:
        raise argparse.ArgumentTypeError(f"{value!r} is not a positive number")
    return number


def first_given(*values):
    """Return the first value which is not None (empty string counts)."""
    return next(v for v in values if v is not None)


def run_generate(args) -> int:
    try:
        cfg = Config(args.config_file)
    except (configparser.Error, ValueError, ConfigurationError) as e:
        print_error(f"Bad config file {str(args.config_file)!r}: {e}")
        return 1
    options = opts.GenerationOptions(
        min_length=args.min_length,
        max_length=args.max_length,
        exclude_upper=args.exclude_upper,
        exclude_lower=args.exclude_lower,
        exclude_numbers=args.exclude_numbers,
        exclude_symbols=args.exclude_symbols,
        symbols=first_given(args.symbols, cfg.symbols, opts.SYMBOLS),
        check_acceptability=args.check,
        wordlist=args.wordlist or cfg.wordlist or opts.WORDLIST_PATH)
    log.debug("%r", options)
    service = cfg.service()
    password = None
    try:
        for _ in range(args.count):
            password = generate(options, service)
            print(password)
    except WordpassError as e:
        print_error(str(e))
        return 1
    if args.copy:
        pyperclip.copy(password)
        print_error("(Last password copied to clipboard.)", term_style='bright_blue')
    return 0


def print_error(text, term_style='red'):
    term = Terminal(stream=sys.stderr)
    print(getattr(term, term_style)(text), file=sys.stderr)


def parse_args(argv=None):
    """Process command line args."""
    ap = argparse.ArgumentParser(prog="wordpass",
                                 description="Generate memorable random passwords "
                                             "from two dictionary words, "
                                             "a number and a symbol.")
    ap.add_argument('-m', '--min-length', dest='min_length', type=positive_int,
                    default=opts.MIN_LENGTH,
                    help="minimal length of password (default: %(default)s)")
    ap.add_argument('-M', '--max-length', dest='max_length', type=positive_int,
                    default=opts.MAX_LENGTH,
                    help="maximal length of password (default: %(default)s)")
    ap.add_argument('-S', '--no-symbols', dest='exclude_symbols', action='store_true',
                    help="do not separate words by a symbol")
    case_grp = ap.add_mutually_exclusive_group()
    case_grp.add_argument('-U', '--no-upper', dest='exclude_upper', action='store_true',
                          help="no upper-case letters")
    case_grp.add_argument('-L', '--no-lower', dest='exclude_lower', action='store_true',
                          help="no lower-case letters")
    ap.add_argument('-D', '--no-numbers', dest='exclude_numbers', action='store_true',
                    help="do not add a number")
    ap.add_argument('-w', '--wordlist', type=Path,
                    help=f"word list file, one word per line "
                         f"(default: {opts.WORDLIST_PATH.name} from the package)")
    ap.add_argument('-s', '--symbols', type=str,
                    help=f"symbols to choose a separator from (default: {opts.SYMBOLS})")
    ap.add_argument('-a', '--check', action='store_true',
                    help="reject inappropriate word pairs using the moderation API "
                         f"(needs api_key in config or {API_KEY_ENV})")
    ap.add_argument('-n', '--count', type=positive_int, default=1,
                    help="number of passwords to generate (default: %(default)s)")
    ap.add_argument('-c', '--copy', action='store_true',
                    help="copy the (last) password to clipboard")
    ap.add_argument('--config', dest='config_file',
                    default=DATA_DIR / 'wordpass.conf',
                    help="config file (default: %(default)s)")
    ap.add_argument('-v', '--verbose', action='store_true',
                    help="print debug messages to stderr")
    return ap.parse_args(args=argv)


def main(argv=None):
    """Main program

    :param argv: Used in tests. Default is sys.argv
    :return: Exit status
    """
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format='%(levelname)s: %(message)s')
    return run_generate(args)


if __name__ == '__main__':
    sys.exit(main())
