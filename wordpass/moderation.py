# moderation
# (acceptability check of word pairs)
#

import enum
import logging

import requests

from .errors import ConfigurationError, ServiceError

API_URL = 'https://api.openai.com/v1/chat/completions'
MODEL = 'gpt-4o-mini'
TIMEOUT = 10

ACCEPTABLE_REPLY = 'acceptable'
UNACCEPTABLE_REPLY = 'unacceptable'

SYSTEM_PROMPT = (
    f"You are a content moderator. Reply with exactly one word, "
    f"either '{ACCEPTABLE_REPLY}' or '{UNACCEPTABLE_REPLY}', "
    f"without quotes, punctuation or explanation."
)
USER_PROMPT = (
    "Do the words '{}' and '{}', individually or combined into a phrase, "
    "have any negative, offensive or inappropriate connotation?"
)

log = logging.getLogger(__name__)


class Verdict(enum.Enum):
    ACCEPTABLE = 'acceptable'
    UNACCEPTABLE = 'unacceptable'
    UNKNOWN = 'unknown'


class ServiceConfig:

    """Connection settings for the moderation service.

    Built once at startup (see `main.Config`) and passed to `RemoteCheck`.

    """

    def __init__(self, api_key=None, api_url=API_URL, model=MODEL, timeout=TIMEOUT):
        self.api_key = api_key
        self.api_url = api_url
        self.model = model
        self.timeout = timeout

    def __repr__(self):
        # Don't leak the key into logs
        key = '***' if self.api_key else None
        return "{}(api_key={!r}, api_url={!r}, model={!r}, timeout={!r})".format(
            self.__class__.__name__, key, self.api_url, self.model, self.timeout)


class NoCheck:

    """Accept every word pair."""

    def check(self, word1: str, word2: str) -> Verdict:
        return Verdict.ACCEPTABLE

    def close(self):
        pass


NO_CHECK = NoCheck()


class RemoteCheck:

    """Ask a chat-completion service whether a word pair is acceptable.

    :meth:`check` never raises. Failures of the service are logged
    and reported as :attr:`Verdict.UNKNOWN`.

    The reply must equal ACCEPTABLE_REPLY after surrounding whitespace
    is stripped. Any other text (different case, punctuation) rejects the pair.

    A session created here is closed by :meth:`close`. A session passed
    in belongs to the caller and is left open.

    """

    def __init__(self, service: ServiceConfig, session=None):
        self._service = service
        self._own_session = session is None
        self._session = session or requests.Session()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self):
        if self._own_session:
            self._session.close()

    def _headers(self) -> dict:
        return {
            'Authorization': f'Bearer {self._service.api_key}',
            'Content-Type': 'application/json',
        }

    def _payload(self, word1, word2) -> dict:
        return {
            'model': self._service.model,
            'messages': [
                {'role': 'system', 'content': SYSTEM_PROMPT},
                {'role': 'user', 'content': USER_PROMPT.format(word1, word2)},
            ],
        }

    def ask(self, word1: str, word2: str) -> str:
        """Send the question and return the reply text (stripped).

        Raises :class:`ServiceError` on any failure.

        """
        try:
            response = self._session.post(self._service.api_url,
                                          headers=self._headers(),
                                          json=self._payload(word1, word2),
                                          timeout=self._service.timeout)
            response.raise_for_status()
        except (requests.RequestException, ValueError) as e:
            raise ServiceError(f"Moderation request failed: {e}") from e
        try:
            data = response.json()
        except ValueError as e:
            raise ServiceError(f"Moderation response is not JSON: {e}") from e
        try:
            content = data['choices'][0]['message']['content']
        except (KeyError, IndexError, TypeError) as e:
            raise ServiceError(f"Unexpected moderation response: {data!r}") from e
        if not isinstance(content, str):
            raise ServiceError(f"Unexpected moderation reply: {content!r}")
        return content.strip()

    def check(self, word1: str, word2: str) -> Verdict:
        try:
            reply = self.ask(word1, word2)
        except ServiceError as e:
            log.warning("%s", e)
            return Verdict.UNKNOWN
        if reply == ACCEPTABLE_REPLY:
            return Verdict.ACCEPTABLE
        log.debug("Rejected %r + %r (reply %r)", word1, word2, reply)
        return Verdict.UNACCEPTABLE


def make_checker(options, service: ServiceConfig = None):
    """Select the checker for `options` once, at startup."""
    if not options.check_acceptability:
        return NO_CHECK
    if service is None or not service.api_key:
        raise ConfigurationError(
            "Acceptability check requires an API key "
            "(set api_key in config or WORDPASS_API_KEY).")
    return RemoteCheck(service)
