import string
from pathlib import Path

import pytest

from wordpass import pwgen, moderation
from wordpass.errors import ConfigurationError, ResourceError, ExhaustedRetriesError
from wordpass.generator import generate
from wordpass.moderation import Verdict, ServiceConfig
from wordpass.options import GenerationOptions, SYMBOLS


class CountingChecker:

    """Reject the first `reject` pairs, accept the rest."""

    def __init__(self, reject=0, verdict=Verdict.UNACCEPTABLE):
        self.reject = reject
        self.verdict = verdict
        self.calls = 0

    def check(self, word1, word2):
        self.calls += 1
        if self.calls <= self.reject:
            return self.verdict
        return Verdict.ACCEPTABLE


@pytest.fixture()
def no_wordlist(monkeypatch):
    def load_wordlist(*_args):
        raise AssertionError("word list must not be loaded")
    monkeypatch.setattr(pwgen, 'load_wordlist', load_wordlist)


class TestGenerate:

    def test_default(self):
        for _ in range(100):
            pw = generate()
            assert 15 <= len(pw) <= 32
            assert any(c.islower() for c in pw)
            assert any(c.isupper() for c in pw)

    @pytest.mark.parametrize("min_length, max_length", [(14, 16), (17, 19), (20, 32)])
    def test_length_bounds(self, min_length, max_length):
        options = GenerationOptions(min_length=min_length, max_length=max_length)
        for _ in range(50):
            assert min_length <= len(generate(options)) <= max_length

    def test_no_numbers(self):
        options = GenerationOptions(exclude_numbers=True, min_length=8)
        for _ in range(50):
            assert not any(c.isdigit() for c in generate(options))

    def test_no_symbols(self):
        options = GenerationOptions(exclude_symbols=True, min_length=12)
        for _ in range(50):
            pw = generate(options)
            assert not any(c in SYMBOLS for c in pw)
            assert all(c in string.ascii_letters + string.digits for c in pw)

    def test_exact_length(self):
        options = GenerationOptions(min_length=10, max_length=10,
                                    exclude_numbers=True, exclude_symbols=True)
        pw = generate(options, words=["happy", "dream"])
        assert pw in ("HAPPYdream", "dreamHAPPY", "HAPPYhappy", "happyHAPPY",
                      "DREAMdream", "dreamDREAM", "DREAMhappy", "happyDREAM")

    def test_custom_wordlist(self, tmp_path):
        path = tmp_path / 'words.txt'
        path.write_text("alpha\nbravo\n", encoding='utf-8')
        options = GenerationOptions(wordlist=path, exclude_numbers=True, symbols="+",
                                    min_length=11, max_length=11)
        pw = generate(options)
        assert {w.lower() for w in pw.split('+')} <= {"alpha", "bravo"}


class TestErrors:

    @pytest.mark.parametrize("kwargs", [
        dict(min_length=20, max_length=10),
        dict(exclude_upper=True, exclude_lower=True),
        dict(min_length=5),
    ])
    def test_invalid_options(self, no_wordlist, kwargs):
        with pytest.raises(ConfigurationError):
            generate(GenerationOptions(**kwargs))

    def test_check_without_credential(self, no_wordlist):
        with pytest.raises(ConfigurationError, match="API key"):
            generate(GenerationOptions(check_acceptability=True))

    def test_missing_wordlist(self):
        options = GenerationOptions(wordlist=Path('/does/not/exist'))
        with pytest.raises(ResourceError):
            generate(options)

    def test_impossible_length(self):
        options = GenerationOptions(min_length=30, max_length=32)
        with pytest.raises(ExhaustedRetriesError):
            generate(options, words=["cat"], max_attempts=50)


class TestAcceptability:

    def test_retries_until_acceptable(self):
        checker = CountingChecker(reject=5)
        pw = generate(GenerationOptions(), words=["happy", "dream"], checker=checker)
        assert 15 <= len(pw) <= 32
        assert checker.calls >= 6

    def test_unknown_rejected(self):
        checker = CountingChecker(reject=3, verdict=Verdict.UNKNOWN)
        generate(GenerationOptions(), words=["happy", "dream"], checker=checker)
        assert checker.calls >= 4

    def test_never_acceptable(self):
        checker = CountingChecker(reject=10 ** 9)
        with pytest.raises(ExhaustedRetriesError):
            generate(GenerationOptions(), words=["happy", "dream"], checker=checker)
        assert checker.calls == pwgen.MAX_CHECKS


class TrackingSession:

    """Stands in for requests.Session, answers every question with `reply`."""

    reply = 'acceptable'
    opened = []

    def __init__(self):
        self.closed = False
        TrackingSession.opened.append(self)

    def post(self, url, **kwargs):
        return TrackingResponse(self.reply)

    def close(self):
        self.closed = True


class TrackingResponse:

    def __init__(self, content):
        self.content = content

    def raise_for_status(self):
        pass

    def json(self):
        return {'choices': [{'message': {'content': self.content}}]}


class TestSessionLifetime:

    @pytest.fixture(autouse=True)
    def tracking_session(self, monkeypatch):
        TrackingSession.opened = []
        monkeypatch.setattr(moderation.requests, 'Session', TrackingSession)

    def options(self):
        return GenerationOptions(check_acceptability=True)

    def test_closed_after_success(self):
        for _ in range(3):
            generate(self.options(), ServiceConfig(api_key='sk-test'), words=["happy", "dream"])
        assert len(TrackingSession.opened) == 3
        assert all(s.closed for s in TrackingSession.opened)

    def test_closed_after_exhausted(self, monkeypatch):
        monkeypatch.setattr(TrackingSession, 'reply', 'unacceptable')
        with pytest.raises(ExhaustedRetriesError):
            generate(self.options(), ServiceConfig(api_key='sk-test'), words=["happy", "dream"])
        session, = TrackingSession.opened
        assert session.closed

    def test_caller_checker_left_open(self):
        with moderation.RemoteCheck(ServiceConfig(api_key='sk-test')) as checker:
            generate(self.options(), words=["happy", "dream"], checker=checker)
            generate(self.options(), words=["happy", "dream"], checker=checker)
            session, = TrackingSession.opened
            assert not session.closed
        assert session.closed
