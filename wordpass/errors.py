# errors
# (exception hierarchy)
#


class WordpassError(RuntimeError):

    def __init__(self, msg):
        RuntimeError.__init__(self, msg)


class ConfigurationError(WordpassError):
    """Invalid combination of options or missing credential."""


class ResourceError(WordpassError):
    """Word list could not be read or has no usable words."""


class ServiceError(WordpassError):
    """Moderation service failed or answered garbage.

    Never propagates out of :meth:`RemoteCheck.check`.

    """


class ExhaustedRetriesError(WordpassError):
    """Gave up after too many rejected candidates."""
