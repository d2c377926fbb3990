class APIFailureException(Exception):
    """Raised when a remote source answers with an unusable response."""


class ConfigurationException(Exception):
    """Raised when sources are wired or addressed incorrectly."""


class DuplicatePayerException(ConfigurationException):
    pass


class InvalidLookupRequestException(ValueError):
    pass


class LookupCancelledException(Exception):
    pass


class RegistryFrozenException(ConfigurationException):
    pass


class SourceTimeoutException(Exception):
    pass


class UnknownJurisdictionException(ConfigurationException):
    pass
