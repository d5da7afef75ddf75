"""Domain errors raised by services and mapped to HTTP responses by routers."""


class JobSourceError(RuntimeError):
    """The job board call failed (transport, status or payload)."""


class JobSourceNotConfigured(JobSourceError):
    """Adzuna credentials are not set."""


class LLMNotConfigured(RuntimeError):
    """No API key for the requested LLM provider."""


class LLMCallError(RuntimeError):
    """The provider call failed or returned no content."""


class LLMParseError(ValueError):
    """Model output was not JSON of the expected shape."""

    def __init__(self, message: str, raw: str = ""):
        super().__init__(message)
        self.raw = raw


class BusinessRuleError(Exception):
    """A per-user limit or ownership rule rejected the write."""


class SavedJobLimitReached(BusinessRuleError):
    pass


class DocumentLimitReached(BusinessRuleError):
    pass
