class InvalidQueryError(ValueError):
    """User input rejected before it enters the pipeline (blank message)."""


class CompletionError(RuntimeError):
    """The completion service failed, timed out or returned nothing usable."""


class RecordStoreError(RuntimeError):
    """The listing store could not answer. Distinct from an empty result."""
