# util/errors.py
class PipelineError(Exception):
    """Base for failures scoped to a single in-flight question."""


class LoadError(PipelineError):
    """Page table or embedding table is missing or malformed."""


class DimensionMismatchError(PipelineError):
    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(f"vector dimension mismatch: expected {expected}, got {actual}")
        self.expected = expected
        self.actual = actual


class EmbeddingError(PipelineError):
    pass


class CompletionError(PipelineError):
    pass


class ValidationError(PipelineError):
    pass
