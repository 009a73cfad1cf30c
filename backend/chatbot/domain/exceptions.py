"""Domain-specific exceptions — framework-independent."""


class InvalidQueryError(Exception):
    """Raised when a query is not usable text (e.g. not a string)."""

    def __init__(self, message: str = "Consulta inválida."):
        self.message = message
        super().__init__(message)


class KnowledgeStoreError(Exception):
    """Raised when the knowledge-base store cannot be read.

    Transient: callers should surface it as a temporary failure, never as
    "no match".
    """

    def __init__(self, operation: str, cause: Exception | None = None):
        self.operation = operation
        self.cause = cause
        detail = f": {cause}" if cause else ""
        super().__init__(f"Knowledge store '{operation}' failed{detail}")


class VocabularyError(Exception):
    """Raised when the NLP vocabulary file is missing or malformed."""

    def __init__(self, source: str, message: str):
        self.source = source
        self.message = message
        super().__init__(f"Invalid vocabulary in {source}: {message}")
