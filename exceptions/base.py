"""
Root of the storefront exception hierarchy.
"""


class StorefrontException(Exception):
    """
    Base class for every error the stores, the checkout and the admin
    operations raise on purpose. Catch it at the outer edge (CLI) to report
    a readable message instead of a traceback.

    Attributes:
        message: Text shown to the user
        details: Machine-readable context (product id, quantity, session id, ...)
    """

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        name = type(self).__name__
        if not self.details:
            return f"{name}('{self.message}')"
        context = ', '.join(f"{key}={value}" for key, value in self.details.items())
        return f"{name}('{self.message}', {context})"
