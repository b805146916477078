"""Exception types for the Compass provider.

Every failure a lifecycle callback can report is one of these, so callers can
catch CompassProviderError to turn any of them into a user-visible diagnostic.

Exception Hierarchy:
    CompassProviderError (base)
    ├── ValidationError - Bad input detected before any network call
    ├── TransportError - The HTTP round trip itself failed
    ├── HTTPError - The API answered with a non-success status
    ├── GraphQLError - The API answered with an "errors" list or success=false
    ├── NotFoundError - Tenant or imported entity does not exist
    └── AmbiguousCreateError - A created link could not be identified afterwards
"""

from typing import Any, Dict, List, Optional


class CompassProviderError(Exception):
    """Base exception for all Compass provider errors.

    Attributes:
        message: Human-readable error description
        context: Additional contextual information (ids, tenant, status, ...)
    """

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} (context: {context_str})"
        return self.message

    def with_prefix(self, prefix: str) -> "CompassProviderError":
        """Return a copy of this error with the message prefixed by an operation label.

        The copy keeps the concrete exception class and its extra attributes,
        so "failed to create component: ..." is still a GraphQLError.
        """
        clone = self.__class__.__new__(self.__class__)
        clone.__dict__.update(self.__dict__)
        clone.message = f"{prefix}: {self.message}"
        clone.args = (clone.message,)
        clone.context = dict(self.context)
        return clone


class ValidationError(CompassProviderError):
    """Raised when input is rejected before contacting the API.

    Examples:
        - Component or link type outside its fixed enumeration
        - Attempt to change an immutable attribute (type, cloud_id, component_id)
        - No cloud_id and no tenant configured to derive it from
        - Malformed import identifier
    """

    pass


class TransportError(CompassProviderError):
    """Raised when the request could not complete (DNS, TCP, TLS, timeout, bad body).

    Attributes:
        cause: The underlying exception
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None,
                 context: Optional[Dict[str, Any]] = None):
        super().__init__(message, context)
        self.cause = cause


class HTTPError(CompassProviderError):
    """Raised when the API responds with a non-200 status.

    Attributes:
        status_code: HTTP status returned by the API
        body: Raw response body, kept for diagnostics
    """

    def __init__(self, status_code: int, body: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(f"GraphQL request failed with status {status_code}: {body}", context)
        self.status_code = status_code
        self.body = body


class GraphQLError(CompassProviderError):
    """Raised when the response envelope carries errors.

    Attributes:
        messages: Every error message returned, in order
    """

    def __init__(self, messages: List[str], context: Optional[Dict[str, Any]] = None):
        self.messages = list(messages)
        super().__init__(f"GraphQL errors: {'; '.join(self.messages)}", context)


class NotFoundError(CompassProviderError):
    """Raised when a tenant or an imported entity does not exist or is inaccessible."""

    pass


class AmbiguousCreateError(CompassProviderError):
    """Raised when a freshly created link cannot be matched to exactly one remote link.

    The link may now exist remotely without being tracked locally; it is not
    deleted or retried automatically.

    Attributes:
        candidates: Ids of the remote links that matched (empty if none did)
    """

    def __init__(self, message: str, candidates: Optional[List[str]] = None,
                 context: Optional[Dict[str, Any]] = None):
        super().__init__(message, context)
        self.candidates = list(candidates or [])
