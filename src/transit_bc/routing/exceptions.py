"""Exceptions raised by the routing core and the stop catalog.

Input problems and search outcomes are reported to callers as typed
results (see route_result.py). The exceptions below are either internal
signals (NoRouteFound) or conditions the caller cannot fix by changing
its input.
"""


class TransitRoutingError(Exception):
    """Base error with a machine-readable code."""

    def __init__(self, message: str, code: str = "INTERNAL_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)


class GraphError(TransitRoutingError):
    def __init__(self, message: str = "Invalid network graph operation"):
        super().__init__(message, code="GRAPH_ERROR")


class NoRouteFound(TransitRoutingError):
    def __init__(self, source: int, target: int):
        self.source = source
        self.target = target
        super().__init__(f"No route found from stop {source} to stop {target}", code="NO_ROUTE")


class InternalConsistencyError(TransitRoutingError):
    """Graph, search state and catalog disagree. Not recoverable by the caller."""

    def __init__(self, message: str):
        super().__init__(message, code="INTERNAL_CONSISTENCY")


class SearchLimitExceeded(TransitRoutingError):
    def __init__(self, message: str):
        super().__init__(message, code="SEARCH_LIMIT_EXCEEDED")


class CatalogValidationError(TransitRoutingError):
    def __init__(self, errors: list):
        self.errors = list(errors)
        message = "Invalid stop catalog:\n" + "\n".join(f"  - {e}" for e in self.errors)
        super().__init__(message, code="CATALOG_INVALID")


class CatalogNotLoadedError(TransitRoutingError):
    def __init__(self, message: str = "Stop catalog has not been loaded"):
        super().__init__(message, code="CATALOG_NOT_LOADED")
