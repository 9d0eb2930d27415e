"""Errors raised by the ranking services."""


class RankingError(Exception):
    """Base class for ranking errors."""

    code = "RANKING_ERROR"


class InvalidCursorError(RankingError):
    """Continuation token is malformed or cannot be decoded."""

    code = "INVALID_CURSOR"


class InvalidParametersError(RankingError):
    """Request parameters are out of range."""

    code = "INVALID_PARAMETERS"


class UpstreamFetchFailedError(RankingError):
    """The observation store query failed."""

    code = "UPSTREAM_FETCH_FAILED"
