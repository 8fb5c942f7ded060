class SearchError(Exception):
    """Base class for every failure of a listing search."""


class TransportError(SearchError):
    pass


class UpstreamStatusError(SearchError):
    def __init__(self, status_code: int, reason: str, body: str = ""):
        super().__init__(f"got non-200 code: {status_code}, {reason}")
        self.status_code = status_code
        self.reason = reason
        self.body = body


class DecodeError(SearchError):
    pass


class SearchDeadlineExceeded(SearchError):
    pass
