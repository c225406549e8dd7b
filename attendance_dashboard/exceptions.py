class DashboardError(Exception):
    pass


class FetchError(DashboardError):
    """The sheet export could not be retrieved."""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code


class EmptySnapshotError(DashboardError):
    pass
