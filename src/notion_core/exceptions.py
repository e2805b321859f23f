"""Exception types shared by Notion components."""


class NotionError(Exception):
    """Base error for failures raised inside Notion.

    Parameters
    ----------
    message : str
        Human readable description of the failure
    backtrace : str, optional
        Pre-rendered backtrace to show in developer mode. When omitted, the
        traceback attached to the raised exception is used instead.
    """

    def __init__(self, message: str, backtrace: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.backtrace = backtrace

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r})"
