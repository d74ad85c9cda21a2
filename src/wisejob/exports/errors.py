"""Errors raised while compiling export flags."""


class ExportSpecError(ValueError):
    """An export flag, its arguments, or its filename is malformed.

    Attributes:
        flag: The offending flag including its leading marker, if known
        filename: The offending filename, if the error concerns one
    """

    def __init__(self, message: str, flag: str | None = None, filename: str | None = None):
        super().__init__(message)
        self.flag = flag
        self.filename = filename


class ExportTimeError(ExportSpecError):
    """A time argument of an export flag is not a valid ISO-8601 timestamp."""

    def __init__(self, message: str, flag: str, value: str):
        super().__init__(message, flag=flag)
        self.value = value
