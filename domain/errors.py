class ForkifyError(Exception):
    pass


class NetworkError(ForkifyError):
    """Non-success response, or the transport failed before one arrived."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"{self.message} ({self.status_code})"


class NotFoundError(NetworkError):
    pass


class RequestTimeoutError(ForkifyError, TimeoutError):
    def __init__(self, seconds: float) -> None:
        self.seconds = seconds
        super().__init__(f"Request took too long! Timeout after {seconds} seconds.")


class FormatError(ForkifyError, ValueError):
    def __init__(
        self,
        field: str,
        line: str,
        *,
        expected: str = "quantity,unit,description",
    ) -> None:
        self.field = field
        self.line = line
        super().__init__(
            f"Wrong format in {field}: {line!r}. Please use the format '{expected}'."
        )


class RecipeNotLoadedError(ForkifyError):
    pass
