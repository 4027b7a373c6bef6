class ConfigError(Exception):
    """Exception raised when the service configuration cannot be loaded.

    Carries an optional section/key locator so callers can report where the
    problem is without parsing the message.
    """

    def __init__(
        self, message: str, section: str | None = None, key: str | None = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.section = section
        self.key = key

    def __str__(self) -> str:
        if self.section is None:
            return self.message
        if self.key is None:
            return f"[{self.section}]: {self.message}"
        return f"[{self.section}] {self.key}: {self.message}"
