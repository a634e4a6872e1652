"""Error taxonomy shared by the console and its collaborators."""


class TuimanError(RuntimeError):
    pass


class ValidationError(TuimanError):
    """User input that cannot be saved or executed as-is."""


class StoreError(TuimanError):
    pass


class HistoryError(TuimanError):
    pass


class ExchangeError(TuimanError):
    pass


class SecretStoreError(TuimanError):
    pass


class PlatformCapabilityError(TuimanError):
    """Feature is not available on the current operating system."""

    def __init__(self, feature: str, detail: str = "") -> None:
        self.feature = feature
        message = f"{feature} is not supported on this platform"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


__all__ = [
    "TuimanError",
    "ValidationError",
    "StoreError",
    "HistoryError",
    "ExchangeError",
    "SecretStoreError",
    "PlatformCapabilityError",
]
