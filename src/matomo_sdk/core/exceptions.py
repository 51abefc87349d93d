class MatomoError(Exception):
    pass


class InvalidArgumentError(MatomoError, ValueError):
    pass


class ConfigurationError(MatomoError):
    pass


class DeliveryError(MatomoError):
    def __init__(self, error: int | str) -> None:
        self.error = error
        super().__init__(f"matomo tracking request failed: {error}")
