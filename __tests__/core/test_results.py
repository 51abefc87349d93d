import httpx
import pytest

from matomo_sdk.core.exceptions import DeliveryError
from matomo_sdk.core.results import TrackFailure, TrackSuccess


def test_success_returns_response() -> None:
    response = httpx.Response(204)
    result = TrackSuccess(response=response)

    assert result.ok is True
    assert result.raise_for_error() is response


def test_failure_raises_delivery_error() -> None:
    result = TrackFailure(error=503, response=httpx.Response(503))

    assert result.ok is False
    with pytest.raises(DeliveryError, match="503") as exc_info:
        result.raise_for_error()
    assert exc_info.value.error == 503


def test_results_are_frozen() -> None:
    result = TrackFailure(error="boom")

    with pytest.raises((AttributeError, TypeError)):
        result.error = 500  # type: ignore[misc]
