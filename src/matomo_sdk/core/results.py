from dataclasses import dataclass
from typing import Literal, NoReturn

import httpx

from matomo_sdk.core.exceptions import DeliveryError


@dataclass(frozen=True, slots=True, kw_only=True)
class TrackSuccess:
    response: httpx.Response
    ok: Literal[True] = True

    def raise_for_error(self) -> httpx.Response:
        return self.response


@dataclass(frozen=True, slots=True, kw_only=True)
class TrackFailure:
    """A tracking request that was sent but not accepted.

    ``error`` is the HTTP status code for a non-success response, or the
    transport failure message when no response was received.
    """

    error: int | str
    response: httpx.Response | None = None
    ok: Literal[False] = False

    def raise_for_error(self) -> NoReturn:
        raise DeliveryError(self.error)


type TrackResult = TrackSuccess | TrackFailure
