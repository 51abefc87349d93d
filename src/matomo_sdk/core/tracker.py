"""Matomo tracking HTTP API client."""

import logging
import math
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from typing import Any

import httpx

from matomo_sdk.core.events import ErrorListener, ErrorListeners, TrackerEvent
from matomo_sdk.core.exceptions import ConfigurationError, InvalidArgumentError
from matomo_sdk.core.options import OptionsInput, OptionValue, encode_query, merge_base, to_params
from matomo_sdk.core.results import TrackFailure, TrackResult, TrackSuccess
from matomo_sdk.core.settings import TrackerSettings

logger = logging.getLogger(__name__)

TRACKER_SCRIPTS = ("matomo.php", "piwik.php")


class MatomoTracker:
    """Client for the Matomo tracking HTTP API.

    Single hits are sent as a GET with the parameters in the query string. Bulk hits
    are sent as one POST whose JSON body wraps one query string per hit.

    Argument errors raise ``InvalidArgumentError`` before any request is made.
    Delivery failures never raise: they are passed to the ``"error"`` listeners, if
    any are registered, and the call returns ``None``. Use ``send``/``send_bulk`` to
    get an explicit ``TrackSuccess``/``TrackFailure`` instead.

    Example:
        >>> tracker = MatomoTracker(1, "https://example.com/matomo.php")
        >>> tracker.on("error", print)
        >>> await tracker.track("https://mywebsite.com/")
    """

    def __init__(
        self,
        site_id: int | float | str | None = None,
        tracker_url: str | None = None,
        no_url_validation: bool = False,  # noqa: FBT001, FBT002
        *,
        settings: TrackerSettings | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Validate and store the tracker identity.

        Args:
            site_id: Id of the tracked site, a number or a string
            tracker_url: URL of the Matomo tracking endpoint
            no_url_validation: Allow a tracker URL not ending in matomo.php or piwik.php
            settings: Transport settings (timeout, user agent)
            client: Shared HTTP client; one is opened per request when omitted
        """
        if not site_id or isinstance(site_id, bool) or not isinstance(site_id, int | float | str):
            msg = "Matomo site_id required"
            raise InvalidArgumentError(msg)
        if not tracker_url or not isinstance(tracker_url, str):
            msg = "Matomo tracker URL required, e.g. http://example.com/matomo.php"
            raise InvalidArgumentError(msg)
        if not no_url_validation and not tracker_url.endswith(TRACKER_SCRIPTS):
            msg = 'A tracker URL must end with "matomo.php" or "piwik.php"'
            raise InvalidArgumentError(msg)

        self._site_id = _coerce_site_id(site_id)
        self._tracker_url = tracker_url
        self._no_url_validation = bool(no_url_validation)
        self._settings = settings or TrackerSettings()
        self._client = client
        self._error_listeners = ErrorListeners()

    @classmethod
    def from_settings(
        cls,
        settings: TrackerSettings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> "MatomoTracker":
        settings = settings or TrackerSettings()
        if settings.site_id is None or settings.tracker_url is None:
            msg = "MATOMO_SITE_ID and MATOMO_TRACKER_URL must be configured"
            raise ConfigurationError(msg)
        return cls(
            settings.site_id,
            settings.tracker_url,
            settings.no_url_validation,
            settings=settings,
            client=client,
        )

    @property
    def site_id(self) -> int | float:
        return self._site_id

    @property
    def tracker_url(self) -> str:
        return self._tracker_url

    @property
    def no_url_validation(self) -> bool:
        return self._no_url_validation

    @property
    def uses_https(self) -> bool:
        return self._tracker_url.startswith("https")

    @property
    def settings(self) -> TrackerSettings:
        return self._settings

    def on(self, event: TrackerEvent, listener: ErrorListener) -> None:
        self._registry(event).add(listener)

    def off(self, event: TrackerEvent, listener: ErrorListener) -> None:
        self._registry(event).remove(listener)

    def listeners(self, event: TrackerEvent) -> list[ErrorListener]:
        return self._registry(event).snapshot()

    def listener_count(self, event: TrackerEvent) -> int:
        return len(self._registry(event))

    async def send(self, options: OptionsInput) -> TrackResult:
        """Send one tracking request without checking for a URL.

        For a list of tracking parameters see
        https://developer.matomo.org/api-reference/tracking-api
        """
        if options is None:
            msg = "Tracking options must be specified"
            raise InvalidArgumentError(msg)

        request_url = f"{self._tracker_url}?{self._build_query(to_params(options))}"
        return await self._request("GET", request_url)

    async def send_bulk(self, items: Sequence[OptionsInput], *, token_auth: str | None = None) -> TrackResult:
        """Send several tracking requests in a single bulk POST."""
        if not items:
            msg = "Bulk tracking requires at least one event"
            raise InvalidArgumentError(msg)
        if self._site_id is None:
            msg = "Matomo site_id must be specified"
            raise InvalidArgumentError(msg)

        body: dict[str, Any] = {
            "requests": [f"?{self._build_query(to_params(item))}" for item in items],
        }
        if token_auth is not None:
            body["token_auth"] = token_auth

        return await self._request(
            "POST",
            self._tracker_url,
            json=body,
            headers={"Content-Type": "application/json"},
        )

    async def track(self, options: OptionsInput | None = None) -> httpx.Response | None:
        """Track a page view.

        Args:
            options: URL to track, or tracking options containing a ``url``

        Returns:
            The response on success, ``None`` when delivery failed
        """
        if options is None:
            msg = "URL to be tracked must be specified"
            raise InvalidArgumentError(msg)

        params = to_params(options)
        if not params.get("url"):
            msg = "URL to be tracked must be specified"
            raise InvalidArgumentError(msg)

        return await self._settle(await self.send(params))

    async def track_event(self, options: OptionsInput | None = None) -> httpx.Response | None:
        """Track a custom event.

        Sets the ``ca`` (custom action) flag so the hit is not recorded as a page view.
        """
        params = to_params(options) if options is not None else {}
        if not params.get("e_c") or not params.get("e_a"):
            msg = "Event category and action must be specified"
            raise InvalidArgumentError(msg)

        return await self._settle(await self.send({**params, "ca": 1}))

    async def track_content(self, options: OptionsInput | None = None) -> httpx.Response | None:
        """Track a content impression or interaction.

        Sets the ``ca`` (custom action) flag so the hit is not recorded as a page view.
        """
        params = to_params(options) if options is not None else {}
        if not params.get("c_n") or not params.get("c_p"):
            msg = "Content name and piece must be specified"
            raise InvalidArgumentError(msg)

        return await self._settle(await self.send({**params, "ca": 1}))

    async def track_bulk(
        self,
        items: Sequence[OptionsInput] | None = None,
        *,
        token_auth: str | None = None,
    ) -> httpx.Response | None:
        return await self._settle(await self.send_bulk(items or [], token_auth=token_auth))

    def _registry(self, event: TrackerEvent) -> ErrorListeners:
        match event:
            case "error":
                return self._error_listeners
            case _:
                msg = f"unknown tracker event: {event}"
                raise InvalidArgumentError(msg)

    def _build_query(self, params: dict[str, OptionValue]) -> str:
        return encode_query(merge_base(params, self._site_id))

    @asynccontextmanager
    async def _client_scope(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._client is not None:
            yield self._client
            return

        async with httpx.AsyncClient(
            timeout=httpx.Timeout(self._settings.timeout),
            follow_redirects=True,
        ) as client:
            yield client

    async def _request(self, method: str, url: str, **kwargs: Any) -> TrackResult:  # noqa: ANN401
        headers: dict[str, str] = kwargs.pop("headers", {})
        if self._settings.user_agent:
            headers.setdefault("User-Agent", self._settings.user_agent)

        logger.debug("Sending Matomo tracking request: %s %s", method, url)
        try:
            async with self._client_scope() as client:
                response = await client.request(method, url, headers=headers, **kwargs)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.debug("Matomo tracking request failed: %s", exc)
            return TrackFailure(error=str(exc) or type(exc).__name__)

        if not response.is_success:
            logger.debug("Matomo tracking request returned status %s", response.status_code)
            return TrackFailure(error=response.status_code, response=response)

        return TrackSuccess(response=response)

    async def _settle(self, result: TrackResult) -> httpx.Response | None:
        if isinstance(result, TrackSuccess):
            return result.response

        if not await self._error_listeners.emit(result.error):
            logger.warning("Matomo tracking request failed with no error listener: %s", result.error)
        return None


def _coerce_site_id(site_id: int | float | str) -> int | float:
    if not isinstance(site_id, str):
        return site_id

    text = site_id.strip()
    unsigned = text.lstrip("+-")
    if unsigned == "Infinity":
        return -math.inf if text.startswith("-") else math.inf

    # Python-only spellings: digit separators, inf, nan
    if "_" not in text and unsigned.lower() not in {"inf", "infinity", "nan"}:
        try:
            return int(text)
        except ValueError:
            pass

        try:
            return float(text)
        except ValueError:
            pass

    logger.warning("Matomo site_id %r is not numeric", site_id)
    return math.nan
