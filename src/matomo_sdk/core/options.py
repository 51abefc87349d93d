"""Tracking parameters and their query-string encoding.

Field names follow the Matomo tracking API wire contract:
https://developer.matomo.org/api-reference/tracking-api
"""

import math
from collections.abc import Mapping
from typing import Literal
from urllib.parse import urlencode

from pydantic import BaseModel, ConfigDict, Field

type OptionValue = str | int | float | None


class TrackOptions(BaseModel):
    """Known Matomo tracking parameters.

    Parameters whose wire name starts with an underscore are exposed under a readable
    attribute name and serialized under their alias. Unknown parameters are passed
    through unchanged.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    # Required, injected by the tracker
    idsite: int | None = None
    rec: Literal[1] | None = None

    # Recommended parameters
    action_name: str | None = None
    url: str | None = None
    visitor_id: str | None = Field(default=None, alias="_id")
    rand: str | None = None
    apiv: Literal[1] | None = None

    # User info
    urlref: str | None = None
    visit_cvar: str | None = Field(default=None, alias="_cvar")
    visit_count: str | None = Field(default=None, alias="_idvc")
    previous_visit_ts: str | None = Field(default=None, alias="_viewts")
    first_visit_ts: str | None = Field(default=None, alias="_idts")
    campaign_name: str | None = Field(default=None, alias="_rcn")
    campaign_keyword: str | None = Field(default=None, alias="_rck")
    res: str | None = None
    h: int | None = None
    m: int | None = None
    s: int | None = None
    fla: Literal[1] | None = None
    java: Literal[1] | None = None
    dir: Literal[1] | None = None
    qt: Literal[1] | None = None
    pdf: Literal[1] | None = None
    wma: Literal[1] | None = None
    ag: Literal[1] | None = None
    cookie: Literal[1] | None = None
    ua: str | None = None
    lang: str | None = None
    uid: str | None = None
    cid: str | None = None
    new_visit: int | None = None

    # Action info
    cvar: str | None = None
    link: str | None = None
    download: str | None = None
    search: str | None = None
    search_cat: str | None = None
    search_count: int | None = None
    pv_id: str | None = None
    idgoal: int | None = None
    revenue: float | None = None
    gt_ms: int | None = None
    cs: str | None = None
    ca: Literal[1] | None = None

    # Event tracking
    e_c: str | None = None
    e_a: str | None = None
    e_n: str | None = None
    e_v: str | None = None

    # Content tracking
    c_n: str | None = None
    c_p: str | None = None
    c_t: str | None = None
    c_i: str | None = None

    # Ecommerce
    ec_id: str | None = None
    ec_items: str | None = None
    ec_st: float | None = None
    ec_tx: float | None = None
    ec_sh: float | None = None
    ec_dt: float | None = None
    ecommerce_ts: int | None = Field(default=None, alias="_ects")

    # Require token_auth
    token_auth: str | None = None
    cip: str | None = None
    cdt: str | None = None
    country: str | None = None
    region: str | None = None
    city: str | None = None
    lat: str | None = None
    long: str | None = None

    # Media analytics
    ma_id: str | None = None
    ma_ti: str | None = None
    ma_re: str | None = None
    ma_mt: Literal["video", "audio"] | None = None
    ma_pn: str | None = None
    ma_sn: int | None = None
    ma_le: float | None = None
    ma_ps: float | None = None
    ma_ttp: float | None = None
    ma_w: int | None = None
    ma_h: int | None = None
    ma_fs: Literal[0, 1] | None = None
    ma_se: str | None = None

    # Queued tracking
    queuedtracking: Literal[0] | None = None

    # Other
    send_image: Literal[0] | None = None
    ping: Literal[1] | None = None
    bots: Literal[1] | None = None


type OptionsInput = str | Mapping[str, OptionValue] | TrackOptions


def to_params(options: OptionsInput) -> dict[str, OptionValue]:
    """Return a fresh parameter dict for any accepted options shape.

    A bare string is shorthand for ``{"url": options}``.
    """
    if isinstance(options, str):
        return {"url": options}
    if isinstance(options, TrackOptions):
        return options.model_dump(by_alias=True, exclude_none=True)
    return dict(options)


def merge_base(params: Mapping[str, OptionValue], site_id: int | float) -> dict[str, OptionValue]:
    merged = dict(params)
    merged["idsite"] = site_id
    merged["rec"] = 1
    return merged


def stringify(value: str | int | float | bool) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
    return str(value)


def encode_query(params: Mapping[str, OptionValue]) -> str:
    """Encode parameters as a form-urlencoded query string, skipping ``None`` values.

    Uses the WHATWG form-urlencoded byte set: ``*`` stays literal and ``~`` is escaped.
    """
    pairs = [(key, stringify(value)) for key, value in params.items() if value is not None]
    return urlencode(pairs, safe="*").replace("~", "%7E")
