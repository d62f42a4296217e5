from __future__ import annotations

import math
from typing import Any, Dict, Iterable, List

import pandas as pd

CSV_COLUMNS = [
    "commission_id",
    "transaction_date",
    "transaction_total",
    "transaction_commission",
    "vendor_id_offer_id",
    "offer_title",
    "vendor_type",
    "click_source",
    "referrer",
    "placement_id",
    "city",
    "country",
]

UNKNOWN = "?"


def _cell(value: Any) -> str:
    """
    Render a record value the way it reads in the raw JSON:
    null -> "", true/false lowercase, 10.0 -> "10".
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return str(value)


def _city_region(geo: Dict[str, Any]) -> str:
    city = geo.get("city") or UNKNOWN
    region = geo.get("sub_1_code") or geo.get("sub_1") or geo.get("sub_2_code") or UNKNOWN
    return f"{_cell(city)}, {_cell(region)}"


def commission_to_row(commission: Dict[str, Any]) -> List[str]:
    """
    Flatten one commission record into the CSV_COLUMNS order.

    Geo falls back to "?" per part; a missing geo object counts as empty.
    """
    geo = commission.get("geo") or {}

    return [
        _cell(commission.get("id")),
        _cell(commission.get("transaction_date")),
        _cell(commission.get("transaction_total")),
        _cell(commission.get("transaction_commission")),
        _cell(commission.get("vendor_id_offer_id")),
        _cell(commission.get("offer_title")),
        _cell(commission.get("vendor_type")),
        _cell(commission.get("click_source")),  # smartserve | shortcode
        _cell(commission.get("referrer")),
        _cell(commission.get("placement_id")),
        _city_region(geo),
        _cell(geo.get("country") or UNKNOWN),
    ]


def commissions_to_dataframe(commissions: Iterable[Dict[str, Any]]) -> pd.DataFrame:
    """
    Returns a dataframe with exactly CSV_COLUMNS, all values as strings,
    one row per commission in input order.
    """
    rows = [commission_to_row(c) for c in commissions]
    if not rows:
        return pd.DataFrame(columns=CSV_COLUMNS, dtype=str)
    return pd.DataFrame(rows, columns=CSV_COLUMNS, dtype=str)
