from __future__ import annotations

import csv
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Sequence, Union

from commission_report.transform.commission_rows import commissions_to_dataframe

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class CommissionExportError(RuntimeError):
    """Raised when an export file cannot be written."""


@dataclass(frozen=True)
class CommissionExportResult:
    path: Path
    rows: int


def write_raw_json(commissions: Sequence[Dict[str, Any]], path: PathLike) -> CommissionExportResult:
    """
    Write the commission records verbatim as pretty-printed UTF-8 JSON.
    Overwrites any existing file.
    """
    output_path = Path(path)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(json.dumps(list(commissions), indent=2, ensure_ascii=False), encoding="utf-8")
    except OSError as e:
        raise CommissionExportError(f"Failed to write {output_path}: {e}") from e

    logger.info(f"Wrote {len(commissions)} raw commissions to {output_path}")
    return CommissionExportResult(path=output_path, rows=len(commissions))


def write_flat_csv(commissions: Sequence[Dict[str, Any]], path: PathLike) -> CommissionExportResult:
    """
    Write the flattened 12-column CSV.

    - Header row, then one row per commission
    - Every field quoted; embedded quotes doubled, commas/newlines stay inside the quotes
    - UTF-8, "\\n" line endings, overwrites any existing file
    """
    output_path = Path(path)
    df = commissions_to_dataframe(commissions)

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(
            output_path,
            index=False,
            quoting=csv.QUOTE_ALL,
            lineterminator="\n",
            encoding="utf-8",
        )
    except OSError as e:
        raise CommissionExportError(f"Failed to write {output_path}: {e}") from e

    logger.info(f"Wrote {len(df)} CSV rows to {output_path}")
    return CommissionExportResult(path=output_path, rows=int(len(df)))
