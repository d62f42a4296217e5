"""
Pull the Okanjo commission report for the last 30 days and export it.

Pipeline:
1. Log in (create a session)
2. Fetch the commission report for the window
3. Write output.json (raw) and output.csv (flattened)
4. Log out (delete the session), also when a step above fails

Usage:
    EMAIL=user@domain.tld PASSWORD=pass API_KEY=secret python -m commission_report.run
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

from commission_report.export.commission_export import write_flat_csv, write_raw_json
from commission_report.extract.okanjo.commission_report import okanjo_session, pull_commissions
from commission_report.extract.okanjo.okanjo_client import OkanjoClient
from commission_report.extract.okanjo.okanjo_config import OkanjoConfig, load_okanjo_config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineResult:
    commissions: List[Dict[str, Any]]
    json_path: Path
    csv_path: Path


def run_pipeline(
    config: OkanjoConfig,
    *,
    client: Optional[OkanjoClient] = None,
    now: Optional[datetime] = None,
) -> PipelineResult:
    client = client or OkanjoClient(config)

    filters: Dict[str, Any] = {}
    if config.instance_ids:
        filters["instance_ids"] = list(config.instance_ids)

    with okanjo_session(client, config.email, config.password) as session:
        commissions = pull_commissions(
            client,
            session,
            filters=filters,
            window_days=config.window_days,
            now=now,
        )

        json_result = write_raw_json(commissions, config.output_json_path)
        csv_result = write_flat_csv(commissions, config.output_csv_path)

    return PipelineResult(
        commissions=commissions,
        json_path=json_result.path,
        csv_path=csv_result.path,
    )


def _log_level() -> int:
    level = logging.getLevelName(os.getenv("LOG_LEVEL", "INFO").strip().upper())
    return level if isinstance(level, int) else logging.INFO


def main() -> int:
    load_dotenv()
    logging.basicConfig(
        level=_log_level(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        config = load_okanjo_config()
        result = run_pipeline(config)
    except Exception:
        logger.exception("Something went wrong!")
        return 1

    logger.info(f"{len(result.commissions)} commissions -> {result.json_path}, {result.csv_path}")
    logger.info("DONE!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
