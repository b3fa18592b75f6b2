"""
Tab-delimited report of universal roles.
"""

import math
import sys
from pathlib import Path
from typing import Optional, Union

import pandas as pd
from loguru import logger

from .universal import UniversalRoleCounter

BASE_COLUMNS = ["role_id", "description", "good", "bad"]
COMPARE_COLUMNS = ["test_pct", "test_count", "error"]


def build_report(
    counter: UniversalRoleCounter,
    threshold: float,
    comparator: Optional[UniversalRoleCounter] = None
) -> pd.DataFrame:
    """
    Build the universal role report.

    Args:
        counter: Counter holding the results of this run
        threshold: Minimum fraction for a role to be universal
        comparator: Optional counter loaded from a previous run; each universal
            role here is checked against its score there

    Returns:
        DataFrame with one row per universal role, best first
    """
    rows = []
    for role in counter.universals(threshold):
        row = {
            "role_id": role.id,
            "description": role.name,
            "good": counter.good(role),
            "bad": counter.bad(role),
        }
        if comparator is not None:
            score = comparator.score(role)
            row["test_pct"] = "NaN" if math.isnan(score) else "%#4.2g" % score
            row["test_count"] = comparator.good(role)
            row["error"] = "Y" if math.isnan(score) or score < threshold else ""
        rows.append(row)

    columns = BASE_COLUMNS + (COMPARE_COLUMNS if comparator is not None else [])
    return pd.DataFrame(rows, columns=columns)


def count_failures(report: pd.DataFrame) -> int:
    """Return the number of universal roles that failed the comparison."""
    if "error" not in report.columns:
        return 0
    return int((report["error"] == "Y").sum())


def write_report(report: pd.DataFrame, output: Optional[Union[str, Path]] = None) -> None:
    """
    Write the report as tab-delimited text.

    Args:
        report: Report from build_report()
        output: Output file; standard output if omitted
    """
    if output is None:
        report.to_csv(sys.stdout, sep="\t", index=False)
    else:
        report.to_csv(output, sep="\t", index=False)
        logger.info(f"Report of {len(report)} universal roles written to {output}")
