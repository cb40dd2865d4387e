"""CSV quote export."""

import csv
import io

from tourcalc.export.rows import quote_sections
from tourcalc.models.costs import CostBreakdown
from tourcalc.models.trip import TripParameters

# Spreadsheet apps need the BOM to detect UTF-8
CSV_ENCODING = "utf-8-sig"


def build_csv(params: TripParameters, breakdown: CostBreakdown) -> bytes:
    """Render the quote as CSV, one titled block per section.

    Args:
        params: Snapshot the breakdown was computed from
        breakdown: Computed breakdown; its values are written as-is

    Returns:
        UTF-8 CSV bytes with a byte order mark
    """
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")

    for index, section in enumerate(quote_sections(params, breakdown)):
        if index:
            writer.writerow([])
        writer.writerow([section.title])
        writer.writerow(section.header)
        writer.writerows(section.rows)

    return buf.getvalue().encode(CSV_ENCODING)
