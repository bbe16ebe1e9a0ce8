"""Match report builder.

Serialises match records into the CSV report::

    uid,latitude,longitude,clecomposite,nochamp,culture,variete,nosemi,date_semi
    01egDMwK2V9gxBIzMQG0,45.28529978,-74.28007563,C-12,12,Maïs,DKC 26-28,3,2024-05-14

Fields are comma-joined without quoting or escaping, so an attribute
value containing a comma or a line break shifts the columns of its row.
Lines are joined with ``\\n`` and the report has no trailing newline.
An empty match list yields the header line alone.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from crop_plan_matcher.core.constants import REPORT_COLUMNS

if TYPE_CHECKING:
    from collections.abc import Iterable

    from crop_plan_matcher.models.match_record import MatchRecord

REPORT_HEADER = ",".join(REPORT_COLUMNS)


def build_report(records: Iterable[MatchRecord]) -> str:
    """Return the CSV report text for *records*."""
    lines = [REPORT_HEADER]
    lines.extend(",".join(record.to_row()) for record in records)
    return "\n".join(lines)
