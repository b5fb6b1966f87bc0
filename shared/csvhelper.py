from io import StringIO
from typing import Any, Dict, List, NamedTuple, Sequence, Tuple

import pandas as pd
from pandas.errors import EmptyDataError, ParserError

from shared.helpers.json_response_helper import validation_error

BOM = "\ufeff"


class ParsedCsv(NamedTuple):
    headers: List[str]
    rows: List[Dict[str, str]]
    # field count per row; cells past the header count up to the last non-empty one
    widths: List[int]


READ_OPTIONS = dict(
    header=None,
    dtype=str,
    keep_default_na=False,
    na_filter=False,
    skip_blank_lines=True,
    skipinitialspace=True,
)


def _record_widths(text: str) -> Tuple[int, int]:
    """Field count of the header line and of the widest record."""
    wider = []

    def measure(fields):
        wider.append(len(fields))
        return None

    df = pd.read_csv(StringIO(text), engine="python", on_bad_lines=measure, **READ_OPTIONS)
    return df.shape[1], max([df.shape[1]] + wider)


def parse_csv(content: str) -> ParsedCsv:
    """
    Parse CSV text into trimmed headers and one dict per data row.

    Quoting follows RFC 4180, so anything written by to_csv() reads back
    unchanged: quoted fields may hold commas, newlines and doubled quotes.
    Blank lines and rows with only empty fields are skipped, short rows
    are padded with "". A row wider than the header keeps only the cells
    under a header; its real field count is reported in `widths` so the
    caller can reject that one row.
    """
    if content is None or not content.strip():
        return ParsedCsv([], [], [])

    text = content.lstrip(BOM)
    try:
        header_width, width = _record_widths(text)
        df = pd.read_csv(StringIO(text), names=list(range(width)), **READ_OPTIONS)
    except EmptyDataError:
        return ParsedCsv([], [], [])
    except ParserError as e:
        return validation_error(message=f"Malformed CSV content: {e}")

    records = df.fillna("").values.tolist()
    headers = [str(value).strip() for value in records[0][:header_width]]

    rows = []
    widths = []
    for record in records[1:]:
        values = [str(value).strip() for value in record]
        if not any(values):
            continue
        extra = values[header_width:]
        while extra and not extra[-1]:
            extra.pop()
        rows.append(dict(zip(headers, values)))
        widths.append(header_width + len(extra))
    return ParsedCsv(headers, rows, widths)


def to_csv(headers: Sequence[str], rows: Sequence[Sequence[Any]]) -> str:
    """
    Serialize headers and rows into CSV text.

    Fields containing a comma, quote or newline are quoted and inner quotes
    doubled. Lines are joined with "\\n" and there is no trailing newline, so
    zero rows yields the header line only.
    """
    if not headers:
        return ""

    data = [["" if value is None else str(value) for value in row]
            for row in rows]
    df = pd.DataFrame(data, columns=list(headers), dtype=object)

    output = df.to_csv(index=False, lineterminator="\n")
    if output.endswith("\n"):
        output = output[:-1]
    return output
