from typing import Any, Dict, List, Optional, Tuple
import csv
import io

from app.schemas import Point
from ingest.rows import normalize_rows

RawRow = Dict[Optional[str], Any]


def decode_csv_bytes(raw: bytes) -> Tuple[str, str]:
    """
    Decode a CSV file's bytes.
    Tries UTF-8 (BOM stripped) first, then cp1252, then latin-1 which never fails.
    Returns: (text, encoding)
    """
    for encoding in ("utf-8-sig", "cp1252"):
        try:
            return raw.decode(encoding), encoding
        except UnicodeDecodeError:
            continue
    return raw.decode("latin-1"), "latin-1"


def read_raw_rows(text: str) -> List[RawRow]:
    """First row is the header; blank lines are skipped."""
    reader = csv.DictReader(io.StringIO(text, newline=""))
    return list(reader)


def parse_points_csv(raw: bytes) -> Tuple[List[Point], int, str]:
    """Decode, read and normalize a whole CSV file. Returns (points, dropped, encoding)."""
    text, encoding = decode_csv_bytes(raw)
    points, dropped = normalize_rows(read_raw_rows(text))
    return points, dropped, encoding
