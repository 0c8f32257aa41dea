"""
Spreadsheet decoder for catalog uploads.

Turns a CSV or workbook export into ordered raw rows (header → cell text).
Only the first sheet of a workbook is read. Header mapping and validation
happen later in the import pipeline.
"""

from io import BytesIO, StringIO
from pathlib import Path
from typing import Union
import structlog

import pandas as pd

from exceptions import DecodeError, UnsupportedFileTypeError

logger = structlog.get_logger(__name__)

CSV_EXTENSIONS = ("csv",)
CSV_DELIMITERS = (",", ";", "\t", "|")
EXCEL_EXTENSIONS = ("xlsx", "xls")
SUPPORTED_EXTENSIONS = CSV_EXTENSIONS + EXCEL_EXTENSIONS

RawRow = dict[str, str]


def file_extension(filename: str) -> str:
    """Lower-cased extension without the dot ("" if none)."""
    return Path(filename or "").suffix.lower().lstrip(".")


def parse_spreadsheet(
    file: Union[str, Path, bytes, BytesIO],
    filename: str,
) -> list[RawRow]:
    """
    Decode an uploaded spreadsheet into raw rows.

    Args:
        file: File path, raw bytes or file-like object
        filename: Original filename, used to pick the format

    Returns:
        List of {header: cell} dicts in sheet order. Empty cells are "".

    Raises:
        UnsupportedFileTypeError: If the extension is not csv, xlsx or xls
        DecodeError: If the content cannot be read
    """
    ext = file_extension(filename)
    logger.info("parsing_spreadsheet", filename=filename, extension=ext)

    if ext not in SUPPORTED_EXTENSIONS:
        raise UnsupportedFileTypeError(filename, list(SUPPORTED_EXTENSIONS))

    if isinstance(file, bytes):
        file = BytesIO(file)

    try:
        if ext in CSV_EXTENSIONS:
            df = _read_csv(file)
        else:
            df = _read_excel(file, ext)
    except pd.errors.EmptyDataError:
        # No header row at all: nothing to import
        logger.warning("spreadsheet_empty", filename=filename)
        return []
    except Exception as e:
        logger.error("spreadsheet_decode_failed", filename=filename, error=str(e))
        raise DecodeError(
            message="Could not read the file",
            details={"filename": filename, "original_error": str(e)}
        ) from e

    rows = _to_rows(df)
    logger.info(
        "spreadsheet_parsed",
        filename=filename,
        row_count=len(rows),
        column_count=len(df.columns)
    )
    return rows


def _read_csv(file) -> pd.DataFrame:
    """Read CSV as UTF-8 text, every cell kept as a string."""
    if isinstance(file, (str, Path)):
        text = Path(file).read_text(encoding="utf-8-sig")
    elif isinstance(file, BytesIO):
        text = file.getvalue().decode("utf-8-sig")
    else:
        text = file.read()
        if isinstance(text, bytes):
            text = text.decode("utf-8-sig")

    return pd.read_csv(
        StringIO(text),
        sep=_detect_delimiter(text),
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
    )


def _detect_delimiter(text: str) -> str:
    """
    Pick the separator from the header line.

    Spreadsheet exports with a Swedish locale use ";". The most frequent
    candidate on the first non-blank line wins, "," when none occur.
    """
    header = next((line for line in text.splitlines() if line.strip()), "")
    counts = [(header.count(d), -i, d) for i, d in enumerate(CSV_DELIMITERS)]
    count, _, delimiter = max(counts)
    return delimiter if count else ","


def _read_excel(file, ext: str) -> pd.DataFrame:
    """Read the first sheet of a workbook."""
    engine = "openpyxl" if ext == "xlsx" else None
    df = pd.read_excel(
        file,
        sheet_name=0,
        dtype=str,
        engine=engine,
        keep_default_na=False,
        na_values=[""],
    )
    return df.dropna(how="all")


def _to_rows(df: pd.DataFrame) -> list[RawRow]:
    """DataFrame → list of header → cell dicts, NaN as ""."""
    df = df.fillna("")
    headers = [str(col) for col in df.columns]
    return [
        dict(zip(headers, (str(v) for v in values)))
        for values in df.itertuples(index=False, name=None)
    ]
