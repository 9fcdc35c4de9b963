"""Date fallback taken from the uploaded file's name."""

import re

YEAR_FIRST = re.compile(r"(\d{4})[-.](\d{2})[-.](\d{2})")
DAY_FIRST = re.compile(r"(\d{2})[-.](\d{2})[-.](\d{4})")

# Noon keeps the date stable across timezone conversions
FILENAME_TIME = "12:00"


def extract_filename_date(filename: str) -> str | None:
    """Find a YYYY-MM-DD or DD-MM-YYYY date ('-' or '.' separated).

    Year-first wins when both patterns could match. Returns
    "YYYY-MM-DD 12:00" or None.
    """
    match = YEAR_FIRST.search(filename)
    if match:
        year, month, day = match.groups()
    else:
        match = DAY_FIRST.search(filename)
        if not match:
            return None
        day, month, year = match.groups()

    return f"{year}-{month}-{day} {FILENAME_TIME}"
