"""Polars conversion for lookup records."""

import polars as pl

RECORD_SCHEMA = {
    "name_type": pl.Utf8,
    "id": pl.Utf8,
    "uri": pl.Utf8,
    "uri_for_display": pl.Utf8,
    "name": pl.Utf8,
    "repository": pl.Utf8,
    "original_query_string": pl.Utf8,
    "description": pl.Utf8,
}


def records_to_frame(records: list[dict]) -> pl.DataFrame:
    """Build a DataFrame from lookup records, keeping their order.

    Args:
        records: Records as returned by ``find_person`` or ``find_place``.

    Returns:
        Polars DataFrame with one row per record and the columns of
        ``RECORD_SCHEMA``. Empty input gives an empty frame with the
        same schema.
    """
    if not records:
        return pl.DataFrame(schema=RECORD_SCHEMA)

    return pl.DataFrame(records, schema=RECORD_SCHEMA)
