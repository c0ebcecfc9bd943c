# Copyright 2024 sheet-relay authors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Projecting records onto a sheet's live header row.

The header row, row 1 of the tab, is the schema: the sheet owner may add,
remove or reorder columns at any time, so it is read again for every write
and each record is laid out to match it. Headers are matched to record
fields case-insensitively, ignoring surrounding and repeated whitespace::

    mapper = columns.ColumnMapper()
    mapper.map_record(
        ["Expense", "Date", "Paid By", "Comments"],
        {"expense": "Cake", "date": "2024-03-20", "paidBy": "Alex"},
    )
    # ["Cake", "2024-03-20", "Alex", ""]

Headers that match no known field, such as free-form descriptive columns,
always receive an empty cell.
"""

import logging
import re

from sheet_relay import config
from sheet_relay.sheets import _client

_LOGGER = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")

EMPTY_CELL = ""

DEFAULT_FIELD_MAP = {
    "expense": "expense",
    "date": "date",
    "amount": "amount",
    "category": "category",
    "status": "status",
    "paid by": "paidBy",
    "bill": "bill",
    "notes": "notes",
    "wedding location": "weddingLocation",
    "local amount": "localAmount",
}
"""Normalized header text to record field name."""


def normalize_header(header):
    """Normalizes header text for matching.

    Args:
        header (str): The header cell as read from the sheet.

    Returns:
        str: The header lower-cased, trimmed, with runs of whitespace
            collapsed to a single space.
    """
    return _WHITESPACE_RE.sub(" ", str(header)).strip().lower()


class ColumnMapper(object):
    """Maps records onto header rows using a table of known fields.

    Args:
        field_map (Mapping[str, str]): Header text to record field name. Keys
            are normalized with :func:`normalize_header`.
    """

    def __init__(self, field_map=None):
        if field_map is None:
            field_map = DEFAULT_FIELD_MAP
        self._field_map = {
            normalize_header(header): field for header, field in field_map.items()
        }

    @property
    def field_map(self):
        """Mapping[str, str]: The normalized header to field table."""
        return dict(self._field_map)

    def field_for(self, header):
        """Returns the record field a header resolves to.

        Args:
            header (str): The header cell.

        Returns:
            Optional[str]: The field name, or None if the header is not known.
        """
        return self._field_map.get(normalize_header(header))

    def map_record(self, headers, record):
        """Lays out a record in header order.

        Args:
            headers (Sequence[str]): The header row.
            record (Mapping[str, Any]): The record, keyed by field name.

        Returns:
            List[Any]: One cell per header. Missing or ``None`` values and
                unrecognized headers give an empty string.
        """
        row = []
        for header in headers:
            field = self.field_for(header)
            if field is None:
                # A misspelled header also lands here and drops its data.
                _LOGGER.debug("No field for header %r, leaving it empty", header)
                row.append(EMPTY_CELL)
                continue

            value = record.get(field)
            row.append(EMPTY_CELL if value is None else value)
        return row

    def fetch_and_map(
        self,
        request,
        token,
        spreadsheet_id,
        tab,
        record,
        api_root=config.DEFAULT_SHEETS_API_ROOT,
    ):
        """Reads the live header row and lays out a record to match it.

        Args:
            request (sheet_relay.transport.Request): A callable used to make
                HTTP requests.
            token (str): The bearer access token.
            spreadsheet_id (str): The spreadsheet identifier.
            tab (str): The tab name.
            record (Mapping[str, Any]): The record, keyed by field name.
            api_root (str): The Sheets API spreadsheets endpoint.

        Returns:
            Tuple[List[str], List[Any]]: The header row and the mapped row.

        Raises:
            sheet_relay.exceptions.SheetAccessError: If the header row could
                not be read.
        """
        headers = _client.get_header_row(
            request, token, spreadsheet_id, tab, api_root=api_root
        )
        _LOGGER.debug("Found columns: %s", headers)
        return headers, self.map_record(headers, record)
