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

"""Appending mapped rows to a sheet.

The append range spans column ``A`` through the column of the last header,
so exactly the columns present in the sheet are targeted. The provider's
append is atomic per row: it either lands completely or fails.
"""

import logging

from sheet_relay import config
from sheet_relay import exceptions
from sheet_relay.sheets import _client

_LOGGER = logging.getLogger(__name__)

_ALPHABET_SIZE = 26


class AppendResult(object):
    """What the provider reports after an append.

    Args:
        updated_range (Optional[str]): The A1 range that was written.
        updated_rows (Optional[int]): The number of rows written.
    """

    def __init__(self, updated_range, updated_rows):
        self.updated_range = updated_range
        self.updated_rows = updated_rows

    @classmethod
    def from_response(cls, response_data):
        """Builds a result from the ``values.append`` response body."""
        updates = response_data.get("updates") or {}
        return cls(updates.get("updatedRange"), updates.get("updatedRows"))

    def __eq__(self, other):
        if not isinstance(other, AppendResult):
            return NotImplemented
        return (self.updated_range, self.updated_rows) == (
            other.updated_range,
            other.updated_rows,
        )

    def __repr__(self):
        return "AppendResult(updated_range={!r}, updated_rows={!r})".format(
            self.updated_range, self.updated_rows
        )


def column_letter(number):
    """Converts a 1-based column number to its A1 letters.

    Args:
        number (int): The column number; 1 is ``A``, 27 is ``AA``.

    Returns:
        str: The column letters.

    Raises:
        ValueError: If number is less than 1.
    """
    if number < 1:
        raise ValueError("Column numbers start at 1, got {}".format(number))

    letters = []
    while number:
        number, remainder = divmod(number - 1, _ALPHABET_SIZE)
        letters.append(chr(ord("A") + remainder))
    return "".join(reversed(letters))


def append_range(tab, column_count):
    """Builds the append range for a tab with a number of columns.

    Args:
        tab (str): The tab name.
        column_count (int): How many header columns the tab has.

    Returns:
        str: For example ``'Expenses'!A:G``.
    """
    return "{}!A:{}".format(_client.quote_tab(tab), column_letter(column_count))


def append_row(
    request, token, spreadsheet_id, tab, row, api_root=config.DEFAULT_SHEETS_API_ROOT
):
    """Appends a row after the last populated row of a tab.

    Args:
        request (sheet_relay.transport.Request): A callable used to make
            HTTP requests.
        token (str): The bearer access token.
        spreadsheet_id (str): The spreadsheet identifier.
        tab (str): The tab name.
        row (Sequence[Any]): The mapped row, one cell per header.
        api_root (str): The Sheets API spreadsheets endpoint.

    Returns:
        AppendResult: The updated range and row count.

    Raises:
        sheet_relay.exceptions.WriteError: If the row is empty or the
            provider rejected the append.
    """
    if not row:
        raise exceptions.WriteError(
            "Sheet {!r} has no header row to append against.".format(tab)
        )

    range_ = append_range(tab, len(row))
    response_data = _client.append_values(
        request, token, spreadsheet_id, range_, [row], api_root=api_root
    )
    result = AppendResult.from_response(response_data)
    _LOGGER.info(
        "Appended %s row(s) to %s", result.updated_rows, result.updated_range
    )
    return result
