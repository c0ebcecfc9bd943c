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

"""Google Sheets API v4 ``spreadsheets.values`` client.

Only the two calls this service needs are implemented: reading a range
(used for the header row) and appending rows. Each call is authorized with a
bearer access token and is never retried.
"""

import json
import logging
import urllib.parse

from sheet_relay import _helpers
from sheet_relay import config
from sheet_relay import exceptions
from sheet_relay import transport

_LOGGER = logging.getLogger(__name__)

_JSON_CONTENT_TYPE = "application/json"
_VALUE_INPUT_OPTION = "USER_ENTERED"


def quote_tab(tab):
    """Quotes a tab name for use in A1 notation.

    Args:
        tab (str): The tab name.

    Returns:
        str: The tab name wrapped in single quotes, with embedded quotes
            doubled.
    """
    return "'{}'".format(tab.replace("'", "''"))


def values_url(
    spreadsheet_id, range_, api_root=config.DEFAULT_SHEETS_API_ROOT, suffix=""
):
    """Builds the ``values`` resource URL for a range.

    Args:
        spreadsheet_id (str): The spreadsheet identifier.
        range_ (str): The range in A1 notation.
        api_root (str): The Sheets API spreadsheets endpoint.
        suffix (str): A custom method such as ``":append"``, appended
            unescaped.

    Returns:
        str: The URL.
    """
    return "{}/{}/values/{}{}".format(
        api_root.rstrip("/"),
        urllib.parse.quote(spreadsheet_id, safe=""),
        urllib.parse.quote(range_, safe=""),
        suffix,
    )


def _error_message(payload, default):
    try:
        return payload["error"]["message"] or default
    except (KeyError, TypeError):
        return default


def _sheets_request(request, method, url, token, error_cls, default_error, body=None):
    """Makes an authorized request to the Sheets API.

    Args:
        request (sheet_relay.transport.Request): A callable used to make
            HTTP requests.
        method (str): The HTTP method.
        url (str): The URL.
        token (str): The bearer access token.
        error_cls (type): The exception raised on failure.
        default_error (str): The message used when the response carries no
            error message.
        body (Optional[Mapping]): A JSON body.

    Returns:
        Mapping: The JSON-decoded response body.

    Raises:
        error_cls: If the request failed, or the response was not a success
            or could not be decoded.
    """
    headers = {"authorization": "Bearer {}".format(token)}
    data = None
    if body is not None:
        headers["content-type"] = _JSON_CONTENT_TYPE
        data = json.dumps(body)

    try:
        response = request(url=url, method=method, headers=headers, body=data)
    except exceptions.TransportError as caught_exc:
        new_exc = error_cls(
            "Google Sheets API could not be reached: {}".format(caught_exc)
        )
        raise new_exc from caught_exc

    response_body = _helpers.from_bytes(response.data)
    try:
        payload = json.loads(response_body) if response_body else {}
    except ValueError:
        payload = None

    if not transport.is_success(response.status):
        _LOGGER.warning("Google Sheets API returned status %s", response.status)
        raise error_cls(
            "Google Sheets API error: {}".format(_error_message(payload, default_error))
        )

    if not isinstance(payload, dict):
        raise error_cls(
            "Google Sheets API returned an unparsable body: {}".format(response_body)
        )

    return payload


def get_header_row(
    request, token, spreadsheet_id, tab, api_root=config.DEFAULT_SHEETS_API_ROOT
):
    """Reads row 1 of a tab.

    Args:
        request (sheet_relay.transport.Request): A callable used to make
            HTTP requests.
        token (str): The bearer access token.
        spreadsheet_id (str): The spreadsheet identifier.
        tab (str): The tab name.
        api_root (str): The Sheets API spreadsheets endpoint.

    Returns:
        List[str]: The header cells in column order. Empty if row 1 is empty.

    Raises:
        sheet_relay.exceptions.SheetAccessError: If the row could not be read.
    """
    url = values_url(spreadsheet_id, "{}!1:1".format(quote_tab(tab)), api_root=api_root)
    payload = _sheets_request(
        request,
        "GET",
        url,
        token,
        exceptions.SheetAccessError,
        "Failed to fetch sheet data",
    )
    rows = payload.get("values") or [[]]
    return [str(cell) for cell in rows[0]]


def append_values(
    request,
    token,
    spreadsheet_id,
    range_,
    values,
    api_root=config.DEFAULT_SHEETS_API_ROOT,
):
    """Appends rows after the last row of a range's table.

    Args:
        request (sheet_relay.transport.Request): A callable used to make
            HTTP requests.
        token (str): The bearer access token.
        spreadsheet_id (str): The spreadsheet identifier.
        range_ (str): The range in A1 notation that locates the table.
        values (Sequence[Sequence]): The rows to append.
        api_root (str): The Sheets API spreadsheets endpoint.

    Returns:
        Mapping: The append response, including ``updates``.

    Raises:
        sheet_relay.exceptions.WriteError: If the rows were not appended.
    """
    url = "{}?{}".format(
        values_url(spreadsheet_id, range_, api_root=api_root, suffix=":append"),
        urllib.parse.urlencode({"valueInputOption": _VALUE_INPUT_OPTION}),
    )
    return _sheets_request(
        request,
        "POST",
        url,
        token,
        exceptions.WriteError,
        "Unknown error",
        body={"values": [list(row) for row in values]},
    )
