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

"""The two request flows exposed over HTTP.

Both flows run strictly in sequence and share nothing between requests:
every call loads fresh credentials, signs a new assertion, exchanges it for
a new access token and reads the header row again. The flows differ only in
the scope they request and in what they do with the token.
"""

import logging

from sheet_relay import exceptions
from sheet_relay import scopes
from sheet_relay import service_account
from sheet_relay.sheets import _client
from sheet_relay.sheets import columns
from sheet_relay.sheets import writer

_LOGGER = logging.getLogger(__name__)

REQUIRED_FIELDS = ("expense", "date", "amount", "category", "status")
SUCCESS_MESSAGE = "Expense added successfully"


def validate_record(body):
    """Checks an inbound body is a record this service can write.

    Args:
        body (Any): The decoded JSON body.

    Returns:
        Mapping[str, Any]: The body.

    Raises:
        sheet_relay.exceptions.InvalidRequestError: If the body is not a JSON
            object or lacks a required field.
    """
    if not isinstance(body, dict):
        raise exceptions.InvalidRequestError("Request body must be a JSON object.")

    missing = [field for field in REQUIRED_FIELDS if body.get(field) is None]
    if missing:
        raise exceptions.InvalidRequestError(
            "Missing required fields: {}".format(", ".join(missing))
        )
    return body


def _access_token(settings, scope, request):
    credentials = service_account.Credentials.from_settings(settings, scope=scope)
    credentials.refresh(request)
    return credentials.token


def append_record(settings, record, request, mapper=None):
    """Appends a record to the configured tab.

    Args:
        settings (sheet_relay.config.Settings): The service settings.
        record (Mapping[str, Any]): The record, keyed by field name.
        request (sheet_relay.transport.Request): A callable used to make
            HTTP requests.
        mapper (Optional[sheet_relay.sheets.columns.ColumnMapper]): The
            mapper to use. Defaults to one with the default field map.

    Returns:
        Mapping[str, Any]: The success body: ``message`` and ``details``
            with ``updatedRange`` and ``updatedRows``.

    Raises:
        sheet_relay.exceptions.SheetRelayError: From the first step that
            failed. Nothing is appended unless every earlier step succeeded.
    """
    if mapper is None:
        mapper = columns.ColumnMapper()

    token = _access_token(settings, scopes.SHEETS_FULL, request)

    headers, row = mapper.fetch_and_map(
        request,
        token,
        settings.spreadsheet_id,
        settings.sheet_tab,
        record,
        api_root=settings.sheets_api_root,
    )
    _LOGGER.info("Prepared values for %d columns: %s", len(headers), row)

    result = writer.append_row(
        request,
        token,
        settings.spreadsheet_id,
        settings.sheet_tab,
        row,
        api_root=settings.sheets_api_root,
    )

    return {
        "message": SUCCESS_MESSAGE,
        "details": {
            "updatedRange": result.updated_range,
            "updatedRows": result.updated_rows,
        },
    }


def list_columns(settings, request):
    """Lists the header row of the configured tab.

    Args:
        settings (sheet_relay.config.Settings): The service settings.
        request (sheet_relay.transport.Request): A callable used to make
            HTTP requests.

    Returns:
        Mapping[str, List[str]]: ``{"columns": [...]}``.

    Raises:
        sheet_relay.exceptions.SheetRelayError: From the first step that
            failed.
    """
    token = _access_token(settings, scopes.SHEETS_READONLY, request)
    headers = _client.get_header_row(
        request,
        token,
        settings.spreadsheet_id,
        settings.sheet_tab,
        api_root=settings.sheets_api_root,
    )
    _LOGGER.info("Found columns: %s", headers)
    return {"columns": headers}
