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

"""Exceptions used in the sheet_relay package."""

import http.client as http_client
from typing import Any


class SheetRelayError(Exception):
    """Base class for all sheet_relay errors.

    Each subclass names the error ``code`` reported to callers, the HTTP
    status it is rendered with and the generic message used when error
    details are redacted.
    """

    code: str = "INTERNAL_ERROR"
    http_status: int = http_client.BAD_REQUEST
    public_message: str = "The request could not be completed."

    def __init__(self, *args: Any) -> None:
        super().__init__(*args)


class ConfigurationError(SheetRelayError):
    """Used to indicate required configuration is missing or invalid."""

    code = "CONFIGURATION_ERROR"
    public_message = "The service is not configured."


class CredentialError(SheetRelayError, ValueError):
    """Used to indicate the service account key material is unusable."""

    code = "CREDENTIAL_ERROR"
    public_message = "The service account credentials are invalid."


class TransportError(SheetRelayError):
    """Used to indicate an error occurred during an HTTP request."""


class AuthExchangeError(SheetRelayError):
    """Used to indicate exchanging the signed assertion for an access token
    failed."""

    code = "AUTH_EXCHANGE_ERROR"
    http_status = http_client.UNAUTHORIZED
    public_message = "Authorization with the spreadsheet provider failed."


class SheetAccessError(SheetRelayError):
    """Used to indicate reading from the spreadsheet failed."""

    code = "SHEETS_API_ERROR"
    public_message = "The spreadsheet could not be read."


class WriteError(SheetRelayError):
    """Used to indicate appending a row to the spreadsheet failed."""

    code = "WRITE_ERROR"
    public_message = "The row could not be written."


class InvalidRequestError(SheetRelayError, ValueError):
    """Used to indicate the inbound request body is not acceptable."""

    code = "INVALID_REQUEST"
    public_message = "The request body is invalid."


class UnauthorizedError(SheetRelayError):
    """Used to indicate the caller's bearer token was rejected."""

    code = "UNAUTHORIZED"
    http_status = http_client.UNAUTHORIZED
    public_message = "Unauthorized."
