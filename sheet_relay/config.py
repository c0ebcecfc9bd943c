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

"""Service configuration loaded from environment variables.

Three values are required: the service account email, its private key and
the spreadsheet identifier. Everything else has a default. Missing required
values are reported together, before any network call is made.
"""

import logging
import os

from sheet_relay import _helpers
from sheet_relay import environment_vars
from sheet_relay import exceptions

_LOGGER = logging.getLogger(__name__)

DEFAULT_SHEET_TAB = "Expenses"
DEFAULT_TOKEN_URI = "https://oauth2.googleapis.com/token"
DEFAULT_SHEETS_API_ROOT = "https://sheets.googleapis.com/v4/spreadsheets"

_REQUIRED = (
    environment_vars.SERVICE_ACCOUNT_EMAIL,
    environment_vars.PRIVATE_KEY,
    environment_vars.SPREADSHEET_ID,
)


class Settings(object):
    """Immutable service settings.

    Args:
        service_account_email (str): The service account's email address.
        private_key (str): The PEM encoded private key, as configured.
        spreadsheet_id (str): The target spreadsheet.
        sheet_tab (str): The tab rows are appended to.
        token_uri (str): The OAuth 2.0 token endpoint.
        sheets_api_root (str): The Sheets API spreadsheets endpoint.
        identity_verify_url (Optional[str]): Where inbound bearer tokens are
            verified, or None to accept all callers.
        redact_errors (bool): Whether responses hide error details.
    """

    def __init__(
        self,
        service_account_email,
        private_key,
        spreadsheet_id,
        sheet_tab=DEFAULT_SHEET_TAB,
        token_uri=DEFAULT_TOKEN_URI,
        sheets_api_root=DEFAULT_SHEETS_API_ROOT,
        identity_verify_url=None,
        redact_errors=False,
    ):
        self._service_account_email = service_account_email
        self._private_key = private_key
        self._spreadsheet_id = spreadsheet_id
        self._sheet_tab = sheet_tab
        self._token_uri = token_uri
        self._sheets_api_root = sheets_api_root.rstrip("/")
        self._identity_verify_url = identity_verify_url
        self._redact_errors = redact_errors

    @classmethod
    def from_environ(cls, environ=None):
        """Loads settings from environment variables.

        Args:
            environ (Optional[Mapping[str, str]]): The environment to read.
                Defaults to :data:`os.environ`.

        Returns:
            Settings: The loaded settings.

        Raises:
            sheet_relay.exceptions.ConfigurationError: If any required
                variable is missing or empty.
        """
        if environ is None:
            environ = os.environ

        missing = [name for name in _REQUIRED if not environ.get(name)]
        if missing:
            _LOGGER.error(
                "Environment variables check: %s",
                {name: bool(environ.get(name)) for name in _REQUIRED},
            )
            raise exceptions.ConfigurationError(
                "Missing environment variables: {}".format(", ".join(missing))
            )

        return cls(
            service_account_email=environ[environment_vars.SERVICE_ACCOUNT_EMAIL],
            private_key=environ[environment_vars.PRIVATE_KEY],
            spreadsheet_id=environ[environment_vars.SPREADSHEET_ID],
            sheet_tab=environ.get(environment_vars.SHEET_TAB) or DEFAULT_SHEET_TAB,
            token_uri=environ.get(environment_vars.TOKEN_URI) or DEFAULT_TOKEN_URI,
            sheets_api_root=environ.get(environment_vars.SHEETS_API_ROOT)
            or DEFAULT_SHEETS_API_ROOT,
            identity_verify_url=environ.get(environment_vars.IDENTITY_VERIFY_URL)
            or None,
            redact_errors=_helpers.parse_boolean(
                environ.get(environment_vars.REDACT_ERRORS)
            ),
        )

    @property
    def service_account_email(self):
        """str: The service account's email address."""
        return self._service_account_email

    @property
    def private_key(self):
        """str: The PEM encoded private key, as configured."""
        return self._private_key

    @property
    def spreadsheet_id(self):
        """str: The target spreadsheet."""
        return self._spreadsheet_id

    @property
    def sheet_tab(self):
        """str: The tab rows are appended to."""
        return self._sheet_tab

    @property
    def token_uri(self):
        """str: The OAuth 2.0 token endpoint."""
        return self._token_uri

    @property
    def sheets_api_root(self):
        """str: The Sheets API spreadsheets endpoint, without trailing slash."""
        return self._sheets_api_root

    @property
    def identity_verify_url(self):
        """Optional[str]: Where inbound bearer tokens are verified."""
        return self._identity_verify_url

    @property
    def redact_errors(self):
        """bool: Whether responses hide error details."""
        return self._redact_errors

    def __repr__(self):
        return "{}({})".format(
            type(self).__name__,
            ", ".join(
                "{}={!r}".format(name, getattr(self, name))
                for name in ("service_account_email", "spreadsheet_id", "sheet_tab")
            ),
        )
