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

"""Environment variables used by :mod:`sheet_relay`."""

SERVICE_ACCOUNT_EMAIL = "GOOGLE_SERVICE_ACCOUNT_EMAIL"
"""Environment variable holding the service account's email address. This is
the ``iss`` claim of every signed assertion."""

PRIVATE_KEY = "GOOGLE_PRIVATE_KEY"
"""Environment variable holding the service account's PEM encoded PKCS#8 RSA
private key. Literal ``\\n`` sequences are accepted in place of newlines."""

SPREADSHEET_ID = "SPREADSHEET_ID"
"""Environment variable holding the identifier of the target spreadsheet."""

SHEET_TAB = "SHEET_TAB"
"""Environment variable naming the tab rows are appended to."""

TOKEN_URI = "GOOGLE_TOKEN_URI"
"""Environment variable overriding the OAuth 2.0 token endpoint."""

SHEETS_API_ROOT = "SHEETS_API_ROOT"
"""Environment variable overriding the Sheets API spreadsheets endpoint."""

IDENTITY_VERIFY_URL = "IDENTITY_VERIFY_URL"
"""Environment variable holding the URL inbound bearer tokens are verified
against. Inbound verification is disabled when unset."""

REDACT_ERRORS = "SHEET_RELAY_REDACT_ERRORS"
"""Environment variable that, when true, replaces error details in responses
with generic messages."""

LOG_LEVEL = "LOG_LEVEL"
"""Environment variable holding the root logging level for the server."""

PORT = "PORT"
"""Environment variable holding the port the development server listens on."""
