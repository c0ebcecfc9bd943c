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

"""OAuth 2.0 scopes for the Google Sheets API.

A request that only reads the header row asks for :data:`SHEETS_READONLY`;
a request that appends rows asks for :data:`SHEETS_FULL`.
"""

SHEETS_READONLY = "https://www.googleapis.com/auth/spreadsheets.readonly"
SHEETS_FULL = "https://www.googleapis.com/auth/spreadsheets"

ALL = frozenset([SHEETS_READONLY, SHEETS_FULL])
