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

import datetime
import http.client as http_client
import json

from cryptography import x509
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.x509.oid import NameOID
import mock
import pytest

from sheet_relay import config

SERVICE_ACCOUNT_EMAIL = "service-account@example.iam.gserviceaccount.com"
SPREADSHEET_ID = "spreadsheet-123"
TOKEN_URI = "https://oauth2.example.com/token"
SHEETS_API_ROOT = "https://sheets.example.com/v4/spreadsheets"


@pytest.fixture(scope="session")
def rsa_private_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def private_key_pem(rsa_private_key):
    """PKCS#8 PEM, the format service account keys are issued in."""
    return rsa_private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )


@pytest.fixture(scope="session")
def pkcs1_private_key_pem(rsa_private_key):
    return rsa_private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.TraditionalOpenSSL,
        encryption_algorithm=serialization.NoEncryption(),
    )


@pytest.fixture(scope="session")
def public_key_pem(rsa_private_key):
    return rsa_private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )


@pytest.fixture(scope="session")
def public_cert_pem(rsa_private_key):
    """A self-signed x509 certificate for the session key."""
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, SERVICE_ACCOUNT_EMAIL)])
    now = datetime.datetime.now(datetime.timezone.utc)
    cert = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(rsa_private_key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - datetime.timedelta(days=1))
        .not_valid_after(now + datetime.timedelta(days=1))
        .sign(rsa_private_key, hashes.SHA256())
    )
    return cert.public_bytes(serialization.Encoding.PEM)


@pytest.fixture(scope="session")
def other_public_key_pem():
    other_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    return other_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )


@pytest.fixture(scope="session")
def ec_private_key_pem():
    key = ec.generate_private_key(ec.SECP256R1())
    return key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )


@pytest.fixture
def environ(private_key_pem):
    """Environment as it is usually configured: the key with escaped
    newlines."""
    return {
        "GOOGLE_SERVICE_ACCOUNT_EMAIL": SERVICE_ACCOUNT_EMAIL,
        "GOOGLE_PRIVATE_KEY": private_key_pem.decode("utf-8").replace("\n", "\\n"),
        "SPREADSHEET_ID": SPREADSHEET_ID,
        "GOOGLE_TOKEN_URI": TOKEN_URI,
        "SHEETS_API_ROOT": SHEETS_API_ROOT,
    }


@pytest.fixture
def settings(environ):
    return config.Settings.from_environ(environ)


def make_response(status=http_client.OK, data=None):
    response = mock.Mock()
    response.status = status
    response.data = json.dumps(data).encode("utf-8") if data is not None else b""
    return response


HEADER_ROW = ["Expense", "Date", "Amount", "Category", "Status", "Paid By", "Bill"]


@pytest.fixture
def upstream():
    """A request callable standing in for the token endpoint and the Sheets
    API. Responses can be replaced per test through its ``responses`` dict."""
    responses = {
        "token": make_response(
            data={"access_token": "access-token", "expires_in": 3599}
        ),
        "header": make_response(data={"values": [HEADER_ROW]}),
        "append": make_response(
            data={
                "spreadsheetId": SPREADSHEET_ID,
                "updates": {"updatedRange": "Expenses!A5:G5", "updatedRows": 1},
            }
        ),
        "identity": make_response(data={"id": "user-1"}),
    }

    def dispatch(url, method="GET", body=None, headers=None, **kwargs):
        if url == TOKEN_URI:
            kind = "token"
        elif url.startswith(SHEETS_API_ROOT) and method == "POST":
            kind = "append"
        elif url.startswith(SHEETS_API_ROOT):
            kind = "header"
        else:
            kind = "identity"
        response = responses[kind]
        if isinstance(response, Exception):
            raise response
        return response

    request = mock.Mock(side_effect=dispatch)
    request.responses = responses
    request.make_response = make_response
    return request
