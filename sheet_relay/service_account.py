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

"""Service Accounts: JSON Web Token (JWT) Profile for OAuth 2.0

*Service accounts* are used for server-to-server communication. The service
account belongs to this application instead of to an individual end user, so
no user consent step is involved: possession of the private key is what
asserts the identity.

This module implements the JWT Profile for OAuth 2.0 Authorization Grants
as defined by `RFC 7523`_. A short-lived JWT is signed with the service
account's key and exchanged at the token endpoint for an OAuth 2.0 access
token, which is then used as the bearer token for Sheets API calls::

    credentials = service_account.Credentials.from_settings(
        settings, scope=scopes.SHEETS_FULL)
    credentials.refresh(request)
    credentials.token

Tokens are never shared between credentials instances; every refresh signs a
new assertion and performs a new exchange.

.. _RFC 7523: https://tools.ietf.org/html/rfc7523
"""

import datetime
import logging

from sheet_relay import _helpers
from sheet_relay import crypt
from sheet_relay import exceptions
from sheet_relay import jwt
from sheet_relay import scopes as scopes_module
from sheet_relay.oauth2 import _client

_LOGGER = logging.getLogger(__name__)

_DEFAULT_TOKEN_LIFETIME_SECS = 3600  # 1 hour in seconds


class Credentials(object):
    """Service account credentials scoped to a single Sheets scope.

    Usually, you'll construct these credentials from the loaded settings::

        credentials = service_account.Credentials.from_settings(
            settings, scope=scopes.SHEETS_READONLY)

    You can also construct the credentials directly if you have a
    :class:`~sheet_relay.crypt.Signer` instance::

        credentials = service_account.Credentials(
            signer, 'sa@example.iam.gserviceaccount.com', token_uri,
            scope=scopes.SHEETS_FULL)

    The credentials are considered immutable. If you want to change the
    scope, use :meth:`with_scopes`.

    Args:
        signer (sheet_relay.crypt.Signer): The signer used to sign JWTs.
        service_account_email (str): The service account's email.
        token_uri (str): The OAuth 2.0 Token URI.
        scope (str): The scope to request, one of
            :data:`sheet_relay.scopes.SHEETS_READONLY` or
            :data:`sheet_relay.scopes.SHEETS_FULL`.

    Raises:
        sheet_relay.exceptions.CredentialError: If the email is empty.
        ValueError: If the scope is not a Sheets scope.
    """

    def __init__(
        self,
        signer,
        service_account_email,
        token_uri,
        scope=scopes_module.SHEETS_FULL,
    ):
        if not service_account_email:
            raise exceptions.CredentialError("Service account email must not be empty.")
        if scope not in scopes_module.ALL:
            raise ValueError("Unsupported scope: {}".format(scope))

        self._signer = signer
        self._service_account_email = service_account_email
        self._token_uri = token_uri
        self._scope = scope
        self.token = None
        self.expiry = None

    @classmethod
    def from_settings(cls, settings, scope=scopes_module.SHEETS_FULL):
        """Creates a Credentials instance from loaded settings.

        Args:
            settings (sheet_relay.config.Settings): The service settings.
            scope (str): The scope to request.

        Returns:
            Credentials: The constructed credentials.

        Raises:
            sheet_relay.exceptions.CredentialError: If the private key can't
                be used.
        """
        signer = crypt.RSASigner.from_string(settings.private_key)
        return cls(
            signer,
            service_account_email=settings.service_account_email,
            token_uri=settings.token_uri,
            scope=scope,
        )

    @property
    def service_account_email(self):
        """str: The service account email."""
        return self._service_account_email

    @property
    def scope(self):
        """str: The requested scope."""
        return self._scope

    @property
    def signer(self):
        """sheet_relay.crypt.Signer: The signer used to sign assertions."""
        return self._signer

    @property
    def valid(self):
        """bool: True if a token has been obtained and has not expired."""
        if self.token is None:
            return False
        return self.expiry is None or _helpers.utcnow() < self.expiry

    def with_scopes(self, scope):
        """Create a copy of these credentials with the specified scope.

        Args:
            scope (str): The scope to request.

        Returns:
            Credentials: A new credentials instance without a token.
        """
        return self.__class__(
            self._signer,
            service_account_email=self._service_account_email,
            token_uri=self._token_uri,
            scope=scope,
        )

    def _make_authorization_grant_assertion(self, now=None):
        """Create the OAuth 2.0 assertion.

        This assertion is used during the OAuth 2.0 grant to acquire an
        access token. It is valid for exactly one hour from ``now``.

        Args:
            now (Optional[datetime]): The issue time. Defaults to the current
                UTC time.

        Returns:
            bytes: The authorization grant assertion.
        """
        if now is None:
            now = _helpers.utcnow()
        lifetime = datetime.timedelta(seconds=_DEFAULT_TOKEN_LIFETIME_SECS)
        expiry = now + lifetime

        payload = {
            # The issuer must be the service account email.
            "iss": self._service_account_email,
            "scope": self._scope,
            # The audience must be the auth token endpoint's URI
            "aud": self._token_uri,
            "exp": _helpers.datetime_to_secs(expiry),
            "iat": _helpers.datetime_to_secs(now),
        }

        return jwt.encode(self._signer, payload)

    def refresh(self, request):
        """Signs a new assertion and exchanges it for an access token.

        Args:
            request (sheet_relay.transport.Request): The object used to make
                HTTP requests.

        Raises:
            sheet_relay.exceptions.AuthExchangeError: If the token endpoint
                rejected the assertion or could not be reached.
        """
        assertion = self._make_authorization_grant_assertion()
        _LOGGER.debug(
            "Exchanging assertion for %s at %s", self._scope, self._token_uri
        )
        access_token, expiry, _ = _client.jwt_grant(request, self._token_uri, assertion)
        self.token = access_token
        self.expiry = expiry
