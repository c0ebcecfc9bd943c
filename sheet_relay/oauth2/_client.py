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

"""OAuth 2.0 client.

This is a client for interacting with an OAuth 2.0 authorization server's
token endpoint. Only the JWT bearer grant used by service accounts is
implemented.

For more information about the token endpoint, see
`Section 3.1 of rfc6749`_

.. _Section 3.1 of rfc6749: https://tools.ietf.org/html/rfc6749#section-3.2
"""

import datetime
import json
import logging
import urllib.parse

from sheet_relay import _helpers
from sheet_relay import exceptions
from sheet_relay import transport

_LOGGER = logging.getLogger(__name__)

_URLENCODED_CONTENT_TYPE = "application/x-www-form-urlencoded"
_JWT_GRANT_TYPE = "urn:ietf:params:oauth:grant-type:jwt-bearer"


def _handle_error_response(response_data):
    """Translates an error response into an exception.

    Args:
        response_data (str): The decoded response data.

    Raises:
        sheet_relay.exceptions.AuthExchangeError: The errors contained in
            response_data.
    """
    try:
        error_data = json.loads(response_data)
        error_details = "{}: {}".format(
            error_data["error"], error_data.get("error_description")
        )
    # If no details could be extracted, use the response data.
    except (KeyError, ValueError, TypeError):
        error_details = response_data

    raise exceptions.AuthExchangeError(error_details)


def _parse_expiry(response_data):
    """Parses the expiry field from a response into a datetime.

    Args:
        response_data (Mapping): The JSON-parsed response data.

    Returns:
        Optional[datetime]: The expiration or ``None`` if no expiration was
            specified.

    Raises:
        sheet_relay.exceptions.AuthExchangeError: If ``expires_in`` is not a
            number of seconds.
    """
    expires_in = response_data.get("expires_in", None)

    if expires_in is None:
        return None

    try:
        lifetime = datetime.timedelta(seconds=int(expires_in))
    except (TypeError, ValueError, OverflowError) as caught_exc:
        new_exc = exceptions.AuthExchangeError(
            "Token endpoint returned an invalid expires_in: {!r}".format(expires_in)
        )
        raise new_exc from caught_exc

    return _helpers.utcnow() + lifetime


def _token_endpoint_request(request, token_uri, body):
    """Makes a request to the OAuth 2.0 authorization server's token endpoint.

    Args:
        request (sheet_relay.transport.Request): A callable used to make
            HTTP requests.
        token_uri (str): The OAuth 2.0 authorizations server's token endpoint
            URI.
        body (Mapping[str, str]): The parameters to send in the request body.

    Returns:
        Mapping[str, str]: The JSON-decoded response data.

    Raises:
        sheet_relay.exceptions.AuthExchangeError: If the token endpoint
            returned an error, an unparsable body, or could not be reached.
    """
    body = urllib.parse.urlencode(body)
    headers = {"content-type": _URLENCODED_CONTENT_TYPE}

    try:
        response = request(method="POST", url=token_uri, headers=headers, body=body)
    except exceptions.TransportError as caught_exc:
        new_exc = exceptions.AuthExchangeError(
            "Token endpoint could not be reached: {}".format(caught_exc)
        )
        raise new_exc from caught_exc

    response_body = _helpers.from_bytes(response.data)

    if not transport.is_success(response.status):
        _LOGGER.warning("Token endpoint returned status %s", response.status)
        _handle_error_response(response_body)

    try:
        return json.loads(response_body)
    except ValueError as caught_exc:
        new_exc = exceptions.AuthExchangeError(
            "Token endpoint returned an unparsable body: {}".format(response_body)
        )
        raise new_exc from caught_exc


def jwt_grant(request, token_uri, assertion):
    """Implements the JWT Profile for OAuth 2.0 Authorization Grants.

    For more details, see `rfc7523 section 4`_.

    Args:
        request (sheet_relay.transport.Request): A callable used to make
            HTTP requests.
        token_uri (str): The OAuth 2.0 authorizations server's token endpoint
            URI.
        assertion (Union[str, bytes]): The OAuth 2.0 assertion.

    Returns:
        Tuple[str, Optional[datetime], Mapping[str, str]]: The access token,
            expiration, and additional data returned by the token endpoint.

    Raises:
        sheet_relay.exceptions.AuthExchangeError: If the token endpoint
            returned an error.

    .. _rfc7523 section 4: https://tools.ietf.org/html/rfc7523#section-4
    """
    body = {"assertion": _helpers.from_bytes(assertion), "grant_type": _JWT_GRANT_TYPE}

    response_data = _token_endpoint_request(request, token_uri, body)

    try:
        access_token = response_data["access_token"]
    except (KeyError, TypeError) as caught_exc:
        new_exc = exceptions.AuthExchangeError("No access token in response.")
        raise new_exc from caught_exc

    expiry = _parse_expiry(response_data)

    return access_token, expiry, response_data
