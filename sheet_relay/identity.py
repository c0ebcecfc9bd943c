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

"""Verification of inbound bearer tokens.

The token is opaque to this service. It is forwarded to an external identity
service, and any 2xx answer accepts the caller. Nothing else is read from the
token or the answer.
"""

import logging

from sheet_relay import exceptions
from sheet_relay import transport

_LOGGER = logging.getLogger(__name__)

_BEARER_PREFIX = "bearer "


def bearer_token(authorization):
    """Extracts the token from an ``Authorization`` header value.

    Args:
        authorization (Optional[str]): The header value.

    Returns:
        Optional[str]: The token, or None if the header is absent or does not
            use the Bearer scheme.
    """
    if not authorization or not authorization.lower().startswith(_BEARER_PREFIX):
        return None
    token = authorization[len(_BEARER_PREFIX):].strip()
    return token or None


def verify(request, verify_url, authorization):
    """Verifies the caller's bearer token with the identity service.

    Args:
        request (sheet_relay.transport.Request): A callable used to make
            HTTP requests.
        verify_url (str): The identity service endpoint.
        authorization (Optional[str]): The inbound ``Authorization`` header.

    Raises:
        sheet_relay.exceptions.UnauthorizedError: If the header is missing or
            the identity service rejects the token or cannot be reached.
    """
    token = bearer_token(authorization)
    if token is None:
        raise exceptions.UnauthorizedError("Missing bearer token.")

    try:
        response = request(
            url=verify_url,
            method="GET",
            headers={"authorization": "Bearer {}".format(token)},
        )
    except exceptions.TransportError as caught_exc:
        new_exc = exceptions.UnauthorizedError(
            "Identity service could not be reached: {}".format(caught_exc)
        )
        raise new_exc from caught_exc

    if not transport.is_success(response.status):
        _LOGGER.info("Identity service rejected token with status %s", response.status)
        raise exceptions.UnauthorizedError("Bearer token was rejected.")
