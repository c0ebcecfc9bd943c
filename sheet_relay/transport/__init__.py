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

"""Transport - HTTP client library support.

:mod:`sheet_relay` talks to the token endpoint and the Sheets API through a
small ``Request`` callable interface, so components can be exercised with a
fake request in tests. :mod:`sheet_relay.transport.requests` provides the
production implementation.
"""

import abc
import http.client as http_client
from typing import Any, Mapping, Optional


DEFAULT_TIMEOUT = 120  # in seconds


class Response(metaclass=abc.ABCMeta):
    """HTTP Response data."""

    @property
    @abc.abstractmethod
    def status(self) -> int:
        """int: The HTTP status code."""
        raise NotImplementedError("status must be implemented.")

    @property
    @abc.abstractmethod
    def headers(self) -> Mapping[str, str]:
        """Mapping[str, str]: The HTTP response headers."""
        raise NotImplementedError("headers must be implemented.")

    @property
    @abc.abstractmethod
    def data(self) -> bytes:
        """bytes: The response body."""
        raise NotImplementedError("data must be implemented.")


class Request(metaclass=abc.ABCMeta):
    """Interface for a callable that makes HTTP requests.

    Specific transport implementations should provide an implementation of
    this that adapts their specific request / response API.
    """

    @abc.abstractmethod
    def __call__(
        self,
        url: str,
        method: str = "GET",
        body: Optional[Any] = None,
        headers: Optional[Mapping[str, str]] = None,
        timeout: Optional[float] = None,
        **kwargs: Any
    ) -> Response:
        """Make an HTTP request.

        Args:
            url (str): The URI to be requested.
            method (str): The HTTP method to use for the request. Defaults
                to 'GET'.
            body (bytes): The payload or body in HTTP request.
            headers (Mapping[str, str]): Request headers.
            timeout (Optional[int]): The number of seconds to wait for a
                response from the server. If not specified or if None, the
                transport-specific default timeout will be used.
            kwargs: Additionally arguments passed on to the transport's
                request method.

        Returns:
            Response: The HTTP response.

        Raises:
            sheet_relay.exceptions.TransportError: If any exception occurred.
        """
        raise NotImplementedError("__call__ must be implemented.")


def is_success(status: int) -> bool:
    """Returns True for 2xx HTTP status codes."""
    return http_client.OK <= status < http_client.MULTIPLE_CHOICES
