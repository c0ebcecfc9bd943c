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

"""HTTP surface of the service.

Routes:

* ``POST /sheet-updater`` appends the JSON record in the body.
* ``GET`` or ``POST /get-sheet-columns`` returns the tab's header row.
* ``GET /healthz`` reports liveness without touching any upstream.

Every request gets a random request id, returned in ``X-Request-Id`` and
attached to each log record emitted while it is handled. Failures are
rendered as ``{"error": ..., "code": ...}``.
"""

import contextlib
import logging
import os
import uuid

import flask
from werkzeug import exceptions as http_exceptions

from sheet_relay import config
from sheet_relay import environment_vars
from sheet_relay import exceptions
from sheet_relay import handlers
from sheet_relay import identity
import sheet_relay.transport.requests

_LOGGER = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-Id"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(request_id)s] %(name)s: %(message)s"
_DEFAULT_PORT = 5000


class RequestIdFilter(logging.Filter):
    """Adds the current request id to log records as ``request_id``."""

    def filter(self, record):
        if flask.has_request_context():
            record.request_id = flask.g.get("request_id", "-")
        else:
            record.request_id = "-"
        return True


def _error_response(exc, redact):
    message = exc.public_message if redact else str(exc)
    body = {"error": message, "code": exc.code}
    return flask.jsonify(body), exc.http_status


def create_app(environ=None, request_factory=None):
    """Creates the Flask application.

    Args:
        environ (Optional[Mapping[str, str]]): Where settings are read from
            on every request. Defaults to :data:`os.environ`.
        request_factory (Optional[Callable[[], sheet_relay.transport.Request]]):
            Builds the transport used for outbound calls of one request.
            Defaults to :class:`sheet_relay.transport.requests.Request`.

    Returns:
        flask.Flask: The application.
    """
    if request_factory is None:
        request_factory = sheet_relay.transport.requests.Request

    app = flask.Flask(__name__)

    def _load_settings():
        settings = config.Settings.from_environ(environ)
        flask.g.settings = settings
        return settings

    @contextlib.contextmanager
    def _outbound_request():
        request = request_factory()
        try:
            yield request
        finally:
            session = getattr(request, "session", None)
            if session is not None:
                session.close()

    def _authorize(settings, request):
        if settings.identity_verify_url:
            identity.verify(
                request,
                settings.identity_verify_url,
                flask.request.headers.get("Authorization"),
            )

    @app.before_request
    def _assign_request_id():
        flask.g.request_id = str(uuid.uuid4())
        _LOGGER.info(
            "New request received: %s %s", flask.request.method, flask.request.path
        )

    @app.after_request
    def _add_request_id(response):
        request_id = flask.g.get("request_id")
        if request_id:
            response.headers[REQUEST_ID_HEADER] = request_id
        return response

    @app.errorhandler(exceptions.SheetRelayError)
    def _handle_sheet_relay_error(exc):
        _LOGGER.error("Error occurred: %s: %s", type(exc).__name__, exc, exc_info=exc)
        settings = flask.g.get("settings")
        redact = settings.redact_errors if settings is not None else False
        return _error_response(exc, redact)

    @app.errorhandler(Exception)
    def _handle_unexpected_error(exc):
        if isinstance(exc, http_exceptions.HTTPException):
            return exc
        _LOGGER.exception("Unexpected error")
        return _error_response(exceptions.SheetRelayError(), redact=True)

    @app.route("/healthz", methods=["GET"])
    def healthz():
        return flask.jsonify({"status": "ok"})

    @app.route("/sheet-updater", methods=["POST"])
    def sheet_updater():
        settings = _load_settings()
        with _outbound_request() as request:
            _authorize(settings, request)

            # The body is JSON whatever Content-Type the caller sent.
            body = flask.request.get_json(force=True, silent=True)
            _LOGGER.info("Request body: %s", body)
            record = handlers.validate_record(body)

            result = handlers.append_record(settings, record, request)
        return flask.jsonify(result)

    @app.route("/get-sheet-columns", methods=["GET", "POST"])
    def get_sheet_columns():
        settings = _load_settings()
        with _outbound_request() as request:
            _authorize(settings, request)
            result = handlers.list_columns(settings, request)
        return flask.jsonify(result)

    return app


def configure_logging(level=None):
    """Configures root logging with request ids in every line.

    Args:
        level (Optional[str]): The level name. Defaults to ``$LOG_LEVEL`` or
            ``INFO``.
    """
    if level is None:
        level = os.environ.get(environment_vars.LOG_LEVEL, "INFO")
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    for handler in logging.getLogger().handlers:
        handler.addFilter(RequestIdFilter())


def main():
    configure_logging()
    port = int(os.environ.get(environment_vars.PORT, _DEFAULT_PORT))
    _LOGGER.info("Sheet updater initialized")
    create_app().run(port=port)


if __name__ == "__main__":
    main()
