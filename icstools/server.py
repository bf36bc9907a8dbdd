# The HTTP face of the anonymizer: `GET /<path>` fetches the remote calendar configured for
# `<path>` and returns its anonymized version. Errors are logged in full, but clients only ever
# see a generic message.

import logging

from flask import Flask, Response

from icstools.errors import IcsToolsError, NotConfigured
from icstools.fetch import fetch_calendar
from icstools.transcode import CalendarTranscoder

logger = logging.getLogger(__name__)

ICS_MIMETYPE = "text/calendar; charset=utf-8"


def text_response(body, status):
    return Response(body, status=status, mimetype="text/plain")


def create_app(config, fetcher=None) -> Flask:
    """
    Creates the Flask application serving the calendars in the given configuration. The
    fetcher (a function from a URL and timeout to a `ParsedCalendar`) can be swapped out for
    testing.
    """

    fetcher = fetcher or fetch_calendar
    transcoder = CalendarTranscoder(config.settings)

    app = Flask(__name__)
    app.config["ICS_TOOLS"] = config

    @app.get("/<path>")
    def anonymized_calendar(path):
        remote_url = config.calendars.get(path)
        if remote_url is None:
            return text_response(f"{NotConfigured(path)}\n", 404)

        try:
            remote_ics = fetcher(remote_url, config.fetch_timeout)
        except IcsToolsError as e:
            logger.warning("Error parsing remote ICS for path %s: %s", path, e)
            return text_response("Error parsing remote ICS, see the logs for details\n", 500)

        try:
            generated_ics = transcoder.transcode(remote_ics)
        except IcsToolsError as e:
            logger.warning("Error generating scrubbed-out ICS for path %s: %s", path, e)
            return text_response("Error generating local ICS, see the logs for details\n", 500)
        logger.debug("Generated local ICS for path %s:\n%s", path, generated_ics)

        return Response(generated_ics, status=200, content_type=ICS_MIMETYPE)

    return app
