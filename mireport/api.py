"""
REST API

> python3 -m mireport.api
POST http://127.0.0.1:5000/text
    Body, raw
    [INSERT MEDIAINFO TEXT HERE]

{"sections": {...}, "chapter_count": 0}
"""

from dotenv import load_dotenv
from flask import Flask, jsonify, request
import logging, os

from .exceptions import ExternalToolError, MediaInfoError
from .helpers import has_many
from .media_info_parser import MediaInfoParser

# load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


def _document_reply(media_info):
    snake_case_keys = request.args.get("keys", "") == "snake"
    return jsonify(
        {
            "sections": media_info.to_dict(snake_case_keys=snake_case_keys),
            "chapter_count": media_info.chapter_count,
        }
    )


def _json_body(keys):
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not has_many(data, None, keys):
        raise MediaInfoError("Request body must be JSON with: " + ", ".join(keys))
    return data


def create_app(parser=None):
    mediainfo_parser = parser or MediaInfoParser()
    app = Flask(__name__)

    @app.errorhandler(ExternalToolError)
    def external_tool_error(e):
        logger.error("External tool failed: %s", e)
        return jsonify({"error": str(e)}), 502

    @app.errorhandler(MediaInfoError)
    def mediainfo_error(e):
        return jsonify({"error": str(e)}), 400

    @app.route("/text", methods=["POST"])
    def parse_text():
        """
        POST http://127.0.0.1:5000/text
        Body, raw
        [INSERT MEDIAINFO TEXT HERE]
        """
        text = request.get_data().decode("utf-8")
        return _document_reply(mediainfo_parser.parse(text))

    @app.route("/url", methods=["POST"])
    def parse_url():
        """
        POST http://127.0.0.1:5000/url
        {"url": "https://pastebin.com/..."}
        """
        data = _json_body(["url"])
        return _document_reply(mediainfo_parser.parse_url(data["url"]))

    @app.route("/verify", methods=["POST"])
    def verify():
        """
        POST http://127.0.0.1:5000/verify
        {"file": "/path/to/movie.mkv", "checksum": "1A2B3C4D"}
        """
        data = _json_body(["file", "checksum"])
        media_info = mediainfo_parser.parse_file(data["file"])
        verified = media_info.verify_checksum(data["checksum"])
        return jsonify({"file": data["file"], "verified": verified})

    return app


if __name__ == "__main__":
    logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO").strip().upper())
    create_app().run()
