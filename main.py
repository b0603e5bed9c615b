# -*- coding:utf8 -*-
from flask import Flask, jsonify, request

from config import get_config
from cow_renderer import CowRenderer
from fortune_client import FortuneClient
from line.handler import LineHandler
from line.parser import Options
from line.reply import LineReplyClient
from logger import get_logger

config = get_config()
logger = get_logger(__name__)

app = Flask(__name__)

renderer = CowRenderer(default_wrap=config.DEFAULT_WRAP)
fortune_client = FortuneClient(
    config.FORTUNE_ENABLED,
    config.FORTUNE_COMMAND,
    config.FORTUNE_TIMEOUT,
    logger,
)

line_texts = {
    "welcome": f"Moo! Send `{config.STATUS_HINT}` to see what I can say.",
    "invalid_signature": "Invalid signature",
    "bad_request": "Bad Request",
}

if not config.LINE_CHANNEL_ACCESS_TOKEN:
    logger.warning("LINE_CHANNEL_ACCESS_TOKEN is missing; replies are disabled.")

line_handler = LineHandler(
    channel_secret=config.LINE_CHANNEL_SECRET,
    channel_access_token=config.LINE_CHANNEL_ACCESS_TOKEN,
    renderer=renderer,
    fortune_client=fortune_client,
    logger=logger,
    texts=line_texts,
    reply_client=LineReplyClient(
        config.LINE_CHANNEL_ACCESS_TOKEN, logger, timeout=config.LINE_REPLY_TIMEOUT
    ),
)

logger.info("\n%s", renderer.render(Options(text="Bot is ready")))


@app.route("/health", methods=["GET"])
def health_check():
    return {"status": "healthy", "service": "cowsay-bot", "version": "1.0.0"}


def _handle_line_callback():
    """LINE Messaging API webhook"""
    body = request.get_data()
    signature = request.headers.get("X-Line-Signature", "")
    response_text, status_code = line_handler.handle_callback(body, signature)
    return response_text, status_code


@app.route("/line/callback", methods=["POST"])
def line_callback():
    return _handle_line_callback()


@app.route("/callback", methods=["POST"])
def line_callback_alias():
    return _handle_line_callback()


@app.route("/", methods=["POST"])
def line_callback_root():
    return _handle_line_callback()


@app.errorhandler(404)
def not_found(error):
    return jsonify({"status": "error", "message": "Endpoint not found"}), 404


@app.errorhandler(405)
def method_not_allowed(error):
    allowed_methods = getattr(error, "valid_methods", [])
    return jsonify(
        {
            "status": "error",
            "message": "Method not allowed",
            "allowed_methods": allowed_methods,
        }
    ), 405


@app.errorhandler(500)
def internal_error(error):
    logger.error(f"Internal server error: {error}")
    return jsonify({"status": "error", "message": "Internal server error"}), 500


if __name__ == "__main__":
    app.run(host=config.API_HOST, port=config.API_PORT)
