import json
from typing import Dict, Optional

from cow_renderer import CowRenderError, CowRenderer
from fortune_client import FortuneClient, FortuneError
from line.parser import CommandParseError, CowCommandParser, Options
from line.reply import MAX_TEXT_LENGTH, LineReplyClient
from line.signature import verify_signature


def pad_message(message: str, padding: str = "```") -> str:
    """Wrap a drawing in a code fence, cutting it to fit one LINE message."""
    limit = MAX_TEXT_LENGTH - 2 * len(padding)
    if len(message) > limit:
        message = message[:limit]
    return padding + message + padding


class LineHandler:
    """Handle LINE webhook events and reply with cowsay drawings."""

    def __init__(
        self,
        *,
        channel_secret: str,
        channel_access_token: str,
        renderer: CowRenderer,
        fortune_client: FortuneClient,
        logger,
        texts: Optional[Dict[str, str]] = None,
        parser: Optional[CowCommandParser] = None,
        reply_client: Optional[LineReplyClient] = None,
    ) -> None:
        """Initialize handler with its parser, renderer and reply dependencies."""
        self.channel_secret = channel_secret
        self.renderer = renderer
        self.fortune_client = fortune_client
        self.logger = logger
        self.texts = texts or {}
        self.parser = parser or CowCommandParser()
        self.reply_client = reply_client or LineReplyClient(
            channel_access_token, logger
        )

    def handle_callback(self, body: bytes, signature: str) -> tuple:
        """Validate signature and process webhook payload."""
        if not verify_signature(self.channel_secret, body, signature):
            return self.texts.get("invalid_signature", "Invalid signature"), 403

        try:
            payload = json.loads(body.decode("utf-8"))
        except (UnicodeDecodeError, ValueError) as exc:
            self.logger.error("LINE webhook decode error: %s", exc)
            return self.texts.get("bad_request", "Bad Request"), 400

        if not isinstance(payload, dict):
            self.logger.error("LINE webhook payload is not an object")
            return self.texts.get("bad_request", "Bad Request"), 400

        for event in payload.get("events", []):
            self._handle_event(event)

        return "OK", 200

    def _handle_event(self, event: dict) -> None:
        """Route a single event to the appropriate handler."""
        event_type = event.get("type")
        reply_token = event.get("replyToken")
        if not reply_token:
            return

        if event_type == "follow":
            welcome = self.texts.get("welcome", "")
            if welcome:
                self.reply_client.reply_text(reply_token, welcome)
            return

        if event_type != "message":
            return

        message = event.get("message", {})
        if message.get("type") != "text":
            return

        reply = self.build_reply(message.get("text", ""))
        if reply is not None:
            self.reply_client.reply_text(reply_token, reply)

    def build_reply(self, text: str) -> Optional[str]:
        """Turn one chat message into reply text, or None to stay silent."""
        try:
            options = self.parser.parse(text)
        except CommandParseError as exc:
            self.logger.info("rejected command %r: %s", text, exc)
            return f"Error: {exc}"

        if options is None:
            return None

        if options.fortune_requested:
            try:
                options = options.with_text(self.fortune_client.get_fortune())
            except FortuneError as exc:
                failure = Options(text=f"Failed to get fortune: {exc}")
                return pad_message(self._render(failure))

        return pad_message(self._render(options))

    def _render(self, options: Options) -> str:
        try:
            return self.renderer.render(options)
        except CowRenderError as exc:
            return f"error: {exc}"
