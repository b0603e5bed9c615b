import requests

# LINE rejects text messages longer than this.
MAX_TEXT_LENGTH = 5000


class LineReplyClient:
    """Send replies to LINE Messaging API."""

    def __init__(self, access_token: str, logger, timeout: float = 10):
        """Initialize reply client with access token."""
        self.access_token = access_token
        self.logger = logger
        self.timeout = timeout
        self.reply_url = "https://api.line.me/v2/bot/message/reply"

    def reply_text(self, reply_token: str, text: str) -> bool:
        """Reply with a single text message."""
        if len(text) > MAX_TEXT_LENGTH:
            self.logger.warning("reply text truncated from %s chars", len(text))
            text = text[:MAX_TEXT_LENGTH]
        return self.reply(reply_token, [{"type": "text", "text": text}])

    def reply(self, reply_token: str, messages: list) -> bool:
        """Send a reply with message payloads."""
        if not self.access_token:
            self.logger.error("LINE_CHANNEL_ACCESS_TOKEN is missing")
            return False
        payload = {"replyToken": reply_token, "messages": messages}
        headers = {"Authorization": f"Bearer {self.access_token}"}
        try:
            response = requests.post(
                self.reply_url, json=payload, headers=headers, timeout=self.timeout
            )
        except requests.RequestException as exc:
            self.logger.error("LINE reply request failed: %s", exc)
            return False
        if response.status_code >= 400:
            self.logger.error(
                "LINE reply error: status=%s body=%s",
                response.status_code,
                response.text[:500],
            )
            return False
        return True
