import httpx
from loguru import logger

from daily_summary.domain.errors import DispatchError
from daily_summary.domain.report import EmailMessage
from daily_summary.shared.decorators import log_errors


class ResendAPIError(DispatchError):
    """Raised when the Resend API rejects a message or cannot be reached."""


class ResendEmailService:
    """Sends plain-text emails through the Resend HTTP API."""

    SEND_EMAIL_PATH = "/emails"

    def __init__(
        self, client: httpx.Client, base_url: str, api_key: str, sender: str
    ) -> None:
        self._client = client
        self._endpoint = base_url.rstrip("/") + self.SEND_EMAIL_PATH
        self._sender = sender
        self._headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }

    @log_errors
    def send(self, message: EmailMessage) -> str:
        """POST ``message`` to the Resend send-email endpoint.

        Returns the Resend message id on success.
        Raises:
            ResendAPIError: on non-2xx HTTP responses or transport failures.
        """
        payload = {
            "from": self._sender,
            "to": message.recipients,
            "subject": message.subject,
            "text": message.body,
        }

        try:
            response = self._client.post(
                self._endpoint, headers=self._headers, json=payload
            )
        except httpx.HTTPError as exc:
            raise ResendAPIError(f"Resend request failed: {exc}") from exc

        if not response.is_success:
            raise ResendAPIError(
                f"Resend API error {response.status_code}: {_error_reason(response)}"
            )

        try:
            body = response.json()
        except ValueError as exc:
            raise ResendAPIError(f"Invalid JSON from Resend: {exc}") from exc
        if not isinstance(body, dict):
            raise ResendAPIError(f"Expected a JSON object from Resend, got: {body!r}")

        message_id = str(body.get("id", ""))
        logger.info(
            f"[Resend] '{message.subject}' accepted for {len(message.recipients)} "
            f"recipient(s) (id {message_id})"
        )
        return message_id


def _error_reason(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.text
