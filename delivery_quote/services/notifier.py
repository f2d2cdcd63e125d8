import httpx
import asyncio
import logging
from html import escape
from typing import Optional
from delivery_quote.core.config import settings
from delivery_quote.core.metrics import email_deliveries
from delivery_quote.schemas.quote import QuoteResponse

logger = logging.getLogger(__name__)


def _money(amount: int) -> str:
    return f"${amount:,}".replace(",", ".")


def render_quote_text(quote: QuoteResponse, customer_name: Optional[str] = None) -> str:
    lines = [f"Hello {customer_name}," if customer_name else "Hello,", "", "Here is your delivery quote:", ""]
    lines.append(f"From: {quote.origin}")
    lines.append(f"To: {quote.destination}")
    lines.append(f"Distance: {quote.distance_km:.1f} km")
    lines.append(f"Net: {_money(quote.net)}")
    if quote.discount:
        lines.append(f"Discount {quote.discount_label}: -{_money(quote.discount)}")
    lines.append(f"Tax: {_money(quote.tax)}")
    lines.append(f"Total: {_money(quote.total)}")
    lines.extend(["", quote.advisory])
    return "\n".join(lines)


def render_quote_html(quote: QuoteResponse, customer_name: Optional[str] = None) -> str:
    rows = [
        ("From", quote.origin),
        ("To", quote.destination),
        ("Distance", f"{quote.distance_km:.1f} km"),
        ("Net", _money(quote.net)),
    ]
    if quote.discount:
        rows.append((f"Discount {quote.discount_label}", f"-{_money(quote.discount)}"))
    rows.append(("Tax", _money(quote.tax)))
    rows.append(("Total", _money(quote.total)))

    table = "".join(
        f"<tr><td>{escape(label)}</td><td>{escape(value)}</td></tr>" for label, value in rows
    )
    greeting = f"Hello {escape(customer_name)}," if customer_name else "Hello,"
    return (
        f"<p>{greeting}</p><p>Here is your delivery quote:</p>"
        f"<table>{table}</table><p>{escape(quote.advisory)}</p>"
    )


class EmailNotifier:
    def __init__(
        self,
        api_key: Optional[str] = None,
        url: Optional[str] = None,
        sender: Optional[str] = None,
        bcc: Optional[str] = None,
        timeout: Optional[float] = None,
        retries: Optional[int] = None,
        backoff: float = 1.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.EMAIL_API_KEY
        self.url = url or settings.EMAIL_API_URL
        self.sender = sender or settings.EMAIL_FROM
        self.bcc = bcc if bcc is not None else settings.EMAIL_BCC
        self.timeout = timeout or settings.EMAIL_TIMEOUT
        self.retries = retries if retries is not None else settings.EMAIL_RETRIES
        self.backoff = backoff
        self.transport = transport

    def build_message(self, quote: QuoteResponse, customer_name: Optional[str], customer_email: str) -> dict:
        message = {
            "from": self.sender,
            "to": [customer_email],
            "subject": f"Your delivery quote: {_money(quote.total)}",
            "text": render_quote_text(quote, customer_name),
            "html": render_quote_html(quote, customer_name),
        }
        if self.bcc:
            message["bcc"] = [self.bcc]
        return message

    async def send_quote(self, quote: QuoteResponse, customer_name: Optional[str], customer_email: str) -> bool:
        if not self.api_key:
            logger.warning(f"Email API key not configured, quote email to {customer_email} not sent")
            email_deliveries.labels(status="skipped", retry_count="0").inc()
            return False

        message = self.build_message(quote, customer_name, customer_email)
        headers = {"Authorization": f"Bearer {self.api_key}"}
        backoff = self.backoff

        for attempt in range(1, self.retries + 1):
            try:
                async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                    response = await client.post(self.url, json=message, headers=headers)

                    if 200 <= response.status_code < 300:
                        logger.info(f"Quote email delivered to {customer_email}")
                        email_deliveries.labels(status="success", retry_count=str(attempt - 1)).inc()
                        return True
                    else:
                        logger.warning(
                            f"Quote email failed (attempt {attempt}/{self.retries}): "
                            f"Status {response.status_code} for {customer_email}"
                        )
            except httpx.TimeoutException:
                logger.warning(
                    f"Quote email timeout (attempt {attempt}/{self.retries}) for {customer_email}"
                )
            except httpx.HTTPError as e:
                logger.warning(
                    f"Quote email error (attempt {attempt}/{self.retries}): {e} "
                    f"for {customer_email}"
                )

            if attempt < self.retries:
                await asyncio.sleep(backoff)
                backoff *= 2.0

        logger.error(f"Quote email failed after {self.retries} attempts for {customer_email}")
        email_deliveries.labels(status="failed", retry_count=str(self.retries)).inc()
        return False


def get_notifier() -> EmailNotifier:
    return EmailNotifier()
