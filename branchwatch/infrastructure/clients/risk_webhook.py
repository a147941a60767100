"""Risk-change webhook client with exponential backoff retry logic"""

import asyncio
import logging
import httpx
from typing import Dict, Any, Optional
from branchwatch.config import settings
from branchwatch.infrastructure.observability.metrics import webhook_latency_histogram, webhook_failure_counter

logger = logging.getLogger(__name__)


class RiskWebhookClient:
    """Client for pushing branch risk level changes to a subscriber"""

    def __init__(
        self,
        webhook_url: Optional[str] = None,
        max_retries: Optional[int] = None,
        backoff_base: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.webhook_url = webhook_url or settings.risk_webhook_url
        self.max_retries = max_retries if max_retries is not None else settings.webhook_max_retries
        self.backoff_base = backoff_base if backoff_base is not None else settings.webhook_backoff_base
        self.timeout = settings.http_timeout_seconds
        self.transport = transport

    @property
    def enabled(self) -> bool:
        return bool(self.webhook_url)

    async def send_risk_change_event(self, payload: Dict[str, Any]) -> bool:
        """
        Send a BRANCH_RISK_CHANGED event with retry logic.

        Retry strategy:
        - Exponential backoff: 1s, 2s, 4s, 8s (base * 2^attempt)
        - Retries on HTTP errors and network failures
        - Tracks latency histogram and failure counter

        Runs as a background task, so a final failure is logged rather
        than raised.

        Returns:
            True if the subscriber acknowledged the event
        """
        if not self.enabled:
            logger.debug("Risk webhook disabled, dropping event", extra={"event": payload.get("event")})
            return False

        attempt = 0
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            while attempt < self.max_retries:
                try:
                    with webhook_latency_histogram.time():
                        response = await client.post(self.webhook_url, json=payload)
                        response.raise_for_status()
                        return True

                except (httpx.HTTPStatusError, httpx.RequestError) as e:
                    attempt += 1
                    webhook_failure_counter.inc()

                    if attempt >= self.max_retries:
                        logger.error(
                            f"Risk webhook delivery failed after {attempt} attempts: {e}",
                            extra={"branch_id": payload.get("branch_id")},
                        )
                        return False

                    backoff = self.backoff_base * (2 ** (attempt - 1))
                    await asyncio.sleep(backoff)

        logger.error(
            f"Risk webhook event not sent, max_retries is {self.max_retries}",
            extra={"branch_id": payload.get("branch_id")},
        )
        return False
