"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from branchwatch.infrastructure.clients.risk_webhook import RiskWebhookClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_risk_webhook_client() -> RiskWebhookClient:
    """Provide risk-change webhook client instance"""
    return RiskWebhookClient()
