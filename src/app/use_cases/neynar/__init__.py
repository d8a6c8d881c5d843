"""Use cases do webhook Neynar."""

from .process_webhook_event import (
    ProcessingOutcome,
    ProcessWebhookEventUseCase,
    WebhookProcessingResult,
)

__all__ = [
    "ProcessWebhookEventUseCase",
    "ProcessingOutcome",
    "WebhookProcessingResult",
]
