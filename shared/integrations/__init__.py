from .webhook import WebhookClient

__all__ = ["WebhookClient"]
