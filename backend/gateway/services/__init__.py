"""
Services Module

- Ledger: cost computation, atomic debit, admin balance overwrite
- Upstream: client for the text-generation provider
- Notifier: server-sent event stream
"""

from .ledger import (
    compute_cost,
    debit,
    set_balance,
)
from .upstream import (
    TextGenerationClient,
    get_text_generation_client,
)
from .notifier import (
    notification_events,
    open_stream_count,
)

__all__ = [
    # Ledger
    "compute_cost",
    "debit",
    "set_balance",
    # Upstream
    "TextGenerationClient",
    "get_text_generation_client",
    # Notifier
    "notification_events",
    "open_stream_count",
]
