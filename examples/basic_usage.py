"""
Basic usage example for law-sender.

Sends one record to a Log Analytics workspace. Credentials come from
``DefaultAzureCredential`` (environment, managed identity or ``az login``).

    python examples/basic_usage.py <subscription-id> <workspace-id> <table>
"""

import sys
from datetime import datetime, timezone

from lawsender import LawSenderError, SendConfig, new_collector
from lawsender.core import diagnostics


def main(argv: list[str]) -> int:
    """Send a couple of records through one collector."""
    subscription_id, workspace_id, table = argv[1:4]
    diagnostics.enable()

    config = SendConfig(
        workspace_id=workspace_id,
        table=table,
        subscription_id=subscription_id,
        timestamp=datetime.now(timezone.utc),
    )
    try:
        # Key discovery happens once; the collector can be reused.
        collector = new_collector(config)
        collector.send_data(b'{"event": "started", "source": "example"}')
        collector.send_data('[{"event": "batch-item", "n": 1}]')
    except LawSenderError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
