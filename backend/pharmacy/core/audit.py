"""
Audit trail for sign-ins and for changes to orders, payments and accounts.

Every event is one JSON line on the ``audit`` logger, separate from the
application log. Secrets (passwords, tokens) are never written.
"""
import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

audit_logger = logging.getLogger("audit")


def _emit(event: Dict[str, Any], level: int = logging.INFO) -> None:
    event = {"timestamp": datetime.now(timezone.utc).isoformat(), **event}
    audit_logger.log(level, json.dumps(event, default=str))


class AuditLog:
    @staticmethod
    def log_authentication(action: str, email: str, ip_address: str, success: bool, reason: str = ""):
        """Record a register/login/logout attempt.

        Failed attempts are logged at WARNING with the rejection ``reason``.
        """
        event: Dict[str, Any] = {
            "event_type": f"auth.{action}",
            "email": email,
            "ip_address": ip_address,
            "success": success,
        }
        if not success and reason:
            event["reason"] = reason
        _emit(event, logging.INFO if success else logging.WARNING)

    @staticmethod
    def log_action(
        action: str,
        resource_type: str,
        resource_id: int,
        user_id: Optional[int] = None,
        changes: Optional[Dict[str, Any]] = None,
    ):
        # e.g. log_action("status", "order", 12, changes={"from": "Pending", "to": "Shipped"})
        event: Dict[str, Any] = {"event_type": f"{resource_type}.{action}", "resource_id": resource_id}
        if user_id is not None:
            event["user_id"] = user_id
        if changes:
            event["changes"] = changes
        _emit(event)
