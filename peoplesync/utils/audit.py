"""Audit logging utilities."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any, Dict

logger = logging.getLogger("peoplesync.audit")


class AuditLogger:
    """Emit one structured JSON line per data-moving operation."""

    def record(self, action: str, actor: str, details: Dict[str, Any]) -> None:
        payload = {
            "timestamp": datetime.utcnow().isoformat(),
            "action": action,
            "actor": actor,
            "details": details,
        }
        logger.info(json.dumps(payload, default=str))


audit_logger = AuditLogger()

__all__ = ["audit_logger", "AuditLogger"]
