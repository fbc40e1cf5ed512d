"""
Audit Logger

DESIGN DECISION: Every change to the collection is logged, and so is
every failure the page deliberately hides (bad input, unreadable slot,
failed write). The user sees "nothing happened"; the log says why.

The audit logger:
- Writes structured JSON lines through structlog
- Never raises into the caller (a logging failure must not break an add)
"""

import logging
import sys
from typing import Optional

import structlog

from expense_tracker.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(log_level: str = "INFO") -> None:
    """
    Route structlog output to stderr at the given level.
    
    Safe to call more than once (Streamlit reruns the script on every
    interaction); only the level is updated after the first call.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(
            format="%(message)s",
            stream=sys.stderr,
            level=level,
        )
    root.setLevel(level)


class AuditLogger:
    """
    Central audit logging service.
    
    Turns AuditEvents into structured log lines.
    """
    
    def __init__(self, logger_name: str = "expense_tracker.audit"):
        self._logger = structlog.get_logger(logger_name)
    
    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.
        
        Returns True if the event was handed to the logger.
        """
        log_dict = event.to_log_dict()
        
        try:
            if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
                self._logger.error("audit_event", **log_dict)
            elif event.severity == AuditSeverity.WARNING:
                self._logger.warning("audit_event", **log_dict)
            elif event.severity == AuditSeverity.DEBUG:
                self._logger.debug("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
        except Exception:
            # Logging must never break the flow that triggered it
            return False
        
        return True
    
    def log_expense_added(
        self,
        expense_id: str,
        category: str,
        amount: str,
        expense_date: str,
        warnings: Optional[list[str]] = None,
    ) -> None:
        """Log a successful add, with any non-blocking input warnings."""
        self.log(AuditEventBuilder.expense_added(
            expense_id=expense_id,
            category=category,
            amount=amount,
            expense_date=expense_date,
            warnings=warnings,
        ))
    
    def log_expense_rejected(self, issues: list[dict], summary: str = "") -> None:
        """Log form input that failed validation."""
        self.log(AuditEventBuilder.expense_rejected(issues=issues, summary=summary))
    
    def log_expense_removed(self, expense_id: str) -> None:
        self.log(AuditEventBuilder.expense_removed(expense_id=expense_id))
    
    def log_remove_missed(self, expense_id: str) -> None:
        self.log(AuditEventBuilder.remove_missed(expense_id=expense_id))
    
    def log_store_loaded(self, slot_key: str, count: int) -> None:
        self.log(AuditEventBuilder.store_loaded(slot_key=slot_key, count=count))
    
    def log_storage_load_failed(
        self,
        slot_key: str,
        error_message: str,
    ) -> None:
        """Log an unreadable or corrupt slot."""
        self.log(AuditEventBuilder.storage_load_failed(
            slot_key=slot_key,
            error_message=error_message,
        ))
    
    def log_storage_save_failed(
        self,
        slot_key: str,
        error_message: str,
        count: int,
    ) -> None:
        """Log a write that did not make it to storage."""
        self.log(AuditEventBuilder.storage_save_failed(
            slot_key=slot_key,
            error_message=error_message,
            count=count,
        ))
    
    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> None:
        """Log an error."""
        self.log(AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
        ))
