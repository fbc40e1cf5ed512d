"""
Audit Models for Personal Expenses

Every change to the expense collection, and every storage problem that
was swallowed, is recorded as an audit event. The page never shows
these; they go to the structured log so a silent no-op can still be
explained afterwards.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Collection changes
    EXPENSE_ADDED = "expense_added"
    EXPENSE_REJECTED = "expense_rejected"
    EXPENSE_REMOVED = "expense_removed"
    REMOVE_MISSED = "remove_missed"
    
    # Persistence
    STORE_LOADED = "store_loaded"
    STORAGE_LOAD_FAILED = "storage_load_failed"
    STORAGE_SAVE_FAILED = "storage_save_failed"
    
    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEvent(BaseModel):
    """
    A single audit event.
    
    This is the core unit of our audit trail.
    """
    
    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )
    
    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )
    
    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'expense', 'slot')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )
    
    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )
    
    error_message: Optional[str] = None
    
    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )
    
    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.
    
    Usage:
        event = AuditEventBuilder.expense_added(expense_id, "Dining", "12.50", "2026-10-05")
        event = AuditEventBuilder.storage_save_failed("expenses_v1", str(error), count=3)
    """
    
    @staticmethod
    def expense_added(
        expense_id: str,
        category: str,
        amount: str,
        expense_date: str,
        warnings: Optional[list[str]] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_ADDED,
            severity=AuditSeverity.WARNING if warnings else AuditSeverity.INFO,
            entity_type="expense",
            entity_id=expense_id,
            description=f"Expense added: {category} {amount}",
            details={
                "category": category,
                "amount": amount,
                "date": expense_date,
                "warnings": warnings or [],
            },
            is_user_action=True,
        )
    
    @staticmethod
    def expense_rejected(
        issues: list[dict],
        summary: str = "",
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type="expense",
            description=f"Expense input rejected with {len(issues)} issue(s)",
            details={"issues": issues, "summary": summary},
            is_user_action=True,
        )
    
    @staticmethod
    def expense_removed(expense_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_REMOVED,
            entity_type="expense",
            entity_id=expense_id,
            description="Expense removed",
            is_user_action=True,
        )
    
    @staticmethod
    def remove_missed(expense_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REMOVE_MISSED,
            severity=AuditSeverity.DEBUG,
            entity_type="expense",
            entity_id=expense_id,
            description="Remove requested for an unknown expense id",
            is_user_action=True,
        )
    
    @staticmethod
    def store_loaded(slot_key: str, count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORE_LOADED,
            entity_type="slot",
            entity_id=slot_key,
            description=f"Loaded {count} expense(s) from slot {slot_key}",
            details={"count": count},
        )
    
    @staticmethod
    def storage_load_failed(
        slot_key: str,
        error_message: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_LOAD_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="slot",
            entity_id=slot_key,
            description=f"Slot {slot_key} could not be read; starting empty",
            error_message=error_message,
        )
    
    @staticmethod
    def storage_save_failed(
        slot_key: str,
        error_message: str,
        count: int,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="slot",
            entity_id=slot_key,
            description=f"Slot {slot_key} could not be written; changes kept in memory only",
            details={"count": count},
            error_message=error_message,
        )
    
    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            details=details or {},
            error_message=error_message,
        )
