# Audit trail helpers
import logging

from osteovet import db
from osteovet.models.audit_model import AuditLog
from osteovet.utils.util import isoformat

logger = logging.getLogger(__name__)


def record_audit(user_id, action, meta=None):
    """Append an audit entry to the current session; the caller commits."""
    entry = AuditLog(user_id=user_id, action=action, meta=meta or {})
    db.session.add(entry)
    logger.info(f"Audit {action} by user {user_id}")
    return entry


def format_audit(entry):
    return {
        'id': entry.id,
        'userId': entry.user_id,
        'action': entry.action,
        'meta': entry.meta,
        'createdAt': isoformat(entry.created_at)
    }


def list_audit_entries(action=None, limit=100):
    query = AuditLog.query
    if action:
        query = query.filter_by(action=action)
    entries = query.order_by(AuditLog.created_at.desc(), AuditLog.id.desc()).limit(limit).all()
    return [format_audit(e) for e in entries]
