from osteovet import db
from osteovet.utils.util import utcnow


class AuditLog(db.Model):
    # user_id is not a foreign key: entries outlive the users they mention
    __tablename__ = 'audit_log'
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, nullable=True, index=True)
    action = db.Column(db.String(64), nullable=False)
    meta = db.Column(db.JSON)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    def __repr__(self):
        return f'<AuditLog {self.action} by User {self.user_id}>'
