import enum

from osteovet import db
from osteovet.utils.util import utcnow
from osteovet.models.todo_model import Priority


class ReminderCategory(enum.Enum):
    APPOINTMENT_REMINDER = 'APPOINTMENT_REMINDER'
    FOLLOW_UP = 'FOLLOW_UP'
    APPOINTMENT_CONFIRMATION = 'APPOINTMENT_CONFIRMATION'
    BIRTHDAY = 'BIRTHDAY'


class Reminder(db.Model):
    """A dated reminder, optionally attached to an appointment.

    ``type`` is the label chosen by the user and is stored verbatim;
    ``category`` is the closed set the server reasons about.
    """
    __tablename__ = 'reminder'
    id = db.Column(db.Integer, primary_key=True)
    message = db.Column(db.Text, nullable=False)
    message_fr = db.Column(db.Text)
    type = db.Column(db.String(50), nullable=False, default='MANUAL')
    category = db.Column(db.Enum(ReminderCategory), nullable=False, default=ReminderCategory.FOLLOW_UP)
    priority = db.Column(db.Enum(Priority), nullable=False, default=Priority.MEDIUM)
    remind_at = db.Column(db.DateTime, nullable=False, index=True)
    sent = db.Column(db.Boolean, nullable=False, default=False)
    appointment_id = db.Column(db.Integer, db.ForeignKey('appointment.id'), nullable=True)
    created_by_id = db.Column(db.Integer, db.ForeignKey('user.id', ondelete='SET NULL'), nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    @property
    def is_manual(self):
        return self.appointment_id is None

    def __repr__(self):
        return f'<Reminder {self.id} at {self.remind_at}>'
