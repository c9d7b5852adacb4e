"""Reminders for the practice dashboard.

Every reminder is stored in the ``reminder`` table. Manual reminders are the
ones with no appointment attached. The free-form ``type`` chosen in the
dashboard is kept as-is; ``category`` holds the matching closed value, with
FOLLOW_UP for anything outside the known set.
"""
import logging
from datetime import timedelta

from osteovet import db
from osteovet.errors import NotFound, ValidationError
from osteovet.models.appointment_model import Appointment
from osteovet.models.reminder_model import Reminder, ReminderCategory
from osteovet.models.todo_model import Priority
from osteovet.utils.util import isoformat, parse_bool, parse_datetime, parse_enum, utcnow

logger = logging.getLogger(__name__)

DEFAULT_TYPE = 'MANUAL'
MAX_TYPE_LENGTH = 50
LIST_STATUSES = ('active', 'completed', 'all')


def map_category(reminder_type):
    try:
        return ReminderCategory[reminder_type.upper()]
    except (KeyError, AttributeError):
        return ReminderCategory.FOLLOW_UP


def format_reminder(reminder):
    return {
        'id': reminder.id,
        'message': reminder.message,
        'messageFr': reminder.message_fr,
        'type': reminder.type,
        'category': reminder.category.value,
        'priority': reminder.priority.value,
        'dueDate': isoformat(reminder.remind_at),
        'completed': reminder.sent,
        'appointmentId': reminder.appointment_id,
        'createdAt': isoformat(reminder.created_at)
    }


def _message(value):
    if not isinstance(value, str) or not value.strip():
        raise ValidationError('Message is required')
    return value.strip()


def _type(value):
    if value is None:
        return DEFAULT_TYPE
    if not isinstance(value, str) or not value.strip():
        raise ValidationError('type must be a non-empty string')
    value = value.strip()
    if len(value) > MAX_TYPE_LENGTH:
        raise ValidationError('type too long')
    return value


def get_reminder_or_404(reminder_id):
    reminder = db.session.get(Reminder, reminder_id)
    if not reminder:
        raise NotFound('Reminder not found')
    return reminder


def get_reminders(status='active'):
    status = (status or 'active').lower()
    if status not in LIST_STATUSES:
        raise ValidationError(f"Invalid status. Allowed: {', '.join(LIST_STATUSES)}")
    query = Reminder.query
    if status == 'active':
        query = query.filter(Reminder.sent.is_(False))
    elif status == 'completed':
        query = query.filter(Reminder.sent.is_(True))
    reminders = query.order_by(Reminder.remind_at.asc(), Reminder.id.asc()).all()
    return [format_reminder(r) for r in reminders]


def get_stats():
    now = utcnow()
    active = Reminder.query.filter(Reminder.sent.is_(False))
    return {
        'active': active.count(),
        'completed': Reminder.query.filter(Reminder.sent.is_(True)).count(),
        'overdue': active.filter(Reminder.remind_at <= now).count()
    }


def create_reminder(data, user):
    # Everything is validated before the session is touched
    message = _message(data.get('message'))
    reminder_type = _type(data.get('type'))
    remind_at = parse_datetime(data.get('dueDate'), 'dueDate')
    priority = parse_enum(Priority, data.get('priority') or Priority.MEDIUM, 'priority')

    appointment_id = data.get('appointmentId')
    if appointment_id is not None:
        try:
            appointment = db.session.get(Appointment, int(appointment_id))
        except (TypeError, ValueError):
            appointment = None
        if not appointment:
            raise NotFound('Appointment not found')
        appointment_id = appointment.id

    reminder = Reminder(
        message=message,
        message_fr=data.get('messageFr') or message,
        type=reminder_type,
        category=map_category(reminder_type),
        priority=priority,
        remind_at=remind_at,
        sent=False,
        appointment_id=appointment_id,
        created_by_id=user.id
    )
    db.session.add(reminder)
    db.session.commit()
    logger.info(f"Reminder {reminder.id} created ({'manual' if reminder.is_manual else 'appointment'})")
    return format_reminder(reminder)


def update_reminder(reminder_id, data):
    reminder = get_reminder_or_404(reminder_id)
    if 'message' in data:
        reminder.message = _message(data['message'])
        reminder.message_fr = data.get('messageFr') or reminder.message
    if 'type' in data:
        reminder.type = _type(data['type'])
        reminder.category = map_category(reminder.type)
    if 'dueDate' in data:
        reminder.remind_at = parse_datetime(data['dueDate'], 'dueDate')
    if 'priority' in data:
        reminder.priority = parse_enum(Priority, data['priority'], 'priority')
    if 'completed' in data:
        reminder.sent = parse_bool(data['completed'], 'completed')
    db.session.commit()
    return format_reminder(reminder)


def complete_reminder(reminder_id):
    reminder = get_reminder_or_404(reminder_id)
    reminder.sent = True
    db.session.commit()
    return {'id': reminder.id, 'completed': reminder.sent}


def snooze_reminder(reminder_id, minutes):
    """Push the due date to ``now + minutes``; completion state is untouched."""
    if isinstance(minutes, bool) or not isinstance(minutes, (int, float)) or minutes <= 0:
        raise ValidationError('Invalid snooze duration')
    try:
        remind_at = utcnow() + timedelta(minutes=minutes)
    except (OverflowError, ValueError):
        raise ValidationError('Invalid snooze duration')
    reminder = get_reminder_or_404(reminder_id)
    reminder.remind_at = remind_at
    db.session.commit()
    logger.info(f"Reminder {reminder.id} snoozed for {minutes} minutes")
    return format_reminder(reminder)


def delete_reminder(reminder_id):
    reminder = get_reminder_or_404(reminder_id)
    db.session.delete(reminder)
    db.session.commit()


def create_booking_reminders(appointment_id, user):
    """Confirmation 24h before, reminder 2h before and follow-up 7 days after, in one transaction."""
    if appointment_id is None or isinstance(appointment_id, bool):
        raise ValidationError('Appointment ID is required')
    try:
        appointment = db.session.get(Appointment, int(appointment_id))
    except (TypeError, ValueError):
        raise ValidationError('Appointment ID is required')
    if not appointment:
        raise NotFound('Appointment not found')

    animal = appointment.animal.name
    service = appointment.service.title
    day = appointment.start_time.strftime('%a %b %d %Y')
    specs = [
        (ReminderCategory.APPOINTMENT_CONFIRMATION,
         f'Confirm appointment for {animal} on {day}',
         f'Confirmer le rendez-vous pour {animal} le {day}',
         appointment.start_time - timedelta(hours=24)),
        (ReminderCategory.APPOINTMENT_REMINDER,
         f"Reminder: {animal}'s appointment tomorrow",
         f'Rappel: rendez-vous de {animal} demain',
         appointment.start_time - timedelta(hours=2)),
        (ReminderCategory.FOLLOW_UP,
         f"Follow up on {animal}'s {service} treatment",
         f'Suivi du traitement {service} de {animal}',
         appointment.start_time + timedelta(days=7)),
    ]
    try:
        reminders = []
        for category, message, message_fr, remind_at in specs:
            reminder = Reminder(
                message=message,
                message_fr=message_fr,
                type=category.value,
                category=category,
                priority=Priority.MEDIUM,
                remind_at=remind_at,
                sent=False,
                appointment_id=appointment.id,
                created_by_id=user.id
            )
            db.session.add(reminder)
            reminders.append(reminder)
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    logger.info(f"Created {len(reminders)} booking reminders for appointment {appointment.id}")
    return [format_reminder(r) for r in reminders]
