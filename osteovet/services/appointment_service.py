"""Appointment booking and status lifecycle.

SCHEDULED -> CONFIRMED | CANCELLED
CONFIRMED -> CANCELLED | COMPLETED
CANCELLED and COMPLETED are terminal.
"""
import logging
from datetime import timedelta

from osteovet import db
from osteovet.errors import Conflict, NotFound, ValidationError
from osteovet.models.appointment_model import Appointment, AppointmentStatus
from osteovet.models.service_model import Service
from osteovet.services import animal_service
from osteovet.utils.util import isoformat, parse_datetime

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS = {
    AppointmentStatus.SCHEDULED: {AppointmentStatus.CONFIRMED, AppointmentStatus.CANCELLED},
    AppointmentStatus.CONFIRMED: {AppointmentStatus.CANCELLED, AppointmentStatus.COMPLETED},
    AppointmentStatus.CANCELLED: set(),
    AppointmentStatus.COMPLETED: set(),
}


def format_appointment(appointment):
    client = appointment.client
    animal = appointment.animal
    service = appointment.service
    return {
        'id': appointment.id,
        'startTime': isoformat(appointment.start_time),
        'endTime': isoformat(appointment.end_time),
        'status': appointment.status.value,
        'notes': appointment.notes,
        'refused': appointment.refused,
        'refusalReason': appointment.refusal_reason,
        'createdAt': isoformat(appointment.created_at),
        'client': {
            'id': client.id,
            'firstName': client.first_name,
            'lastName': client.last_name,
            'email': client.email,
            'phone': client.phone
        },
        'animal': {
            'id': animal.id,
            'name': animal.name,
            'breed': animal.breed,
            'age': animal.age,
            'weight': animal.weight,
            'gender': animal.gender.value,
            'notes': animal.notes
        },
        'service': {
            'id': service.id,
            'title': service.title,
            'description': service.description,
            'duration': service.duration,
            'price': float(service.price) if service.price is not None else None
        }
    }


def scoped_query(user):
    if user.is_staff:
        return Appointment.query
    return Appointment.query.filter_by(client_id=user.id)


def get_appointment_or_404(appointment_id, user):
    appointment = scoped_query(user).filter_by(id=appointment_id).first()
    if not appointment:
        raise NotFound('Appointment not found')
    return appointment


def get_all_appointments(user, status=None):
    query = scoped_query(user)
    if status:
        try:
            query = query.filter_by(status=AppointmentStatus(status.upper()))
        except ValueError:
            allowed = ', '.join(s.value for s in AppointmentStatus)
            raise ValidationError(f'Invalid status. Allowed: {allowed}')
    appointments = query.order_by(Appointment.start_time.asc()).all()
    return [format_appointment(a) for a in appointments]


def get_pending_appointments():
    appointments = Appointment.query.filter_by(status=AppointmentStatus.SCHEDULED) \
        .order_by(Appointment.start_time.asc()).all()
    return [format_appointment(a) for a in appointments]


def get_appointment(appointment_id, user):
    return format_appointment(get_appointment_or_404(appointment_id, user))


def _id(value, field):
    if isinstance(value, bool):
        raise ValidationError(f'{field} is required')
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f'{field} is required')


def create_appointment(data, user, commit=True):
    """Book an appointment. Clients may only book their own animals; staff book for the owner."""
    animal = animal_service.get_animal_or_404(_id(data.get('animalId'), 'animalId'), user)
    service = db.session.get(Service, _id(data.get('serviceId'), 'serviceId'))
    if not service:
        raise NotFound('Service not found')
    if not service.active:
        raise ValidationError('Service is not available for booking')

    start_time = parse_datetime(data.get('startTime'), 'startTime')
    if data.get('endTime'):
        end_time = parse_datetime(data['endTime'], 'endTime')
    else:
        end_time = start_time + timedelta(minutes=service.duration)

    appointment = Appointment(
        start_time=start_time,
        end_time=end_time,
        status=AppointmentStatus.SCHEDULED,
        notes=data.get('notes'),
        client_id=animal.owner_id,
        animal_id=animal.id,
        service_id=service.id
    )
    db.session.add(appointment)
    if commit:
        db.session.commit()
        logger.info(f"Appointment {appointment.id} booked for animal {animal.id}")
    return appointment


def book(data, user):
    """Create the animal and its first appointment as one unit of work."""
    animal_data = data.get('animal')
    if not isinstance(animal_data, dict):
        raise ValidationError('animal details are required')
    try:
        animal = animal_service.create_animal(animal_data, user, commit=False)
        db.session.flush()
        appointment_data = {k: data.get(k) for k in ('serviceId', 'startTime', 'endTime', 'notes')}
        appointment_data['animalId'] = animal.id
        appointment = create_appointment(appointment_data, user, commit=False)
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    logger.info(f"Booking created: animal {animal.id}, appointment {appointment.id}")
    return appointment


def _transition(appointment, target):
    if target not in ALLOWED_TRANSITIONS[appointment.status]:
        logger.warning(f"Rejected transition of appointment {appointment.id} "
                       f"from {appointment.status.value} to {target.value}")
        raise Conflict(f'Cannot change appointment from {appointment.status.value} to {target.value}')
    appointment.status = target


def confirm(appointment_id, user):
    appointment = get_appointment_or_404(appointment_id, user)
    _transition(appointment, AppointmentStatus.CONFIRMED)
    db.session.commit()
    logger.info(f"Appointment {appointment.id} confirmed by {user.id}")
    return appointment


def refuse(appointment_id, user, reason=None):
    appointment = get_appointment_or_404(appointment_id, user)
    if appointment.status != AppointmentStatus.SCHEDULED:
        raise Conflict(f'Only scheduled appointments can be refused (current: {appointment.status.value})')
    _transition(appointment, AppointmentStatus.CANCELLED)
    appointment.refused = True
    appointment.refusal_reason = reason.strip() if isinstance(reason, str) and reason.strip() else None
    db.session.commit()
    logger.info(f"Appointment {appointment.id} refused by {user.id}")
    return appointment


def cancel(appointment_id, user):
    appointment = get_appointment_or_404(appointment_id, user)
    _transition(appointment, AppointmentStatus.CANCELLED)
    db.session.commit()
    logger.info(f"Appointment {appointment.id} cancelled by {user.id}")
    return appointment


def complete(appointment_id, user):
    appointment = get_appointment_or_404(appointment_id, user)
    _transition(appointment, AppointmentStatus.COMPLETED)
    db.session.commit()
    return appointment


def delete_appointment(appointment_id, user):
    appointment = get_appointment_or_404(appointment_id, user)
    db.session.delete(appointment)
    db.session.commit()
    logger.info(f"Appointment {appointment_id} deleted by {user.id}")
