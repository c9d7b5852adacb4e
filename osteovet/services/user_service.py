# Client account management for the dashboard
import logging

from sqlalchemy import or_

from osteovet import db
from osteovet.errors import Conflict, NotFound, ValidationError
from osteovet.models.user_model import Role, User
from osteovet.services.audit_service import record_audit
from osteovet.services.auth_service import validate_email, validate_name
from osteovet.utils.role_utils import format_user
from osteovet.utils.util import isoformat

logger = logging.getLogger(__name__)

SEARCH_LIMIT = 50
RECENT_APPOINTMENTS = 10


def _appointments_by_date(user):
    return sorted(user.appointments, key=lambda a: a.start_time, reverse=True)


def format_client(user, recent_only=True):
    appointments = _appointments_by_date(user)
    if recent_only:
        appointments = appointments[:RECENT_APPOINTMENTS]
    result = format_user(user)
    result['animals'] = [{
        'id': a.id,
        'name': a.name,
        'breed': a.breed,
        'age': a.age,
        'gender': a.gender.value
    } for a in sorted(user.animals, key=lambda a: a.name.lower())]
    result['appointments'] = [{
        'id': a.id,
        'startTime': isoformat(a.start_time),
        'status': a.status.value,
        'service': {'title': a.service.title} if a.service else None
    } for a in appointments]
    return result


def format_client_details(user):
    result = format_client(user, recent_only=False)
    result['updatedAt'] = isoformat(user.updated_at)
    for summary, appointment in zip(result['appointments'], _appointments_by_date(user)):
        summary['endTime'] = isoformat(appointment.end_time)
        summary['notes'] = appointment.notes
        summary['animal'] = {'name': appointment.animal.name, 'breed': appointment.animal.breed}
    result['_count'] = {'animals': len(user.animals), 'appointments': len(user.appointments)}
    return result


def get_profile(user):
    return format_user(user)


def get_client_or_404(user_id):
    user = db.session.get(User, user_id)
    if not user:
        raise NotFound('User not found')
    return user


def list_clients():
    clients = User.query.filter_by(role=Role.CLIENT).order_by(User.created_at.desc(), User.id.desc()).all()
    validated = sum(1 for c in clients if c.validated)
    return {
        'data': [format_client(c) for c in clients],
        'total': len(clients),
        'validated': validated,
        'pending': len(clients) - validated
    }


def search_clients(q):
    if not q or not isinstance(q, str) or not q.strip():
        raise ValidationError('Search query is required')
    term = f'%{q.strip().lower()}%'
    clients = User.query.filter(
        User.role == Role.CLIENT,
        or_(
            User.first_name.ilike(term),
            User.last_name.ilike(term),
            User.email.ilike(term),
            User.phone.like(term)
        )
    ).order_by(User.first_name.asc()).limit(SEARCH_LIMIT).all()
    return {
        'data': [format_client(c) for c in clients],
        'total': len(clients),
        'query': q
    }


def get_client_details(user_id):
    return format_client_details(get_client_or_404(user_id))


def update_client(user_id, data):
    user = get_client_or_404(user_id)
    if user.role != Role.CLIENT:
        raise ValidationError('Only client accounts can be updated')

    if data.get('email'):
        email = validate_email(data['email'])
        taken = User.query.filter(User.email == email, User.id != user.id).first()
        if taken:
            raise Conflict('Email is already taken')
        user.email = email
    if data.get('firstName'):
        user.first_name = validate_name(data['firstName'], 'First name')
    if data.get('lastName'):
        user.last_name = validate_name(data['lastName'], 'Last name')
    if 'phone' in data:
        phone = data['phone']
        user.phone = phone.strip() if isinstance(phone, str) and phone.strip() else None

    db.session.commit()
    logger.info(f"Client profile {user.id} updated")
    return format_user(user)


def delete_client(user_id, actor):
    user = get_client_or_404(user_id)
    if user.role != Role.CLIENT:
        raise ValidationError('Only client accounts can be deleted')

    record_audit(actor.id, 'DELETE_CLIENT', {
        'deletedClientId': user.id,
        'deletedClientEmail': user.email,
        'deletedClientName': user.full_name,
        'deletedAnimalsCount': len(user.animals),
        'deletedAppointmentsCount': len(user.appointments)
    })
    name = user.full_name
    db.session.delete(user)
    db.session.commit()
    logger.info(f"Client {user_id} deleted by {actor.id}")
    return name


def bulk_validate(client_ids, actor):
    if not isinstance(client_ids, list) or not client_ids:
        raise ValidationError('Client IDs array is required')
    try:
        ids = [int(i) for i in client_ids]
    except (TypeError, ValueError):
        raise ValidationError('Client IDs must be integers')

    pending = User.query.filter(
        User.id.in_(ids),
        User.role == Role.CLIENT,
        User.validated.is_(False)
    ).all()
    for client in pending:
        client.validated = True

    record_audit(actor.id, 'BULK_VALIDATE_CLIENTS', {
        'validatedClientIds': ids,
        'validatedCount': len(pending)
    })
    db.session.commit()
    return len(pending)
