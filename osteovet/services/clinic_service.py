# Clinic services (consultation types offered for booking)
import logging

from osteovet import db
from osteovet.errors import DependencyBlocked, NotFound, ValidationError
from osteovet.models.service_model import Service
from osteovet.utils.util import isoformat, parse_bool

logger = logging.getLogger(__name__)


def format_service(service):
    return {
        'id': service.id,
        'title': service.title,
        'titleFr': service.title_fr,
        'description': service.description,
        'duration': service.duration,
        'price': float(service.price) if service.price is not None else None,
        'active': service.active,
        'createdAt': isoformat(service.created_at)
    }


def apply_service_fields(service, data, partial=False):
    if not partial or 'title' in data:
        title = data.get('title')
        if not isinstance(title, str) or not title.strip():
            raise ValidationError('title is required')
        service.title = title.strip()
    if not partial or 'duration' in data:
        duration = data.get('duration')
        if isinstance(duration, bool) or not isinstance(duration, int) or duration <= 0:
            raise ValidationError('duration must be a positive number of minutes')
        service.duration = duration
    if 'price' in data:
        price = data['price']
        if isinstance(price, bool) or not isinstance(price, (int, float)) or price < 0:
            raise ValidationError('price must be a non-negative number')
        service.price = float(price)
    for field, attr in (('titleFr', 'title_fr'), ('description', 'description')):
        if field in data:
            setattr(service, attr, data[field])
    if 'active' in data:
        service.active = parse_bool(data['active'], 'active')


def get_service_or_404(service_id):
    service = db.session.get(Service, service_id)
    if not service:
        raise NotFound('Service not found')
    return service


def get_all_services(active_only=False):
    query = Service.query
    if active_only:
        query = query.filter_by(active=True)
    return [format_service(s) for s in query.order_by(Service.title.asc()).all()]


def get_service(service_id):
    return format_service(get_service_or_404(service_id))


def create_service(data):
    service = Service(price=0, active=True)
    apply_service_fields(service, data)
    db.session.add(service)
    db.session.commit()
    logger.info(f"Service {service.id} created: {service.title}")
    return format_service(service)


def update_service(service_id, data):
    service = get_service_or_404(service_id)
    apply_service_fields(service, data, partial=True)
    db.session.commit()
    return format_service(service)


def delete_service(service_id):
    service = get_service_or_404(service_id)
    if service.appointments:
        raise DependencyBlocked('Cannot delete a service that has appointments. Deactivate it instead.')
    db.session.delete(service)
    db.session.commit()
