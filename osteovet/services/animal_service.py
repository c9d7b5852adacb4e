# Animal service module for business logic
import logging

from osteovet import db
from osteovet.errors import DependencyBlocked, NotFound, ValidationError
from osteovet.models.animal_model import Animal, Gender, TreatmentNote
from osteovet.utils.util import isoformat, parse_enum

logger = logging.getLogger(__name__)


def format_owner(user):
    return {
        'id': user.id,
        'firstName': user.first_name,
        'lastName': user.last_name,
        'email': user.email
    }


def format_note(note):
    return {
        'id': note.id,
        'animalId': note.animal_id,
        'content': note.content,
        'author': format_owner(note.author) if note.author else None,
        'createdAt': isoformat(note.created_at)
    }


def format_animal(animal, include_owner=False):
    result = {
        'id': animal.id,
        'name': animal.name,
        'breed': animal.breed,
        'age': animal.age,
        'weight': animal.weight,
        'gender': animal.gender.value,
        'notes': animal.notes,
        'ownerId': animal.owner_id,
        'createdAt': isoformat(animal.created_at),
        'appointments': [{
            'id': a.id,
            'startTime': isoformat(a.start_time),
            'endTime': isoformat(a.end_time),
            'status': a.status.value,
            'service': {'id': a.service.id, 'title': a.service.title} if a.service else None
        } for a in sorted(animal.appointments, key=lambda a: a.start_time, reverse=True)],
        'treatmentNotes': [format_note(n) for n in animal.treatment_notes]
    }
    if include_owner:
        result['owner'] = format_owner(animal.owner)
    return result


def _number(value, field, integer=False):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f'{field} must be a number')
    if value < 0:
        raise ValidationError(f'{field} must be greater than or equal to 0')
    if integer:
        if int(value) != value:
            raise ValidationError(f'{field} must be a whole number')
        return int(value)
    return float(value)


def _text(value, field):
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f'{field} is required')
    return value.strip()


def apply_animal_fields(animal, data, partial=False):
    if not partial or 'name' in data:
        animal.name = _text(data.get('name'), 'name')
    if not partial or 'breed' in data:
        animal.breed = _text(data.get('breed'), 'breed')
    if not partial or 'age' in data:
        animal.age = _number(data.get('age'), 'age', integer=True)
    if not partial or 'gender' in data:
        animal.gender = parse_enum(Gender, data.get('gender'), 'gender')
    if 'weight' in data:
        animal.weight = _number(data['weight'], 'weight') if data['weight'] is not None else None
    if 'notes' in data:
        notes = data['notes']
        if notes is not None and not isinstance(notes, str):
            raise ValidationError('notes must be a string')
        animal.notes = notes


def scoped_query(user):
    """Staff see every animal, clients only their own."""
    if user.is_staff:
        return Animal.query
    return Animal.query.filter_by(owner_id=user.id)


def get_animal_or_404(animal_id, user):
    animal = scoped_query(user).filter_by(id=animal_id).first()
    if not animal:
        raise NotFound('Animal not found')
    return animal


def get_all_animals(user):
    animals = scoped_query(user).order_by(Animal.name.asc()).all()
    return [format_animal(a, include_owner=user.is_staff) for a in animals]


def get_animal(animal_id, user):
    return format_animal(get_animal_or_404(animal_id, user), include_owner=user.is_staff)


def create_animal(data, user, commit=True):
    animal = Animal(owner_id=user.id)
    apply_animal_fields(animal, data)
    db.session.add(animal)
    if commit:
        db.session.commit()
        logger.info(f"Animal {animal.id} created for user {user.id}")
    return animal


def update_animal(animal_id, data, user):
    animal = get_animal_or_404(animal_id, user)
    apply_animal_fields(animal, data, partial=True)
    db.session.commit()
    return format_animal(animal, include_owner=user.is_staff)


def delete_animal(animal_id, user):
    animal = get_animal_or_404(animal_id, user)
    if animal.appointments or animal.treatment_notes:
        logger.warning(f"Refusing to delete animal {animal.id}: dependent records exist")
        raise DependencyBlocked('Cannot delete animal with existing appointments or treatment notes. '
                                'Please contact an administrator.')
    db.session.delete(animal)
    db.session.commit()
    logger.info(f"Animal {animal_id} deleted by user {user.id}")


def get_notes(animal_id, user):
    animal = get_animal_or_404(animal_id, user)
    return [format_note(n) for n in animal.treatment_notes]


def add_note(animal_id, data, user):
    animal = get_animal_or_404(animal_id, user)
    note = TreatmentNote(animal_id=animal.id, author_id=user.id, content=_text(data.get('content'), 'content'))
    db.session.add(note)
    db.session.commit()
    return format_note(note)
