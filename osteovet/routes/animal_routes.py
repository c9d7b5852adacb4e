import logging

from flask_restx import Namespace, Resource, fields
from flask_jwt_extended import jwt_required, current_user

from osteovet.models.user_model import STAFF_ROLES
from osteovet.services import animal_service
from osteovet.utils.util import get_payload, role_required

logger = logging.getLogger(__name__)

animal_ns = Namespace('animals', description='Animal operations', path='/animals')

animal_model = animal_ns.model('Animal', {
    'name': fields.String(required=True),
    'breed': fields.String(required=True),
    'age': fields.Integer(required=True),
    'weight': fields.Float(),
    'gender': fields.String(required=True, enum=['male', 'female']),
    'notes': fields.String()
})

note_model = animal_ns.model('TreatmentNote', {
    'content': fields.String(required=True)
})


@animal_ns.route('')
class AnimalList(Resource):
    @jwt_required()
    def get(self):
        """List animals (own animals for clients, all for staff)"""
        return {'data': animal_service.get_all_animals(current_user)}, 200

    @jwt_required()
    @animal_ns.expect(animal_model)
    def post(self):
        """Register an animal owned by the current user"""
        animal = animal_service.create_animal(get_payload(), current_user)
        return {'data': animal_service.format_animal(animal, include_owner=True),
                'message': 'Animal created successfully'}, 201


@animal_ns.route('/<int:animal_id>')
class AnimalResource(Resource):
    @jwt_required()
    def get(self, animal_id):
        """Get an animal by ID"""
        return {'data': animal_service.get_animal(animal_id, current_user)}, 200

    @jwt_required()
    @animal_ns.expect(animal_model)
    def put(self, animal_id):
        """Update an animal"""
        animal = animal_service.update_animal(animal_id, get_payload(), current_user)
        return {'data': animal, 'message': 'Animal updated successfully'}, 200

    @jwt_required()
    def delete(self, animal_id):
        """Delete an animal without appointments or treatment notes"""
        animal_service.delete_animal(animal_id, current_user)
        return {'message': 'Animal deleted successfully'}, 200


@animal_ns.route('/<int:animal_id>/notes')
class TreatmentNoteList(Resource):
    @jwt_required()
    def get(self, animal_id):
        """List treatment notes for an animal"""
        return {'data': animal_service.get_notes(animal_id, current_user)}, 200

    @role_required(*STAFF_ROLES)
    @animal_ns.expect(note_model)
    def post(self, animal_id):
        """Add a treatment note"""
        note = animal_service.add_note(animal_id, get_payload(), current_user)
        return {'data': note, 'message': 'Treatment note added'}, 201
