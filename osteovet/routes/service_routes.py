from flask import request
from flask_restx import Namespace, Resource, fields

from osteovet.models.user_model import STAFF_ROLES
from osteovet.services import clinic_service
from osteovet.utils.role_utils import action_required
from osteovet.utils.util import get_payload, role_required

service_ns = Namespace('services', description='Clinic services offered for booking')

service_model = service_ns.model('Service', {
    'title': fields.String(required=True),
    'titleFr': fields.String(),
    'description': fields.String(),
    'duration': fields.Integer(required=True, description='Duration in minutes'),
    'price': fields.Float(),
    'active': fields.Boolean()
})


@service_ns.route('')
class ServiceList(Resource):
    @service_ns.param('active', 'Only return bookable services when "true"')
    def get(self):
        """List clinic services"""
        active_only = request.args.get('active', '').lower() == 'true'
        return {'data': clinic_service.get_all_services(active_only)}, 200

    @role_required(*STAFF_ROLES)
    @service_ns.expect(service_model)
    def post(self):
        """Create a service"""
        return {'data': clinic_service.create_service(get_payload()),
                'message': 'Service created successfully'}, 201


@service_ns.route('/<int:service_id>')
class ServiceResource(Resource):
    def get(self, service_id):
        """Get a service by ID"""
        return {'data': clinic_service.get_service(service_id)}, 200

    @role_required(*STAFF_ROLES)
    @service_ns.expect(service_model)
    def put(self, service_id):
        """Update a service"""
        return {'data': clinic_service.update_service(service_id, get_payload()),
                'message': 'Service updated successfully'}, 200

    @action_required('delete_service')
    def delete(self, service_id):
        """Delete a service that has never been booked"""
        clinic_service.delete_service(service_id)
        return {'message': 'Service deleted successfully'}, 200
