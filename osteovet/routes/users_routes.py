# osteovet/routes/users_routes.py
from flask import request
from flask_restx import Namespace, Resource, fields
from flask_jwt_extended import jwt_required, current_user

from osteovet.models.user_model import STAFF_ROLES
from osteovet.services import auth_service, user_service
from osteovet.utils.role_utils import action_required
from osteovet.utils.util import get_payload, role_required

users_ns = Namespace('users', description='Client account management')

client_update_model = users_ns.model('ClientUpdate', {
    'firstName': fields.String(description='First name'),
    'lastName': fields.String(description='Last name'),
    'email': fields.String(description='Email address'),
    'phone': fields.String(description='Phone number')
})

bulk_validate_model = users_ns.model('BulkValidate', {
    'clientIds': fields.List(fields.Integer, required=True, description='IDs of the clients to validate')
})


@users_ns.route('/me')
class CurrentUser(Resource):
    @jwt_required()
    def get(self):
        """Get the current user's profile"""
        return {'data': user_service.get_profile(current_user)}, 200


@users_ns.route('/clients')
class ClientList(Resource):
    @role_required(*STAFF_ROLES)
    def get(self):
        """Get all clients with their animals and recent appointments"""
        return user_service.list_clients(), 200


@users_ns.route('/search')
class ClientSearch(Resource):
    @role_required(*STAFF_ROLES)
    @users_ns.param('q', 'Name, email or phone fragment')
    def get(self):
        """Search clients"""
        return user_service.search_clients(request.args.get('q')), 200


@users_ns.route('/bulk/validate')
class BulkValidate(Resource):
    @action_required('bulk_validate_clients')
    @users_ns.expect(bulk_validate_model)
    def put(self):
        """Validate several pending clients at once"""
        count = user_service.bulk_validate(get_payload().get('clientIds'), current_user)
        return {
            'data': {'validatedCount': count},
            'message': f'{count} clients validated successfully'
        }, 200


@users_ns.route('/<int:user_id>')
class ClientResource(Resource):
    @role_required(*STAFF_ROLES)
    def get(self, user_id):
        """Get client details"""
        return {'data': user_service.get_client_details(user_id)}, 200

    @role_required(*STAFF_ROLES)
    @users_ns.expect(client_update_model)
    def put(self, user_id):
        """Update a client profile"""
        client = user_service.update_client(user_id, get_payload())
        return {'data': client, 'message': 'Client profile updated successfully'}, 200

    @role_required(*STAFF_ROLES)
    def delete(self, user_id):
        """Delete a client account and all related data"""
        name = user_service.delete_client(user_id, current_user)
        return {'message': f'Client {name} and all related data have been deleted successfully'}, 200


@users_ns.route('/<int:user_id>/validate')
class ValidateUser(Resource):
    @role_required(*STAFF_ROLES)
    def put(self, user_id):
        """Validate a client account"""
        client = auth_service.validate_client(user_id, current_user, action='VALIDATE_CLIENT')
        return {
            'data': client,
            'message': f"Client {client['firstName']} {client['lastName']} has been validated successfully"
        }, 200
