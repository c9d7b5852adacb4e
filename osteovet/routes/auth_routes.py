import logging

from flask_restx import Namespace, Resource, fields
from flask_jwt_extended import jwt_required, current_user

from osteovet.models.user_model import Role, STAFF_ROLES
from osteovet.services import auth_service
from osteovet.utils.role_utils import get_user_data_with_permissions
from osteovet.utils.util import get_payload, role_required

logger = logging.getLogger(__name__)

auth_ns = Namespace('auth', description='Authentication and client validation')

register_model = auth_ns.model('Register', {
    'firstName': fields.String(required=True, description='First name'),
    'lastName': fields.String(required=True, description='Last name'),
    'email': fields.String(required=True, description='Email address'),
    'phone': fields.String(description='Phone number'),
    'password': fields.String(required=True, description='Password (6 characters minimum)')
})

login_model = auth_ns.model('Login', {
    'email': fields.String(required=True, description='Email address'),
    'password': fields.String(required=True, description='Password')
})

refresh_model = auth_ns.model('Refresh', {
    'refreshToken': fields.String(required=True, description='Refresh token issued at login')
})


@auth_ns.route('/roles')
class Roles(Resource):
    def get(self):
        """List the available roles"""
        return {'data': [role.value for role in Role]}, 200


@auth_ns.route('/register')
class Register(Resource):
    @auth_ns.expect(register_model)
    def post(self):
        """Register a new client account (pending administrator validation)"""
        result = auth_service.register(get_payload())
        return {'data': result, 'message': result['message']}, 201


@auth_ns.route('/login')
class Login(Resource):
    @auth_ns.expect(login_model)
    def post(self):
        """Log in and receive an access token and a refresh token"""
        data = get_payload()
        result = auth_service.login(data.get('email'), data.get('password'))
        logger.info(f"Login successful: {result['user']['email']}")
        return {'data': result, 'message': 'Login successful'}, 200


@auth_ns.route('/refresh')
class Refresh(Resource):
    @auth_ns.expect(refresh_model)
    def post(self):
        """Exchange a refresh token for a new token pair"""
        result = auth_service.refresh(get_payload().get('refreshToken'))
        return {'data': result, 'message': 'Token refreshed successfully'}, 200


@auth_ns.route('/logout')
class Logout(Resource):
    @jwt_required()
    def post(self):
        """Log out (tokens are discarded client-side)"""
        logger.info(f"User logged out: {current_user.id}")
        return {'message': 'Logout successful'}, 200


@auth_ns.route('/verify')
class VerifyToken(Resource):
    @jwt_required()
    def get(self):
        """Check the access token and return the current user"""
        return {'data': get_user_data_with_permissions(current_user), 'message': 'Token is valid'}, 200


@auth_ns.route('/pending-clients')
class PendingClients(Resource):
    @role_required(*STAFF_ROLES)
    def get(self):
        """List client registrations awaiting validation"""
        clients = auth_service.get_pending_clients()
        return {
            'data': clients,
            'total': len(clients),
            'message': f'Found {len(clients)} pending client registrations'
        }, 200


@auth_ns.route('/validate-client/<int:client_id>')
class ValidateClient(Resource):
    @role_required(*STAFF_ROLES)
    def put(self, client_id):
        """Validate a client account"""
        client = auth_service.validate_client(client_id, current_user)
        return {
            'data': client,
            'message': f"Client {client['firstName']} {client['lastName']} has been validated successfully"
        }, 200
