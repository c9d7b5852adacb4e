import logging

from flask import jsonify

from osteovet import db
from osteovet.models.user_model import User

logger = logging.getLogger(__name__)


def setup_auth_middleware(jwt):
    """Wire bearer-token resolution and token error envelopes into the JWT manager."""

    @jwt.user_identity_loader
    def user_identity(user):
        if isinstance(user, User):
            return str(user.id)
        return str(user)

    @jwt.user_lookup_loader
    def load_user(_jwt_header, jwt_data):
        try:
            user_id = int(jwt_data['sub'])
        except (KeyError, TypeError, ValueError):
            return None
        return db.session.get(User, user_id)

    @jwt.user_lookup_error_loader
    def user_not_found(_jwt_header, jwt_data):
        logger.warning(f"Token subject {jwt_data.get('sub')} does not resolve to a user")
        return jsonify({'error': 'User not found'}), 401

    @jwt.unauthorized_loader
    def missing_token(reason):
        return jsonify({'error': f'Missing token: {reason}'}), 401

    @jwt.invalid_token_loader
    def invalid_token(reason):
        return jsonify({'error': f'Invalid token: {reason}'}), 401

    @jwt.expired_token_loader
    def expired_token(_jwt_header, _jwt_payload):
        return jsonify({'error': 'Token has expired'}), 401

    @jwt.revoked_token_loader
    def revoked_token(_jwt_header, _jwt_payload):
        return jsonify({'error': 'Token has been revoked'}), 401
