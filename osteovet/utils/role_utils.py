# osteovet/utils/role_utils.py
from functools import wraps

from flask_jwt_extended import jwt_required, current_user

from osteovet.errors import Forbidden
from osteovet.models.user_model import Role
from osteovet.utils.util import isoformat

# Dashboard tabs and actions available to each role
ROLE_PERMISSIONS = {
    Role.CLIENT: {
        'interface_sections': [
            'overview', 'appointments', 'animals'
        ],
        'actions': [
            'view_own_animals', 'create_animal', 'update_own_animal', 'delete_own_animal',
            'book_appointment', 'view_own_appointments', 'cancel_own_appointment'
        ]
    },
    Role.PRACTITIONER: {
        'interface_sections': [
            'overview', 'appointments', 'pending', 'todos', 'reminders', 'blog',
            'clients', 'animals'
        ],
        'actions': [
            'view_all_clients', 'validate_client', 'update_client', 'delete_client',
            'view_all_animals', 'update_any_animal', 'delete_any_animal', 'add_treatment_note',
            'view_all_appointments', 'confirm_appointment', 'refuse_appointment',
            'cancel_any_appointment', 'complete_appointment', 'manage_services',
            'manage_reminders', 'manage_todos', 'manage_blog'
        ]
    },
    Role.ADMIN: {
        'interface_sections': [
            'overview', 'appointments', 'pending', 'todos', 'reminders', 'blog',
            'clients', 'animals'
        ],
        'actions': [
            'view_all_clients', 'validate_client', 'bulk_validate_clients', 'update_client',
            'delete_client', 'view_all_animals', 'update_any_animal', 'delete_any_animal',
            'add_treatment_note', 'view_all_appointments', 'confirm_appointment',
            'refuse_appointment', 'cancel_any_appointment', 'complete_appointment',
            'delete_appointment', 'manage_services', 'delete_service', 'manage_reminders',
            'manage_todos', 'manage_blog'
        ]
    }
}

PUBLIC_PERMISSIONS = {
    'interface_sections': ['login', 'register', 'booking', 'blog'],
    'actions': ['view_services', 'view_published_posts']
}


def get_user_permissions(user):
    """Get user permissions based on their role"""
    if not user or not user.role:
        return PUBLIC_PERMISSIONS
    return ROLE_PERMISSIONS.get(user.role, ROLE_PERMISSIONS[Role.CLIENT])


def can_perform_action(user, action):
    """Check if user can perform a specific action"""
    return action in get_user_permissions(user)['actions']


def action_required(action):
    """Allow the request only when the caller's role grants ``action``."""
    def wrapper(fn):
        @wraps(fn)
        @jwt_required()
        def decorator(*args, **kwargs):
            if not can_perform_action(current_user, action):
                raise Forbidden(f'Action {action} is not allowed for role {current_user.role.value}')
            return fn(*args, **kwargs)
        return decorator
    return wrapper


def format_user(user):
    return {
        'id': user.id,
        'email': user.email,
        'firstName': user.first_name,
        'lastName': user.last_name,
        'phone': user.phone,
        'role': user.role.value,
        'validated': user.validated,
        'createdAt': isoformat(user.created_at)
    }


def get_user_data_with_permissions(user):
    """Return user data with their permissions"""
    if not user:
        return None
    data = format_user(user)
    data['permissions'] = get_user_permissions(user)
    return data
