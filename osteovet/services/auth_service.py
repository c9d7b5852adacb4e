# Registration, login, token refresh and the client validation gate
import logging
import re

from flask_jwt_extended import create_access_token, create_refresh_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError
from sqlalchemy.exc import IntegrityError

from osteovet import db, bcrypt
from osteovet.errors import (Conflict, InvalidCredentials, InvalidRefreshToken, NotFound,
                             PendingValidation, ValidationError)
from osteovet.models.user_model import Role, User
from osteovet.services.audit_service import record_audit
from osteovet.utils.role_utils import format_user, get_user_data_with_permissions

logger = logging.getLogger(__name__)

EMAIL_REGEX = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')
MIN_PASSWORD_LENGTH = 6
MAX_NAME_LENGTH = 50


def normalize_email(email):
    return email.strip().lower()


def validate_email(email):
    if not isinstance(email, str) or not EMAIL_REGEX.match(email.strip()):
        raise ValidationError('Please provide a valid email address')
    return normalize_email(email)


def validate_name(value, field):
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f'{field} is required')
    value = value.strip()
    if len(value) > MAX_NAME_LENGTH:
        raise ValidationError(f'{field} too long')
    return value


def hash_password(password):
    return bcrypt.generate_password_hash(password).decode('utf-8')


def register(data):
    """Create a CLIENT account awaiting administrator validation. No tokens are issued."""
    if not all(data.get(k) for k in ('firstName', 'lastName', 'email', 'password')):
        raise ValidationError('First name, last name, email and password are required')

    first_name = validate_name(data['firstName'], 'First name')
    last_name = validate_name(data['lastName'], 'Last name')
    email = validate_email(data['email'])
    password = data['password']
    if not isinstance(password, str) or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f'Password must be at least {MIN_PASSWORD_LENGTH} characters long')
    phone = data.get('phone')
    if isinstance(phone, str):
        phone = phone.strip() or None
    else:
        phone = None

    if User.query.filter_by(email=email).first():
        raise Conflict('An account with this email already exists')

    user = User(
        email=email,
        password=hash_password(password),
        first_name=first_name,
        last_name=last_name,
        phone=phone,
        role=Role.CLIENT,
        validated=False
    )
    try:
        db.session.add(user)
        db.session.flush()
        record_audit(user.id, 'USER_REGISTERED', {
            'email': user.email,
            'firstName': user.first_name,
            'lastName': user.last_name,
            'role': user.role.value,
            'validated': user.validated
        })
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise Conflict('An account with this email already exists')

    logger.info(f"New client registration: {user.email} ({user.full_name}) - pending validation")
    return {
        'message': 'Registration successful! Your account is pending validation by an administrator.',
        'user': format_user(user)
    }


def generate_tokens(user):
    return {
        'token': create_access_token(identity=user),
        'refreshToken': create_refresh_token(identity=user)
    }


def check_validation_gate(user, message=None):
    if user.role == Role.CLIENT and not user.validated:
        raise PendingValidation(message)


def login(email, password):
    if not email or not password:
        raise ValidationError('Email and password are required')
    if not isinstance(email, str) or not isinstance(password, str):
        raise InvalidCredentials()

    user = User.query.filter_by(email=normalize_email(email)).first()
    if not user or not bcrypt.check_password_hash(user.password, password):
        logger.warning(f"Failed login attempt for {email}")
        raise InvalidCredentials()

    check_validation_gate(user)

    tokens = generate_tokens(user)
    record_audit(user.id, 'USER_LOGIN', {'email': user.email, 'role': user.role.value})
    db.session.commit()

    return {'user': get_user_data_with_permissions(user), **tokens}


def refresh(refresh_token):
    """Exchange a refresh token for a new token pair.

    A bad, expired or non-refresh token raises InvalidRefreshToken (401).
    A client whose validation was revoked raises PendingValidation (403).
    """
    if not refresh_token or not isinstance(refresh_token, str):
        raise ValidationError('Refresh token required')
    try:
        decoded = decode_token(refresh_token)
        user_id = int(decoded['sub'])
    except (PyJWTError, JWTExtendedException, KeyError, TypeError, ValueError) as e:
        logger.warning(f"Refresh token rejected: {e}")
        raise InvalidRefreshToken()

    if decoded.get('type') != 'refresh':
        raise InvalidRefreshToken()

    user = db.session.get(User, user_id)
    if not user:
        raise InvalidRefreshToken()

    check_validation_gate(user, 'Account validation has been revoked. Please contact an administrator.')

    return {'user': get_user_data_with_permissions(user), **generate_tokens(user)}


def validate_client(client_id, actor, action='CLIENT_VALIDATED'):
    client = db.session.get(User, client_id)
    if not client:
        raise NotFound('Client not found')
    if client.role != Role.CLIENT:
        raise ValidationError('Only client accounts can be validated')
    if client.validated:
        raise Conflict('Client is already validated')

    client.validated = True
    record_audit(actor.id, action, {
        'validatedClientId': client.id,
        'validatedClientEmail': client.email,
        'validatedClientName': client.full_name
    })
    db.session.commit()
    logger.info(f"Client validated by {actor.id}: {client.email}")
    return format_user(client)


def get_pending_clients():
    clients = User.query.filter_by(role=Role.CLIENT, validated=False) \
        .order_by(User.created_at.desc(), User.id.desc()).all()
    return [format_user(c) for c in clients]
