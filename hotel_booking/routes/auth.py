import logging

from flask import Blueprint, request
from werkzeug.security import generate_password_hash, check_password_hash
from flask_jwt_extended import (
    create_access_token,
    create_refresh_token,
    get_jwt_identity,
    jwt_required,
    set_access_cookies,
    set_refresh_cookies,
)
from sqlalchemy.exc import IntegrityError

from hotel_booking.models.user import db, User
from hotel_booking.utils.permissions import ROLES
from hotel_booking.utils.responses import api_response, api_error
from hotel_booking.utils.validation import is_email, is_optional_string, is_string

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__)


def token_claims(user):
    return {
        'name': user.name,
        'email': user.email,
        'role': user.role,
        'phone': user.phone
    }


@auth_bp.route('/signup', methods=['POST'])
def signup():
    data = request.get_json(silent=True)

    if not isinstance(data, dict):
        return api_error('INVALID_REQUEST', 400)

    if not is_string(data.get('name')) or not is_email(data.get('email')) or not is_string(data.get('password')):
        return api_error('INVALID_REQUEST', 400)

    role = data.get('role', 'customer')
    if role not in ROLES or not is_optional_string(data.get('phone')):
        return api_error('INVALID_REQUEST', 400)

    if User.query.filter_by(email=data.get('email')).first():
        return api_error('EMAIL_ALREADY_EXISTS', 400)

    new_user = User(
        name=data.get('name'),
        email=data.get('email'),
        password_hash=generate_password_hash(data.get('password')),
        role=role,
        phone=data.get('phone')
    )

    db.session.add(new_user)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        return api_error('EMAIL_ALREADY_EXISTS', 400)

    logger.info('User %s registered as %s', new_user.id, new_user.role)
    return api_response(new_user.to_dict(), 201)


@auth_bp.route('/login', methods=['POST'])
def login():
    data = request.get_json(silent=True)

    if not isinstance(data, dict) or not is_string(data.get('email')) or not is_string(data.get('password')):
        return api_error('INVALID_REQUEST', 400)

    user = User.query.filter_by(email=data.get('email')).first()

    if not user or not check_password_hash(user.password_hash, data.get('password')):
        return api_error('INVALID_CREDENTIALS', 401)

    claims = token_claims(user)
    access_token = create_access_token(identity=user.id, additional_claims=claims)
    refresh_token = create_refresh_token(identity=user.id, additional_claims=claims)

    user.refresh_token = refresh_token
    db.session.commit()

    response, status = api_response({
        'token': access_token,
        'user': {
            'id': user.id,
            'name': user.name,
            'email': user.email,
            'role': user.role
        }
    }, 200)
    set_access_cookies(response, access_token)
    set_refresh_cookies(response, refresh_token)
    return response, status


@auth_bp.route('/me', methods=['GET'])
@jwt_required()
def get_current_user():
    user = db.session.get(User, get_jwt_identity())

    if not user:
        return api_error('UNAUTHORIZED', 401)

    return api_response(user.to_dict(), 200)
