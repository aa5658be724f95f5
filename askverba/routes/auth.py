"""Authentication routes: registration, login, logout and current user."""

import logging
import re
from flask import Blueprint, request, jsonify

from askverba import db, limiter
from askverba.models import User
from askverba.utils.auth import create_token, get_request_token, invalidate_session, token_required
from askverba.utils.cookies import set_auth_cookies, clear_auth_cookies

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__)

# Email validation regex
EMAIL_REGEX = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')


def _auth_response(user, status):
    """Build the login/register response and set the auth cookies."""
    token = create_token(user)
    customer = user.to_cookie_dict()
    response = jsonify({
        'success': True,
        'customer': customer,
        'token': token
    })
    set_auth_cookies(response, token, customer)
    return response, status


@auth_bp.route('/register', methods=['POST'])
@limiter.limit("5 per minute")
def register():
    """Register a new account and log it in."""
    try:
        data = request.get_json(silent=True)

        if not isinstance(data, dict) or not all(data.get(k) for k in ['name', 'email', 'password']):
            return jsonify({'error': 'Missing required fields'}), 400

        name = str(data['name']).strip()
        email = str(data['email']).strip().lower()
        password = str(data['password'])

        if not name or len(name) > 100:
            return jsonify({'error': 'Name must be 1-100 characters'}), 400

        if not EMAIL_REGEX.match(email) or len(email) > 254:
            return jsonify({'error': 'Invalid email format'}), 400

        if len(password) < 6:
            return jsonify({'error': 'Password must be at least 6 characters'}), 400

        if len(password) > 128:
            return jsonify({'error': 'Password must be less than 128 characters'}), 400

        if User.query.filter_by(email=email).first():
            return jsonify({'error': 'Email already exists'}), 409

        user = User(name=name, email=email)
        user.set_password(password)

        db.session.add(user)
        db.session.commit()

        logger.info(f"Registered user {user.id}")
        return _auth_response(user, 201)
    except Exception as e:
        db.session.rollback()
        logger.error(f"Registration error: {e}")
        return jsonify({'error': 'Registration failed'}), 500


@auth_bp.route('/login', methods=['POST'])
@limiter.limit("10 per minute")
def login():
    """Authenticate and set the auth cookies."""
    try:
        data = request.get_json(silent=True)

        if not isinstance(data, dict) or not data.get('email') or not data.get('password'):
            return jsonify({'error': 'Missing email or password'}), 400

        user = User.query.filter_by(email=str(data['email']).strip().lower()).first()

        if not user or not user.check_password(str(data['password'])):
            return jsonify({'error': 'Invalid email or password'}), 401

        if not user.is_active:
            return jsonify({'error': 'Account is disabled'}), 403

        return _auth_response(user, 200)
    except Exception as e:
        logger.error(f"Login error: {e}")
        return jsonify({'error': 'Login failed'}), 500


@auth_bp.route('/logout', methods=['POST'])
def logout():
    """Log out. Always reports success so the client can drop its auth state."""
    response = jsonify({'success': True, 'message': 'Logged out'})
    try:
        invalidate_session(get_request_token())
    except Exception as e:
        logger.error(f"Logout error (cookies cleared anyway): {e}")
    clear_auth_cookies(response)
    return response, 200


@auth_bp.route('/me', methods=['GET'])
@token_required
def me(current_user_id):
    """Current user's account."""
    user = db.session.get(User, current_user_id)
    if not user or not user.is_active:
        return jsonify({'error': 'Unauthorized'}), 401
    return jsonify({'customer': user.to_dict()}), 200
