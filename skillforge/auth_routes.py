import json
from datetime import datetime, timezone
from flask import Blueprint, Response, g, jsonify, request
from skillforge import store
from skillforge.auth import hash_password, issue_token, login_required, verify_password
from skillforge.errors import AuthenticationError, ValidationError
from skillforge.models import isoformat
from skillforge.schemas import (
    DeleteAccountRequest, LoginRequest, ProfileUpdateRequest, RegisterRequest, parse,
)

auth_bp = Blueprint('auth', __name__)

INVALID_CREDENTIALS = 'Invalid email or password'


@auth_bp.route('/register', methods=['POST'])
def register():
    payload = parse(RegisterRequest, request.get_json(silent=True))

    # Hash the password and insert the new user
    user = store.create_user(payload.name, payload.email, hash_password(payload.password))

    return jsonify({
        'status': 'success',
        'message': 'User registered successfully',
        'data': {'user': user.to_dict(), 'token': issue_token(user.id)},
    }), 201


@auth_bp.route('/login', methods=['POST'])
def login():
    payload = parse(LoginRequest, request.get_json(silent=True))

    # Same answer for an unknown e-mail and a wrong password
    user = store.find_user_by_email(payload.email)
    if user is None or not verify_password(payload.password, user.password_hash):
        raise AuthenticationError(INVALID_CREDENTIALS)

    return jsonify({
        'status': 'success',
        'message': 'Login successful',
        'data': {'user': user.to_dict(), 'token': issue_token(user.id)},
    }), 200


@auth_bp.route('/profile', methods=['GET'])
@login_required
def get_profile():
    return jsonify({'status': 'success', 'data': {'user': g.current_user.to_dict()}}), 200


@auth_bp.route('/profile', methods=['PATCH'])
@login_required
def update_profile():
    user = g.current_user
    payload = parse(ProfileUpdateRequest, request.get_json(silent=True))

    updates = {}
    if payload.name and payload.name != user.name:
        updates['name'] = payload.name
    if payload.email and payload.email != user.email:
        updates['email'] = payload.email

    if payload.new_password:
        if not payload.current_password:
            raise ValidationError('Current password is required to change password')
        if not verify_password(payload.current_password, user.password_hash):
            raise ValidationError('Current password is incorrect')
        updates['password_hash'] = hash_password(payload.new_password)

    if updates:
        user = store.update_user(user, **updates)

    return jsonify({
        'status': 'success',
        'message': 'Profile updated successfully',
        'data': {'user': user.to_dict()},
    }), 200


@auth_bp.route('/export', methods=['GET'])
@login_required
def export_data():
    user = g.current_user
    skills = store.list_skills(user.id, sort='createdAt')
    goals = store.list_goals(user.id, sort='createdAt', order='asc')

    export = {
        'user': {
            'name': user.name,
            'email': user.email,
            'createdAt': isoformat(user.created_at),
        },
        'skills': [
            {
                'name': skill.name,
                'category': skill.category,
                'proficiency': skill.proficiency,
                'experience': skill.experience,
                'lastUsed': isoformat(skill.last_used),
                'notes': skill.notes,
                'createdAt': isoformat(skill.created_at),
            }
            for skill in skills
        ],
        'goals': [
            {
                'title': goal.title,
                'description': goal.description,
                'targetSkill': goal.target_skill,
                'priority': goal.priority,
                'status': goal.status,
                'progress': goal.progress,
                'targetDate': isoformat(goal.target_date),
                'resources': list(goal.resources or []),
                'createdAt': isoformat(goal.created_at),
            }
            for goal in goals
        ],
        'exportedAt': datetime.now(timezone.utc).isoformat(),
    }

    return Response(
        json.dumps(export, indent=2),
        status=200,
        mimetype='application/json',
        headers={'Content-Disposition': 'attachment; filename="skillforge-data.json"'},
    )


@auth_bp.route('/reset', methods=['DELETE'])
@login_required
def reset_progress():
    store.delete_all_for_owner(g.current_user.id)
    return jsonify({'status': 'success', 'message': 'All progress has been reset successfully'}), 200


@auth_bp.route('/account', methods=['DELETE'])
@login_required
def delete_account():
    user = g.current_user
    payload = parse(DeleteAccountRequest, request.get_json(silent=True))

    if not verify_password(payload.password, user.password_hash):
        raise ValidationError('Incorrect password')

    store.delete_user(user)
    return jsonify({'status': 'success', 'message': 'Account deleted successfully'}), 200
