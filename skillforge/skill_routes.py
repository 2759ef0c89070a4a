from flask import Blueprint, g, jsonify, request
from skillforge import stats, store
from skillforge.auth import login_required
from skillforge.schemas import SkillPatchRequest, SkillQuery, SkillRequest, parse

skill_bp = Blueprint('skills', __name__)


# List my skills, optionally filtered and sorted
@skill_bp.route('', methods=['GET'])
@login_required
def get_skills():
    query = parse(SkillQuery, request.args.to_dict())
    skills = store.list_skills(
        g.current_user.id,
        category=query.category,
        search=query.search,
        sort=query.sort,
        order=query.order,
    )
    return jsonify({
        'status': 'success',
        'results': len(skills),
        'data': {'skills': [skill.to_dict() for skill in skills]},
    }), 200


@skill_bp.route('/stats', methods=['GET'])
@login_required
def get_skills_stats():
    return jsonify({'status': 'success', 'data': stats.skill_stats(g.current_user.id)}), 200


@skill_bp.route('/<int:skill_id>', methods=['GET'])
@login_required
def get_skill(skill_id):
    skill = store.get_skill(g.current_user.id, skill_id)
    return jsonify({'status': 'success', 'data': {'skill': skill.to_dict()}}), 200


@skill_bp.route('', methods=['POST'])
@login_required
def create_skill():
    payload = parse(SkillRequest, request.get_json(silent=True))
    skill = store.create_skill(g.current_user.id, payload.model_dump())
    return jsonify({
        'status': 'success',
        'message': 'Skill created successfully',
        'data': {'skill': skill.to_dict()},
    }), 201


# PUT replaces every field, PATCH only the ones sent
@skill_bp.route('/<int:skill_id>', methods=['PUT', 'PATCH'])
@login_required
def update_skill(skill_id):
    schema = SkillRequest if request.method == 'PUT' else SkillPatchRequest
    payload = parse(schema, request.get_json(silent=True))
    fields = payload.model_dump() if request.method == 'PUT' else payload.model_dump(exclude_unset=True)
    skill = store.update_skill(g.current_user.id, skill_id, fields)
    return jsonify({
        'status': 'success',
        'message': 'Skill updated successfully',
        'data': {'skill': skill.to_dict()},
    }), 200


@skill_bp.route('/<int:skill_id>', methods=['DELETE'])
@login_required
def delete_skill(skill_id):
    store.delete_skill(g.current_user.id, skill_id)
    return jsonify({'status': 'success', 'message': 'Skill deleted successfully'}), 200
