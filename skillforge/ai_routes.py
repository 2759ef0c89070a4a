from flask import Blueprint, g, jsonify, request
from skillforge import ai_service, stats, store
from skillforge.auth import login_required
from skillforge.models import COMPLETED
from skillforge.schemas import SkillGapRequest, parse

ai_bp = Blueprint('ai', __name__)


# Dashboard numbers, no model call involved
@ai_bp.route('/insights', methods=['GET'])
@login_required
def get_insights():
    user_id = g.current_user.id
    skills = store.list_skills(user_id)
    goals = store.list_goals(user_id)
    return jsonify({'status': 'success', 'data': stats.insights(skills, goals)}), 200


@ai_bp.route('/learning-path', methods=['GET'])
@login_required
def generate_learning_path():
    user_id = g.current_user.id
    skills = store.list_skills(user_id)
    goals = [goal for goal in store.list_goals(user_id) if goal.status != COMPLETED]

    result = ai_service.get_gateway().learning_path(skills, goals)
    return jsonify({
        'status': 'success',
        'data': {
            'recommendations': result.text,
            'source': result.source,
            'basedOn': {'skillsCount': len(skills), 'goalsCount': len(goals)},
        },
    }), 200


@ai_bp.route('/skill-suggestions', methods=['GET'])
@login_required
def get_skill_suggestions():
    skill_names = [skill.name for skill in store.list_skills(g.current_user.id)]

    result = ai_service.get_gateway().skill_suggestions(skill_names)
    return jsonify({
        'status': 'success',
        'data': {'suggestions': result.text, 'source': result.source, 'basedOnSkills': skill_names},
    }), 200


@ai_bp.route('/skill-gaps', methods=['POST'])
@login_required
def analyze_skill_gaps():
    payload = parse(SkillGapRequest, request.get_json(silent=True))
    skills = store.list_skills(g.current_user.id)

    result = ai_service.get_gateway().skill_gap_analysis(skills, payload.target_role)
    return jsonify({
        'status': 'success',
        'data': {
            'analysis': result.text,
            'source': result.source,
            'targetRole': payload.target_role,
            'currentSkillsCount': len(skills),
        },
    }), 200


@ai_bp.route('/study-plan/<int:goal_id>', methods=['GET'])
@login_required
def generate_study_plan(goal_id):
    user_id = g.current_user.id
    goal = store.get_goal(user_id, goal_id)
    skills = store.list_skills(user_id)

    result = ai_service.get_gateway().study_plan(goal, skills)
    return jsonify({
        'status': 'success',
        'data': {
            'studyPlan': result.text,
            'source': result.source,
            'goal': {
                'id': goal.id,
                'title': goal.title,
                'targetSkill': goal.target_skill,
                'priority': goal.priority,
                'status': goal.status,
            },
        },
    }), 200
