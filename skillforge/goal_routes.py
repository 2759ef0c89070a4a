from flask import Blueprint, g, jsonify, request
from skillforge import stats, store
from skillforge.auth import login_required
from skillforge.schemas import GoalCreateRequest, GoalQuery, GoalUpdateRequest, ProgressRequest, parse

goal_bp = Blueprint('goals', __name__)


# List my learning goals, optionally filtered and sorted
@goal_bp.route('', methods=['GET'])
@login_required
def get_goals():
    query = parse(GoalQuery, request.args.to_dict())
    goals = store.list_goals(
        g.current_user.id,
        status=query.status,
        priority=query.priority,
        search=query.search,
        sort=query.sort,
        order=query.order,
    )
    return jsonify({
        'status': 'success',
        'results': len(goals),
        'data': {'goals': [goal.to_dict() for goal in goals]},
    }), 200


@goal_bp.route('/stats', methods=['GET'])
@login_required
def get_goals_stats():
    return jsonify({'status': 'success', 'data': stats.goal_stats(g.current_user.id)}), 200


@goal_bp.route('/<int:goal_id>', methods=['GET'])
@login_required
def get_goal(goal_id):
    goal = store.get_goal(g.current_user.id, goal_id)
    return jsonify({'status': 'success', 'data': {'goal': goal.to_dict()}}), 200


@goal_bp.route('', methods=['POST'])
@login_required
def create_goal():
    payload = parse(GoalCreateRequest, request.get_json(silent=True))
    goal = store.create_goal(g.current_user.id, payload.model_dump(exclude_unset=True))
    return jsonify({
        'status': 'success',
        'message': 'Learning goal created successfully',
        'data': {'goal': goal.to_dict()},
    }), 201


@goal_bp.route('/<int:goal_id>', methods=['PUT', 'PATCH'])
@login_required
def update_goal(goal_id):
    payload = parse(GoalUpdateRequest, request.get_json(silent=True))
    goal = store.update_goal(g.current_user.id, goal_id, payload.model_dump(exclude_unset=True))
    return jsonify({
        'status': 'success',
        'message': 'Learning goal updated successfully',
        'data': {'goal': goal.to_dict()},
    }), 200


@goal_bp.route('/<int:goal_id>/progress', methods=['PATCH'])
@login_required
def update_goal_progress(goal_id):
    payload = parse(ProgressRequest, request.get_json(silent=True))
    goal = store.set_goal_progress(g.current_user.id, goal_id, payload.progress)
    return jsonify({
        'status': 'success',
        'message': 'Goal progress updated successfully',
        'data': {'goal': goal.to_dict()},
    }), 200


@goal_bp.route('/<int:goal_id>', methods=['DELETE'])
@login_required
def delete_goal(goal_id):
    store.delete_goal(g.current_user.id, goal_id)
    return jsonify({'status': 'success', 'message': 'Learning goal deleted successfully'}), 200
