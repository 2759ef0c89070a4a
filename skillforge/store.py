"""
Ownership-scoped persistence for users, skills and learning goals.

Every lookup of a skill or goal filters on the owning user, so a foreign id
behaves exactly like a missing one and raises NotFoundError.
"""
import logging
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from skillforge import db
from skillforge.errors import DuplicateError, NotFoundError, ValidationError
from skillforge.models import LearningGoal, Skill, User
from skillforge.progress import reconcile

logger = logging.getLogger(__name__)

# Sortable fields, keyed by the names clients send
SKILL_SORT_FIELDS = {
    'name': Skill.name,
    'category': Skill.category,
    'proficiency': Skill.proficiency,
    'experience': Skill.experience,
    'lastUsed': Skill.last_used,
    'createdAt': Skill.created_at,
    'updatedAt': Skill.updated_at,
}

GOAL_SORT_FIELDS = {
    'title': LearningGoal.title,
    'targetSkill': LearningGoal.target_skill,
    'priority': LearningGoal.priority,
    'status': LearningGoal.status,
    'targetDate': LearningGoal.target_date,
    'progress': LearningGoal.progress,
    'createdAt': LearningGoal.created_at,
    'updatedAt': LearningGoal.updated_at,
}

# Columns a client may explicitly clear with null
NULLABLE_FIELDS = {'description', 'notes', 'target_date'}


def _commit(duplicate_message):
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise DuplicateError(duplicate_message)


def _apply(instance, fields):
    for key, value in fields.items():
        if value is None and key not in NULLABLE_FIELDS:
            continue
        setattr(instance, key, value)


def _order_by(columns, sort, order, tiebreak):
    # accept snake_case as well as camelCase
    column = columns.get(sort)
    if column is None:
        column = next((col for col in columns.values() if col.key == sort), None)
    if column is None:
        raise ValidationError(errors=[{
            'field': 'sort',
            'message': f'Cannot sort by {sort}; expected one of: {", ".join(columns)}',
        }])
    if order == 'desc':
        return column.desc(), tiebreak.desc()
    return column.asc(), tiebreak.asc()


def _contains(columns, search):
    return or_(*[column.icontains(search, autoescape=True) for column in columns])


# ----- users -----

def create_user(name, email, password_hash):
    if find_user_by_email(email):
        raise DuplicateError('User already exists with this email')
    user = User(name=name, email=email, password_hash=password_hash)
    db.session.add(user)
    _commit('User already exists with this email')
    logger.info('Registered user %s', user.id)
    return user


def get_user(user_id):
    user = db.session.get(User, user_id)
    if user is None:
        raise NotFoundError('User not found')
    return user


def find_user_by_email(email):
    return User.query.filter_by(email=email.strip().lower()).first()


def update_user(user, **fields):
    email = fields.get('email')
    if email and email != user.email:
        clash = User.query.filter(User.email == email, User.id != user.id).first()
        if clash:
            raise DuplicateError('Email is already in use')
    _apply(user, fields)
    _commit('Email is already in use')
    return user


def delete_user(user):
    """Remove the user and everything they own in one transaction."""
    user_id = user.id
    Skill.query.filter_by(user_id=user_id).delete(synchronize_session=False)
    LearningGoal.query.filter_by(user_id=user_id).delete(synchronize_session=False)
    db.session.delete(user)
    db.session.commit()
    logger.info('Deleted account %s', user_id)


def delete_all_for_owner(user_id):
    """Drop every skill and goal of a user; returns (skills, goals) removed."""
    skills = Skill.query.filter_by(user_id=user_id).delete(synchronize_session=False)
    goals = LearningGoal.query.filter_by(user_id=user_id).delete(synchronize_session=False)
    db.session.commit()
    logger.info('Reset progress for user %s (%s skills, %s goals)', user_id, skills, goals)
    return skills, goals


# ----- skills -----

def create_skill(user_id, fields):
    if Skill.query.filter_by(user_id=user_id, name=fields['name']).first():
        raise DuplicateError('Skill already exists')
    skill = Skill(user_id=user_id)
    _apply(skill, fields)
    db.session.add(skill)
    _commit('Skill already exists')
    return skill


def get_skill(user_id, skill_id):
    skill = Skill.query.filter_by(id=skill_id, user_id=user_id).first()
    if skill is None:
        raise NotFoundError('Skill not found')
    return skill


def list_skills(user_id, category=None, search=None, sort='name', order='asc'):
    query = Skill.query.filter_by(user_id=user_id)
    if category:
        query = query.filter(Skill.category == category)
    if search:
        query = query.filter(_contains([Skill.name, Skill.notes], search))
    return query.order_by(*_order_by(SKILL_SORT_FIELDS, sort, order, Skill.id)).all()


def update_skill(user_id, skill_id, fields):
    skill = get_skill(user_id, skill_id)
    name = fields.get('name')
    if name and name != skill.name:
        clash = Skill.query.filter(
            Skill.user_id == user_id, Skill.name == name, Skill.id != skill.id
        ).first()
        if clash:
            raise DuplicateError('Skill already exists')
    _apply(skill, fields)
    _commit('Skill already exists')
    return skill


def delete_skill(user_id, skill_id):
    skill = get_skill(user_id, skill_id)
    db.session.delete(skill)
    db.session.commit()


# ----- goals -----

def create_goal(user_id, fields):
    goal = LearningGoal(user_id=user_id)
    fields = dict(fields)
    status = fields.pop('status', None) or 'not-started'
    progress = fields.pop('progress', None)
    if progress is None:
        # no progress sent: keep the requested status unless it is completed
        status, progress = reconcile(status, 0, previous_progress=0)
    else:
        status, progress = reconcile(status, progress)
    fields.setdefault('resources', [])
    _apply(goal, fields)
    goal.status, goal.progress = status, progress
    db.session.add(goal)
    db.session.commit()
    return goal


def get_goal(user_id, goal_id):
    goal = LearningGoal.query.filter_by(id=goal_id, user_id=user_id).first()
    if goal is None:
        raise NotFoundError('Learning goal not found')
    return goal


def list_goals(user_id, status=None, priority=None, search=None, sort='createdAt', order='desc'):
    query = LearningGoal.query.filter_by(user_id=user_id)
    if status:
        query = query.filter(LearningGoal.status == status)
    if priority:
        query = query.filter(LearningGoal.priority == priority)
    if search:
        query = query.filter(_contains(
            [LearningGoal.title, LearningGoal.description, LearningGoal.target_skill], search
        ))
    return query.order_by(*_order_by(GOAL_SORT_FIELDS, sort, order, LearningGoal.id)).all()


def update_goal(user_id, goal_id, fields):
    goal = get_goal(user_id, goal_id)
    fields = dict(fields)
    status = fields.pop('status', None) or goal.status
    progress = fields.pop('progress', None)
    if progress is None:
        progress = goal.progress
    _apply(goal, fields)
    goal.status, goal.progress = reconcile(status, progress, goal.status, goal.progress)
    db.session.commit()
    return goal


def set_goal_progress(user_id, goal_id, progress):
    return update_goal(user_id, goal_id, {'progress': progress})


def delete_goal(user_id, goal_id):
    goal = get_goal(user_id, goal_id)
    db.session.delete(goal)
    db.session.commit()
