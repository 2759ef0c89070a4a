"""
Read-only aggregates over a user's skills and goals.

Proficiency is stored on a 1-5 scale and the distribution buckets follow it:
1-2 Beginner, 3 Intermediate, 4 Advanced, 5 Expert.
"""
from collections import Counter
from datetime import timedelta
from sqlalchemy import case, func, select
from skillforge import db
from skillforge.models import COMPLETED, GOAL_PRIORITIES, IN_PROGRESS, NOT_STARTED, PAUSED, LearningGoal, Skill, utcnow

PROFICIENCY_LEVELS = ('Beginner', 'Intermediate', 'Advanced', 'Expert')
DEADLINE_WINDOW = timedelta(days=7)


def _average(value, digits=2):
    return round(float(value), digits) if value is not None else 0


def proficiency_level(proficiency):
    if proficiency <= 2:
        return 'Beginner'
    if proficiency == 3:
        return 'Intermediate'
    if proficiency == 4:
        return 'Advanced'
    return 'Expert'


def skill_stats(user_id):
    total, average = db.session.execute(
        select(func.count(Skill.id), func.avg(Skill.proficiency)).where(Skill.user_id == user_id)
    ).one()

    count = func.count(Skill.id).label('count')
    rows = db.session.execute(
        select(
            Skill.category,
            count,
            func.avg(Skill.proficiency),
            func.max(Skill.proficiency),
            func.min(Skill.proficiency),
        )
        .where(Skill.user_id == user_id)
        .group_by(Skill.category)
        .order_by(count.desc(), Skill.category)
    ).all()

    buckets = Counter()
    for proficiency, proficiency_count in db.session.execute(
        select(Skill.proficiency, func.count(Skill.id))
        .where(Skill.user_id == user_id)
        .group_by(Skill.proficiency)
    ).all():
        buckets[proficiency_level(proficiency)] += proficiency_count

    return {
        'overview': {
            'totalSkills': total,
            'averageProficiency': _average(average),
        },
        'categoryStats': [
            {
                'category': category,
                'count': category_count,
                'avgProficiency': _average(avg),
                'maxProficiency': maximum,
                'minProficiency': minimum,
            }
            for category, category_count, avg, maximum, minimum in rows
        ],
        'proficiencyDistribution': [
            {'level': name, 'count': buckets[name]}
            for name in PROFICIENCY_LEVELS
            if buckets.get(name)
        ],
    }


def _count_status(status):
    return func.coalesce(func.sum(case((LearningGoal.status == status, 1), else_=0)), 0)


def goal_stats(user_id, now=None):
    now = now or utcnow()
    owned = LearningGoal.user_id == user_id

    total, completed, in_progress, not_started, paused, average = db.session.execute(
        select(
            func.count(LearningGoal.id),
            _count_status(COMPLETED),
            _count_status(IN_PROGRESS),
            _count_status(NOT_STARTED),
            _count_status(PAUSED),
            func.avg(LearningGoal.progress),
        ).where(owned)
    ).one()

    by_priority = {
        priority: {'total': priority_total, 'completed': int(priority_completed)}
        for priority, priority_total, priority_completed in db.session.execute(
            select(LearningGoal.priority, func.count(LearningGoal.id), _count_status(COMPLETED))
            .where(owned)
            .group_by(LearningGoal.priority)
        ).all()
    }

    open_with_date = (
        owned,
        LearningGoal.status != COMPLETED,
        LearningGoal.target_date.is_not(None),
    )
    upcoming = db.session.execute(
        select(func.count(LearningGoal.id)).where(
            *open_with_date,
            LearningGoal.target_date >= now,
            LearningGoal.target_date <= now + DEADLINE_WINDOW,
        )
    ).scalar_one()
    overdue = db.session.execute(
        select(func.count(LearningGoal.id)).where(*open_with_date, LearningGoal.target_date < now)
    ).scalar_one()

    return {
        'overview': {
            'total': total,
            'completed': int(completed),
            'inProgress': int(in_progress),
            'notStarted': int(not_started),
            'paused': int(paused),
            'averageProgress': _average(average),
        },
        'byPriority': {
            priority: by_priority[priority] for priority in GOAL_PRIORITIES if priority in by_priority
        },
        'upcomingDeadlines': upcoming,
        'overdue': overdue,
    }


def insights(skills, goals, now=None):
    """Dashboard summary built from already-loaded skills and goals."""
    now = now or utcnow()
    in_progress = [goal for goal in goals if goal.status == IN_PROGRESS]
    categories = Counter(skill.category for skill in skills)
    average = sum(skill.proficiency for skill in skills) / len(skills) if skills else 0
    focus = [skill for skill in skills if skill.proficiency < 5]
    dated = sorted((goal for goal in in_progress if goal.target_date), key=lambda goal: goal.target_date)

    return {
        'insights': {
            'totalSkills': len(skills),
            'averageProficiency': round(average, 1),
            'topSkillCategory': categories.most_common(1)[0][0] if categories else None,
            'goalsCompleted': sum(1 for goal in goals if goal.status == COMPLETED),
            'goalsInProgress': len(in_progress),
            'skillsNeedingImprovement': len(focus),
            'expertSkills': sum(1 for skill in skills if skill.proficiency == 5),
            'overdueTasks': sum(1 for goal in dated if goal.target_date < now),
        },
        'recommendations': {
            'focusAreas': [skill.to_dict() for skill in focus[:3]],
            'upcomingDeadlines': [goal.to_dict() for goal in dated[:3]],
        },
    }
