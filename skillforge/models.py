from datetime import datetime, timezone
from sqlalchemy.orm import validates
from skillforge import db
from skillforge.errors import ValidationError

SKILL_CATEGORIES = ('frontend', 'backend', 'database', 'devops', 'mobile', 'other')
GOAL_PRIORITIES = ('low', 'medium', 'high')

NOT_STARTED = 'not-started'
IN_PROGRESS = 'in-progress'
COMPLETED = 'completed'
PAUSED = 'paused'
GOAL_STATUSES = (NOT_STARTED, IN_PROGRESS, COMPLETED, PAUSED)


def utcnow():
    """Naive UTC timestamp; SQLite drops tzinfo so everything is stored naive."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def isoformat(value):
    return value.isoformat() if value is not None else None


def _check_length(field, value, maximum, minimum=0):
    if value is None:
        return value
    if not minimum <= len(value) <= maximum:
        raise ValidationError(errors=[{
            'field': field,
            'message': f'{field} must be between {minimum} and {maximum} characters',
        }])
    return value


def _check_choice(field, value, choices):
    if value not in choices:
        raise ValidationError(errors=[{
            'field': field,
            'message': f'{field} must be one of: {", ".join(choices)}',
        }])
    return value


def _check_range(field, value, minimum, maximum=None):
    if value is None or value < minimum or (maximum is not None and value > maximum):
        bounds = f'between {minimum} and {maximum}' if maximum is not None else f'at least {minimum}'
        raise ValidationError(errors=[{'field': field, 'message': f'{field} must be {bounds}'}])
    return value


class User(db.Model):
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(50), nullable=False)
    email = db.Column(db.String(255), nullable=False, unique=True, index=True)
    password_hash = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    skills = db.relationship('Skill', backref='owner', lazy='dynamic', passive_deletes=True)
    goals = db.relationship('LearningGoal', backref='owner', lazy='dynamic', passive_deletes=True)

    @validates('email')
    def normalize_email(self, key, value):
        return value.strip().lower()

    @validates('name')
    def validate_name(self, key, value):
        return _check_length('name', value.strip(), 50, minimum=2)

    def to_dict(self):
        # password_hash never leaves the server
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'createdAt': isoformat(self.created_at),
            'updatedAt': isoformat(self.updated_at),
        }

    def __repr__(self):
        return f'<User {self.id} {self.email}>'


class Skill(db.Model):
    __tablename__ = 'skills'
    __table_args__ = (
        db.UniqueConstraint('user_id', 'name', name='uq_skills_user_name'),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    name = db.Column(db.String(100), nullable=False)
    category = db.Column(db.String(20), nullable=False, index=True)
    proficiency = db.Column(db.Integer, nullable=False, index=True)
    experience = db.Column(db.Float, nullable=False, default=0)
    last_used = db.Column(db.Date, nullable=False)
    notes = db.Column(db.String(500), nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    @validates('name')
    def validate_name(self, key, value):
        return _check_length('name', value, 100, minimum=1)

    @validates('category')
    def validate_category(self, key, value):
        return _check_choice('category', value, SKILL_CATEGORIES)

    @validates('proficiency')
    def validate_proficiency(self, key, value):
        return _check_range('proficiency', value, 1, 5)

    @validates('experience')
    def validate_experience(self, key, value):
        return _check_range('experience', value, 0)

    @validates('notes')
    def validate_notes(self, key, value):
        return _check_length('notes', value, 500)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'category': self.category,
            'proficiency': self.proficiency,
            'experience': self.experience,
            'lastUsed': isoformat(self.last_used),
            'notes': self.notes,
            'user': self.user_id,
            'createdAt': isoformat(self.created_at),
            'updatedAt': isoformat(self.updated_at),
        }

    def __repr__(self):
        return f'<Skill {self.id} {self.name!r}>'


class LearningGoal(db.Model):
    __tablename__ = 'learning_goals'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.String(1000), nullable=True)
    target_skill = db.Column(db.String(255), nullable=False)
    priority = db.Column(db.String(10), nullable=False, default='medium', index=True)
    status = db.Column(db.String(20), nullable=False, default=NOT_STARTED, index=True)
    target_date = db.Column(db.DateTime, nullable=True, index=True)
    progress = db.Column(db.Integer, nullable=False, default=0)
    resources = db.Column(db.JSON, nullable=False, default=list)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    @validates('title')
    def validate_title(self, key, value):
        return _check_length('title', value, 200, minimum=1)

    @validates('description')
    def validate_description(self, key, value):
        return _check_length('description', value, 1000)

    @validates('target_skill')
    def validate_target_skill(self, key, value):
        return _check_length('targetSkill', value, 255, minimum=1)

    @validates('priority')
    def validate_priority(self, key, value):
        return _check_choice('priority', value, GOAL_PRIORITIES)

    @validates('status')
    def validate_status(self, key, value):
        return _check_choice('status', value, GOAL_STATUSES)

    @validates('progress')
    def validate_progress(self, key, value):
        return _check_range('progress', value, 0, 100)

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'targetSkill': self.target_skill,
            'priority': self.priority,
            'status': self.status,
            'targetDate': isoformat(self.target_date),
            'progress': self.progress,
            'resources': list(self.resources or []),
            'user': self.user_id,
            'createdAt': isoformat(self.created_at),
            'updatedAt': isoformat(self.updated_at),
        }

    def __repr__(self):
        return f'<LearningGoal {self.id} {self.title!r}>'
