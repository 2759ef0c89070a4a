"""
Text recommendations from a generative model, with offline fallbacks.

Every public method returns a ``Recommendation``. When the model cannot be
reached, is not configured, or answers with nothing usable, the text is built
from the user's own data instead and ``source`` is ``"fallback"``.
"""
import logging
from typing import NamedTuple, Optional
from flask import current_app
from openai import OpenAI, OpenAIError

logger = logging.getLogger(__name__)

GENERATED = 'generated'
FALLBACK = 'fallback'

SYSTEM_PROMPT = 'You are an AI learning advisor for software developers. Answer in Markdown.'

OFFLINE_NOTE = (
    '*Note: this is a basic offline recommendation. Configure OPENAI_API_KEY '
    'for AI-powered personalized suggestions.*'
)


class Recommendation(NamedTuple):
    text: str
    source: str


class AIServiceUnavailable(Exception):
    pass


def _skill_lines(skills, with_category=True):
    if not skills:
        return 'No skills tracked yet'
    if with_category:
        return '\n'.join(f'{s.name} ({s.category}) - Proficiency: {s.proficiency}/5' for s in skills)
    return '\n'.join(f'{s.name} - Proficiency: {s.proficiency}/5' for s in skills)


def _goal_lines(goals):
    if not goals:
        return 'No learning goals set yet'
    return '\n'.join(
        f'{g.title} (target skill: {g.target_skill}) - Priority: {g.priority}, Status: {g.status}'
        for g in goals
    )


def _target_date(goal):
    return goal.target_date.date().isoformat() if goal.target_date else 'Not set'


class RecommendationGateway:

    def __init__(self, client=None, model='gpt-4o-mini'):
        self.client = client
        self.model = model

    def _generate(self, prompt, fallback):
        try:
            if self.client is None:
                raise AIServiceUnavailable('OPENAI_API_KEY is not configured')
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {'role': 'system', 'content': SYSTEM_PROMPT},
                    {'role': 'user', 'content': prompt},
                ],
            )
            text = (response.choices[0].message.content or '').strip() if response.choices else ''
            if not text:
                raise AIServiceUnavailable(f'empty response from model {self.model}')
            return Recommendation(text, GENERATED)
        except (OpenAIError, AIServiceUnavailable, AttributeError, IndexError, TypeError) as exc:
            logger.warning('AI generation failed (%s: %s); using fallback text.', type(exc).__name__, exc)
            return Recommendation(fallback(), FALLBACK)

    def learning_path(self, skills, goals):
        prompt = f"""Analyze this developer's data and recommend a learning path.

CURRENT SKILLS:
{_skill_lines(skills)}

LEARNING GOALS:
{_goal_lines(goals)}

Provide 3-5 specific recommendations in a sensible order, time estimates,
resources to focus on, and which current skills need improvement."""
        return self._generate(prompt, lambda: fallback_learning_path(skills, goals))

    def skill_suggestions(self, skill_names):
        prompt = f"""Based on these developer skills: {', '.join(skill_names) or 'No skills specified'}

Suggest 5-7 complementary skill categories or technologies that would improve
this developer's career prospects, with a short reason for each."""
        return self._generate(prompt, lambda: fallback_skill_suggestions(skill_names))

    def skill_gap_analysis(self, skills, target_role):
        prompt = f"""Analyze the skill gaps for a developer targeting the role: "{target_role}"

CURRENT SKILLS:
{_skill_lines(skills)}

List well-developed skills, critical gaps, nice-to-have skills, recommended
proficiency levels and learning priorities with a timeline."""
        return self._generate(prompt, lambda: fallback_skill_gap_analysis(skills, target_role))

    def study_plan(self, goal, skills):
        prompt = f"""Create a week-by-week study plan for this learning goal.

GOAL: {goal.title}
DESCRIPTION: {goal.description or 'No description provided'}
TARGET SKILL: {goal.target_skill}
PRIORITY: {goal.priority}
STATUS: {goal.status}
PROGRESS: {goal.progress}%
TARGET DATE: {_target_date(goal)}

CURRENT SKILLS:
{_skill_lines(skills, with_category=False)}

Include resources, practical projects, milestones and time estimates."""
        return self._generate(prompt, lambda: fallback_study_plan(goal, skills))


def fallback_learning_path(skills, goals):
    goals_text = '\n'.join(f'{g.title} - {g.status}' for g in goals) or 'No learning goals set yet'
    return f"""# Personalized Learning Path (Generated Offline)

## Current Skills Assessment
{_skill_lines(skills)}

## Learning Goals
{goals_text}

## Recommendations
1. **Focus on skill gaps**: prioritize skills with proficiency below 3
2. **Complete active goals**: work through in-progress goals one at a time
3. **Build portfolio projects**: apply your skills in real projects
4. **Practice regularly**: short, consistent sessions beat occasional long ones

{OFFLINE_NOTE}"""


def fallback_skill_suggestions(skill_names):
    return f"""# Skill Development Suggestions (Generated Offline)

## Based on your current skills: {', '.join(skill_names) or 'None specified'}

### Core Development Skills
- **Version control**: Git, GitHub/GitLab
- **Testing**: unit and integration testing
- **Documentation**: technical writing, API documentation

### Popular Technologies
- **Frontend**: React, Vue.js, TypeScript
- **Backend**: Python, Node.js, Go
- **Databases**: PostgreSQL, MongoDB, Redis
- **DevOps**: Docker, Kubernetes, CI/CD pipelines

{OFFLINE_NOTE}"""


def fallback_skill_gap_analysis(skills, target_role):
    return f"""# Skill Gap Analysis for {target_role} (Generated Offline)

## Your Current Skills
{_skill_lines(skills)}

## Common Skills for {target_role}
- Programming languages and frameworks used by the role
- Database knowledge and version control
- Testing practices
- Communication and collaboration

## General Recommendations
1. Compare your skills with real job postings for {target_role}
2. Focus on missing or weak skills first
3. Build projects that exercise the target skills

{OFFLINE_NOTE}"""


def fallback_study_plan(goal, skills):
    return f"""# Study Plan for: {goal.title} (Generated Offline)

## Goal Details
- **Target skill**: {goal.target_skill}
- **Description**: {goal.description or 'No description provided'}
- **Priority**: {goal.priority}
- **Status**: {goal.status}
- **Target date**: {_target_date(goal)}

## Recommended Study Plan
### Week 1-2: Foundation
- Learn the basics of {goal.target_skill} and gather resources
### Week 3-4: Core Learning
- Follow a structured course and practice small exercises
### Week 5-6: Hands-on Practice
- Build a practice project using {goal.target_skill}
### Week 7-8: Advanced Topics
- Study best practices and real-world codebases

{OFFLINE_NOTE}"""


_gateway: Optional[RecommendationGateway] = None


def get_gateway():
    """Process-wide gateway, created on first use."""
    global _gateway
    if _gateway is None:
        api_key = current_app.config.get('OPENAI_API_KEY')
        if not api_key:
            logger.warning('OPENAI_API_KEY is missing. AI requests will use offline fallbacks.')
        client = OpenAI(api_key=api_key) if api_key else None
        _gateway = RecommendationGateway(client, current_app.config.get('OPENAI_MODEL', 'gpt-4o-mini'))
    return _gateway
