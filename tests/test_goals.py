import pytest
from conftest import GO_SKILL, future


def create(client, headers, **fields):
    body = {'title': 'Learn Go generics', 'targetSkill': 'Go', 'priority': 'high', **fields}
    return client.post('/api/goals', headers=headers, json=body)


def goal_id_for(response):
    return response.get_json()['data']['goal']['id']


def test_goal_scenario(client, auth_headers):
    assert client.post('/api/skills', headers=auth_headers, json=GO_SKILL).status_code == 201

    response = create(client, auth_headers)
    assert response.status_code == 201
    goal = response.get_json()['data']['goal']
    assert goal['status'] == 'not-started'
    assert goal['progress'] == 0
    assert goal['resources'] == []

    response = client.patch(f"/api/goals/{goal['id']}/progress", headers=auth_headers, json={'progress': 100})
    assert response.status_code == 200

    goal = client.get(f"/api/goals/{goal['id']}", headers=auth_headers).get_json()['data']['goal']
    assert goal['status'] == 'completed'
    assert goal['progress'] == 100


def test_defaults(client, auth_headers):
    response = client.post('/api/goals', headers=auth_headers, json={'title': 'Docker', 'targetSkill': 'Docker'})
    goal = response.get_json()['data']['goal']
    assert goal['priority'] == 'medium'
    assert goal['status'] == 'not-started'
    assert goal['targetDate'] is None
    assert goal['description'] is None


@pytest.mark.parametrize('progress,status', [(0, 'not-started'), (50, 'in-progress'), (100, 'completed')])
def test_progress_drives_status(client, auth_headers, progress, status):
    goal_id = goal_id_for(create(client, auth_headers))
    client.patch(f'/api/goals/{goal_id}/progress', headers=auth_headers, json={'progress': 40})

    response = client.patch(f'/api/goals/{goal_id}/progress', headers=auth_headers, json={'progress': progress})
    goal = response.get_json()['data']['goal']
    assert (goal['status'], goal['progress']) == (status, progress)


@pytest.mark.parametrize('progress', [-1, 101, 'lots'])
def test_progress_out_of_range(client, auth_headers, progress):
    goal_id = goal_id_for(create(client, auth_headers))
    response = client.patch(f'/api/goals/{goal_id}/progress', headers=auth_headers, json={'progress': progress})
    assert response.status_code == 400
    assert response.get_json()['errors'][0]['field'] == 'progress'


def test_completing_through_update_sets_full_progress(client, auth_headers):
    goal_id = goal_id_for(create(client, auth_headers, progress=30))
    response = client.put(f'/api/goals/{goal_id}', headers=auth_headers, json={'status': 'completed'})
    goal = response.get_json()['data']['goal']
    assert goal['status'] == 'completed'
    assert goal['progress'] == 100


def test_create_with_progress_starts_goal(client, auth_headers):
    goal = create(client, auth_headers, progress=25).get_json()['data']['goal']
    assert goal['status'] == 'in-progress'


def test_paused_goal_keeps_status(client, auth_headers):
    goal_id = goal_id_for(create(client, auth_headers, status='paused', progress=20))
    response = client.patch(f'/api/goals/{goal_id}/progress', headers=auth_headers, json={'progress': 60})
    assert response.get_json()['data']['goal']['status'] == 'paused'


def test_target_date_must_be_in_future_on_create(client, auth_headers):
    response = create(client, auth_headers, targetDate='2020-01-01')
    assert response.status_code == 400
    assert response.get_json()['errors'] == [
        {'field': 'targetDate', 'message': 'Target date must be in the future'},
    ]

    response = create(client, auth_headers, targetDate=future())
    assert response.status_code == 201
    assert response.get_json()['data']['goal']['targetDate'].startswith(future())


def test_blank_target_date_is_ignored(client, auth_headers):
    response = create(client, auth_headers, targetDate='')
    assert response.status_code == 201
    assert response.get_json()['data']['goal']['targetDate'] is None


@pytest.mark.parametrize('fields,field', [
    ({'title': ''}, 'title'),
    ({'title': 'x' * 201}, 'title'),
    ({'description': 'x' * 1001}, 'description'),
    ({'targetSkill': '  '}, 'targetSkill'),
    ({'priority': 'urgent'}, 'priority'),
    ({'status': 'done'}, 'status'),
    ({'resources': 'not a list'}, 'resources'),
])
def test_create_validation(client, auth_headers, fields, field):
    response = create(client, auth_headers, **fields)
    assert response.status_code == 400
    assert field in {error['field'] for error in response.get_json()['errors']}


def test_update_is_partial(client, auth_headers):
    goal_id = goal_id_for(create(client, auth_headers, description='Type parameters', resources=['Tour of Go']))
    response = client.put(f'/api/goals/{goal_id}', headers=auth_headers, json={'priority': 'low'})
    goal = response.get_json()['data']['goal']
    assert goal['priority'] == 'low'
    assert goal['description'] == 'Type parameters'
    assert goal['resources'] == ['Tour of Go']
    assert goal['title'] == 'Learn Go generics'


def test_update_can_clear_target_date(client, auth_headers):
    goal_id = goal_id_for(create(client, auth_headers, targetDate=future()))
    response = client.patch(f'/api/goals/{goal_id}', headers=auth_headers, json={'targetDate': None})
    assert response.get_json()['data']['goal']['targetDate'] is None


def test_foreign_goal_is_not_found(client, auth_headers, other_headers):
    goal_id = goal_id_for(create(client, auth_headers))

    assert client.get(f'/api/goals/{goal_id}', headers=other_headers).status_code == 404
    assert client.put(f'/api/goals/{goal_id}', headers=other_headers, json={'title': 'Mine now'}).status_code == 404
    response = client.patch(f'/api/goals/{goal_id}/progress', headers=other_headers, json={'progress': 100})
    assert response.status_code == 404
    assert response.get_json()['message'] == 'Learning goal not found'
    assert client.delete(f'/api/goals/{goal_id}', headers=other_headers).status_code == 404

    goal = client.get(f'/api/goals/{goal_id}', headers=auth_headers).get_json()['data']['goal']
    assert goal['title'] == 'Learn Go generics'
    assert goal['progress'] == 0


def test_delete_twice(client, auth_headers):
    goal_id = goal_id_for(create(client, auth_headers))
    assert client.delete(f'/api/goals/{goal_id}', headers=auth_headers).status_code == 200
    assert client.delete(f'/api/goals/{goal_id}', headers=auth_headers).status_code == 404
    assert client.delete(f'/api/goals/{goal_id}', headers=auth_headers).status_code == 404


def test_filters_search_and_sort(client, auth_headers):
    create(client, auth_headers)
    create(client, auth_headers, title='Kubernetes basics', targetSkill='k8s', priority='low',
           description='Pods and deployments')
    create(client, auth_headers, title='SQL tuning', targetSkill='PostgreSQL', priority='medium', progress=100)

    def titles(query):
        body = client.get(f'/api/goals{query}', headers=auth_headers).get_json()
        assert body['results'] == len(body['data']['goals'])
        return [goal['title'] for goal in body['data']['goals']]

    # newest first by default
    assert titles('') == ['SQL tuning', 'Kubernetes basics', 'Learn Go generics']
    assert titles('?status=completed') == ['SQL tuning']
    assert titles('?priority=low') == ['Kubernetes basics']
    assert titles('?search=DEPLOY') == ['Kubernetes basics']
    assert titles('?search=postgres') == ['SQL tuning']
    assert titles('?sort=title&order=asc') == ['Kubernetes basics', 'Learn Go generics', 'SQL tuning']


def test_invalid_filter_value(client, auth_headers):
    response = client.get('/api/goals?status=finished', headers=auth_headers)
    assert response.status_code == 400


@pytest.mark.parametrize('search', ['_', '%', 'L_'])
def test_search_treats_wildcards_literally(client, auth_headers, search):
    create(client, auth_headers)
    body = client.get('/api/goals', headers=auth_headers, query_string={'search': search}).get_json()
    assert body['data']['goals'] == []


@pytest.mark.parametrize('status', ['paused', 'in-progress', 'not-started'])
def test_create_keeps_requested_status_without_progress(client, auth_headers, status):
    response = create(client, auth_headers, status=status)
    assert response.status_code == 201
    goal = response.get_json()['data']['goal']
    assert (goal['status'], goal['progress']) == (status, 0)


def test_create_completed_without_progress(client, auth_headers):
    goal = create(client, auth_headers, status='completed').get_json()['data']['goal']
    assert (goal['status'], goal['progress']) == ('completed', 100)


def test_create_with_explicit_zero_progress(client, auth_headers):
    goal = create(client, auth_headers, status='in-progress', progress=0).get_json()['data']['goal']
    assert (goal['status'], goal['progress']) == ('not-started', 0)
