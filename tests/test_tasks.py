from conftest import make_schedule, make_task
from models import Task


def test_create_task_under_own_schedule(auth_client):
    schedule = make_schedule(auth_client)
    task = make_task(auth_client, schedule['id'], emoji='🥛',
                     startTime='2024-05-01T08:30:00Z', endTime='2024-05-01T09:00:00Z')

    assert task['title'] == 'Buy milk'
    assert task['scheduleId'] == schedule['id']
    assert task['emoji'] == '🥛'
    assert task['startTime'] == '2024-05-01T08:30:00'
    assert task['endTime'] == '2024-05-01T09:00:00'
    assert task['completed'] is False
    assert task['uploads'] == []


def test_create_task_with_upload_links(auth_client):
    schedule = make_schedule(auth_client)
    task = make_task(auth_client, schedule['id'],
                     uploads=[{'url': 'https://cdn.example.com/a.png', 'type': 'image/png'}])

    assert [(u['url'], u['type']) for u in task['uploads']] == [('https://cdn.example.com/a.png', 'image/png')]
    listed = auth_client.get('/uploads').get_json()
    assert [u['taskId'] for u in listed] == [task['id']]


def test_create_task_requires_title_and_schedule(auth_client):
    schedule = make_schedule(auth_client)

    assert auth_client.post('/tasks', json={'title': 'x'}).status_code == 400
    assert auth_client.post('/tasks', json={'scheduleId': schedule['id']}).status_code == 400
    assert auth_client.post('/tasks', json={'title': 'x', 'scheduleId': schedule['id'],
                                            'startTime': '2024-05-01T09:00:00',
                                            'endTime': '2024-05-01T08:00:00'}).status_code == 400


def test_create_task_in_foreign_schedule_is_forbidden(app, auth_client, other_client):
    theirs = make_schedule(other_client)

    response = auth_client.post('/tasks', json={'title': 'Buy milk', 'scheduleId': theirs['id']})

    assert response.status_code == 403
    with app.app_context():
        assert Task.query.count() == 0


def test_create_task_in_missing_schedule(auth_client):
    response = auth_client.post('/tasks', json={'title': 'Buy milk', 'scheduleId': 999})

    assert response.status_code == 404


def test_tasks_are_scoped_to_user(auth_client, other_client):
    make_task(auth_client, make_schedule(auth_client)['id'], title='Mine')
    make_task(other_client, make_schedule(other_client)['id'], title='Theirs')

    assert [t['title'] for t in auth_client.get('/tasks').get_json()] == ['Mine']


def test_patch_updates_fields(auth_client):
    schedule = make_schedule(auth_client)
    task = make_task(auth_client, schedule['id'])

    response = auth_client.patch(f"/tasks/{task['id']}", json={
        'title': 'Buy oat milk', 'emoji': None, 'startTime': '2024-05-01T10:00:00Z'})

    assert response.status_code == 200
    updated = response.get_json()
    assert updated['title'] == 'Buy oat milk'
    assert updated['emoji'] is None
    assert updated['startTime'] == '2024-05-01T10:00:00'


def test_patch_moves_task_between_own_schedules(auth_client):
    first = make_schedule(auth_client, title='First')
    second = make_schedule(auth_client, title='Second')
    task = make_task(auth_client, first['id'])

    response = auth_client.patch(f"/tasks/{task['id']}", json={'scheduleId': second['id']})

    assert response.get_json()['scheduleId'] == second['id']
    schedules = {s['title']: s for s in auth_client.get('/schedules').get_json()}
    assert schedules['First']['tasks'] == []
    assert [t['id'] for t in schedules['Second']['tasks']] == [task['id']]


def test_patch_cannot_move_task_to_foreign_schedule(auth_client, other_client):
    task = make_task(auth_client, make_schedule(auth_client)['id'])
    theirs = make_schedule(other_client)

    response = auth_client.patch(f"/tasks/{task['id']}", json={'scheduleId': theirs['id']})

    assert response.status_code == 404
    assert auth_client.get('/tasks').get_json()[0]['scheduleId'] == task['scheduleId']


def test_patch_rejects_bad_input(auth_client):
    task = make_task(auth_client, make_schedule(auth_client)['id'])
    url = f"/tasks/{task['id']}"

    assert auth_client.patch(url, json={}).status_code == 400
    assert auth_client.patch(url, json={'owner': 1}).status_code == 400
    assert auth_client.patch(url, json={'completed': 'yes'}).status_code == 400
    assert auth_client.patch(url, json={'title': ''}).status_code == 400


def test_other_user_cannot_patch_or_delete(auth_client, other_client):
    task = make_task(auth_client, make_schedule(auth_client)['id'])
    url = f"/tasks/{task['id']}"

    assert other_client.patch(url, json={'title': 'Hijacked'}).status_code == 404
    assert other_client.delete(url).status_code == 404

    [unchanged] = auth_client.get('/tasks').get_json()
    assert unchanged['title'] == 'Buy milk'


def test_delete_task_then_delete_again(auth_client):
    task = make_task(auth_client, make_schedule(auth_client)['id'])
    url = f"/tasks/{task['id']}"

    response = auth_client.delete(url)
    assert response.status_code == 204
    assert response.data == b''
    assert auth_client.get('/tasks').get_json() == []

    assert auth_client.delete(url).status_code == 404
    assert auth_client.patch(url, json={'title': 'Gone'}).status_code == 404


def test_completing_a_task_awards_points(auth_client):
    task = make_task(auth_client, make_schedule(auth_client)['id'])
    url = f"/tasks/{task['id']}"

    assert auth_client.patch(url, json={'completed': True}).get_json()['completed'] is True
    assert auth_client.get('/auth/status').get_json()['points'] == 10

    # Repeating the completion or re-opening the task does not change the score
    auth_client.patch(url, json={'completed': True})
    auth_client.patch(url, json={'completed': False})
    assert auth_client.get('/auth/status').get_json()['points'] == 10


def test_level_follows_points(app, auth_client):
    app.config['POINTS_PER_LEVEL'] = 20
    schedule = make_schedule(auth_client)
    for _ in range(2):
        make_task(auth_client, schedule['id'], completed=True)

    status = auth_client.get('/auth/status').get_json()
    assert status['points'] == 20
    assert status['level'] == 2


def test_non_string_text_fields_are_rejected(auth_client):
    schedule = make_schedule(auth_client)
    task = make_task(auth_client, schedule['id'], emoji='🥛')
    url = f"/tasks/{task['id']}"

    response = auth_client.patch(url, json={'emoji': {'a': 1}})
    assert response.status_code == 400
    assert response.get_json() == {'error': 'emoji must be a string'}
    assert auth_client.patch(url, json={'title': ['x']}).status_code == 400

    assert auth_client.post('/tasks', json={'title': 'x', 'scheduleId': schedule['id'],
                                            'emoji': 7}).status_code == 400
    assert auth_client.post('/tasks', json={'title': {'t': 1},
                                            'scheduleId': schedule['id']}).status_code == 400

    [unchanged] = auth_client.get('/tasks').get_json()
    assert unchanged['emoji'] == '🥛'
    assert unchanged['title'] == 'Buy milk'
