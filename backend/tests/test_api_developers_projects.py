import pytest
from fastapi.testclient import TestClient
from devhouse.main import app

client = TestClient(app)


@pytest.fixture
def headers():
    token = client.post('/api/Auth/token').json()['token']
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def parents(headers):
    team = client.post('/api/Team', json={'name': 'Core'}, headers=headers).json()
    role = client.post('/api/Role', json={'name': 'Backend'}, headers=headers).json()
    ptype = client.post('/api/ProjectType', json={'name': 'Web'}, headers=headers).json()
    return {'team': team, 'role': role, 'ptype': ptype}


def test_developer_with_missing_role_is_rejected(headers):
    client.post('/api/Team', json={'name': 'Core'}, headers=headers)
    body = {'firstname': 'A', 'lastname': 'B', 'roleId': 1, 'teamId': 1}
    r = client.post('/api/Developer', json=body, headers=headers)
    assert r.status_code == 400
    assert r.json()['detail'] == 'Invalid TeamId or RoleId.'
    assert client.get('/api/Developer').json() == []


def test_developer_round_trip(headers, parents):
    body = {'firstname': 'Ada', 'lastname': 'Lovelace', 'roleId': parents['role']['id'], 'teamId': parents['team']['id']}
    r = client.post('/api/Developer', json=body, headers=headers)
    assert r.status_code == 201
    created = r.json()
    assert created['roleName'] == 'Backend'
    assert created['teamName'] == 'Core'
    assert r.headers['Location'].endswith(f"/api/Developer/{created['id']}")
    fetched = client.get(f"/api/Developer/{created['id']}").json()
    assert fetched == {**body, 'id': created['id'], 'roleName': 'Backend', 'teamName': 'Core'}


def test_developer_update_overwrites_fields(headers, parents):
    other_team = client.post('/api/Team', json={'name': 'Platform'}, headers=headers).json()
    dev = client.post('/api/Developer', json={
        'firstname': 'Ada', 'lastname': 'Lovelace', 'roleId': parents['role']['id'], 'teamId': parents['team']['id'],
    }, headers=headers).json()
    r = client.put(f"/api/Developer/{dev['id']}", json={
        'firstname': 'Grace', 'lastname': 'Hopper', 'roleId': parents['role']['id'], 'teamId': other_team['id'],
    }, headers=headers)
    assert r.status_code == 200
    fetched = client.get(f"/api/Developer/{dev['id']}").json()
    assert fetched['firstname'] == 'Grace'
    assert fetched['lastname'] == 'Hopper'
    assert fetched['teamName'] == 'Platform'


def test_developer_update_checks_references(headers, parents):
    dev = client.post('/api/Developer', json={
        'firstname': 'Ada', 'lastname': 'Lovelace', 'roleId': parents['role']['id'], 'teamId': parents['team']['id'],
    }, headers=headers).json()
    r = client.put(f"/api/Developer/{dev['id']}", json={
        'firstname': 'Ada', 'lastname': 'Lovelace', 'roleId': 77, 'teamId': parents['team']['id'],
    }, headers=headers)
    assert r.status_code == 400
    assert client.get(f"/api/Developer/{dev['id']}").json()['roleId'] == parents['role']['id']
    assert client.put('/api/Developer/999', json={}, headers=headers).status_code == 404


def test_project_crud_flow(headers, parents):
    body = {'name': 'Website Redesign', 'projectTypeId': parents['ptype']['id'], 'teamId': parents['team']['id']}
    r = client.post('/api/Project', json=body, headers=headers)
    assert r.status_code == 201
    project = r.json()
    assert project['projectTypeName'] == 'Web'
    assert project['teamName'] == 'Core'
    listed = client.get('/api/Project').json()
    assert listed == [project]
    r = client.put(f"/api/Project/{project['id']}", json={**body, 'name': 'Website v2'}, headers=headers)
    assert r.json()['name'] == 'Website v2'
    assert client.delete(f"/api/Project/{project['id']}", headers=headers).status_code == 204
    assert client.get(f"/api/Project/{project['id']}").status_code == 404


def test_project_rejects_non_positive_ids(headers, parents):
    r = client.post('/api/Project', json={'name': 'X', 'projectTypeId': 0, 'teamId': parents['team']['id']}, headers=headers)
    assert r.status_code == 400
    assert r.json()['detail'] == 'TeamId and ProjectTypeId must be valid positive numbers.'


def test_project_rejects_unknown_project_type(headers, parents):
    r = client.post('/api/Project', json={'name': 'X', 'projectTypeId': 55, 'teamId': parents['team']['id']}, headers=headers)
    assert r.status_code == 400
    assert r.json()['detail'] == 'Invalid ProjectTypeId. Project Type does not exist.'
    assert client.get('/api/Project').json() == []


def test_project_writes_need_token(parents):
    r = client.delete('/api/Project/1')
    assert r.status_code == 401


def test_out_of_range_foreign_keys_are_bad_requests(headers, parents):
    r = client.post('/api/Project', json={'name': 'X', 'projectTypeId': 2 ** 70, 'teamId': parents['team']['id']}, headers=headers)
    assert r.status_code == 400
    assert r.json()['detail'] == 'Invalid ProjectTypeId. Project Type does not exist.'
    r = client.post('/api/Developer', json={
        'firstname': 'Ada', 'lastname': 'Lovelace', 'roleId': parents['role']['id'], 'teamId': 2 ** 70,
    }, headers=headers)
    assert r.status_code == 400
    assert r.json()['detail'] == 'Invalid TeamId or RoleId.'
    assert client.get('/api/Project').json() == []
    assert client.get('/api/Developer').json() == []
