from fastapi.testclient import TestClient

from course_management.main import app

client = TestClient(app)


def _create(name):
    r = client.post('/courses/create', json={'name': name})
    assert r.status_code == 201
    return r.json()


def test_create_get_update_delete_course():
    created = _create('Math')
    assert created['id'] == 1
    assert created['name'] == 'Math'

    r = client.get(f"/courses/get/{created['id']}")
    assert r.status_code == 200
    assert r.json()['name'] == 'Math'

    r = client.put(f"/courses/edit/{created['id']}", json={'name': 'Algebra'})
    assert r.status_code == 200
    assert r.json() == {'id': 1, 'name': 'Algebra', 'students': None}

    r = client.delete(f"/courses/del/{created['id']}")
    assert r.status_code == 204
    assert r.content == b''

    r = client.get(f"/courses/get/{created['id']}")
    assert r.status_code == 404


def test_not_found_is_plain_text():
    for r in (
        client.get('/courses/get/2'),
        client.put('/courses/edit/2', json={'name': 'Physics'}),
        client.delete('/courses/del/2'),
    ):
        assert r.status_code == 404
        assert r.headers['content-type'].startswith('text/plain')
        assert r.text == 'Course not found with id: 2'


def test_duplicate_or_missing_name_is_a_client_error():
    _create('Math')
    r = client.post('/courses/create', json={'name': 'Math'})
    assert r.status_code == 400
    assert 'detail' in r.json()
    r = client.post('/courses/create', json={})
    assert r.status_code == 400


def test_getall_defaults_and_page_shape():
    for i in range(12):
        _create(f'Course {i:02d}')
    r = client.get('/courses/getall')
    assert r.status_code == 200
    body = r.json()
    assert len(body['content']) == 10
    assert body['totalElements'] == 12
    assert body['totalPages'] == 2
    assert body['number'] == 0
    assert body['size'] == 10
    assert body['numberOfElements'] == 10
    assert body['first'] is True
    assert body['last'] is False
    assert [c['id'] for c in body['content']] == list(range(1, 11))


def test_getall_past_last_page_is_empty_not_an_error():
    for i in range(5):
        _create(f'Course {i}')
    r = client.get('/courses/getall', params={'page': 1, 'size': 5})
    assert r.status_code == 200
    assert r.json()['content'] == []
    assert r.json()['totalElements'] == 5


def test_getall_sort_direction():
    for name in ['Biology', 'Art', 'Chemistry']:
        _create(name)
    names = lambda d: [c['name'] for c in client.get('/courses/getall', params={'sortBy': 'name', 'sortDir': d}).json()['content']]
    assert names('ASC') == names('asc') == ['Art', 'Biology', 'Chemistry']
    assert names('desc') == names('down') == ['Chemistry', 'Biology', 'Art']


def test_getall_rejects_unknown_sort_field_and_bad_bounds():
    r = client.get('/courses/getall', params={'sortBy': 'nope'})
    assert r.status_code == 400
    assert client.get('/courses/getall', params={'page': -1}).status_code == 422
    assert client.get('/courses/getall', params={'size': 0}).status_code == 422


def test_get_course_can_include_students():
    course = _create('Math')
    client.post('/students/create', json={'name': 'samira', 'email': 'samira@gmail.com', 'courseId': course['id']})
    r = client.get(f"/courses/get/{course['id']}", params={'includeStudents': 'true'})
    assert r.status_code == 200
    assert r.json()['students'] == [
        {'id': 1, 'name': 'samira', 'email': 'samira@gmail.com', 'courseId': course['id']}
    ]


def test_request_id_is_echoed():
    r = client.get('/health', headers={'X-Request-ID': 'abc123'})
    assert r.status_code == 200
    assert r.json() == {'status': 'ok'}
    assert r.headers['X-Request-ID'] == 'abc123'
    assert client.get('/health').headers['X-Request-ID']


def test_huge_page_is_empty_not_a_server_error():
    for i in range(3):
        _create(f'Course {i}')
    r = client.get('/courses/getall', params={'page': 2**31 - 1, 'size': 2**31 - 1})
    assert r.status_code == 200
    assert r.json()['content'] == []
    assert r.json()['totalElements'] == 3
    assert client.get('/courses/getall', params={'page': 2**62}).status_code == 422


def test_oversized_ids_are_rejected_before_storage():
    huge = 2**70
    assert client.get(f'/courses/get/{huge}').status_code == 422
    assert client.put(f'/courses/edit/{huge}', json={'name': 'x'}).status_code == 422
    assert client.delete(f'/courses/del/{huge}').status_code == 422
    r = client.get(f'/courses/get/{2**63 - 1}')
    assert r.status_code == 404


def test_request_log_names_the_endpoint(caplog):
    caplog.set_level('INFO', logger='course_management.api')
    client.get('/health')
    assert any('request_done' in m and '"endpoint": "health"' in m for m in caplog.messages)
