from conftest import auth, login, signup


def test_signup_returns_envelope_without_password(client):
    res = signup(client, 'Priya Sharma', 'priya@example.com', role='customer', phone='+919876543210')
    body = res.get_json()

    assert res.status_code == 201
    assert set(body) == {'success', 'data', 'error'}
    assert body['success'] is True
    assert body['error'] is None
    assert body['data']['name'] == 'Priya Sharma'
    assert body['data']['role'] == 'customer'
    assert body['data']['phone'] == '+919876543210'
    assert 'password' not in body['data']
    assert 'password_hash' not in body['data']


def test_signup_defaults_to_customer_role(client):
    res = client.post('/api/auth/signup', json={
        'name': 'Default User',
        'email': 'default@example.com',
        'password': 'default123',
    })

    assert res.status_code == 201
    assert res.get_json()['data']['role'] == 'customer'


def test_signup_rejects_duplicate_email(client):
    signup(client, 'First', 'dup@example.com')
    res = signup(client, 'Second', 'dup@example.com')
    body = res.get_json()

    assert res.status_code == 400
    assert body == {'success': False, 'data': None, 'error': 'EMAIL_ALREADY_EXISTS'}


def test_signup_validates_payload(client):
    cases = [
        {'email': 'a@example.com', 'password': 'x'},
        {'name': 'A', 'password': 'x'},
        {'name': 'A', 'email': 'a@example.com'},
        {'name': 'A', 'email': 'not-an-email', 'password': 'x'},
        {'name': 'A', 'email': 'a@example.com', 'password': 'x', 'role': 'admin'},
    ]
    for payload in cases:
        res = client.post('/api/auth/signup', json=payload)
        assert res.status_code == 400
        assert res.get_json()['error'] == 'INVALID_REQUEST'


def test_login_issues_token_and_cookies(client):
    signup(client, 'Owner', 'owner@example.com', role='owner')
    res = login(client, 'owner@example.com')
    body = res.get_json()

    assert res.status_code == 200
    assert body['data']['token']
    assert body['data']['user']['email'] == 'owner@example.com'
    assert body['data']['user']['role'] == 'owner'
    assert 'password' not in body['data']['user']

    cookies = res.headers.getlist('Set-Cookie')
    assert any(cookie.startswith('accessToken=') for cookie in cookies)
    assert any(cookie.startswith('refreshToken=') for cookie in cookies)


def test_login_rejects_bad_credentials(client):
    signup(client, 'Priya', 'priya@example.com')

    wrong_password = login(client, 'priya@example.com', password='nope')
    unknown_email = login(client, 'ghost@example.com')

    assert wrong_password.status_code == 401
    assert wrong_password.get_json()['error'] == 'INVALID_CREDENTIALS'
    assert unknown_email.status_code == 401
    assert unknown_email.get_json()['error'] == 'INVALID_CREDENTIALS'


def test_login_requires_email_and_password(client):
    res = client.post('/api/auth/login', json={'email': 'priya@example.com'})

    assert res.status_code == 400
    assert res.get_json()['error'] == 'INVALID_REQUEST'


def test_me_returns_caller_profile(client, customer):
    res = client.get('/api/auth/me', headers=auth(customer['token']))

    assert res.status_code == 200
    assert res.get_json()['data']['id'] == customer['id']


def test_protected_route_without_token_is_unauthorized(client):
    res = client.get('/api/auth/me')

    assert res.status_code == 401
    assert res.get_json() == {'success': False, 'data': None, 'error': 'UNAUTHORIZED'}


def test_garbage_token_is_unauthorized(client):
    res = client.get('/api/bookings', headers=auth('not.a.jwt'))

    assert res.status_code == 401
    assert res.get_json()['error'] == 'UNAUTHORIZED'


def test_access_cookie_authenticates(client):
    signup(client, 'Priya', 'priya@example.com')
    token = login(client, 'priya@example.com').get_json()['data']['token']

    res = client.get('/api/bookings', headers={'Cookie': f'accessToken={token}'})

    assert res.status_code == 200


def test_unknown_route_uses_envelope(client):
    res = client.get('/api/nowhere')

    assert res.status_code == 404
    assert res.get_json() == {'success': False, 'data': None, 'error': 'NOT_FOUND'}
