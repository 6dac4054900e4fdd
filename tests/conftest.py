from datetime import timedelta
from decimal import Decimal

import pytest
from werkzeug.security import generate_password_hash

from hotel_booking.main import create_app
from hotel_booking.models.user import db, User, utcnow
from hotel_booking.models.hotel import Hotel, Room

TEST_CONFIG = {
    'TESTING': True,
    'SQLALCHEMY_DATABASE_URI': 'sqlite://',
    'JWT_SECRET_KEY': 'test-jwt-secret-key-with-enough-length-0123456789',
    'SECRET_KEY': 'test-secret-key',
    'JWT_COOKIE_SECURE': False,
    'LOG_LEVEL': 'DEBUG',
}


@pytest.fixture
def app():
    app = create_app(TEST_CONFIG)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client(use_cookies=False)


def signup(client, name, email, password='pass123', role='customer', phone=None):
    payload = {'name': name, 'email': email, 'password': password, 'role': role}
    if phone is not None:
        payload['phone'] = phone
    return client.post('/api/auth/signup', json=payload)


def login(client, email, password='pass123'):
    return client.post('/api/auth/login', json={'email': email, 'password': password})


def register_and_login(client, name, email, role):
    signup(client, name, email, role=role)
    body = login(client, email).get_json()
    return body['data']['token'], body['data']['user']['id']


def auth(token):
    return {'Authorization': f'Bearer {token}'}


def days_from_today(days):
    return (utcnow().date() + timedelta(days=days)).isoformat()


@pytest.fixture
def owner(client):
    token, user_id = register_and_login(client, 'Hotel Owner', 'owner@example.com', 'owner')
    return {'token': token, 'id': user_id}


@pytest.fixture
def customer(client):
    token, user_id = register_and_login(client, 'Priya Sharma', 'priya@example.com', 'customer')
    return {'token': token, 'id': user_id}


@pytest.fixture
def customer2(client):
    token, user_id = register_and_login(client, 'John Doe', 'john@example.com', 'customer')
    return {'token': token, 'id': user_id}


@pytest.fixture
def hotel_id(client, owner):
    res = client.post('/api/hotels', headers=auth(owner['token']), json={
        'name': 'Grand Palace Hotel',
        'description': 'Luxury 5-star hotel in the heart of the city',
        'city': 'Mumbai',
        'country': 'India',
        'amenities': ['wifi', 'pool'],
    })
    return res.get_json()['data']['id']


@pytest.fixture
def room_id(client, owner, hotel_id):
    res = client.post(f'/api/hotels/{hotel_id}/rooms', headers=auth(owner['token']), json={
        'roomNumber': '101',
        'roomType': 'Deluxe',
        'pricePerNight': 5000,
        'maxOccupancy': 2,
    })
    return res.get_json()['data']['id']


@pytest.fixture
def catalog(app):
    """Rows created directly in the store, for service-level tests."""
    owner = User(name='Owner', email='o@example.com', password_hash=generate_password_hash('x'), role='owner')
    guest = User(name='Guest', email='g@example.com', password_hash=generate_password_hash('x'), role='customer')
    other = User(name='Other', email='h@example.com', password_hash=generate_password_hash('x'), role='customer')
    db.session.add_all([owner, guest, other])
    db.session.flush()

    hotel = Hotel(owner_id=owner.id, name='Seaside', city='Goa', country='India', amenities=[])
    db.session.add(hotel)
    db.session.flush()

    room = Room(hotel_id=hotel.id, room_number='101', room_type='Deluxe',
                price_per_night=Decimal('5000'), max_occupancy=2)
    db.session.add(room)
    db.session.commit()

    return {'owner': owner, 'guest': guest, 'other': other, 'hotel': hotel, 'room': room}
