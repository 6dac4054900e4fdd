import json

from hotel_booking.models.user import User
from hotel_booking.models.hotel import Hotel, Room
from hotel_booking.models.booking import Booking


def test_seed_loads_demo_catalog(app):
    runner = app.test_cli_runner()

    result = runner.invoke(args=['seed'])

    assert result.exit_code == 0
    assert 'Mock data created successfully!' in result.output
    summary = json.loads(result.output[result.output.index('{'):])
    assert summary['users'] == User.query.count() == 3
    assert summary['hotels'] == Hotel.query.count() == 3
    assert summary['rooms'] == Room.query.count() == 9
    assert summary['bookings'] == Booking.query.count()
    assert summary['reviews'] == 0
    assert all(booking.status == 'confirmed' for booking in Booking.query.all())


def test_init_db(app):
    runner = app.test_cli_runner()

    result = runner.invoke(args=['init-db'])

    assert result.exit_code == 0
    assert 'Database initialised.' in result.output
