import json
import random
from datetime import timedelta

import click
from werkzeug.security import generate_password_hash

from hotel_booking.models.user import db, User, utcnow
from hotel_booking.models.hotel import Hotel, Room
from hotel_booking.models.booking import Booking
from hotel_booking.models.review import Review
from hotel_booking.services import booking_ledger
from hotel_booking.utils.responses import ApiError

# Sample data
hotel_catalog = [
    ("Grand Palace Hotel", "Mumbai", "India", ["wifi", "pool", "gym", "parking", "restaurant"]),
    ("Lakeview Residency", "Udaipur", "India", ["wifi", "restaurant"]),
    ("Harbour Lights Inn", "Lisbon", "Portugal", ["wifi", "bar"]),
]
room_types = [
    ("Standard", 3500, 2),
    ("Deluxe", 5000, 2),
    ("Family Suite", 8000, 4),
]
customer_names = ["Priya Sharma", "John Doe"]


def create_mock_data():
    # Recreate the schema from scratch
    db.drop_all()
    db.create_all()

    owner = User(
        name="Hotel Owner",
        email="owner@example.com",
        password_hash=generate_password_hash("owner123"),
        role="owner",
        phone="+919876543211"
    )
    db.session.add(owner)

    customers = []
    for i, name in enumerate(customer_names):
        customer = User(
            name=name,
            email=f"customer{i + 1}@example.com",
            password_hash=generate_password_hash("customer123"),
            role="customer"
        )
        db.session.add(customer)
        customers.append(customer)

    db.session.commit()

    # Create hotels and rooms
    rooms = []
    for name, city, country, amenities in hotel_catalog:
        hotel = Hotel(
            owner_id=owner.id,
            name=name,
            description=f"{name} in {city}",
            city=city,
            country=country,
            amenities=amenities
        )
        db.session.add(hotel)
        db.session.flush()

        for floor, (room_type, price, occupancy) in enumerate(room_types, start=1):
            room = Room(
                hotel_id=hotel.id,
                room_number=f"{floor}01",
                room_type=room_type,
                price_per_night=price,
                max_occupancy=occupancy
            )
            db.session.add(room)
            rooms.append(room)

    db.session.commit()

    # Create a few future bookings through the ledger so they obey its rules
    today = utcnow().date()
    for customer in customers:
        room = random.choice(rooms)
        check_in = today + timedelta(days=random.randint(10, 60))
        nights = random.randint(1, 5)
        try:
            booking_ledger.create_booking(customer.id, room.id, check_in, check_in + timedelta(days=nights), 1)
        except ApiError as error:
            click.echo(f"Skipped booking for {customer.email}: {error.code}")

    # Return summary of created data
    return {
        "users": User.query.count(),
        "hotels": Hotel.query.count(),
        "rooms": Room.query.count(),
        "bookings": Booking.query.count(),
        "reviews": Review.query.count()
    }


def register_commands(app):
    @app.cli.command('init-db')
    def init_db():
        """Create all tables."""
        db.create_all()
        click.echo("Database initialised.")

    @app.cli.command('seed')
    def seed():
        """Recreate the schema and load demo data."""
        summary = create_mock_data()
        click.echo("Mock data created successfully!")
        click.echo(json.dumps(summary, indent=2))
