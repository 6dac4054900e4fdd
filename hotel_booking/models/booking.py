from sqlalchemy import DDL, event

from hotel_booking.models.user import db, generate_id, utcnow

BOOKING_STATUSES = ('confirmed', 'cancelled')


class Booking(db.Model):
    __tablename__ = 'bookings'

    id = db.Column(db.String(32), primary_key=True, default=generate_id)
    user_id = db.Column(db.String(32), db.ForeignKey('users.id'), nullable=False, index=True)
    room_id = db.Column(db.String(32), db.ForeignKey('rooms.id'), nullable=False, index=True)
    hotel_id = db.Column(db.String(32), db.ForeignKey('hotels.id'), nullable=False, index=True)
    check_in_date = db.Column(db.Date, nullable=False)
    check_out_date = db.Column(db.Date, nullable=False)
    guests = db.Column(db.Integer, nullable=False)
    total_price = db.Column(db.Numeric(20, 2), nullable=False)
    status = db.Column(db.String(20), nullable=False, default='confirmed')  # 'confirmed' or 'cancelled'
    booking_date = db.Column(db.DateTime, default=utcnow, nullable=False)
    cancelled_at = db.Column(db.DateTime, nullable=True)

    __table_args__ = (
        db.CheckConstraint('check_out_date > check_in_date', name='ck_bookings_date_order'),
        db.CheckConstraint('guests > 0', name='ck_bookings_guests_positive'),
        db.CheckConstraint("status IN ('confirmed', 'cancelled')", name='ck_bookings_status'),
        db.Index('ix_bookings_room_dates', 'room_id', 'check_in_date', 'check_out_date'),
    )

    # Relationships
    user = db.relationship('User', backref=db.backref('bookings', lazy=True))
    room = db.relationship('Room', backref=db.backref('bookings', lazy=True))
    hotel = db.relationship('Hotel', backref=db.backref('bookings', lazy=True))

    def to_dict(self):
        return {
            'id': self.id,
            'userId': self.user_id,
            'roomId': self.room_id,
            'hotelId': self.hotel_id,
            'checkInDate': self.check_in_date.isoformat(),
            'checkOutDate': self.check_out_date.isoformat(),
            'guests': self.guests,
            'totalPrice': float(self.total_price),
            'status': self.status,
            'bookingDate': self.booking_date.isoformat()
        }

    def to_list_dict(self):
        data = self.to_dict()
        del data['userId']
        data['hotelName'] = self.hotel.name if self.hotel else None
        data['roomNumber'] = self.room.room_number if self.room else None
        data['roomType'] = self.room.room_type if self.room else None
        return data

    def to_cancel_dict(self):
        return {
            'id': self.id,
            'status': self.status,
            'cancelledAt': self.cancelled_at.isoformat() if self.cancelled_at else None
        }


# Half-open ranges: a checkout equal to another booking's check-in is not a collision.
# Only PostgreSQL can express this; other dialects rely on the room row lock.
event.listen(
    Booking.__table__,
    'after_create',
    DDL(
        "CREATE EXTENSION IF NOT EXISTS btree_gist; "
        "ALTER TABLE bookings ADD CONSTRAINT no_room_overlap "
        "EXCLUDE USING gist (room_id WITH =, daterange(check_in_date, check_out_date, '[)') WITH &&) "
        "WHERE (status = 'confirmed')"
    ).execute_if(dialect='postgresql')
)
