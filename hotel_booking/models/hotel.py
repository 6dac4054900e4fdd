from hotel_booking.models.user import db, generate_id, utcnow


class Hotel(db.Model):
    __tablename__ = 'hotels'

    id = db.Column(db.String(32), primary_key=True, default=generate_id)
    owner_id = db.Column(db.String(32), db.ForeignKey('users.id'), nullable=False, index=True)
    name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    city = db.Column(db.String(255), nullable=False)
    country = db.Column(db.String(255), nullable=False)
    amenities = db.Column(db.JSON, nullable=False, default=list)
    # Running mean of review ratings, updated incrementally
    rating = db.Column(db.Float, nullable=False, default=0.0)
    total_reviews = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    # Relationships
    rooms = db.relationship('Room', backref='hotel', lazy=True, order_by='Room.room_number')

    def to_dict(self, include_created=True):
        data = {
            'id': self.id,
            'ownerId': self.owner_id,
            'name': self.name,
            'description': self.description,
            'city': self.city,
            'country': self.country,
            'amenities': list(self.amenities or []),
            'rating': float(self.rating or 0),
            'totalReviews': self.total_reviews or 0
        }
        if include_created:
            data['createdAt'] = self.created_at.isoformat()
        return data


class Room(db.Model):
    __tablename__ = 'rooms'

    id = db.Column(db.String(32), primary_key=True, default=generate_id)
    hotel_id = db.Column(db.String(32), db.ForeignKey('hotels.id'), nullable=False, index=True)
    room_number = db.Column(db.String(50), nullable=False)
    room_type = db.Column(db.String(100), nullable=False)
    price_per_night = db.Column(db.Numeric(10, 2), nullable=False)
    max_occupancy = db.Column(db.Integer, nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    __table_args__ = (
        db.UniqueConstraint('hotel_id', 'room_number', name='uq_rooms_hotel_room_number'),
        db.CheckConstraint('max_occupancy >= 1', name='ck_rooms_max_occupancy'),
        db.CheckConstraint('price_per_night > 0', name='ck_rooms_price_positive'),
    )

    def to_dict(self, include_hotel=True):
        data = {
            'id': self.id,
            'roomNumber': self.room_number,
            'roomType': self.room_type,
            'pricePerNight': float(self.price_per_night),
            'maxOccupancy': self.max_occupancy
        }
        if include_hotel:
            data['hotelId'] = self.hotel_id
            data['createdAt'] = self.created_at.isoformat()
        return data
