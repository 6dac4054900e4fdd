from hotel_booking.models.user import db, generate_id, utcnow


class Review(db.Model):
    __tablename__ = 'reviews'

    id = db.Column(db.String(32), primary_key=True, default=generate_id)
    booking_id = db.Column(db.String(32), db.ForeignKey('bookings.id'), nullable=False)
    user_id = db.Column(db.String(32), db.ForeignKey('users.id'), nullable=False, index=True)
    hotel_id = db.Column(db.String(32), db.ForeignKey('hotels.id'), nullable=False, index=True)
    rating = db.Column(db.Integer, nullable=False)  # 1-5
    comment = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    __table_args__ = (
        db.UniqueConstraint('booking_id', name='uq_reviews_booking'),
        db.CheckConstraint('rating BETWEEN 1 AND 5', name='ck_reviews_rating_range'),
    )

    # Relationships
    booking = db.relationship('Booking', backref=db.backref('review', uselist=False))
    user = db.relationship('User', backref=db.backref('reviews', lazy=True))
    hotel = db.relationship('Hotel', backref=db.backref('reviews', lazy=True))

    def to_dict(self):
        return {
            'id': self.id,
            'bookingId': self.booking_id,
            'userId': self.user_id,
            'hotelId': self.hotel_id,
            'rating': self.rating,
            'comment': self.comment,
            'createdAt': self.created_at.isoformat()
        }
