"""
Review gate: one review per completed, non-cancelled booking.

The review row and the hotel's running rating are committed together. The
rating is folded in by a single UPDATE evaluated by the database, so two
reviews of the same hotel landing at once cannot overwrite each other.
"""
import logging
from datetime import datetime, time

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError

from hotel_booking.models.user import db, utcnow
from hotel_booking.models.hotel import Hotel
from hotel_booking.models.booking import Booking
from hotel_booking.models.review import Review
from hotel_booking.utils.responses import ApiError
from hotel_booking.utils.validation import is_int

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5


def is_valid_rating(rating):
    return is_int(rating) and MIN_RATING <= rating <= MAX_RATING


def is_eligible(booking, now):
    if booking.status == 'cancelled':
        return False
    return now >= datetime.combine(booking.check_out_date, time.min)


def submit_review(caller_id, booking_id, rating, comment=None, now=None):
    if not caller_id:
        raise ApiError('UNAUTHORIZED', 401)

    if not is_valid_rating(rating) or (comment is not None and not isinstance(comment, str)):
        raise ApiError('INVALID_REQUEST', 400)
    rating = int(rating)

    booking = db.session.get(Booking, booking_id) if booking_id else None
    if not booking:
        raise ApiError('BOOKING_NOT_FOUND', 404)

    if booking.user_id != caller_id:
        raise ApiError('FORBIDDEN', 403)

    if booking.review is not None:
        raise ApiError('ALREADY_REVIEWED', 400)

    if not is_eligible(booking, now or utcnow()):
        raise ApiError('BOOKING_NOT_ELIGIBLE', 400)

    review = Review(
        booking_id=booking.id,
        user_id=caller_id,
        hotel_id=booking.hotel_id,
        rating=rating,
        comment=comment
    )

    try:
        db.session.add(review)
        db.session.flush()
        db.session.execute(
            update(Hotel)
            .where(Hotel.id == booking.hotel_id)
            .values(
                rating=(Hotel.rating * Hotel.total_reviews + rating) / (Hotel.total_reviews + 1),
                total_reviews=Hotel.total_reviews + 1
            )
        )
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        logger.warning('Duplicate review rejected for booking %s', booking_id)
        raise ApiError('ALREADY_REVIEWED', 400)

    logger.info('Review %s submitted for hotel %s (rating %s)', review.id, review.hotel_id, rating)
    return review
