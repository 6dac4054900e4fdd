"""
Booking ledger: create, list and cancel room bookings.

A room holds at most one confirmed booking for any night. Date ranges are
half-open ``[check_in, check_out)``, so a stay may start on the day the
previous one ends. The check-then-insert sequence runs under a row lock on
the room; on PostgreSQL the ``no_room_overlap`` exclusion constraint rejects
whatever slips past it.
"""
import logging
import math
from datetime import datetime, time

from flask import current_app
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import joinedload

from hotel_booking.models.user import db, utcnow
from hotel_booking.models.hotel import Room
from hotel_booking.models.booking import Booking, BOOKING_STATUSES
from hotel_booking.utils.responses import ApiError

logger = logging.getLogger(__name__)

DEFAULT_CANCELLATION_WINDOW_HOURS = 24


def count_nights(check_in, check_out):
    """Nights between two calendar dates."""
    return (check_out - check_in).days


def find_overlapping(room_id, check_in, check_out):
    """All confirmed bookings on ``room_id`` colliding with the range."""
    return Booking.query.filter(
        Booking.room_id == room_id,
        Booking.status == 'confirmed',
        Booking.check_in_date < check_out,
        Booking.check_out_date > check_in
    ).all()


def create_booking(caller_id, room_id, check_in, check_out, guests, now=None):
    if not caller_id:
        raise ApiError('UNAUTHORIZED', 401)

    if check_out <= check_in:
        raise ApiError('INVALID_REQUEST', 400)

    # Serialises concurrent bookings of the same room until commit
    room = Room.query.filter_by(id=room_id).with_for_update().first()
    if not room:
        raise ApiError('ROOM_NOT_FOUND', 404)

    if guests > room.max_occupancy:
        raise ApiError('INVALID_CAPACITY', 400)

    today = (now or utcnow()).date()
    if check_in < today or check_out < today:
        raise ApiError('INVALID_DATES', 400)

    if find_overlapping(room.id, check_in, check_out):
        db.session.rollback()
        logger.debug('Room %s already booked for %s..%s', room.id, check_in, check_out)
        raise ApiError('ROOM_NOT_AVAILABLE', 400)

    booking = Booking(
        user_id=caller_id,
        room_id=room.id,
        hotel_id=room.hotel_id,
        check_in_date=check_in,
        check_out_date=check_out,
        guests=guests,
        total_price=room.price_per_night * count_nights(check_in, check_out),
        status='confirmed'
    )

    db.session.add(booking)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        logger.warning('Overlap rejected by the store for room %s (%s..%s)', room_id, check_in, check_out)
        raise ApiError('ROOM_NOT_AVAILABLE', 400)

    logger.info('Booking %s created for room %s by user %s', booking.id, room.id, caller_id)
    return booking


def list_bookings(caller_id, status=None):
    if not caller_id:
        raise ApiError('UNAUTHORIZED', 401)

    if status is not None and status not in BOOKING_STATUSES:
        raise ApiError('INVALID_REQUEST', 400)

    query = Booking.query.options(
        joinedload(Booking.hotel),
        joinedload(Booking.room)
    ).filter(Booking.user_id == caller_id)

    if status:
        query = query.filter(Booking.status == status)

    return query.order_by(Booking.check_in_date, Booking.booking_date).all()


def hours_until(moment, now):
    return math.ceil((moment - now).total_seconds() / 3600)


def cancel_booking(caller_id, booking_id, now=None):
    if not caller_id:
        raise ApiError('UNAUTHORIZED', 401)

    booking = Booking.query.filter_by(id=booking_id).with_for_update().first() if booking_id else None
    if not booking:
        raise ApiError('BOOKING_NOT_FOUND', 404)

    if booking.user_id != caller_id:
        raise ApiError('FORBIDDEN', 403)

    if booking.cancelled_at is not None or booking.status == 'cancelled':
        raise ApiError('ALREADY_CANCELLED', 400)

    now = now or utcnow()
    window = current_app.config.get('CANCELLATION_WINDOW_HOURS', DEFAULT_CANCELLATION_WINDOW_HOURS)
    check_in_at = datetime.combine(booking.check_in_date, time.min)
    if hours_until(check_in_at, now) < window:
        raise ApiError('CANCELLATION_DEADLINE_PASSED', 400)

    booking.status = 'cancelled'
    booking.cancelled_at = now
    db.session.commit()

    logger.info('Booking %s cancelled by user %s', booking.id, caller_id)
    return booking
