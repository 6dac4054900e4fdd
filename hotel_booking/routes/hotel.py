import logging

from flask import Blueprint, request
from flask_jwt_extended import jwt_required
from sqlalchemy import and_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload

from hotel_booking.models.user import db
from hotel_booking.models.hotel import Hotel, Room
from hotel_booking.utils.permissions import current_caller, permission_required
from hotel_booking.utils.responses import api_response, api_error
from hotel_booking.utils.validation import (
    is_int,
    is_optional_string,
    is_string,
    is_string_list,
    parse_number_arg,
    parse_price,
)

logger = logging.getLogger(__name__)

hotel_bp = Blueprint('hotel', __name__)


@hotel_bp.route('/hotels', methods=['POST'])
@permission_required('hotel:create')
def create_hotel():
    owner = current_caller()
    data = request.get_json(silent=True)

    if not isinstance(data, dict):
        return api_error('INVALID_REQUEST', 400)

    # Validate required fields
    for field in ['name', 'city', 'country']:
        if not is_string(data.get(field)):
            return api_error('INVALID_REQUEST', 400)

    amenities = data.get('amenities')
    if amenities is None:
        amenities = []
    if not is_string_list(amenities) or not is_optional_string(data.get('description')):
        return api_error('INVALID_REQUEST', 400)

    new_hotel = Hotel(
        owner_id=owner['id'],
        name=data.get('name'),
        description=data.get('description'),
        city=data.get('city'),
        country=data.get('country'),
        amenities=amenities,
        rating=0.0,
        total_reviews=0
    )

    db.session.add(new_hotel)
    db.session.commit()

    logger.info('Hotel %s created by owner %s', new_hotel.id, owner['id'])
    return api_response(new_hotel.to_dict(), 201)


@hotel_bp.route('/hotels/<hotel_id>/rooms', methods=['POST'])
@permission_required('room:create')
def create_room(hotel_id):
    owner = current_caller()
    data = request.get_json(silent=True)

    if not isinstance(data, dict):
        return api_error('INVALID_REQUEST', 400)

    price = parse_price(data.get('pricePerNight'))
    max_occupancy = data.get('maxOccupancy')
    if (
        not is_string(data.get('roomNumber'))
        or not is_string(data.get('roomType'))
        or price is None
        or not is_int(max_occupancy)
        or max_occupancy < 1
    ):
        return api_error('INVALID_REQUEST', 400)

    hotel = db.session.get(Hotel, hotel_id)
    if not hotel:
        return api_error('HOTEL_NOT_FOUND', 404)

    if hotel.owner_id != owner['id']:
        return api_error('FORBIDDEN', 403)

    existing_room = Room.query.filter_by(hotel_id=hotel.id, room_number=data.get('roomNumber')).first()
    if existing_room:
        return api_error('ROOM_ALREADY_EXISTS', 400)

    new_room = Room(
        hotel_id=hotel.id,
        room_number=data.get('roomNumber'),
        room_type=data.get('roomType'),
        price_per_night=price,
        max_occupancy=int(max_occupancy)
    )

    db.session.add(new_room)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        return api_error('ROOM_ALREADY_EXISTS', 400)

    logger.info('Room %s (%s) added to hotel %s', new_room.id, new_room.room_number, hotel.id)
    return api_response(new_room.to_dict(), 201)


@hotel_bp.route('/hotels', methods=['GET'])
@jwt_required()
def get_hotels():
    # Get query parameters for filtering
    city = request.args.get('city')
    country = request.args.get('country')
    min_price, min_price_ok = parse_number_arg(request.args.get('minPrice'))
    max_price, max_price_ok = parse_number_arg(request.args.get('maxPrice'))
    min_rating, min_rating_ok = parse_number_arg(request.args.get('minRating'))

    if not (min_price_ok and max_price_ok and min_rating_ok):
        return api_error('INVALID_REQUEST', 400)

    room_filters = []
    if min_price is not None:
        room_filters.append(Room.price_per_night >= min_price)
    if max_price is not None:
        room_filters.append(Room.price_per_night <= max_price)

    # Base query: only hotels with at least one room in the price range
    room_filter = Hotel.rooms.any(and_(*room_filters)) if room_filters else Hotel.rooms.any()
    query = Hotel.query.options(selectinload(Hotel.rooms)).filter(room_filter)

    # Apply filters if provided
    if city:
        query = query.filter(Hotel.city.icontains(city, autoescape=True))
    if country:
        query = query.filter(Hotel.country.icontains(country, autoescape=True))
    if min_rating is not None:
        query = query.filter(Hotel.rating >= min_rating)

    hotels_list = []
    for hotel in query.order_by(Hotel.created_at).all():
        prices = [
            float(room.price_per_night)
            for room in hotel.rooms
            if (min_price is None or room.price_per_night >= min_price)
            and (max_price is None or room.price_per_night <= max_price)
        ]
        data = hotel.to_dict(include_created=False)
        del data['ownerId']
        data['minPricePerNight'] = min(prices)
        hotels_list.append(data)

    return api_response(hotels_list, 200)


@hotel_bp.route('/hotels/<hotel_id>', methods=['GET'])
@jwt_required()
def get_hotel(hotel_id):
    hotel = db.session.get(Hotel, hotel_id)

    if not hotel:
        return api_error('HOTEL_NOT_FOUND', 404)

    data = hotel.to_dict(include_created=False)
    data['rooms'] = [room.to_dict(include_hotel=False) for room in hotel.rooms]

    return api_response(data, 200)
