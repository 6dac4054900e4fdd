from flask import Blueprint, request

from hotel_booking.services import booking_ledger
from hotel_booking.utils.permissions import current_caller, permission_required
from hotel_booking.utils.responses import api_response, api_error
from hotel_booking.utils.validation import is_int, is_string, parse_date

booking_bp = Blueprint('booking', __name__)


@booking_bp.route('/bookings', methods=['POST'])
@permission_required('booking:create')
def create_booking():
    caller = current_caller()
    data = request.get_json(silent=True)

    if not isinstance(data, dict):
        return api_error('INVALID_REQUEST', 400)

    check_in_date = parse_date(data.get('checkInDate'))
    check_out_date = parse_date(data.get('checkOutDate'))
    guests = data.get('guests')

    if (
        not is_string(data.get('roomId'))
        or check_in_date is None
        or check_out_date is None
        or not is_int(guests)
        or guests < 1
    ):
        return api_error('INVALID_REQUEST', 400)

    booking = booking_ledger.create_booking(
        caller['id'],
        data.get('roomId'),
        check_in_date,
        check_out_date,
        int(guests)
    )

    return api_response(booking.to_dict(), 201)


@booking_bp.route('/bookings', methods=['GET'])
@permission_required('booking:list')
def get_bookings():
    caller = current_caller()
    status = request.args.get('status') or None

    bookings = booking_ledger.list_bookings(caller['id'], status)
    bookings_list = [booking.to_list_dict() for booking in bookings]

    return api_response(bookings_list, 200)


@booking_bp.route('/bookings/<booking_id>/cancel', methods=['PUT'])
@permission_required('booking:cancel')
def cancel_booking(booking_id):
    caller = current_caller()

    booking = booking_ledger.cancel_booking(caller['id'], booking_id)

    return api_response(booking.to_cancel_dict(), 200)
