from flask import Blueprint, request

from hotel_booking.services import review_gate
from hotel_booking.utils.permissions import current_caller, permission_required
from hotel_booking.utils.responses import api_response, api_error
from hotel_booking.utils.validation import is_string

review_bp = Blueprint('review', __name__)


@review_bp.route('/reviews', methods=['POST'])
@permission_required('review:create')
def create_review():
    caller = current_caller()
    data = request.get_json(silent=True)

    if not isinstance(data, dict) or not is_string(data.get('bookingId')):
        return api_error('INVALID_REQUEST', 400)

    review = review_gate.submit_review(
        caller['id'],
        data.get('bookingId'),
        data.get('rating'),
        data.get('comment')
    )

    return api_response(review.to_dict(), 201)
