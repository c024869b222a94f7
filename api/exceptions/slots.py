from starlette import status

from api.exceptions.api_exception import APIException


class SlotNotFoundException(APIException):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "Slot not found"
    description = "The requested slot does not exist."


class SlotNotAvailableException(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Slot is not available"
    description = "The requested slot has already been booked."


class SlotNotBookedException(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Slot is not booked"
    description = "The requested slot has no booking that could be cancelled."
