from starlette import status

from api.exceptions.api_exception import APIException


class EventNotFoundException(APIException):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "Event not found"
    description = "The referenced event does not exist."
