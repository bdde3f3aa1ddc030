"""
Domain exceptions.

Services raise these; ``to_http_exception`` maps them onto HTTP status codes
and the global handler in ``app.main`` renders them as JSON.
"""
from fastapi import HTTPException, status


class TailorworksException(Exception):
    code = "DOMAIN_ERROR"
    http_status = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, code: str = None):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code


class EntityNotFoundException(TailorworksException):
    code = "NOT_FOUND"
    http_status = status.HTTP_404_NOT_FOUND

    def __init__(self, entity: str, entity_id):
        super().__init__(f"{entity} with id {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class BusinessRuleViolationException(TailorworksException):
    code = "BUSINESS_RULE_VIOLATION"


class InvalidStatusTransitionException(BusinessRuleViolationException):
    code = "INVALID_STATUS_TRANSITION"
    http_status = status.HTTP_409_CONFLICT

    def __init__(self, entity: str, from_status: str, to_status: str):
        super().__init__(f"{entity} cannot move from '{from_status}' to '{to_status}'")
        self.entity = entity
        self.from_status = from_status
        self.to_status = to_status


def to_http_exception(exc: TailorworksException) -> HTTPException:
    return HTTPException(
        status_code=exc.http_status,
        detail={"code": exc.code, "message": exc.message},
    )
