from fastapi import HTTPException, status

from app.core.exceptions import NotFoundError, PermissionDeniedError


def http_error(e: Exception) -> HTTPException:
    """Map a service exception onto the matching HTTP error."""
    if isinstance(e, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    if isinstance(e, PermissionDeniedError):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


SERVICE_ERRORS = (NotFoundError, PermissionDeniedError, ValueError)
