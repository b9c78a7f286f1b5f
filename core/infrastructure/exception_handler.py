"""
统一异常处理器。
配置为DRF的 EXCEPTION_HANDLER，把领域异常、Django异常和DRF异常都转换为统一的响应信封。
"""
import logging

from django.core.exceptions import PermissionDenied, ValidationError
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import (
    APIException,
    AuthenticationFailed,
    NotAuthenticated,
    NotFound,
    PermissionDenied as DRFPermissionDenied,
    ValidationError as DRFValidationError,
)

from core.domain.exceptions import (
    AuthorizationException,
    BusinessRuleViolationException,
    DomainException,
    DuplicateEntityException,
    EntityNotFoundException,
    InsufficientStockException,
    InvalidEntityStateException,
    ValidationException,
)
from core.infrastructure.response import ApiResponseBuilder, StatusCode

logger = logging.getLogger(__name__)


# 领域异常 -> (业务状态码, HTTP状态码)
DOMAIN_ERRORS = {
    EntityNotFoundException: (StatusCode.ENTITY_NOT_FOUND, status.HTTP_404_NOT_FOUND),
    ValidationException: (StatusCode.VALIDATION_ERROR, status.HTTP_400_BAD_REQUEST),
    InsufficientStockException: (StatusCode.PRODUCT_STOCK_INSUFFICIENT, status.HTTP_400_BAD_REQUEST),
    InvalidEntityStateException: (StatusCode.ORDER_STATUS_INVALID, status.HTTP_400_BAD_REQUEST),
    BusinessRuleViolationException: (StatusCode.BAD_REQUEST, status.HTTP_400_BAD_REQUEST),
    DuplicateEntityException: (StatusCode.DUPLICATE_ENTITY, status.HTTP_409_CONFLICT),
    AuthorizationException: (StatusCode.FORBIDDEN, status.HTTP_403_FORBIDDEN),
}


def _domain_error_codes(exc: DomainException):
    for exc_type in type(exc).__mro__:
        if exc_type in DOMAIN_ERRORS:
            return DOMAIN_ERRORS[exc_type]
    return StatusCode.BAD_REQUEST, status.HTTP_400_BAD_REQUEST


def _framework_error(exc):
    """
    Django和DRF异常 -> (业务状态码, HTTP状态码, 消息, 详情)。
    不认识的异常返回None。
    """
    if isinstance(exc, NotAuthenticated):
        return StatusCode.UNAUTHORIZED, status.HTTP_401_UNAUTHORIZED, None, None
    if isinstance(exc, AuthenticationFailed):
        return StatusCode.TOKEN_INVALID, status.HTTP_401_UNAUTHORIZED, None, None
    if isinstance(exc, DRFPermissionDenied):
        return StatusCode.FORBIDDEN, status.HTTP_403_FORBIDDEN, str(exc.detail), None
    if isinstance(exc, PermissionDenied):
        return StatusCode.FORBIDDEN, status.HTTP_403_FORBIDDEN, None, None
    if isinstance(exc, (Http404, NotFound)):
        return StatusCode.NOT_FOUND, status.HTTP_404_NOT_FOUND, None, None
    if isinstance(exc, DRFValidationError):
        return StatusCode.VALIDATION_ERROR, status.HTTP_400_BAD_REQUEST, None, exc.detail
    if isinstance(exc, ValidationError):
        return StatusCode.VALIDATION_ERROR, status.HTTP_400_BAD_REQUEST, None, exc.messages
    if isinstance(exc, APIException):
        return StatusCode.BAD_REQUEST, exc.status_code, str(exc.detail), None
    return None


def unified_exception_handler(exc, context):
    """
    统一异常处理器。

    领域异常按 DOMAIN_ERRORS 映射，消息和 details() 原样返回；
    框架异常使用状态码的默认消息；其余异常记录堆栈并返回500。

    Args:
        exc: 异常对象
        context: DRF异常上下文

    Returns:
        统一格式的响应
    """
    request = context.get('request')
    request_line = f"{request.method} {request.path}" if request else "-"

    if isinstance(exc, DomainException):
        code, http_code = _domain_error_codes(exc)
        logger.warning(f"业务异常: {request_line} {exc.__class__.__name__}: {exc}")
        return ApiResponseBuilder.fail(message=exc.message, code=code, data=exc.details(), http_code=http_code)

    mapped = _framework_error(exc)
    if mapped is not None:
        code, http_code, message, data = mapped
        return ApiResponseBuilder.fail(message=message, code=code, data=data, http_code=http_code)

    logger.exception(f"未处理的异常: {request_line} {exc.__class__.__name__}: {exc}")
    return ApiResponseBuilder.fail(
        code=StatusCode.SERVER_ERROR,
        http_code=status.HTTP_500_INTERNAL_SERVER_ERROR
    )
