"""
统一响应封装模块。
所有接口返回同一种信封：
{code, success, message, timestamp, traceId, data?}
金额等Decimal值由调用方转换为字符串后放入data。
"""
import time
import uuid
import typing as t
from dataclasses import dataclass, field

from rest_framework import status as http_status
from rest_framework.response import Response


class StatusCode:
    """业务状态码定义"""

    # 成功 (100xx)
    SUCCESS = 10000
    CREATED = 10001
    UPDATED = 10002
    DELETED = 10003

    # 请求错误 (400xx)
    BAD_REQUEST = 40000
    VALIDATION_ERROR = 40001
    MISSING_PARAM = 40003

    # 认证和授权 (401xx-403xx)
    UNAUTHORIZED = 40100
    LOGIN_FAILED = 40101
    TOKEN_INVALID = 40102
    FORBIDDEN = 40300

    # 资源 (404xx, 409xx)
    NOT_FOUND = 40400
    ENTITY_NOT_FOUND = 40401
    DUPLICATE_ENTITY = 40902

    # 商品和订单 (410xx, 411xx)
    PRODUCT_STOCK_INSUFFICIENT = 41001
    ORDER_STATUS_INVALID = 41103

    SERVER_ERROR = 50000


DEFAULT_MESSAGES = {
    StatusCode.SUCCESS: "操作成功",
    StatusCode.CREATED: "创建成功",
    StatusCode.UPDATED: "更新成功",
    StatusCode.DELETED: "删除成功",
    StatusCode.BAD_REQUEST: "请求参数错误",
    StatusCode.VALIDATION_ERROR: "数据验证失败",
    StatusCode.MISSING_PARAM: "缺少必要参数",
    StatusCode.UNAUTHORIZED: "请先登录",
    StatusCode.LOGIN_FAILED: "邮箱或密码错误",
    StatusCode.TOKEN_INVALID: "身份验证失败",
    StatusCode.FORBIDDEN: "权限不足",
    StatusCode.NOT_FOUND: "资源不存在",
    StatusCode.ENTITY_NOT_FOUND: "资源不存在",
    StatusCode.DUPLICATE_ENTITY: "资源已存在",
    StatusCode.PRODUCT_STOCK_INSUFFICIENT: "商品库存不足",
    StatusCode.ORDER_STATUS_INVALID: "订单状态不允许该操作",
    StatusCode.SERVER_ERROR: "服务器内部错误",
}


@dataclass
class ApiResponse:
    """响应信封"""
    code: int = StatusCode.SUCCESS
    success: bool = True
    message: str = ""
    data: t.Any = None
    timestamp: int = field(default_factory=lambda: int(time.time() * 1000))
    trace_id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def to_dict(self) -> dict:
        body = {
            "code": self.code,
            "success": self.success,
            "message": self.message or DEFAULT_MESSAGES.get(self.code, ""),
            "timestamp": self.timestamp,
            "traceId": self.trace_id,
        }
        # data 为None时不输出该字段
        if self.data is not None:
            body["data"] = self.data
        return body


def page_payload(items: list, total: int, page: int, page_size: int) -> dict:
    """分页数据：{items, pagination{total, page, pageSize, hasMore}}"""
    return {
        "items": items,
        "pagination": {
            "total": total,
            "page": page,
            "pageSize": page_size,
            "hasMore": page * page_size < total,
        },
    }


class ApiResponseBuilder:
    """按信封格式构建DRF响应"""

    @staticmethod
    def build(code: int, success: bool, message: t.Optional[str] = None, data: t.Any = None,
              http_code: int = http_status.HTTP_200_OK) -> Response:
        envelope = ApiResponse(code=code, success=success, message=message or "", data=data)
        return Response(envelope.to_dict(), status=http_code)

    @classmethod
    def success(cls, data: t.Any = None, message: t.Optional[str] = None,
                code: int = StatusCode.SUCCESS) -> Response:
        return cls.build(code, True, message, data)

    @classmethod
    def created(cls, data: t.Any = None, message: t.Optional[str] = None,
                code: int = StatusCode.CREATED) -> Response:
        return cls.build(code, True, message, data, http_status.HTTP_201_CREATED)

    @classmethod
    def fail(cls, message: t.Optional[str] = None, code: int = StatusCode.BAD_REQUEST, data: t.Any = None,
             http_code: int = http_status.HTTP_400_BAD_REQUEST) -> Response:
        """
        失败响应。

        Args:
            message: 错误消息，为空时使用状态码的默认消息
            code: 业务状态码
            data: 错误详情，例如字段校验错误
            http_code: HTTP状态码
        """
        return cls.build(code, False, message, data, http_code)

    @classmethod
    def paginated(cls, items: list, total: int, page: int, page_size: int,
                  message: t.Optional[str] = None, code: int = StatusCode.SUCCESS) -> Response:
        return cls.build(code, True, message, page_payload(items, total, page, page_size))
