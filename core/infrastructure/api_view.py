"""
API视图基类。
所有接口视图继承 ApiBaseView，用统一的信封返回数据。
"""
from typing import Tuple

from rest_framework import status
from rest_framework.views import APIView

from core.infrastructure.response import ApiResponseBuilder, StatusCode


DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 50


def _positive_int(value, default: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number >= 1 else default


class ApiBaseView(APIView):
    """API视图基类"""

    def success_response(self, data=None, message="操作成功", code=StatusCode.SUCCESS):
        return ApiResponseBuilder.success(data=data, message=message, code=code)

    def created_response(self, data=None, message="创建成功", code=StatusCode.CREATED):
        """HTTP 201 响应"""
        return ApiResponseBuilder.created(data=data, message=message, code=code)

    def failed_response(self, message=None, code=StatusCode.BAD_REQUEST, data=None,
                        http_code=status.HTTP_400_BAD_REQUEST):
        return ApiResponseBuilder.fail(message=message, code=code, data=data, http_code=http_code)

    def invalid_response(self, serializer, message="请求数据无效"):
        """序列化器校验失败，字段错误放在data中"""
        return self.failed_response(message=message, code=StatusCode.VALIDATION_ERROR, data=serializer.errors)

    def paginated_response(self, items, total, page, page_size, message="查询成功", code=StatusCode.SUCCESS):
        return ApiResponseBuilder.paginated(
            items=items, total=total, page=page, page_size=page_size, message=message, code=code
        )

    def get_pagination_params(self, request) -> Tuple[int, int]:
        """
        解析分页参数。
        page 至少为1；limit 默认10，最大50；非法值回退为默认值。

        Returns:
            (page, limit) 元组
        """
        page = _positive_int(request.query_params.get('page'), 1)
        limit = _positive_int(request.query_params.get('limit'), DEFAULT_PAGE_SIZE)
        return page, min(limit, MAX_PAGE_SIZE)
