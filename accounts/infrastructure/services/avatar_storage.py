"""
基于Django存储后端的头像存储实现。
"""
import uuid
from typing import Any

from django.conf import settings
from django.core.files.base import ContentFile
from django.core.files.storage import default_storage
from loguru import logger

from accounts.domain import AvatarStorage


class DjangoAvatarStorage(AvatarStorage):
    """
    头像保存在 default_storage 的 uploads/avatars/ 目录下。
    """

    def __init__(self, upload_dir: str = 'uploads/avatars/'):
        self.upload_dir = upload_dir

    def save(self, user_id: Any, extension: str, content: bytes) -> str:
        name = f"{self.upload_dir}{user_id}-{uuid.uuid4().hex[:8]}.{extension}"
        saved_name = default_storage.save(name, ContentFile(content))
        logger.info(f"头像已保存: {saved_name}")
        return default_storage.url(saved_name)

    def delete(self, url: str) -> None:
        """
        删除头像文件，只处理本存储生成的地址。

        Args:
            url: 头像地址
        """
        if not url:
            return
        name = url
        if name.startswith(settings.MEDIA_URL):
            name = name[len(settings.MEDIA_URL):]
        if not name.startswith(self.upload_dir):
            return
        if default_storage.exists(name):
            default_storage.delete(name)
            logger.info(f"头像已删除: {name}")
