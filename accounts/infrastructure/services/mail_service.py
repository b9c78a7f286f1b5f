"""
基于 django.core.mail 的邮件服务实现。
"""
from django.conf import settings
from django.core.mail import send_mail
from loguru import logger

from accounts.domain import MailService


class DjangoMailService(MailService):
    """使用Django配置的 EMAIL_BACKEND 发送邮件"""

    def send(self, subject: str, message: str, recipient: str) -> None:
        send_mail(
            subject=subject,
            message=message,
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[recipient],
            fail_silently=False,
        )
        logger.info(f"邮件已发送: {subject} -> {recipient}")
