"""
日志配置。
API层和异常处理器使用标准库 logging，由 Django 的 LOGGING 配置；
应用层和基础设施层使用 loguru，由 configure_loguru 配置输出位置和级别。
"""
import os
import sys
from typing import Dict, Optional

from loguru import logger

APP_LOGGERS = ('core', 'accounts', 'products', 'carts', 'orders', 'dashboard')

VERBOSE_FORMAT = '{levelname} {asctime} {module} {process:d} {thread:d} {message}'


def file_handler(path: str, level: str, rotating: bool) -> Dict:
    handler = {
        'level': level,
        'filename': path,
        'formatter': 'verbose',
    }
    if rotating:
        handler.update({
            'class': 'logging.handlers.RotatingFileHandler',
            'maxBytes': 10 * 1024 * 1024,
            'backupCount': 10,
        })
    else:
        handler['class'] = 'logging.FileHandler'
    return handler


def build_logging(console_level: str, app_level: str, log_dir: Optional[str] = None,
                  rotating: bool = False) -> Dict:
    """
    生成 Django LOGGING 配置。

    Args:
        console_level: 控制台输出级别
        app_level: 业务模块logger的级别
        log_dir: 日志目录，为None时只输出到控制台
        rotating: 是否按大小滚动日志文件，同时单独记录错误日志

    Returns:
        LOGGING 字典
    """
    handlers = {
        'console': {
            'level': console_level,
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    }
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        handlers['file'] = file_handler(os.path.join(log_dir, 'django.log'), 'INFO', rotating)
        if rotating:
            handlers['error_file'] = file_handler(os.path.join(log_dir, 'error.log'), 'ERROR', rotating)
    names = list(handlers)

    return {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'verbose': {'format': VERBOSE_FORMAT, 'style': '{'},
        },
        'handlers': handlers,
        'loggers': {
            'django': {'handlers': names, 'level': max(console_level, 'INFO', key=_rank), 'propagate': False},
            **{app: {'handlers': names, 'level': app_level, 'propagate': False} for app in APP_LOGGERS},
        },
    }


def _rank(level: str) -> int:
    return ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL').index(level)


def configure_loguru(level: str, log_dir: Optional[str] = None) -> None:
    """
    重新配置 loguru 的输出。

    Args:
        level: 最低输出级别
        log_dir: 日志目录，提供时额外写入按10MB滚动、保留10个的 app.log
    """
    logger.remove()
    logger.add(sys.stderr, level=level)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        logger.add(
            os.path.join(log_dir, 'app.log'),
            level=level,
            rotation='10 MB',
            retention=10,
            encoding='utf-8',
            enqueue=True,
        )
