"""
Web 서비스 패키지

비즈니스 로직 처리
"""

from web.services.book_service import BookService

__all__ = [
    "BookService",
]
