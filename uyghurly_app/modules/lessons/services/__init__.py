from .lesson_loader import LessonLoader, get_lesson_loader

__all__ = ['LessonLoader', 'get_lesson_loader']
