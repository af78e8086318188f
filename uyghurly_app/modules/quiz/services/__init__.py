from .quiz_service import QuizService, get_quiz_service

__all__ = ['QuizService', 'get_quiz_service']
