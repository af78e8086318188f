from .preferences_service import PreferencesService

__all__ = ['PreferencesService']
