"""
Preferences Service - display settings kept in device storage.

Stored values that are not recognised read back as the default, so a
stale or hand-edited entry never breaks rendering.
"""
from uyghurly_app.core.error_handlers import ValidationError

THEME_KEY = 'uyghurly-theme'
FONT_SIZE_KEY = 'uyghurly-font-size'

THEMES = ('light', 'dark', 'auto')
FONT_SIZES = ('small', 'medium', 'large')

DEFAULT_THEME = 'light'
DEFAULT_FONT_SIZE = 'medium'

# Root text class applied for each font size.
FONT_SIZE_CLASSES = {
    'small': 'text-sm',
    'medium': 'text-base',
    'large': 'text-lg',
}


class PreferencesService:
    def __init__(self, storage):
        self.storage = storage

    def get_theme(self):
        value = self.storage.get_item(THEME_KEY)
        return value if value in THEMES else DEFAULT_THEME

    def set_theme(self, theme):
        if theme not in THEMES:
            raise ValidationError(
                f'Theme must be one of: {", ".join(THEMES)}.', errors={'theme': theme})
        self.storage.set_item(THEME_KEY, theme)
        return theme

    def get_font_size(self):
        value = self.storage.get_item(FONT_SIZE_KEY)
        return value if value in FONT_SIZES else DEFAULT_FONT_SIZE

    def set_font_size(self, font_size):
        if font_size not in FONT_SIZES:
            raise ValidationError(
                f'Font size must be one of: {", ".join(FONT_SIZES)}.', errors={'font_size': font_size})
        self.storage.set_item(FONT_SIZE_KEY, font_size)
        return font_size

    def get_preferences(self):
        font_size = self.get_font_size()
        return {
            'theme': self.get_theme(),
            'font_size': font_size,
            'font_size_class': FONT_SIZE_CLASSES[font_size],
        }

    def update_preferences(self, data):
        """Validate every given field before writing any of them."""
        theme = data.get('theme')
        font_size = data.get('font_size')

        errors = {}
        if theme is not None and theme not in THEMES:
            errors['theme'] = f'Theme must be one of: {", ".join(THEMES)}.'
        if font_size is not None and font_size not in FONT_SIZES:
            errors['font_size'] = f'Font size must be one of: {", ".join(FONT_SIZES)}.'
        if errors:
            raise ValidationError(next(iter(errors.values())), errors=errors)

        if theme is not None:
            self.set_theme(theme)
        if font_size is not None:
            self.set_font_size(font_size)
        return self.get_preferences()
