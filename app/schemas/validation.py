"""Input sanitisation helpers with XSS protection"""

import re
import bleach

# Allowed HTML tags for user input
ALLOWED_TAGS = ['b', 'i', 'u', 'em', 'strong', 'p', 'br']

# Classifications accepted for Movie.rating
MOVIE_RATINGS = ('G', 'PG', 'PG-13', 'R', 'NC-17', 'TE', 'T', '+13', '+16', '+18')


class SafeStringMixin:
    """Mixin for XSS-safe string validation"""

    @staticmethod
    def sanitize_html(value: str) -> str:
        """Remove dangerous HTML/JavaScript"""
        if not value:
            return value
        return bleach.clean(value, tags=ALLOWED_TAGS, strip=True)

    @staticmethod
    def validate_no_script(value: str) -> str:
        """Block common XSS patterns"""
        if not value:
            return value

        dangerous_patterns = [
            r'<script[^>]*>',
            r'javascript:',
            r'on\w+\s*=',
            r'<iframe',
        ]

        for pattern in dangerous_patterns:
            if re.search(pattern, value, re.IGNORECASE):
                raise ValueError("Invalid characters detected")

        return value


def validate_movie_rating(value: str) -> str:
    """Validate a classification against the accepted list"""
    if value not in MOVIE_RATINGS:
        raise ValueError(f"Invalid rating. Allowed: {', '.join(MOVIE_RATINGS)}")
    return value
