"""Application settings read from the environment."""

import os


class AppConfig:
    """Runtime settings. Read lazily so tests can patch the environment."""

    @staticmethod
    def supabase_url() -> str:
        return os.environ.get("SUPABASE_URL", "").strip()

    @staticmethod
    def supabase_key() -> str:
        key = os.environ.get("SUPABASE_SERVICE_ROLE_KEY") or os.environ.get("SUPABASE_ANON_KEY", "")
        return key.strip()

    @staticmethod
    def holiday_country() -> str:
        return os.environ.get("HOLIDAY_COUNTRY", "JP").upper()

    @staticmethod
    def recent_activity_limit() -> int:
        try:
            return max(1, int(os.environ.get("RECENT_ACTIVITY_LIMIT", "10")))
        except ValueError:
            return 10

    @staticmethod
    def display_timezone() -> str:
        return os.environ.get("DISPLAY_TIMEZONE", "Asia/Tokyo")
