from functools import lru_cache

from fastapi import Depends

from translation_api.config import Settings
from translation_api.drivers.base import Translation
from translation_api.manager import resolve_driver


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()


def get_translation(settings: Settings = Depends(get_settings)) -> Translation:  # noqa: B008
    # One driver per request: the database driver's cache never outlives it
    return resolve_driver(settings.driver, settings)
