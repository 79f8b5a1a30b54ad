import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from translation_api.dependencies import get_translation
from translation_api.drivers.base import Translation

router = APIRouter(prefix="/languages", tags=["languages"])
logger = logging.getLogger(__name__)


class LanguageIn(BaseModel):
    locale: str = Field(min_length=1)
    name: Optional[str] = None


@router.get("", response_model=Dict[str, str])
def list_languages(translation: Translation = Depends(get_translation)) -> Dict[str, str]:  # noqa: B008
    languages = translation.all_languages()
    logger.info("Languages listed", extra={"count": len(languages)})
    return languages


@router.post("", status_code=status.HTTP_201_CREATED)
def create_language(payload: LanguageIn, translation: Translation = Depends(get_translation)) -> Dict[str, Any]:  # noqa: B008
    # LanguageExists propagates to the 409 handler in main
    translation.add_language(payload.locale, payload.name)
    logger.info("Language created", extra={"language": payload.locale})
    return {"language": payload.locale, "name": payload.name}


@router.get("/{language}/groups", response_model=List[str])
def list_groups(language: str, translation: Translation = Depends(get_translation)) -> List[str]:  # noqa: B008
    return sorted(translation.get_groups_for(language))


@router.get("/{language}/missing")
def missing_translations(language: str, translation: Translation = Depends(get_translation)) -> Dict[str, Any]:  # noqa: B008
    missing = translation.find_missing_translations(language)
    logger.info("Missing translations listed", extra={"language": language})
    return missing
