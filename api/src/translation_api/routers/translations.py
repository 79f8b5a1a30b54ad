import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from translation_api.dependencies import get_translation
from translation_api.drivers.base import GROUP, SINGLE, Translation
from translation_api.tree import is_single_group, join_group

router = APIRouter(prefix="/languages", tags=["translations"])
logger = logging.getLogger(__name__)


class TranslationIn(BaseModel):
    key: str = Field(min_length=1)
    value: str
    group: Optional[str] = None
    namespace: Optional[str] = None


class TranslationUpdate(BaseModel):
    group: str = Field(min_length=1)
    key: str = Field(min_length=1)
    value: Optional[str] = None


@router.get("/{language}/translations")
def list_translations(
    language: str,
    source_language: Optional[str] = None,
    filter: Optional[str] = None,  # noqa: A002
    group: Optional[str] = None,
    translation: Translation = Depends(get_translation),  # noqa: B008
) -> Dict[str, Any]:
    translations = translation.filter_translations_for(language, source_language, filter)
    if group == SINGLE:
        translations = {SINGLE: translations.get(SINGLE, {})}
    elif group:
        translations = {GROUP: {name: rows for name, rows in translations.get(GROUP, {}).items() if name == group}}
    logger.info(
        "Translations listed",
        extra={"language": language, "source_language": source_language, "filter": filter, "group": group},
    )
    return translations


@router.post("/{language}/translations", status_code=status.HTTP_201_CREATED)
def create_translation(
    language: str,
    payload: TranslationIn,
    translation: Translation = Depends(get_translation),  # noqa: B008
) -> Dict[str, Any]:
    if payload.group:
        group = join_group(payload.namespace, payload.group)
        translation.add_group_translation(language, group, payload.key, payload.value)
    else:
        group = SINGLE
        translation.add_single_translation(language, SINGLE, payload.key, payload.value)
    logger.info("Translation created", extra={"language": language, "group": group, "key": payload.key})
    return {"language": language, "group": group, "key": payload.key, "value": payload.value}


@router.post("/{language}")
def update_translation(
    language: str,
    payload: TranslationUpdate,
    translation: Translation = Depends(get_translation),  # noqa: B008
) -> Dict[str, bool]:
    value = payload.value or ""
    if is_single_group(payload.group):
        translation.add_single_translation(language, payload.group, payload.key, value)
    else:
        translation.add_group_translation(language, payload.group, payload.key, value)
    logger.info("Translation updated", extra={"language": language, "group": payload.group, "key": payload.key})
    return {"success": True}
