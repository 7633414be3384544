"""
API Routes for dictionary words.

Endpoints
---------
- `GET /words`: List words with their base word and translations.
- `GET /words/search?q=&lang=`: Substring search over base words and translations.
- `GET /words/{id}`: Full entity tree of one word.
- `GET /words/{id}/translations?targetLang=`: Translations of one word.

Errors are raised as `HTTPException` / `ValueError` and rendered as
`{"error": message}` by the handlers registered in `polydict.api.app`.
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, HTTPException, Path, Query, status

from polydict.api.deps import SessionDep
from polydict.api.schemas import ErrorOut, TranslationOut, WordDetail, WordSummary
from polydict.core.contracts.language import Language, parse_language
from polydict.store import queries

router = APIRouter(prefix="/words", tags=["Words"])

# Store primary keys are signed 64-bit integers.
WordPk = Annotated[int, Path(ge=1, le=2**63 - 1, description="Primary key of the word.")]

ERRORS: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorOut, "description": "Bad path or query parameter"},
    404: {"model": ErrorOut, "description": "Word not found"},
}


def _language_or_none(value: str | None) -> Language | None:
    """Resolve an optional language query parameter; bad codes become HTTP 400."""
    if value is None or not value.strip():
        return None
    return parse_language(value)


@router.get(
    "", response_model=list[WordSummary], summary="List words", responses={400: ERRORS[400]}
)
def list_words(
    session: SessionDep,
    limit: Annotated[int, Query(ge=1, le=500)] = 100,
    offset: Annotated[int, Query(ge=0)] = 0,
) -> list[WordSummary]:
    words = queries.list_words(session, limit=limit, offset=offset)
    return [WordSummary.model_validate(w) for w in words]


@router.get(
    "/search",
    response_model=list[WordSummary],
    summary="Search words",
    responses={400: ERRORS[400]},
)
def search_words(
    session: SessionDep,
    q: Annotated[str, Query(min_length=1, description="Text to look for.")],
    lang: Annotated[str | None, Query(description="Restrict to one language code.")] = None,
    limit: Annotated[int, Query(ge=1, le=100)] = 20,
) -> list[WordSummary]:
    """
    Case-insensitive substring search, e.g. `/words/search?q=haus&lang=de`.
    """
    words = queries.search_words(session, q, _language_or_none(lang), limit=limit)
    return [WordSummary.model_validate(w) for w in words]


@router.get(
    "/{word_pk}", response_model=WordDetail, summary="Get one word", responses=ERRORS
)
def get_word(session: SessionDep, word_pk: WordPk) -> WordDetail:
    word = queries.get_word(session, word_pk)
    if word is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Word {word_pk} not found",
        )
    return WordDetail.model_validate(word)


@router.get(
    "/{word_pk}/translations",
    response_model=list[TranslationOut],
    summary="Get translations of one word",
    responses=ERRORS,
)
def get_translations(
    session: SessionDep,
    word_pk: WordPk,
    target_lang: Annotated[str | None, Query(alias="targetLang")] = None,
) -> list[TranslationOut]:
    translations = queries.get_translations(session, word_pk, _language_or_none(target_lang))
    if translations is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Word {word_pk} not found",
        )
    return [TranslationOut.model_validate(t) for t in translations]


__all__ = ["router"]
