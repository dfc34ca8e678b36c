from enum import Enum

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from fastapi.templating import Jinja2Templates
from starlette.responses import Response

from memos_web.dependencies import get_filter_session, get_persistence
from memos_web.exceptions import ValidationError
from memos_web.schemas import DurationIn, FilterValueIn, ShortcutRefIn
from memos_web.services.clause_registry import (
    FilterDimension,
    get_operators,
    get_value_domain,
)
from memos_web.services.filter_session import FilterSession
from memos_web.services.memo_filter import Duration
from memos_web.services.persistence import PersistenceAPI
from memos_web.utils import is_htmx_request

router = APIRouter()
templates = Jinja2Templates(directory="memos_web/templates")


class FilterField(str, Enum):
    TAG = "tag"
    TEXT = "text"
    TYPE = "type"
    VISIBILITY = "visibility"
    SHORTCUT = "shortcut"
    DURATION = "duration"


def _filter_response(request: Request, session: FilterSession) -> Response:
    state = session.filter
    if is_htmx_request(request):
        return templates.TemplateResponse(
            request=request,
            name="partials/memo_filter.html",
            context={"state": state, "shortcut": session.active_shortcut()},
        )
    return JSONResponse(state.to_dict())


@router.get("/")
def get_filter(request: Request, session: FilterSession = Depends(get_filter_session)) -> Response:
    """Current active filter."""
    return _filter_response(request, session)


@router.get("/dimensions")
def list_dimensions(
    session: FilterSession = Depends(get_filter_session),
    api: PersistenceAPI = Depends(get_persistence),
) -> list[dict]:
    """Filter dimensions with their operators and value domains."""
    tags = session.fetch_tags(api)
    result = []
    for dimension in FilterDimension:
        domain = get_value_domain(dimension, tags)
        result.append(
            {
                "type": dimension.value,
                "operators": [op.value for op in get_operators(dimension)],
                "values": list(domain) if domain is not None else None,
            }
        )
    return result


@router.put("/tag")
def set_tag(
    request: Request, body: FilterValueIn, session: FilterSession = Depends(get_filter_session)
) -> Response:
    session.set_tag(body.value)
    return _filter_response(request, session)


@router.put("/text")
def set_text(
    request: Request, body: FilterValueIn, session: FilterSession = Depends(get_filter_session)
) -> Response:
    session.set_text(body.value)
    return _filter_response(request, session)


@router.put("/type")
def set_memo_type(
    request: Request, body: FilterValueIn, session: FilterSession = Depends(get_filter_session)
) -> Response:
    try:
        session.set_memo_type(body.value)
    except ValueError as e:
        raise ValidationError("value-invalid", field="type") from e
    return _filter_response(request, session)


@router.put("/visibility")
def set_visibility(
    request: Request, body: FilterValueIn, session: FilterSession = Depends(get_filter_session)
) -> Response:
    try:
        session.set_visibility(body.value)
    except ValueError as e:
        raise ValidationError("value-invalid", field="visibility") from e
    return _filter_response(request, session)


@router.put("/shortcut")
def set_shortcut(
    request: Request, body: ShortcutRefIn, session: FilterSession = Depends(get_filter_session)
) -> Response:
    """Apply a shortcut on top of the ad-hoc criteria."""
    session.set_shortcut(body.shortcut_id)
    return _filter_response(request, session)


@router.put("/duration")
def set_duration(
    request: Request, body: DurationIn, session: FilterSession = Depends(get_filter_session)
) -> Response:
    session.set_duration(Duration(start=body.start, end=body.end))
    return _filter_response(request, session)


@router.delete("/{field}")
def clear_field(
    request: Request, field: FilterField, session: FilterSession = Depends(get_filter_session)
) -> Response:
    """Remove one criterion, leaving the others in place."""
    setters = {
        FilterField.TAG: session.set_tag,
        FilterField.TEXT: session.set_text,
        FilterField.TYPE: session.set_memo_type,
        FilterField.VISIBILITY: session.set_visibility,
        FilterField.SHORTCUT: session.set_shortcut,
        FilterField.DURATION: session.set_duration,
    }
    setters[field](None)
    return _filter_response(request, session)


@router.post("/clear")
def clear_filter(request: Request, session: FilterSession = Depends(get_filter_session)) -> Response:
    """Reset every criterion; the client calls this on each route change."""
    session.clear_filter()
    return _filter_response(request, session)
