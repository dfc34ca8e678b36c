from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse
from fastapi.templating import Jinja2Templates
from starlette.responses import Response

from memos_web.dependencies import get_filter_session, get_persistence
from memos_web.schemas import ChangeDimensionIn, ClauseListIn, ShortcutIn
from memos_web.services import clause_editor
from memos_web.services.filter_session import FilterSession
from memos_web.services.persistence import PersistenceAPI
from memos_web.services.shortcut_payload import ShortcutData, clause_to_dict
from memos_web.utils import is_htmx_request

router = APIRouter()
templates = Jinja2Templates(directory="memos_web/templates")


def _shortcut_list_response(request: Request, session: FilterSession) -> Response:
    shortcuts = session.shortcuts
    if is_htmx_request(request):
        return templates.TemplateResponse(
            request=request,
            name="partials/shortcut_list.html",
            context={"shortcuts": shortcuts, "active_shortcut_id": session.filter.shortcut_id},
        )
    return JSONResponse([s.to_dict() for s in shortcuts])


def _get_cached_shortcut(
    session: FilterSession, api: PersistenceAPI, shortcut_id: int
) -> ShortcutData:
    shortcut = session.get_shortcut(shortcut_id)
    if shortcut is None:
        session.fetch_shortcuts(api)
        shortcut = session.get_shortcut(shortcut_id)
    if shortcut is None:
        raise HTTPException(status_code=404, detail="Shortcut not found")
    return shortcut


@router.get("/")
def list_shortcuts(
    request: Request,
    session: FilterSession = Depends(get_filter_session),
    api: PersistenceAPI = Depends(get_persistence),
) -> Response:
    """List shortcuts, pinned first."""
    session.fetch_shortcuts(api)
    return _shortcut_list_response(request, session)


@router.post("/", status_code=201)
def create_shortcut(
    body: ShortcutIn,
    session: FilterSession = Depends(get_filter_session),
    api: PersistenceAPI = Depends(get_persistence),
) -> dict:
    """Validate and persist a new shortcut."""
    shortcut = session.create_shortcut(api, body.title, body.to_clauses())
    return shortcut.to_dict()


@router.patch("/{shortcut_id}")
def update_shortcut(
    shortcut_id: int,
    body: ShortcutIn,
    session: FilterSession = Depends(get_filter_session),
    api: PersistenceAPI = Depends(get_persistence),
) -> dict:
    """Validate and save an edited shortcut."""
    shortcut = session.update_shortcut(api, shortcut_id, body.title, body.to_clauses())
    return shortcut.to_dict()


@router.post("/{shortcut_id}/pin")
def toggle_pin(
    request: Request,
    shortcut_id: int,
    session: FilterSession = Depends(get_filter_session),
    api: PersistenceAPI = Depends(get_persistence),
) -> Response:
    """Pin or unpin a shortcut."""
    _get_cached_shortcut(session, api, shortcut_id)
    session.toggle_pin(api, shortcut_id)
    return _shortcut_list_response(request, session)


@router.delete("/{shortcut_id}")
def delete_shortcut(
    request: Request,
    shortcut_id: int,
    session: FilterSession = Depends(get_filter_session),
    api: PersistenceAPI = Depends(get_persistence),
) -> Response:
    """Delete a shortcut and drop it from the active filter."""
    session.delete_shortcut(api, shortcut_id)
    return _shortcut_list_response(request, session)


@router.get("/{shortcut_id}/clauses")
def get_shortcut_clauses(
    shortcut_id: int,
    session: FilterSession = Depends(get_filter_session),
    api: PersistenceAPI = Depends(get_persistence),
) -> list[dict]:
    """Decoded clauses of a shortcut, for the edit dialog."""
    shortcut = _get_cached_shortcut(session, api, shortcut_id)
    return [clause_to_dict(c) for c in shortcut.clauses]


@router.post("/clauses/append")
def append_clause(body: ClauseListIn) -> list[dict]:
    """Add an empty clause to the edited sequence."""
    clauses = clause_editor.append_clause(body.to_clauses())
    return [clause_to_dict(c) for c in clauses]


@router.post("/clauses/dimension")
def change_dimension(body: ChangeDimensionIn) -> list[dict]:
    """Switch one clause of the edited sequence to another dimension."""
    try:
        clauses = clause_editor.change_dimension(body.to_clauses(), body.index, body.dimension)
    except IndexError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return [clause_to_dict(c) for c in clauses]
