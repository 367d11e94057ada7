"""Server-rendered page endpoints."""

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from greenfields.api.deps import RendererDep

router = APIRouter(tags=["pages"])


@router.api_route("/", methods=["GET", "HEAD"], response_class=HTMLResponse)
async def index(renderer: RendererDep) -> HTMLResponse:
    """Landing page."""
    return HTMLResponse(renderer.render("index.html", active_page="home"))


@router.api_route("/contact", methods=["GET", "HEAD"], response_class=HTMLResponse)
async def contact_page(renderer: RendererDep) -> HTMLResponse:
    """Contact page, with the Datastar-bound form rendered inline."""
    return HTMLResponse(renderer.render("contact.html", active_page="contact"))
