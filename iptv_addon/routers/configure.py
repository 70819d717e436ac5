"""
Configuration page and form endpoint.
"""
from pathlib import Path

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from iptv_addon.countries import COUNTRIES
from iptv_addon.services.context import AddonContext, get_context
from iptv_addon.services.preferences import split_form_list

router = APIRouter(tags=["configure"])

templates = Jinja2Templates(directory=str(Path(__file__).parent.parent / "templates"))


def manifest_url(request: Request, ctx: AddonContext) -> str:
    base = ctx.settings.public_url or str(request.base_url)
    return f"{base.rstrip('/')}/manifest.json"


@router.get("/", response_class=HTMLResponse)
async def configure_page(request: Request, ctx: AddonContext = Depends(get_context)):
    """Render the country/genre selection page."""
    data = await ctx.cache.get_catalog_data()
    current = ctx.store.current
    return templates.TemplateResponse(
        request,
        "configure.html",
        {
            "countries": sorted(COUNTRIES.items(), key=lambda item: item[1]),
            "genres": [(genre, genre) for genre in data.genres()],
            "selected": current.model_dump(),
            "manifest_url": manifest_url(request, ctx),
            "app_name": ctx.settings.app_name,
        },
    )


@router.post("/configure")
async def save_configuration(
    countries: str = Form(""),
    genres: str = Form(""),
    ctx: AddonContext = Depends(get_context),
):
    """Persist the selection and go back to the configuration page."""
    ctx.store.update(split_form_list(countries), split_form_list(genres))
    return RedirectResponse("/", status_code=303)
