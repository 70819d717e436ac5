"""
Stremio addon protocol endpoints.
"""
from fastapi import APIRouter, Depends
from typing import Optional

from iptv_addon.services.addon import build_catalog, build_manifest, build_meta, build_streams
from iptv_addon.services.context import AddonContext, get_context

router = APIRouter(tags=["addon"])


@router.get("/manifest.json")
async def get_manifest(ctx: AddonContext = Depends(get_context)):
    """
    Addon manifest with one catalog per allowed country.
    """
    manifest = await build_manifest(ctx)
    return manifest.model_dump(exclude_none=True)


@router.get("/catalog/{type}/{catalog_id}.json")
@router.get("/catalog/{type}/{catalog_id}/{extra:path}.json")
async def get_catalog(
    type: str,
    catalog_id: str,
    extra: Optional[str] = None,
    ctx: AddonContext = Depends(get_context),
):
    """
    List channels of a catalog.

    - **catalog_id**: `iptv-all` or `iptv-country-<code>`
    - **extra**: query-string style filters, e.g. `search=news&genre=Sports`
    """
    metas = await build_catalog(ctx, catalog_id, extra)
    return {"metas": [meta.model_dump(exclude_none=True) for meta in metas]}


@router.get("/meta/{type}/{meta_id}.json")
async def get_meta(type: str, meta_id: str, ctx: AddonContext = Depends(get_context)):
    """
    Get a single channel. Unknown channels yield an empty meta.
    """
    meta = await build_meta(ctx, meta_id)
    return {"meta": meta.model_dump(exclude_none=True) if meta else {}}


@router.get("/stream/{type}/{meta_id}.json")
async def get_streams(type: str, meta_id: str, ctx: AddonContext = Depends(get_context)):
    """
    Get the live stream for a channel.
    """
    streams = await build_streams(ctx, meta_id)
    return {"streams": [stream.model_dump() for stream in streams]}
