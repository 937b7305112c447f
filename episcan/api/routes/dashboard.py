"""경쟁사 목록 HTML 라우트"""

import logging
from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from episcan.api.deps import get_competitor_client
from episcan.presentation.api_client import CompetitorAPIClient, load_competitor_view
from episcan.presentation.competitor_list import (
    SORT_OPTIONS,
    TREATMENT_OPTIONS,
    TYPE_OPTIONS,
    CompetitorFilters,
    growth_status,
    market_share_display,
    threat_level,
    type_label,
)

logger = logging.getLogger(__name__)

router = APIRouter()

_templates_dir = Path(__file__).parent.parent / "templates"
templates = Jinja2Templates(directory=str(_templates_dir))


@router.get("/competitors", response_class=HTMLResponse)
async def competitor_list_page(
    request: Request,
    search: str = "",
    type: str = "all",
    treatment: str = "all",
    sort: str = "name",
    client: CompetitorAPIClient = Depends(get_competitor_client),
):
    """경쟁사 목록 + 점유율/성장률 차트"""
    filters = CompetitorFilters(search=search, type=type, treatment=treatment, sort=sort)
    view = await load_competitor_view(client, filters)

    return templates.TemplateResponse(
        request,
        "competitor_list.html",
        {
            "view": view,
            "type_options": TYPE_OPTIONS,
            "treatment_options": TREATMENT_OPTIONS,
            "sort_options": SORT_OPTIONS,
            "market_share_display": market_share_display,
            "type_label": type_label,
            "growth_status": growth_status,
            "threat_level": threat_level,
            "last_updated": (
                view.last_updated.strftime("%b %d, %Y %H:%M")
                if view.last_updated
                else None
            ),
        },
    )
