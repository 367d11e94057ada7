"""
FastAPI Dependencies
Shared dependencies giving handlers the loaded settings and template renderer.
"""
from typing import Annotated

from fastapi import Depends, Request

from greenfields.core.config import Settings
from greenfields.services.templates import TemplateRenderer


def get_app_settings(request: Request) -> Settings:
    """Settings the application was created with."""
    return request.app.state.settings


def get_renderer(request: Request) -> TemplateRenderer:
    """Template renderer shared by all requests."""
    return request.app.state.templates


SettingsDep = Annotated[Settings, Depends(get_app_settings)]
RendererDep = Annotated[TemplateRenderer, Depends(get_renderer)]
