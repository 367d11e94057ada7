"""
Browser fixtures for end-to-end tests.

These tests drive a running server (see `make test-e2e`) and are skipped
unless E2E_BASE_URL points at it.
"""
import os
from typing import AsyncGenerator

import pytest_asyncio
from playwright.async_api import Page, async_playwright

BASE_URL = os.getenv("E2E_BASE_URL")


@pytest_asyncio.fixture
async def page() -> AsyncGenerator[Page, None]:
    """A fresh Chromium page whose relative URLs resolve against the server."""
    async with async_playwright() as p:
        browser = await p.chromium.launch(headless=True)
        context = await browser.new_context(base_url=BASE_URL)
        page = await context.new_page()
        yield page
        await context.close()
        await browser.close()
