"""App shell: web manifest, root document and the offline service worker"""

import json
from typing import Any, Dict, List

from fastapi import APIRouter
from fastapi.responses import HTMLResponse, JSONResponse, Response

from enriquecer.config import settings

router = APIRouter()

APP_NAME = "Enriquecer • Finanças Pessoais"

# Network first; on failure serve the cached copy, and for navigations the
# cached root document. Non-GET requests never touch the cache.
SERVICE_WORKER_TEMPLATE = """const CACHE_NAME = {cache_name}
const ASSETS = {assets}
self.addEventListener('install', e => {{ e.waitUntil((async () => {{ const c = await caches.open(CACHE_NAME); await c.addAll(ASSETS); self.skipWaiting() }})()) }})
self.addEventListener('activate', e => {{ e.waitUntil((async () => {{ const keys = await caches.keys(); await Promise.all(keys.filter(k => k !== CACHE_NAME).map(k => caches.delete(k))); self.clients.claim() }})()) }})
self.addEventListener('fetch', e => {{
  if (e.request.method !== 'GET') return
  e.respondWith((async () => {{
    try {{
      const net = await fetch(e.request)
      const c = await caches.open(CACHE_NAME)
      c.put(e.request, net.clone())
      return net
    }} catch (err) {{
      const cached = await caches.match(e.request)
      if (cached) return cached
      if (e.request.mode === 'navigate') return caches.match('/')
      throw err
    }}
  }})())
}})
"""

INDEX_TEMPLATE = """<!doctype html>
<html lang="pt-BR">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<meta name="theme-color" content="{theme_color}">
<link rel="manifest" href="/manifest.webmanifest">
<title>{title}</title>
</head>
<body>
<div id="root"></div>
<script>if ('serviceWorker' in navigator) navigator.serviceWorker.register('/sw.js')</script>
</body>
</html>
"""


def cache_name(version: str) -> str:
    return f"enriquecer-pwa-{version}"


def build_manifest(theme_color: str) -> Dict[str, Any]:
    return {
        "name": APP_NAME,
        "short_name": "Enriquecer",
        "start_url": "/",
        "display": "standalone",
        "background_color": "#ffffff",
        "theme_color": theme_color,
        "icons": [
            {"src": "/icons/icon-192.png", "sizes": "192x192", "type": "image/png"},
            {"src": "/icons/icon-512.png", "sizes": "512x512", "type": "image/png"},
        ],
    }


def render_service_worker(version: str, assets: List[str]) -> str:
    """Service worker source with the cache tag and pre-cached assets filled in"""
    return SERVICE_WORKER_TEMPLATE.format(
        cache_name=json.dumps(cache_name(version)),
        assets=json.dumps(assets),
    )


@router.get("/manifest.webmanifest")
def manifest():
    return JSONResponse(content=build_manifest(settings.theme_color), media_type="application/manifest+json")


@router.get("/sw.js")
def service_worker():
    return Response(
        content=render_service_worker(settings.cache_version, settings.shell_assets),
        media_type="application/javascript",
        headers={"Cache-Control": "no-cache", "Service-Worker-Allowed": "/"},
    )


@router.get("/", response_class=HTMLResponse)
@router.get("/index.html", response_class=HTMLResponse)
def index():
    return INDEX_TEMPLATE.format(theme_color=settings.theme_color, title=APP_NAME)
