"""
HTTP Transport - aiohttp REST API

Module: transport.http_transport
Date: 2026-10-12
Version: 0.1.0

CHANGELOG:
[2026-10-12 v0.1.0] Initial implementation
  - /api routes (chirps, users, login, refresh, revoke, health)
  - /admin routes (metrics, database reset)
  - /app static file server with hit counting
  - CORS middleware and JSON error mapping

ARCHITECTURE:
HTTPTransport turns HTTP requests into ChirpyService calls.
- Request bodies are JSON objects, missing fields default to ""
- Core calls are blocking (file I/O, bcrypt) and run in the default
  thread pool executor, so concurrent requests reach the core from
  several threads
- ChirpyError subclasses are mapped to {"error": message} responses
  using their http_status

SECURITY NOTES:
- Bearer tokens read from the Authorization header
- Password hashes never serialized (User.to_public_dict)
- Static files confined to the configured root directory
"""

import asyncio
import functools
import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from aiohttp import web

from ..core.chirpy_service import ChirpyService
from ..core.config import ServerConfig
from ..core.constants import (
    ADMIN_PREFIX,
    API_PREFIX,
    APP_PREFIX,
    BEARER_PREFIX,
    CORS_HEADERS,
)
from ..core.errors import ChirpyError, InvalidToken, ValidationError
from ..persistence.chirp_repository import clean_chirp_body


@web.middleware
async def cors_middleware(request: web.Request, handler) -> web.StreamResponse:
    """Add CORS headers to every response, answer pre-flight requests"""
    if request.method == "OPTIONS":
        return web.Response(status=200, headers=CORS_HEADERS)

    try:
        response = await handler(request)
    except web.HTTPException as e:
        e.headers.update(CORS_HEADERS)
        raise

    response.headers.update(CORS_HEADERS)
    return response


@web.middleware
async def error_middleware(request: web.Request, handler) -> web.StreamResponse:
    """Map core errors to JSON error responses"""
    logger = logging.getLogger("transport.http")
    try:
        return await handler(request)
    except ChirpyError as e:
        if e.http_status >= 500:
            logger.error(f"{request.method} {request.path} failed: {e}")
        else:
            logger.info(f"{request.method} {request.path} -> {e.http_status}: {e}")
        return json_error(e.http_status, str(e))


def json_error(status: int, message: str) -> web.Response:
    return web.json_response({"error": message}, status=status)


def bearer_token(request: web.Request) -> str:
    """Extract the token from 'Authorization: Bearer <token>' ("" if absent)"""
    header = request.headers.get("Authorization", "")
    if header.startswith(BEARER_PREFIX):
        return header[len(BEARER_PREFIX):].strip()
    return ""


async def read_params(request: web.Request) -> Dict[str, Any]:
    """
    Decode the JSON request body

    Raises:
        ValidationError: If the body is not a JSON object
    """
    try:
        params = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise ValidationError("Couldn't decode parameters")
    if not isinstance(params, dict):
        raise ValidationError("Couldn't decode parameters")
    return params


def str_param(params: Dict[str, Any], name: str) -> str:
    value = params.get(name, "")
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"'{name}' must be a string")
    return value


class HTTPTransport:
    """
    HTTP server for the Chirpy API

    Usage:
        transport = HTTPTransport(service, config)
        await transport.start()
    """

    def __init__(self, service: ChirpyService, config: Optional[ServerConfig] = None):
        """
        Initialize HTTP transport

        Args:
            service: Core service all routes call into
            config: Server configuration (defaults to the service's)
        """
        self.service = service
        self.config = config or service.config
        self.file_root = Path(self.config.file_root).resolve()
        self.app: Optional[web.Application] = None
        self.runner: Optional[web.AppRunner] = None
        self.logger = logging.getLogger("transport.http")
        self.is_running = False

    def create_app(self) -> web.Application:
        """Build the aiohttp application with every route registered"""
        app = web.Application(middlewares=[cors_middleware, error_middleware])

        app.router.add_get(f"{API_PREFIX}/healthz", self._handle_health)
        app.router.add_get(f"{API_PREFIX}/reset", self._handle_metrics_reset)
        app.router.add_get(f"{API_PREFIX}/chirps", self._handle_list_chirps)
        app.router.add_get(f"{API_PREFIX}/chirps/{{chirpID}}", self._handle_get_chirp)
        app.router.add_post(f"{API_PREFIX}/chirps", self._handle_create_chirp)
        app.router.add_post(f"{API_PREFIX}/validate_chirp", self._handle_validate_chirp)
        app.router.add_post(f"{API_PREFIX}/users", self._handle_create_user)
        app.router.add_put(f"{API_PREFIX}/users", self._handle_update_user)
        app.router.add_post(f"{API_PREFIX}/login", self._handle_login)
        app.router.add_post(f"{API_PREFIX}/refresh", self._handle_refresh)
        app.router.add_post(f"{API_PREFIX}/revoke", self._handle_revoke)

        app.router.add_get(f"{ADMIN_PREFIX}/metrics", self._handle_metrics)
        app.router.add_get(f"{ADMIN_PREFIX}/dbreset", self._handle_db_reset)

        app.router.add_get(APP_PREFIX, self._handle_app)
        app.router.add_get(f"{APP_PREFIX}/{{tail:.*}}", self._handle_app)

        return app

    async def start(self) -> None:
        """Start the HTTP server and serve until cancelled"""
        try:
            self.app = self.create_app()
            self.runner = web.AppRunner(self.app)
            await self.runner.setup()
            site = web.TCPSite(self.runner, self.config.host, self.config.port)
            await site.start()

            self.is_running = True
            self.logger.info(
                f"Serving on {self.config.host}:{self.config.port}"
            )

            await asyncio.Event().wait()

        except Exception as e:
            self.logger.error(f"Server startup failed: {e}")
            self.is_running = False
            raise

    async def stop(self) -> None:
        """Stop the HTTP server"""
        if self.runner:
            await self.runner.cleanup()
        self.is_running = False
        self.logger.info("HTTP transport stopped")

    async def _run(self, func: Callable, *args) -> Any:
        """Run a blocking core call in the default executor"""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, functools.partial(func, *args))

    # ------------------------------------------------------------------
    # /api
    # ------------------------------------------------------------------

    async def _handle_health(self, request: web.Request) -> web.Response:
        return web.Response(text="OK")

    async def _handle_metrics_reset(self, request: web.Request) -> web.Response:
        self.service.hits.reset()
        return web.Response(text="Hits have been reset")

    async def _handle_list_chirps(self, request: web.Request) -> web.Response:
        chirps = await self._run(self.service.list_chirps)
        return web.json_response([c.to_dict() for c in chirps])

    async def _handle_get_chirp(self, request: web.Request) -> web.Response:
        raw_id = request.match_info["chirpID"]
        if not (raw_id.isascii() and raw_id.isdigit()):
            raise ValidationError("Chirp ID must be an integer")
        chirp_id = int(raw_id)

        chirp = await self._run(self.service.get_chirp, chirp_id)
        return web.json_response(chirp.to_dict())

    async def _handle_create_chirp(self, request: web.Request) -> web.Response:
        params = await read_params(request)
        chirp = await self._run(self.service.create_chirp, str_param(params, "body"))
        return web.json_response(chirp.to_dict(), status=201)

    async def _handle_validate_chirp(self, request: web.Request) -> web.Response:
        params = await read_params(request)
        cleaned = clean_chirp_body(str_param(params, "body"))
        return web.json_response({"cleaned_body": cleaned})

    async def _handle_create_user(self, request: web.Request) -> web.Response:
        params = await read_params(request)
        user = await self._run(
            self.service.create_user,
            str_param(params, "email"),
            str_param(params, "password"),
        )
        return web.json_response(user.to_public_dict(), status=201)

    async def _handle_update_user(self, request: web.Request) -> web.Response:
        params = await read_params(request)
        token = bearer_token(request)
        if not token:
            raise InvalidToken("Missing bearer token")

        user_id = self.service.authenticate(token)
        user = await self._run(
            self.service.update_user,
            user_id,
            str_param(params, "email"),
            str_param(params, "password"),
        )
        return web.json_response(user.to_public_dict())

    async def _handle_login(self, request: web.Request) -> web.Response:
        params = await read_params(request)
        result = await self._run(
            self.service.login,
            str_param(params, "email"),
            str_param(params, "password"),
        )
        body = result.user.to_public_dict()
        body["token"] = result.access_token
        body["refresh_token"] = result.refresh_token
        return web.json_response(body)

    async def _handle_refresh(self, request: web.Request) -> web.Response:
        token = bearer_token(request)
        if not token:
            raise InvalidToken("Missing bearer token")

        access_token = self.service.refresh(token)
        return web.json_response({"token": access_token})

    async def _handle_revoke(self, request: web.Request) -> web.Response:
        self.service.revoke(bearer_token(request))
        return web.Response(status=200)

    # ------------------------------------------------------------------
    # /admin
    # ------------------------------------------------------------------

    async def _handle_metrics(self, request: web.Request) -> web.Response:
        return web.Response(text=f"Hits: {self.service.hits.value}")

    async def _handle_db_reset(self, request: web.Request) -> web.Response:
        await self._run(self.service.reset)
        return web.Response(text="Database has been reset")

    # ------------------------------------------------------------------
    # /app
    # ------------------------------------------------------------------

    async def _handle_app(self, request: web.Request) -> web.StreamResponse:
        """Serve a file below file_root; every request counts as a hit"""
        self.service.hits.increment()

        tail = request.match_info.get("tail", "")
        path = (self.file_root / tail).resolve()
        if path != self.file_root and self.file_root not in path.parents:
            raise web.HTTPNotFound()

        if path.is_dir():
            path = path / "index.html"
        if not path.is_file():
            raise web.HTTPNotFound()

        return web.FileResponse(path)
