"""
OAuth Callback Server for Sheets Synapsis.

Starts a short-lived HTTP listener on the loopback interface that receives
exactly one OAuth redirect, validates it, and hands the authorization code
back to the waiting flow. The server runs inside the caller's event loop and
shuts itself down as soon as the flow is settled.
"""

import asyncio
import html
import logging
import secrets
import socket
from typing import Mapping, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..utils.constants import DEFAULT_CALLBACK_HOST, DEFAULT_CALLBACK_PATH
from ..utils.errors import (
    AuthorizationDeniedError,
    CallbackServerError,
    CallbackTimeoutError,
    CallbackValidationError,
)

logger = logging.getLogger(__name__)


def _create_success_html() -> str:
    """Create a success HTML page after OAuth completion."""
    return """
    <!DOCTYPE html>
    <html>
    <head>
        <title>Authorization Successful</title>
        <style>
            body {
                font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
                display: flex;
                justify-content: center;
                align-items: center;
                min-height: 100vh;
                margin: 0;
                background: linear-gradient(135deg, #34a853 0%, #188038 100%);
            }
            .container {
                background: white;
                padding: 40px;
                border-radius: 12px;
                box-shadow: 0 10px 40px rgba(0,0,0,0.2);
                text-align: center;
                max-width: 400px;
            }
            .success-icon {
                font-size: 64px;
                margin-bottom: 20px;
            }
            h1 {
                color: #333;
                margin-bottom: 10px;
            }
            p {
                color: #666;
                line-height: 1.6;
            }
        </style>
    </head>
    <body>
        <div class="container">
            <div class="success-icon">&#10004;</div>
            <h1>Authorization Successful!</h1>
            <p>Sheets Synapsis can now access your spreadsheets.</p>
            <p>You can close this window and return to your application.</p>
        </div>
        <script>window.close();</script>
    </body>
    </html>
    """


def _create_error_html(title: str, error_message: str) -> str:
    """Create an error HTML page."""
    return f"""
    <!DOCTYPE html>
    <html>
    <head>
        <title>{html.escape(title)}</title>
        <style>
            body {{
                font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
                display: flex;
                justify-content: center;
                align-items: center;
                min-height: 100vh;
                margin: 0;
                background: linear-gradient(135deg, #ff6b6b 0%, #ee5a5a 100%);
            }}
            .container {{
                background: white;
                padding: 40px;
                border-radius: 12px;
                box-shadow: 0 10px 40px rgba(0,0,0,0.2);
                text-align: center;
                max-width: 400px;
            }}
            h1 {{
                color: #333;
                margin-bottom: 10px;
            }}
            .error-message {{
                color: #ee5a5a;
                background: #fff5f5;
                padding: 15px;
                border-radius: 8px;
                margin: 20px 0;
            }}
        </style>
    </head>
    <body>
        <div class="container">
            <h1>{html.escape(title)}</h1>
            <div class="error-message">{html.escape(error_message)}</div>
            <p>Return to your application and try again.</p>
        </div>
    </body>
    </html>
    """


class OAuthCallbackServer:
    """
    One-shot loopback listener for the OAuth redirect.

    Lifecycle: ``start()`` binds the port and begins serving, ``wait_for_code()``
    suspends until the first valid or invalid callback, then the port is
    released. The same instance may be started again afterwards.
    """

    def __init__(
        self,
        port: int,
        host: str = DEFAULT_CALLBACK_HOST,
        callback_path: str = DEFAULT_CALLBACK_PATH,
    ) -> None:
        self.port = port
        self.host = host
        self.callback_path = callback_path
        self.app = FastAPI(docs_url=None, redoc_url=None, openapi_url=None)

        self._server: Optional[uvicorn.Server] = None
        self._serve_task: Optional[asyncio.Task] = None
        self._socket: Optional[socket.socket] = None
        self._result: Optional[asyncio.Future] = None
        self._expected_state: Optional[str] = None

        self._setup_callback_route()

    @property
    def is_running(self) -> bool:
        return self._serve_task is not None and not self._serve_task.done()

    def _setup_callback_route(self) -> None:
        """Setup the OAuth callback route and the HTML 404 page."""

        @self.app.get(self.callback_path)
        async def oauth_callback(request: Request) -> HTMLResponse:
            """Handle the OAuth redirect from Google."""
            return self._handle_callback(request.query_params)

        @self.app.exception_handler(StarletteHTTPException)
        async def http_exception_handler(
            request: Request, exc: StarletteHTTPException
        ) -> HTMLResponse:
            logger.debug(f"OAuth callback server: {exc.status_code} for {request.url.path}")
            title = "Not Found" if exc.status_code == 404 else "Request Error"
            return HTMLResponse(
                content=_create_error_html(title, str(exc.detail)),
                status_code=exc.status_code,
            )

    def _handle_callback(self, params: Mapping[str, str]) -> HTMLResponse:
        result = self._result
        if result is None or result.done():
            logger.warning("OAuth callback received with no pending flow")
            return HTMLResponse(
                content=_create_error_html(
                    "Authorization Failed", "No authorization request is pending."
                ),
                status_code=400,
            )

        error = params.get("error")
        code = params.get("code")
        state = params.get("state")

        if error:
            logger.error(f"OAuth callback: authorization denied ({error})")
            self._settle(error=AuthorizationDeniedError(error))
            return HTMLResponse(
                content=_create_error_html(
                    "Authorization Denied", f"Google returned an error: {error}"
                ),
                status_code=400,
            )

        if not code:
            logger.error("OAuth callback: authorization code not received")
            self._settle(error=CallbackValidationError("code not received", field="code"))
            return HTMLResponse(
                content=_create_error_html(
                    "Authorization Failed", "Authorization code not received"
                ),
                status_code=400,
            )

        # The state check gates every use of the code
        if not state or not secrets.compare_digest(state, self._expected_state or ""):
            logger.error("OAuth callback: state mismatch, rejecting callback")
            self._settle(
                error=CallbackValidationError(
                    "CSRF validation failed: state mismatch", field="state"
                )
            )
            return HTMLResponse(
                content=_create_error_html(
                    "Authorization Failed", "Invalid state parameter"
                ),
                status_code=400,
            )

        logger.info(f"OAuth callback: received code (state: {state[:8]}...)")
        self._settle(code=code)
        return HTMLResponse(content=_create_success_html())

    def _settle(
        self, code: Optional[str] = None, error: Optional[Exception] = None
    ) -> None:
        """Resolve or reject the pending flow once and begin shutdown."""
        if self._result is not None and not self._result.done():
            if error is not None:
                self._result.set_exception(error)
            else:
                self._result.set_result(code)
        if self._server is not None:
            self._server.should_exit = True

    def _bind(self) -> socket.socket:
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind((self.host, self.port))
            sock.listen(16)
            sock.setblocking(False)
        except OSError as e:
            sock.close()
            logger.error(f"Could not bind OAuth callback server to {self.host}:{self.port}: {e}")
            raise CallbackServerError(
                f"Port {self.port} is unavailable for the OAuth callback server"
            ) from e
        return sock

    async def start(self, expected_state: str) -> None:
        """
        Bind the callback port and begin serving.

        When this returns the port is accepting connections, so the
        authorization URL can be opened safely.

        Raises:
            CallbackServerError: If already running or the port can't be bound.
        """
        if self.is_running:
            raise CallbackServerError("OAuth callback server is already running")

        self._socket = self._bind()
        self._expected_state = expected_state
        self._result = asyncio.get_running_loop().create_future()

        config = uvicorn.Config(
            self.app,
            host=self.host,
            port=self.port,
            log_level="warning",
            access_log=False,
            lifespan="off",
        )
        self._server = uvicorn.Server(config)
        self._serve_task = asyncio.create_task(self._server.serve(sockets=[self._socket]))
        logger.info(
            f"OAuth callback server started on http://{self.host}:{self.port}{self.callback_path}"
        )

    async def wait_for_code(self, timeout: Optional[float] = None) -> str:
        """
        Suspend until the callback settles the flow.

        The server is always stopped and the port released before this
        returns or raises.

        Args:
            timeout: Seconds to wait, or None to wait indefinitely.

        Returns:
            The authorization code.

        Raises:
            AuthorizationDeniedError: The redirect carried an ``error``.
            CallbackValidationError: Code missing or state mismatch.
            CallbackTimeoutError: No callback within ``timeout``.
            CallbackServerError: The server stopped before any callback.
        """
        if self._result is None or self._serve_task is None:
            raise CallbackServerError("OAuth callback server is not started")

        result = self._result
        try:
            done, _ = await asyncio.wait(
                {result, self._serve_task},
                timeout=timeout,
                return_when=asyncio.FIRST_COMPLETED,
            )
            if result.done():
                if result.cancelled():
                    raise CallbackServerError(
                        "OAuth callback server closed before a callback was received"
                    )
                return result.result()
            if not done:
                logger.error(f"No OAuth callback received within {timeout} seconds")
                raise CallbackTimeoutError(
                    f"No OAuth callback received within {timeout} seconds"
                )
            raise CallbackServerError(
                "OAuth callback server stopped before a callback was received"
            )
        finally:
            await self.stop()

    async def stop(self) -> None:
        """Close all connections and release the port. Safe to call repeatedly."""
        server, task, sock = self._server, self._serve_task, self._socket
        self._server = self._serve_task = self._socket = None

        if self._result is not None and not self._result.done():
            self._result.cancel()

        if server is not None:
            server.should_exit = True
        if task is not None:
            try:
                await task
            except Exception as e:
                logger.error(f"OAuth callback server error: {e}", exc_info=True)
        if sock is not None:
            sock.close()

        if task is not None:
            logger.info("OAuth callback server stopped")
