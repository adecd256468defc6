# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Neovim bridge: a Lua shim forwarding host callbacks to the engine over msgpack-RPC."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any, Final

import pynvim

from ..engine import DiagnosticEngine
from ..errors import HostError
from ..hooks import wrap_set_diagnostics
from ..rendering.statusline import display_path

LOGGER = logging.getLogger(__name__)

BUFFER_CLOSE_EVENTS: Final[tuple[str, ...]] = ("BufDelete", "BufWipeout")

LUA_SHIM: Final[str] = """
local chan, triggers, close_events, display = ...

if _G.diagline_host_set == nil then
  _G.diagline_host_set = vim.diagnostic.set
  _G.diagline_host_reset = vim.diagnostic.reset
  vim.diagnostic.set = function(namespace, bufnr, diagnostics, opts)
    if bufnr == 0 then
      bufnr = vim.api.nvim_get_current_buf()
    end
    local kept = vim.rpcrequest(chan, "filter", namespace, bufnr, vim.api.nvim_buf_get_name(bufnr), diagnostics)
    return _G.diagline_host_set(namespace, bufnr, kept, opts)
  end
  vim.diagnostic.reset = function(namespace, bufnr)
    if bufnr == 0 then
      bufnr = vim.api.nvim_get_current_buf()
    end
    vim.rpcrequest(chan, "reset", namespace == nil and vim.NIL or namespace, bufnr == nil and vim.NIL or bufnr)
    return _G.diagline_host_reset(namespace, bufnr)
  end
end

display.float.format = function(diagnostic)
  return vim.rpcrequest(chan, "format", diagnostic)
end
vim.diagnostic.config(display)

_G.diagline_statuscolumn = function()
  local bufnr = vim.api.nvim_get_current_buf()
  local lnum = vim.v.lnum
  local first, last = { lnum - 1, 0 }, { lnum - 1, -1 }
  local marks = vim.api.nvim_buf_get_extmarks(bufnr, -1, first, last, { type = "sign", details = true })
  return vim.rpcrequest(chan, "statuscolumn", bufnr, lnum, vim.bo[bufnr].buftype, marks)
end

_G.diagline_statusline = function()
  local bufnr = vim.api.nvim_get_current_buf()
  local cursor = vim.api.nvim_win_get_cursor(0)
  return vim.rpcrequest(chan, "statusline", bufnr, vim.api.nvim_buf_get_name(bufnr), vim.fn.getcwd(), cursor)
end

vim.o.statuscolumn = "%{%v:lua.diagline_statuscolumn()%}"
vim.o.statusline = "%{%v:lua.diagline_statusline()%}"

local group = vim.api.nvim_create_augroup("diagline", { clear = true })
vim.api.nvim_create_autocmd(triggers, {
  group = group,
  callback = function()
    vim.cmd.redrawstatus()
  end,
})
vim.api.nvim_create_autocmd(close_events, {
  group = group,
  callback = function(args)
    vim.rpcnotify(chan, "buffer_closed", args.buf)
  end,
})
"""

HOST_SET_CALL: Final[str] = "return _G.diagline_host_set(...)"


def _decode(name: str | bytes) -> str:
    return name.decode("utf-8") if isinstance(name, bytes) else name


class NvimBridge:
    """Serve engine operations to a Neovim instance attached through pynvim.

    Requests handled: ``filter``, ``format``, ``statuscolumn``, ``statusline``
    and ``reset``, the last one mirroring ``vim.diagnostic.reset``. The
    ``buffer_closed`` notification drops the snapshots of a closed buffer.
    """

    def __init__(self, nvim: pynvim.Nvim, engine: DiagnosticEngine) -> None:
        self._nvim = nvim
        self._engine = engine
        self._handlers: dict[str, Callable[..., Any]] = {
            "filter": self._filter,
            "format": self._format,
            "statuscolumn": self._statuscolumn,
            "statusline": self._statusline,
            "reset": self._reset,
            "buffer_closed": self._buffer_closed,
        }
        self.set_diagnostics = wrap_set_diagnostics(self._host_set, engine, self._buffer_name)

    @property
    def engine(self) -> DiagnosticEngine:
        return self._engine

    def install(self) -> None:
        """Install the Lua shim, replacing the diagnostic entry points and the status options."""

        config = self._engine.config
        triggers = list(config.statusline.draw_triggers)
        display = config.display.to_host(config.statuscolumn.glyphs)
        LOGGER.debug("installing Lua shim on channel %s", self._nvim.channel_id)
        self._nvim.exec_lua(LUA_SHIM, self._nvim.channel_id, triggers, list(BUFFER_CLOSE_EVENTS), display)

    def handle_request(self, name: str | bytes, args: Sequence[Any]) -> Any:
        """Dispatch an RPC request to the engine.

        Args:
            name: RPC method name.
            args: Positional RPC arguments.

        Returns:
            Any: msgpack-serialisable result.

        Raises:
            HostError: When the method is unknown or its arguments do not fit.
        """

        method = _decode(name)
        handler = self._handlers.get(method)
        if handler is None:
            raise HostError(f"unknown diagline request: {method}")
        try:
            return handler(*args)
        except TypeError as exc:
            raise HostError(f"invalid arguments for {method}: {exc}") from exc

    def handle_notification(self, name: str | bytes, args: Sequence[Any]) -> None:
        """Dispatch an RPC notification; failures are logged because nobody awaits them."""

        try:
            self.handle_request(name, args)
        except HostError as exc:
            LOGGER.warning("%s", exc)

    def run(self) -> None:
        """Install the shim and block in the pynvim event loop until Neovim disconnects."""

        self._nvim.run_loop(self.handle_request, self.handle_notification, setup_cb=self.install)

    def _filter(self, namespace_id: int, buffer_id: int, path: str, diagnostics: object) -> list[dict[str, Any]]:
        kept = self._engine.ingest(buffer_id, namespace_id, path, diagnostics)
        return [diagnostic.to_host() for diagnostic in kept]

    def _format(self, diagnostic: object) -> str:
        return self._engine.format(diagnostic)

    def _statuscolumn(self, buffer_id: int, line_number: int, buffer_type: str, marks: object) -> str:
        signs = marks if isinstance(marks, Sequence) and not isinstance(marks, str) else ()
        return self._engine.draw_statuscolumn(
            signs,
            buffer_id=buffer_id,
            line_number=line_number,
            buffer_type=buffer_type,
        )

    def _statusline(
        self,
        buffer_id: int,
        path: str,
        cwd: str | None = None,
        cursor: Sequence[int] | None = None,
    ) -> str:
        position = (cursor[0], cursor[1]) if cursor is not None and len(cursor) == 2 else None
        return self._engine.draw_statusline(buffer_id, display_path(path, cwd), cursor=position)

    def _reset(self, namespace_id: int | None = None, buffer_id: int | None = None) -> None:
        self._engine.on_diagnostics_reset(namespace_id, buffer_id)

    def _buffer_closed(self, buffer_id: int) -> None:
        self._engine.on_buffer_closed(buffer_id)

    def _buffer_name(self, buffer_id: int) -> str:
        return self._nvim.call("bufname", buffer_id)

    def _host_set(
        self,
        namespace_id: int,
        buffer_id: int,
        diagnostics: Sequence[Mapping[str, Any]],
        display_opts: Mapping[str, Any] | None = None,
        /,
    ) -> object:
        return self._nvim.exec_lua(HOST_SET_CALL, namespace_id, buffer_id, list(diagnostics), display_opts)


def serve(socket_path: str, engine: DiagnosticEngine) -> None:
    """Attach to the Neovim listening on ``socket_path`` and serve until it exits.

    Args:
        socket_path: Path of the Neovim RPC socket (``$NVIM`` or ``--listen``).
        engine: Engine answering the requests.

    Raises:
        HostError: When the socket cannot be attached.
    """

    try:
        nvim = pynvim.attach("socket", path=socket_path)
    except OSError as exc:
        raise HostError(f"cannot attach to Neovim at {socket_path}: {exc}") from exc
    bridge = NvimBridge(nvim, engine)
    try:
        bridge.run()
    finally:
        engine.shutdown()
        nvim.close()


__all__ = ["BUFFER_CLOSE_EVENTS", "LUA_SHIM", "NvimBridge", "serve"]
